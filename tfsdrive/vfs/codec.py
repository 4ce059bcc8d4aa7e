"""Percent-encoding of connection URIs into a single path segment."""

import logging
import re
from urllib.parse import quote, unquote

from tfsdrive.errors import MalformedTokenError

logger = logging.getLogger(__name__)

# A '%' that does not start a two-digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode(raw: str) -> str:
    """Encode a string so it can live inside one path segment.

    Everything outside the RFC 3986 unreserved set is escaped, so path
    separators, brackets and '%' never appear raw in the result.

    Args:
        raw: Arbitrary string, usually a service URI

    Returns:
        Percent-encoded token
    """
    return quote(raw, safe="")


def decode(token: str) -> str:
    """Decode a token produced by encode().

    Args:
        token: Percent-encoded token

    Returns:
        The original string

    Raises:
        MalformedTokenError: If the token has a broken escape sequence
            or the escapes do not form valid UTF-8
    """
    bad = _BAD_ESCAPE.search(token)
    if bad:
        raise MalformedTokenError(token, f"invalid escape at offset {bad.start()}")

    try:
        raw = unquote(token, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedTokenError(token, f"escapes are not valid UTF-8 ({e.reason})") from e

    logger.debug(f"Decoded connection token ({len(token)} chars)")
    return raw
