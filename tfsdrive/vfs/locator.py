"""Extract the connection identity embedded in a drive path.

Paths handled by tfsdrive look like::

    <prefix>[<percent-encoded-uri>]\\<further>\\<segments>

The prefix (a drive name, a provider qualifier, ...) is ignored. The
bracketed token must be followed immediately by one path separator.
"""

import logging
import re
from typing import Optional, Tuple
from urllib.parse import urlparse

from tfsdrive import client
from tfsdrive.errors import InvalidConnectionIdentityError, InvalidPathRootError
from tfsdrive.models import ConnectionIdentity, Credential, resolve_credential
from tfsdrive.vfs import codec
from tfsdrive.vfs.base import SEPARATOR

logger = logging.getLogger(__name__)

ROOT_PATTERN = re.compile(r"^[^\[\]]*\[([^\[\]]+)\]" + re.escape(SEPARATOR))

VALID_SCHEMES = ("http", "https")


def split_root(path: str) -> Tuple[str, str]:
    """Split a path into its raw connection token and the remainder.

    Raises:
        InvalidPathRootError: If the path lacks the bracketed root
    """
    match = ROOT_PATTERN.match(path)
    if match is None:
        raise InvalidPathRootError(path)
    return match.group(1), path[match.end():]


def validate_uri(uri: str) -> str:
    """Check that a decoded token is a usable service URI."""
    try:
        parsed = urlparse(uri)
    except ValueError as e:
        raise InvalidConnectionIdentityError(uri, str(e)) from e

    if parsed.scheme not in VALID_SCHEMES:
        raise InvalidConnectionIdentityError(
            uri, f"scheme must be one of {', '.join(VALID_SCHEMES)}"
        )
    if not parsed.netloc:
        raise InvalidConnectionIdentityError(uri, "missing host")
    return uri


def resolve(
    path: str,
    session_credential: Optional[Credential] = None,
    drive_credential: Optional[Credential] = None,
) -> Tuple[ConnectionIdentity, str]:
    """Work out which service a path points at.

    No connection is made here.

    Args:
        path: Full drive path
        session_credential: Credential supplied with this operation
        drive_credential: Credential the drive was mounted with

    Returns:
        (identity, remainder) where remainder is the rest of the path
        after the root separator, possibly empty

    Raises:
        InvalidPathRootError: Path is not rooted in a bracketed token
        MalformedTokenError: Token cannot be decoded
        InvalidConnectionIdentityError: Decoded token is not a URI
    """
    token, remainder = split_root(path)
    uri = validate_uri(codec.decode(token))
    credential = resolve_credential(session_credential, drive_credential)

    logger.debug(
        f"Path root resolves to {client.redact(uri)} "
        f"as {credential.username if credential else 'anonymous'}"
    )
    return ConnectionIdentity(uri=uri, credential=credential), remainder
