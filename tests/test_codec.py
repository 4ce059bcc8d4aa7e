"""Tests for connection token encoding."""

import pytest

from tfsdrive.errors import MalformedTokenError
from tfsdrive.vfs.codec import decode, encode


@pytest.mark.parametrize("raw", [
    "",
    "http://tfs:8080/tfs",
    "http://tfs/[weird]/path\\with\\backslashes",
    "already%41encoded%2F",
    "ünïcödé/名前",
    "spaces and ? query=1&x=2#frag",
])
def test_round_trip(raw):
    """decode(encode(x)) == x, including tricky characters."""
    assert decode(encode(raw)) == raw


@pytest.mark.parametrize("raw", [
    "http://tfs:8080/tfs",
    "a/b\\c[d]e%f",
    "ünïcödé",
])
def test_encoded_token_is_segment_safe(raw):
    """Encoded tokens never contain separators or brackets."""
    token = encode(raw)

    for forbidden in ("/", "\\", "[", "]", ":"):
        assert forbidden not in token


def test_encode_known_value():
    assert encode("http://tfs:8080/tfs") == "http%3A%2F%2Ftfs%3A8080%2Ftfs"


def test_percent_sequences_are_not_double_decoded():
    """
    Given: A raw string that already looks percent-encoded
    When: Encoding then decoding it
    Then: The escapes in the original survive as literal text
    """
    token = encode("%41")

    assert token == "%2541"
    assert decode(token) == "%41"


@pytest.mark.parametrize("token", [
    "%",
    "abc%",
    "abc%4",
    "abc%zz",
    "%G0tail",
])
def test_invalid_escape_raises(token):
    with pytest.raises(MalformedTokenError) as exc_info:
        decode(token)

    assert exc_info.value.token == token


def test_invalid_utf8_raises():
    """A lone continuation byte is not valid UTF-8."""
    with pytest.raises(MalformedTokenError):
        decode("%80")


def test_decode_empty_string():
    assert decode("") == ""
