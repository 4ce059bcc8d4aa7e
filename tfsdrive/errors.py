"""Exceptions raised while resolving drive paths.

Every error here is terminal for the resolution call that raised it.
The CLI and shell catch them at the top level and report one line.
"""

from typing import Optional


class DriveError(Exception):
    """Base class for all tfsdrive errors."""
    pass


class MalformedTokenError(DriveError):
    """A connection token contains an invalid escape sequence."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed connection token '{token}': {reason}")


class InvalidPathRootError(DriveError):
    """Path does not start with a bracketed connection token."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"path root value is not valid: '{path}'")


class InvalidConnectionIdentityError(DriveError):
    """Decoded token is not a usable service URI."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Invalid connection URI '{uri}': {reason}")


class RemoteError(DriveError):
    """Failure reported by (or while talking to) the remote catalog."""

    def __init__(
        self,
        message: str,
        uri: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.uri = uri
        self.detail = detail
        self.status_code = status_code
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConnectionError(RemoteError):
    """Could not connect or authenticate to the catalog service."""
    pass


class RemoteQueryError(RemoteError):
    """A listing or catalog query failed on an established connection."""
    pass


class PathNotFoundError(DriveError):
    """A path segment has no matching child."""

    def __init__(self, segment: str, resolved: str):
        self.segment = segment
        self.resolved = resolved
        super().__init__(f"Cannot find '{segment}' under '{resolved}'")
