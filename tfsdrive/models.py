"""Plain data types shared by the client and the VFS."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Credential:
    """Username/password pair for the catalog service."""
    username: str = ""
    password: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.username

    def __repr__(self) -> str:
        # Never echo the password
        return f"Credential(username='{self.username}')"


@dataclass(frozen=True)
class ConnectionIdentity:
    """Where to connect and as whom."""
    uri: str
    credential: Optional[Credential] = None


@dataclass(frozen=True)
class FlatEntry:
    """A single (path, value) record from the registry listing."""
    path: str
    value: Any = None


@dataclass(frozen=True)
class ProjectCollection:
    """A project collection hosted by the configuration server."""
    id: str
    name: str
    url: Optional[str] = None
    state: Optional[str] = None


def resolve_credential(
    session_credential: Optional[Credential],
    drive_credential: Optional[Credential],
) -> Optional[Credential]:
    """Pick the credential for one resolution call.

    A per-operation credential wins when it names a user; otherwise the
    drive's credential is used; otherwise the call is anonymous.
    """
    if session_credential is not None and not session_credential.is_empty:
        return session_credential
    if drive_credential is not None and not drive_credential.is_empty:
        return drive_credential
    return None
