"""Mounted drives - entry point for path resolution."""

import logging
import os
import re
from typing import Optional

from tfsdrive.config import (
    PASSWORD_ENV,
    ConnectionConfig,
    DriveConfig,
    ResolverConfig,
    TFSDriveConfig,
)
from tfsdrive.models import Credential
from tfsdrive.vfs import codec
from tfsdrive.vfs.base import SEPARATOR
from tfsdrive.vfs.nodes.server import Connector
from tfsdrive.vfs.session import ResolutionSession

logger = logging.getLogger(__name__)

DRIVE_PATH = re.compile(r"^(?P<drive>[A-Za-z0-9_\-]+):(?P<rest>.*)$", re.DOTALL)


def drive_root(uri: str) -> str:
    """Root path of a drive mounted on uri: the encoded URI in brackets."""
    return "[" + codec.encode(uri) + "]"


class Drive:
    """A configuration server mounted under a name.

    Every path below the drive starts with the drive's root, so it
    always carries a valid connection token. Every command opens its
    own ResolutionSession through session().

    Usage:
        >>> drive = Drive("work", "http://tfs:8080/tfs")
        >>> drive.root
        '[http%3A%2F%2Ftfs%3A8080%2Ftfs]'
        >>> with drive.session(r"Configuration\\Settings") as session:
        ...     names = [node.name for node in session.list()]
    """

    def __init__(
        self,
        name: str,
        uri: str,
        credential: Optional[Credential] = None,
        description: str = "",
        connection: Optional[ConnectionConfig] = None,
        resolver: Optional[ResolverConfig] = None,
        connector: Optional[Connector] = None,
    ):
        """Mount a drive.

        Args:
            name: Drive name (used as NAME:\\path)
            uri: Configuration server URI
            credential: Credential to fall back on
            description: Free text
            connection: Connection settings
            resolver: Resolution settings
            connector: Override for client.connect, mainly for tests
        """
        self.name = name
        self.uri = uri
        self.credential = credential
        self.description = description
        self.connection = connection or ConnectionConfig()
        self.resolver = resolver or ResolverConfig()
        self.connector = connector
        self.root = drive_root(uri)

    @classmethod
    def from_config(
        cls,
        drive: DriveConfig,
        config: Optional[TFSDriveConfig] = None,
        connector: Optional[Connector] = None,
    ) -> 'Drive':
        """Mount a drive from its saved configuration."""
        config = config or TFSDriveConfig()
        credential = None
        if drive.username:
            credential = Credential(drive.username, os.environ.get(PASSWORD_ENV, ""))
        return cls(
            drive.name,
            drive.uri,
            credential=credential,
            description=drive.description,
            connection=config.connection,
            resolver=config.resolver,
            connector=connector,
        )

    def full_path(self, relative: str = "") -> str:
        """Turn a path relative to the drive into a full drive path."""
        return self.root + SEPARATOR + relative.lstrip(SEPARATOR)

    def session(
        self, relative: str = "", credential: Optional[Credential] = None
    ) -> ResolutionSession:
        """Open a resolution session for a path below this drive."""
        logger.debug(f"Opening session on drive '{self.name}' for '{relative}'")
        return ResolutionSession(
            self.full_path(relative),
            session_credential=credential,
            drive_credential=self.credential,
            connection=self.connection,
            resolver=self.resolver,
            connector=self.connector,
        )

    def __repr__(self) -> str:
        return f"Drive(name='{self.name}', uri='{self.uri}')"


def expand_path(path: str, config: TFSDriveConfig) -> str:
    """Rewrite NAME:\\rest into the named drive's full path.

    Paths that do not name a configured drive are returned unchanged,
    so raw [token]\\rest paths pass straight through.
    """
    drive = drive_for_path(path, config)
    if drive is None:
        return path

    rest = path.split(":", 1)[1]
    return drive_root(drive.uri) + SEPARATOR + rest.lstrip(SEPARATOR)


def drive_for_path(path: str, config: TFSDriveConfig) -> Optional[DriveConfig]:
    """The configured drive a NAME:\\rest path refers to, if any."""
    match = DRIVE_PATH.match(path)
    if match is None:
        return None
    return config.drives.get(match.group("drive"))
