"""One path resolution, end to end.

A ResolutionSession is created for every command: it locates the
server from the path root, builds a root node around it and walks the
rest of the path. The connection made along the way lives exactly as
long as the session.
"""

import logging
from typing import List, Optional

from tfsdrive import client
from tfsdrive.config import ConnectionConfig, ResolverConfig
from tfsdrive.models import Credential
from tfsdrive.vfs import locator
from tfsdrive.vfs.base import DirectoryNode, Node
from tfsdrive.vfs.nodes.server import ConfigurationServerNode, Connector
from tfsdrive.vfs.resolver import PathResolver

logger = logging.getLogger(__name__)


def make_connector(connection: ConnectionConfig) -> Connector:
    """Bind connection settings to client.connect."""
    def connector(uri: str, credential: Optional[Credential]) -> client.ConnectionHandle:
        return client.connect(
            uri,
            credential,
            timeout=connection.timeout,
            verify=connection.verify_ssl,
        )
    return connector


class ResolutionSession:
    """Resolve one drive path against its configuration server.

    Usage:
        >>> with ResolutionSession(r"work:[http%3A%2F%2Ftfs%3A8080]\\Configuration") as s:
        ...     for node in s.list():
        ...         print(node.name)
    """

    def __init__(
        self,
        path: str,
        session_credential: Optional[Credential] = None,
        drive_credential: Optional[Credential] = None,
        connection: Optional[ConnectionConfig] = None,
        resolver: Optional[ResolverConfig] = None,
        connector: Optional[Connector] = None,
    ):
        """Locate the server for a path. Does not connect.

        Args:
            path: Full drive path, rooted in a bracketed token
            session_credential: Credential given with this command
            drive_credential: Credential the drive was mounted with
            connection: Connection settings (defaults if None)
            resolver: Resolution settings (defaults if None)
            connector: Override for client.connect, mainly for tests

        Raises:
            InvalidPathRootError, MalformedTokenError,
            InvalidConnectionIdentityError: From the locator
        """
        connection = connection or ConnectionConfig()
        resolver = resolver or ResolverConfig()

        self.path = path
        self.identity, self.remainder = locator.resolve(
            path, session_credential, drive_credential
        )
        self.root = ConfigurationServerNode(
            self.identity,
            connector or make_connector(connection),
            entry_query=connection.entry_query,
            show_collections=resolver.show_collections,
        )
        self.resolver = PathResolver(self.root, case_sensitive=resolver.case_sensitive)

    def resolve(self) -> Node:
        """Resolve the session's path to a single node."""
        logger.debug(f"Resolving '{self.remainder}' on {client.redact(self.identity.uri)}")
        return self.resolver.resolve(self.remainder)

    def list(self) -> List[Node]:
        """List the children of the path's node.

        A leaf lists as itself.
        """
        node = self.resolve()
        if isinstance(node, DirectoryNode):
            return node.list_children()
        return [node]

    def close(self) -> None:
        self.root.close()

    def __enter__(self) -> 'ResolutionSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

