"""Root node of a drive: the configuration server itself."""

import logging
from typing import Any, Callable, Dict, List, Optional

from tfsdrive.client import ConnectionHandle
from tfsdrive.models import ConnectionIdentity, Credential
from tfsdrive.vfs.base import DirectoryNode, Node
from tfsdrive.vfs import collator
from tfsdrive.vfs.nodes.registry import RegistryFolderNode

logger = logging.getLogger(__name__)

Connector = Callable[[str, Optional[Credential]], ConnectionHandle]


class ConfigurationServerNode(DirectoryNode):
    """Root directory of a drive, backed by one configuration server.

    Constructing the node does not touch the network. The connection is
    made by ensure_connected(), which name and list_children() call on
    first use; the handle is then reused for the lifetime of the node.
    Listing the root reads the registry once and collates it.
    """

    def __init__(
        self,
        identity: ConnectionIdentity,
        connector: Connector,
        entry_query: str = "/**",
        show_collections: bool = False,
    ):
        """Initialize the server node.

        Args:
            identity: URI and credential to connect with
            connector: Callable (uri, credential) -> ConnectionHandle
            entry_query: Registry wildcard read when listing the root
            show_collections: Add a project collections folder
        """
        super().__init__(name="", parent=None)
        self.identity = identity
        self.connector = connector
        self.entry_query = entry_query
        self.show_collections = show_collections
        self._handle: Optional[ConnectionHandle] = None
        self._children_cache: Optional[List[Node]] = None
        self._tree: Optional[RegistryFolderNode] = None
        self._collections: Optional[DirectoryNode] = None

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    def ensure_connected(self) -> ConnectionHandle:
        """Connect on first call; return the same handle afterwards.

        Raises:
            ConnectionError: If the server is unreachable or rejects
                the credential
        """
        if self._handle is None:
            self._handle = self.connector(self.identity.uri, self.identity.credential)
        return self._handle

    @property
    def name(self) -> str:
        """Server display name (connects if needed)."""
        return self.ensure_connected().name

    def list_children(self) -> List[Node]:
        if self._children_cache is None:
            self._build_children()
        return list(self._children_cache)

    def get_child(self, name: str) -> Optional[Node]:
        if self._children_cache is None:
            self._build_children()
        # Same lookup rule as any registry folder: sub-folders before entries
        child = self._tree.get_child(name)
        if child is None and self._collections is not None and name == self._collections.name:
            return self._collections
        return child

    def _build_children(self) -> None:
        handle = self.ensure_connected()
        self._tree = collator.collate(handle.read_entries(self.entry_query))

        children = self._tree.list_children()
        if self.show_collections:
            from tfsdrive.vfs.nodes.collections import ProjectCollectionsNode
            self._collections = ProjectCollectionsNode(handle, parent=self)
            children.append(self._collections)

        for child in children:
            child.parent = self
        self._children_cache = children

    def get_value(self) -> Any:
        return self.ensure_connected()

    def get_info(self) -> Dict[str, Any]:
        handle = self.ensure_connected()
        return {
            "type": "directory",
            "name": handle.name,
            "uri": handle.uri,
            "user": self.identity.credential.username if self.identity.credential else None,
            "children_count": len(self.list_children()),
            "path": self.get_path(),
        }

    def close(self) -> None:
        """Release the connection, if one was made."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __repr__(self) -> str:
        return f"ConfigurationServerNode(uri='{self.identity.uri}')"
