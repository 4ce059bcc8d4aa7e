"""Project collection nodes.

Only mounted when resolver.show_collections is enabled; the registry
tree works without them.
"""

from typing import Any, Dict, List, Optional

from tfsdrive.client import ConnectionHandle
from tfsdrive.models import ProjectCollection
from tfsdrive.vfs.base import DirectoryNode, FileNode, Node

COLLECTIONS_NAME = "_collections"


class ProjectCollectionsNode(DirectoryNode):
    """\\_collections - Project collections hosted by the server.

    The collection list is fetched on first access.
    """

    def __init__(self, handle: ConnectionHandle, parent: Optional[DirectoryNode] = None):
        super().__init__(name=COLLECTIONS_NAME, parent=parent)
        self.handle = handle
        self._children_cache: Optional[Dict[str, Node]] = None

    def _build_children(self) -> None:
        self._children_cache = {}
        for collection in self.handle.list_project_collections():
            self._children_cache.setdefault(
                collection.name, ProjectCollectionNode(collection, parent=self)
            )

    def list_children(self) -> List[Node]:
        if self._children_cache is None:
            self._build_children()
        return list(self._children_cache.values())

    def get_child(self, name: str) -> Optional[Node]:
        if self._children_cache is None:
            self._build_children()
        return self._children_cache.get(name)

    def get_value(self) -> Any:
        return [child.get_value() for child in self.list_children()]


class ProjectCollectionNode(FileNode):
    """A single project collection."""

    def __init__(self, collection: ProjectCollection, parent: Optional[DirectoryNode] = None):
        super().__init__(collection.name, parent)
        self.collection = collection

    def get_value(self) -> ProjectCollection:
        return self.collection

    def read_content(self) -> str:
        lines = [f"id: {self.collection.id}", f"name: {self.collection.name}"]
        if self.collection.url:
            lines.append(f"url: {self.collection.url}")
        if self.collection.state:
            lines.append(f"state: {self.collection.state}")
        return "\n".join(lines)

    def get_info(self) -> Dict[str, Any]:
        info = super().get_info()
        info["collection_id"] = self.collection.id
        if self.collection.state:
            info["state"] = self.collection.state
        return info
