"""Registry folder and entry nodes built from the flat entry listing."""

from typing import Any, Dict, List, Optional

from tfsdrive.models import FlatEntry
from tfsdrive.vfs.base import DirectoryNode, FileNode, Node, render_value


class RegistryFolderNode(DirectoryNode):
    """An intermediate registry folder, e.g. \\Configuration\\Settings.

    Children are attached by the collator: sub-folders are indexed by
    name so repeated prefixes merge into the same folder object, entries
    are kept in arrival order.
    """

    def __init__(self, name: str, parent: Optional[DirectoryNode] = None):
        super().__init__(name, parent)
        self._folders: Dict[str, 'RegistryFolderNode'] = {}
        self._children: List[Node] = []

    def folder(self, name: str) -> 'RegistryFolderNode':
        """Get the sub-folder with this name, creating it if needed."""
        child = self._folders.get(name)
        if child is None:
            child = RegistryFolderNode(name, parent=self)
            self._folders[name] = child
            self._children.append(child)
        return child

    def add_entry(self, entry: FlatEntry) -> 'RegistryEntryNode':
        """Attach a leaf for one flat entry."""
        leaf = RegistryEntryNode(entry, parent=self)
        self._children.append(leaf)
        return leaf

    def list_children(self) -> List[Node]:
        return list(self._children)

    def get_child(self, name: str) -> Optional[Node]:
        folder = self._folders.get(name)
        if folder is not None:
            return folder
        for child in self._children:
            if child.name == name:
                return child
        return None

    def get_value(self) -> Any:
        return self.get_path()


class RegistryEntryNode(FileNode):
    """A single registry entry.

    Named by the entry's full registry path, not its last segment.
    """

    def __init__(self, entry: FlatEntry, parent: Optional[DirectoryNode] = None):
        super().__init__(entry.path, parent)
        self.entry = entry

    def get_value(self) -> FlatEntry:
        return self.entry

    def read_content(self) -> str:
        return render_value(self.entry.value)

    def get_info(self):
        info = super().get_info()
        info["registry_path"] = self.entry.path
        value = self.entry.value
        if value is not None:
            preview = str(value)
            info["preview"] = preview if len(preview) <= 60 else preview[:57] + "..."
        return info
