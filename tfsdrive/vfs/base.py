"""Base classes for the drive's node tree.

The remote catalog is presented as a tree of nodes that can be
navigated with shell-like commands (cd, ls, cat).

Architecture:
    - Node: Base class for all nodes (name, value, info)
    - DirectoryNode: Nodes that can contain children (cd into them)
    - FileNode: Leaf nodes wrapping one value (cat them)

Specialised nodes (server root, registry folders, project collections)
compose a payload instead of deepening the hierarchy.
"""

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

SEPARATOR = "\\"


def render_value(value: Any) -> str:
    """Render a node value as text: strings as-is, anything else as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, default=str)


class NodeType(Enum):
    """Type of node."""
    DIRECTORY = "directory"
    FILE = "file"


class Node(ABC):
    """Base class for all nodes.

    Attributes:
        name: The name of this node (a registry segment, a full entry
            path, a collection name, ...)
        parent: Parent directory node (None for root)
        node_type: Type of node (directory or file)
    """

    def __init__(
        self,
        name: str,
        parent: Optional['DirectoryNode'] = None,
        node_type: NodeType = NodeType.FILE,
    ):
        """Initialize a node.

        Args:
            name: Name of this node
            parent: Parent directory (None for root)
            node_type: Type of node
        """
        self._name = name
        self.parent = parent
        self.node_type = node_type

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def get_value(self) -> Any:
        """Get the value this node stands for."""
        pass

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """Get metadata about this node for display.

        Returns:
            Dict with keys like: type, name, path, children_count
        """
        pass

    def get_path(self) -> str:
        """Get the path of this node below the drive root.

        Returns:
            Path like \\Configuration\\Settings
        """
        parts = []
        node = self
        while node.parent is not None:
            parts.append(node.name)
            node = node.parent

        return SEPARATOR + SEPARATOR.join(reversed(parts))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self._name}')"


class DirectoryNode(Node):
    """A directory node that can contain children.

    Directory nodes can be navigated into with `cd` and their
    children can be listed with `ls`.
    """

    def __init__(self, name: str, parent: Optional['DirectoryNode'] = None):
        super().__init__(name, parent, NodeType.DIRECTORY)

    @abstractmethod
    def list_children(self) -> List[Node]:
        """List all children of this directory.

        This may fetch children from the remote service on first call.

        Returns:
            List of child nodes
        """
        pass

    @abstractmethod
    def get_child(self, name: str) -> Optional[Node]:
        """Get a child node by exact (case-sensitive) name.

        Args:
            name: Name of child node

        Returns:
            Child node or None if not found
        """
        pass

    def get_info(self) -> Dict[str, Any]:
        children = self.list_children()
        return {
            "type": "directory",
            "name": self.name,
            "children_count": len(children),
            "path": self.get_path(),
        }


class FileNode(Node):
    """A leaf node wrapping one value.

    File nodes have no children; their value can be read with `cat`.
    """

    def __init__(self, name: str, parent: Optional[DirectoryNode] = None):
        super().__init__(name, parent, NodeType.FILE)

    def read_content(self) -> str:
        """Render the node's value as text."""
        return render_value(self.get_value())

    def get_info(self) -> Dict[str, Any]:
        return {
            "type": "file",
            "name": self.name,
            "path": self.get_path(),
        }
