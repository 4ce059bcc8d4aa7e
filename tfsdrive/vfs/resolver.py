"""Path resolution within a drive's node tree.

Handles splitting the path remainder into segments and walking down
from the root node, one child lookup per segment.
"""

import logging
from typing import List, Optional

from tfsdrive.errors import PathNotFoundError
from tfsdrive.vfs.base import SEPARATOR, DirectoryNode, Node

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves separator-delimited paths against a node tree.

    Segments are matched against child names exactly by default. With
    case_sensitive=False names are compared case-folded, which costs a
    scan of the children at each level.
    """

    def __init__(self, root: DirectoryNode, case_sensitive: bool = True):
        """Initialize path resolver.

        Args:
            root: Root node of the drive
            case_sensitive: Match segment names exactly
        """
        self.root = root
        self.case_sensitive = case_sensitive

    def resolve(self, path: str) -> Node:
        """Resolve a path (relative to the drive root) to a node.

        Args:
            path: Remainder after the drive root; empty means the root

        Returns:
            The node the path points at

        Raises:
            PathNotFoundError: If a segment has no matching child, or
                segments remain after reaching a leaf
        """
        node: Node = self.root
        resolved: List[str] = []

        for part in self._parse_path(path):
            if not isinstance(node, DirectoryNode):
                raise PathNotFoundError(part, self._join(resolved))

            child = self._find_child(node, part)
            if child is None:
                raise PathNotFoundError(part, self._join(resolved))

            logger.debug(f"Descended into '{part}'")
            resolved.append(part)
            node = child

        return node

    def _find_child(self, node: DirectoryNode, name: str) -> Optional[Node]:
        if self.case_sensitive:
            return node.get_child(name)

        # Exact match first, then fall back to a case-folded scan
        child = node.get_child(name)
        if child is not None:
            return child
        folded = name.casefold()
        for candidate in node.list_children():
            if candidate.name.casefold() == folded:
                return candidate
        return None

    def _parse_path(self, path: str) -> List[str]:
        """Split a path on the separator, dropping empty segments."""
        return [part for part in path.split(SEPARATOR) if part]

    @staticmethod
    def _join(parts: List[str]) -> str:
        return SEPARATOR + SEPARATOR.join(parts)
