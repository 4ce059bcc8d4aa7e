"""Node implementations."""

from tfsdrive.vfs.nodes.registry import RegistryFolderNode, RegistryEntryNode
from tfsdrive.vfs.nodes.server import ConfigurationServerNode
from tfsdrive.vfs.nodes.collections import ProjectCollectionsNode, ProjectCollectionNode

__all__ = [
    "ConfigurationServerNode",
    "RegistryFolderNode",
    "RegistryEntryNode",
    "ProjectCollectionsNode",
    "ProjectCollectionNode",
]
