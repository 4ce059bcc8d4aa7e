"""Virtual file system over a remote configuration server.

A drive path carries its own connection: the server URI is
percent-encoded into a bracketed root segment.

Architecture:

    ```
    work:[http%3A%2F%2Ftfs%3A8080%2Ftfs]\\     # ConfigurationServerNode
    ├── Configuration\\                          # RegistryFolderNode
    │   ├── Settings\\                           # RegistryFolderNode
    │   │   ├── /Configuration/Settings/Timeout  # RegistryEntryNode
    │   │   └── /Configuration/Settings/Owner
    │   └── Jobs\\
    │       └── /Configuration/Jobs/Nightly
    └── _collections\\                           # ProjectCollectionsNode (optional)
        └── DefaultCollection                    # ProjectCollectionNode
    ```

Resolution:

    - locator: extracts and decodes the token, picks the credential
    - ConfigurationServerNode: connects lazily, once
    - collator: turns the flat registry listing into folders
    - PathResolver: walks the remaining segments
    - ResolutionSession: ties the above together for one command
"""

from tfsdrive.vfs.base import Node, DirectoryNode, FileNode, NodeType, SEPARATOR
from tfsdrive.vfs.codec import encode, decode
from tfsdrive.vfs.session import ResolutionSession
from tfsdrive.vfs.collator import collate
from tfsdrive.vfs.resolver import PathResolver

__all__ = [
    # Main entry point
    "ResolutionSession",
    # Core classes
    "Node",
    "DirectoryNode",
    "FileNode",
    "NodeType",
    "SEPARATOR",
    # Building blocks
    "encode",
    "decode",
    "collate",
    "PathResolver",
]
