"""Turn the flat registry listing into a tree of folders and entries.

The registry service answers a wildcard query with a flat list of
``(path, value)`` pairs::

    /Configuration/Settings/Timeout   30
    /Configuration/Settings/Owner     ops
    /Configuration/Jobs/Nightly       on

Entries are grouped by their parent key (the path minus its last
segment) and hung below a chain of folders, one per segment. Folders
are shared between groups with a common prefix::

    (root)
    └── Configuration
        ├── Settings
        │   ├── /Configuration/Settings/Timeout
        │   └── /Configuration/Settings/Owner
        └── Jobs
            └── /Configuration/Jobs/Nightly

Leaves keep the entry's full path as their name. Entries with an
identical full path are all kept.
"""

import logging
from typing import Dict, Iterable, List

from tfsdrive.models import FlatEntry
from tfsdrive.vfs.nodes.registry import RegistryFolderNode

logger = logging.getLogger(__name__)


def parent_key(path: str) -> str:
    """Strip the last '/' segment from a registry path."""
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[0]


def group_by_parent(entries: Iterable[FlatEntry]) -> Dict[str, List[FlatEntry]]:
    """Group entries by parent key, keeping first-seen order."""
    groups: Dict[str, List[FlatEntry]] = {}
    for entry in entries:
        groups.setdefault(parent_key(entry.path), []).append(entry)
    return groups


def collate(entries: Iterable[FlatEntry]) -> RegistryFolderNode:
    """Build a folder tree from a flat entry listing.

    Args:
        entries: Flat entries in any order

    Returns:
        A synthetic root folder (empty name, no parent)
    """
    root = RegistryFolderNode("")
    groups = group_by_parent(entries)

    count = 0
    for key, group in groups.items():
        folder = root
        for segment in key.split("/"):
            if segment:
                folder = folder.folder(segment)

        for entry in group:
            folder.add_entry(entry)
            count += 1

    logger.debug(f"Collated {count} entries into {len(groups)} folders")
    return root
