"""Tests for walking a path remainder down the node tree."""

import pytest

from tfsdrive.errors import PathNotFoundError
from tfsdrive.models import FlatEntry
from tfsdrive.vfs.collator import collate
from tfsdrive.vfs.nodes.registry import RegistryEntryNode, RegistryFolderNode
from tfsdrive.vfs.resolver import PathResolver


@pytest.fixture
def tree(registry_entries):
    """A collated registry tree.

    Structure:
        (root)
        ├── Configuration/
        │   ├── Settings/
        │   │   ├── /Configuration/Settings/Timeout
        │   │   └── /Configuration/Settings/Owner
        │   └── Jobs/
        │       └── /Configuration/Jobs/Nightly
        └── proj/
            └── widgets/
                └── /proj/widgets/build
    """
    return collate(registry_entries)


class TestResolve:

    def test_empty_path_is_root(self, tree):
        resolver = PathResolver(tree)

        assert resolver.resolve("") is tree
        assert resolver.resolve("\\") is tree

    def test_resolves_folder(self, tree):
        resolver = PathResolver(tree)

        node = resolver.resolve("Configuration\\Settings")

        assert isinstance(node, RegistryFolderNode)
        assert node.name == "Settings"

    def test_resolves_leaf_by_full_path(self, tree):
        """
        Given: A leaf named by its full registry path
        When: Resolving folder segments followed by that name
        Then: The leaf itself comes back
        """
        resolver = PathResolver(tree)

        node = resolver.resolve("proj\\widgets\\/proj/widgets/build")

        assert isinstance(node, RegistryEntryNode)
        assert node.entry.value == {"agent": "linux", "enabled": True}

    def test_empty_segments_are_ignored(self, tree):
        resolver = PathResolver(tree)

        assert resolver.resolve("\\Configuration\\\\Jobs\\").name == "Jobs"

    def test_same_path_twice_gives_same_node(self, tree):
        resolver = PathResolver(tree)

        assert resolver.resolve("proj\\widgets") is resolver.resolve("proj\\widgets")


class TestNotFound:

    def test_missing_segment(self, tree):
        resolver = PathResolver(tree)

        with pytest.raises(PathNotFoundError) as exc_info:
            resolver.resolve("Configuration\\Nope\\Deeper")

        assert exc_info.value.segment == "Nope"
        assert exc_info.value.resolved == "\\Configuration"
        assert "Cannot find 'Nope'" in str(exc_info.value)

    def test_missing_first_segment(self, tree):
        resolver = PathResolver(tree)

        with pytest.raises(PathNotFoundError) as exc_info:
            resolver.resolve("Missing")

        assert exc_info.value.resolved == "\\"

    def test_segment_after_leaf(self, tree):
        resolver = PathResolver(tree)

        with pytest.raises(PathNotFoundError) as exc_info:
            resolver.resolve("proj\\widgets\\/proj/widgets/build\\more")

        assert exc_info.value.segment == "more"
        assert exc_info.value.resolved == "\\proj\\widgets\\/proj/widgets/build"

    def test_case_sensitive_by_default(self, tree):
        resolver = PathResolver(tree)

        with pytest.raises(PathNotFoundError):
            resolver.resolve("configuration")


class TestCaseInsensitive:

    def test_folded_match(self, tree):
        resolver = PathResolver(tree, case_sensitive=False)

        node = resolver.resolve("CONFIGURATION\\settings")

        assert node.name == "Settings"

    def test_exact_match_preferred(self):
        root = collate([FlatEntry("/A/x"), FlatEntry("/a/y")])
        resolver = PathResolver(root, case_sensitive=False)

        assert resolver.resolve("a").get_child("/a/y") is not None
        assert resolver.resolve("A").get_child("/A/x") is not None

    def test_still_raises_when_nothing_matches(self, tree):
        resolver = PathResolver(tree, case_sensitive=False)

        with pytest.raises(PathNotFoundError):
            resolver.resolve("nowhere")
