"""Tests for building the folder tree from flat registry entries."""

import itertools
from unittest.mock import patch

import pytest

from tfsdrive.models import FlatEntry
from tfsdrive.vfs.base import DirectoryNode, FileNode
from tfsdrive.vfs.collator import collate, group_by_parent, parent_key
from tfsdrive.vfs.nodes.registry import RegistryEntryNode, RegistryFolderNode


def shape(node):
    """Structure of a tree as nested sorted tuples, ignoring sibling order."""
    if isinstance(node, DirectoryNode):
        return (node.name, tuple(sorted((shape(child) for child in node.list_children()), key=repr)))
    return (node.name,)


def leaf_names(folder):
    return sorted(child.name for child in folder.list_children() if isinstance(child, FileNode))


class TestParentKey:

    @pytest.mark.parametrize("path, expected", [
        ("/a/b/x", "/a/b"),
        ("/x", ""),
        ("x", ""),
        ("a/b", "a"),
        ("/a/b/", "/a/b"),
        ("", ""),
    ])
    def test_parent_key(self, path, expected):
        assert parent_key(path) == expected

    def test_grouping_keeps_first_seen_order(self):
        entries = [FlatEntry("/b/1"), FlatEntry("/a/1"), FlatEntry("/b/2")]

        groups = group_by_parent(entries)

        assert list(groups) == ["/b", "/a"]
        assert [e.path for e in groups["/b"]] == ["/b/1", "/b/2"]


class TestMerge:
    """Entries sharing a prefix share folders."""

    @pytest.fixture
    def entries(self):
        return [FlatEntry("/a/b/x", 1), FlatEntry("/a/b/y", 2), FlatEntry("/a/c/z", 3)]

    def test_merge_structure(self, entries):
        """
        Given: /a/b/x, /a/b/y, /a/c/z
        When: Collating
        Then: a has exactly b and c; b holds x and y; c holds z
        """
        root = collate(entries)

        assert [child.name for child in root.list_children()] == ["a"]
        a = root.get_child("a")
        assert sorted(child.name for child in a.list_children()) == ["b", "c"]
        assert leaf_names(a.get_child("b")) == ["/a/b/x", "/a/b/y"]
        assert leaf_names(a.get_child("c")) == ["/a/c/z"]

    @pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
    def test_shared_folders_created_once(self, entries, order):
        """Folders a and a/b are constructed exactly once in any order."""
        shuffled = [entries[i] for i in order]

        with patch(
            "tfsdrive.vfs.nodes.registry.RegistryFolderNode",
            wraps=RegistryFolderNode,
        ) as folder_cls:
            root = collate(shuffled)

        created = [call.args[0] for call in folder_cls.call_args_list]
        assert sorted(created) == ["a", "b", "c"]
        assert root.get_child("a").get_child("b") is root.get_child("a").get_child("b")

    def test_permutations_give_identical_trees(self, entries):
        shapes = {shape(collate(list(p))) for p in itertools.permutations(entries)}

        assert len(shapes) == 1

    def test_collating_twice_is_idempotent(self, registry_entries):
        assert shape(collate(registry_entries)) == shape(collate(list(reversed(registry_entries))))


class TestLeaves:

    def test_leaf_named_by_full_path_with_entry_value(self):
        root = collate([FlatEntry("/a/b", {"k": "v"})])

        leaf = root.get_child("a").get_child("/a/b")

        assert isinstance(leaf, RegistryEntryNode)
        assert leaf.get_value() == FlatEntry("/a/b", {"k": "v"})
        assert leaf.entry.value == {"k": "v"}
        assert '"k": "v"' in leaf.read_content()

    def test_parent_chain_matches_parent_key(self, registry_entries):
        """Every leaf's folder chain joined with '/' equals its parent key."""
        root = collate(registry_entries)

        def walk(folder, trail):
            for child in folder.list_children():
                if isinstance(child, DirectoryNode):
                    yield from walk(child, trail + [child.name])
                else:
                    yield child, trail

        leaves = list(walk(root, []))
        assert len(leaves) == len(registry_entries)
        for leaf, trail in leaves:
            assert "/" + "/".join(trail) == parent_key(leaf.name)

    def test_top_level_entries_hang_off_root(self):
        root = collate([FlatEntry("/Owner", "ops"), FlatEntry("Timeout", 30)])

        assert leaf_names(root) == ["/Owner", "Timeout"]

    def test_duplicate_paths_are_both_kept(self):
        root = collate([FlatEntry("/a/x", 1), FlatEntry("/a/x", 2)])

        leaves = root.get_child("a").list_children()

        assert [leaf.name for leaf in leaves] == ["/a/x", "/a/x"]
        assert [leaf.entry.value for leaf in leaves] == [1, 2]
        assert root.get_child("a").get_child("/a/x").entry.value == 1


class TestSeparatorTolerance:

    def test_repeated_and_missing_leading_separators_merge(self):
        root = collate([FlatEntry("a//b/x"), FlatEntry("/a/b/y"), FlatEntry("a/b//z")])

        assert [child.name for child in root.list_children()] == ["a"]
        b = root.get_child("a").get_child("b")
        assert leaf_names(b) == ["/a/b/y", "a//b/x", "a/b//z"]
        assert not any(isinstance(child, DirectoryNode) for child in b.list_children())

    def test_case_matters_when_merging(self):
        root = collate([FlatEntry("/A/x"), FlatEntry("/a/y")])

        assert sorted(child.name for child in root.list_children()) == ["A", "a"]


def test_folder_paths():
    root = collate([FlatEntry("/Configuration/Settings/Timeout", 30)])

    settings = root.get_child("Configuration").get_child("Settings")

    assert settings.get_path() == "\\Configuration\\Settings"
    assert settings.get_value() == "\\Configuration\\Settings"
