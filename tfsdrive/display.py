"""Rendering of nodes for the CLI and the shell."""

from typing import Any, Dict, List, Tuple

from rich.markup import escape
from rich.table import Table

from tfsdrive.vfs.base import DirectoryNode, Node
from tfsdrive.vfs.nodes.registry import RegistryFolderNode


def format_node_info(info: Dict[str, Any]) -> str:
    """Format node info for display.

    Args:
        info: Node info dict

    Returns:
        Formatted info string
    """
    parts = []

    if info.get("preview"):
        parts.append(info["preview"])
    if "children_count" in info:
        parts.append(f"{info['children_count']} items")
    if info.get("state"):
        parts.append(info["state"])
    if info.get("uri"):
        parts.append(info["uri"])

    return " | ".join(parts) if parts else ""


def describe(node: Node) -> Tuple[str, str]:
    """Type character and info string for one node.

    Only nodes whose info is already in memory are described; folders
    that would need a remote call to count their children are not.
    """
    if isinstance(node, DirectoryNode):
        if isinstance(node, RegistryFolderNode):
            return "d", format_node_info(node.get_info())
        return "d", ""
    return "f", format_node_info(node.get_info())


def node_table(nodes: List[Node]) -> Tuple[Table, List[str]]:
    """Build a listing table plus tab-separated lines for piping."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Info", style="dim")

    lines = []
    for node in nodes:
        type_char, info = describe(node)
        type_icon = "📁" if type_char == "d" else "📄"
        table.add_row(type_icon, escape(node.name), escape(info))
        lines.append(f"{type_char}\t{node.name}\t{info}")

    return table, lines
