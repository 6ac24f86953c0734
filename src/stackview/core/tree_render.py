"""Render a fully expanded stack tree as text.

Pure formatting over ExpandedNode values; expansion itself is async because
reading children may run the stack CLI.
"""

from dataclasses import dataclass

from stackview.core.aggregator import StackAggregator
from stackview.core.tree import TreeItemView, TreeNode, present


@dataclass(frozen=True)
class ExpandedNode:
    node: TreeNode
    view: TreeItemView
    children: tuple["ExpandedNode", ...]


async def expand(aggregator: StackAggregator, node: TreeNode | None = None) -> list[ExpandedNode]:
    """Walk the aggregator tree from node (or the root) down to every leaf."""
    expanded: list[ExpandedNode] = []
    for child in await aggregator.get_children(node):
        grandchildren = await expand(aggregator, child)
        expanded.append(ExpandedNode(node=child, view=present(child), children=tuple(grandchildren)))
    return expanded


def format_line(view: TreeItemView) -> str:
    if view.description:
        return f"{view.label}  {view.description}"
    return view.label


def render_tree(roots: list[ExpandedNode]) -> str:
    """Format expanded nodes as a tree.

    Example:
        feature-x  main  ⇆ origin/main (2 branches)
        ├─ a  2↓ 0↑ ⇆ origin/a
        └─ b  ⇆ origin/b
           └─ 1 commit ahead  0↓ 1↑ a
    """
    lines: list[str] = []
    for root in roots:
        _format_recursive(root, lines, prefix="", is_last=True, is_root=True)
    return "\n".join(lines)


def _format_recursive(
    item: ExpandedNode,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool,
) -> None:
    connector = "└─" if is_last else "├─"
    if is_root:
        lines.append(format_line(item.view))
        child_prefix = ""
    else:
        lines.append(f"{prefix}{connector} {format_line(item.view)}")
        child_prefix = prefix + ("   " if is_last else "│  ")

    for i, child in enumerate(item.children):
        _format_recursive(
            child,
            lines,
            prefix=child_prefix,
            is_last=i == len(item.children) - 1,
            is_root=False,
        )
