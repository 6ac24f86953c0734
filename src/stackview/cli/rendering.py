"""Rich rendering of expanded stack trees."""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from stackview.core.tree import BranchNode, RepositoryNode, StackNode, StatusNode, TreeItemView
from stackview.core.tree_render import ExpandedNode


def _label(item: ExpandedNode) -> Text:
    view: TreeItemView = item.view
    node = item.node
    if isinstance(node, (RepositoryNode, StackNode)):
        style = "bold"
    elif isinstance(node, BranchNode) and not node.branch.exists:
        style = "dim strike"
    elif isinstance(node, StatusNode) and node.warning:
        style = "yellow"
    else:
        style = ""

    text = Text(view.label, style=style)
    if view.description:
        text.append(f"  {view.description}", style="dim")
    return text


def _add_children(tree: Tree, items: tuple[ExpandedNode, ...]) -> None:
    for item in items:
        branch = tree.add(_label(item))
        _add_children(branch, item.children)


def print_rich_tree(roots: list[ExpandedNode], console: Console) -> None:
    for root in roots:
        tree = Tree(_label(root))
        _add_children(tree, root.children)
        console.print(tree)
