"""
Rich tree rendering of pending draft changes.

Renders the output of pending_changes() as a rich Tree, nesting entries
by key path, with each change colored by kind.
"""

import typing as _typing

import rich.console as _rich_console
import rich.markup as _rich_markup
import rich.tree as _rich_tree

import asmutable.draft as draft

_KIND_STYLES: dict[str, str] = {
    "write": "green",
    "delete": "red",
    "define": "yellow",
    "length": "cyan",
    "ancestor": "magenta",
}


def _format_key(key: _typing.Any) -> str:
    return _rich_markup.escape(f"[{key!r}]")


def _format_change(change: draft.Change) -> str:
    style = _KIND_STYLES.get(change.kind, "white")
    label = f"[bold {style}]{change.kind}[/bold {style}]"
    if change.kind == "delete":
        return label
    return f"{label} {_rich_markup.escape(repr(change.value))}"


def render_pending(
    value: _typing.Any,
    *,
    title: str = "pending changes",
) -> _rich_tree.Tree:
    """
    Build a rich Tree of the changes buffered in a draft.

    Args:
        value: A draft (anything else renders as an empty tree).
        title: Label of the root node.

    Returns:
        Tree whose branches follow the key paths of the changes.
    """
    root = _rich_tree.Tree(f"[bold]{_rich_markup.escape(title)}[/bold]")
    changes = draft.pending_changes(value)
    if not changes:
        root.add("[dim]no changes[/dim]")
        return root

    branches: dict[tuple[_typing.Any, ...], _rich_tree.Tree] = {(): root}
    for change in changes:
        # Changes on the draft itself ("length", "ancestor") sit on its own branch.
        parent_path = change.path if change.kind in ("length", "ancestor") else change.path[:-1]
        parent = _branch(branches, parent_path)
        if parent_path == change.path:
            parent.add(_format_change(change))
        else:
            parent.add(f"{_format_key(change.path[-1])} {_format_change(change)}")
    return root


def _branch(
    branches: dict[tuple[_typing.Any, ...], _rich_tree.Tree],
    path: tuple[_typing.Any, ...],
) -> _rich_tree.Tree:
    node = branches.get(path)
    if node is None:
        node = _branch(branches, path[:-1]).add(_format_key(path[-1]))
        branches[path] = node
    return node


def print_pending(
    value: _typing.Any,
    console: _rich_console.Console | None = None,
    *,
    title: str = "pending changes",
) -> None:
    """Print render_pending(value) to console (a fresh Console by default)."""
    (console or _rich_console.Console()).print(render_pending(value, title=title))
