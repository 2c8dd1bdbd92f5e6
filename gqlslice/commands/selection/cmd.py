"""CLI command that rebuilds selection trees from raw query text."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.tree import Tree

from gqlslice.helpers.console import console, err_console, truncate
from gqlslice.selection.types import SelectionNode


@click.command("selection")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--embedded",
    is_flag=True,
    default=False,
    help="Read the first gql`...` literal of a JS/TS source file",
)
def selection(path: str, embedded: bool) -> None:
    """Rebuild the selection tree of a query without parsing it.

    Works on templated or truncated queries that a GraphQL parser rejects.
    """
    from gqlslice.helpers.sources import extract_embedded_query
    from gqlslice.selection.parser import flatten_selection_text, parse_selection_document
    from gqlslice.selection.types import ObjectRegistry

    text = Path(path).read_text()
    if embedded:
        query = extract_embedded_query(text)
        if not query:
            err_console.print(f"[red]Error: no graphql query/mutation extracted from {escape(path)}[/red]")
            sys.exit(1)
        text = query

    registry = ObjectRegistry()
    roots = parse_selection_document(flatten_selection_text(text), registry)
    console.print(f"[bold]Parsed {len(roots)} root selections[/bold] ({len(registry)} named)")
    for root in roots:
        console.print(build_tree(root))


def build_tree(node: SelectionNode) -> Tree:
    """Render a selection node and its children as a rich Tree."""
    tree = Tree(_label(node))
    _add_branches(tree, node, {id(node)})
    return tree


def _add_branches(tree: Tree, node: SelectionNode, seen: set[int]) -> None:
    by_name: dict[str, list[SelectionNode]] = {}
    for child in node.children:
        by_name.setdefault(child.name, []).append(child)

    for name, is_parent in node.fields.items():
        matching = by_name.pop(name, []) if is_parent else []
        if not matching:
            tree.add(escape(truncate(name, 80)))
        for child in matching:
            _add_child(tree, child, seen)
    for leftover in by_name.values():
        for child in leftover:
            _add_child(tree, child, seen)


def _add_child(tree: Tree, child: SelectionNode, seen: set[int]) -> None:
    if id(child) in seen:
        # Shared registry nodes can reference an ancestor
        tree.add(f"{_label(child)} [dim](cycle)[/dim]")
        return
    _add_branches(tree.add(_label(child)), child, seen | {id(child)})


def _label(node: SelectionNode) -> str:
    return f"[bold cyan]{escape(truncate(node.name or '(anonymous)', 80))}[/bold cyan]"
