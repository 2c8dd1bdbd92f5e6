"""Rebuild selection trees from flattened selection-set text.

Works line by line on already-trimmed lines, without a tokenizer. Used
when a query cannot be parsed into an AST (templated literals, truncated
snippets). Malformed or truncated input never raises: the tree built so
far is returned.

A block is read in three states::

    READING_NAME  ->  READING_ARGS (optional)  ->  READING_BODY

The returned count is the index of the line that closed the block,
relative to the first line handed in, or the number of lines examined
when input ran out first. Callers resume sibling parsing at count + 1.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from gqlslice.selection.types import ObjectRegistry, SelectionNode

_ALIAS_RE = re.compile(r"^\w+\s*:\s*")
_OPERATION_RE = re.compile(r"^(query|mutation|subscription)\b|^\{")

ARGS_CLOSER = ") {"
BLOCK_CLOSER = "}"


class ParserState(Enum):
    READING_NAME = "reading_name"
    READING_ARGS = "reading_args"
    READING_BODY = "reading_body"


@dataclass
class _Header:
    name: str
    opens_body: bool  # False when argument lines follow


def parse_selection(
    lines: list[str], registry: ObjectRegistry
) -> tuple[SelectionNode, int]:
    """Parse one selection block starting at ``lines[0]``.

    Nodes whose name is already in *registry* are reused, so their fields
    and children accumulate in one node. Registering new nodes is left to
    the caller.
    """
    return _parse_at(lines, 0, registry)


def parse_selection_document(
    lines: list[str], registry: ObjectRegistry
) -> list[SelectionNode]:
    """Parse consecutive root blocks, registering each one.

    Nested blocks are registered as soon as they close, so every block
    of the run that resolves to the same name shares one node.
    """
    roots: list[SelectionNode] = []
    offset = 0
    while offset < len(lines):
        node, consumed = _parse_at(lines, offset, registry, register_children=True)
        if node.name:
            node = registry.register(node)
        if not any(root is node for root in roots):
            roots.append(node)
        offset += consumed + 1
    return roots


def flatten_selection_text(text: str) -> list[str]:
    """Split raw query text into trimmed lines without the operation's braces.

    >>> flatten_selection_text("query Jobs {\\n  job_job {\\n    id\\n  }\\n}")
    ['job_job {', 'id', '}']
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines or not _OPERATION_RE.match(lines[0]):
        return lines

    # Operation header, possibly with variables spanning several lines
    header_end = 0
    if not lines[0].endswith("{"):
        header_end = next(
            (i for i, line in enumerate(lines) if line.endswith(ARGS_CLOSER)),
            len(lines) - 1,
        )
    body = lines[header_end + 1 :]
    if body and body[-1] == BLOCK_CLOSER:
        body = body[:-1]
    return body


def _parse_at(
    lines: list[str],
    start: int,
    registry: ObjectRegistry,
    register_children: bool = False,
) -> tuple[SelectionNode, int]:
    state = ParserState.READING_NAME
    node = SelectionNode()
    i = start
    while i < len(lines):
        line = lines[i]

        if state is ParserState.READING_NAME:
            header = _match_header(line)
            if header is None:
                # No header: the block starts directly with its body
                state = ParserState.READING_BODY
                continue
            node = registry.get(header.name) or SelectionNode(name=header.name)
            state = ParserState.READING_BODY if header.opens_body else ParserState.READING_ARGS
            i += 1
            continue

        if state is ParserState.READING_ARGS:
            if line.endswith(ARGS_CLOSER):
                state = ParserState.READING_BODY
            i += 1
            continue

        if line == BLOCK_CLOSER:
            return node, i - start
        if line == ARGS_CLOSER:
            i += 1
            continue

        header = _match_header(line)
        if header is not None:
            node.add_field(header.name, is_parent=True)
            child, consumed = _parse_at(lines, i, registry, register_children)
            if register_children and child.name:
                child = registry.register(child)
            node.add_child(child)
            i += consumed + 1
            continue

        node.add_field(_field_name(line))
        i += 1

    return node, i - start


def _match_header(line: str) -> _Header | None:
    """Recognise ``name(``, ``alias: name(args) {`` and ``name {`` lines."""
    paren = line.find("(")
    brace = line.find("{")
    if paren != -1 and (brace == -1 or paren < brace):
        args = line[paren:]
        if args.count("(") > args.count(")"):
            return _Header(_field_name(line), opens_body=False)
        if line.endswith("{"):
            return _Header(_field_name(line), opens_body=True)
        return None
    if line.endswith("{"):
        return _Header(_field_name(line), opens_body=True)
    return None


def _field_name(line: str) -> str:
    """Field name of a selection line, without alias, arguments or braces."""
    cut = len(line)
    for marker in ("(", "{"):
        idx = line.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    return _ALIAS_RE.sub("", line[:cut].strip(), count=1)
