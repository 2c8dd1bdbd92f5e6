"""Read the plain-text inputs of a run: ignore lists and embedded queries."""

from __future__ import annotations

import re
from pathlib import Path

from gqlslice.closure.types import IgnoreSet

# First backtick literal tagged gql`...` or graphql`...`
_EMBEDDED_QUERY_RE = re.compile(r"(?:gql|graphql)`(.*?)`", re.DOTALL)


def extract_embedded_query(source: str) -> str | None:
    """Return the first tagged GraphQL literal of a JS/TS source, or None.

    >>> extract_embedded_query("const Q = gql`query { job { id } }`;")
    'query { job { id } }'
    """
    match = _EMBEDDED_QUERY_RE.search(source)
    if match is None:
        return None
    return match.group(1)


def parse_ignore_list(text: str) -> IgnoreSet:
    """One type name per line. Blank lines are counted but never ignored names."""
    lines = text.split("\n")
    names = frozenset(line.strip() for line in lines if line.strip())
    return IgnoreSet(names=names, line_count=len(lines))


def read_ignore_list(path: str | Path) -> IgnoreSet:
    return parse_ignore_list(Path(path).read_text())
