"""Schema closure walkers: query-driven and depth-bounded."""

from __future__ import annotations

from gqlslice.closure.query import (
    QueryClosureWalker as QueryClosureWalker,
    slice_query as slice_query,
    slice_query_text as slice_query_text,
)
from gqlslice.closure.type_closure import (
    DEFAULT_DEPTH as DEFAULT_DEPTH,
    TypeClosureWalker as TypeClosureWalker,
    slice_field as slice_field,
    slice_type as slice_type,
)

__all__ = [
    "DEFAULT_DEPTH",
    "QueryClosureWalker",
    "TypeClosureWalker",
    "slice_field",
    "slice_query",
    "slice_query_text",
    "slice_type",
]
