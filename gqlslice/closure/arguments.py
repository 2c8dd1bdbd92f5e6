"""Heuristic stubs for filter/sort/column input types.

The real shape of these input types is never introspected: names ending
in one of the conventional suffixes get a fixed stub. Anything else is
rendered from its schema kind: enum values and scalars are kept, input
objects get an empty body.
"""

from __future__ import annotations

from collections.abc import Sequence

from gqlslice.schema.types import TypeKind

SELECT_COLUMN_SUFFIX = "_select_column"
ORDER_BY_SUFFIX = "_order_by"
BOOL_EXP_SUFFIX = "_bool_exp"


def synthesize_argument(
    type_name: str,
    kind: TypeKind | None = None,
    enum_values: Sequence[str] = (),
) -> str:
    """Render a stub fragment for an argument's input type.

    *kind* is only consulted for names without a conventional suffix.
    Enums then keep their real *enum_values*; other input types get an
    empty body.

    >>> print(synthesize_argument("job_job_order_by"))
    input job_job_order_by {
      id: order_by
    }
    """
    if type_name.endswith(SELECT_COLUMN_SUFFIX):
        return f"enum {type_name} {{\n  id\n}}"
    if type_name.endswith(ORDER_BY_SUFFIX):
        return f"input {type_name} {{\n  id: order_by\n}}"
    if type_name.endswith(BOOL_EXP_SUFFIX):
        return (
            f"input {type_name} {{\n"
            f"  _and: [{type_name}!]\n"
            f"  _not: {type_name}\n"
            f"  _or: [{type_name}!]\n"
            "}"
        )

    if kind is TypeKind.SCALAR:
        return f"scalar {type_name}"
    if kind is TypeKind.ENUM:
        values = "".join(f"  {value}\n" for value in enum_values)
        return f"enum {type_name} {{\n{values}}}"
    return f"input {type_name} {{\n}}"
