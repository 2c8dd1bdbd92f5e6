"""Depth-bounded full closure from a single type or root field.

Every reachable type is printed with all of its fields, children before
parents, until the shared depth budget runs out. Ignored types are never
expanded.
"""

from __future__ import annotations

from gqlslice.closure.assemble import render_enum, render_full_type, render_scalar
from gqlslice.closure.types import (
    DepthBudget,
    FieldReport,
    IgnoreSet,
    ProgressCallback,
    VisitedSet,
    no_progress,
)
from gqlslice.schema.errors import (
    FieldNotFoundError,
    SliceError,
    TypeNotFoundError,
    UnsupportedKindError,
    UnsupportedOperationError,
)
from gqlslice.schema.types import SchemaIndex, TypeKind, is_custom_type

DEFAULT_DEPTH = 5


def slice_type(
    schema: SchemaIndex,
    type_name: str,
    depth: int = DEFAULT_DEPTH,
    ignored: IgnoreSet | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[str]:
    """Return the full fragments reachable from *type_name*."""
    walker = TypeClosureWalker(
        schema, DepthBudget(depth), ignored=ignored, on_progress=on_progress
    )
    walker.visit(type_name)
    return walker.fragments


def slice_field(
    schema: SchemaIndex,
    field_spec: str,
    depth: int = DEFAULT_DEPTH,
    ignored: IgnoreSet | None = None,
    on_progress: ProgressCallback | None = None,
) -> FieldReport:
    """Describe a root field given as ``"<query|mutation> <field_name>"``.

    Argument types and the return type share one visited set and one
    depth budget. Recoverable errors hit while expanding them end up in
    ``FieldReport.warnings``.
    """
    operation, field_name = split_field_spec(field_spec)
    if operation not in ("query", "mutation"):
        raise UnsupportedOperationError(operation)

    root = schema.root_type(operation)
    if root is None:
        raise TypeNotFoundError(f"{operation} root")
    field_def = root.get_field(field_name)
    if field_def is None:
        raise FieldNotFoundError(root.name, field_name)

    report = FieldReport(
        name=field_def.name,
        type=str(field_def.type),
        description=field_def.description,
        arguments=[(arg.name, str(arg.type)) for arg in field_def.arguments],
    )

    walker = TypeClosureWalker(
        schema, DepthBudget(depth), ignored=ignored, on_progress=on_progress
    )
    starts = [arg.type.named_type for arg in field_def.arguments]
    starts.append(field_def.type.named_type)
    for type_name in starts:
        if not is_custom_type(type_name):
            continue
        try:
            walker.visit(type_name)
        except SliceError as e:
            if not e.recoverable:
                raise
            report.warnings.append(str(e))

    report.fragments = walker.fragments
    return report


def split_field_spec(field_spec: str) -> tuple[str, str]:
    """Split ``"mutation create_job"`` into its two tokens."""
    tokens = field_spec.split(" ")
    if len(tokens) != 2 or not all(tokens):
        raise ValueError(
            "the format must be query/mutation field_name, example: mutation create_job"
        )
    return tokens[0], tokens[1]


class TypeClosureWalker:
    """Holds the visited set, budget, and fragments of one type-mode run."""

    def __init__(
        self,
        schema: SchemaIndex,
        budget: DepthBudget,
        ignored: IgnoreSet | None = None,
        visited: VisitedSet | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        self.schema = schema
        self.budget = budget
        self.ignored = ignored or IgnoreSet()
        self.visited = visited or VisitedSet()
        self.on_progress = on_progress or no_progress
        self.fragments: list[str] = []

    def visit(self, type_name: str) -> None:
        """Emit *type_name* and, budget allowing, every custom type it references."""
        if type_name in self.ignored:
            self.on_progress(f"Ignoring {type_name}")
            return
        if not self.budget.take():
            self.on_progress(f"Depth exhausted before {type_name}")
            return
        if type_name in self.visited:
            return
        self.visited.mark(type_name)

        type_def = self.schema.get(type_name)
        if type_def is None:
            raise TypeNotFoundError(type_name)

        if type_def.kind in (TypeKind.INPUT_OBJECT, TypeKind.OBJECT):
            fragment = render_full_type(type_def)
            for field_def in type_def.fields:
                nested = field_def.type.named_type
                if is_custom_type(nested):
                    self.visit(nested)
        elif type_def.kind is TypeKind.ENUM:
            fragment = render_enum(type_def)
        elif type_def.kind is TypeKind.INTERFACE:
            fragment = render_full_type(type_def)
        elif type_def.kind is TypeKind.SCALAR:
            fragment = render_scalar(type_def)
        else:
            raise UnsupportedKindError(type_def.name, type_def.kind.value)

        self.fragments.append(fragment)
