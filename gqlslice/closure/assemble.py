"""Render type definitions to SDL fragments and collect them once per name."""

from __future__ import annotations

from collections.abc import Collection

from gqlslice.schema.types import FieldDefinition, TypeDefinition, TypeKind

# Conventional custom scalars always rendered as bare scalar declarations
CONVENTIONAL_SCALARS = frozenset({"uuid", "json", "timestamptz"})


class OutputAssembler:
    """Ordered fragment collection with at-most-once emission per type name.

    A name is claimed either with its text (``emit``) or as a placeholder
    (``reserve``) whose text is supplied later by ``fill``. The claim order
    is the output order.
    """

    def __init__(self) -> None:
        self._fragments: dict[str, str | None] = {}

    def emit(self, name: str, text: str) -> bool:
        """Claim *name* with its fragment. Returns False if already claimed."""
        if name in self._fragments:
            return False
        self._fragments[name] = text
        return True

    def reserve(self, name: str) -> bool:
        """Claim *name*'s position now, deferring its text."""
        if name in self._fragments:
            return False
        self._fragments[name] = None
        return True

    def fill(self, name: str, text: str) -> None:
        if name not in self._fragments:
            raise KeyError(name)
        self._fragments[name] = text

    def pending(self) -> list[str]:
        """Names reserved but not yet filled, in claim order."""
        return [name for name, text in self._fragments.items() if text is None]

    def fragments(self) -> list[str]:
        """Return every fragment in claim order."""
        missing = self.pending()
        if missing:
            raise ValueError(f"Fragments never rendered: {', '.join(missing)}")
        return [text for text in self._fragments.values() if text is not None]


def render_field(field_def: FieldDefinition, with_arguments: bool = True) -> str:
    """Render a single field line, e.g. ``  job(id: uuid!): job_job``."""
    line = f"  {field_def.name}"
    if with_arguments and field_def.arguments:
        args = ", ".join(f"{arg.name}: {arg.type}" for arg in field_def.arguments)
        line += f"({args})"
    return f"{line}: {field_def.type}"


def render_partial_type(type_def: TypeDefinition, selected: Collection[str]) -> str:
    """Render a type keeping only the *selected* fields.

    Fields come out in schema declaration order. Enums keep all their
    values; scalars and the conventional scalar names have no body.
    """
    if type_def.name in CONVENTIONAL_SCALARS or type_def.kind is TypeKind.SCALAR:
        return f"scalar {type_def.name}"
    if type_def.kind is TypeKind.ENUM:
        return render_enum(type_def)

    keyword = _KEYWORDS.get(type_def.kind, "type")
    lines = [f"{keyword} {type_def.name} {{"]
    for field_def in type_def.fields:
        if field_def.name in selected:
            lines.append(render_field(field_def))
    lines.append("}")
    return "\n".join(lines)


def render_full_type(type_def: TypeDefinition) -> str:
    """Render an object, input object, or interface with all its fields."""
    keyword = _KEYWORDS[type_def.kind]
    lines = [f"{keyword} {type_def.name} {{"]
    for field_def in type_def.fields:
        lines.append(render_field(field_def, with_arguments=False))
    lines.append("}")
    return "\n".join(lines)


def render_enum(type_def: TypeDefinition) -> str:
    lines = [f"enum {type_def.name} {{"]
    lines.extend(f"  {value}" for value in type_def.enum_values)
    lines.append("}")
    return "\n".join(lines)


def render_scalar(type_def: TypeDefinition) -> str:
    return f"scalar {type_def.name}"


_KEYWORDS: dict[TypeKind, str] = {
    TypeKind.OBJECT: "type",
    TypeKind.INPUT_OBJECT: "input",
    TypeKind.INTERFACE: "interface",
}
