"""Schema catalogue types shared by the closure walkers.

Three layers of types:
1. Type references: a field or argument's declared type, with its
   list/non-null wrapping
2. Definitions: arguments, fields, and named types
3. SchemaIndex: the read-only catalogue keyed by type name
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# -- Type references ---------------------------------------------------------


@dataclass(frozen=True)
class TypeRef:
    """A declared type, e.g. ``String``, ``[job_job!]!``.

    A named reference has ``name`` set; a list reference has ``of_type``.
    """

    name: str | None = None
    of_type: TypeRef | None = None
    non_null: bool = False

    @property
    def named_type(self) -> str:
        """Unwrap list/non-null modifiers down to the base type name."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref.name or ""

    @property
    def is_list(self) -> bool:
        return self.of_type is not None

    def __str__(self) -> str:
        text = f"[{self.of_type}]" if self.of_type is not None else (self.name or "")
        return f"{text}!" if self.non_null else text


def named(name: str, non_null: bool = False) -> TypeRef:
    return TypeRef(name=name, non_null=non_null)


def list_of(of_type: TypeRef, non_null: bool = False) -> TypeRef:
    return TypeRef(of_type=of_type, non_null=non_null)


# -- Definitions --------------------------------------------------------------


class TypeKind(str, Enum):
    OBJECT = "OBJECT"
    INPUT_OBJECT = "INPUT_OBJECT"
    ENUM = "ENUM"
    INTERFACE = "INTERFACE"
    SCALAR = "SCALAR"
    UNION = "UNION"


@dataclass
class ArgumentDefinition:
    name: str
    type: TypeRef


@dataclass
class FieldDefinition:
    """A field of an object, interface, or input object type."""

    name: str
    type: TypeRef
    arguments: list[ArgumentDefinition] = field(default_factory=lambda: list[ArgumentDefinition]())
    description: str | None = None


@dataclass
class TypeDefinition:
    """A named type of the schema."""

    name: str
    kind: TypeKind
    fields: list[FieldDefinition] = field(default_factory=lambda: list[FieldDefinition]())
    enum_values: list[str] = field(default_factory=lambda: list[str]())
    built_in: bool = False  # specified scalars and introspection types
    description: str | None = None

    def get_field(self, name: str) -> FieldDefinition | None:
        """Return the field declared as *name*, or None."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


# -- Catalogue ------------------------------------------------------------------

BUILT_IN_SCALARS = frozenset({"Int", "Float", "String", "Boolean", "ID"})


def is_custom_type(type_name: str) -> bool:
    """True unless *type_name* is a built-in scalar or an introspection type."""
    return type_name not in BUILT_IN_SCALARS and not type_name.startswith("__")


@dataclass
class SchemaIndex:
    """Read-only catalogue of type definitions keyed by type name."""

    types: dict[str, TypeDefinition] = field(default_factory=lambda: dict[str, TypeDefinition]())
    query_type: str | None = None
    mutation_type: str | None = None

    def get(self, name: str) -> TypeDefinition | None:
        return self.types.get(name)

    def root_type(self, operation: str) -> TypeDefinition | None:
        """Return the root type for ``query`` or ``mutation``, or None."""
        if operation == "query":
            root_name = self.query_type
        elif operation == "mutation":
            root_name = self.mutation_type
        else:
            return None
        return self.types.get(root_name) if root_name else None
