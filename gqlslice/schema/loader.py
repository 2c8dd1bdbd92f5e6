"""Build a SchemaIndex from schema definition language.

Uses graphql-core to parse and build the schema, then converts every
named type into our internal TypeDefinition representation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from graphql import build_schema, parse as gql_parse
from graphql.error import GraphQLError
from graphql.language.ast import DocumentNode
from graphql.type import (
    GraphQLNamedType,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_specified_scalar_type,
    is_union_type,
)

from gqlslice.schema.errors import QueryParseError, SchemaParseError
from gqlslice.schema.types import (
    ArgumentDefinition,
    FieldDefinition,
    SchemaIndex,
    TypeDefinition,
    TypeKind,
    TypeRef,
)


def load_schema(path: str | Path) -> SchemaIndex:
    """Read a schema file from disk and index it."""
    path = Path(path)
    try:
        sdl = path.read_text()
    except OSError as e:
        raise SchemaParseError(f"schema read file: {e}", {"path": str(path)}) from e
    return build_schema_index(sdl)


def build_schema_index(sdl: str) -> SchemaIndex:
    """Parse SDL text and convert it into a SchemaIndex."""
    try:
        schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaParseError(f"schema load: {e}") from e

    index = SchemaIndex(
        query_type=schema.query_type.name if schema.query_type else None,
        mutation_type=schema.mutation_type.name if schema.mutation_type else None,
    )
    for name, gql_type in schema.type_map.items():
        index.types[name] = _convert_type(gql_type)
    return index


def parse_query(text: str) -> DocumentNode:
    """Parse an executable document (queries, mutations, fragments)."""
    try:
        return gql_parse(text)
    except GraphQLError as e:
        raise QueryParseError(str(e)) from e


def _convert_type(gql_type: GraphQLNamedType) -> TypeDefinition:
    """Convert one graphql-core named type into a TypeDefinition."""
    built_in = is_specified_scalar_type(gql_type) or is_introspection_type(gql_type)
    definition = TypeDefinition(
        name=gql_type.name,
        kind=_kind_of(gql_type),
        built_in=built_in,
        description=gql_type.description,
    )

    if is_object_type(gql_type) or is_interface_type(gql_type):
        for field_name, gql_field in gql_type.fields.items():
            definition.fields.append(
                FieldDefinition(
                    name=field_name,
                    type=_convert_ref(gql_field.type),
                    arguments=[
                        ArgumentDefinition(name=arg_name, type=_convert_ref(arg.type))
                        for arg_name, arg in gql_field.args.items()
                    ],
                    description=gql_field.description,
                )
            )
    elif is_input_object_type(gql_type):
        for field_name, input_field in gql_type.fields.items():
            definition.fields.append(
                FieldDefinition(
                    name=field_name,
                    type=_convert_ref(input_field.type),
                    description=input_field.description,
                )
            )
    elif is_enum_type(gql_type):
        definition.enum_values = list(gql_type.values)

    return definition


def _kind_of(gql_type: GraphQLNamedType) -> TypeKind:
    if is_object_type(gql_type):
        return TypeKind.OBJECT
    if is_input_object_type(gql_type):
        return TypeKind.INPUT_OBJECT
    if is_enum_type(gql_type):
        return TypeKind.ENUM
    if is_interface_type(gql_type):
        return TypeKind.INTERFACE
    if is_union_type(gql_type):
        return TypeKind.UNION
    if is_scalar_type(gql_type):
        return TypeKind.SCALAR
    raise SchemaParseError(f"schema load: unexpected type {gql_type.name}")


def _convert_ref(gql_type: Any) -> TypeRef:
    """Convert a (possibly wrapped) graphql-core type into a TypeRef."""
    if is_non_null_type(gql_type):
        inner = _convert_ref(gql_type.of_type)
        return TypeRef(name=inner.name, of_type=inner.of_type, non_null=True)
    if is_list_type(gql_type):
        return TypeRef(of_type=_convert_ref(gql_type.of_type))
    return TypeRef(name=gql_type.name)
