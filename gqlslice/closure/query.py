"""Query-driven closure: keep only the fields a document actually selects.

Walks each operation's selection tree against the SchemaIndex, records
the selected field names per reached type, and synthesizes stubs for the
input types of arguments in use. Fragments come out in post-order of
type completion, rendered from the final accumulated field sets.
"""

from __future__ import annotations

from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    ListTypeNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    TypeNode,
)

from gqlslice.closure.arguments import synthesize_argument
from gqlslice.closure.assemble import OutputAssembler, render_partial_type
from gqlslice.closure.types import ProgressCallback, VisitedRegistry, no_progress
from gqlslice.schema.errors import TypeNotFoundError, UnsupportedOperationError
from gqlslice.schema.loader import parse_query
from gqlslice.schema.types import SchemaIndex, TypeDefinition

SUPPORTED_OPERATIONS = ("query", "mutation")


def slice_query(
    schema: SchemaIndex,
    document: DocumentNode,
    on_progress: ProgressCallback | None = None,
) -> list[str]:
    """Return the minimal fragments needed by every operation of *document*."""
    walker = QueryClosureWalker(schema, on_progress=on_progress)
    return walker.walk(document)


def slice_query_text(
    schema: SchemaIndex,
    query: str,
    on_progress: ProgressCallback | None = None,
) -> list[str]:
    """Parse *query* and slice *schema* down to it."""
    return slice_query(schema, parse_query(query), on_progress=on_progress)


class QueryClosureWalker:
    """One query-mode run. Not reusable: build a new walker per document."""

    def __init__(self, schema: SchemaIndex, on_progress: ProgressCallback | None = None):
        self.schema = schema
        self.registry = VisitedRegistry()
        self.assembler = OutputAssembler()
        self.on_progress = on_progress or no_progress

    def walk(self, document: DocumentNode) -> list[str]:
        operations = [
            defn for defn in document.definitions if isinstance(defn, OperationDefinitionNode)
        ]
        for op in operations:
            if op.operation.value not in SUPPORTED_OPERATIONS:
                raise UnsupportedOperationError(op.operation.value)

        for op in operations:
            self._walk_operation(op)

        for name in self.assembler.pending():
            type_def = self.schema.types[name]
            self.assembler.fill(name, render_partial_type(type_def, self.registry.selected(name)))
        return self.assembler.fragments()

    def _walk_operation(self, op: OperationDefinitionNode) -> None:
        operation = op.operation.value
        root = self.schema.root_type(operation)
        if root is None:
            raise TypeNotFoundError(f"{operation} root")

        for var_def in op.variable_definitions or []:
            type_def = self.schema.get(_named_type(var_def.type))
            if type_def is None or type_def.built_in:
                continue
            self.assembler.emit(type_def.name, _argument_stub(type_def))

        for selection in op.selection_set.selections:
            if isinstance(selection, FieldNode):
                self._process_field(selection, root)

    def _process_field(self, node: FieldNode, parent: TypeDefinition) -> None:
        field_def = parent.get_field(node.name.value)
        if field_def is None:
            self.on_progress(f"Skipping {parent.name}.{node.name.value}: not declared")
            return

        type_def = self.schema.get(field_def.type.named_type)
        if type_def is None or type_def.built_in:
            return

        self.registry.touch(type_def.name)
        fields_with_args: set[str] = set()
        if node.selection_set:
            for selection in node.selection_set.selections:
                # Fragment spreads and inline fragments are not expanded
                if not isinstance(selection, FieldNode):
                    continue
                self.registry.add(type_def.name, selection.name.value)
                if selection.arguments:
                    fields_with_args.add(selection.name.value)
                self._process_field(selection, type_def)

        self._process_argument_list(fields_with_args, type_def)
        self.assembler.reserve(type_def.name)

    def _process_argument_list(self, fields_with_args: set[str], type_def: TypeDefinition) -> None:
        """Synthesize input stubs for arguments of the direct children in use."""
        for field_def in type_def.fields:
            if field_def.name not in fields_with_args:
                continue
            for arg in field_def.arguments:
                arg_type = self.schema.get(arg.type.named_type)
                if arg_type is None or arg_type.built_in:
                    continue
                self.assembler.emit(arg_type.name, _argument_stub(arg_type))


def _argument_stub(type_def: TypeDefinition) -> str:
    return synthesize_argument(type_def.name, type_def.kind, type_def.enum_values)


def _named_type(type_node: TypeNode) -> str:
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    return type_node.name.value  # type: ignore[attr-defined]
