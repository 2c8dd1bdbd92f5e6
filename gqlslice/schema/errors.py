"""Errors raised while loading schemas or computing closures."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not-found"
    UNSUPPORTED_KIND = "unsupported-kind"
    UNSUPPORTED_OPERATION = "unsupported-operation"
    PARSE_FAILURE = "parse-failure"


_UNRECOVERABLE = frozenset({ErrorKind.UNSUPPORTED_KIND, ErrorKind.PARSE_FAILURE})


class SliceError(Exception):
    """Base class for every error a slicing run can surface."""

    kind: ErrorKind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details: dict[str, Any] = details or {}

    @property
    def recoverable(self) -> bool:
        """False when no caller may continue past this error."""
        return self.kind not in _UNRECOVERABLE


class TypeNotFoundError(SliceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, type_name: str):
        super().__init__(f"Type {type_name} not found in schema", {"type": type_name})
        self.type_name = type_name


class FieldNotFoundError(SliceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, type_name: str, field_name: str):
        super().__init__(
            f"Field {field_name} not found on type {type_name}",
            {"type": type_name, "field": field_name},
        )
        self.type_name = type_name
        self.field_name = field_name


class UnsupportedKindError(SliceError):
    """A type kind the full-closure walker cannot render (e.g. unions)."""

    kind = ErrorKind.UNSUPPORTED_KIND

    def __init__(self, type_name: str, type_kind: str):
        super().__init__(
            f"Unknown type kind {type_kind} for type {type_name}",
            {"type": type_name, "kind": type_kind},
        )
        self.type_name = type_name
        self.type_kind = type_kind


class UnsupportedOperationError(SliceError):
    kind = ErrorKind.UNSUPPORTED_OPERATION

    def __init__(self, operation: str):
        super().__init__(
            f"GraphQL operation type is not supported: {operation}",
            {"operation": operation},
        )
        self.operation = operation


class SchemaParseError(SliceError):
    kind = ErrorKind.PARSE_FAILURE


class QueryParseError(SliceError):
    kind = ErrorKind.PARSE_FAILURE


class NoEmbeddedQueryError(SliceError):
    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, source: str):
        super().__init__(
            f"No graphql query/mutation extracted from {source}", {"source": source}
        )
