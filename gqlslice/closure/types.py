"""Per-run bookkeeping passed down the closure walkers."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

ProgressCallback = Callable[[str], None]


def no_progress(_msg: str) -> None:
    pass


@dataclass
class VisitedRegistry:
    """Query mode: field names selected so far, per type name.

    Field names are only ever added. Type names keep first-reached order.
    """

    fields: dict[str, set[str]] = field(default_factory=lambda: dict[str, set[str]]())

    def touch(self, type_name: str) -> set[str]:
        """Return the field set for *type_name*, creating it if needed."""
        if type_name not in self.fields:
            self.fields[type_name] = set()
        return self.fields[type_name]

    def add(self, type_name: str, field_name: str) -> None:
        self.touch(type_name).add(field_name)

    def selected(self, type_name: str) -> set[str]:
        return self.fields.get(type_name, set())


@dataclass
class VisitedSet:
    """Type-closure mode: type names already processed in this run."""

    emitted: dict[str, bool] = field(default_factory=lambda: dict[str, bool]())

    def mark(self, type_name: str) -> None:
        self.emitted[type_name] = True

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and self.emitted.get(type_name, False)


@dataclass
class DepthBudget:
    """Whole-traversal expansion budget shared by every branch."""

    remaining: int = 5

    def take(self) -> bool:
        """Spend one unit. False (and nothing spent) once exhausted."""
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return True


@dataclass(frozen=True)
class IgnoreSet:
    """Type names never expanded by the type-closure walker."""

    names: frozenset[str] = frozenset()
    line_count: int = 0  # lines read, including a trailing blank one

    @classmethod
    def from_names(cls, names: Iterable[str]) -> IgnoreSet:
        names = frozenset(names)
        return cls(names=names, line_count=len(names))

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.names

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class FieldReport:
    """Result of the field-mode closure."""

    name: str
    type: str
    description: str | None
    arguments: list[tuple[str, str]] = field(default_factory=lambda: list[tuple[str, str]]())
    fragments: list[str] = field(default_factory=lambda: list[str]())
    warnings: list[str] = field(default_factory=lambda: list[str]())

    def signature_lines(self) -> list[str]:
        """The field's own signature block, as printed before its fragments."""
        lines = [
            f"Field Name: {self.name}",
            f"Type: {self.type}",
            f"Description: {self.description or ''}",
            "Arguments:",
        ]
        lines.extend(f"- {arg_name}: {arg_type}" for arg_name, arg_type in self.arguments)
        return lines
