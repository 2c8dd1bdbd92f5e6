"""Selection trees rebuilt from flattened selection-set text."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class SelectionNode:
    """A named selection block.

    ``fields`` maps each selected field name to whether the field is
    itself a nested selection. Nodes compare by identity.
    """

    name: str = ""
    fields: dict[str, bool] = field(default_factory=lambda: dict[str, bool]())
    children: list[SelectionNode] = field(default_factory=lambda: list[SelectionNode]())

    def add_field(self, name: str, is_parent: bool = False) -> None:
        self.fields[name] = self.fields.get(name, False) or is_parent

    def add_child(self, child: SelectionNode) -> None:
        if child is self:
            return
        if not any(existing is child for existing in self.children):
            self.children.append(child)

    def merge(self, other: SelectionNode) -> None:
        """Fold *other*'s fields and children into this node."""
        for name, is_parent in other.fields.items():
            self.add_field(name, is_parent)
        for child in other.children:
            self.add_child(child)


class ObjectRegistry:
    """Run-scoped table of selection nodes, one per name.

    Build a new registry for every independent run; nodes registered in
    one run must never leak into another.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, SelectionNode] = {}

    def get(self, name: str) -> SelectionNode | None:
        return self._nodes.get(name)

    def register(self, node: SelectionNode) -> SelectionNode:
        """Register *node* and return the node now held under its name.

        A different node with an already registered name is merged into
        the registered one.
        """
        existing = self._nodes.get(node.name)
        if existing is None:
            self._nodes[node.name] = node
            return node
        if existing is not node:
            existing.merge(node)
        return existing

    def names(self) -> list[str]:
        return list(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
