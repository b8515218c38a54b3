"""Data models for the module dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class GraphNode:
    name: str
    depends_on: tuple[str, ...] = ()  # local modules this one links against
    referenced_by: tuple[str, ...] = ()  # local modules that depend on this one
    is_cyclic: bool = False  # direct two-party mutual reference

    def without_dependency(self, name: str) -> GraphNode:
        """Copy of this node with the edge to ``name`` removed."""
        return replace(self, depends_on=tuple(d for d in self.depends_on if d != name))


@dataclass
class DependencyGraph:
    nodes: dict[str, GraphNode] = field(default_factory=dict)  # discovery order

    def __contains__(self, name: str) -> bool:
        return name in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def cyclic_names(self) -> list[str]:
        return [name for name, node in self.nodes.items() if node.is_cyclic]
