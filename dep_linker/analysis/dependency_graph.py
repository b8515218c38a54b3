"""Dependency graph builder: forward and reverse edges between local modules, cycle flags."""

from __future__ import annotations

import logging
from typing import Mapping

from dep_linker.models import Module
from dep_linker.analysis.graph_models import DependencyGraph, GraphNode

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build a dependency graph from discovered modules."""

    def build(self, modules: Mapping[str, Module]) -> DependencyGraph:
        graph = DependencyGraph()

        # Step 1: forward edges, restricted to discovered modules
        depends_on: dict[str, tuple[str, ...]] = {}
        for name, module in modules.items():
            depends_on[name] = tuple(
                dep for dep in module.dependencies
                if dep in modules and dep != name
            )

        # Step 2: reverse edges
        referenced_by: dict[str, list[str]] = {name: [] for name in modules}
        for name, deps in depends_on.items():
            for dep in deps:
                referenced_by[dep].append(name)

        # Step 3: nodes, flagging direct mutual references
        for name in modules:
            refs = tuple(referenced_by[name])
            is_cyclic = any(ref in depends_on[name] for ref in refs)
            graph.nodes[name] = GraphNode(
                name=name,
                depends_on=depends_on[name],
                referenced_by=refs,
                is_cyclic=is_cyclic,
            )
            logger.debug(
                "module=%s dependsOn=%s referencedBy=%s cyclic=%s",
                name, list(depends_on[name]), list(refs), is_cyclic,
            )

        return graph

    def detect_cycles(self, graph: DependencyGraph, among: set[str] | None = None) -> list[list[str]]:
        """Detect cycles using DFS, optionally limited to the ``among`` node names.

        Each cycle is returned closed, e.g. ``["a", "b", "c", "a"]``. Nodes are visited
        once, so a cycle that shares nodes with one already found may not be reported.
        """
        names = [n for n in graph.nodes if among is None or n in among]
        allowed = set(names)
        cycles: list[list[str]] = []
        visited: set[str] = set()
        rec_stack: set[str] = set()
        path: list[str] = []

        def dfs(name: str) -> None:
            visited.add(name)
            rec_stack.add(name)
            path.append(name)

            for neighbor in graph.nodes[name].depends_on:
                if neighbor not in allowed:
                    continue
                if neighbor not in visited:
                    dfs(neighbor)
                elif neighbor in rec_stack:
                    idx = path.index(neighbor)
                    cycles.append(path[idx:] + [neighbor])

            path.pop()
            rec_stack.discard(name)

        for name in names:
            if name not in visited:
                dfs(name)

        return cycles
