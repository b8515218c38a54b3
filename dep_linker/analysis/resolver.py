"""Resolution engine: orders modules and cyclic pairs so every step's edges are already linked."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from dep_linker.commands import Command, CommandFactory
from dep_linker.models import LinkerConfig, Module
from dep_linker.analysis.dependency_graph import DependencyGraphBuilder
from dep_linker.analysis.graph_models import DependencyGraph, GraphNode
from dep_linker.strategy.base import BaseLinkStrategy

logger = logging.getLogger(__name__)


class UnresolvedDependencyError(Exception):
    """Resolution ran out of unproductive passes with modules left over."""

    def __init__(
        self,
        unresolved: Mapping[str, GraphNode],
        unproductive_passes: int,
        cycles: list[list[str]] | None = None,
    ):
        self.unresolved = dict(unresolved)
        self.unproductive_passes = unproductive_passes
        self.cycles = cycles or []
        details = "; ".join(
            f"{name} -> [{', '.join(node.depends_on)}]"
            for name, node in self.unresolved.items()
        )
        message = f"Unable to fully resolve dependencies: {details}"
        if self.cycles:
            message += " (cycles: " + ", ".join(" -> ".join(c) for c in self.cycles) + ")"
        super().__init__(message)

    @property
    def names(self) -> set[str]:
        return set(self.unresolved)


@dataclass
class ResolutionStep:
    """One plain module, or one cyclic pair resolved atomically."""
    nodes: tuple[GraphNode, ...]
    commands: list[Command] = field(default_factory=list)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(node.name for node in self.nodes)

    @property
    def is_cyclic_pair(self) -> bool:
        return len(self.nodes) == 2


class DependencyResolver:
    """Resolve a dependency graph into an ordered stream of link commands.

    Each pass scans the remaining modules in discovery order and commits to the
    first thing it can resolve: a plain module whose local dependencies are all
    solved, or a cyclic module together with a cyclic partner such that each
    covers the other's one missing edge. A pass that resolves nothing uses up
    one retry; any successful pass restores the full budget.
    """

    def __init__(
        self,
        strategy: BaseLinkStrategy,
        config: LinkerConfig | None = None,
        builder: DependencyGraphBuilder | None = None,
    ):
        self.strategy = strategy
        self.config = config or strategy.config
        self.builder = builder or DependencyGraphBuilder()
        self._factory = CommandFactory(self.config.package_manager)

    def analyze_dependencies(
        self,
        modules: Mapping[str, Module],
        custom_commands: Sequence[str | Command] | None = None,
    ) -> list[Command]:
        """Build the graph for ``modules`` and resolve it."""
        graph = self.builder.build(modules)
        return self.resolve(graph, modules, custom_commands)

    def resolve(
        self,
        graph: DependencyGraph,
        modules: Mapping[str, Module],
        custom_commands: Sequence[str | Command] | None = None,
    ) -> list[Command]:
        commands: list[Command] = []
        for step in self.resolve_steps(graph, modules, custom_commands):
            commands.extend(step.commands)
        return commands

    def resolve_steps(
        self,
        graph: DependencyGraph,
        modules: Mapping[str, Module],
        custom_commands: Sequence[str | Command] | None = None,
    ) -> list[ResolutionStep]:
        suffix = [
            cmd if isinstance(cmd, Command) else self._factory.shell(cmd)
            for cmd in (custom_commands or [])
        ]

        # Remaining work, kept apart from the graph snapshot
        unresolved: dict[str, GraphNode] = dict(graph.nodes)
        solved: list[str] = []
        steps: list[ResolutionStep] = []
        retries = self.config.retries
        unproductive = 0

        while unresolved:
            step = self._next_step(unresolved, solved, modules)
            if step is None:
                retries -= 1
                unproductive += 1
                logger.debug("Pass resolved nothing, %d retries left", retries)
                if retries <= 0:
                    cycles = self.builder.detect_cycles(graph, among=set(unresolved))
                    raise UnresolvedDependencyError(unresolved, unproductive, cycles)
                continue

            for name in step.names:
                del unresolved[name]
                solved.append(name)
            step.commands.extend(suffix)
            steps.append(step)
            retries = self.config.retries
            logger.debug("Resolved %s, commands: %s", list(step.names), [str(c) for c in step.commands])

        logger.debug("Solved order: %s", solved)
        return steps

    def _next_step(
        self,
        unresolved: Mapping[str, GraphNode],
        solved: Sequence[str],
        modules: Mapping[str, Module],
    ) -> ResolutionStep | None:
        solved_set = set(solved)
        for node in unresolved.values():
            if not node.is_cyclic:
                if set(node.depends_on) <= solved_set:
                    return ResolutionStep(
                        nodes=(node,),
                        commands=self.strategy.link_commands(node, modules),
                    )
                continue

            partner = self._find_partner(node, unresolved, solved_set)
            if partner is not None:
                return ResolutionStep(
                    nodes=(node, partner),
                    commands=self.strategy.link_commands(node, modules, partner),
                )
        return None

    @staticmethod
    def _find_partner(
        node: GraphNode,
        unresolved: Mapping[str, GraphNode],
        solved: set[str],
    ) -> GraphNode | None:
        for candidate in unresolved.values():
            if candidate.name == node.name or not candidate.is_cyclic:
                continue
            if (set(node.depends_on) <= solved | {candidate.name}
                    and set(candidate.depends_on) <= solved | {node.name}):
                return candidate
        return None
