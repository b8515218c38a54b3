"""Abstract base link strategy with the shared plain-node and cyclic-pair shapes."""

from __future__ import annotations

import abc
from typing import Mapping, Sequence

from dep_linker.commands import Command, CommandFactory
from dep_linker.models import LinkerConfig, LinkStrategyKind, Module
from dep_linker.analysis.graph_models import GraphNode


class BaseLinkStrategy(abc.ABC):
    """Turns a resolved step into the commands that materialize it.

    Subclasses decide how a module is linked against its dependencies and how
    it makes itself linkable; the ordering of ``cd``/link/install/register is
    fixed here so every strategy produces the same shape.
    """

    kind: LinkStrategyKind

    def __init__(self, config: LinkerConfig | None = None):
        self.config = config or LinkerConfig()
        self.factory = CommandFactory(self.config.package_manager)

    @abc.abstractmethod
    def link_step(self, names: Sequence[str], modules: Mapping[str, Module]) -> list[Command]:
        """Link the current directory's module against the named modules."""

    @abc.abstractmethod
    def register_step(self) -> list[Command]:
        """Make the current directory's module linkable by others."""

    def install_step(self) -> list[Command]:
        return [self.factory.install()]

    def link_commands(
        self,
        node: GraphNode,
        modules: Mapping[str, Module],
        partner: GraphNode | None = None,
    ) -> list[Command]:
        """Commands for a plain node, or for the pair (node, partner)."""
        if partner is None:
            return self._plain_commands(node, modules)
        return self._pair_commands(node, partner, modules)

    def _plain_commands(self, node: GraphNode, modules: Mapping[str, Module]) -> list[Command]:
        commands = [self.factory.cd(modules[node.name].path)]
        if node.depends_on:
            commands.extend(self.link_step(node.depends_on, modules))
        commands.extend(self.install_step())
        if node.referenced_by:
            commands.extend(self.register_step())
        return commands

    def _pair_commands(
        self,
        first: GraphNode,
        partner: GraphNode,
        modules: Mapping[str, Module],
    ) -> list[Command]:
        first_path = modules[first.name].path
        commands: list[Command] = []

        # first: link everything except the partner, then install and register
        broken = first.without_dependency(partner.name)
        commands.append(self.factory.cd(first_path))
        if broken.depends_on:
            commands.extend(self.link_step(broken.depends_on, modules))
        commands.extend(self.install_step())
        commands.extend(self.register_step())

        # second: fully materialize the partner, its edge back to first included
        commands.append(self.factory.cd(modules[partner.name].path))
        if partner.depends_on:
            commands.extend(self.link_step(partner.depends_on, modules))
        commands.extend(self.install_step())
        if partner.referenced_by:
            commands.extend(self.register_step())

        # third: close the loop inside first
        commands.append(self.factory.cd(first_path))
        commands.extend(self.link_step([partner.name], modules))
        return commands
