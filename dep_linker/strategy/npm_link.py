"""Link dependencies through the package manager's ``link`` command."""

from __future__ import annotations

from typing import Mapping, Sequence

from dep_linker.commands import Command
from dep_linker.models import LinkStrategyKind, Module
from dep_linker.strategy.base import BaseLinkStrategy


class NpmLinkStrategy(BaseLinkStrategy):
    kind = LinkStrategyKind.NPM_LINK

    def link_step(self, names: Sequence[str], modules: Mapping[str, Module]) -> list[Command]:
        return [self.factory.link(names)]

    def register_step(self) -> list[Command]:
        return [self.factory.link()]
