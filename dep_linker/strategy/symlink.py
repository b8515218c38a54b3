"""Link dependencies by symlinking their checkouts into the link directory."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Mapping, Sequence

from dep_linker.commands import Command
from dep_linker.models import LinkStrategyKind, Module
from dep_linker.strategy.base import BaseLinkStrategy


class SymlinkStrategy(BaseLinkStrategy):
    kind = LinkStrategyKind.SYMLINK

    def link_step(self, names: Sequence[str], modules: Mapping[str, Module]) -> list[Command]:
        # Scoped names ("@scope/pkg") nest one level below the link directory
        return [
            self.factory.symlink(modules[name].path, PurePosixPath(self.config.link_dir, name))
            for name in names
        ]

    def register_step(self) -> list[Command]:
        return []
