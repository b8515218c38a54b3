"""Command values emitted by the link strategies and consumed by the executor."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


class CommandKind(enum.Enum):
    CHANGE_DIR = "cd"
    SYMLINK = "ln"
    SHELL = "shell"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    args: tuple[str, ...]

    def __str__(self) -> str:
        if self.kind is CommandKind.CHANGE_DIR:
            return f"cd {self.args[0]}"
        if self.kind is CommandKind.SYMLINK:
            return f"ln -s {self.args[0]} {self.args[1]}"
        return self.args[0]


class CommandFactory:
    """Builds the commands used by the link strategies."""

    def __init__(self, package_manager: str = "npm"):
        self.package_manager = package_manager

    def cd(self, directory: Path | str) -> Command:
        return Command(CommandKind.CHANGE_DIR, (str(directory),))

    def symlink(self, source: Path | str, dest: Path | str) -> Command:
        return Command(CommandKind.SYMLINK, (str(source), str(dest)))

    def link(self, names: Iterable[str] = ()) -> Command:
        """``npm link a b`` for the given names, bare ``npm link`` to self-register."""
        names = list(names)
        if names:
            return self.shell(f"{self.package_manager} link {' '.join(names)}")
        return self.shell(f"{self.package_manager} link")

    def install(self) -> Command:
        return self.shell(f"{self.package_manager} install")

    @staticmethod
    def shell(line: str) -> Command:
        return Command(CommandKind.SHELL, (line,))
