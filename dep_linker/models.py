"""Data models for the dep-linker pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

from dep_linker.commands import Command


class LinkStrategyKind(enum.Enum):
    NPM_LINK = "npm-link"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class Module:
    """A locally checked-out package found by discovery."""
    name: str
    path: Path
    dependencies: tuple[str, ...] = ()  # runtime first, then dev; declaration order


@dataclass
class LinkerConfig:
    """Configuration for one discovery/resolution/execution run."""
    root_dir: Path | None = None
    strategy: LinkStrategyKind = LinkStrategyKind.NPM_LINK
    dry_run: bool = False
    verbose: bool = False
    force: bool = False
    log_level: str = "info"
    log_json: bool = False
    retries: int = 3
    package_manager: str = "npm"
    link_dir: str = "node_modules"
    manifest_name: str = "package.json"
    workers: int = 4

    def __post_init__(self):
        if self.root_dir is None:
            self.root_dir = Path(os.getenv("DEPLINK_ROOT") or ".")
        self.root_dir = Path(self.root_dir)
        if self.retries < 1:
            raise ValueError(f"retries must be at least 1, got {self.retries}")


@dataclass
class LinkResult:
    """Result of a planning or linking run."""
    modules: dict[str, Module] = field(default_factory=dict)
    steps: list = field(default_factory=list)  # list[ResolutionStep]
    commands: list[Command] = field(default_factory=list)
    executed: bool = False

    @property
    def order(self) -> list[str]:
        """Module names in the order they were resolved."""
        return [name for step in self.steps for name in step.names]
