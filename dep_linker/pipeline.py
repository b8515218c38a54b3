"""Pipeline orchestrator: discover -> build graph -> resolve -> execute."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from dep_linker.commands import Command
from dep_linker.models import LinkerConfig, LinkResult, Module
from dep_linker.discovery import discover_modules
from dep_linker.analysis.dependency_graph import DependencyGraphBuilder
from dep_linker.analysis.resolver import DependencyResolver
from dep_linker.executor import CommandExecutor
from dep_linker.strategy import get_strategy

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def run_discovery(config: LinkerConfig, progress: ProgressCallback | None = None) -> dict[str, Module]:
    """Stage 1: discover the modules below the configured root."""
    if progress:
        progress("Discovering", 0, 1)
    modules = discover_modules(config.root_dir.resolve(), config)
    if progress:
        progress("Discovering", 1, 1)
    return modules


def run_plan(
    config: LinkerConfig,
    custom_commands: Sequence[str | Command] | None = None,
    progress: ProgressCallback | None = None,
) -> LinkResult:
    """Discover and resolve without executing anything."""
    modules = run_discovery(config, progress)

    if progress:
        progress("Resolving", 0, len(modules))
    builder = DependencyGraphBuilder()
    graph = builder.build(modules)
    resolver = DependencyResolver(get_strategy(config.strategy, config), config, builder)
    steps = resolver.resolve_steps(graph, modules, custom_commands)
    if progress:
        progress("Resolving", len(modules), len(modules))

    commands = [cmd for step in steps for cmd in step.commands]
    logger.debug("Commands: %s", [str(c) for c in commands])
    return LinkResult(modules=modules, steps=steps, commands=commands)


def run_link(
    config: LinkerConfig,
    custom_commands: Sequence[str | Command] | None = None,
    progress: ProgressCallback | None = None,
) -> LinkResult:
    """Run the full pipeline. In dry-run mode the commands are only logged."""
    result = run_plan(config, custom_commands, progress)

    if progress:
        progress("Linking", 0, len(result.commands))
    CommandExecutor(config).execute(config.root_dir, result.commands)
    result.executed = not config.dry_run
    if progress:
        progress("Linking", len(result.commands), len(result.commands))

    return result
