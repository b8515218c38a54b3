"""Click CLI with link and scan subcommands."""

from __future__ import annotations

from pathlib import Path

import click

from dep_linker import __version__
from dep_linker.models import LinkerConfig, LinkStrategyKind
from dep_linker.log import setup_logging
from dep_linker.discovery import ManifestReadError
from dep_linker.analysis.dependency_graph import DependencyGraphBuilder
from dep_linker.analysis.resolver import UnresolvedDependencyError
from dep_linker.executor import CommandExecutionError
from dep_linker.pipeline import run_discovery, run_link

_WORKING_DIR = click.Path(file_okay=False, path_type=Path)


@click.group()
@click.version_option(version=__version__)
def cli():
    """dep-linker: link locally checked-out packages in dependency order."""


@cli.command()
@click.argument("working_dir", type=_WORKING_DIR, default=".", envvar="DEPLINK_ROOT")
@click.option("--symlinks", "-s", is_flag=True, help="Use symlinks instead of npm link to connect the dependencies.")
@click.option("--dry-run", "-d", is_flag=True, help="Print the commands without linking anything.")
@click.option("--verbose", "-v", is_flag=True, help="Show the output of executed commands.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing link targets.")
@click.option("--log-json", is_flag=True, help="Log as JSON lines.")
@click.option("--exec", "-x", "custom_commands", multiple=True, metavar="CMD",
              help="Command to run after each linked module (repeatable).")
@click.option("--retries", type=click.IntRange(min=1), default=3, show_default=True,
              help="Passes without progress before giving up.")
def link(
    working_dir: Path,
    symlinks: bool,
    dry_run: bool,
    verbose: bool,
    debug: bool,
    force: bool,
    log_json: bool,
    custom_commands: tuple[str, ...],
    retries: int,
):
    """Link the packages found in WORKING_DIR."""
    config = LinkerConfig(
        root_dir=working_dir,
        strategy=LinkStrategyKind.SYMLINK if symlinks else LinkStrategyKind.NPM_LINK,
        dry_run=dry_run,
        verbose=verbose,
        force=force,
        log_level="debug" if debug else "info",
        log_json=log_json,
        retries=retries,
    )
    setup_logging(config.log_level, structured=config.log_json)

    if symlinks:
        click.echo("Using symlinks to connect dependencies.")
    else:
        click.echo('Using "npm link" to connect dependencies.')
    if dry_run:
        click.echo("Executing dryrun.")

    try:
        result = run_link(config, custom_commands=list(custom_commands))
    except (UnresolvedDependencyError, ManifestReadError, CommandExecutionError, OSError) as e:
        raise click.ClickException(str(e))

    if dry_run:
        click.echo(f"\nPlanned {len(result.commands)} command(s):")
        for command in result.commands:
            click.echo(f"  {command}")
        return

    click.echo(f"\nDone! Linked {len(result.modules)} module(s):")
    for step in result.steps:
        label = " <-> ".join(step.names)
        suffix = click.style(" (cyclic)", fg="yellow") if step.is_cyclic_pair else ""
        click.echo(f"  {label}{suffix}")


@cli.command()
@click.argument("working_dir", type=_WORKING_DIR, default=".", envvar="DEPLINK_ROOT")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def scan(working_dir: Path, debug: bool):
    """List the packages found in WORKING_DIR and how they depend on each other.

    Cycles longer than two packages are listed on a best-effort basis: a cycle
    sharing packages with one already listed may be left out.
    """
    config = LinkerConfig(root_dir=working_dir, log_level="debug" if debug else "warning")
    setup_logging(config.log_level)

    try:
        modules = run_discovery(config)
    except OSError as e:
        raise click.ClickException(str(e))

    if not modules:
        click.echo("No packages found.")
        return

    builder = DependencyGraphBuilder()
    graph = builder.build(modules)

    click.echo(f"\nFound {len(modules)} package(s):\n")
    for name, node in graph.nodes.items():
        header = click.style(name, fg="cyan")
        if node.is_cyclic:
            header += click.style("  cyclic", fg="yellow")
        click.echo(header)
        click.echo(f"  path:          {modules[name].path}")
        click.echo(f"  depends on:    {', '.join(node.depends_on) or '-'}")
        click.echo(f"  referenced by: {', '.join(node.referenced_by) or '-'}")

    longer = [c for c in builder.detect_cycles(graph) if len(c) > 3]
    if longer:
        click.echo(click.style("\nCycles that cannot be linked:", fg="red"))
        for cycle in longer:
            click.echo(f"  {' -> '.join(cycle)}")


if __name__ == "__main__":
    cli()
