"""Sequential command executor with dry-run support."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterable

from dep_linker.commands import Command, CommandKind
from dep_linker.models import LinkerConfig

logger = logging.getLogger(__name__)


class CommandExecutionError(Exception):
    """A command in the stream failed; the rest of the stream was not run."""

    def __init__(self, command: Command, returncode: int | None = None, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        message = f"Command failed: {command}"
        if returncode is not None:
            message += f" (exit status {returncode})"
        if output:
            message += f"\n{output}"
        super().__init__(message)


class CommandExecutor:
    """Run a command stream against a single working-directory cursor.

    ``cd`` commands move the cursor; the process working directory itself is
    never changed, so it is the same after the run whether it succeeded or not.
    """

    def __init__(self, config: LinkerConfig | None = None):
        self.config = config or LinkerConfig()

    def execute(
        self,
        working_dir: Path | str,
        commands: Iterable[Command],
        dry_run: bool | None = None,
    ) -> None:
        dry_run = self.config.dry_run if dry_run is None else dry_run
        cwd = Path(working_dir).resolve()
        logger.debug("workingDir: %s", cwd)

        for command in commands:
            if dry_run:
                logger.info("Cmd: %s", command)
                continue

            logger.debug("Executing cmd: %s (cwd=%s)", command, cwd)
            if command.kind is CommandKind.CHANGE_DIR:
                cwd = self._change_dir(cwd, command)
            elif command.kind is CommandKind.SYMLINK:
                self._symlink(cwd, command)
            else:
                self._run_shell(cwd, command)

    def _change_dir(self, cwd: Path, command: Command) -> Path:
        target = (cwd / command.args[0]).resolve()
        if not target.is_dir():
            raise CommandExecutionError(command, output=f"No such directory: {target}")
        return target

    def _symlink(self, cwd: Path, command: Command) -> None:
        source = (cwd / command.args[0]).resolve()
        dest = cwd / command.args[1]
        try:
            # Link-target directory (node_modules, or node_modules/@scope)
            dest.parent.mkdir(parents=True, exist_ok=True)

            if dest.is_symlink() or dest.exists():
                if dest.is_symlink() and Path(os.readlink(dest)) == source:
                    logger.debug("Link %s already points to %s", dest, source)
                    return
                if not self.config.force:
                    raise CommandExecutionError(
                        command, output=f"{dest} already exists (use force to overwrite)",
                    )
                self._remove(dest)

            dest.symlink_to(source, target_is_directory=True)
        except OSError as e:
            raise CommandExecutionError(command, output=str(e)) from e

    @staticmethod
    def _remove(path: Path) -> None:
        if path.is_symlink() or path.is_file():
            path.unlink()
        else:
            shutil.rmtree(path)

    def _run_shell(self, cwd: Path, command: Command) -> None:
        capture = not self.config.verbose
        try:
            res = subprocess.run(
                command.args[0], shell=True, cwd=cwd,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.STDOUT if capture else None,
                text=True,
            )
        except OSError as e:
            raise CommandExecutionError(command, output=str(e)) from e

        if res.returncode != 0:
            raise CommandExecutionError(command, res.returncode, (res.stdout or "").strip())
        if capture and res.stdout:
            logger.debug("%s", res.stdout.strip())
