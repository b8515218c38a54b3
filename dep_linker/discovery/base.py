"""Abstract base manifest reader."""

from __future__ import annotations

import abc
import logging
from pathlib import Path

from dep_linker.models import Module

logger = logging.getLogger(__name__)


class ManifestReadError(Exception):
    """A project directory's manifest is missing or unparsable."""

    def __init__(self, directory: Path, reason: str):
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f"Unable to read manifest in {self.directory}: {reason}")


class BaseManifestReader(abc.ABC):
    """Base class for package manifest readers."""

    manifest_name: str

    @abc.abstractmethod
    def parse(self, manifest_path: Path) -> tuple[str, list[str]]:
        """Parse a manifest file. Returns (package name, dependency names)."""

    def read(self, directory: Path) -> Module:
        """Read the manifest of a single project directory."""
        directory = Path(directory)
        manifest_path = directory / self.manifest_name
        if not manifest_path.is_file():
            raise ManifestReadError(directory, f"no {self.manifest_name}")
        name, dependencies = self.parse(manifest_path)
        return Module(
            name=name,
            path=directory,
            dependencies=tuple(dict.fromkeys(dependencies)),
        )

    def list_project_directories(self, root: Path) -> list[Path]:
        """First-level child directories of root that hold a manifest, sorted by name."""
        root = Path(root)
        directories = []
        for child in sorted(root.iterdir(), key=lambda p: p.name):
            try:
                if child.is_dir() and (child / self.manifest_name).is_file():
                    directories.append(child)
            except OSError as e:
                logger.warning("Skipping %s: %s", child, e)
        return directories
