"""Manifest discovery over a directory of checked-out packages."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from dep_linker.models import LinkerConfig, Module
from dep_linker.discovery.base import BaseManifestReader, ManifestReadError
from dep_linker.discovery.package_json import PackageJsonReader, PackageManifest

logger = logging.getLogger(__name__)


def _get_reader(config: LinkerConfig | None = None) -> BaseManifestReader:
    if config is None:
        return PackageJsonReader()
    return PackageJsonReader(manifest_name=config.manifest_name)


def list_project_directories(root: Path, config: LinkerConfig | None = None) -> list[Path]:
    """Child directories of root that contain a manifest, in discovery order."""
    return _get_reader(config).list_project_directories(Path(root))


def read_manifest(directory: Path, config: LinkerConfig | None = None) -> Module:
    """Read one project directory. Raises ManifestReadError."""
    return _get_reader(config).read(Path(directory))


def discover_modules(root: Path, config: LinkerConfig | None = None) -> dict[str, Module]:
    """Discover all modules below root.

    Directories whose manifest cannot be read are skipped with a warning.
    The returned mapping keeps the sorted directory order.
    """
    reader = _get_reader(config)
    directories = reader.list_project_directories(Path(root))
    logger.debug("Discover from directories: %s", [str(d) for d in directories])

    def _read(directory: Path) -> Module | ManifestReadError:
        try:
            return reader.read(directory)
        except ManifestReadError as e:
            return e

    workers = config.workers if config else 4
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        results = list(pool.map(_read, directories))

    modules: dict[str, Module] = {}
    for result in results:
        if isinstance(result, ManifestReadError):
            logger.warning("Skipping %s: %s", result.directory, result.reason)
            continue
        if result.name in modules:
            logger.warning(
                "Duplicate package name %r in %s, keeping %s",
                result.name, result.path, modules[result.name].path,
            )
            continue
        modules[result.name] = result

    logger.debug("Discovered modules: %s", list(modules))
    return modules


__all__ = [
    "BaseManifestReader",
    "ManifestReadError",
    "PackageJsonReader",
    "PackageManifest",
    "discover_modules",
    "list_project_directories",
    "read_manifest",
]
