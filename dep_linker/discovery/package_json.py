"""package.json reader."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dep_linker.discovery.base import BaseManifestReader, ManifestReadError


class PackageManifest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(min_length=1)
    dependencies: dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: dict[str, Any] = Field(default_factory=dict, alias="devDependencies")

    @field_validator("dependencies", "dev_dependencies", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class PackageJsonReader(BaseManifestReader):
    manifest_name = "package.json"

    def __init__(self, manifest_name: str | None = None):
        if manifest_name:
            self.manifest_name = manifest_name

    def parse(self, manifest_path: Path) -> tuple[str, list[str]]:
        try:
            text = manifest_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestReadError(manifest_path.parent, str(e))

        try:
            manifest = PackageManifest.model_validate_json(text)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'manifest'}: {err['msg']}"
                for err in e.errors()
            )
            raise ManifestReadError(manifest_path.parent, errors)

        # Runtime dependencies first, dev dependencies after
        names = list(manifest.dependencies) + list(manifest.dev_dependencies)
        return manifest.name, names
