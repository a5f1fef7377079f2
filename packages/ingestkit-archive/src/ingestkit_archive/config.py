"""Configuration model for the ingestkit-archive pipeline.

Provides ``ArchiveProcessorConfig`` with all tunable parameters and sensible
defaults.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.

The accepted member suffix is not configurable: it is the fixed
constant :data:`ingestkit_archive.selector.ACCEPTED_SUFFIX`.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel, Field


class ArchiveProcessorConfig(BaseModel):
    """All tunable parameters with sensible defaults for archive ingestion."""

    # --- Identity ---
    parser_version: str = "ingestkit_archive:1.0.0"
    tenant_id: str | None = None

    # --- Security / Resource Limits ---
    max_archive_size_mb: int = Field(default=100, gt=0)
    max_entry_size_mb: int = Field(default=50, gt=0)
    large_archive_warning_mb: int = Field(default=10, gt=0)

    # --- Logging ---
    log_entry_failures: bool = True

    @classmethod
    def from_file(cls, path: str) -> ArchiveProcessorConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Any keys present in the file override the
        corresponding defaults; keys not present retain their defaults.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        ValueError
            If the file extension is not recognized.
        ImportError
            If a YAML file is provided but ``pyyaml`` is not installed.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:
                raise ImportError(
                    "pyyaml is required to load YAML config files. "
                    "Install it with: pip install pyyaml"
                ) from exc
            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
