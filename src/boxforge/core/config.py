"""Application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class AppConfig:
    """Runtime configuration for the API and CLI."""

    metadata_path: Path
    log_level: str = "info"
    plugins: list[str] = field(default_factory=list)
    cors_origins: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> AppConfig:
        """Create config from environment variables.

        Resolution order for the metadata directory:
        1. BOXFORGE_METADATA_PATH env var
        2. Default: {base_path}/metadata (base_path defaults to cwd)

        BOXFORGE_PLUGINS is a comma-separated list of modules that register
        meta box providers and renderers on import. BOXFORGE_CORS_ORIGINS is
        a comma-separated list of browser origins allowed to call the API;
        CORS is off when it is unset.
        """
        if base_path is None:
            base_path = Path.cwd()

        metadata_path = os.environ.get("BOXFORGE_METADATA_PATH")
        return cls(
            metadata_path=Path(metadata_path) if metadata_path else base_path / "metadata",
            log_level=os.environ.get("BOXFORGE_LOG_LEVEL", "info").lower(),
            plugins=_split_list(os.environ.get("BOXFORGE_PLUGINS", "")),
            cors_origins=_split_list(os.environ.get("BOXFORGE_CORS_ORIGINS", "")),
        )

    @property
    def screens_path(self) -> Path:
        return self.metadata_path / "screens"
