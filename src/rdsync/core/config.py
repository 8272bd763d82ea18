"""
rdsync configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from rdsync.core.exceptions import WorkspaceError

DEFAULT_HOME = Path.home() / ".rdsync"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_enabled: bool = False
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: DEFAULT_HOME / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class EngineConfig(BaseModel):
    """Configuration for the synchronization engine binary."""

    version: str = "v0.15.3"
    binary_filename: str = "mutagen"
    config_filename: str = "mutagen.yaml"
    archive_filename_template: str = "mutagen_{os}_{arch}_{version}.tar.gz"
    download_url_template: str = (
        "https://github.com/mutagen-io/mutagen/releases/download/{version}/{filename}"
    )
    download_timeout_seconds: float = Field(default=60.0, gt=0)


class SyncPolicyConfig(BaseModel):
    """Ignore and mode policy written to the engine configuration file."""

    mode: Literal["one-way-replica", "one-way-safe", "two-way-safe", "two-way-resolved"] = (
        "one-way-replica"
    )
    ignore_vcs: bool = True
    ignore_paths: list[str] = Field(default_factory=lambda: ["node_modules", "vendor"])


class Settings(BaseModel):
    """Main rdsync configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    policy: SyncPolicyConfig = Field(default_factory=SyncPolicyConfig)
    workspace_directory: Path = Field(default_factory=lambda: DEFAULT_HOME / "remote-dev")

    @field_validator("workspace_directory", mode="before")
    @classmethod
    def expand_workspace_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()

    @classmethod
    def load(cls, config_path: Path | None = None) -> Settings:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)

    def get_workspace_dir(self) -> Path:
        """
        Resolve the workspace directory, creating it when missing.

        Raises WorkspaceError if the directory cannot be created or is not
        a directory.
        """
        workspace = self.workspace_directory
        try:
            workspace.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspaceError(f"Cannot prepare workspace {workspace}: {exc}") from exc
        return workspace

    def get_binary_path(self) -> Path:
        """Install path of the engine binary."""
        return self.get_workspace_dir() / self.engine.binary_filename

    def get_config_file_path(self) -> Path:
        """Path of the generated engine configuration file."""
        return self.get_workspace_dir() / self.engine.config_filename


def load_settings(config_path: Path | None = None) -> Settings:
    """Load or create configuration."""
    settings = Settings.load(config_path)
    settings.ensure_directories()
    return settings
