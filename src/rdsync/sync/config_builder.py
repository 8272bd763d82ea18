"""
Engine configuration file generation.

Builds the project configuration handed to ``sync create`` and writes it to
the workspace as YAML. The file is regenerated from the current policy on
every run and never merged with a previous version.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from rdsync.core.config import Settings, SyncPolicyConfig
from rdsync.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_MODE = 0o644


class Ignore(BaseModel):
    vcs: bool | None = None
    paths: list[str] = Field(default_factory=list)


class SyncDefaults(BaseModel):
    mode: str | None = None
    ignore: Ignore | None = None


class Sync(BaseModel):
    defaults: SyncDefaults | None = None


class Configuration(BaseModel):
    """Top level of an engine project configuration file."""

    sync: Sync | None = None

    def to_yaml(self) -> str:
        data = self.model_dump(mode="json", exclude_none=True)
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def build_configuration(policy: SyncPolicyConfig) -> Configuration:
    """Translate the sync policy into an engine configuration."""
    ignore = Ignore(vcs=policy.ignore_vcs, paths=list(policy.ignore_paths))
    defaults = SyncDefaults(mode=policy.mode, ignore=ignore)
    return Configuration(sync=Sync(defaults=defaults))


def write_config(settings: Settings) -> Path:
    """Write the engine configuration file, replacing any existing one."""
    path = settings.get_config_file_path()
    data = build_configuration(settings.policy).to_yaml().encode("utf-8")

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)

    logger.debug("Wrote engine configuration", path=str(path), mode=settings.policy.mode)
    return path
