"""
Tests for rdsync.core.config module.
"""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from rdsync.core.config import (
    EngineConfig,
    LoggingConfig,
    Settings,
    SyncPolicyConfig,
    load_settings,
)
from rdsync.core.exceptions import WorkspaceError


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self) -> None:
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.file_enabled is False
        assert config.console_enabled is True
        assert config.json_format is False

    def test_custom_values(self) -> None:
        config = LoggingConfig(level="DEBUG", json_format=True)
        assert config.level == "DEBUG"
        assert config.json_format is True

    def test_path_expansion(self) -> None:
        config = LoggingConfig(log_directory="~/logs")
        assert "~" not in str(config.log_directory)


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_default_values(self) -> None:
        config = EngineConfig()
        assert config.version == "v0.15.3"
        assert config.binary_filename == "mutagen"
        assert config.config_filename == "mutagen.yaml"
        assert config.download_timeout_seconds == 60.0

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(download_timeout_seconds=0)


class TestSyncPolicyConfig:
    """Tests for SyncPolicyConfig."""

    def test_default_values(self) -> None:
        config = SyncPolicyConfig()
        assert config.mode == "one-way-replica"
        assert config.ignore_vcs is True
        assert config.ignore_paths == ["node_modules", "vendor"]

    def test_rejects_unknown_mode(self) -> None:
        with pytest.raises(ValidationError):
            SyncPolicyConfig(mode="mirror-everything")


class TestSettings:
    """Tests for Settings."""

    def test_default_config(self) -> None:
        config = Settings()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.engine, EngineConfig)
        assert isinstance(config.policy, SyncPolicyConfig)
        assert config.workspace_directory.name == "remote-dev"

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"

            original = Settings(
                engine=EngineConfig(version="v0.18.0"),
                policy=SyncPolicyConfig(ignore_paths=["dist"]),
                workspace_directory=Path(tmpdir) / "ws",
            )
            original.save(config_path)

            loaded = Settings.load(config_path)

            assert loaded.engine.version == "v0.18.0"
            assert loaded.policy.ignore_paths == ["dist"]
            assert loaded.workspace_directory == Path(tmpdir).resolve() / "ws"

    def test_load_nonexistent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "nonexistent.json"
            config = Settings.load(config_path)
            assert config.engine.version == "v0.15.3"

    def test_load_settings(self, temp_dir: Path) -> None:
        config_path = temp_dir / "config.json"
        Settings(logging=LoggingConfig(file_enabled=True, log_directory=temp_dir / "logs")).save(
            config_path
        )
        settings = load_settings(config_path)
        assert settings.logging.log_directory.is_dir()

    def test_workspace_paths(self, temp_dir: Path) -> None:
        settings = Settings(workspace_directory=temp_dir / "ws")
        assert settings.get_binary_path() == (temp_dir / "ws" / "mutagen").resolve()
        assert settings.get_config_file_path() == (temp_dir / "ws" / "mutagen.yaml").resolve()
        assert (temp_dir / "ws").is_dir()

    def test_workspace_error(self, temp_dir: Path) -> None:
        blocker = temp_dir / "file"
        blocker.write_text("x")
        settings = Settings(workspace_directory=blocker / "ws")
        with pytest.raises(WorkspaceError):
            settings.get_workspace_dir()


class TestModuleSurface:
    """Tests for the public helpers exposed by rdsync.core.config."""

    def test_single_settings_entry_point(self) -> None:
        import rdsync.core.config as config_module

        assert callable(config_module.load_settings)
        assert not hasattr(config_module, "get_default_settings")
