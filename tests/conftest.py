"""
Pytest configuration and fixtures for rdsync tests.
"""

import io
import logging
import os
import sys
import tarfile
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rdsync.core import logging as rdsync_logging  # noqa: E402
from rdsync.core.config import Settings  # noqa: E402
from rdsync.engine.runner import CommandResult  # noqa: E402


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings with the workspace placed in a temporary directory."""
    return Settings(workspace_directory=temp_dir / "workspace")


@pytest.fixture
def default_umask() -> Generator[None, None, None]:
    """Run the test under the common 022 umask."""
    previous = os.umask(0o022)
    yield
    os.umask(previous)


def build_tar_gz(entries: list[tuple[str, bytes, int]]) -> bytes:
    """Build a .tar.gz archive from (name, content, mode) triples, in order."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content, mode in entries:
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            info.mode = mode
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


ENGINE_BYTES = b"\x7fELF fake mutagen engine"

RELEASE_ENTRIES = [
    ("README", b"read me\n", 0o644),
    ("mutagen", ENGINE_BYTES, 0o755),
    ("LICENSE", b"license text\n", 0o644),
]


@pytest.fixture
def release_archive() -> bytes:
    """An engine release archive with README, mutagen and LICENSE entries."""
    return build_tar_gz(RELEASE_ENTRIES)


class FakeRunner:
    """Command runner that records commands and returns canned results."""

    def __init__(self, returncode: int = 0, output: str = "", spawn_error: str | None = None) -> None:
        self.returncode = returncode
        self.output = output
        self.spawn_error = spawn_error
        self.commands: list[list[str]] = []

    def __call__(self, command: list[str]) -> CommandResult:
        self.commands.append(command)
        return CommandResult(
            returncode=self.returncode,
            output=self.output,
            command=command,
            spawn_error=self.spawn_error,
        )


@pytest.fixture
def archive_factory() -> Callable[[list[tuple[str, bytes, int]]], bytes]:
    return build_tar_gz


@pytest.fixture
def engine_bytes() -> bytes:
    return ENGINE_BYTES


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    return FakeRunner(returncode=1, output="Error: daemon connection refused")


@pytest.fixture
def installed_binary(settings: Settings) -> Path:
    """Place a non-empty engine binary in the workspace."""
    path = settings.get_binary_path()
    path.write_bytes(ENGINE_BYTES)
    path.chmod(0o755)
    return path


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging so each test starts clean."""
    yield
    root = logging.getLogger()
    for handler in rdsync_logging._handlers:
        root.removeHandler(handler)
        handler.close()
    rdsync_logging._handlers = []
    rdsync_logging._active_config = None


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")

