"""
rdsync remote development flow.

Ties provisioning, configuration and the session controller together in
the order they must run: install the engine, write its configuration, then
create the session. Teardown terminates the session before stopping the
daemon.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Protocol

import httpx

from rdsync.core.config import Settings
from rdsync.core.logging import get_logger
from rdsync.core.models import Target
from rdsync.engine.provisioner import ensure_binary
from rdsync.engine.runner import run_command
from rdsync.sync.config_builder import write_config
from rdsync.sync.session import CommandRunner, SessionController

logger = get_logger(__name__)


class ProgressReporter(Protocol):
    """Indeterminate progress indicator shown around long steps."""

    def start(self, message: str) -> None: ...

    def stop(self) -> None: ...


class NullProgress:
    def start(self, message: str) -> None:
        pass

    def stop(self) -> None:
        pass


class RemoteSync:
    """Keeps a local directory mirrored into a remote development target."""

    def __init__(
        self,
        settings: Settings,
        target: Target,
        local_path: Path,
        remote_path: str,
        progress: ProgressReporter | None = None,
        runner: CommandRunner = run_command,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.progress = progress or NullProgress()
        self.controller = SessionController(settings, target, local_path, remote_path, runner)
        self._http_client = http_client

    @property
    def session_name(self) -> str:
        return self.controller.session_name

    @contextmanager
    def _step(self, message: str) -> Iterator[None]:
        self.progress.start(message)
        try:
            yield
        finally:
            self.progress.stop()

    def ensure_engine(self) -> tuple[Path, Path]:
        """Install the engine if needed and regenerate its configuration file."""
        with self._step(" Setup Mutagen"):
            binary_path = ensure_binary(self.settings, http_client=self._http_client)
            config_path = write_config(self.settings)
        return binary_path, config_path

    def start(self) -> None:
        with self._step(" Start Mutagen Session"):
            self.controller.start_session()
        logger.info("Sync session started", session=self.session_name)

    def up(self) -> None:
        self.ensure_engine()
        self.start()

    def down(self) -> None:
        """Best-effort teardown; never raises for engine command failures."""
        self.controller.terminate_session()
        self.controller.terminate_daemon()
        logger.info("Sync session stopped", session=self.session_name)
