"""
rdsync session lifecycle.

Drives the engine's session commands. The engine owns all session state;
this controller only issues create and terminate commands against it and
never tracks whether a session exists.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from pathlib import Path

from rdsync.core.config import Settings
from rdsync.core.exceptions import SessionCreateError
from rdsync.core.logging import get_logger
from rdsync.core.models import Target
from rdsync.engine.runner import CommandOutcome, CommandResult, run_command
from rdsync.sync.identity import session_key, session_name

logger = get_logger(__name__)

CommandRunner = Callable[[list[str]], CommandResult]


class CommandPolicy(Enum):
    """How a failed engine command is handled."""

    PROPAGATE = auto()  # raise
    BEST_EFFORT = auto()  # log and continue


class SessionController:
    """Creates and tears down the engine session for one local/remote pairing."""

    def __init__(
        self,
        settings: Settings,
        target: Target,
        local_path: Path,
        remote_path: str,
        runner: CommandRunner = run_command,
    ) -> None:
        self.settings = settings
        self.target = target
        self.local_path = local_path
        self.remote_path = remote_path
        self._runner = runner

    @property
    def session_key(self) -> str:
        return session_key(self.remote_path, self.target.name, self.target.namespace)

    @property
    def session_name(self) -> str:
        return session_name(self.remote_path, self.target.name, self.target.namespace)

    def start_session(self) -> CommandResult:
        """Create the sync session. Raises SessionCreateError on failure."""
        binary_path = self.settings.get_binary_path()
        config_path = self.settings.get_config_file_path()

        command = [
            str(binary_path),
            "sync",
            "create",
            "-n",
            self.session_name,
            "--no-global-configuration",
            "-c",
            str(config_path),
            str(self.local_path),
            self.target.remote_endpoint(self.remote_path),
        ]
        return self._execute(command, CommandPolicy.PROPAGATE)

    def terminate_session(self) -> CommandResult:
        """Terminate the sync session. Failures, including an unknown session, are ignored."""
        binary_path = self.settings.get_binary_path()
        command = [str(binary_path), "sync", "terminate", self.session_name]
        return self._execute(command, CommandPolicy.BEST_EFFORT)

    def terminate_daemon(self) -> CommandResult:
        """Stop the engine daemon shared by all sessions. Failures are ignored."""
        binary_path = self.settings.get_binary_path()
        command = [str(binary_path), "daemon", "stop"]
        return self._execute(command, CommandPolicy.BEST_EFFORT)

    def _execute(self, command: list[str], policy: CommandPolicy) -> CommandResult:
        result = self._runner(command)
        outcome = result.outcome

        if outcome is CommandOutcome.SUCCEEDED:
            logger.info("Engine command succeeded", command=command[1:], session=self.session_name)
            return result

        if policy is CommandPolicy.PROPAGATE:
            output = result.output if result.spawn_error is None else result.spawn_error
            raise SessionCreateError(command, result.returncode, output)

        logger.warning(
            "Ignoring engine command failure",
            command=command[1:],
            outcome=outcome.name,
            returncode=result.returncode,
            output=(result.spawn_error or result.output)[:500],
        )
        return result
