"""
rdsync engine command runner.

Runs the engine binary as a subprocess and captures its combined output.
"""

from __future__ import annotations

import subprocess
import time
from enum import Enum, auto

from rdsync.core.logging import get_logger

logger = get_logger(__name__)

# Engine messages for selecting a session that does not exist.
_NOT_FOUND_MARKERS = (
    "unable to locate requested sessions",
    "no matching sessions",
    "session not found",
)


class CommandOutcome(Enum):
    """Classification of a finished engine command."""

    SUCCEEDED = auto()
    NOT_FOUND = auto()
    FAILED = auto()


class CommandResult:
    """Result of an engine command execution."""

    def __init__(
        self,
        returncode: int,
        output: str,
        command: list[str],
        duration_seconds: float = 0.0,
        spawn_error: str | None = None,
    ) -> None:
        self.returncode = returncode
        self.output = output
        self.command = command
        self.duration_seconds = duration_seconds
        self.spawn_error = spawn_error

    @property
    def success(self) -> bool:
        return self.returncode == 0 and self.spawn_error is None

    @property
    def outcome(self) -> CommandOutcome:
        if self.success:
            return CommandOutcome.SUCCEEDED
        lowered = self.output.lower()
        if any(marker in lowered for marker in _NOT_FOUND_MARKERS):
            return CommandOutcome.NOT_FOUND
        return CommandOutcome.FAILED

    def __repr__(self) -> str:
        cmd = " ".join(self.command)
        return f"CommandResult(rc={self.returncode}, cmd='{cmd[:50]}...')"


def run_command(command: list[str]) -> CommandResult:
    """
    Run a command to completion with stdout and stderr merged.

    Blocks until the process exits. A process that cannot be started is
    reported as a result with returncode -1 rather than raised.
    """
    logger.debug("Running command", command=command)
    start_time = time.time()

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        return CommandResult(
            returncode=-1,
            output="",
            command=command,
            duration_seconds=time.time() - start_time,
            spawn_error=str(e),
        )

    return CommandResult(
        returncode=result.returncode,
        output=result.stdout or "",
        command=command,
        duration_seconds=time.time() - start_time,
    )
