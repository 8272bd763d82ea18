"""
rdsync engine module.

Installs the sync engine binary and runs its commands.
"""

from rdsync.engine.archive import extract_entry
from rdsync.engine.provisioner import ensure_binary, resolve_artifact
from rdsync.engine.runner import CommandOutcome, CommandResult, run_command

__all__ = [
    "extract_entry",
    "ensure_binary",
    "resolve_artifact",
    "CommandOutcome",
    "CommandResult",
    "run_command",
]
