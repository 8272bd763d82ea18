"""
rdsync exception hierarchy.
"""

from __future__ import annotations


class RdSyncError(Exception):
    """Base class for all rdsync errors."""


class WorkspaceError(RdSyncError):
    """The workspace directory could not be resolved."""


class ProvisioningError(RdSyncError):
    """The engine binary could not be installed."""


class DownloadError(ProvisioningError):
    """Fetching the engine archive failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.reason = reason


class EntryNotFoundError(ProvisioningError):
    """The wanted entry is not present in the archive."""

    def __init__(self, archive_path: str, entry_name: str) -> None:
        super().__init__(f"Entry '{entry_name}' not found in {archive_path}")
        self.archive_path = archive_path
        self.entry_name = entry_name


class SessionCreateError(RdSyncError):
    """The engine refused or failed to create a sync session."""

    def __init__(self, command: list[str], returncode: int, output: str) -> None:
        message = f"Session create failed (rc={returncode})"
        if output.strip():
            message = f"{message}: {output.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output
