"""
rdsync data models.

Defines the remote target descriptor and the engine artifact description.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Target:
    """Remote development environment addressed by a sync session."""

    name: str
    namespace: str
    ssh_hostname: str

    def remote_endpoint(self, remote_path: str) -> str:
        """Engine endpoint (`host:path`) for a path on this target."""
        return f"{self.ssh_hostname}:{remote_path}"


@dataclass(frozen=True)
class BinaryArtifact:
    """A pinned, platform-specific build of the synchronization engine."""

    version: str
    os: str
    arch: str
    archive_filename: str
    download_url: str
    install_path: Path

    @property
    def archive_path(self) -> Path:
        """Download location, next to the installed binary."""
        return self.install_path.parent / self.archive_filename

    def is_installed(self) -> bool:
        """
        Check whether a usable binary is already in place.

        Only a missing path counts as "not installed"; any other stat
        failure propagates.
        """
        try:
            stats = self.install_path.stat()
        except FileNotFoundError:
            return False
        return stats.st_size > 0 and not stat.S_ISDIR(stats.st_mode)
