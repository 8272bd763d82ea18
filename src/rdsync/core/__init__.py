"""
rdsync Core - Settings, logging, errors and data models.
"""

from rdsync.core.config import Settings, load_settings
from rdsync.core.exceptions import (
    DownloadError,
    EntryNotFoundError,
    ProvisioningError,
    RdSyncError,
    SessionCreateError,
    WorkspaceError,
)
from rdsync.core.logging import get_logger, setup_logging
from rdsync.core.models import BinaryArtifact, Target

__all__ = [
    "Settings",
    "load_settings",
    "RdSyncError",
    "WorkspaceError",
    "ProvisioningError",
    "DownloadError",
    "EntryNotFoundError",
    "SessionCreateError",
    "get_logger",
    "setup_logging",
    "BinaryArtifact",
    "Target",
]
