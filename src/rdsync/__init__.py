"""
rdsync - Remote development file synchronization.

Provisions the Mutagen sync engine, generates its configuration and
manages the sync session between a local workspace and a remote
development environment.
"""

__version__ = "1.0.0"
__author__ = "rdsync Team"

from rdsync.core.config import Settings
from rdsync.sync.remote import RemoteSync

__all__ = ["Settings", "RemoteSync", "__version__"]
