"""
rdsync sync module.

Engine configuration, session naming and session lifecycle.
"""

from rdsync.sync.config_builder import build_configuration, write_config
from rdsync.sync.identity import session_key, session_name
from rdsync.sync.remote import ProgressReporter, RemoteSync
from rdsync.sync.session import CommandPolicy, SessionController

__all__ = [
    "build_configuration",
    "write_config",
    "session_key",
    "session_name",
    "ProgressReporter",
    "RemoteSync",
    "CommandPolicy",
    "SessionController",
]
