"""
rdsync CLI Module.

Provides command-line interface for rdsync operations.
"""

from rdsync.cli.main import main, cli

__all__ = ["main", "cli"]
