"""
Deterministic session naming.

The session name is the only link between a local/remote pairing and the
engine session serving it. Changing any constant here renames every future
session and orphans the existing ones.
"""

from __future__ import annotations

import hashlib

SESSION_NAME_PREFIX = "rd-"
SESSION_KEY_LENGTH = 16
SESSION_KEY_SEPARATOR = "-"


def session_key(remote_path: str, deployment_name: str, namespace: str) -> str:
    """MD5 hex digest of ``{remote_path}-{deployment_name}-{namespace}``."""
    plaintext = SESSION_KEY_SEPARATOR.join((remote_path, deployment_name, namespace))
    return hashlib.md5(plaintext.encode("utf-8"), usedforsecurity=False).hexdigest()


def session_name(remote_path: str, deployment_name: str, namespace: str) -> str:
    key = session_key(remote_path, deployment_name, namespace)
    return f"{SESSION_NAME_PREFIX}{key[:SESSION_KEY_LENGTH]}"
