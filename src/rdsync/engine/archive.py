"""
Single-entry extraction from gzip-compressed tar archives.
"""

from __future__ import annotations

import os
import shutil
import tarfile
from pathlib import Path

from rdsync.core.exceptions import EntryNotFoundError
from rdsync.core.logging import get_logger

logger = get_logger(__name__)


def extract_entry(
    archive_path: Path,
    destination: Path,
    entry_name: str,
    strict: bool = False,
) -> bool:
    """
    Copy one named entry out of a .tar.gz archive.

    Entries are read sequentially and the scan stops at the first exact
    name match, so later entries are never read. The destination is
    truncated and created with the entry's recorded permission bits.

    Returns True when the entry was written. When the archive holds no such
    entry, returns False and writes nothing, or raises EntryNotFoundError
    if ``strict`` is set.
    """
    with tarfile.open(archive_path, mode="r|gz") as tar:
        for member in tar:
            if member.name != entry_name:
                continue

            source = tar.extractfile(member)
            if source is None:
                # Directories and links carry no content to copy.
                break

            mode = member.mode & 0o7777
            fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with source, os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(source, out)

            logger.debug(
                "Extracted archive entry",
                archive=str(archive_path),
                entry=entry_name,
                destination=str(destination),
                mode=oct(mode),
            )
            return True

    if strict:
        raise EntryNotFoundError(str(archive_path), entry_name)

    logger.warning("Archive entry not found", archive=str(archive_path), entry=entry_name)
    return False
