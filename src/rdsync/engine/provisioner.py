"""
rdsync engine provisioning.

Makes sure a pinned build of the synchronization engine is installed in the
workspace directory, downloading and unpacking the release archive for the
current platform when it is missing.
"""

from __future__ import annotations

import platform
import time
from pathlib import Path

import httpx
import humanize

from rdsync.core.config import EngineConfig, Settings
from rdsync.core.exceptions import DownloadError
from rdsync.core.logging import OperationLogger, get_logger
from rdsync.core.models import BinaryArtifact
from rdsync.engine.archive import extract_entry

logger = get_logger(__name__)

# Release archives use Go's GOOS/GOARCH naming.
_OS_NAMES = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
}

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}


def detect_platform() -> tuple[str, str]:
    """Return the (os, arch) pair of the running host in release naming."""
    system = platform.system().lower()
    machine = platform.machine().lower()
    return _OS_NAMES.get(system, system), _ARCH_NAMES.get(machine, machine)


def archive_filename(engine: EngineConfig, os_name: str, arch: str) -> str:
    """Release archive name; embeds os, arch and version in that order."""
    return engine.archive_filename_template.format(os=os_name, arch=arch, version=engine.version)


def download_url(engine: EngineConfig, os_name: str, arch: str) -> str:
    """Release download URL for the pinned engine version."""
    return engine.download_url_template.format(
        version=engine.version,
        filename=archive_filename(engine, os_name, arch),
    )


def resolve_artifact(
    settings: Settings,
    os_name: str | None = None,
    arch: str | None = None,
) -> BinaryArtifact:
    """Describe the engine build to install for the given (or current) platform."""
    if os_name is None or arch is None:
        detected_os, detected_arch = detect_platform()
        os_name = os_name or detected_os
        arch = arch or detected_arch

    engine = settings.engine
    return BinaryArtifact(
        version=engine.version,
        os=os_name,
        arch=arch,
        archive_filename=archive_filename(engine, os_name, arch),
        download_url=download_url(engine, os_name, arch),
        install_path=settings.get_binary_path(),
    )


def download_archive(
    url: str,
    destination: Path,
    timeout: float,
    http_client: httpx.Client | None = None,
) -> int:
    """
    Stream ``url`` into ``destination`` and return the number of bytes written.

    ``timeout`` bounds the whole request, body included. Any failure is
    raised as DownloadError. The partially written file is left in place.
    """
    try:
        out = open(destination, "wb")
    except OSError as exc:
        raise DownloadError(url, str(exc)) from exc

    client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
    written = 0
    deadline = time.monotonic() + timeout
    try:
        with out, client.stream("GET", url) as response:
            response.raise_for_status()
            for chunk in response.iter_bytes():
                if time.monotonic() > deadline:
                    raise DownloadError(url, f"timed out after {timeout:g}s")
                out.write(chunk)
                written += len(chunk)
    except (httpx.HTTPError, OSError) as exc:
        raise DownloadError(url, str(exc)) from exc
    finally:
        if http_client is None:
            client.close()

    return written


def ensure_binary(
    settings: Settings,
    http_client: httpx.Client | None = None,
    os_name: str | None = None,
    arch: str | None = None,
) -> Path:
    """
    Install the engine binary unless a non-empty one is already present.

    Returns the install path. Nothing is downloaded or written when the
    binary already exists.
    """
    artifact = resolve_artifact(settings, os_name=os_name, arch=arch)

    if artifact.is_installed():
        logger.debug("Engine already installed", path=str(artifact.install_path))
        return artifact.install_path

    with OperationLogger(
        "engine provisioning",
        logger,
        version=artifact.version,
        url=artifact.download_url,
    ) as op:
        size = download_archive(
            artifact.download_url,
            artifact.archive_path,
            timeout=settings.engine.download_timeout_seconds,
            http_client=http_client,
        )
        op.update(archive_size=humanize.naturalsize(size, binary=True))

        extract_entry(
            artifact.archive_path,
            artifact.install_path,
            settings.engine.binary_filename,
        )
        artifact.archive_path.unlink()

    return artifact.install_path
