"""
rdsync CLI Main Entry Point.

Provides the command-line interface for provisioning the sync engine and
starting or stopping remote development sync sessions.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click
import humanize
from rich.console import Console
from rich.panel import Panel
from rich.status import Status

from rdsync import __version__
from rdsync.core.config import Settings, load_settings
from rdsync.core.exceptions import RdSyncError
from rdsync.core.logging import setup_logging
from rdsync.core.models import Target
from rdsync.engine.provisioner import ensure_binary
from rdsync.sync.config_builder import write_config
from rdsync.sync.identity import session_key, session_name
from rdsync.sync.remote import RemoteSync

console = Console()


class SpinnerProgress:
    """Rich spinner used as the progress indicator for long steps."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self._status: Status | None = None

    def start(self, message: str) -> None:
        self.stop()
        self._status = self.console.status(message)
        self._status.start()

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


def get_settings(ctx: click.Context) -> Settings:
    """Get settings from context."""
    return ctx.obj["settings"]


def fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    sys.exit(1)


def target_options(require_host: bool) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Options describing the remote target and the synced remote path."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        func = click.option(
            "--host",
            "ssh_hostname",
            required=require_host,
            default="",
            help="SSH hostname of the remote environment",
        )(func)
        func = click.option("--namespace", "-n", required=True, help="Deployment namespace")(func)
        func = click.option("--deployment", "-d", required=True, help="Deployment name")(func)
        func = click.option("--remote-path", "-r", required=True, help="Path on the remote side")(func)
        return func

    return decorator


@click.group()
@click.version_option(version=__version__, prog_name="rdsync")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--workspace",
    "-w",
    type=click.Path(file_okay=False, path_type=Path),
    help="Override the workspace directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    workspace: Path | None,
    verbose: bool,
    json_output: bool,
) -> None:
    """
    rdsync - Remote development file synchronization.

    Installs the Mutagen sync engine on demand and mirrors a local
    directory into a remote development environment.
    """
    ctx.ensure_object(dict)

    settings = Settings.load(config) if config else load_settings()
    if workspace:
        settings.workspace_directory = workspace.expanduser().resolve()
    if verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    ctx.obj["settings"] = settings
    ctx.obj["json_output"] = json_output


@cli.command("install")
@click.pass_context
def install(ctx: click.Context) -> None:
    """Install the sync engine binary if it is missing."""
    settings = get_settings(ctx)

    try:
        with console.status("Installing sync engine..."):
            path = ensure_binary(settings)
    except (RdSyncError, OSError) as e:
        fail(e)

    size = path.stat().st_size if path.exists() else 0
    if ctx.obj.get("json_output", False):
        click.echo(json.dumps({"path": str(path), "size_bytes": size}))
    else:
        console.print(
            f"[green]Engine {settings.engine.version} ready:[/green] {path} "
            f"({humanize.naturalsize(size, binary=True)})"
        )


@cli.command("config")
@click.pass_context
def config_cmd(ctx: click.Context) -> None:
    """Regenerate the sync engine configuration file."""
    settings = get_settings(ctx)

    try:
        path = write_config(settings)
    except (RdSyncError, OSError) as e:
        fail(e)

    if ctx.obj.get("json_output", False):
        click.echo(json.dumps({"path": str(path)}))
    else:
        console.print(f"[green]Configuration written:[/green] {path}")


@cli.command("name")
@target_options(require_host=False)
@click.pass_context
def name_cmd(
    ctx: click.Context,
    remote_path: str,
    deployment: str,
    namespace: str,
    ssh_hostname: str,
) -> None:
    """Print the session name for a remote target."""
    name = session_name(remote_path, deployment, namespace)

    if ctx.obj.get("json_output", False):
        key = session_key(remote_path, deployment, namespace)
        click.echo(json.dumps({"name": name, "key": key}))
    else:
        click.echo(name)


@cli.command("up")
@click.argument(
    "local_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@target_options(require_host=True)
@click.pass_context
def up(
    ctx: click.Context,
    local_path: Path,
    remote_path: str,
    deployment: str,
    namespace: str,
    ssh_hostname: str,
) -> None:
    """Install the engine and start syncing LOCAL_PATH to the remote target."""
    settings = get_settings(ctx)
    target = Target(name=deployment, namespace=namespace, ssh_hostname=ssh_hostname)
    remote = RemoteSync(
        settings,
        target,
        local_path.resolve(),
        remote_path,
        progress=SpinnerProgress(console),
    )

    try:
        remote.up()
    except (RdSyncError, OSError) as e:
        fail(e)

    panel = Panel(
        f"""[cyan]Session:[/cyan] {remote.session_name}
[cyan]Local:[/cyan] {local_path.resolve()}
[cyan]Remote:[/cyan] {target.remote_endpoint(remote_path)}""",
        title="Sync Started",
    )
    console.print(panel)


@cli.command("down")
@target_options(require_host=False)
@click.pass_context
def down(
    ctx: click.Context,
    remote_path: str,
    deployment: str,
    namespace: str,
    ssh_hostname: str,
) -> None:
    """Terminate the sync session and stop the engine daemon."""
    settings = get_settings(ctx)
    target = Target(name=deployment, namespace=namespace, ssh_hostname=ssh_hostname)
    remote = RemoteSync(settings, target, Path.cwd(), remote_path)

    try:
        remote.down()
    except RdSyncError as e:
        fail(e)

    console.print(f"[green]Sync session {remote.session_name} stopped[/green]")


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
