"""
Command-line interface for the launcher, built with Typer.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .auth.account import Account
from .config import LauncherConfig
from .core.game_launcher import GameLauncher
from .exceptions import FilesystemError, LauncherError
from .utils.logger import setup_logging
from .versions.models import parse_document

log = logging.getLogger(__name__)

app = typer.Typer(help="Install and launch Minecraft versions.", add_completion=False)


@app.callback()
def configure(
    ctx: typer.Context,
    data_dir: Path = typer.Option(Path("data"), help="Directory holding the local cache."),
    parallel: int = typer.Option(8, help="Maximum concurrent downloads."),
    timeout: float = typer.Option(60.0, help="Per-request timeout in seconds."),
    java: str = typer.Option("java", help="Java executable to launch."),
    log_dir: Optional[Path] = typer.Option(None, help="Directory for launcher.log."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
):
    setup_logging(log_dir, logging.DEBUG if verbose else logging.INFO)
    ctx.obj = LauncherConfig.load(
        data_dir=data_dir,
        parallel_downloads=parallel,
        request_timeout=timeout,
        java_executable=java,
    )


def load_account(path: Path) -> Account:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FilesystemError(path, e) from e
    return parse_document(Account, data, path)


async def _list_versions(config: LauncherConfig, snapshots: bool):
    async with GameLauncher(config) as launcher:
        manifest = await launcher.load_versions()
    typer.echo(f"Latest release: {manifest.latest_release}")
    typer.echo(f"Latest snapshot: {manifest.latest_snapshot}")
    for version in manifest.versions:
        if version.type == "release" or snapshots:
            typer.echo(f"{version.id}\t{version.type}\t{version.releaseTime:%Y-%m-%d}")


async def _play(config: LauncherConfig, version: Optional[str], account: Account):
    async with GameLauncher(config) as launcher:
        manifest = await launcher.load_versions()
        launcher.account = account
        await launcher.play_version(version or manifest.latest_release)


@app.command()
def versions(
    ctx: typer.Context,
    snapshots: bool = typer.Option(False, "--snapshots", help="Include non-release versions."),
):
    """List the versions available for installation."""
    asyncio.run(_list_versions(ctx.obj, snapshots))


@app.command()
def play(
    ctx: typer.Context,
    version: Optional[str] = typer.Argument(None, help="Version id, latest release by default."),
    account: Path = typer.Option(..., help="JSON file with the signed-in account."),
):
    """Install a version if needed and launch it."""
    asyncio.run(_play(ctx.obj, version, load_account(account)))


def main() -> None:
    """Main entry point function."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled.", err=True)
        sys.exit(130)
    except LauncherError as e:
        typer.echo(f"Error: {e}", err=True)
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)
