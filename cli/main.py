"""arangotui CLI — entry-point for the terminal browser.

Usage:
    python cli/main.py --help

Commands:
    browse    → connect, then open the interactive browser
    version   → print the server (and optional GAE) version and exit
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from arangotui.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from arangotui.config import ServerConfig, settings
from arangotui.gateway import FetchError, get_gae_version, get_server_version
from arangotui.gateway.models import GaeVersion, ServerVersion
from arangotui.logging import setup_logging

app = typer.Typer(
    name="arangotui",
    help="A terminal browser for ArangoDB databases, collections and graphs.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------
_ENDPOINT = typer.Option(None, "--endpoint", help="ArangoDB endpoint URL.")
_GAE = typer.Option(None, "--gae", help="Graph Analytics Engine endpoint URL.")
_USERNAME = typer.Option(None, "--username", help="Username for authentication.")
_PASSWORD = typer.Option(None, "--password", help="Password for authentication.")


def _handshake(server: ServerConfig, gae_endpoint: Optional[str]) -> tuple[ServerVersion, Optional[GaeVersion]]:
    """Confirm the server is reachable before anything else starts.

    The ArangoDB version check is required; the GAE probe is optional and
    only produces a warning when it fails.
    """
    typer.echo(f"Connecting to ArangoDB at {server.endpoint}...")
    try:
        version = asyncio.run(get_server_version(server))
    except FetchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Connected to ArangoDB {version.version} ({version.license})")

    gae_version: Optional[GaeVersion] = None
    if gae_endpoint:
        typer.echo(f"Connecting to GAE at {gae_endpoint}...")
        try:
            gae_version = asyncio.run(get_gae_version(server, gae_endpoint))
            typer.echo(f"Connected to GAE {gae_version.version}")
        except FetchError as exc:
            typer.echo(f"Warning: Could not connect to GAE: {exc}")

    return version, gae_version


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@app.command("browse")
def browse(
    endpoint: Optional[str] = _ENDPOINT,
    gae: Optional[str] = _GAE,
    username: Optional[str] = _USERNAME,
    password: Optional[str] = _PASSWORD,
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level for the log file."),
) -> None:
    """Open the interactive database browser."""
    from cli.app import ArangoTuiApp

    settings.ensure_workspace()
    log_file = setup_logging(log_level, settings.log_path)

    server = settings.server_config(endpoint=endpoint, username=username, password=password)
    try:
        version, gae_version = _handshake(server, gae or settings.gae_endpoint or None)
        ArangoTuiApp(server, version, gae_version).run()
    finally:
        if log_file is not None:
            log_file.close()


@app.command("version")
def version(
    endpoint: Optional[str] = _ENDPOINT,
    gae: Optional[str] = _GAE,
    username: Optional[str] = _USERNAME,
    password: Optional[str] = _PASSWORD,
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for diagnostics on stderr."),
) -> None:
    """Check connectivity and print the server version."""
    setup_logging(log_level)
    server = settings.server_config(endpoint=endpoint, username=username, password=password)
    server_version, _ = _handshake(server, gae or settings.gae_endpoint or None)
    typer.echo(f"[version] server={server_version.server!r}  version={server_version.version}  license={server_version.license}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
