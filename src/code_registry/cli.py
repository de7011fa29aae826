"""
Code Registry CLI - Command-line interface.

Serve the registry over HTTPS and inspect snapshot files from the terminal.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from code_registry.api.app import create_app
from code_registry.config import RegistryConfig, configure_logging
from code_registry.core.exceptions import (
    EXIT_LISTEN_FAILURE,
    ConfigurationError,
    SnapshotDecodeError,
)
from code_registry.registry.codec import read_snapshot
from code_registry.registry.storage import CodeRegistry

app = typer.Typer(
    name="code-registry",
    help="Code Registry - Web-Administered Message Code Registry",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


def _load_config() -> RegistryConfig:
    try:
        return RegistryConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Address to listen on"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="Snapshot file"),
    cert: Optional[Path] = typer.Option(None, "--cert", help="TLS certificate file"),
    key: Optional[Path] = typer.Option(None, "--key", help="TLS private key file"),
):
    """Serve the registry over HTTPS."""
    config = _load_config()
    overrides = {
        "host": host,
        "port": port,
        "snapshot_path": snapshot,
        "ssl_certfile": cert,
        "ssl_keyfile": key,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    configure_logging(config.log_level)

    registry = CodeRegistry(config.snapshot_path)
    try:
        registry.load()
    except SnapshotDecodeError as e:
        console.print(f"[red]Cannot load snapshot: {escape(str(e))}[/red]")
        raise typer.Exit(e.exit_code)

    for tls_file in (config.ssl_certfile, config.ssl_keyfile):
        if not tls_file.is_file():
            console.print(f"[red]TLS file not found: {tls_file}[/red]")
            raise typer.Exit(EXIT_LISTEN_FAILURE)

    console.print(
        Panel.fit(
            f"[bold blue]Message Code Registry[/bold blue]\n"
            f"Listening: https://{config.host}:{config.port}/\n"
            f"Snapshot: {config.snapshot_path} ({len(registry)} codes)",
        )
    )

    try:
        uvicorn.run(
            create_app(registry),
            host=config.host,
            port=config.port,
            ssl_certfile=str(config.ssl_certfile),
            ssl_keyfile=str(config.ssl_keyfile),
            log_config=None,
        )
    except (OSError, ValueError) as e:
        logger.error(f"Listener failed: {e}")
        console.print(f"[red]Listener failed: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_LISTEN_FAILURE)


@app.command("list")
def list_cmd(
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="Snapshot file"),
    include_deleted: bool = typer.Option(
        True, "--include-deleted/--hide-deleted", help="Show soft-deleted codes"
    ),
):
    """List the message codes stored in a snapshot."""
    path = snapshot or _load_config().snapshot_path
    try:
        table = read_snapshot(path)
    except SnapshotDecodeError as e:
        console.print(f"[red]Cannot load snapshot: {escape(str(e))}[/red]")
        raise typer.Exit(e.exit_code)

    codes = list((table or {}).values())
    if not include_deleted:
        codes = [c for c in codes if not c.deleted]

    out = Table(title=f"Message Codes ({len(codes)})")
    out.add_column("ID", style="cyan", justify="right")
    out.add_column("Title", style="bold")
    out.add_column("Description")
    out.add_column("Modified")
    out.add_column("By")

    for code in codes:
        style = "dim strike" if code.deleted else None
        out.add_row(
            str(code.code),
            code.title,
            code.description,
            code.modified_at.strftime("%Y-%m-%d %H:%M:%S"),
            str(code.modified_ip) if code.modified_ip is not None else "-",
            style=style,
        )

    console.print(out)


@app.command()
def check(
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="Snapshot file"),
):
    """Verify that a snapshot decodes and keeps its ids dense."""
    path = snapshot or _load_config().snapshot_path
    try:
        table = read_snapshot(path)
    except SnapshotDecodeError as e:
        console.print(f"[red]Invalid snapshot: {escape(str(e))}[/red]")
        raise typer.Exit(e.exit_code)

    if table is None:
        console.print(f"[yellow]No snapshot at {path}[/yellow]")
        return

    deleted = sum(1 for c in table.values() if c.deleted)
    console.print(f"[green]OK[/green] {path}: {len(table)} codes ({deleted} deleted)")


@app.command()
def version():
    """Show Code Registry version."""
    from code_registry import __version__

    console.print(f"Code Registry v{__version__}")


if __name__ == "__main__":
    app()
