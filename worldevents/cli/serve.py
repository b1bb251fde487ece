"""Serve command implementation."""

from typing import Optional

import typer
import uvicorn
from rich.console import Console

from ..api import create_app
from ..config import Config

console = Console()


def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Bind host (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
) -> None:
    """Serve the events API."""
    config = Config()
    try:
        server = config.config.server
        sources = config.sources
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    host = host or server.host
    port = port or server.port
    console.print(f"Serving {len(sources)} sources on [bold]http://{host}:{port}/api/events[/bold]")
    uvicorn.run(create_app(config), host=host, port=port)
