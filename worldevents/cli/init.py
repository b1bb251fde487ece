"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_config_path, load_default_sources, save_config, save_sources

console = Console()


def init_command(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Configuration directory (default: ~/.config/worldevents)",
    ),
    host: str = typer.Option("127.0.0.1", "--host", help="API bind host"),
    port: int = typer.Option(8000, "--port", help="API bind port"),
    timeout: float = typer.Option(15.0, "--timeout", help="Per-feed timeout in seconds"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed the default world news sources",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
) -> None:
    """Initialize configuration and the feed source registry."""
    console.print(Panel.fit("World Events - Initialization", style="bold blue"))

    if config_dir is None:
        config_dir = default_config_path().parent
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    if not force and (config_path.exists() or sources_path.exists()):
        console.print(f"[red]Configuration already exists in {config_dir}. Use --force to overwrite.[/red]")
        raise typer.Exit(1)

    config = ConfigModel(
        fetch={"timeout": timeout},
        server={"host": host, "port": port},
    )
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_sources:
        sources = load_default_sources()
        save_sources(sources, sources_path)
        console.print(f"✅ Created sources: {sources_path} (seeded with {len(sources)} sources)")
    else:
        save_sources([], sources_path)
        console.print(f"✅ Created sources: {sources_path} (empty)")

    console.print(
        Panel(
            f"[green]✅ World Events initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Try a query: [bold]worldevents events --region europe[/bold]\n"
            f"2. Start the API: [bold]worldevents serve[/bold]",
            style="green",
        )
    )
