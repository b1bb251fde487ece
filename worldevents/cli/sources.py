"""Sources commands."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, SourceConfig
from ..ingestion import FetchError, RSSFetcher, build_client

console = Console()
sources_app = typer.Typer(help="Inspect feed sources")


def _load_sources() -> tuple:
    config = Config()
    try:
        return config, config.sources
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Could not load sources: {e}[/red]")
        raise typer.Exit(1)


@sources_app.command("list")
def sources_list(
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Only sources covering this region"),
) -> None:
    """List all configured sources."""
    _, sources = _load_sources()

    if region:
        sources = [s for s in sources if region.strip().lower() in s.regions]

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Regions", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Feed", style="blue")

    for source in sources:
        table.add_row(
            source.id,
            source.name,
            ", ".join(source.regions),
            "✓" if source.enabled else "✗",
            source.feed,
        )

    console.print(table)


async def _test_sources(config: Config, sources: List[SourceConfig]) -> None:
    async with build_client(config.config.fetch) as client:
        fetcher = RSSFetcher(client, config.config.fetch.timeout)
        for source in sources:
            if not source.enabled:
                console.print(f"[yellow]⚠️  {source.id}: Disabled[/yellow]")
                continue

            try:
                items = await fetcher.fetch_feed(source.feed)
                console.print(f"[green]✅ {source.id}: OK ({len(items)} items)[/green]")
            except FetchError as e:
                console.print(f"[red]❌ {source.id}: Failed - {e}[/red]")


@sources_app.command("test")
def sources_test(
    source_id: Optional[str] = typer.Argument(None, help="Source id to test (or test all)"),
) -> None:
    """Test feed connectivity."""
    config, sources = _load_sources()

    if source_id:
        sources = [s for s in sources if s.id == source_id]
        if not sources:
            console.print(f"[red]Source '{source_id}' not found.[/red]")
            raise typer.Exit(1)

    asyncio.run(_test_sources(config, sources))
