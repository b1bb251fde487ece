"""Events command implementation."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..api import build_aggregator
from ..config import Config
from ..ingestion import FeedResult, RSSFetcher, build_client
from ..pipeline import AggregationResult

console = Console()


async def run_aggregation(
    config: Config,
    query: Optional[str],
    region: Optional[str],
    limit: Optional[int],
) -> AggregationResult:
    """Run one aggregation with a short-lived HTTP client."""
    async with build_client(config.config.fetch) as client:
        aggregator = build_aggregator(config, RSSFetcher(client, config.config.fetch.timeout))
        return await aggregator.aggregate(query=query, region=region, limit=limit)


def print_feed_summary(results: List[FeedResult]) -> None:
    """Print summary of feed fetch results."""
    total_events = sum(r.event_count for r in results)
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    console.print(f"\n[bold]Feed Summary:[/bold]")
    console.print(f"  Sources fetched: {len(results)}")
    console.print(f"  Successful: [green]{successful}[/green]")
    console.print(f"  Failed: [red]{failed}[/red]")
    console.print(f"  Events normalised: {total_events}")

    if failed > 0:
        console.print(f"\n[bold red]Failed feeds:[/bold red]")
        for result in results:
            if not result.success:
                console.print(f"  - {result.source_id}: {result.error}")


def print_events_table(result: AggregationResult) -> None:
    table = Table(title=f"World Events ({len(result.events)})")
    table.add_column("Published (UTC)", style="yellow", no_wrap=True)
    table.add_column("Source", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("URL", style="blue")

    for event in result.events:
        table.add_row(
            event.published_at.strftime("%Y-%m-%d %H:%M"),
            event.source_name,
            event.title,
            event.url,
        )

    console.print(table)


def events_command(
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Case-insensitive text filter"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Region tag, or 'global'"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum events to show"),
    as_json: bool = typer.Option(False, "--json", help="Print the API response as JSON"),
) -> None:
    """Fetch feeds live and list the latest events."""
    config = Config()
    try:
        sources = config.sources
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Could not load sources: {e}[/red]")
        raise typer.Exit(1)

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        raise typer.Exit(1)

    try:
        result = asyncio.run(run_aggregation(config, query, region, limit))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.to_response().model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return

    if result.events:
        print_events_table(result)
    else:
        console.print("[yellow]No events matched.[/yellow]")
    print_feed_summary(result.feed_results)
