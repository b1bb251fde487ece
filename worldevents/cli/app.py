"""Main CLI application."""

import logging

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

# Load .env file if it exists
load_dotenv()

from .events import events_command
from .init import init_command
from .serve import serve_command
from .sources import sources_app

app = typer.Typer(
    name="worldevents",
    help="World Events - live news aggregated from syndicated feeds",
    no_args_is_help=True,
)


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    setup_logging(verbose)


# Register commands
app.command("init")(init_command)
app.command("events")(events_command)
app.command("serve")(serve_command)
app.add_typer(sources_app, name="sources", help="Inspect feed sources")


if __name__ == "__main__":
    app()
