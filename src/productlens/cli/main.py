"""
ProductLens CLI - Main entry point.

Extract product title, price, and description from saved HTML pages.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import orjson
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.traceback import install as install_rich_traceback

from productlens import __app_name__, __version__
from productlens.core.activity import ActivityEntry, ActivityFeed, ActivityLevel

# Load environment variables from .env (if present) for ${VAR} expansion in configs
load_dotenv()

install_rich_traceback(show_locals=False, width=120)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name=__app_name__,
    help="Extract product data from saved HTML pages",
    rich_markup_mode="rich",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

ACTIVITY_STYLES = {
    ActivityLevel.INFO: "blue",
    ActivityLevel.SUCCESS: "green",
    ActivityLevel.WARN: "yellow",
}

EXIT_NOTHING_FOUND = 2


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """ProductLens - Product data extraction from HTML."""
    pass


# =============================================================================
# Import and register subcommand modules
# =============================================================================

from .commands import strategies  # noqa: E402

app.add_typer(strategies.app, name="strategies", help="Inspect and validate extraction strategies")


# =============================================================================
# Extract Command
# =============================================================================


def _read_html(source: str) -> str:
    """Read HTML from a file path, or stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        err_console.print(f"[red]HTML file not found:[/red] {escape(source)}")
        raise typer.Exit(1)

    return path.read_text(encoding="utf-8", errors="replace")


def _print_activity(entries: list[ActivityEntry]) -> None:
    for entry in entries:
        style = ACTIVITY_STYLES[entry.level]
        console.print(f"[{style}]*[/{style}] {escape(entry.message)}")


@app.command()
def extract(
    source: str = typer.Argument(..., help="HTML file to read ('-' for stdin)"),
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="URL the page was fetched from (selects the strategy)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml (default: configs/app.yaml if present)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the report to a JSON file",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help=f"Exit with code {EXIT_NOTHING_FOUND} when no field could be extracted",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging",
    ),
) -> None:
    """Extract title, price, and description from an HTML page.

    Examples:
        productlens extract page.html --url https://www.amazon.in/dp/B0TEST
        curl -s https://shop.example/item | productlens extract - -u https://shop.example/item --json
    """
    from productlens.core.config import ConfigError, load_app_config, load_registry
    from productlens.core.extract import ProductExtractor
    from productlens.core.logging import get_logger, setup_logging
    from productlens.core.orchestrator import ExtractionRunner

    try:
        app_config = load_app_config(config)
        registry = load_registry(app_config)
    except ConfigError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        if e.details:
            err_console.print(f"[dim]{escape(e.details)}[/dim]")
        raise typer.Exit(1)

    log_settings = app_config.logging
    setup_logging(
        level="DEBUG" if verbose else log_settings.level,
        log_file=log_settings.file,
        json_format=log_settings.json_format,
        rich_console=log_settings.rich_console,
        console=err_console,
    )

    html = _read_html(source)

    # Activity goes to the log stream when stdout is reserved for JSON
    feed = ActivityFeed(logger=get_logger("activity") if json_output else None)
    runner = ExtractionRunner(ProductExtractor(registry), feed)
    report = runner.run(html, url)

    report_json = orjson.dumps(report.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report_json + "\n", encoding="utf-8")

    if json_output:
        typer.echo(report_json)
    else:
        _print_activity(report.entries)
        console.print()

        table = Table(
            title=f"Product ({escape(report.strategy)} strategy)",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        for field_name, value in report.record.to_dict().items():
            table.add_row(field_name, escape(value) if value is not None else "[dim]-[/dim]")

        console.print(table)

        if output:
            console.print(f"[dim]Saved report to {escape(str(output))}[/dim]")

    if strict and not report.ok:
        raise typer.Exit(EXIT_NOTHING_FOUND)


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
