"""
Strategy commands for inspecting and validating extraction strategies.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import orjson
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from productlens.core.config import ConfigError, load_app_config, load_registry
from productlens.core.config.loader import validate_strategy_config_file
from productlens.core.extract import Strategy, StrategyRegistry

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="Inspect and validate extraction strategies",
    no_args_is_help=True,
)


def load_registry_or_exit(config_path: Path | None) -> StrategyRegistry:
    """Load app config and build the registry, exiting on config errors."""
    try:
        app_config = load_app_config(config_path)
        return load_registry(app_config)
    except ConfigError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        if e.details:
            err_console.print(f"[dim]{escape(e.details)}[/dim]")
        raise typer.Exit(1)


def _chain_lines(strategy: Strategy, field_name: str) -> str:
    chain = getattr(strategy, field_name)
    if not chain:
        return "  [dim](none)[/dim]"
    return "\n".join(f"  {i}. {escape(str(locator))}" for i, locator in enumerate(chain, start=1))


@app.command("list")
def list_strategies(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format (table, json)",
    ),
) -> None:
    """List strategies in the order they are tried."""
    registry = load_registry_or_exit(config)

    if format == "json":
        data = [
            {
                "name": s.name,
                "display_name": s.label,
                "url_fragments": list(s.url_fragments),
                "catch_all": s.is_catch_all,
            }
            for s in registry.strategies
        ]
        typer.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    table = Table(title="Strategies", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Site")
    table.add_column("URL Match")
    table.add_column("Title", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Description", justify="right")

    for index, s in enumerate(registry.strategies, start=1):
        table.add_row(
            str(index),
            s.name,
            escape(s.label),
            escape(", ".join(s.url_fragments)) if s.url_fragments else "[dim]any URL[/dim]",
            str(len(s.title)),
            str(len(s.price)),
            str(len(s.description)),
        )

    console.print(table)


@app.command("show")
def show_strategy(
    name: str = typer.Argument(..., help="Strategy name"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml",
    ),
) -> None:
    """Show the candidate chains of a strategy."""
    registry = load_registry_or_exit(config)
    strategy = registry.get(name)

    if strategy is None:
        err_console.print(f"[red]Strategy not found:[/red] {escape(name)}")
        err_console.print(f"[dim]Available: {', '.join(registry.names())}[/dim]")
        raise typer.Exit(1)

    match = escape(", ".join(strategy.url_fragments)) if strategy.url_fragments else "any URL"
    console.print()
    console.print(Panel.fit(
        f"[bold]Site:[/bold] {escape(strategy.label)}\n"
        f"[bold]URL Match:[/bold] {match}\n\n"
        f"[bold]Title:[/bold]\n{_chain_lines(strategy, 'title')}\n"
        f"[bold]Price:[/bold]\n{_chain_lines(strategy, 'price')}\n"
        f"[bold]Description:[/bold]\n{_chain_lines(strategy, 'description')}",
        title=f"[bold cyan]Strategy: {strategy.name}[/bold cyan]",
        border_style="cyan",
    ))


@app.command("validate")
def validate_strategy(
    config_file: Path = typer.Argument(..., help="Path to strategy YAML file"),
) -> None:
    """Validate a strategy YAML file without registering it."""
    errors = validate_strategy_config_file(config_file)

    if errors:
        err_console.print(f"[red]Invalid strategy file:[/red] {escape(str(config_file))}")
        for error in errors:
            err_console.print(f"  - {escape(error)}")
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] {escape(str(config_file))}")
