"""Command line entry point: read a point file, print a route or report that none exists."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from . import __version__
from .config import EXACT_STRATEGIES, GREEDY_STRATEGIES, settings
from .errors import SearchTimeoutError
from .schemas.routing import RouteRequest, RouteResponse
from .services.outputs import routing_response_to_csv, routing_response_to_json, routing_response_to_text
from .services.points import load_points
from .services.routing.dispatcher import STRATEGY_DESCRIPTIONS, strategy_kind
from .services.routing.service import solve_route

app = typer.Typer(
    name="turnroute",
    help="Shortest routes through n-dimensional points with turns of at least 90 degrees.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

EXIT_INPUT_ERROR = 1
EXIT_TIMEOUT = 2


class OutputFormat(str, Enum):
    text = "text"
    json = "json"
    csv = "csv"


def version_callback(value: bool) -> None:
    if value:
        console.print(f"turnroute version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to TURNROUTE_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Shortest routes through n-dimensional points with turns of at least 90 degrees."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _render(response: RouteResponse, output: OutputFormat) -> str:
    if output is OutputFormat.json:
        return json.dumps(routing_response_to_json(response), indent=2)
    if output is OutputFormat.csv:
        return routing_response_to_csv(response)
    return routing_response_to_text(response)


def _solve_file(
    path: Path,
    *,
    dimension: Optional[int],
    strategy: Optional[str],
    prefix_size: Optional[int],
    time_limit: Optional[float],
    tolerance: Optional[float],
) -> RouteResponse:
    points = load_points(path, dimension)
    request = RouteRequest(
        points=[list(point.coordinates) for point in points],
        dimension=dimension,
        strategy=strategy,
        prefix_size=prefix_size,
        time_limit_seconds=time_limit,
        tolerance=tolerance,
    )
    return solve_route(request)


@app.command()
def solve(
    path: Path = typer.Argument(..., help="File with one point per line, coordinates separated by spaces."),
    dimension: Optional[int] = typer.Option(None, "--dimension", "-d", min=1, help="Expected point dimension."),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Strategy key; chosen by instance size when omitted."
    ),
    prefix_size: Optional[int] = typer.Option(None, "--prefix-size", min=2, help="Prefix length for 'prefix'."),
    time_limit: Optional[float] = typer.Option(None, "--time-limit", help="Abort after this many seconds."),
    tolerance: Optional[float] = typer.Option(None, "--tolerance", min=0.0, help="Accept turns with dot <= this."),
    output: OutputFormat = typer.Option(OutputFormat.text, "--format", "-f", help="Output format."),
) -> None:
    """Solve one point file and print the route."""
    try:
        response = _solve_file(
            path,
            dimension=dimension,
            strategy=strategy,
            prefix_size=prefix_size,
            time_limit=time_limit,
            tolerance=tolerance,
        )
    except SearchTimeoutError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(EXIT_TIMEOUT) from exc
    except (ValueError, FileNotFoundError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(EXIT_INPUT_ERROR) from exc

    typer.echo(_render(response, output), nl=False)


@app.command()
def strategies() -> None:
    """List the available strategy keys."""
    table = Table(title="Routing strategies")
    table.add_column("Key", style="bold")
    table.add_column("Kind")
    table.add_column("Description")
    for key in EXACT_STRATEGIES + GREEDY_STRATEGIES:
        table.add_row(key, strategy_kind(key), STRATEGY_DESCRIPTIONS[key])
    console.print(table)
    console.print(
        f"Default: '{settings.exact_strategy}' up to {settings.exact_max_points} points, "
        f"'{settings.greedy_strategy}' above."
    )


@app.command()
def interactive() -> None:
    """Prompt for a dimension and a point file repeatedly; enter -1 to stop."""
    while True:
        try:
            dimension = IntPrompt.ask(
                "Enter the point dimension (natural number) or -1 to stop", console=console
            )
        except EOFError:
            break
        if dimension == -1:
            console.print("Stopping...")
            break
        if dimension < 1:
            console.print("[red]A dimension must be greater than 0.[/red] Please try again.")
            continue

        try:
            path = Prompt.ask("Enter the path of a file with points of that dimension", console=console)
        except EOFError:
            break

        console.rule()
        console.print("Starting...")
        try:
            response = _solve_file(
                Path(path.strip()),
                dimension=dimension,
                strategy=None,
                prefix_size=None,
                time_limit=None,
                tolerance=None,
            )
        except SearchTimeoutError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
            continue
        except (ValueError, FileNotFoundError) as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))} Please try again.", soft_wrap=True)
            continue
        typer.echo(routing_response_to_text(response), nl=False)
        console.rule()


if __name__ == "__main__":
    app()
