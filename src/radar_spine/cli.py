"""
CLI: ``radar-spine``: build a technology radar from a sheet or CSV.

    radar-spine show "https://radar.example.com/?sheetId=https://example.com/radar.csv"
    radar-spine show "?sheetId=https://docs.google.com/spreadsheets/d/<id>&sheetName=Q1" --json
    radar-spine locate "?sheetId=https://example.com/radar.csv"
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict

import typer
from rich.console import Console

from radar_spine import __version__
from radar_spine.console import ConsoleRenderer
from radar_spine.locator import locate
from radar_spine.logging import configure_logging
from radar_spine.pipeline import RadarPipeline
from radar_spine.render import RenderCommand, ShowRadar, ShowUnauthorized

app = typer.Typer(
    name="radar-spine",
    help="radar-spine: ingest technology radar data from sheets and CSV files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"radar-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING | ERROR"),
    log_format: str | None = typer.Option(None, "--log-format", help="json | console"),
) -> None:
    """radar-spine CLI: build and inspect radars."""
    configure_logging(level=log_level, format=log_format)


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


async def _show(pipeline: RadarPipeline, reference: str, interactive: bool) -> RenderCommand | None:
    command = await pipeline.run(reference)
    while isinstance(command, ShowUnauthorized) and interactive:
        if not typer.confirm("Switch account?", default=False):
            break
        command = await pipeline.switch_account()
    return command


@app.command("show")
def show(
    reference: str = typer.Argument(..., help="URL or query string carrying sheetId (and optional sheetName)"),
    json_out: bool = typer.Option(False, "--json", help="Print the radar as JSON"),
    no_input: bool = typer.Option(False, "--no-input", help="Never prompt to switch account"),
) -> None:
    """Ingest a radar and render it to the terminal."""
    renderer = ConsoleRenderer(as_json=json_out)
    pipeline = RadarPipeline(renderer)
    command = asyncio.run(_show(pipeline, reference, interactive=not (json_out or no_input)))
    if not isinstance(command, ShowRadar):
        raise typer.Exit(code=1)


@app.command("locate")
def locate_source(
    reference: str = typer.Argument(..., help="URL or query string carrying sheetId"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show which source a reference resolves to, without fetching it."""
    location = locate(reference)
    data = {key: (value.value if hasattr(value, "value") else value) for key, value in asdict(location).items()}
    if json_out:
        typer.echo(json.dumps(data))
        return
    console.print(f"[bold]{data.pop('kind')}[/bold]")
    for key, value in data.items():
        console.print(f"  {key}: {value}")
