"""
Console renderer: draws render commands with rich.

Radar output goes to stdout (a table per quadrant, or JSON); loading,
prompts and errors go to stderr.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from rich.console import Console
from rich.table import Table

from radar_spine.models import Radar
from radar_spine.render import (
    RenderCommand,
    ShowError,
    ShowForm,
    ShowLoading,
    ShowRadar,
    ShowUnauthorized,
)


def radar_to_dict(title: str, radar: Radar) -> dict[str, Any]:
    """Plain-dict form of a radar for JSON output."""
    return {"title": title, **asdict(radar)}


class ConsoleRenderer:
    """Render commands to a terminal."""

    def __init__(
        self,
        *,
        as_json: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.as_json = as_json
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.rendered: list[RenderCommand] = []

    def render(self, command: RenderCommand) -> None:
        self.rendered.append(command)
        match command:
            case ShowLoading(message=message):
                self.err_console.print(f"[dim]{message}[/dim]")
            case ShowForm(default_sheet_url=default_url):
                self.err_console.print(
                    "No radar source given. Pass a reference with "
                    "[bold]?sheetId=[/bold]<Google Sheet URL or CSV URL>."
                )
                if default_url:
                    self.err_console.print(f"[dim]Try: ?sheetId={default_url}[/dim]")
            case ShowRadar(title=title, radar=radar):
                self._render_radar(title, radar)
            case ShowUnauthorized(message=message):
                self.err_console.print(f"[bold yellow]{message}[/bold yellow]")
            case ShowError(message=message, hint=hint):
                self.err_console.print(f"[bold red]Error:[/bold red] {message}")
                self.err_console.print(f"[dim]{hint}[/dim]")

    def _render_radar(self, title: str, radar: Radar) -> None:
        if self.as_json:
            self.console.print_json(json.dumps(radar_to_dict(title, radar)))
            return

        self.console.print(f"[bold]{title}[/bold]")
        rings = ", ".join(ring.name for ring in radar.rings)
        self.console.print(f"[dim]Rings:[/dim] {rings}")
        if radar.alternative_sheets:
            self.console.print(f"[dim]Other sheets:[/dim] {', '.join(radar.alternative_sheets)}")

        for quadrant in radar.quadrants:
            table = Table(title=quadrant.name, show_header=True, header_style="bold cyan")
            table.add_column("Name", style="bold")
            table.add_column("Ring")
            table.add_column("New", justify="center")
            table.add_column("Topic")
            for blip in quadrant.blips:
                table.add_row(blip.name, blip.ring.name, "✓" if blip.is_new else "", blip.topic)
            self.console.print(table)
