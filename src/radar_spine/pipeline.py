"""
Top-level ingestion pipeline.

One ``run()`` per navigation context: locate the source, show the loading
placeholder, read and ingest, and leave exactly one outcome on the display.
Nothing escapes ``run()``; unexpected failures degrade to the generic error
display and are logged.

Usage:
    pipeline = RadarPipeline(renderer)
    command = await pipeline.run("https://radar.example.com/?sheetId=...")
    if isinstance(command, ShowUnauthorized):
        command = await pipeline.switch_account()
"""

from __future__ import annotations

from radar_spine.auth import GoogleIdentityProvider, IdentityProvider
from radar_spine.core.result import Err, Ok
from radar_spine.core.settings import RadarSettings, get_settings
from radar_spine.flow import SheetFlow
from radar_spine.ingest import ingest_named_table
from radar_spine.locator import CsvLocation, SheetLocation, locate
from radar_spine.logging import bind_context, get_logger, set_context
from radar_spine.render import Display, ErrorReporter, Renderer, RenderCommand, ShowForm, ShowLoading
from radar_spine.sources.csv_file import CsvSource
from radar_spine.sources.google_sheets import GoogleSheetsSource
from radar_spine.sources.protocol import CsvReader, SheetReader

log = get_logger(__name__)


class RadarPipeline:
    """Wire the locator, sources, flow and display together."""

    def __init__(
        self,
        renderer: Renderer,
        *,
        settings: RadarSettings | None = None,
        csv_source: CsvReader | None = None,
        sheets: SheetReader | None = None,
        identity: IdentityProvider | None = None,
    ):
        self.settings = settings or get_settings()
        self.display = Display(renderer)
        self.reporter = ErrorReporter()
        self.csv_source = csv_source or CsvSource(settings=self.settings)
        self.sheets = sheets or GoogleSheetsSource(settings=self.settings)
        self.identity = identity or GoogleIdentityProvider(settings=self.settings)
        self.flow: SheetFlow | None = None

    async def run(self, reference: str | None) -> RenderCommand | None:
        """Ingest whatever the navigation context points at."""
        try:
            location = locate(reference, self.settings)
            set_context(source_kind=location.kind.value)
            log.info("pipeline.located", location=repr(location))

            match location:
                case CsvLocation(url=url):
                    await self._run_csv(url)
                case SheetLocation(sheet_id=sheet_id, sheet_name=sheet_name):
                    await self._run_sheet(sheet_id, sheet_name)
                case _:
                    self.display.show(ShowForm(self.settings.default_sheet_url), self.display.claim())
        except Exception as e:
            self.display.show(self.reporter.generic(e), self.display.claim())
        return self.display.current

    async def switch_account(self) -> RenderCommand | None:
        """Retry the current sheet with a forced account picker."""
        try:
            if self.flow is None:
                raise RuntimeError("No spreadsheet flow to switch account on")
            await self.flow.switch_account()
        except Exception as e:
            self.display.show(self.reporter.generic(e), self.display.claim())
        return self.display.current

    async def _run_csv(self, url: str) -> None:
        bind_context(url=url)
        generation = self.display.claim()
        self.display.show(ShowLoading(), generation)

        match await self.csv_source.fetch(url):
            case Ok(table):
                try:
                    command = ingest_named_table(
                        table, title=table.title, required=self.settings.required_headers
                    )
                except Exception as e:
                    command = self.reporter.command_for(e)
            case Err(error):
                command = self.reporter.command_for(error)
        self.display.show(command, generation)

    async def _run_sheet(self, sheet_id: str, sheet_name: str | None) -> None:
        bind_context(sheet_id=sheet_id, sheet_name=sheet_name)
        self.display.show(ShowLoading(), self.display.claim())
        self.flow = SheetFlow(
            sheet_id,
            sheet_name,
            sheets=self.sheets,
            identity=self.identity,
            display=self.display,
            reporter=self.reporter,
            required=self.settings.required_headers,
        )
        await self.flow.run()
