# src/radar_spine/sources/csv_file.py

"""CSV files fetched over HTTP."""

import csv
import io

import httpx

from radar_spine.core.errors import ErrorContext
from radar_spine.core.result import Err, Ok, Result, try_result
from radar_spine.core.settings import RadarSettings
from radar_spine.locator import file_name
from radar_spine.logging import get_logger
from radar_spine.sources.protocol import HttpSource, NamedTable, error_for_response, error_for_transport

log = get_logger(__name__)


def parse_csv_content(content: str, *, delimiter: str = ",") -> tuple[list[str], list[dict[str, str]]]:
    """Parse CSV text into (columns, rows keyed by column)."""
    reader = csv.DictReader(io.StringIO(content), delimiter=delimiter)
    rows = list(reader)
    return list(reader.fieldnames or []), rows


class CsvSource(HttpSource):
    """
    Read a radar from a CSV url.

    The table title is the file name; a CSV has a single sheet, labelled by
    the ``csv_sheet_label`` setting, and no alternatives.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        settings: RadarSettings | None = None,
    ):
        super().__init__(client=client, timeout=timeout, settings=settings)
        self.sheet_label = self.settings.csv_sheet_label

    async def fetch(self, url: str) -> Result[NamedTable]:
        context = ErrorContext(source_kind="csv", url=url)
        try:
            async with self._open() as client:
                response = await client.get(url)
                response.raise_for_status()
                # Excel-saved CSVs start with a UTF-8 byte-order mark
                content = response.text.removeprefix("\ufeff")
        except httpx.HTTPStatusError as e:
            return Err(error_for_response(e, context))
        except httpx.HTTPError as e:
            return Err(error_for_transport(e, context))

        parsed = try_result(lambda: parse_csv_content(content))
        if parsed.is_err():
            return parsed

        columns, rows = parsed.unwrap()
        log.info("csv.fetched", url=url, rows=len(rows), columns=len(columns))
        return Ok(
            NamedTable(
                title=file_name(url),
                columns=columns,
                rows=rows,
                sheet_name=self.sheet_label,
                sheet_names=[],
            )
        )
