"""
Google Sheets reads over the Sheets v4 REST API.

Two reads are issued per fetch:

1. ``GET /spreadsheets/{id}?fields=properties.title,sheets.properties.title``
   for the document title and tab names
2. ``GET /spreadsheets/{id}/values/{range}`` for the cells of one tab
   (the requested tab, else the first discovered one)

The anonymous read authenticates with the optional API key and returns a
``NamedTable``; the protected read sends the identity's bearer token and
returns the raw ``PositionalTable``.

Status mapping: 404 → SheetNotFoundError, 401/403 → ForbiddenError,
anything else → SourceError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from radar_spine.core.errors import ErrorContext, SourceError
from radar_spine.core.result import Err, Ok, Result
from radar_spine.core.settings import RadarSettings
from radar_spine.logging import get_logger
from radar_spine.sources.protocol import (
    HttpSource,
    Identity,
    NamedTable,
    PositionalTable,
    error_for_response,
    error_for_transport,
)

log = get_logger(__name__)

METADATA_FIELDS = "properties.title,sheets.properties.title"


def a1_range(sheet_name: str) -> str:
    """Whole-sheet A1 range for a tab name, quoted and URL-encoded."""
    escaped = sheet_name.replace("'", "''")
    return quote(f"'{escaped}'", safe="")


@dataclass(frozen=True)
class _SheetRead:
    title: str
    sheet_name: str
    sheet_names: list[str]
    values: list[list[Any]]


class GoogleSheetsSource(HttpSource):
    """Anonymous and authenticated reads of one spreadsheet tab."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        api_base: str | None = None,
        api_key: str | None = None,
        settings: RadarSettings | None = None,
    ):
        super().__init__(client=client, timeout=timeout, settings=settings)
        self.api_base = (api_base or self.settings.sheets_api_base).rstrip("/")
        if api_key is None and self.settings.google_api_key is not None:
            api_key = self.settings.google_api_key.get_secret_value()
        self.api_key = api_key

    async def fetch_public(self, sheet_id: str, sheet_name: str | None = None) -> Result[NamedTable]:
        params = {"key": self.api_key} if self.api_key else {}
        result = await self._read(sheet_id, sheet_name, params=params, headers={})
        return result.map(self._named)

    async def fetch_protected(
        self,
        sheet_id: str,
        sheet_name: str | None,
        identity: Identity,
    ) -> Result[PositionalTable]:
        headers = {"Authorization": f"Bearer {identity.token}"}
        result = await self._read(sheet_id, sheet_name, params={}, headers=headers)
        return result.map(
            lambda read: PositionalTable(
                title=read.title,
                values=read.values,
                sheet_name=read.sheet_name,
                sheet_names=read.sheet_names,
            )
        )

    async def _read(
        self,
        sheet_id: str,
        sheet_name: str | None,
        *,
        params: dict[str, str],
        headers: dict[str, str],
    ) -> Result[_SheetRead]:
        context = ErrorContext(source_kind="google_sheet", sheet_id=sheet_id, sheet_name=sheet_name)
        base = f"{self.api_base}/spreadsheets/{quote(sheet_id, safe='')}"
        try:
            async with self._open() as client:
                response = await client.get(
                    base,
                    params={**params, "fields": METADATA_FIELDS},
                    headers=headers,
                )
                response.raise_for_status()
                metadata = response.json()

                title = metadata.get("properties", {}).get("title", "")
                sheet_names = [
                    sheet.get("properties", {}).get("title", "")
                    for sheet in metadata.get("sheets", [])
                ]
                resolved = sheet_name or (sheet_names[0] if sheet_names else None)
                if resolved is None:
                    return Err(SourceError("Spreadsheet has no sheets", context=context))

                response = await client.get(
                    f"{base}/values/{a1_range(resolved)}",
                    params=params,
                    headers=headers,
                )
                response.raise_for_status()
                values = response.json().get("values", [])
        except httpx.HTTPStatusError as e:
            return Err(error_for_response(e, context))
        except httpx.HTTPError as e:
            return Err(error_for_transport(e, context))
        except ValueError as e:
            # Non-JSON body
            return Err(SourceError("Malformed response from Sheets API", context=context, cause=e))

        log.info(
            "sheet.fetched",
            sheet_id=sheet_id,
            sheet_name=resolved,
            rows=len(values),
            authenticated="Authorization" in headers,
        )
        return Ok(_SheetRead(title=title, sheet_name=resolved, sheet_names=sheet_names, values=values))

    @staticmethod
    def _named(read: _SheetRead) -> NamedTable:
        header = [str(label).strip() for label in read.values[0]] if read.values else []
        rows = [dict(zip(header, row)) for row in read.values[1:]]
        return NamedTable(
            title=read.title,
            columns=header,
            rows=rows,
            sheet_name=read.sheet_name,
            sheet_names=read.sheet_names,
        )
