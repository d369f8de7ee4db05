"""
Tabular source protocol.

Every remote read returns a ``Result``: ``Ok`` with a table, or ``Err`` with a
RadarError whose ``kind`` tells the caller what happened:

- SHEET_NOT_FOUND: the identifier resolves to nothing
- FORBIDDEN: the resource exists but the identity may not read it
- OTHER: network or unexpected upstream failure

Two table shapes exist. ``NamedTable`` rows are keyed by column label;
``PositionalTable`` values are raw cell sequences whose first row is the
header.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx

from radar_spine import messages
from radar_spine.core.errors import ErrorContext, ForbiddenError, RadarError, SheetNotFoundError, SourceError
from radar_spine.core.result import Result
from radar_spine.core.settings import RadarSettings, get_settings


@dataclass(frozen=True)
class NamedTable:
    """Rows keyed by column label."""

    title: str
    columns: list[str]
    rows: list[dict[str, Any]]
    sheet_name: str
    sheet_names: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class PositionalTable:
    """Raw cell rows; ``values[0]`` is the header row."""

    title: str
    values: list[list[Any]]
    sheet_name: str
    sheet_names: list[str] = field(default_factory=list)

    @property
    def header(self) -> list[Any]:
        return self.values[0] if self.values else []

    @property
    def rows(self) -> list[list[Any]]:
        return self.values[1:]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Identity:
    """An authenticated identity as seen by the sources."""

    token: str
    label: str | None = None


@runtime_checkable
class CsvReader(Protocol):
    async def fetch(self, url: str) -> Result[NamedTable]: ...


@runtime_checkable
class SheetReader(Protocol):
    async def fetch_public(self, sheet_id: str, sheet_name: str | None = None) -> Result[NamedTable]: ...

    async def fetch_protected(
        self,
        sheet_id: str,
        sheet_name: str | None,
        identity: Identity,
    ) -> Result[PositionalTable]: ...


# =============================================================================
# BASE SOURCE IMPLEMENTATION
# =============================================================================


class HttpSource:
    """
    Base class for HTTP-backed sources.

    A shared ``httpx.AsyncClient`` may be injected (and stays open);
    otherwise each read opens and closes its own client.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        settings: RadarSettings | None = None,
    ):
        self._client = client
        self.settings = settings or get_settings()
        self.timeout = timeout if timeout is not None else self.settings.http_timeout

    @asynccontextmanager
    async def _open(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client


def error_for_response(error: httpx.HTTPStatusError, context: ErrorContext) -> RadarError:
    """Map an HTTP status failure onto the error taxonomy."""
    status = error.response.status_code
    context.http_status = status
    context.url = str(error.request.url)
    if status == 404:
        return SheetNotFoundError(messages.SHEET_NOT_FOUND, context=context, cause=error)
    if status in (401, 403):
        return ForbiddenError(messages.UNAUTHORIZED, context=context, cause=error)
    return SourceError(f"Upstream returned HTTP {status}", context=context, cause=error)


def error_for_transport(error: httpx.HTTPError, context: ErrorContext) -> RadarError:
    """Map a transport-level failure (DNS, connect, timeout) onto SourceError."""
    return SourceError(f"Request failed: {error}", context=context, cause=error)
