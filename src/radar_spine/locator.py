"""
Source location from the navigation context.

The navigation context is a full URL or a bare query string carrying a
``sheetId`` parameter (spreadsheet id, spreadsheet URL, or CSV URL) and an
optional ``sheetName``. The locator commits to exactly one source kind:

    >>> locate("?sheetId=https://example.com/data.csv")
    CsvLocation(url='https://example.com/data.csv', kind=<SourceKind.CSV: 'csv'>)
    >>> locate("")
    FormPrompt(kind=<SourceKind.FORM_PROMPT: 'form_prompt'>)

CSV detection runs before spreadsheet-provider detection, so a CSV hosted on a
provider domain is still read as CSV.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import parse_qsl, unquote_plus

from radar_spine.core.settings import RadarSettings, get_settings


_DOMAIN_PATTERN = re.compile(r".+://([^\\/]+)")
_FILE_NAME_PATTERN = re.compile(r"([^\\/]+)$")
_SHEET_URL_PATTERN = re.compile(r"https://docs\.google\.com/spreadsheets/d/(.*?)($|/$|/.*|\?.*)")


class SourceKind(str, Enum):
    CSV = "csv"
    GOOGLE_SHEET = "google_sheet"
    FORM_PROMPT = "form_prompt"


@dataclass(frozen=True)
class CsvLocation:
    url: str
    kind: SourceKind = field(default=SourceKind.CSV, init=False)


@dataclass(frozen=True)
class SheetLocation:
    sheet_id: str
    sheet_name: str | None = None
    kind: SourceKind = field(default=SourceKind.GOOGLE_SHEET, init=False)


@dataclass(frozen=True)
class FormPrompt:
    kind: SourceKind = field(default=SourceKind.FORM_PROMPT, init=False)


Location = CsvLocation | SheetLocation | FormPrompt


def query_string(reference: str) -> str:
    """Return the query portion of a URL, or the reference itself if it has none."""
    if "?" in reference:
        return reference.split("?", 1)[1]
    return reference


def domain_name(query: str) -> str | None:
    """Extract the host that follows the last scheme marker in a decoded query."""
    match = _DOMAIN_PATTERN.search(unquote_plus(query))
    return match.group(1) if match else None


def file_name(url: str) -> str:
    """Decoded last path segment of a URL, or the URL itself."""
    match = _FILE_NAME_PATTERN.search(unquote_plus(url))
    return match.group(1) if match else url


def sheet_id_from_reference(reference: str) -> str:
    """Spreadsheet id from a docs.google.com URL; bare ids pass through."""
    match = _SHEET_URL_PATTERN.match(reference)
    return match.group(1) if match else reference


def query_params(reference: str) -> dict[str, str]:
    """Parameters from the first ``sheetId`` occurrence onward."""
    index = reference.find("sheetId")
    if index == -1:
        return {}
    return dict(parse_qsl(reference[index:], keep_blank_values=True))


def locate(reference: str | None, settings: RadarSettings | None = None) -> Location:
    """Resolve the navigation context to a source location. Never raises."""
    settings = settings or get_settings()
    if not reference:
        return FormPrompt()

    query = query_string(reference)
    domain = domain_name(query) or domain_name(reference)
    params = query_params(query)
    sheet_id = (params.get("sheetId") or "").strip()
    sheet_name = params.get("sheetName") or None

    if domain and sheet_id.endswith(settings.csv_suffix):
        return CsvLocation(url=sheet_id)
    if domain and domain.endswith(settings.provider_domain_suffix) and sheet_id:
        return SheetLocation(sheet_id=sheet_id_from_reference(sheet_id), sheet_name=sheet_name)
    return FormPrompt()
