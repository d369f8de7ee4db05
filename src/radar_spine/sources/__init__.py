"""
Tabular sources for radar data.

Usage:
    from radar_spine.sources import CsvSource, GoogleSheetsSource

    result = await CsvSource().fetch("https://example.com/radar.csv")
    result = await GoogleSheetsSource().fetch_public("abc123", "Q1")
"""

from radar_spine.sources.csv_file import CsvSource, parse_csv_content
from radar_spine.sources.google_sheets import GoogleSheetsSource, a1_range
from radar_spine.sources.protocol import (
    CsvReader,
    HttpSource,
    Identity,
    NamedTable,
    PositionalTable,
    SheetReader,
)

__all__ = [
    "CsvReader",
    "CsvSource",
    "GoogleSheetsSource",
    "HttpSource",
    "Identity",
    "NamedTable",
    "PositionalTable",
    "SheetReader",
    "a1_range",
    "parse_csv_content",
]
