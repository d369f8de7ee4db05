# src/radar_spine/ingest.py

"""
Validate → sanitize → build, for both table shapes.

Both entry points raise MalformedDataError on any shape violation; nothing
is built unless every check passes.
"""

from collections.abc import Sequence

from radar_spine.builder import build_radar, display_title
from radar_spine.render import ShowRadar
from radar_spine.sanitizer import InputSanitizer
from radar_spine.sources.protocol import NamedTable, PositionalTable
from radar_spine.validation import ContentValidator


def sheet_title(document_title: str, sheet_name: str) -> str:
    return f"{document_title} - {sheet_name}"


def ingest_named_table(
    table: NamedTable,
    *,
    title: str | None = None,
    required: Sequence[str] | None = None,
) -> ShowRadar:
    """Build the radar command for label-keyed rows (CSV, anonymous sheet)."""
    validator = ContentValidator(table.columns, required)
    validator.verify_content(table.rows)
    validator.verify_headers()

    sanitizer = InputSanitizer()
    blips = [sanitizer.sanitize(row) for row in table.rows]
    radar = build_radar(blips, table.sheet_name, table.sheet_names)
    return ShowRadar(display_title(title or sheet_title(table.title, table.sheet_name)), radar)


def ingest_positional_table(
    table: PositionalTable,
    *,
    required: Sequence[str] | None = None,
) -> ShowRadar:
    """Build the radar command for header-first positional rows (protected sheet)."""
    validator = ContentValidator(table.header, required)
    validator.verify_content(table.rows)
    validator.verify_headers()

    sanitizer = InputSanitizer()
    blips = [sanitizer.sanitize_for_protected_sheet(row, table.header) for row in table.rows]
    radar = build_radar(blips, table.sheet_name, table.sheet_names)
    return ShowRadar(display_title(sheet_title(table.title, table.sheet_name)), radar)
