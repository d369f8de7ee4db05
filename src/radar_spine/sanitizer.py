# src/radar_spine/sanitizer.py

"""
Row normalization.

Turns a raw row into a NormalizedBlip. Two row shapes exist:

- label-keyed rows (CSV files, anonymous sheet reads)
- positional rows plus a separate header (protected sheet reads)

Both shapes end up in the same rules:
- every field is whitespace-trimmed
- a missing column yields "" rather than an error
- isNew is True only when it lower-cases to exactly "true"

Required columns are not checked here; ContentValidator runs first.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from radar_spine.models import NormalizedBlip


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class InputSanitizer:
    """Normalize raw rows into NormalizedBlip records."""

    def sanitize(self, raw_row: Mapping[Any, Any]) -> NormalizedBlip:
        """Normalize a row keyed by header label."""
        # csv.DictReader puts overflow cells under a None key
        row = {_text(key): _text(value) for key, value in raw_row.items() if key is not None}
        return NormalizedBlip(
            name=row.get("name", ""),
            quadrant=row.get("quadrant", ""),
            ring=row.get("ring", ""),
            is_new=row.get("isNew", "").lower() == "true",
            topic=row.get("topic", ""),
            description=row.get("description", ""),
        )

    def sanitize_for_protected_sheet(
        self,
        raw_row: Sequence[Any],
        header: Sequence[Any],
    ) -> NormalizedBlip:
        """Pair positional values with header labels by index, then normalize."""
        # The Sheets API drops trailing empty cells, so rows may be shorter than the header
        return self.sanitize(dict(zip(header, raw_row)))
