# src/radar_spine/validation.py

"""Shape checks that must pass before rows are sanitized."""

from collections.abc import Iterable, Sequence
from typing import Any

from radar_spine import messages
from radar_spine.core.errors import MalformedDataError
from radar_spine.core.settings import get_settings


class ContentValidator:
    """
    Validate a table's header row and row count.

    Both checks are pure and raise MalformedDataError on violation.
    Callers run both before handing rows to the sanitizer.
    """

    def __init__(self, headers: Iterable[Any], required: Sequence[str] | None = None):
        self.headers = [str(h).strip() for h in headers if h is not None]
        self.required = list(required) if required is not None else get_settings().required_headers

    def verify_headers(self) -> None:
        missing = [name for name in self.required if name not in self.headers]
        if missing:
            raise MalformedDataError(messages.MISSING_HEADERS).with_context(missing=missing)

    def verify_content(self, rows: Sequence[Any]) -> None:
        if len(rows) == 0:
            raise MalformedDataError(messages.MISSING_CONTENT)
