"""
Structured error types for radar ingestion.

Every failure the ingestion pipeline can surface to a user belongs to a small,
closed taxonomy. Each error carries an ``ErrorKind`` tag so that callers can
branch on the tag (``match error.kind``) instead of on exception identity, plus
an ``ErrorContext`` with the source coordinates that produced it.

Manifesto:
    - **Closed taxonomy:** Five kinds, each with exactly one display state
    - **Tagged, not typed:** Flow decisions are made on ``kind``
    - **Rich context:** Errors carry sheet/url/status metadata for logging
    - **Error chaining:** Preserve original exceptions as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                       RadarError                          │
        │              (kind, context, cause, message)              │
        ├──────────────────────────────────────────────────────────┤
        │  MalformedDataError   SheetNotFoundError   ForbiddenError │
        │  (MALFORMED_DATA)     (SHEET_NOT_FOUND)    (FORBIDDEN)    │
        │                                                           │
        │  LoginError           SourceError                         │
        │  (LOGIN_FAILED)       (OTHER)                             │
        └──────────────────────────────────────────────────────────┘

Usage:
    from radar_spine.core.errors import SheetNotFoundError, SourceError

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            return Err(SheetNotFoundError(SHEET_NOT_FOUND, cause=e))
        return Err(SourceError("Sheet read failed", cause=e))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds the pipeline can report."""

    MALFORMED_DATA = "MALFORMED_DATA"
    SHEET_NOT_FOUND = "SHEET_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    LOGIN_FAILED = "LOGIN_FAILED"
    OTHER = "OTHER"


@dataclass
class ErrorContext:
    """
    Structured context attached to a RadarError.

    Attributes:
        source_kind: Kind of source being read ("csv", "google_sheet")
        sheet_id: Spreadsheet identifier if applicable
        sheet_name: Tab name if applicable
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    source_kind: str | None = None
    sheet_id: str | None = None
    sheet_name: str | None = None
    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["source_kind", "sheet_id", "sheet_name", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RadarError(Exception):
    """
    Base exception for all radar ingestion errors.

    Subclasses set ``default_kind``; the kind may be overridden per instance
    but normally is not.
    """

    default_kind: ErrorKind = ErrorKind.OTHER

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RadarError:
        """
        Add context to this error (fluent API).

        Unknown keys land in ``context.metadata``.

        Usage:
            raise SourceError("Failed").with_context(url=url, http_status=500)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "kind": self.kind.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind.value})"


class MalformedDataError(RadarError):
    """Header, shape, or ring-count violation. Fixable by editing the source data."""

    default_kind = ErrorKind.MALFORMED_DATA


class SheetNotFoundError(RadarError):
    """The identifier does not resolve to any resource. Terminal for the load."""

    default_kind = ErrorKind.SHEET_NOT_FOUND


class ForbiddenError(RadarError):
    """The resource exists but the current identity may not read it."""

    default_kind = ErrorKind.FORBIDDEN


class LoginError(RadarError):
    """The identity provider did not produce an identity."""

    default_kind = ErrorKind.LOGIN_FAILED


class SourceError(RadarError):
    """Network or unexpected upstream failure. Details are logged, not shown."""

    default_kind = ErrorKind.OTHER


def kind_of(error: BaseException) -> ErrorKind:
    """Get the kind of any exception; foreign exceptions are ``OTHER``."""
    if isinstance(error, RadarError):
        return error.kind
    return ErrorKind.OTHER


__all__ = [
    "ErrorKind",
    "ErrorContext",
    "RadarError",
    "MalformedDataError",
    "SheetNotFoundError",
    "ForbiddenError",
    "LoginError",
    "SourceError",
    "kind_of",
]
