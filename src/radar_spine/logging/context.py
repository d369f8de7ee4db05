"""
Logging context management using contextvars.

The ingestion flow context (flow id, source coordinates, display generation,
current state) is attached to every log entry without threading it through
each call. contextvars are asyncio-safe: each task sees its own copy.
"""

import uuid
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


def new_flow_id() -> str:
    """Generate a short flow ID (8 hex chars)."""
    return uuid.uuid4().hex[:8]


@dataclass
class LogContext:
    """
    Context attached to all log entries.

    Identity:
        flow_id: One ingestion attempt (one pipeline run)
        generation: Display generation of the current flow stage

    Source:
        source_kind: "csv", "google_sheet", "form_prompt"
        sheet_id: Spreadsheet identifier
        sheet_name: Requested or resolved tab name
        url: CSV url

    Flow:
        state: Current authentication flow state
    """

    flow_id: str | None = None
    generation: int | None = None

    source_kind: str | None = None
    sheet_id: str | None = None
    sheet_name: str | None = None
    url: str | None = None

    state: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None and k in current})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    flow_id: str | None = None,
    source_kind: str | None = None,
    sheet_id: str | None = None,
    sheet_name: str | None = None,
    url: str | None = None,
    generation: int | None = None,
    state: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(
        flow_id=flow_id or new_flow_id(),
        generation=generation,
        source_kind=source_kind,
        sheet_id=sheet_id,
        sheet_name=sheet_name,
        url=url,
        state=state,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor that adds flow context to every log entry."""
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
