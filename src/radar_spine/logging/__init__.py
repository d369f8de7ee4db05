"""
Structured, flow-aware logging.

Usage:
    from radar_spine.logging import configure_logging, get_logger, set_context

    configure_logging()
    log = get_logger(__name__)
    set_context(source_kind="google_sheet", sheet_id="abc123")
    log.info("flow.start")
"""

from radar_spine.logging.config import configure_logging, is_configured
from radar_spine.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    new_flow_id,
    set_context,
)

__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "set_context",
    "bind_context",
    "clear_context",
    "get_context",
    "new_flow_id",
    "LogContext",
]
