"""Core primitives: error taxonomy, result envelope, settings."""

from radar_spine.core.errors import (
    ErrorContext,
    ErrorKind,
    ForbiddenError,
    LoginError,
    MalformedDataError,
    RadarError,
    SheetNotFoundError,
    SourceError,
    kind_of,
)
from radar_spine.core.result import Err, Ok, Result, try_result
from radar_spine.core.settings import RadarSettings, get_settings

__all__ = [
    "ErrorContext",
    "ErrorKind",
    "ForbiddenError",
    "LoginError",
    "MalformedDataError",
    "RadarError",
    "SheetNotFoundError",
    "SourceError",
    "kind_of",
    "Ok",
    "Err",
    "Result",
    "try_result",
    "RadarSettings",
    "get_settings",
]
