"""
Render commands and the display they are issued to.

The pipeline never touches a page directly. It produces render commands and
hands them to a ``Renderer`` through a ``Display``. The display keeps a
generation counter: each flow stage claims a generation, and a command sent
under an older generation is dropped, so a superseded continuation cannot
overwrite newer output.

``ErrorReporter`` turns the error taxonomy into the matching command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from radar_spine import messages
from radar_spine.core.errors import ErrorKind, kind_of
from radar_spine.logging import bind_context, get_logger
from radar_spine.models import Radar

log = get_logger(__name__)


class DisplayKind(str, Enum):
    LOADING = "loading"
    FORM_PROMPT = "form-prompt"
    RADAR = "radar"
    MALFORMED_DATA = "malformed-data"
    NOT_FOUND = "not-found"
    UNAUTHORIZED = "unauthorized"
    ERROR = "error"


# =============================================================================
# COMMANDS
# =============================================================================


@dataclass(frozen=True)
class ShowLoading:
    message: str = messages.LOADING
    kind: DisplayKind = DisplayKind.LOADING


@dataclass(frozen=True)
class ShowForm:
    default_sheet_url: str | None = None
    kind: DisplayKind = DisplayKind.FORM_PROMPT


@dataclass(frozen=True)
class ShowRadar:
    title: str
    radar: Radar
    kind: DisplayKind = DisplayKind.RADAR


@dataclass(frozen=True)
class ShowError:
    kind: DisplayKind
    message: str
    hint: str = messages.FAQ_HINT


@dataclass(frozen=True)
class ShowUnauthorized:
    """Account mismatch; the renderer offers a switch-account action."""

    identity_label: str
    message: str
    kind: DisplayKind = DisplayKind.UNAUTHORIZED


RenderCommand = ShowLoading | ShowForm | ShowRadar | ShowError | ShowUnauthorized


@runtime_checkable
class Renderer(Protocol):
    def render(self, command: RenderCommand) -> None: ...


# =============================================================================
# DISPLAY
# =============================================================================


class Display:
    """The single shared output. Only the newest generation may write to it."""

    def __init__(self, renderer: Renderer):
        self.renderer = renderer
        self.generation = 0
        self.current: RenderCommand | None = None

    def claim(self) -> int:
        """Start a new generation, superseding all earlier ones."""
        self.generation += 1
        bind_context(generation=self.generation)
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def show(self, command: RenderCommand, generation: int | None = None) -> bool:
        """Render ``command`` unless ``generation`` has been superseded."""
        if generation is not None and not self.is_current(generation):
            log.info(
                "display.stale_dropped",
                command=type(command).__name__,
                stale_generation=generation,
                current_generation=self.generation,
            )
            return False
        self.current = command
        self.renderer.render(command)
        return True


# =============================================================================
# ERROR REPORTER
# =============================================================================


class ErrorReporter:
    """Map failures to user-facing commands. Unexpected errors are logged."""

    def command_for(self, error: BaseException) -> ShowError:
        match kind_of(error):
            case ErrorKind.MALFORMED_DATA:
                return ShowError(DisplayKind.MALFORMED_DATA, messages.LOAD_PROBLEM + str(error))
            case ErrorKind.SHEET_NOT_FOUND:
                return ShowError(DisplayKind.NOT_FOUND, str(error))
            case _:
                return self.generic(error)

    def generic(self, error: BaseException) -> ShowError:
        log.error("ingest.failed", error=repr(error), exc_info=error)
        return ShowError(DisplayKind.ERROR, messages.LOAD_PROBLEM.strip())

    def unauthorized(self, identity_label: str) -> ShowUnauthorized:
        return ShowUnauthorized(identity_label, messages.unauthorized_message(identity_label))
