"""
Source resolution and authentication flow for spreadsheet radars.

State machine::

    START → TRY_ANONYMOUS ─┬─ Ok ──────────────→ SUCCESS | FAILED
                           ├─ SHEET_NOT_FOUND ─→ NOT_FOUND            (terminal)
                           └─ any other Err ───→ AUTHENTICATING
    AUTHENTICATING ─┬─ login Err ─→ AUTH_FAILURE                      (terminal)
                    └─ login Ok ──→ TRY_PROTECTED
    TRY_PROTECTED ─┬─ Ok ─────────→ SUCCESS | FAILED
                   ├─ FORBIDDEN ──→ FORBIDDEN    (switch_account re-enters AUTHENTICATING)
                   └─ other Err ──→ FAILED

An anonymous read that fails for any reason except "not found" is assumed to
be fixable by logging in. Absence is not an access problem, so NOT_FOUND never
triggers a login.

Every public entry point claims a new display generation. A continuation
that resumes after a newer generation was claimed (e.g. the first protected
read finishing after the user pressed "switch account") neither changes the
state nor renders.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from enum import Enum

from radar_spine.auth import IdentityProvider
from radar_spine.core.errors import ErrorKind, kind_of
from radar_spine.core.result import Err, Ok
from radar_spine.ingest import ingest_named_table, ingest_positional_table
from radar_spine.logging import bind_context, get_logger
from radar_spine.render import Display, ErrorReporter, ShowRadar
from radar_spine.sources.protocol import SheetReader

log = get_logger(__name__)


class FlowState(str, Enum):
    START = "start"
    TRY_ANONYMOUS = "try_anonymous"
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    AUTHENTICATING = "authenticating"
    AUTH_FAILURE = "auth_failure"
    TRY_PROTECTED = "try_protected"
    FORBIDDEN = "forbidden"
    FAILED = "failed"


TERMINAL_STATES = frozenset(
    {
        FlowState.SUCCESS,
        FlowState.NOT_FOUND,
        FlowState.AUTH_FAILURE,
        FlowState.FORBIDDEN,
        FlowState.FAILED,
    }
)


class SheetFlow:
    """Drive one spreadsheet from anonymous read to a rendered outcome."""

    def __init__(
        self,
        sheet_id: str,
        sheet_name: str | None = None,
        *,
        sheets: SheetReader,
        identity: IdentityProvider,
        display: Display,
        reporter: ErrorReporter | None = None,
        required: Sequence[str] | None = None,
    ):
        self.sheet_id = sheet_id
        self.sheet_name = sheet_name
        self.sheets = sheets
        self.identity = identity
        self.display = display
        self.reporter = reporter or ErrorReporter()
        self.required = required
        self.state = FlowState.START
        self.history: list[FlowState] = [FlowState.START]
        self._login_lock = asyncio.Lock()

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    async def run(self) -> FlowState:
        """Try an anonymous read, falling back to login when it is refused."""
        generation = self.display.claim()
        if not self._transition(FlowState.TRY_ANONYMOUS, generation):
            return self.state

        try:
            outcome = await self.sheets.fetch_public(self.sheet_id, self.sheet_name)
        except Exception as e:
            self._fail(e, generation)
            return self.state

        match outcome:
            case Ok(table):
                self._ingest(lambda: ingest_named_table(table, required=self.required), generation)
            case Err(error) if kind_of(error) is ErrorKind.SHEET_NOT_FOUND:
                if self._transition(FlowState.NOT_FOUND, generation):
                    self.display.show(self.reporter.command_for(error), generation)
            case Err(error):
                log.info("flow.anonymous_refused", kind=kind_of(error).value, error=str(error))
                return await self._authenticate(False, generation)
        return self.state

    async def authenticate(self, force: bool = False) -> FlowState:
        """Log in (optionally forcing the account picker) and read as that identity."""
        generation = self.display.claim()
        return await self._authenticate(force, generation)

    async def switch_account(self) -> FlowState:
        """Forced re-login from the FORBIDDEN state; supersedes any pending stage."""
        return await self.authenticate(force=True)

    # ------------------------------------------------------------------ #
    # Stages
    # ------------------------------------------------------------------ #

    async def _authenticate(self, force: bool, generation: int) -> FlowState:
        if not self._transition(FlowState.AUTHENTICATING, generation):
            return self.state

        async with self._login_lock:
            if not self.display.is_current(generation):
                return self.state
            try:
                login = await self.identity.login(force)
            except Exception as e:
                self._fail(e, generation, state=FlowState.AUTH_FAILURE)
                return self.state

        match login:
            case Err(error):
                if self._transition(FlowState.AUTH_FAILURE, generation):
                    self.display.show(self.reporter.generic(error), generation)
                return self.state
        identity = login.unwrap()

        if not self._transition(FlowState.TRY_PROTECTED, generation):
            return self.state

        try:
            outcome = await self.sheets.fetch_protected(self.sheet_id, self.sheet_name, identity)
        except Exception as e:
            self._fail(e, generation)
            return self.state

        match outcome:
            case Ok(table):
                self._ingest(lambda: ingest_positional_table(table, required=self.required), generation)
            case Err(error) if kind_of(error) is ErrorKind.FORBIDDEN:
                if self._transition(FlowState.FORBIDDEN, generation):
                    label = self.identity.current_identity_label()
                    self.display.show(self.reporter.unauthorized(label), generation)
            case Err(error):
                self._fail(error, generation)
        return self.state

    def _ingest(self, build: Callable[[], ShowRadar], generation: int) -> None:
        try:
            command = build()
        except Exception as e:
            if self._transition(FlowState.FAILED, generation):
                self.display.show(self.reporter.command_for(e), generation)
            return
        if self._transition(FlowState.SUCCESS, generation):
            self.display.show(command, generation)

    def _fail(self, error: BaseException, generation: int, state: FlowState = FlowState.FAILED) -> None:
        if self._transition(state, generation):
            self.display.show(self.reporter.generic(error), generation)

    def _transition(self, state: FlowState, generation: int) -> bool:
        if not self.display.is_current(generation):
            log.info("flow.superseded", attempted=state.value, stale_generation=generation)
            return False
        log.info("flow.transition", from_state=self.state.value, to_state=state.value)
        self.state = state
        self.history.append(state)
        bind_context(state=state.value)
        return True
