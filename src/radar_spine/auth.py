"""
Identity provider for protected sheet reads.

``GoogleIdentityProvider`` runs the OAuth installed-app flow
(google-auth-oauthlib) and caches the authorized-user token on disk. A forced
login ignores the cache and asks Google for the account picker, which is how
"switch account" gets a different identity.

The browser flow blocks, so it runs in a worker thread; the rest of the
pipeline stays on the event loop.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

import httpx
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from radar_spine.core.errors import LoginError
from radar_spine.core.result import Err, Ok, Result
from radar_spine.core.settings import RadarSettings, get_settings
from radar_spine.logging import get_logger
from radar_spine.sources.protocol import Identity

log = get_logger(__name__)

UNKNOWN_IDENTITY = "an unknown account"


@runtime_checkable
class IdentityProvider(Protocol):
    async def login(self, force_account_picker: bool = False) -> Result[Identity]: ...

    def current_identity_label(self) -> str: ...


class GoogleIdentityProvider:
    """Google OAuth login with a JSON token cache."""

    def __init__(
        self,
        *,
        client_secret_path: Path | None = None,
        token_path: Path | None = None,
        scopes: list[str] | None = None,
        userinfo_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        flow_factory: Callable[[str, list[str]], Any] | None = None,
        settings: RadarSettings | None = None,
    ):
        settings = settings or get_settings()
        self.client_secret_path = Path(client_secret_path or settings.oauth_client_secret_path)
        self.token_path = Path(token_path or settings.oauth_token_path)
        self.scopes = scopes or settings.oauth_scopes
        self.userinfo_url = userinfo_url or settings.userinfo_url
        self.timeout = settings.http_timeout
        self._client = client
        self._flow_factory = flow_factory or InstalledAppFlow.from_client_secrets_file
        self._identity: Identity | None = None

    async def login(self, force_account_picker: bool = False) -> Result[Identity]:
        try:
            credentials = await asyncio.to_thread(self._load_credentials, force_account_picker)
        except LoginError as e:
            return Err(e)
        except Exception as e:
            log.warning("auth.login_failed", error=repr(e))
            return Err(LoginError("Login failed", cause=e))

        label = await self._fetch_label(credentials.token)
        self._identity = Identity(token=credentials.token, label=label)
        log.info("auth.logged_in", identity=label, forced=force_account_picker)
        return Ok(self._identity)

    def current_identity_label(self) -> str:
        if self._identity and self._identity.label:
            return self._identity.label
        return UNKNOWN_IDENTITY

    def _load_credentials(self, force: bool) -> Credentials:
        creds: Credentials | None = None
        if not force and self.token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self.token_path), self.scopes)

        if creds and creds.expired and creds.refresh_token:
            creds.refresh(Request())

        if not creds or not creds.valid:
            if not self.client_secret_path.exists():
                raise LoginError(f"OAuth client secret not found: {self.client_secret_path}")
            flow = self._flow_factory(str(self.client_secret_path), self.scopes)
            creds = flow.run_local_server(
                port=0,
                prompt="select_account" if force else "consent",
            )

        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(creds.to_json(), encoding="utf-8")
        return creds

    async def _fetch_label(self, token: str) -> str | None:
        headers = {"Authorization": f"Bearer {token}"}
        try:
            if self._client is not None:
                response = await self._client.get(self.userinfo_url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.userinfo_url, headers=headers)
            response.raise_for_status()
            return response.json().get("email")
        except (httpx.HTTPError, ValueError) as e:
            log.warning("auth.userinfo_failed", error=repr(e))
            return None
