"""Tests for GoogleIdentityProvider with a fake OAuth flow."""

import json

import httpx
import pytest

from radar_spine.auth import UNKNOWN_IDENTITY, GoogleIdentityProvider, IdentityProvider
from radar_spine.core.errors import ErrorKind
from radar_spine.core.settings import RadarSettings

USERINFO_URL = "https://auth.test/userinfo"


class FakeCredentials:
    def __init__(self, token):
        self.token = token
        self.valid = True
        self.expired = False
        self.refresh_token = None

    def to_json(self):
        return json.dumps({"token": self.token})


class FakeFlow:
    """Stands in for InstalledAppFlow; records run_local_server calls."""

    def __init__(self, token="fresh-token", error=None):
        self.token = token
        self.error = error
        self.factory_calls = []
        self.prompts = []

    def factory(self, client_secret_path, scopes):
        self.factory_calls.append((client_secret_path, scopes))
        return self

    def run_local_server(self, port, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return FakeCredentials(self.token)


def userinfo_client(email="alice@example.com", status=200):
    def handler(request):
        if status != 200:
            return httpx.Response(status)
        return httpx.Response(200, json={"email": email, "auth": request.headers["Authorization"]})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def client_secret(tmp_path):
    path = tmp_path / "client_secret.json"
    path.write_text("{}")
    return path


def provider(tmp_path, client_secret, flow, client=None):
    return GoogleIdentityProvider(
        client_secret_path=client_secret,
        token_path=tmp_path / "cache" / "token.json",
        scopes=["openid"],
        userinfo_url=USERINFO_URL,
        client=client or userinfo_client(),
        flow_factory=flow.factory,
    )


class TestLogin:
    @pytest.mark.asyncio
    async def test_first_login_runs_flow(self, tmp_path, client_secret):
        flow = FakeFlow()
        idp = provider(tmp_path, client_secret, flow)

        result = await idp.login()

        identity = result.unwrap()
        assert identity.token == "fresh-token"
        assert identity.label == "alice@example.com"
        assert flow.prompts == ["consent"]
        assert flow.factory_calls == [(str(client_secret), ["openid"])]
        assert json.loads((tmp_path / "cache" / "token.json").read_text()) == {"token": "fresh-token"}
        assert idp.current_identity_label() == "alice@example.com"

    @pytest.mark.asyncio
    async def test_cached_token_skips_flow(self, tmp_path, client_secret):
        token_path = tmp_path / "cache" / "token.json"
        token_path.parent.mkdir()
        token_path.write_text(
            json.dumps(
                {
                    "token": "cached-token",
                    "refresh_token": "refresh",
                    "client_id": "client",
                    "client_secret": "secret",
                }
            )
        )
        flow = FakeFlow()
        result = await provider(tmp_path, client_secret, flow).login()

        assert result.unwrap().token == "cached-token"
        assert flow.prompts == []

    @pytest.mark.asyncio
    async def test_forced_login_ignores_cache_and_picks_account(self, tmp_path, client_secret):
        flow = FakeFlow(token="second-account")
        idp = provider(tmp_path, client_secret, flow, client=userinfo_client("bob@example.com"))
        await idp.login()
        flow.token = "picked"

        result = await idp.login(force_account_picker=True)

        assert result.unwrap().token == "picked"
        assert flow.prompts == ["consent", "select_account"]
        assert idp.current_identity_label() == "bob@example.com"

    @pytest.mark.asyncio
    async def test_missing_client_secret(self, tmp_path):
        flow = FakeFlow()
        result = await provider(tmp_path, tmp_path / "missing.json", flow).login()

        assert result.is_err()
        assert result.error.kind is ErrorKind.LOGIN_FAILED
        assert flow.prompts == []

    @pytest.mark.asyncio
    async def test_flow_failure_becomes_login_error(self, tmp_path, client_secret):
        cause = RuntimeError("browser closed")
        result = await provider(tmp_path, client_secret, FakeFlow(error=cause)).login()

        assert result.error.kind is ErrorKind.LOGIN_FAILED
        assert result.error.cause is cause

    @pytest.mark.asyncio
    async def test_userinfo_failure_keeps_identity(self, tmp_path, client_secret):
        idp = provider(tmp_path, client_secret, FakeFlow(), client=userinfo_client(status=500))
        result = await idp.login()

        assert result.unwrap().label is None
        assert idp.current_identity_label() == UNKNOWN_IDENTITY


class TestIdentityLabel:
    def test_unknown_before_login(self, tmp_path, client_secret):
        idp = provider(tmp_path, client_secret, FakeFlow())
        assert idp.current_identity_label() == UNKNOWN_IDENTITY

    def test_satisfies_protocol(self, tmp_path, client_secret):
        assert isinstance(provider(tmp_path, client_secret, FakeFlow()), IdentityProvider)

    def test_injected_settings(self, tmp_path):
        settings = RadarSettings(
            oauth_client_secret_path=tmp_path / "secret.json",
            oauth_token_path=tmp_path / "token.json",
            http_timeout=3,
        )
        idp = GoogleIdentityProvider(settings=settings)
        assert idp.client_secret_path == tmp_path / "secret.json"
        assert idp.token_path == tmp_path / "token.json"
        assert idp.timeout == 3
