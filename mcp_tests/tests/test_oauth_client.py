import json

import httpx
import pytest

from clients.github import OAuthClient
from core.errors import AuthError, ExternalServiceError, ValidationError


def _patch_transport(monkeypatch, client: OAuthClient, handler):
    transport = httpx.MockTransport(handler)

    def _create_client():
        return httpx.AsyncClient(transport=transport)

    monkeypatch.setattr(client, "_create_client", _create_client)


def _client() -> OAuthClient:
    return OAuthClient(client_id="cid", client_secret="csecret", timeout=5.0, verify=False)


def test_authorize_url_has_expected_params():
    url = httpx.URL(_client().authorize_url(redirect_uri="https://w.example/callback", state="1-abc"))
    assert url.host == "github.com"
    assert url.path == "/login/oauth/authorize"
    assert url.params["client_id"] == "cid"
    assert url.params["redirect_uri"] == "https://w.example/callback"
    assert url.params["scope"] == "repo"
    assert url.params["state"] == "1-abc"


@pytest.mark.asyncio
async def test_exchange_code_success(monkeypatch):
    client = _client()
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["accept"] = request.headers["Accept"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "gho_123", "token_type": "bearer"})

    _patch_transport(monkeypatch, client, handler)

    assert await client.exchange_code("the-code") == "gho_123"
    assert seen["url"] == OAuthClient.TOKEN_URL
    assert seen["accept"] == "application/json"
    assert seen["body"] == {"client_id": "cid", "client_secret": "csecret", "code": "the-code"}


@pytest.mark.asyncio
async def test_exchange_code_error_payload(monkeypatch):
    client = _client()

    def handler(request):
        return httpx.Response(
            200,
            json={"error": "bad_verification_code", "error_description": "The code passed is incorrect or expired."},
        )

    _patch_transport(monkeypatch, client, handler)

    with pytest.raises(AuthError, match="OAuth error: The code passed is incorrect or expired."):
        await client.exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_code_missing_token(monkeypatch):
    client = _client()
    _patch_transport(monkeypatch, client, lambda request: httpx.Response(200, json={"error": "oops"}))

    with pytest.raises(AuthError, match="OAuth error: oops"):
        await client.exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_code_http_error(monkeypatch):
    client = _client()
    _patch_transport(monkeypatch, client, lambda request: httpx.Response(502, content=b"bad gateway"))

    with pytest.raises(ExternalServiceError):
        await client.exchange_code("x")


@pytest.mark.asyncio
async def test_exchange_code_requires_code():
    with pytest.raises(ValidationError):
        await _client().exchange_code("  ")
