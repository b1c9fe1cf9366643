"""Server-to-server exchange of an OAuth authorization code for a token."""

from __future__ import annotations

import logging

import httpx

from core.errors import AuthError, ExternalServiceError, ValidationError

log = logging.getLogger(__name__)


class OAuthClient:
    AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
    TOKEN_URL = "https://github.com/login/oauth/access_token"

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        timeout: float = 20.0,
        verify: bool = True,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = float(timeout)
        self._verify = bool(verify)

    @property
    def client_id(self) -> str:
        return self._client_id

    def authorize_url(self, *, redirect_uri: str, state: str, scope: str = "repo") -> str:
        url = httpx.URL(
            self.AUTHORIZE_URL,
            params={
                "client_id": self._client_id,
                "redirect_uri": redirect_uri,
                "scope": scope,
                "state": state,
            },
        )
        return str(url)

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, verify=self._verify)

    async def exchange_code(self, code: str) -> str:
        code_clean = (code or "").strip()
        if not code_clean:
            raise ValidationError("Missing OAuth code")

        try:
            async with self._create_client() as c:
                r = await c.post(
                    self.TOKEN_URL,
                    json={
                        "client_id": self._client_id,
                        "client_secret": self._client_secret,
                        "code": code_clean,
                    },
                    headers={"Accept": "application/json"},
                )
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(f"GitHub token endpoint returned an error: {e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to call GitHub token endpoint: {e}") from e
        except ValueError as e:
            raise ExternalServiceError("GitHub token endpoint returned invalid JSON") from e

        token = data.get("access_token") if isinstance(data, dict) else None
        error = data.get("error") if isinstance(data, dict) else None
        if error or not token:
            detail = (data.get("error_description") if isinstance(data, dict) else None) or error
            log.warning("OAuth code exchange rejected: %s", error or "no token")
            raise AuthError(f"OAuth error: {detail}")

        return str(token)
