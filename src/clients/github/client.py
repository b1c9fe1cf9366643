"""GitHub client module: compare two refs and look up the signed-in user.

This module provides a small async client focused on the two REST calls the
diff viewer needs: the repository compare endpoint (per-file change
records between two refs) and `/user` (who the access token belongs to).
Authentication comes from an explicit `core.session.Session`; rate-limit
exhaustion is turned into a readable `RateLimitError`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from core.errors import ExternalServiceError, NotFoundError, RateLimitError
from core.models import CompareResult
from core.rate_limit import RateLimitInfo, rate_limit_message
from core.session import Session

from .inputs import normalize_ref, parse_repo

log = logging.getLogger(__name__)


class GitHubClient:
    """Async GitHub client for ref comparisons.

    Purpose:
      - compare(repo, base, head, session=None) -> CompareResult
      - fetch_user(session=None) -> Optional[str]

    Key behavior:
      - One short-lived httpx.AsyncClient per call.
      - Bearer auth only when the session is authenticated.
      - 403 with an exhausted rate limit raises RateLimitError with the
        minutes until reset; other failures raise NotFoundError or
        ExternalServiceError carrying GitHub's own message.
    """

    BASE_URL = "https://api.github.com"
    JSON_ACCEPT = "application/vnd.github+json"

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        verify: bool = True,
        session: Optional[Session] = None,
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)
        self._session = session or Session()

        self._headers = self._build_headers()

    @property
    def session(self) -> Session:
        return self._session

    async def compare(
        self,
        *,
        repo: str,
        base: str,
        head: str,
        session: Optional[Session] = None,
    ) -> CompareResult:
        """Compare `base...head` and return the per-file change records in upstream order."""
        owner, name = parse_repo(repo)
        base_ref = normalize_ref(base)
        head_ref = normalize_ref(head)
        sess = session or self._session

        url = f"/repos/{owner}/{name}/compare/{base_ref}...{head_ref}"
        log.info("Comparing %s/%s %s...%s (authenticated=%s)", owner, name, base_ref, head_ref, sess.is_authenticated)

        async with self._create_client(custom_headers=sess.auth_headers()) as client:
            resp = await self._request(client, url)
            self._raise_for_status(resp, session=sess)
            result = CompareResult.from_api(resp.json() or {})

        log.debug("Compare %s returned %d files", url, len(result.files))
        return result

    async def fetch_user(self, session: Optional[Session] = None) -> Optional[str]:
        """Return the login of the token owner; logs the session out if GitHub rejects the token."""
        sess = session or self._session
        if not sess.is_authenticated:
            return None

        async with self._create_client(custom_headers=sess.auth_headers()) as client:
            resp = await self._request(client, "/user")
            rejected = resp.status_code == 401 or (
                resp.status_code == 403 and not RateLimitInfo.from_headers(resp.headers).is_exhausted
            )
            if rejected:
                log.warning("GitHub rejected the stored access token (HTTP %d); logging out", resp.status_code)
                sess.logout()
                return None
            self._raise_for_status(resp, session=sess)
            login = (resp.json() or {}).get("login")

        return str(login) if login else None

    # --- HTTP helpers ---

    def _build_headers(self) -> dict[str, str]:
        return {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": "gh-dir-diff",
        }

    def _create_client(self, custom_headers: Optional[Mapping[str, str]] = None) -> httpx.AsyncClient:
        headers = {**self._headers, **dict(custom_headers or {})}
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=headers,
            timeout=self._timeout,
            verify=self._verify,
        )

    def _error_message(self, resp: httpx.Response) -> str:
        try:
            data: Any = resp.json()
        except ValueError:
            data = None
        message = data.get("message") if isinstance(data, dict) else None
        return str(message) if message else f"HTTP {resp.status_code}"

    def _raise_for_status(self, resp: httpx.Response, *, session: Session) -> None:
        if resp.is_success:
            return

        if resp.status_code == 403:
            info = RateLimitInfo.from_headers(resp.headers)
            if info.is_exhausted:
                log.warning("GitHub rate limit exhausted; resets at %s", info.reset_at)
                raise RateLimitError(
                    rate_limit_message(info, authenticated=session.is_authenticated),
                    reset_at=info.reset_at,
                )

        message = self._error_message(resp)
        if resp.status_code == 404:
            raise NotFoundError(message)
        raise ExternalServiceError(message)

    async def _request(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"GitHub request failed (GET {url}): {e}") from e
