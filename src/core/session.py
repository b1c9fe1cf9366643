"""Explicit holder for the GitHub access token.

A Session starts anonymous (or authenticated when GITHUB_TOKEN is set),
becomes authenticated after an OAuth callback or login, and returns to
anonymous on logout. Clients read auth headers from the session they are
given instead of a process-wide token.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional

import httpx

from core.errors import ValidationError


class AuthState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class Session:
    def __init__(self, token: Optional[str] = None) -> None:
        self._token: Optional[str] = (token or "").strip() or None

    @classmethod
    def from_env(cls, name: str = "GITHUB_TOKEN") -> "Session":
        return cls(os.environ.get(name))

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def state(self) -> AuthState:
        return AuthState.AUTHENTICATED if self._token else AuthState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    def login(self, token: str) -> None:
        clean = (token or "").strip()
        if not clean:
            raise ValidationError("access token must be non-empty")
        self._token = clean

    def logout(self) -> None:
        self._token = None

    def accept_callback(self, url_or_fragment: str) -> bool:
        """Log in from the "#access_token=..." fragment of an OAuth redirect.

        Returns True when a token was found.
        """
        raw = (url_or_fragment or "").strip()
        fragment = raw.split("#", 1)[1] if "#" in raw else raw
        if "access_token=" not in fragment:
            return False

        token = httpx.QueryParams(fragment).get("access_token")
        if not token:
            return False

        self.login(token)
        return True

    def auth_headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}
