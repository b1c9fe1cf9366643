"""MCP tools around the GitHub login session.

The OAuth redirect service hands the token back in the fragment of the
frontend URL; 'complete_login' accepts that URL and authenticates the
shared Session used by the compare tools.
"""

from __future__ import annotations

from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import OAUTH_WORKER_URL
from core.errors import ValidationError
from core.session import Session


def register(mcp: FastMCP, *, github_client: GitHubClient, session: Optional[Session] = None) -> None:
    sess = session or github_client.session

    async def _status() -> dict[str, Any]:
        login = await github_client.fetch_user(sess)
        return {"state": sess.state.value, "login": login}

    @mcp.tool(name="auth_status")
    async def auth_status() -> dict[str, Any]:
        """Report whether requests are authenticated and as which GitHub user."""
        return await _status()

    @mcp.tool(name="login_url")
    def login_url() -> str:
        """URL to open in a browser to log in with GitHub (raises the rate limit to 5,000/hour)."""
        return f"{OAUTH_WORKER_URL}/login"

    @mcp.tool(name="complete_login")
    async def complete_login(callback_url: str) -> dict[str, Any]:
        """Finish login with the URL the browser landed on (contains #access_token=...)."""
        if not sess.accept_callback(callback_url):
            raise ValidationError("No access_token found in callback URL")
        return await _status()

    @mcp.tool(name="logout")
    def logout() -> dict[str, Any]:
        """Forget the access token; later requests are anonymous."""
        sess.logout()
        return {"state": sess.state.value, "login": None}
