"""MCP tools that convert between form values and shareable links."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from config import SHARE_PATH_PREFIX
from core.errors import ValidationError
from core.models import CompareForm
from core.share_url import build_share_path, parse_share_url


def register(mcp: FastMCP) -> None:
    @mcp.tool(name="build_share_link")
    def build_share_link(repo: str, base: str, head: str, path_filter: str = "") -> str:
        """Build the shareable path for a comparison.

        Returns "/gh-dir-diff/<owner>/<repo>/<base>..<head>" with
        "?filter=<glob>" when a filter is given.
        """
        path = build_share_path(
            CompareForm(repo=repo or "", base=base or "", head=head or "", path_filter=path_filter or ""),
            SHARE_PATH_PREFIX,
        )
        if path is None:
            raise ValidationError("repo, base and head are required")
        return path

    @mcp.tool(name="parse_share_link")
    def parse_share_link(url: str) -> dict[str, str]:
        """Parse a shareable link back into repo, base, head and filter."""
        form = parse_share_url(url, SHARE_PATH_PREFIX)
        if form is None:
            raise ValidationError("Not a comparison link")
        return form.to_dict()
