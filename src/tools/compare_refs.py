"""MCP tools that compare two refs of a GitHub repository.

Registers 'compare_refs' (form fields) and 'compare_share_link' (a
shareable link) which return the assembled unified diff with its counts.
"""

from __future__ import annotations

from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import GITHUB_TIMEOUT, HTTP_VERIFY, SHARE_PATH_PREFIX
from core.errors import ValidationError
from core.models import CompareForm
from core.session import Session
from core.share_url import parse_share_url
from sources.compare_source import CompareSource


def get_compare_source(
    *,
    github_client: Optional[GitHubClient] = None,
    session: Optional[Session] = None,
) -> CompareSource:
    client = github_client or GitHubClient(timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY, session=session)
    return CompareSource(client=client, session=session, share_prefix=SHARE_PATH_PREFIX)


def register(
    mcp: FastMCP,
    *,
    github_client: Optional[GitHubClient] = None,
    session: Optional[Session] = None,
) -> None:
    @mcp.tool(name="compare_refs")
    async def compare_refs(
        repo: str,
        base: str,
        head: str,
        path_filter: str = "",
    ) -> dict[str, Any]:
        """Compare two refs and return a unified diff of the changed files.

        Params:
          - repo: "owner/name" or https://github.com/owner/name.
          - base: base ref (branch, tag or SHA; may contain '/').
          - head: head ref.
          - path_filter: optional glob, e.g. "**/*.py" ('*' does not cross '/').

        Returns:
          A dict with the form fields, "summary", "file_count", "additions",
          "deletions", "files", "diff" (unified diff text) and "share_path".

        Raises:
          ValidationError for missing inputs; NotFoundError for unknown
          repositories/refs; RateLimitError when GitHub's limit is exhausted.
        """
        if not (repo or "").strip():
            raise ValidationError("Missing repo")
        if not (base or "").strip() or not (head or "").strip():
            raise ValidationError("Missing base or head ref")

        src = get_compare_source(github_client=github_client, session=session)
        view = await src.load_diff(CompareForm(repo=repo, base=base, head=head, path_filter=path_filter or ""))
        return view.to_dict()

    @mcp.tool(name="compare_share_link")
    async def compare_share_link(url: str) -> dict[str, Any]:
        """Load the comparison described by a shareable link.

        Accepts "/gh-dir-diff/<owner>/<repo>/<base>..<head>?filter=<glob>"
        (with or without scheme and host) or the older ?repo=&base=&head=
        query form. Returns the same payload as compare_refs.
        """
        form = parse_share_url(url, SHARE_PATH_PREFIX)
        if form is None:
            raise ValidationError("Not a comparison link")

        src = get_compare_source(github_client=github_client, session=session)
        view = await src.load_diff(form)
        return view.to_dict()
