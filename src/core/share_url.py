"""Shareable links for a comparison.

Maps a CompareForm to "/<prefix>/<owner>/<repo>/<base>..<head>?filter=<glob>"
and back. Base refs may contain '/', so everything between the repository
name and '..' is the base ref.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import httpx

from core.models import CompareForm

DEFAULT_PREFIX = "/gh-dir-diff"

# Characters JavaScript's encodeURIComponent leaves alone besides [A-Za-z0-9_.~-].
_URI_COMPONENT_SAFE = "!*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _clean_prefix(prefix: str) -> str:
    return "/" + (prefix or DEFAULT_PREFIX).strip("/")


def build_share_path(form: CompareForm, prefix: str = DEFAULT_PREFIX) -> Optional[str]:
    repo = form.repo.strip()
    base = form.base.strip()
    head = form.head.strip()
    if not (repo and base and head):
        return None

    path = f"{_clean_prefix(prefix)}/{repo}/{base}..{head}"
    path_filter = form.path_filter.strip()
    if path_filter:
        path += f"?filter={encode_component(path_filter)}"
    return path


def _parse_path(rest: str, path_filter: str) -> Optional[CompareForm]:
    if rest.endswith("/"):
        rest = rest[:-1]

    parts = rest.split("..")
    if len(parts) != 2:
        return None

    segments = parts[0].split("/")
    if len(segments) < 2:
        return None

    return CompareForm(
        repo=f"{segments[0]}/{segments[1]}",
        base="/".join(segments[2:]),
        head=parts[1],
        path_filter=path_filter,
    )


def parse_share_url(url: str, prefix: str = DEFAULT_PREFIX) -> Optional[CompareForm]:
    """Recover the form state from a shareable link.

    Accepts a full URL or a path with query string. Falls back to the older
    ?repo=&base=&head=&filter= query style when the path does not match.
    """
    try:
        parsed = httpx.URL((url or "").strip())
    except httpx.InvalidURL:
        return None

    params = parsed.params
    path_filter = params.get("filter") or ""

    root = _clean_prefix(prefix) + "/"
    if parsed.path.startswith(root) and len(parsed.path) > len(root):
        form = _parse_path(parsed.path[len(root):], path_filter)
        if form is not None:
            return form

    if params.get("repo"):
        return CompareForm(
            repo=params.get("repo") or "",
            base=params.get("base") or "",
            head=params.get("head") or "",
            path_filter=path_filter,
        )

    return None
