from __future__ import annotations

import re
from typing import Tuple

from core.errors import ValidationError


_REPO_URL_RE = re.compile(r"^https?://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")
_REPO_SLUG_RE = re.compile(r"^([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+?)(?:\.git)?$")


def parse_repo(repo: str) -> Tuple[str, str]:
    # Accept "owner/name" as typed in the form, or a full GitHub URL
    raw = (repo or "").strip()
    m = _REPO_URL_RE.match(raw) or _REPO_SLUG_RE.match(raw)
    if not m:
        raise ValidationError("Invalid GitHub repository (expected owner/name)")
    return m.group(1), m.group(2)


def normalize_ref(ref: str) -> str:
    ref_clean = (ref or "").strip()
    if not ref_clean:
        raise ValidationError("ref must be non-empty")
    return ref_clean
