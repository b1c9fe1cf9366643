"""Immutable dataclasses for the compare/diff domain.

Includes the per-file change record returned by a ref-to-ref comparison
(FileChangeRecord), the parsed comparison (CompareResult), the assembled
diff (DiffResult) and the form state behind a shareable link (CompareForm).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple


DEFAULT_FILE_MODE = "100644"


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value)
    return s if s else None


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class FileChangeRecord:
    """One changed file between two refs.

    `patch` is absent for binary files and for files GitHub did not diff.
    `status` keeps the upstream value; anything other than added,
    removed or renamed is rendered like a modification.
    """

    filename: str
    status: str = "modified"
    previous_filename: Optional[str] = None
    patch: Optional[str] = None
    additions: int = 0
    deletions: int = 0
    mode: Optional[str] = None
    previous_mode: Optional[str] = None

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "FileChangeRecord":
        return cls(
            filename=str(item.get("filename") or ""),
            status=str(item.get("status") or "modified"),
            previous_filename=_opt_str(item.get("previous_filename")),
            patch=item.get("patch") if isinstance(item.get("patch"), str) else None,
            additions=_int(item.get("additions")),
            deletions=_int(item.get("deletions")),
            mode=_opt_str(item.get("mode")),
            previous_mode=_opt_str(item.get("previous_mode")),
        )


@dataclass(frozen=True)
class CompareResult:
    files: List[FileChangeRecord] = field(default_factory=list)
    status: Optional[str] = None
    ahead_by: int = 0
    behind_by: int = 0
    total_commits: int = 0
    html_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "CompareResult":
        files = data.get("files") or []
        return cls(
            files=[FileChangeRecord.from_api(f) for f in files if isinstance(f, Mapping)],
            status=_opt_str(data.get("status")),
            ahead_by=_int(data.get("ahead_by")),
            behind_by=_int(data.get("behind_by")),
            total_commits=_int(data.get("total_commits")),
            html_url=_opt_str(data.get("html_url")),
        )


@dataclass(frozen=True)
class DiffResult:
    """Assembled unified diff plus counts over the filtered file set."""

    diff_text: str = ""
    file_count: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    filenames: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "DiffResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.file_count == 0

    def summary(self, path_filter: str = "") -> str:
        line = (
            f"{self.file_count} files changed, "
            f"+{self.total_additions} additions, "
            f"-{self.total_deletions} deletions"
        )
        if path_filter:
            line += f" (filtered by: {path_filter})"
        return line


@dataclass(frozen=True)
class CompareForm:
    """Form state: repository, the two refs and an optional path glob.

    Field groups:
    - Repository: repo ("owner/name")
    - Refs: base, head
    - Filter: path_filter
    """

    repo: str
    base: str
    head: str
    path_filter: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "repo": self.repo,
            "base": self.base,
            "head": self.head,
            "filter": self.path_filter,
        }
