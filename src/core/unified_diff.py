"""Rebuild a unified diff from GitHub's per-file compare metadata.

GitHub's compare API returns hunks only (`patch`) without the `diff --git`,
mode and `---`/`+++` headers. `assemble` filters the files, writes the
headers each status needs and concatenates the sections in upstream order.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from core.models import DEFAULT_FILE_MODE, DiffResult, FileChangeRecord

PathPredicate = Callable[[str], bool]


def _has_body(record: FileChangeRecord) -> bool:
    # Binary and content-less files only get a section when added/removed.
    return record.patch is not None or record.status in ("added", "removed")


def render_section(record: FileChangeRecord) -> str:
    """Render the header lines and patch body for a single file."""
    old = record.previous_filename or record.filename
    new = record.filename
    lines: List[str] = []

    if record.status == "removed":
        lines.append(f"diff --git a/{old} b/{old}")
        lines.append(f"deleted file mode {record.previous_mode or DEFAULT_FILE_MODE}")
        lines.append(f"--- a/{old}")
        lines.append("+++ /dev/null")
    elif record.status == "added":
        lines.append(f"diff --git a/{new} b/{new}")
        lines.append(f"new file mode {record.mode or DEFAULT_FILE_MODE}")
        lines.append("--- /dev/null")
        lines.append(f"+++ b/{new}")
    elif record.status == "renamed":
        lines.append(f"diff --git a/{old} b/{new}")
        lines.append(f"rename from {old}")
        lines.append(f"rename to {new}")
        if record.patch:
            lines.append(f"--- a/{old}")
            lines.append(f"+++ b/{new}")
    else:
        lines.append(f"diff --git a/{new} b/{new}")
        lines.append(f"--- a/{new}")
        lines.append(f"+++ b/{new}")

    if record.patch:
        lines.append(record.patch)

    return "\n".join(lines) + "\n"


def assemble(
    files: Iterable[FileChangeRecord],
    path_filter: Optional[PathPredicate] = None,
) -> DiffResult:
    """Filter `files` by filename and build one unified diff blob.

    Totals cover every matched file, including ones skipped for lacking a
    patch, so they agree with the counts GitHub reports.
    """
    matched = [f for f in files if path_filter is None or path_filter(f.filename)]
    if not matched:
        return DiffResult.empty()

    sections = [render_section(f) for f in matched if _has_body(f)]

    return DiffResult(
        diff_text="".join(sections),
        file_count=len(matched),
        total_additions=sum(f.additions for f in matched),
        total_deletions=sum(f.deletions for f in matched),
        filenames=tuple(f.filename for f in matched),
    )
