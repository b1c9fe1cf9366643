from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from core.interfaces import CompareProvider
from core.models import CompareForm, CompareResult, DiffResult
from core.paths import compile_match
from core.session import Session
from core.share_url import DEFAULT_PREFIX, build_share_path
from core.unified_diff import assemble


"""Compare-backed diff loading.

- Fetches the comparison for a form, narrows files with the path glob and
  assembles the unified diff.
- Also builds the shareable link for the form, as the page does after a
  successful load.
"""

log = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "No files match the filter."


@dataclass(frozen=True)
class DiffView:
    form: CompareForm
    result: DiffResult
    share_path: Optional[str] = None
    compare: CompareResult = field(default_factory=CompareResult)

    @property
    def summary(self) -> str:
        if self.result.is_empty:
            return NO_MATCHES_MESSAGE
        return self.result.summary(self.form.path_filter)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.form.to_dict(),
            "summary": self.summary,
            "file_count": self.result.file_count,
            "additions": self.result.total_additions,
            "deletions": self.result.total_deletions,
            "files": list(self.result.filenames),
            "diff": self.result.diff_text,
            "share_path": self.share_path,
            "total_commits": self.compare.total_commits,
            "html_url": self.compare.html_url,
        }


class CompareSource:
    def __init__(
        self,
        *,
        client: CompareProvider,
        session: Optional[Session] = None,
        share_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._client = client
        self._session = session
        self._share_prefix = share_prefix

    async def load_diff(self, form: CompareForm) -> DiffView:
        clean = CompareForm(
            repo=form.repo.strip(),
            base=form.base.strip(),
            head=form.head.strip(),
            path_filter=form.path_filter.strip(),
        )

        compare = await self._client.compare(
            repo=clean.repo,
            base=clean.base,
            head=clean.head,
            session=self._session,
        )

        matcher = compile_match(clean.path_filter)
        result = assemble(compare.files, None if matcher.matches_everything else matcher)
        if result.is_empty:
            log.info("No files in %s %s...%s match %r", clean.repo, clean.base, clean.head, clean.path_filter)

        return DiffView(
            form=clean,
            result=result,
            share_path=build_share_path(clean, self._share_prefix),
            compare=compare,
        )
