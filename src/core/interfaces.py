"""Core protocol and interface definitions.

Defines the CompareProvider protocol used by the compare source so the
GitHub client can be swapped for a fake in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol

from core.models import CompareResult
from core.session import Session


class CompareProvider(Protocol):
    """Contract for anything that can compare two refs of a repository."""
    async def compare(
        self,
        *,
        repo: str,
        base: str,
        head: str,
        session: Optional[Session] = None,
    ) -> CompareResult:
        ...
