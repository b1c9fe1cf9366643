from __future__ import annotations

from typing import Optional


class DirDiffError(Exception):
    """Base error for the diff viewer."""


class ValidationError(DirDiffError):
    """Raised when user input is invalid."""


class NotFoundError(DirDiffError):
    """Raised when a repository or ref cannot be found."""


class ExternalServiceError(DirDiffError):
    """Raised when an external service (GitHub API/OAuth) fails."""


class RateLimitError(ExternalServiceError):
    """Raised when GitHub reports an exhausted rate limit."""

    def __init__(self, message: str, *, reset_at: Optional[int] = None) -> None:
        super().__init__(message)
        self.reset_at = reset_at


class AuthError(DirDiffError):
    """Raised when the OAuth code exchange is rejected."""
