"""Interpret GitHub rate-limit headers and phrase them for the user.

On 403 with X-RateLimit-Remaining == 0, GitHub reports the reset time in
X-RateLimit-Reset (epoch seconds). The message tells the user how many
minutes remain and, for anonymous requests, that logging in raises the
limit.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    remaining: Optional[int] = None
    reset_at: Optional[int] = None  # epoch seconds

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo":
        return cls(
            remaining=_parse_int_header(headers, "X-RateLimit-Remaining"),
            reset_at=_parse_int_header(headers, "X-RateLimit-Reset"),
        )

    @property
    def is_exhausted(self) -> bool:
        return self.remaining == 0 and self.reset_at is not None

    def minutes_until_reset(self, now: Optional[float] = None) -> int:
        if self.reset_at is None:
            return 0
        current = time.time() if now is None else float(now)
        return math.ceil((self.reset_at - current) / 60)


def rate_limit_message(info: RateLimitInfo, *, authenticated: bool, now: Optional[float] = None) -> str:
    minutes = info.minutes_until_reset(now)
    if authenticated:
        return f"Rate limit exceeded. Resets in {minutes} minutes."
    return (
        "Rate limit exceeded (60 requests/hour for unauthenticated requests). "
        "Please login for higher limits (5,000/hour), "
        f"or wait {minutes} minutes."
    )


def _parse_int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if not value:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    try:
        return int(value)
    except ValueError:
        return None
