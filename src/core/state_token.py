"""Signed, short-lived OAuth state values (stateless CSRF protection).

A state is "<epoch-ms>-<uuid4>". The signed form appends a hex
HMAC-SHA256 of the state: "<state>.<hexdigest>". Verification recomputes
the digest, compares it in constant time and rejects states older than
STATE_TTL_MS. Every failure collapses to None.
"""

from __future__ import annotations

import hashlib
import hmac
import time
import uuid
from typing import Optional

STATE_TTL_MS = 10 * 60 * 1000
_SEP = "."


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_state(now_ms: Optional[int] = None) -> str:
    ts = _now_ms() if now_ms is None else int(now_ms)
    return f"{ts}-{uuid.uuid4()}"


def _digest(state: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), state.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_state(state: str, secret: str) -> str:
    return f"{state}{_SEP}{_digest(state, secret)}"


def _timestamp(state: str) -> Optional[int]:
    head = state.split("-", 1)[0]
    if not (head.isascii() and head.isdigit()):
        return None
    return int(head)


def verify_state(signed_state: str, secret: str, now_ms: Optional[int] = None) -> Optional[str]:
    """Return the embedded state if the signature is valid and fresh, else None."""
    state, sep, signature = (signed_state or "").rpartition(_SEP)
    if not sep or not state or not signature:
        return None

    if not hmac.compare_digest(signature.encode("utf-8"), _digest(state, secret).encode("utf-8")):
        return None

    ts = _timestamp(state)
    if ts is None:
        return None

    now = _now_ms() if now_ms is None else int(now_ms)
    if now - ts > STATE_TTL_MS:
        return None

    return state
