"""
Glob matching for repository paths.

Patterns are compiled into a structured list of segment matchers
(literal text, '*', '?', '**') instead of a regular expression, and are
evaluated as an anchored match over the whole '/'-separated path.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Tuple

TokenKind = Literal["literal", "star", "char"]


@dataclass(frozen=True, slots=True)
class GlobToken:
    kind: TokenKind
    text: str = ""


@dataclass(frozen=True, slots=True)
class GlobSegment:
    """One '/'-separated piece of a pattern.

    A double-star segment spans zero or more whole path segments; any other
    segment matches exactly one path segment using its tokens.
    """

    tokens: Tuple[GlobToken, ...] = ()
    double_star: bool = False

    def matches(self, part: str) -> bool:
        tokens = self.tokens

        @lru_cache(maxsize=None)
        def rec(t: int, i: int) -> bool:
            if t == len(tokens):
                return i == len(part)

            tok = tokens[t]
            if tok.kind == "literal":
                return part.startswith(tok.text, i) and rec(t + 1, i + len(tok.text))
            if tok.kind == "char":
                return i < len(part) and rec(t + 1, i + 1)
            # star: try every split point, shortest first
            return any(rec(t + 1, k) for k in range(i, len(part) + 1))

        return rec(0, 0)


def _compile_segment(segment: str) -> GlobSegment:
    if segment == "**":
        return GlobSegment(double_star=True)

    tokens: list[GlobToken] = []
    literal: list[str] = []
    for ch in segment:
        if ch in ("*", "?"):
            if literal:
                tokens.append(GlobToken("literal", "".join(literal)))
                literal = []
            tokens.append(GlobToken("star" if ch == "*" else "char"))
        else:
            literal.append(ch)
    if literal:
        tokens.append(GlobToken("literal", "".join(literal)))
    return GlobSegment(tokens=tuple(tokens))


@dataclass(frozen=True, slots=True)
class CompiledGlob:
    """A compiled glob pattern; call it with a path to test for a match."""

    pattern: str
    segments: Tuple[GlobSegment, ...]

    @property
    def matches_everything(self) -> bool:
        return not self.pattern

    def __call__(self, path: str) -> bool:
        if self.matches_everything:
            return True

        segments = self.segments
        parts = (path or "").split("/")
        last = len(segments) - 1

        @lru_cache(maxsize=None)
        def rec(i: int, j: int) -> bool:
            if j == len(segments):
                return i == len(parts)

            seg = segments[j]
            if seg.double_star:
                if j == last:
                    # Trailing '**' takes whatever follows the previous separator.
                    return i < len(parts)
                return any(rec(k, j + 1) for k in range(i, len(parts) + 1))

            return i < len(parts) and seg.matches(parts[i]) and rec(i + 1, j + 1)

        return rec(0, 0)


def compile_match(pattern: str | None) -> CompiledGlob:
    """Compile a glob pattern into a path predicate.

    An empty or missing pattern matches every path. '*' and '?' never cross
    a '/', so '*.go' only matches top-level files; use '**/*.go' to recurse.
    """
    raw = pattern or ""
    if not raw:
        return CompiledGlob(pattern="", segments=())
    return CompiledGlob(
        pattern=raw,
        segments=tuple(_compile_segment(seg) for seg in raw.split("/")),
    )


def glob_match(path: str, pattern: str | None) -> bool:
    """Match a repository path against a glob pattern."""
    return compile_match(pattern)(path)
