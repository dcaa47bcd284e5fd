"""Error types and result records shared across the pathrules engine."""
from __future__ import annotations

from dataclasses import dataclass, field


class PathRulesError(Exception):
    """Base class for errors raised while building expressions."""


class InvalidArgumentError(PathRulesError, ValueError):
    """A required string argument was ``None`` or empty."""


class InvalidPatternError(PathRulesError, ValueError):
    """A candidate expected to hold a single token holds several.

    The caller is expected to split the candidate and parse the pieces one
    at a time (or use :func:`pathrules.engine.tokens.parse_all`).
    """


class UnsupportedOperationError(PathRulesError, RuntimeError):
    """An operation was requested that a token cannot support.

    Raised when asking for the single-character form of a multi-character
    token such as ``**``. This is an internal-consistency error rather than
    bad user input.
    """


ERR_EMPTY = "Argument '{name}' must not be None or empty."


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one path against a set of patterns."""

    path: str
    matched: bool
    patterns: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, object]:
        return {
            "path": self.path,
            "matched": self.matched,
            "patterns": list(self.patterns),
        }
