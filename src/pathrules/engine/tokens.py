"""Token kinds and the binder that pairs a kind with the text it stands for.

Location expressions are made of five kinds of token::

    ?    EXACTLY_ONE     matches exactly one character
    *    ZERO_OR_MORE    matches zero or more characters
    **   DIRECTORY       matches zero or more whole path segments
    /    PATH_SEPARATOR  separates path segments
         LITERAL         any run of characters that is none of the above

Only ``LITERAL`` lacks a fixed string. ``DIRECTORY`` is spelled as two
consecutive ``ZERO_OR_MORE`` strings, so classification always prefers the
longest fixed string that fits a candidate.
"""
from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from .models import ERR_EMPTY, InvalidArgumentError, InvalidPatternError, UnsupportedOperationError

ERR_MULTIPLE_TOKENS = (
    "Candidate sequence '{candidate}' contains multiple tokens. "
    "Split the candidate and parse the tokens one at a time."
)


class TokenKind(enum.Enum):
    EXACTLY_ONE = "?"
    ZERO_OR_MORE = "*"
    DIRECTORY = "**"
    PATH_SEPARATOR = "/"
    LITERAL = None

    @property
    def fixed(self) -> str | None:
        """The fixed string of the kind, ``None`` for ``LITERAL``."""
        return self.value

    @property
    def is_wildcard(self) -> bool:
        return self in _WILDCARDS


_WILDCARDS = frozenset({TokenKind.EXACTLY_ONE, TokenKind.ZERO_OR_MORE, TokenKind.DIRECTORY})

# Longest fixed string first, so "**" is tried before "*".
_FIXED_KINDS: tuple[TokenKind, ...] = tuple(
    sorted(
        (kind for kind in TokenKind if kind.fixed is not None),
        key=lambda kind: len(kind.fixed),
        reverse=True,
    )
)

_SINGLE_CHAR_KINDS: dict[str, TokenKind] = {
    kind.fixed: kind for kind in _FIXED_KINDS if len(kind.fixed) == 1
}


@dataclass(frozen=True)
class BoundToken:
    """A token kind bound to the substring it represents.

    Equality and hashing are structural. A ``LITERAL`` may hold a single
    character or a longer run; the matcher gives the same answer either way.
    """

    kind: TokenKind
    text: str

    @property
    def is_literal(self) -> bool:
        return self.kind is TokenKind.LITERAL

    @property
    def is_separator(self) -> bool:
        return self.kind is TokenKind.PATH_SEPARATOR

    @property
    def is_wildcard(self) -> bool:
        return self.kind.is_wildcard

    def is_single_char(self) -> bool:
        return len(self.text) == 1

    def as_char(self) -> str:
        if not self.is_single_char():
            raise UnsupportedOperationError(
                f"Token {self.kind.name} bound to '{self.text}' has no single-character form"
            )
        return self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:  # pragma: no cover - debug convenience
        return f"BoundToken({self.kind.name}, {self.text!r})"


EXACTLY_ONE = BoundToken(TokenKind.EXACTLY_ONE, "?")
ZERO_OR_MORE = BoundToken(TokenKind.ZERO_OR_MORE, "*")
DIRECTORY = BoundToken(TokenKind.DIRECTORY, "**")
PATH_SEPARATOR = BoundToken(TokenKind.PATH_SEPARATOR, "/")


def literal(text: str) -> BoundToken:
    return BoundToken(TokenKind.LITERAL, text)


def _require_candidate(candidate: str | None) -> str:
    if candidate is None or len(candidate) == 0:
        raise InvalidArgumentError(ERR_EMPTY.format(name="candidate"))
    return str(candidate)


def parse_one(candidate: str | None) -> BoundToken:
    """Parse a candidate that represents exactly one token.

    Raises:
        InvalidArgumentError: ``candidate`` is ``None`` or empty.
        InvalidPatternError: ``candidate`` holds more than one token, e.g.
            ``"directory/"`` or ``"*/?**abc"``.
    """
    candidate = _require_candidate(candidate)
    for kind in _FIXED_KINDS:
        if candidate == kind.fixed:
            return BoundToken(kind, candidate)
    if len(candidate) > 1 and any(kind.fixed in candidate for kind in _FIXED_KINDS):
        raise InvalidPatternError(ERR_MULTIPLE_TOKENS.format(candidate=candidate))
    return literal(candidate)


def parse_all(candidate: str | None) -> list[BoundToken]:
    """Parse a candidate character by character.

    Every character becomes its own bound token, so ``"**"`` yields two
    ``ZERO_OR_MORE`` tokens and ``"abc"`` three single-character literals.
    Mixed content never fails.
    """
    candidate = _require_candidate(candidate)
    tokens: list[BoundToken] = []
    for ch in candidate:
        kind = _SINGLE_CHAR_KINDS.get(ch, TokenKind.LITERAL)
        tokens.append(BoundToken(kind, ch))
    return tokens


def contains_literals(tokens: Iterable[BoundToken]) -> bool:
    return any(token.is_literal for token in tokens)


def all_literals(tokens: Iterable[BoundToken]) -> bool:
    return all(token.is_literal for token in tokens)


def is_path_tokens(tokens: Iterable[BoundToken]) -> bool:
    """True when ``tokens`` hold only literals and path separators."""
    return all(token.is_literal or token.is_separator for token in tokens)


def join_tokens(tokens: Iterable[BoundToken]) -> str:
    return "".join(token.text for token in tokens)
