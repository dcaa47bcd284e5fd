"""Tokenized expressions addressable by depth.

An :class:`Expression` is either a *path* (only literals and separators) or
a *pattern* (which may also hold ``?``, ``*`` and ``**``). Both are built the
same way; the difference is only in their tokens.

Path segments are the tokens between consecutive separators, indexed from
zero. ``/foo/bar/baz.txt`` has segments ``foo`` (depth 0), ``bar`` (depth 1)
and ``baz.txt`` (depth 2), and its depth is 2. A single leading and a single
trailing separator are ignored when counting, so ``/`` and ``/dir`` both
have depth 0.

Strings ending in ``/`` gain an implicit ``**`` when tokenized (see
:mod:`pathrules.engine.tokenizer`): ``dir/`` has depth 1 and matches
anything below ``dir``.
"""
from __future__ import annotations

from functools import lru_cache

from .models import ERR_EMPTY, InvalidArgumentError
from .tokens import BoundToken, is_path_tokens, join_tokens
from .tokenizer import tokenize

Segment = tuple[BoundToken, ...]

_EMPTY: Segment = ()


def _sanitize(tokens: tuple[BoundToken, ...]) -> tuple[BoundToken, ...]:
    sanitized = tokens
    if sanitized and sanitized[0].is_separator:
        sanitized = sanitized[1:]
    if sanitized and sanitized[-1].is_separator:
        sanitized = sanitized[:-1]
    return sanitized


def _split_segments(sanitized: tuple[BoundToken, ...]) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    current: list[BoundToken] = []
    for token in sanitized:
        if token.is_separator:
            segments.append(tuple(current))
            current = []
        else:
            current.append(token)
    segments.append(tuple(current))
    return tuple(segments)


class Expression:
    """A string tokenized into bound tokens, with depth-indexed segments.

    Segments are computed once, when the expression is built, so an
    expression can be shared between threads without locking.
    """

    __slots__ = ("_text", "_tokens", "_sanitized", "_segments")

    def __init__(self, text: str) -> None:
        if text is None or len(text) == 0:
            raise InvalidArgumentError(ERR_EMPTY.format(name="text"))
        self._text = str(text)
        self._tokens: tuple[BoundToken, ...] = tuple(tokenize(self._text))
        self._sanitized = _sanitize(self._tokens)
        self._segments = _split_segments(self._sanitized)

    @property
    def text(self) -> str:
        return self._text

    @property
    def tokens(self) -> tuple[BoundToken, ...]:
        """All tokens, separators and any implicit trailing ``**`` included."""
        return self._tokens

    @property
    def is_path(self) -> bool:
        return is_path_tokens(self._tokens)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def depth(self) -> int:
        """Zero-based depth: the number of separators between segments.

        ``/`` -> 0, ``dir`` -> 0, ``/dir`` -> 0, ``/dir/foo`` -> 1,
        ``**/*.java`` -> 1.
        """
        return len(self._segments) - 1

    def path_segment(self, depth: int) -> Segment:
        """Tokens of the segment at ``depth``; empty when out of range."""
        if depth < 0 or depth >= len(self._segments):
            return _EMPTY
        return self._segments[depth]

    def segment_text(self, depth: int) -> str:
        return join_tokens(self.path_segment(depth))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Expression({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash(self._tokens)


@lru_cache(maxsize=4096)
def compile_expression(text: str) -> Expression:
    """Build an :class:`Expression`, reusing earlier results for ``text``."""
    return Expression(text)
