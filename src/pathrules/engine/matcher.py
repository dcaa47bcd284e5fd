"""Ant-style matching of path expressions against pattern expressions.

Matching is done per directory. Pattern segments are matched against path
segments at the same depth; wildcard-only pattern segments (such as ``**``)
absorb the path segments that lie between two literal-bearing segments.
Within one segment ``*`` matches zero or more characters and ``?`` exactly
one::

    **/*IT.java      matches  src/test/java/FooIT.java
    **/Foo??.java    matches  src/test/java/FooIT.java, not .../FooI.java
    Start*IT.java    matches  StartIT.java and StartCarIT.java
    data/            is read as data/** and matches everything below data

Anchors are chosen leftmost and never revisited. Inside a segment each
literal run is anchored at its first occurrence at or after the current
position, and the path must be used up exactly when the pattern is. Across
levels each literal-bearing pattern segment is anchored at the first path
segment it matches. Without backtracking some patterns reject paths a full
glob would accept::

    *a?c     rejects  abaxc      (the first 'a' is taken, '?' is left 'bax')
    *.txt    rejects  a.txt.txt  ('.txt' is anchored at 1, '.txt' is left over)
    **/a     rejects  a/b/a      (the first 'a' is taken, 'b/a' is left over)
"""
from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from ..logging_config import get_logger
from .expression import Expression, Segment, compile_expression
from .tokens import (
    EXACTLY_ONE,
    ZERO_OR_MORE,
    BoundToken,
    TokenKind,
    all_literals,
    contains_literals,
    join_tokens,
)

logger = get_logger(__name__)

# The character scan below assumes single-character wildcards.
EXACTLY_ONE_CHAR = EXACTLY_ONE.as_char()
ZERO_OR_MORE_CHAR = ZERO_OR_MORE.as_char()

NOT_FOUND = -1


class PendingKind(enum.Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class _Pending:
    """A run of pattern characters still to be resolved against the path.

    ``exactly_one`` counts the ``?`` characters of a wildcard run and
    ``unbounded`` records whether it holds any ``*``.
    """

    kind: PendingKind
    text: str = ""
    exactly_one: int = 0
    unbounded: bool = False


def _pending_elements(segment: Sequence[BoundToken]) -> list[_Pending]:
    elements: list[_Pending] = []
    literal_buf: list[str] = []
    exactly_one = 0
    unbounded = False
    in_wildcard = False

    def flush_literal() -> None:
        if literal_buf:
            elements.append(_Pending(PendingKind.LITERAL, text="".join(literal_buf)))
            literal_buf.clear()

    def flush_wildcard() -> None:
        nonlocal exactly_one, unbounded, in_wildcard
        if in_wildcard:
            elements.append(
                _Pending(PendingKind.WILDCARD, exactly_one=exactly_one, unbounded=unbounded)
            )
        exactly_one, unbounded, in_wildcard = 0, False, False

    for token in segment:
        if token.is_literal:
            flush_wildcard()
            literal_buf.append(token.text)
            continue
        flush_literal()
        in_wildcard = True
        for ch in token.text:
            if ch == EXACTLY_ONE_CHAR:
                exactly_one += 1
            elif ch == ZERO_OR_MORE_CHAR:
                unbounded = True
    flush_literal()
    flush_wildcard()
    return elements


def _consumes(element: _Pending, span: int) -> bool:
    """True when a wildcard run can consume ``span`` path characters."""
    if element.unbounded:
        return span >= element.exactly_one
    return span == element.exactly_one


def _resolve(elements: list[_Pending], path: str) -> bool:
    position = 0
    last = len(elements) - 1
    for index, element in enumerate(elements):
        if element.kind is PendingKind.LITERAL:
            if not path.startswith(element.text, position):
                return False
            position += len(element.text)
            continue

        if index == last:
            return _consumes(element, len(path) - position)

        # leftmost occurrence of the next literal run is the right anchor
        anchor = path.find(elements[index + 1].text, position)
        if anchor == NOT_FOUND or not _consumes(element, anchor - position):
            return False
        position = anchor
    return position == len(path)


def is_zero_or_more(segment: Sequence[BoundToken]) -> bool:
    return len(segment) == 1 and segment[0].kind is TokenKind.ZERO_OR_MORE


def is_exactly_one(segment: Sequence[BoundToken]) -> bool:
    return len(segment) == 1 and segment[0].kind is TokenKind.EXACTLY_ONE


def is_directory_match_token(segment: Sequence[BoundToken]) -> bool:
    """True for a ``**`` segment, as one ``DIRECTORY`` or two ``*`` tokens."""
    if len(segment) == 1:
        return segment[0].kind is TokenKind.DIRECTORY
    return len(segment) == 2 and all(token.kind is TokenKind.ZERO_OR_MORE for token in segment)


def match_segment(pattern_segment: Sequence[BoundToken], path_segment: Sequence[BoundToken]) -> bool:
    """Match one pattern segment against one path segment.

    Neither segment holds separators. The pattern segment may mix literals
    with ``?`` and ``*``; the path segment holds literals only.
    """
    if is_zero_or_more(pattern_segment) or is_directory_match_token(pattern_segment):
        return True
    path = join_tokens(path_segment)
    if is_exactly_one(pattern_segment) and len(path) == 1:
        return True
    if all_literals(pattern_segment):
        return join_tokens(pattern_segment) == path
    return _resolve(_pending_elements(pattern_segment), path)


def next_literal_depth(pattern: Expression, depth: int) -> int:
    """Depth of the first segment at or after ``depth`` holding a literal."""
    for index in range(max(depth, 0), pattern.depth() + 1):
        if contains_literals(pattern.path_segment(index)):
            return index
    return NOT_FOUND


def next_match_depth(path: Expression, depth: int, pattern_segment: Segment) -> int:
    """Depth of the first path segment at or after ``depth`` matching ``pattern_segment``."""
    for index in range(max(depth, 0), path.depth() + 1):
        if match_segment(pattern_segment, path.path_segment(index)):
            return index
    return NOT_FOUND


def _span_matches(pattern_segment: Segment, path: Expression, start: int, stop: int) -> bool:
    """True when every path segment in ``start..stop-1`` matches ``pattern_segment``."""
    return all(match_segment(pattern_segment, path.path_segment(depth)) for depth in range(start, stop))


def _align(pattern: Expression, path: Expression) -> bool:
    pattern_depth = 0
    path_depth = 0
    while pattern_depth <= pattern.depth():
        current = pattern.path_segment(pattern_depth)
        literal_depth = next_literal_depth(pattern, pattern_depth)
        if literal_depth == NOT_FOUND:
            # a trailing wildcard segment takes every remaining level
            return _span_matches(current, path, path_depth, path.depth() + 1)

        literal_segment = pattern.path_segment(literal_depth)
        anchor = next_match_depth(path, path_depth, literal_segment)
        if anchor == NOT_FOUND:
            logger.debug(
                "No path segment of %r matches pattern segment %r at depth %d",
                str(path),
                join_tokens(literal_segment),
                literal_depth,
            )
            return False
        if not _span_matches(current, path, path_depth, anchor):
            return False
        pattern_depth = literal_depth + 1
        path_depth = anchor + 1
    return path_depth > path.depth()


def match(pattern: Expression, path: Expression) -> bool:
    """Match ``path`` against ``pattern``.

    ``path`` must be a path expression (literals and separators only);
    anything else never matches.
    """
    if not path.is_path:
        logger.debug("Refusing to match %r: not a path expression", str(path))
        return False
    if pattern.depth() > path.depth():
        return False
    if pattern.depth() == path.depth():
        return all(
            match_segment(pattern.path_segment(depth), path.path_segment(depth))
            for depth in range(pattern.depth() + 1)
        )
    return _align(pattern, path)


def match_pattern(text: str, pattern: str) -> bool:
    """String convenience over :func:`match`."""
    return match(compile_expression(pattern), compile_expression(text))


def match_all(texts: Sequence[str], pattern: str) -> list[bool]:
    compiled = compile_expression(pattern)
    return [match(compiled, compile_expression(text)) for text in texts]


def match_any(text: str, patterns: Sequence[str]) -> list[str]:
    """Patterns from ``patterns`` that match ``text``, in the given order."""
    path = compile_expression(text)
    return [pattern for pattern in patterns if match(compile_expression(pattern), path)]
