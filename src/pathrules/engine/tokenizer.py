"""Turn raw expression strings into bound tokens.

The tokenizer builds on :func:`~pathrules.engine.tokens.parse_all` and then
merges adjacent characters back into tokens: runs of literal characters
become one ``LITERAL`` and pairs of ``*`` become ``DIRECTORY`` (a third
``*`` in a row stays a ``ZERO_OR_MORE``).

Trailing separators
-------------------
A string ending in ``/`` is tokenized as if ``**`` followed it, so
``"dir/"`` behaves exactly like ``"dir/**"`` and matches everything below
``dir``. This mirrors Ant, where ``mypackage/test/`` is read as
``mypackage/test/**``. It changes matching results: a caller who meant a
literal trailing separator gets a pattern, and a path written with a
trailing separator stops being a path. The bare root ``"/"`` is left alone.
"""
from __future__ import annotations

from itertools import groupby

from ..logging_config import get_logger
from .tokens import DIRECTORY, ZERO_OR_MORE, BoundToken, TokenKind, parse_all, parse_one

logger = get_logger(__name__)


def _merge(chars: list[BoundToken]) -> list[BoundToken]:
    tokens: list[BoundToken] = []
    for kind, group in groupby(chars, key=lambda token: token.kind):
        run = "".join(token.text for token in group)
        if kind is TokenKind.LITERAL:
            tokens.append(parse_one(run))
        elif kind is TokenKind.ZERO_OR_MORE:
            pairs, rest = divmod(len(run), 2)
            tokens.extend([DIRECTORY] * pairs)
            if rest:
                tokens.append(ZERO_OR_MORE)
        else:
            tokens.extend(BoundToken(kind, ch) for ch in run)
    return tokens


def has_trailing_separator(tokens: list[BoundToken]) -> bool:
    return len(tokens) > 1 and tokens[-1].is_separator


def tokenize(text: str | None) -> list[BoundToken]:
    """Tokenize ``text``, appending ``**`` after a trailing separator.

    Raises:
        InvalidArgumentError: ``text`` is ``None`` or empty.
    """
    tokens = _merge(parse_all(text))
    if has_trailing_separator(tokens):
        logger.debug("Expression %r ends in a separator; treating it as %r", text, f"{text}**")
        tokens.append(DIRECTORY)
    return tokens
