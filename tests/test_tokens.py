"""Token kind and binder tests."""

import pytest

from pathrules.engine.models import InvalidArgumentError, InvalidPatternError, UnsupportedOperationError
from pathrules.engine.tokens import (
    DIRECTORY,
    EXACTLY_ONE,
    PATH_SEPARATOR,
    ZERO_OR_MORE,
    BoundToken,
    TokenKind,
    is_path_tokens,
    literal,
    parse_all,
    parse_one,
)


def _literals(text: str) -> list[BoundToken]:
    return [literal(ch) for ch in text]


def test_only_literal_lacks_fixed_string() -> None:
    missing = [kind for kind in TokenKind if kind.fixed is None]
    assert missing == [TokenKind.LITERAL]
    fixed = [kind.fixed for kind in TokenKind if kind.fixed is not None]
    assert len(fixed) == len(set(fixed))
    assert TokenKind.DIRECTORY.fixed == TokenKind.ZERO_OR_MORE.fixed * 2


@pytest.mark.parametrize(
    "candidate,expected",
    [
        ("*", ZERO_OR_MORE),
        ("?", EXACTLY_ONE),
        ("/", PATH_SEPARATOR),
        ("**", DIRECTORY),
        ("f", BoundToken(TokenKind.LITERAL, "f")),
        ("foobarbaz", BoundToken(TokenKind.LITERAL, "foobarbaz")),
        (" ", BoundToken(TokenKind.LITERAL, " ")),
    ],
)
def test_parse_one(candidate: str, expected: BoundToken) -> None:
    assert parse_one(candidate) == expected


@pytest.mark.parametrize("candidate", ["*/?**abc", "directory/", "***", "a?", "*b"])
def test_parse_one_rejects_multiple_tokens(candidate: str) -> None:
    with pytest.raises(InvalidPatternError):
        parse_one(candidate)


@pytest.mark.parametrize("candidate", [None, ""])
def test_parse_rejects_empty(candidate) -> None:
    with pytest.raises(InvalidArgumentError):
        parse_one(candidate)
    with pytest.raises(InvalidArgumentError):
        parse_all(candidate)


def test_parse_all_mixed_content() -> None:
    expected = [ZERO_OR_MORE, PATH_SEPARATOR, EXACTLY_ONE, ZERO_OR_MORE, ZERO_OR_MORE] + _literals("abc")
    assert parse_all("*/?**abc") == expected


def test_parse_all_splits_every_character() -> None:
    assert parse_all("**") == [ZERO_OR_MORE, ZERO_OR_MORE]
    assert parse_all("foobarbaz") == _literals("foobarbaz")
    assert parse_all("directory/") == _literals("directory") + [PATH_SEPARATOR]
    assert parse_all(" ") == [literal(" ")]


def test_bound_token_equality_is_structural() -> None:
    assert BoundToken(TokenKind.LITERAL, "a") == literal("a")
    assert BoundToken(TokenKind.LITERAL, "*") != ZERO_OR_MORE
    assert len({literal("a"), literal("a"), literal("b")}) == 2


def test_as_char() -> None:
    assert EXACTLY_ONE.as_char() == "?"
    assert ZERO_OR_MORE.as_char() == "*"
    assert PATH_SEPARATOR.as_char() == "/"
    with pytest.raises(UnsupportedOperationError):
        DIRECTORY.as_char()
    with pytest.raises(UnsupportedOperationError):
        literal("abc").as_char()


def test_errors_are_value_errors() -> None:
    # callers that only know about ValueError still catch bad input
    with pytest.raises(ValueError):
        parse_one("a*")


def test_is_path_tokens() -> None:
    assert is_path_tokens(parse_all("a/b/c.txt"))
    assert not is_path_tokens(parse_all("a/*/c.txt"))
