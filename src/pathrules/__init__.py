"""pathrules: Ant-style pattern matching for hierarchical paths."""

from collections.abc import Sequence

from .engine.expression import Expression, compile_expression
from .engine.matcher import match, match_all, match_any, match_pattern, match_segment
from .engine.models import (
    InvalidArgumentError,
    InvalidPatternError,
    PathRulesError,
    UnsupportedOperationError,
)
from .engine.tokens import BoundToken, TokenKind, parse_all, parse_one

__version__ = "0.1.0"


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point mirroring :func:`pathrules.cli.main`."""

    from .cli import main as cli_main

    return cli_main(argv)


__all__ = [
    "BoundToken",
    "Expression",
    "InvalidArgumentError",
    "InvalidPatternError",
    "PathRulesError",
    "TokenKind",
    "UnsupportedOperationError",
    "compile_expression",
    "main",
    "match",
    "match_all",
    "match_any",
    "match_pattern",
    "match_segment",
    "parse_all",
    "parse_one",
]
