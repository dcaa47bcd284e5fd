"""Command line interface for the pathrules matching engine."""
from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from . import io
from .bagit import DEFAULT_ROLE_RULES, RoleRules, classify_all, load_role_rules
from .engine.expression import Expression
from .engine.matcher import match_any
from .engine.models import MatchResult, PathRulesError
from .logging_config import LEVELS, get_logger, parse_level, setup_logging

logger = get_logger(__name__)


def _parse_log_level(value: str) -> str:
    """Parse a log level name, ensuring valid values."""
    try:
        parse_level(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid log level: {value}") from None
    return value.upper()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathrules", description="Ant-style path matching CLI")
    parser.add_argument("-V", "--version", action="version", version="pathrules 0.1")
    parser.add_argument(
        "--log-level",
        type=_parse_log_level,
        default="WARNING",
        metavar="{" + ",".join(LEVELS) + "}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_path_options(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--paths", help="file with one path per line, JSON Lines, or CSV ('-' for stdin)")
        cmd.add_argument("items", nargs="*", metavar="PATH")
        cmd.add_argument("--format", choices=["text", "json"], default="text")
        cmd.add_argument("--out", default="-")

    matcher = sub.add_parser("match", help="print the paths matched by patterns")
    matcher.add_argument("--pattern", "-p", action="append", required=True, dest="patterns")
    matcher.add_argument(
        "--invert",
        action="store_true",
        default=False,
        help="print the paths no pattern matches",
    )
    add_path_options(matcher)

    tokens = sub.add_parser("tokens", help="show the tokens and segments of an expression")
    tokens.add_argument("expression")
    tokens.add_argument("--format", choices=["text", "json"], default="text")

    classify = sub.add_parser("classify", help="print the BagIt role of each path")
    classify.add_argument("--rules", help="JSON file of role rules")
    add_path_options(classify)
    return parser


def _collect_paths(args: argparse.Namespace) -> list[str]:
    paths = list(args.items)
    if args.paths:
        paths.extend(io.read_items(args.paths))
    if not paths:
        raise PathRulesError("no paths given; pass PATH arguments or --paths")
    return paths


def _command_match(args: argparse.Namespace) -> None:
    patterns = list(args.patterns)
    results = []
    for path in _collect_paths(args):
        matched_by = match_any(path, patterns)
        results.append(MatchResult(path=path, matched=bool(matched_by), patterns=matched_by))
    selected = [result for result in results if result.matched != args.invert]
    if args.format == "json":
        io.write_json([result.to_json() for result in results], args.out)
    else:
        io.write_text("".join(f"{result.path}\n" for result in selected), args.out)


def _describe_expression(expression: Expression) -> dict[str, object]:
    return {
        "expression": str(expression),
        "is_path": expression.is_path,
        "depth": expression.depth(),
        "tokens": [{"kind": token.kind.name, "text": token.text} for token in expression.tokens],
        "segments": [expression.segment_text(depth) for depth in range(expression.depth() + 1)],
    }


def _command_tokens(args: argparse.Namespace) -> None:
    payload = _describe_expression(Expression(args.expression))
    if args.format == "json":
        io.write_json(payload, "-")
        return
    lines = [
        f"EXPR: {payload['expression']}",
        f"KIND: {'path' if payload['is_path'] else 'pattern'}",
        f"DEPTH: {payload['depth']}",
    ]
    lines.extend(f"TOKEN\t{token['kind']}\t{token['text']}" for token in payload["tokens"])
    lines.extend(f"SEGMENT\t{depth}\t{text}" for depth, text in enumerate(payload["segments"]))
    io.write_text("\n".join(lines) + "\n", "-")


def _command_classify(args: argparse.Namespace) -> None:
    rules: RoleRules = load_role_rules(args.rules) if args.rules else DEFAULT_ROLE_RULES
    roles = classify_all(_collect_paths(args), rules)
    if args.format == "json":
        io.write_json({path: role.value for path, role in roles.items()}, args.out)
    else:
        io.write_text("".join(f"{path}\t{role.value}\n" for path, role in roles.items()), args.out)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    command = args.command
    try:
        if command == "match":
            _command_match(args)
        elif command == "tokens":
            _command_tokens(args)
        elif command == "classify":
            _command_classify(args)
        else:
            parser.error(f"unknown command {command}")
            return 1
    except (PathRulesError, OSError, ValueError) as exc:
        logger.debug("Command %s failed", command, exc_info=True)
        print(f"pathrules: error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
