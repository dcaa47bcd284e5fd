"""Classify files inside a BagIt bag by the role they play.

Paths are relative to the base of the bag (a leading ``/`` is ignored).
Rules are tried in order and the first pattern that matches decides the
role; paths no rule matches are ``OTHER_TAG`` files.
"""
from __future__ import annotations

import enum
import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .engine.expression import Expression, compile_expression
from .engine.matcher import match
from .engine.models import ERR_EMPTY, InvalidArgumentError
from .logging_config import get_logger

logger = get_logger(__name__)


class BagFileRole(str, enum.Enum):
    PAYLOAD_DIRECTORY = "PAYLOAD_DIRECTORY"  # the data/ directory itself
    PAYLOAD_CONTENT = "PAYLOAD_CONTENT"  # anything below data/
    BAG_DECL = "BAG_DECL"  # bagit.txt
    BAG_INFO = "BAG_INFO"  # bag-info.txt
    PAYLOAD_MANIFEST = "PAYLOAD_MANIFEST"  # manifest-<algorithm>.txt
    TAG_MANIFEST = "TAG_MANIFEST"  # tagmanifest-<algorithm>.txt
    FETCH = "FETCH"  # fetch.txt
    OTHER_TAG = "OTHER_TAG"


@dataclass(frozen=True)
class RoleRule:
    role: BagFileRole
    pattern: str

    @property
    def expression(self) -> Expression:
        return compile_expression(self.pattern)


@dataclass(frozen=True)
class RoleRules:
    """Ordered classification rules; the first match wins."""

    rules: tuple[RoleRule, ...]
    default: BagFileRole = BagFileRole.OTHER_TAG

    def __iter__(self):
        return iter(self.rules)

    def to_json(self) -> dict[str, object]:
        return {
            "default": self.default.value,
            "rules": [{"role": rule.role.value, "pattern": rule.pattern} for rule in self.rules],
        }


DEFAULT_ROLE_RULES = RoleRules(
    rules=(
        RoleRule(BagFileRole.BAG_DECL, "bagit.txt"),
        RoleRule(BagFileRole.BAG_INFO, "bag-info.txt"),
        RoleRule(BagFileRole.PAYLOAD_MANIFEST, "manifest-*.txt"),
        RoleRule(BagFileRole.TAG_MANIFEST, "tagmanifest-*.txt"),
        RoleRule(BagFileRole.FETCH, "fetch.txt"),
        RoleRule(BagFileRole.PAYLOAD_DIRECTORY, "data"),
        # trailing separator: everything below data/
        RoleRule(BagFileRole.PAYLOAD_CONTENT, "data/"),
    )
)


def _parse_role(value: object) -> BagFileRole:
    try:
        return BagFileRole(str(value).upper())
    except ValueError:
        raise InvalidArgumentError(f"Unknown bag file role '{value}'") from None


def role_rules_from_dict(payload: dict[str, object]) -> RoleRules:
    entries = payload.get("rules")
    if not isinstance(entries, list):
        raise InvalidArgumentError("Role rules must contain a 'rules' list")
    rules: list[RoleRule] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("pattern"):
            raise InvalidArgumentError(ERR_EMPTY.format(name="pattern"))
        rule = RoleRule(_parse_role(entry.get("role")), str(entry["pattern"]))
        compile_expression(rule.pattern)
        rules.append(rule)
    default = payload.get("default")
    if default is None:
        return RoleRules(rules=tuple(rules))
    return RoleRules(rules=tuple(rules), default=_parse_role(default))


def load_role_rules(path: str) -> RoleRules:
    with open(path, encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, list):
        payload = {"rules": payload}
    return role_rules_from_dict(payload)


def classify(path: str, rules: RoleRules = DEFAULT_ROLE_RULES) -> BagFileRole:
    """Role of the file or directory at ``path``.

    A trailing separator is dropped first, so ``data/`` names the payload
    directory instead of turning into the pattern ``data/**``.
    """
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"
    expression = compile_expression(path)
    for rule in rules:
        if match(rule.expression, expression):
            return rule.role
    logger.debug("No role rule matched %r; using %s", path, rules.default.value)
    return rules.default


def classify_all(
    paths: Iterable[str], rules: RoleRules = DEFAULT_ROLE_RULES
) -> dict[str, BagFileRole]:
    return {path: classify(path, rules) for path in paths}


def paths_with_role(
    paths: Sequence[str], role: BagFileRole, rules: RoleRules = DEFAULT_ROLE_RULES
) -> list[str]:
    return [path for path in paths if classify(path, rules) is role]
