"""
Rules YAML loader.

A rules file can only add vocabulary on top of the built-in defaults::

    rules_version: "1"
    name: school-year
    extend:
      overwhelm:
        loss_of_function: ["brain is fried"]
      classification:
        assignment: ["lab report"]
      content_policy:
        categories:
          violent: ["stabbing"]

Usage::

    rules = load_rules(config.rules_path)   # never raises, falls back
    rules = parse_rules_file(path)          # strict, raises RulesError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from frank.core.exceptions import RulesError
from frank.core.rules.defaults import DEFAULT_RULES, FALLBACK_RULES
from frank.core.rules.model import RuleConfig

logger = structlog.get_logger()

_TOP_LEVEL_KEYS = frozenset({"rules_version", "name", "extend"})


def load_rules(path: str | Path | None = None) -> RuleConfig:
    """
    Return the active rule set.

    No path means the built-in defaults.  A path that cannot be read or
    validated yields ``FALLBACK_RULES`` and a ``rules_unavailable`` warning;
    the conversation keeps running on the reduced vocabulary.
    """
    if path is None:
        return DEFAULT_RULES
    try:
        rules = parse_rules_file(path)
    except RulesError as exc:
        logger.warning("rules_unavailable", path=str(path), error=str(exc))
        return FALLBACK_RULES
    logger.debug("rules_loaded", path=str(path), name=rules.name, hash=rules.content_hash())
    return rules


def parse_rules_file(path: str | Path) -> RuleConfig:
    """Load and validate a rules file.  Raises :class:`RulesError`."""
    p = Path(path).expanduser()
    if not p.exists():
        raise RulesError(f"Rules file not found: {p}")
    try:
        content = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesError(f"Cannot read rules file {p}: {exc}") from exc
    return parse_rules(content, source=str(p))


def parse_rules(yaml_text: str, source: str = "<string>") -> RuleConfig:
    """Parse a rules YAML string and merge it onto ``DEFAULT_RULES``."""
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as exc:
        raise RulesError(f"YAML syntax error in {source}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RulesError(f"Rules {source} must be a YAML mapping (got {type(data).__name__})")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise RulesError(
            f"Rules {source}: unknown top-level keys {sorted(unknown)}. "
            "Only 'rules_version', 'name' and 'extend' are allowed."
        )

    version = str(data.get("rules_version", "1")).strip()
    if version != "1":
        raise RulesError(f"Rules {source}: unsupported rules_version {version!r}.")

    merged = DEFAULT_RULES.model_dump()
    merged["name"] = str(data.get("name", "custom"))
    _apply_extensions(merged, data.get("extend") or {}, source)

    try:
        return RuleConfig.model_validate(merged)
    except ValidationError as exc:
        lines = [f"Rules validation failed in {source}:"]
        for err in exc.errors():
            loc = " → ".join(str(x) for x in err["loc"]) if err["loc"] else "(root)"
            lines.append(f"  {loc}: {err['msg']}")
        raise RulesError("\n".join(lines)) from exc


def _apply_extensions(merged: dict[str, Any], extend: Any, source: str) -> None:
    """Append every list under ``extend`` to the matching default list."""
    if not isinstance(extend, dict):
        raise RulesError(f"Rules {source}: 'extend' must be a mapping")

    for section, fields in extend.items():
        target = merged.get(section)
        if not isinstance(target, dict):
            raise RulesError(f"Rules {source}: unknown section extend.{section}")
        if not isinstance(fields, dict):
            raise RulesError(f"Rules {source}: extend.{section} must be a mapping")

        for field, items in fields.items():
            where = f"extend.{section}.{field}"
            if field not in target:
                raise RulesError(f"Rules {source}: unknown field {where}")
            current = target[field]
            if not isinstance(current, (list, tuple)):
                raise RulesError(f"Rules {source}: {where} is not a list and cannot be extended")

            if section == "content_policy" and field == "categories":
                target[field] = _extend_categories(list(current), items, where, source)
                continue

            if not isinstance(items, list):
                raise RulesError(f"Rules {source}: {where} must be a list")
            target[field] = [*current, *items]


def _extend_categories(
    current: list[dict[str, Any]], items: Any, where: str, source: str
) -> list[dict[str, Any]]:
    if not isinstance(items, dict):
        raise RulesError(f"Rules {source}: {where} must map category names to keyword lists")

    by_name = {c["name"]: dict(c) for c in current}
    for name, keywords in items.items():
        if not isinstance(keywords, list):
            raise RulesError(f"Rules {source}: {where}.{name} must be a list")
        if name in by_name:
            by_name[name]["keywords"] = [*by_name[name]["keywords"], *keywords]
        else:
            by_name[name] = {"name": name, "keywords": keywords}
    return list(by_name.values())
