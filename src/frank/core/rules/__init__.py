"""Rule vocabulary: model, built-in defaults, and the YAML loader."""

from frank.core.rules.defaults import DEFAULT_RULES, FALLBACK_RULES
from frank.core.rules.loader import load_rules, parse_rules, parse_rules_file
from frank.core.rules.model import RuleConfig

__all__ = [
    "DEFAULT_RULES",
    "FALLBACK_RULES",
    "RuleConfig",
    "load_rules",
    "parse_rules",
    "parse_rules_file",
]
