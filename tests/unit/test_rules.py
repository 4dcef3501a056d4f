"""Unit tests for frank.core.rules — model validation, defaults and the YAML loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from frank.core.exceptions import RulesError
from frank.core.rules import (
    DEFAULT_RULES,
    FALLBACK_RULES,
    RuleConfig,
    load_rules,
    parse_rules,
    parse_rules_file,
)
from frank.core.rules.matching import contains_any, has_explicit_overwhelm
from frank.core.rules.model import CertaintyRules, ClassificationRules

# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class TestRuleConfigModel:
    def test_defaults_are_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_RULES.name = "changed"  # type: ignore[misc]

    def test_keywords_are_lowercased_and_stripped(self) -> None:
        c = CertaintyRules(high=("  ALWAYS ",), low=("Maybe",))
        assert c.high == ("always",)
        assert c.low == ("maybe",)

    def test_empty_keyword_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CertaintyRules(high=("ok", "   "))

    def test_invalid_regex_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid regex"):
            ClassificationRules(explanatory_patterns=("(unclosed",))

    def test_regex_matching_empty_string_rejected(self) -> None:
        with pytest.raises(ValidationError, match="empty string"):
            ClassificationRules(explanatory_patterns=(".*",))

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RuleConfig.model_validate({"surprise": []})

    def test_unsupported_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RuleConfig(rules_version="2")

    def test_content_hash_is_stable(self) -> None:
        assert DEFAULT_RULES.content_hash() == DEFAULT_RULES.content_hash()
        assert len(DEFAULT_RULES.content_hash()) == 16
        assert DEFAULT_RULES.content_hash() != FALLBACK_RULES.content_hash()


class TestDefaults:
    def test_policy_categories_in_order(self) -> None:
        names = [c.name for c in DEFAULT_RULES.content_policy.categories]
        assert names == ["self_harm", "sexual", "violent"]

    def test_redirect_message(self) -> None:
        assert DEFAULT_RULES.content_policy.redirect_message.startswith("I'm smart but not")

    def test_fallback_still_detects_loss_of_function(self) -> None:
        assert contains_any("I can't think", FALLBACK_RULES.overwhelm.loss_of_function)


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------


class TestMatching:
    def test_substring_matching_is_fuzzy(self) -> None:
        assert contains_any("this is hateful", ("hate",))

    def test_case_insensitive(self) -> None:
        assert contains_any("TOO MUCH", ("too much",))

    def test_explicit_overwhelm(self) -> None:
        assert has_explicit_overwhelm("it's too much", DEFAULT_RULES)
        assert has_explicit_overwhelm("I'm so stressed", DEFAULT_RULES)

    def test_relevance_complaint_is_not_overwhelm(self) -> None:
        assert not has_explicit_overwhelm("this is pointless", DEFAULT_RULES)

    def test_relevance_complaint_with_marker_is_overwhelm(self) -> None:
        assert has_explicit_overwhelm("this is pointless and too much", DEFAULT_RULES)

    def test_empty_text(self) -> None:
        assert not has_explicit_overwhelm("", DEFAULT_RULES)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestParseRules:
    def test_empty_document_is_defaults(self) -> None:
        rules = parse_rules("")
        assert rules.overwhelm == DEFAULT_RULES.overwhelm

    def test_extend_appends_to_defaults(self) -> None:
        rules = parse_rules(
            """
rules_version: "1"
name: school-year
extend:
  overwhelm:
    loss_of_function: ["Brain Is Fried"]
  classification:
    assignment: ["lab report"]
"""
        )
        assert rules.name == "school-year"
        assert rules.overwhelm.loss_of_function[-1] == "brain is fried"
        assert set(DEFAULT_RULES.overwhelm.loss_of_function) <= set(
            rules.overwhelm.loss_of_function
        )
        assert "lab report" in rules.classification.assignment

    def test_extend_existing_policy_category(self) -> None:
        rules = parse_rules(
            """
extend:
  content_policy:
    categories:
      violent: ["stabbing"]
"""
        )
        violent = next(c for c in rules.content_policy.categories if c.name == "violent")
        assert "stabbing" in violent.keywords
        assert "murder" in violent.keywords

    def test_add_new_policy_category(self) -> None:
        rules = parse_rules(
            """
extend:
  content_policy:
    categories:
      drugs: ["cocaine"]
"""
        )
        assert [c.name for c in rules.content_policy.categories][-1] == "drugs"

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(RulesError, match="unknown top-level keys"):
            parse_rules("replace: {}")

    def test_unknown_section(self) -> None:
        with pytest.raises(RulesError, match="unknown section"):
            parse_rules("extend:\n  nonsense:\n    x: [1]\n")

    def test_unknown_field(self) -> None:
        with pytest.raises(RulesError, match="unknown field"):
            parse_rules("extend:\n  overwhelm:\n    nonsense: [a]\n")

    def test_scalar_field_cannot_be_extended(self) -> None:
        with pytest.raises(RulesError, match="cannot be extended"):
            parse_rules("extend:\n  classification:\n    default_max_words: [3]\n")

    def test_bad_yaml(self) -> None:
        with pytest.raises(RulesError, match="YAML syntax error"):
            parse_rules("extend: [unclosed")

    def test_not_a_mapping(self) -> None:
        with pytest.raises(RulesError, match="must be a YAML mapping"):
            parse_rules("- a\n- b\n")

    def test_unsupported_version(self) -> None:
        with pytest.raises(RulesError, match="unsupported rules_version"):
            parse_rules('rules_version: "9"')

    def test_validation_error_names_location(self) -> None:
        with pytest.raises(RulesError) as exc_info:
            parse_rules('extend:\n  classification:\n    explanatory_patterns: ["(bad"]\n')
        assert "classification → explanatory_patterns" in str(exc_info.value)


class TestLoadRules:
    def test_no_path_is_defaults(self) -> None:
        assert load_rules(None) is DEFAULT_RULES

    def test_valid_file(self, tmp_path: Path) -> None:
        p = tmp_path / "rules.yaml"
        p.write_text('name: mine\nextend:\n  classification:\n    shrink: ["tinier"]\n')
        rules = load_rules(p)
        assert rules.name == "mine"
        assert parse_rules_file(p) == rules

    def test_missing_file_falls_back(self, tmp_path: Path) -> None:
        with structlog.testing.capture_logs() as captured:
            rules = load_rules(tmp_path / "missing.yaml")
        assert rules is FALLBACK_RULES
        assert any(e["event"] == "rules_unavailable" for e in captured)

    def test_invalid_file_falls_back(self, tmp_path: Path) -> None:
        p = tmp_path / "rules.yaml"
        p.write_text("replace: everything")
        assert load_rules(p) is FALLBACK_RULES

    def test_parse_rules_file_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RulesError, match="not found"):
            parse_rules_file(tmp_path / "nope.yaml")
