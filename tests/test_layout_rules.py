import json

import pytest

from slide_layout.errors import RuleConfigurationError
from slide_layout.layout_engine import LayoutEngine
from slide_layout.layout_models import ContentSignals, LayoutRule
from slide_layout.layout_rules import (
    DEFAULT_RULE_TABLE,
    FALLBACK_LAYOUT,
    RuleTable,
    RuleTuning,
)


def _always(rule_id, layouts, weight):
    return LayoutRule(
        rule_id=rule_id,
        name=rule_id,
        condition=lambda signals: True,
        candidate_layouts=tuple(layouts),
        weight=weight,
        rationale=f"{rule_id} rationale",
    )


def test_default_table_is_well_formed():
    ids = DEFAULT_RULE_TABLE.rule_ids()

    assert len(ids) == len(set(ids)) == len(DEFAULT_RULE_TABLE)
    assert all(rule.weight > 0 for rule in DEFAULT_RULE_TABLE)
    assert all(rule.candidate_layouts for rule in DEFAULT_RULE_TABLE)
    assert FALLBACK_LAYOUT in DEFAULT_RULE_TABLE.layouts()


def test_get_unknown_rule_raises_key_error():
    assert DEFAULT_RULE_TABLE.get("bullet-heavy").weight == 0.9
    with pytest.raises(KeyError):
        DEFAULT_RULE_TABLE.get("does-not-exist")


def test_rule_table_rejects_invalid_rules():
    with pytest.raises(RuleConfigurationError) as excinfo:
        RuleTable(
            [
                _always("dup", ["a"], 1.0),
                _always("dup", ["b"], 1.0),
                _always("zero", ["c"], 0),
                _always("empty", [], 0.5),
            ]
        )

    error = excinfo.value
    messages = {(issue.rule_id, issue.message.split(" (")[0]) for issue in error.issues}
    assert ("dup", "duplicates the rule at position 0") in messages
    assert ("zero", "weight must be a finite number greater than 0") in messages
    assert ("empty", "candidate layouts must not be empty") in messages
    assert error.rule_ids == ["dup", "zero", "empty"]
    assert str(error).startswith("Invalid layout rule configuration (3 issue(s)):")
    assert "rule 'zero': weight must be a finite number greater than 0" in str(error)


def test_empty_rule_table_is_rejected():
    with pytest.raises(RuleConfigurationError):
        RuleTable([])


def test_tie_break_prefers_strongest_single_rule():
    table = RuleTable(
        [
            _always("split-a", ["stacked", "other"], 0.5),
            _always("split-b", ["stacked"], 0.5),
            _always("single", ["focused"], 1.0),
        ]
    )

    ranked = LayoutEngine(table).rank(ContentSignals())

    assert [score.layout_id for score in ranked] == ["focused", "stacked", "other"]
    assert ranked[0].confidence == ranked[1].confidence == 1.0
    assert ranked[2].confidence == pytest.approx(0.5)


def test_full_tie_keeps_rule_order():
    table = RuleTable([_always("first", ["b", "a"], 0.7)])

    ranked = LayoutEngine(table).rank(ContentSignals())

    assert [score.layout_id for score in ranked] == ["b", "a"]


def test_with_tuning_returns_new_table():
    tuning = RuleTuning(weights={"quote-content": 0.2}, disabled=["simple-content"])

    tuned = DEFAULT_RULE_TABLE.with_tuning(tuning)

    assert tuned.get("quote-content").weight == 0.2
    assert "simple-content" not in tuned.rule_ids()
    assert DEFAULT_RULE_TABLE.get("quote-content").weight == 0.9
    assert "simple-content" in DEFAULT_RULE_TABLE.rule_ids()


def test_tuning_with_unknown_ids_is_rejected():
    tuning = RuleTuning(weights={"nope": 1.0}, disabled=["missing"])

    with pytest.raises(RuleConfigurationError) as excinfo:
        DEFAULT_RULE_TABLE.with_tuning(tuning)

    assert len(excinfo.value.issues) == 2
    assert excinfo.value.rule_ids == ["nope", "missing"]


def test_tuning_with_non_positive_weight_is_rejected():
    with pytest.raises(RuleConfigurationError):
        DEFAULT_RULE_TABLE.with_tuning(RuleTuning(weights={"quote-content": 0}))


@pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_rule_weight_is_rejected(weight):
    with pytest.raises(RuleConfigurationError) as excinfo:
        RuleTable([_always("broken", ["a"], weight)])

    assert excinfo.value.rule_ids == ["broken"]

    tuning = RuleTuning.model_construct(weights={"bullet-heavy": weight}, disabled=[])
    with pytest.raises(RuleConfigurationError) as excinfo:
        DEFAULT_RULE_TABLE.with_tuning(tuning)

    assert excinfo.value.rule_ids == ["bullet-heavy"]


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
def test_tuning_file_with_non_finite_weight_is_rejected(tmp_path, token):
    path = tmp_path / "rules.json"
    path.write_text('{"weights": {"bullet-heavy": ' + token + "}}", encoding="utf-8")

    with pytest.raises(RuleConfigurationError) as excinfo:
        RuleTable.from_tuning_file(path)

    assert excinfo.value.rule_ids == ["bullet-heavy"]
    assert excinfo.value.source == str(path)


def test_tuning_file_round_trip(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"weights": {"timeline-content": 0.5}}), encoding="utf-8")

    table = RuleTable.from_tuning_file(path)

    assert table.get("timeline-content").weight == 0.5
    assert len(table) == len(DEFAULT_RULE_TABLE)


def test_tuning_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        RuleTuning.from_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(RuleConfigurationError):
        RuleTuning.from_file(broken)

    wrong_type = tmp_path / "wrong.json"
    wrong_type.write_text(json.dumps({"weights": {"quote-content": "heavy"}}), encoding="utf-8")
    with pytest.raises(RuleConfigurationError) as excinfo:
        RuleTuning.from_file(wrong_type)
    assert excinfo.value.rule_ids == ["quote-content"]
    assert str(wrong_type) in str(excinfo.value)


def test_to_list_serializes_rules():
    payload = DEFAULT_RULE_TABLE.to_list()

    assert payload[0]["id"] == DEFAULT_RULE_TABLE.rules[0].rule_id
    assert "condition" not in payload[0]
    json.dumps(payload)
