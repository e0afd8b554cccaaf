"""Declarative rule table mapping content signals to candidate layouts."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import RuleConfigurationError, RuleIssue
from .layout_models import LayoutRule, PrimaryIntent, TextDensity

LOGGER = logging.getLogger(__name__)

FALLBACK_LAYOUT = "title-bullets"
FALLBACK_CONFIDENCE = 0.5
FALLBACK_REASON = "Default fallback layout"

SIMPLE_COMPLEXITY_LIMIT = 0.3
COMPLEX_COMPLEXITY_LIMIT = 0.7


DEFAULT_LAYOUT_RULES: Tuple[LayoutRule, ...] = (
    LayoutRule(
        rule_id="text-heavy",
        name="Text Heavy Content",
        condition=lambda s: s.text_density is TextDensity.HIGH,
        candidate_layouts=("title-paragraph", "two-column"),
        weight=0.8,
        rationale="High text density requires layouts optimized for reading",
    ),
    LayoutRule(
        rule_id="bullet-heavy",
        name="Bullet Point Heavy",
        condition=lambda s: s.bullet_count > 5,
        candidate_layouts=("title-bullets", "two-column"),
        weight=0.9,
        rationale="Multiple bullet points work best with dedicated bullet layouts",
    ),
    LayoutRule(
        rule_id="structured-list",
        name="Structured List",
        condition=lambda s: 3 <= s.bullet_count <= 5,
        candidate_layouts=("title-bullets",),
        weight=0.7,
        rationale="A short list of points reads best as bullets",
    ),
    LayoutRule(
        rule_id="visual-content",
        name="Visual Content Present",
        condition=lambda s: s.has_images or s.has_charts,
        candidate_layouts=("image-right", "image-left", "chart", "two-column"),
        weight=0.85,
        rationale="Visual content requires layouts that accommodate images and charts",
    ),
    LayoutRule(
        rule_id="data-visualization",
        name="Data Visualization",
        condition=lambda s: s.has_charts or s.has_tables,
        candidate_layouts=("chart", "comparison-table"),
        weight=0.95,
        rationale="Data content requires specialized visualization layouts",
    ),
    LayoutRule(
        rule_id="numeric-text",
        name="Numeric Statements",
        condition=lambda s: s.has_numeric_data and not s.has_charts,
        candidate_layouts=("chart", "metrics-dashboard"),
        weight=0.6,
        rationale="Numbers in the text can be lifted into a chart or metric cards",
    ),
    LayoutRule(
        rule_id="timeline-content",
        name="Timeline Content",
        condition=lambda s: s.has_timeline,
        candidate_layouts=("timeline", "process-flow"),
        weight=1.0,
        rationale="Timeline content requires chronological layout structures",
    ),
    LayoutRule(
        rule_id="sequential-content",
        name="Sequential Content",
        condition=lambda s: s.has_sequential_data,
        candidate_layouts=("timeline", "process-flow"),
        weight=0.7,
        rationale="Sequential steps are clearer on a timeline or process flow",
    ),
    LayoutRule(
        rule_id="comparative-content",
        name="Comparative Content",
        condition=lambda s: s.has_comparative_data,
        candidate_layouts=("two-column", "comparison-table"),
        weight=0.95,
        rationale="Side-by-side layouts make comparisons explicit",
    ),
    LayoutRule(
        rule_id="quote-content",
        name="Quote Content",
        condition=lambda s: s.has_quotes,
        candidate_layouts=("quote",),
        weight=0.9,
        rationale="Quote layout ideal for testimonials and quotes",
    ),
    LayoutRule(
        rule_id="simple-content",
        name="Simple Content",
        condition=lambda s: s.text_length > 0 and s.complexity_score < SIMPLE_COMPLEXITY_LIMIT,
        candidate_layouts=("title", "quote", "hero"),
        weight=0.6,
        rationale="Simple content works well with clean, minimal layouts",
    ),
    LayoutRule(
        rule_id="complex-content",
        name="Complex Content",
        condition=lambda s: s.complexity_score > COMPLEX_COMPLEXITY_LIMIT,
        candidate_layouts=("two-column", "tabbed-content"),
        weight=0.85,
        rationale="Complex content requires structured layouts for organization",
    ),
    LayoutRule(
        rule_id="persuasive-statement",
        name="Persuasive Statement",
        condition=lambda s: s.primary_intent is PrimaryIntent.PERSUADE
        and s.text_density is TextDensity.LOW,
        candidate_layouts=("quote", "hero"),
        weight=0.3,
        rationale="Short persuasive statements land best as a single bold message",
    ),
    LayoutRule(
        rule_id="showcase-visual",
        name="Showcase Visual",
        condition=lambda s: s.primary_intent is PrimaryIntent.SHOWCASE and s.has_images,
        candidate_layouts=("image-right", "hero"),
        weight=0.4,
        rationale="Showcase content benefits from a prominent image",
    ),
)


class RuleTuning(BaseModel):
    """Startup-time overrides for the default rule table."""

    model_config = ConfigDict(allow_inf_nan=False)

    weights: Dict[str, float] = Field(default_factory=dict)
    disabled: List[str] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path) -> "RuleTuning":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Rule tuning file not found at {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuleConfigurationError(
                [f"invalid JSON ({exc.msg}, line {exc.lineno})"], source=str(path)
            ) from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise RuleConfigurationError(
                [_tuning_issue(error) for error in exc.errors()], source=str(path)
            ) from exc


class RuleTable:
    """Immutable, validated collection of :class:`LayoutRule` entries."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[LayoutRule]) -> None:
        rules = tuple(rules)
        _validate_rules(rules)
        self._rules: Tuple[LayoutRule, ...] = rules

    @classmethod
    def default(cls) -> "RuleTable":
        return cls(DEFAULT_LAYOUT_RULES)

    @classmethod
    def from_tuning_file(cls, path: Path) -> "RuleTable":
        return cls.default().with_tuning(RuleTuning.from_file(path))

    # ------------------------------------------------------------------
    # lookup helpers
    # ------------------------------------------------------------------
    @property
    def rules(self) -> Tuple[LayoutRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[LayoutRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def rule_ids(self) -> List[str]:
        return [rule.rule_id for rule in self._rules]

    def get(self, rule_id: str) -> LayoutRule:
        rule = next((rule for rule in self._rules if rule.rule_id == rule_id), None)
        if rule is None:
            raise KeyError(f"Unknown layout rule id: {rule_id}")
        return rule

    def layouts(self) -> List[str]:
        """Every layout id any rule can recommend, in first-mention order."""

        seen: Dict[str, None] = {}
        for rule in self._rules:
            for layout_id in rule.candidate_layouts:
                seen.setdefault(layout_id, None)
        seen.setdefault(FALLBACK_LAYOUT, None)
        return list(seen)

    # ------------------------------------------------------------------
    # tuning
    # ------------------------------------------------------------------
    def with_tuning(self, tuning: RuleTuning) -> "RuleTable":
        """Return a new table with ``tuning`` applied; ``self`` is unchanged."""

        known = set(self.rule_ids())
        issues = [
            RuleIssue("weight override for unknown rule", rule_id)
            for rule_id in tuning.weights
            if rule_id not in known
        ]
        issues.extend(
            RuleIssue("cannot disable unknown rule", rule_id)
            for rule_id in tuning.disabled
            if rule_id not in known
        )
        if issues:
            raise RuleConfigurationError(issues)

        disabled = set(tuning.disabled)
        rules = [
            replace(rule, weight=tuning.weights.get(rule.rule_id, rule.weight))
            for rule in self._rules
            if rule.rule_id not in disabled
        ]
        LOGGER.info(
            "Tuned rule table: %d weight override(s), %d rule(s) disabled",
            len(tuning.weights),
            len(disabled),
        )
        return RuleTable(rules)

    def to_list(self) -> List[Dict[str, object]]:
        return [rule.to_dict() for rule in self._rules]


def _tuning_issue(error: Dict[str, Any]) -> RuleIssue:
    # pydantic locations look like ("weights", "<rule id>") for weight values
    loc = tuple(str(part) for part in error.get("loc", ()))
    if len(loc) >= 2 and loc[0] == "weights":
        return RuleIssue(f"weights: {error['msg']}", loc[1])
    return RuleIssue(f"{'.'.join(loc) or 'tuning'}: {error['msg']}")


def _validate_rules(rules: Tuple[LayoutRule, ...]) -> None:
    issues: List[RuleIssue] = []
    if not rules:
        issues.append(RuleIssue("rule table must contain at least one rule"))
    seen: Dict[str, int] = {}
    for idx, rule in enumerate(rules):
        rule_id = rule.rule_id or None
        if not rule.rule_id:
            issues.append(RuleIssue(f"rules[{idx}] has an empty rule id"))
        elif rule.rule_id in seen:
            issues.append(RuleIssue(f"duplicates the rule at position {seen[rule.rule_id]}", rule_id))
        else:
            seen[rule.rule_id] = idx
        weight = rule.weight
        if (
            isinstance(weight, bool)
            or not isinstance(weight, (int, float))
            or not math.isfinite(weight)
            or weight <= 0
        ):
            issues.append(RuleIssue(f"weight must be a finite number greater than 0 (got {weight!r})", rule_id))
        if not rule.candidate_layouts:
            issues.append(RuleIssue("candidate layouts must not be empty", rule_id))
        if not callable(rule.condition):
            issues.append(RuleIssue("condition must be callable", rule_id))
    if issues:
        raise RuleConfigurationError(issues)


DEFAULT_RULE_TABLE = RuleTable.default()
