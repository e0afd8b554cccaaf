"""Rule evaluation and recommendation building for slide layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from .image_composition import image_region_for_layout
from .layout_models import (
    ContentSignals,
    LayoutAlternative,
    LayoutOptimization,
    LayoutRecommendation,
    LayoutScore,
    SlideContent,
    TextDensity,
)
from .layout_rules import (
    DEFAULT_RULE_TABLE,
    FALLBACK_CONFIDENCE,
    FALLBACK_LAYOUT,
    FALLBACK_REASON,
    RuleTable,
)
from .scoring import ScoreAccumulator, rank_scores
from .signal_extraction import ContentLike, as_slide_content, extract_signals

LOGGER = logging.getLogger(__name__)

MAX_ALTERNATIVES = 3
HIERARCHY_BULLET_THRESHOLD = 7
MAX_BULLETS = 5
MIN_FONT_SIZE = 18
MIN_CONTRAST_RATIO = 4.5


class LayoutEngine:
    """Evaluate a :class:`RuleTable` against content signals.

    The engine holds nothing but the immutable rule table it was built with,
    so one instance can serve any number of slides concurrently.
    """

    def __init__(self, rule_table: Optional[RuleTable] = None) -> None:
        self.rule_table = rule_table or DEFAULT_RULE_TABLE

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def evaluate(self, signals: ContentSignals) -> Dict[str, LayoutScore]:
        """Score every candidate layout proposed by the matching rules."""

        accumulator = ScoreAccumulator()
        for rule in self.rule_table:
            if not rule.matches(signals):
                continue
            LOGGER.debug("Rule %s matched (weight %.2f)", rule.rule_id, rule.weight)
            accumulator.add_many(rule.candidate_layouts, rule.weight, rule.rationale)

        scores = accumulator.normalized()
        if not scores:
            LOGGER.debug("No layout rule matched, using %s", FALLBACK_LAYOUT)
            return {FALLBACK_LAYOUT: _fallback_score()}
        return scores

    def rank(self, signals: ContentSignals) -> List[LayoutScore]:
        return rank_scores(self.evaluate(signals))

    def recommend(self, signals: ContentSignals) -> LayoutRecommendation:
        ranked = self.rank(signals)
        primary = ranked[0]
        alternatives = [
            LayoutAlternative(
                layout_id=score.layout_id,
                confidence=score.confidence,
                reason=score.reasoning[0] if score.reasoning else "Alternative layout option",
            )
            for score in ranked[1 : MAX_ALTERNATIVES + 1]
        ]
        recommendation = LayoutRecommendation(
            primary=primary,
            alternatives=alternatives,
            optimizations=build_optimizations(signals),
            image_region=image_region_for_layout(primary.layout_id),
        )
        LOGGER.debug(
            "Layout selected: %s (confidence %.0f%%, %d alternative(s))",
            primary.layout_id,
            primary.confidence * 100,
            len(alternatives),
        )
        return recommendation

    def recommend_for_content(self, content: ContentLike) -> LayoutRecommendation:
        return self.recommend(extract_signals(content))


def _fallback_score() -> LayoutScore:
    return LayoutScore(
        layout_id=FALLBACK_LAYOUT,
        raw_score=0.0,
        confidence=FALLBACK_CONFIDENCE,
        reasoning=[FALLBACK_REASON],
    )


# ---------------------------------------------------------------------------
# Optimization hints
# ---------------------------------------------------------------------------

def build_optimizations(signals: ContentSignals) -> List[LayoutOptimization]:
    """Derive refinement advice from ``signals`` alone.

    The advice does not depend on which layout won; accessibility guidance is
    always appended.
    """

    optimizations: List[LayoutOptimization] = []

    if signals.text_density is TextDensity.HIGH:
        optimizations.append(
            LayoutOptimization(
                type="spacing",
                description="Increase line spacing and margins for better readability",
                impact="medium",
                implementation={"line_height": 1.6, "margin_increase": 0.2},
            )
        )

    if signals.bullet_count > HIERARCHY_BULLET_THRESHOLD:
        optimizations.append(
            LayoutOptimization(
                type="hierarchy",
                description=(
                    f"Keep at most {MAX_BULLETS} bullets per slide and group the rest "
                    "under sub-bullets or split them across slides"
                ),
                impact="high",
                implementation={"max_bullets": MAX_BULLETS, "use_sub_bullets": True},
            )
        )

    if signals.readability_score <= 0.5 and signals.text_density is not TextDensity.LOW:
        optimizations.append(
            LayoutOptimization(
                type="typography",
                description="Rewrite long or fragmented sentences to 15-20 words each",
                impact="medium",
                implementation={"max_words_per_sentence": 20},
            )
        )

    optimizations.append(
        LayoutOptimization(
            type="accessibility",
            description="Ensure sufficient color contrast and font sizes",
            impact="high",
            implementation={
                "min_font_size": MIN_FONT_SIZE,
                "contrast_ratio": MIN_CONTRAST_RATIO,
            },
        )
    )
    return optimizations


# ---------------------------------------------------------------------------
# Layout-specific refinement
# ---------------------------------------------------------------------------

LAYOUT_OPTIMIZATION_STRATEGIES: Dict[str, Tuple[LayoutOptimization, ...]] = {
    "title": (
        LayoutOptimization(
            type="typography",
            description="Optimize title hierarchy and spacing",
            impact="high",
            implementation={"title_size": "large", "center_align": True},
        ),
        LayoutOptimization(
            type="spacing",
            description="Maximize visual impact with generous whitespace",
            impact="medium",
            implementation={"vertical_center": True, "min_margins": 1.0},
        ),
    ),
    "title-bullets": (
        LayoutOptimization(
            type="hierarchy",
            description="Optimize bullet point hierarchy and grouping",
            impact="high",
            implementation={"max_bullets": MAX_BULLETS, "use_sub_bullets": True},
        ),
        LayoutOptimization(
            type="spacing",
            description="Improve bullet spacing for readability",
            impact="medium",
            implementation={"bullet_spacing": 0.3, "indentation": 0.5},
        ),
        LayoutOptimization(
            type="typography",
            description="Enhance text contrast and sizing",
            impact="medium",
            implementation={"bullet_size": "medium", "emphasize_first": True},
        ),
    ),
    "two-column": (
        LayoutOptimization(
            type="spacing",
            description="Balance column widths and gutters",
            impact="high",
            implementation={"column_ratio": "1:1", "gutter": 0.5},
        ),
        LayoutOptimization(
            type="hierarchy",
            description="Establish clear visual hierarchy between columns",
            impact="medium",
            implementation={"left_primary": True, "align_tops": True},
        ),
    ),
}


@dataclass(slots=True)
class LayoutOptimizationResult:
    content: SlideContent
    improvements: List[str] = field(default_factory=list)
    optimizations: List[LayoutOptimization] = field(default_factory=list)


def optimize_layout(layout_id: str, content: ContentLike) -> LayoutOptimizationResult:
    """Apply the refinement strategies registered for ``layout_id``.

    Only the bullet hierarchy strategy changes the content (it keeps the first
    ``MAX_BULLETS`` bullets); the others are returned as advice for the
    renderer. The input content is never modified.
    """

    slide = as_slide_content(content)
    strategies = LAYOUT_OPTIMIZATION_STRATEGIES.get(layout_id, ())
    optimized = replace(slide, bullets=list(slide.bullets))
    improvements: List[str] = []

    for strategy in strategies:
        if strategy.type == "hierarchy" and "max_bullets" in strategy.implementation:
            limit = strategy.implementation["max_bullets"]
            if len(optimized.bullets) > limit:
                optimized.bullets = optimized.bullets[:limit]
                improvements.append(
                    f"Reduced bullet points from {len(slide.bullets)} to {limit} for better focus"
                )
            continue
        improvements.append(strategy.description)

    LOGGER.debug("Applied %d optimization(s) to %s layout", len(improvements), layout_id)
    return LayoutOptimizationResult(
        content=optimized,
        improvements=improvements,
        optimizations=[
            replace(item, implementation=dict(item.implementation)) for item in strategies
        ],
    )


# ---------------------------------------------------------------------------
# Module-level helpers using the default rule table
# ---------------------------------------------------------------------------

_DEFAULT_ENGINE = LayoutEngine()


def evaluate(signals: ContentSignals, rule_table: Optional[RuleTable] = None) -> Dict[str, LayoutScore]:
    engine = LayoutEngine(rule_table) if rule_table is not None else _DEFAULT_ENGINE
    return engine.evaluate(signals)


def recommend(signals: ContentSignals, rule_table: Optional[RuleTable] = None) -> LayoutRecommendation:
    engine = LayoutEngine(rule_table) if rule_table is not None else _DEFAULT_ENGINE
    return engine.recommend(signals)


def recommend_for_content(
    content: ContentLike, rule_table: Optional[RuleTable] = None
) -> LayoutRecommendation:
    return recommend(extract_signals(content), rule_table)
