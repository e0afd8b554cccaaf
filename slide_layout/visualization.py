"""Chart vs. table vs. text decisions for numeric and structured content."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from .data_extraction import (
    ExtractedChartData,
    ExtractedTableData,
    extract_chart_data,
    extract_table_data,
)
from .layout_models import ChartHint, SlideContent, TableHint, VisualizationRecommendation
from .scoring import ScoreAccumulator, to_percent
from .signal_extraction import (
    COMPARATIVE_KEYWORDS,
    ContentLike,
    as_slide_content,
    contains_any,
)

LOGGER = logging.getLogger(__name__)

# Shared by the chart and table paths; strict "greater than" comparisons.
CHART_CONFIDENCE_THRESHOLD = 0.6
TABLE_CONFIDENCE_THRESHOLD = 0.7
TEXT_CONFIDENCE = 0.5

LONG_BULLET_CHARS = 100
BULLET_GROUPING_THRESHOLD = 7
LONG_PARAGRAPH_SENTENCES = 5

GENERIC_TEXT_HINTS = (
    "Use bullet points for better readability",
    "Consider adding visual emphasis to key points",
)

TIME_SERIES_KEYWORDS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
    "q1", "q2", "q3", "q4", "quarter", "monthly", "yearly", "annual",
    "week", "day", "hour", "timeline", "over time", "trend", "growth",
)
METRIC_KEYWORDS = (
    "kpi", "metric", "performance", "roi", "revenue", "profit", "cost",
    "efficiency", "productivity", "conversion", "rate", "percentage",
    "score", "rating", "benchmark", "target", "goal", "achievement",
)
PARAGRAPH_METRIC_PATTERN = re.compile(r"\d+%|\$\d+|\d+k|\d+m", re.IGNORECASE)
ANALYTICAL_PATTERN = re.compile(r"\d+%|\$\d+|analysis|data|metrics|performance|results", re.IGNORECASE)
PROCEDURAL_PATTERN = re.compile(r"step|process|workflow|procedure", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------

def _chart_hint(chart: ExtractedChartData) -> ChartHint:
    first_series = chart.series[0].data if chart.series else []
    return ChartHint(
        chart_type=chart.suggested_chart_type,
        series=chart.series,
        categories=chart.categories,
        show_legend=len(chart.series) > 1,
        show_data_labels=len(first_series) <= 5,
    )


def _table_hint(table: ExtractedTableData) -> TableHint:
    return TableHint(
        headers=table.headers,
        rows=table.rows,
        show_headers=True,
        alternate_row_colors=len(table.rows) > 3,
        border_style="light" if len(table.rows) > 5 else "medium",
    )


def text_enhancements(content: SlideContent) -> List[str]:
    """Formatting suggestions for content that stays as text."""

    suggestions: List[str] = []
    if content.bullets:
        if len(content.bullets) > BULLET_GROUPING_THRESHOLD:
            suggestions.append("Consider grouping bullet points into categories")
        if any(len(bullet) > LONG_BULLET_CHARS for bullet in content.bullets):
            suggestions.append("Break down long bullet points into shorter, more digestible items")
        if any(re.search(r"\d", bullet) for bullet in content.bullets):
            suggestions.append("Highlight numeric values with bold formatting or callout boxes")
    if content.paragraph:
        sentences = [part for part in re.split(r"[.!?]+", content.paragraph) if part.strip()]
        if len(sentences) > LONG_PARAGRAPH_SENTENCES:
            suggestions.append("Consider breaking long paragraphs into bullet points")
        if PARAGRAPH_METRIC_PATTERN.search(content.paragraph):
            suggestions.append("Extract key metrics into a separate metrics section")
    if content.has_both_columns():
        suggestions.append("Use visual separators or different background colors to distinguish columns")
    return suggestions


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def _recommend(content: SlideContent) -> VisualizationRecommendation:
    chart = extract_chart_data(content)
    table = extract_table_data(content)
    enhancements = text_enhancements(content)

    evidence = ScoreAccumulator()
    if chart.has_numeric_data:
        evidence.add(
            "chart",
            chart.confidence,
            f"Detected {len(chart.series)} numeric dataset(s) from {chart.source} "
            f"suitable for a {chart.suggested_chart_type} chart",
        )
    if table.has_table_data:
        evidence.add(
            "table",
            table.confidence,
            f"Detected structured data from {table.source} with "
            f"{len(table.headers)} columns and {len(table.rows)} rows",
        )

    chart_score = evidence.get("chart")
    table_score = evidence.get("table")
    chart_passes = chart_score.strongest_weight > CHART_CONFIDENCE_THRESHOLD
    table_passes = table_score.strongest_weight > TABLE_CONFIDENCE_THRESHOLD

    if chart_passes and table_passes:
        average = (chart_score.strongest_weight + table_score.strongest_weight) / 2
        return VisualizationRecommendation(
            type="mixed",
            confidence=to_percent(average),
            reasoning=(
                "Content contains multiple data types that would benefit from combined "
                "visualization approaches: "
                + "; ".join(chart_score.reasoning + table_score.reasoning)
            ),
            chart_hint=_chart_hint(chart),
            table_hint=_table_hint(table),
            text_hints=enhancements,
        )
    if chart_passes:
        return VisualizationRecommendation(
            type="chart",
            confidence=to_percent(chart_score.strongest_weight),
            reasoning=chart_score.reasoning[0],
            chart_hint=_chart_hint(chart),
            text_hints=enhancements,
        )
    if table_passes:
        return VisualizationRecommendation(
            type="table",
            confidence=to_percent(table_score.strongest_weight),
            reasoning=table_score.reasoning[0],
            table_hint=_table_hint(table),
            text_hints=enhancements,
        )

    if enhancements:
        reasoning = "Content would benefit from enhanced text formatting and structure"
    else:
        reasoning = "Standard text presentation is most appropriate for this content"
    return VisualizationRecommendation(
        type="text",
        confidence=to_percent(TEXT_CONFIDENCE),
        reasoning=reasoning,
        text_hints=enhancements or list(GENERIC_TEXT_HINTS),
    )


def detect_visualization(content: ContentLike) -> VisualizationRecommendation:
    """Recommend ``chart``, ``table``, ``text`` or ``mixed`` for one slide.

    Always returns a recommendation; content without usable data falls back
    to ``text`` with readability suggestions.
    """

    slide = as_slide_content(content)
    recommendation = _recommend(slide)
    LOGGER.debug(
        "Visualization for %r: %s (%.1f)",
        slide.title,
        recommendation.type,
        recommendation.confidence,
    )
    return recommendation


# ---------------------------------------------------------------------------
# Content analysis
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ContentAnalysis:
    has_numeric_data: bool
    has_structured_data: bool
    has_comparative_data: bool
    has_time_series_data: bool
    has_metrics: bool
    data_complexity: str
    content_type: str
    recommended_visualization: VisualizationRecommendation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_numeric_data": self.has_numeric_data,
            "has_structured_data": self.has_structured_data,
            "has_comparative_data": self.has_comparative_data,
            "has_time_series_data": self.has_time_series_data,
            "has_metrics": self.has_metrics,
            "data_complexity": self.data_complexity,
            "content_type": self.content_type,
            "recommended_visualization": self.recommended_visualization.to_dict(),
        }


def _data_complexity(
    content: SlideContent, chart: ExtractedChartData, table: ExtractedTableData
) -> str:
    score = 0
    volume = len(content.bullets) + len(content.paragraph) / 100
    volume += sum(len(column.bullets) for column in content.columns())
    if volume > 10:
        score += 2
    elif volume > 5:
        score += 1
    if chart.has_numeric_data:
        score += 2
    if table.has_table_data:
        score += 2
    if content.has_chart():
        score += 3
    if content.comparison_table is not None and not content.comparison_table.is_empty:
        score += 2
    if content.timeline or content.process_steps:
        score += 2
    if score >= 6:
        return "complex"
    if score >= 3:
        return "moderate"
    return "simple"


def _content_type(content: SlideContent, text: str) -> str:
    if ANALYTICAL_PATTERN.search(text):
        return "analytical"
    has_comparison_table = (
        content.comparison_table is not None and not content.comparison_table.is_empty
    )
    if "vs" in text.lower() or "comparison" in text.lower() or has_comparison_table or content.has_both_columns():
        return "comparative"
    if content.process_steps or content.timeline or PROCEDURAL_PATTERN.search(text):
        return "procedural"
    if len(content.bullets) > 5 and content.paragraph and (content.has_chart() or has_comparison_table):
        return "mixed"
    return "narrative"


def analyze_content(content: ContentLike) -> ContentAnalysis:
    """Summarize the data characteristics of a slide."""

    slide = as_slide_content(content)
    text = slide.body_text()
    chart = extract_chart_data(slide)
    table = extract_table_data(slide)
    return ContentAnalysis(
        has_numeric_data=chart.has_numeric_data,
        has_structured_data=table.has_table_data,
        has_comparative_data=(
            contains_any(text, COMPARATIVE_KEYWORDS)
            or slide.has_both_columns()
            or (slide.comparison_table is not None and not slide.comparison_table.is_empty)
        ),
        has_time_series_data=(
            contains_any(text, TIME_SERIES_KEYWORDS) or bool(slide.timeline or slide.process_steps)
        ),
        has_metrics=contains_any(text, METRIC_KEYWORDS) or bool(slide.column_metrics()),
        data_complexity=_data_complexity(slide, chart, table),
        content_type=_content_type(slide, text),
        recommended_visualization=_recommend(slide),
    )


_COMPLEXITY_PRIORITY = {"complex": 20, "moderate": 10, "simple": 5}


def visualization_priority(analysis: ContentAnalysis) -> int:
    """How strongly a slide calls for visualization, from 0 to 100."""

    priority = 0
    if analysis.has_numeric_data:
        priority += 30
    if analysis.has_structured_data:
        priority += 25
    if analysis.has_comparative_data:
        priority += 20
    if analysis.has_time_series_data:
        priority += 15
    if analysis.has_metrics:
        priority += 10
    priority += _COMPLEXITY_PRIORITY.get(analysis.data_complexity, 0)
    return min(priority, 100)


def content_suggestions(analysis: ContentAnalysis) -> List[str]:
    suggestions: List[str] = []
    visualization = analysis.recommended_visualization
    if visualization.confidence > 80:
        suggestions.append(f"Strong recommendation: Use {visualization.type} visualization")
    if analysis.data_complexity == "complex":
        suggestions.append("Consider splitting complex content across multiple slides")
    if analysis.has_numeric_data and visualization.type == "text":
        suggestions.append("Numeric data detected - consider adding charts for better impact")
    if analysis.has_structured_data and visualization.type == "text":
        suggestions.append("Structured data detected - consider using tables for clarity")
    return suggestions
