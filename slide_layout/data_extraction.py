"""Detect chartable numbers and tabular structure inside slide content.

Confidences here use the 0-1 scale. Percent-style constants are divided by
100 so that threshold comparisons stay exact.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .layout_models import ChartSeries, ColumnContent, Metric, SlideContent, coerce_number

# Longer units first; a unit must not run on into a word ("12 members").
NUMBER_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:(%|million|billion|thousand|k|m)(?![a-z]))?", re.IGNORECASE
)
LABEL_PATTERN = re.compile(r"^([^:]+):\s*(.+)$")
PIPE_PATTERN = re.compile(r"^([^|]+)\|([^|]+)(?:\|(.+))?$")
TREND_PATTERN = re.compile(
    r"(increased|decreased|grew|fell|rose|dropped)\s+from\s+(\d+(?:\.\d+)?)\s*(?:to|by)\s+(\d+(?:\.\d+)?)",
    re.IGNORECASE,
)

_UNIT_MULTIPLIERS = (
    ("billion", 1_000_000_000),
    ("million", 1_000_000),
    ("thousand", 1_000),
    ("k", 1_000),
    ("m", 1_000_000),
)


@dataclass(slots=True)
class ExtractedChartData:
    has_numeric_data: bool = False
    series: List[ChartSeries] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    suggested_chart_type: str = "bar"
    confidence: float = 0.0
    source: str = ""


@dataclass(slots=True)
class ExtractedTableData:
    has_table_data: bool = False
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    confidence: float = 0.0
    source: str = ""


# ---------------------------------------------------------------------------
# Numeric data
# ---------------------------------------------------------------------------

def _scaled_value(number: str, unit: Optional[str]) -> float:
    value = coerce_number(number)
    unit = (unit or "").lower()
    for token, multiplier in _UNIT_MULTIPLIERS:
        if unit == token:
            return value * multiplier
    return value


def _bullet_data_points(bullets: List[str]) -> List[Tuple[str, float]]:
    points: List[Tuple[str, float]] = []
    for bullet in bullets:
        label_match = LABEL_PATTERN.match(bullet)
        if label_match:
            number_match = NUMBER_PATTERN.search(label_match.group(2))
            if number_match:
                points.append(
                    (
                        label_match.group(1).strip(),
                        _scaled_value(number_match.group(1), number_match.group(2)),
                    )
                )
            continue
        number_match = NUMBER_PATTERN.search(bullet)
        if number_match:
            label = NUMBER_PATTERN.sub("", bullet).strip() or f"Item {len(points) + 1}"
            points.append((label, _scaled_value(number_match.group(1), number_match.group(2))))
    return points


def _suggest_chart_type(points: List[Tuple[str, float]]) -> str:
    if len(points) <= 5 and all(value >= 0 for _, value in points):
        return "pie"
    if any("time" in label.lower() or "month" in label.lower() for label, _ in points):
        return "line"
    return "bar"


def extract_chart_data(content: SlideContent) -> ExtractedChartData:
    """Find numeric series in the chart field, bullets, paragraph or metrics."""

    if content.has_chart():
        chart = content.chart
        return ExtractedChartData(
            has_numeric_data=True,
            series=[ChartSeries(name=s.name, data=list(s.data)) for s in chart.series],
            categories=list(chart.categories),
            suggested_chart_type=chart.chart_type or "bar",
            confidence=1.0,
            source="chart",
        )

    points = _bullet_data_points(content.bullets)
    if len(points) >= 2:
        return ExtractedChartData(
            has_numeric_data=True,
            series=[ChartSeries(name="Data", data=[value for _, value in points])],
            categories=[label for label, _ in points],
            suggested_chart_type=_suggest_chart_type(points),
            confidence=min(len(points) * 20, 90) / 100,
            source="bullets",
        )

    if content.paragraph:
        trend = TREND_PATTERN.search(content.paragraph)
        if trend:
            return ExtractedChartData(
                has_numeric_data=True,
                series=[
                    ChartSeries(
                        name="Trend",
                        data=[coerce_number(trend.group(2)), coerce_number(trend.group(3))],
                    )
                ],
                categories=["Start", "End"],
                suggested_chart_type="line",
                confidence=0.7,
                source="paragraph",
            )

    metrics = content.column_metrics()
    if metrics:
        return ExtractedChartData(
            has_numeric_data=True,
            series=[ChartSeries(name="Metrics", data=[coerce_number(m.value) for m in metrics])],
            categories=[metric.label for metric in metrics],
            suggested_chart_type="bar",
            confidence=0.8,
            source="metrics",
        )

    return ExtractedChartData()


# ---------------------------------------------------------------------------
# Tabular data
# ---------------------------------------------------------------------------

def _table_from_bullets(bullets: List[str]) -> ExtractedTableData:
    colon_matches = [m for m in (LABEL_PATTERN.match(b) for b in bullets) if m]
    pipe_matches = [m for m in (PIPE_PATTERN.match(b) for b in bullets) if m]

    if len(colon_matches) >= 3:
        return ExtractedTableData(
            has_table_data=True,
            headers=["Category", "Value"],
            rows=[[m.group(1).strip(), m.group(2).strip()] for m in colon_matches],
            confidence=min(len(colon_matches) * 20, 90) / 100,
            source="bullets",
        )

    if len(pipe_matches) >= 2:
        three_columns = pipe_matches[0].group(3) is not None
        headers = ["Item", "Value", "Description"] if three_columns else ["Item", "Value"]
        rows = []
        for match in pipe_matches:
            row = [match.group(1).strip(), match.group(2).strip()]
            if three_columns:
                row.append((match.group(3) or "").strip())
            rows.append(row)
        return ExtractedTableData(
            has_table_data=True,
            headers=headers,
            rows=rows,
            confidence=min(len(pipe_matches) * 25, 95) / 100,
            source="bullets",
        )

    return ExtractedTableData()


def _table_from_columns(left: ColumnContent, right: ColumnContent) -> ExtractedTableData:
    if not left.bullets or not right.bullets:
        return ExtractedTableData()
    length = max(len(left.bullets), len(right.bullets))
    rows = [
        [
            left.bullets[idx] if idx < len(left.bullets) else "",
            right.bullets[idx] if idx < len(right.bullets) else "",
        ]
        for idx in range(length)
    ]
    return ExtractedTableData(
        has_table_data=True,
        headers=[left.heading or "Left", right.heading or "Right"],
        rows=rows,
        confidence=0.85,
        source="columns",
    )


def _table_from_metrics(metrics: List[Metric]) -> ExtractedTableData:
    if len(metrics) < 2:
        return ExtractedTableData()
    return ExtractedTableData(
        has_table_data=True,
        headers=["Metric", "Value", "Unit"],
        rows=[[metric.label, metric.value, metric.unit] for metric in metrics],
        confidence=0.9,
        source="metrics",
    )


def extract_table_data(content: SlideContent) -> ExtractedTableData:
    """Find a table in explicit fields, bullets, two columns or metrics.

    Explicit table fields win outright; otherwise the strongest structural
    match is returned.
    """

    for table, source in ((content.comparison_table, "comparison_table"), (content.table, "table")):
        if table is not None and not table.is_empty:
            return ExtractedTableData(
                has_table_data=True,
                headers=list(table.headers),
                rows=[list(row) for row in table.rows],
                confidence=1.0,
                source=source,
            )

    candidates = []
    if len(content.bullets) >= 3:
        candidates.append(_table_from_bullets(content.bullets))
    if content.left is not None and content.right is not None:
        candidates.append(_table_from_columns(content.left, content.right))
    candidates.append(_table_from_metrics(content.column_metrics()))

    found = [candidate for candidate in candidates if candidate.has_table_data]
    if not found:
        return ExtractedTableData()
    return max(found, key=lambda candidate: candidate.confidence)
