"""Data models describing slide content and layout decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple


class TextDensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PrimaryIntent(str, Enum):
    INFORM = "inform"
    PERSUADE = "persuade"
    EXPLAIN = "explain"
    SHOWCASE = "showcase"


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def coerce_number(value: Any) -> float:
    """Return ``value`` as a float, treating anything unparsable as ``0.0``."""

    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").rstrip("%").strip()
        try:
            return float(cleaned)
        except ValueError:
            return 0.0
    return 0.0


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [_as_text(item) for item in value if item is not None]
    return []


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


# ---------------------------------------------------------------------------
# Input content
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ChartSeries:
    """A named numeric series of a chart."""

    name: str
    data: List[float] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChartSeries":
        if not isinstance(data, Mapping):
            return cls(name="")
        values = data.get("data", data.get("values"))
        return cls(
            name=_as_text(data.get("name")),
            data=[coerce_number(item) for item in _as_list(values)],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "data": list(self.data)}


@dataclass(slots=True)
class ChartData:
    """Chart payload attached to a slide by the content generator."""

    categories: List[str] = field(default_factory=list)
    series: List[ChartSeries] = field(default_factory=list)
    chart_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ChartData"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            categories=_as_text_list(data.get("categories")),
            series=[ChartSeries.from_dict(item) for item in _as_list(data.get("series"))],
            chart_type=data.get("type") or data.get("chart_type"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "categories": list(self.categories),
            "series": [series.to_dict() for series in self.series],
        }
        if self.chart_type:
            payload["type"] = self.chart_type
        return payload

    @property
    def is_empty(self) -> bool:
        return not self.series


@dataclass(slots=True)
class TableData:
    """Tabular payload with a header row."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["TableData"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            headers=_as_text_list(data.get("headers")),
            rows=[_as_text_list(row) for row in _as_list(data.get("rows"))],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"headers": list(self.headers), "rows": [list(row) for row in self.rows]}

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows


@dataclass(slots=True)
class Metric:
    label: str
    value: str
    unit: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Metric":
        if not isinstance(data, Mapping):
            return cls(label="", value="")
        return cls(
            label=_as_text(data.get("label")),
            value=_as_text(data.get("value")),
            unit=_as_text(data.get("unit")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value, "unit": self.unit}


@dataclass(slots=True)
class ColumnContent:
    """One side of a two-column slide."""

    heading: str = ""
    bullets: List[str] = field(default_factory=list)
    metrics: List[Metric] = field(default_factory=list)
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ColumnContent"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            heading=_as_text(data.get("heading")),
            bullets=_as_text_list(data.get("bullets")),
            metrics=[Metric.from_dict(item) for item in _as_list(data.get("metrics"))],
            image_url=_as_text(_pick(data, "image_url", "imageUrl")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heading": self.heading,
            "bullets": list(self.bullets),
            "metrics": [metric.to_dict() for metric in self.metrics],
            "image_url": self.image_url,
        }

    def text_parts(self) -> List[str]:
        return [self.heading, *self.bullets]


@dataclass(slots=True)
class SlideContent:
    """Draft content of a single slide as produced by the content generator.

    Every field is optional. ``from_dict`` accepts both snake_case keys and
    the camelCase keys emitted by the generator (``comparisonTable``,
    ``processSteps``, ``imageUrl``) and never raises on malformed values.
    """

    title: str = ""
    paragraph: str = ""
    bullets: List[str] = field(default_factory=list)
    chart: Optional[ChartData] = None
    table: Optional[TableData] = None
    comparison_table: Optional[TableData] = None
    timeline: List[Any] = field(default_factory=list)
    process_steps: List[Any] = field(default_factory=list)
    left: Optional[ColumnContent] = None
    right: Optional[ColumnContent] = None
    quote: str = ""
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SlideContent":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            title=_as_text(data.get("title")),
            paragraph=_as_text(data.get("paragraph")),
            bullets=_as_text_list(data.get("bullets")),
            chart=ChartData.from_dict(data.get("chart")),
            table=TableData.from_dict(data.get("table")),
            comparison_table=TableData.from_dict(
                _pick(data, "comparison_table", "comparisonTable")
            ),
            timeline=_as_list(data.get("timeline")),
            process_steps=_as_list(_pick(data, "process_steps", "processSteps")),
            left=ColumnContent.from_dict(data.get("left")),
            right=ColumnContent.from_dict(data.get("right")),
            quote=_as_text(data.get("quote")),
            image_url=_as_text(_pick(data, "image_url", "imageUrl")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "paragraph": self.paragraph,
            "bullets": list(self.bullets),
            "timeline": list(self.timeline),
            "process_steps": list(self.process_steps),
            "quote": self.quote,
            "image_url": self.image_url,
        }
        if self.chart is not None:
            payload["chart"] = self.chart.to_dict()
        if self.table is not None:
            payload["table"] = self.table.to_dict()
        if self.comparison_table is not None:
            payload["comparison_table"] = self.comparison_table.to_dict()
        if self.left is not None:
            payload["left"] = self.left.to_dict()
        if self.right is not None:
            payload["right"] = self.right.to_dict()
        return payload

    # ------------------------------------------------------------------
    # convenience accessors
    # ------------------------------------------------------------------
    def body_text(self) -> str:
        """Title, paragraph and bullets joined with single spaces."""

        parts = [self.title, self.paragraph, *self.bullets]
        return " ".join(part for part in parts if part)

    def columns(self) -> List[ColumnContent]:
        return [column for column in (self.left, self.right) if column is not None]

    def has_both_columns(self) -> bool:
        return self.left is not None and self.right is not None

    def column_metrics(self) -> List[Metric]:
        return [metric for column in self.columns() for metric in column.metrics]

    def has_chart(self) -> bool:
        return self.chart is not None and not self.chart.is_empty

    def has_table(self) -> bool:
        tables = (self.table, self.comparison_table)
        return any(table is not None and not table.is_empty for table in tables)

    def has_image(self) -> bool:
        if self.image_url:
            return True
        return any(column.image_url for column in self.columns())


# ---------------------------------------------------------------------------
# Decision engine models
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ContentSignals:
    """Normalized features extracted from one slide's content."""

    text_density: TextDensity = TextDensity.LOW
    bullet_count: int = 0
    has_numeric_data: bool = False
    has_comparative_data: bool = False
    has_sequential_data: bool = False
    has_quotes: bool = False
    has_images: bool = False
    has_charts: bool = False
    has_tables: bool = False
    has_timeline: bool = False
    complexity_score: float = 0.0
    readability_score: float = 1.0
    primary_intent: PrimaryIntent = PrimaryIntent.INFORM
    text_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text_density": self.text_density.value,
            "bullet_count": self.bullet_count,
            "has_numeric_data": self.has_numeric_data,
            "has_comparative_data": self.has_comparative_data,
            "has_sequential_data": self.has_sequential_data,
            "has_quotes": self.has_quotes,
            "has_images": self.has_images,
            "has_charts": self.has_charts,
            "has_tables": self.has_tables,
            "has_timeline": self.has_timeline,
            "complexity_score": self.complexity_score,
            "readability_score": self.readability_score,
            "primary_intent": self.primary_intent.value,
            "text_length": self.text_length,
        }


@dataclass(frozen=True, slots=True)
class LayoutRule:
    """A declarative ``condition -> candidate layouts`` entry of the rule table."""

    rule_id: str
    name: str
    condition: Callable[[ContentSignals], bool]
    candidate_layouts: Tuple[str, ...]
    weight: float
    rationale: str

    def matches(self, signals: ContentSignals) -> bool:
        return bool(self.condition(signals))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rule_id,
            "name": self.name,
            "candidate_layouts": list(self.candidate_layouts),
            "weight": self.weight,
            "rationale": self.rationale,
        }


@dataclass(slots=True)
class LayoutScore:
    layout_id: str
    raw_score: float = 0.0
    confidence: float = 0.0
    reasoning: List[str] = field(default_factory=list)
    strongest_weight: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout_id": self.layout_id,
            "raw_score": self.raw_score,
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
        }


@dataclass(slots=True)
class LayoutAlternative:
    layout_id: str
    confidence: float
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout_id": self.layout_id,
            "confidence": self.confidence,
            "reason": self.reason,
        }


@dataclass(slots=True)
class LayoutOptimization:
    """Refinement advice derived from content signals."""

    type: str
    description: str
    impact: str
    implementation: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "impact": self.impact,
            "implementation": dict(self.implementation),
        }


@dataclass(slots=True)
class LayoutRecommendation:
    """Final decision for one slide: primary layout, alternatives and hints."""

    primary: LayoutScore
    alternatives: List[LayoutAlternative] = field(default_factory=list)
    optimizations: List[LayoutOptimization] = field(default_factory=list)
    image_region: Optional[Any] = None

    @property
    def layout_id(self) -> str:
        return self.primary.layout_id

    def optimization_types(self) -> List[str]:
        return [item.type for item in self.optimizations]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "primary": self.primary.to_dict(),
            "alternatives": [item.to_dict() for item in self.alternatives],
            "optimizations": [item.to_dict() for item in self.optimizations],
        }
        if self.image_region is not None:
            payload["image_region"] = self.image_region.to_dict()
        return payload


@dataclass(slots=True)
class ChartHint:
    chart_type: str
    series: List[ChartSeries] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    show_legend: bool = False
    show_data_labels: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chart_type": self.chart_type,
            "categories": list(self.categories),
            "series": [series.to_dict() for series in self.series],
            "show_legend": self.show_legend,
            "show_data_labels": self.show_data_labels,
        }


@dataclass(slots=True)
class TableHint:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    show_headers: bool = True
    alternate_row_colors: bool = False
    border_style: str = "medium"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
            "show_headers": self.show_headers,
            "alternate_row_colors": self.alternate_row_colors,
            "border_style": self.border_style,
        }


@dataclass(slots=True)
class VisualizationRecommendation:
    """Chart / table / text decision. ``confidence`` uses a 0-100 scale."""

    type: str
    confidence: float
    reasoning: str
    chart_hint: Optional[ChartHint] = None
    table_hint: Optional[TableHint] = None
    text_hints: List[str] = field(default_factory=list)

    @property
    def normalized_confidence(self) -> float:
        return self.confidence / 100.0

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }
        if self.chart_hint is not None:
            payload["chart_hint"] = self.chart_hint.to_dict()
        if self.table_hint is not None:
            payload["table_hint"] = self.table_hint.to_dict()
        if self.text_hints:
            payload["text_hints"] = list(self.text_hints)
        return payload
