"""Content-to-layout decision engine for generated slides."""

from .errors import RuleConfigurationError
from .layout_models import (
    ChartData,
    ChartHint,
    ChartSeries,
    ColumnContent,
    ContentSignals,
    LayoutAlternative,
    LayoutOptimization,
    LayoutRecommendation,
    LayoutRule,
    LayoutScore,
    Metric,
    PrimaryIntent,
    SlideContent,
    TableData,
    TableHint,
    TextDensity,
    VisualizationRecommendation,
)
from .signal_extraction import extract_signals
from .layout_rules import DEFAULT_RULE_TABLE, RuleTable, RuleTuning
from .layout_engine import (
    LayoutEngine,
    LayoutOptimizationResult,
    build_optimizations,
    evaluate,
    optimize_layout,
    recommend,
    recommend_for_content,
)
from .visualization import (
    CHART_CONFIDENCE_THRESHOLD,
    TABLE_CONFIDENCE_THRESHOLD,
    ContentAnalysis,
    analyze_content,
    content_suggestions,
    detect_visualization,
    visualization_priority,
)
from .image_composition import (
    AspectRatio,
    CompositionResult,
    CompositionStrategy,
    ImageComposer,
    ImageRegionHint,
    image_region_for_layout,
)
from .config import EngineSettings, build_rule_table, load_settings

__all__ = [
    "RuleConfigurationError",
    "ChartData",
    "ChartHint",
    "ChartSeries",
    "ColumnContent",
    "ContentSignals",
    "LayoutAlternative",
    "LayoutOptimization",
    "LayoutRecommendation",
    "LayoutRule",
    "LayoutScore",
    "Metric",
    "PrimaryIntent",
    "SlideContent",
    "TableData",
    "TableHint",
    "TextDensity",
    "VisualizationRecommendation",
    "extract_signals",
    "DEFAULT_RULE_TABLE",
    "RuleTable",
    "RuleTuning",
    "LayoutEngine",
    "LayoutOptimizationResult",
    "build_optimizations",
    "evaluate",
    "optimize_layout",
    "recommend",
    "recommend_for_content",
    "CHART_CONFIDENCE_THRESHOLD",
    "TABLE_CONFIDENCE_THRESHOLD",
    "ContentAnalysis",
    "analyze_content",
    "content_suggestions",
    "detect_visualization",
    "visualization_priority",
    "AspectRatio",
    "CompositionResult",
    "CompositionStrategy",
    "ImageComposer",
    "ImageRegionHint",
    "image_region_for_layout",
    "EngineSettings",
    "build_rule_table",
    "load_settings",
]
