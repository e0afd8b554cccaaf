"""Turn raw slide content into normalized :class:`ContentSignals`."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping, Union

from .layout_models import ContentSignals, PrimaryIntent, SlideContent, TextDensity

LOGGER = logging.getLogger(__name__)

LOW_DENSITY_LIMIT = 200
MEDIUM_DENSITY_LIMIT = 500

COMPARATIVE_KEYWORDS = (
    "vs",
    "versus",
    "compared",
    "comparison",
    "before and after",
    "pros",
    "cons",
    "advantages",
    "disadvantages",
    "drawbacks",
)
SEQUENTIAL_KEYWORDS = (
    "step",
    "phase",
    "stage",
    "process",
    "workflow",
    "timeline",
    "first",
    "second",
    "third",
    "next",
    "then",
    "finally",
)
QUOTE_KEYWORDS = (
    '"',
    "“",
    "”",
    "testimonial",
    "quote",
    "said",
    "according",
    "feedback",
)
NUMERIC_KEYWORDS = (
    "increase",
    "decrease",
    "growth",
    "revenue",
    "metrics",
    "statistics",
)
NUMERIC_PATTERN = re.compile(r"\d+(?:\.\d+)?\s*%|\$\s?[\d,]+|\d+(?:\.\d+)?x\b")

# Checked in order; the first intent with a matching keyword wins.
INTENT_KEYWORDS = (
    (PrimaryIntent.EXPLAIN, ("learn", "understand", "explain", "how", "why", "process", "step")),
    (PrimaryIntent.PERSUADE, ("buy", "choose", "best", "recommend", "should", "must", "benefit")),
    (PrimaryIntent.SHOWCASE, ("showcase", "feature", "demo", "present", "introduce")),
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")

ContentLike = Union[SlideContent, Mapping[str, Any], None]


def as_slide_content(content: ContentLike) -> SlideContent:
    """Accept a :class:`SlideContent`, a raw mapping or ``None``."""

    if isinstance(content, SlideContent):
        return content
    return SlideContent.from_dict(content)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring check of ``keywords`` against ``text``."""

    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def classify_text_density(length: int) -> TextDensity:
    if length < LOW_DENSITY_LIMIT:
        return TextDensity.LOW
    if length < MEDIUM_DENSITY_LIMIT:
        return TextDensity.MEDIUM
    return TextDensity.HIGH


def complexity_score(content: SlideContent, text_length: int) -> float:
    score = 0.3 * min(text_length / 500, 1.0)
    score += 0.2 * min(len(content.bullets) / 10, 1.0)
    if content.has_chart():
        score += 0.2
    if content.has_table():
        score += 0.15
    if content.timeline:
        score += 0.1
    if content.has_image():
        score += 0.05
    return min(score, 1.0)


def readability_score(text: str) -> float:
    """Score sentence length; 15-20 words per sentence is the sweet spot."""

    sentences = [part for part in SENTENCE_SPLIT.split(text) if part.strip()]
    if not sentences:
        return 1.0
    words = len(text.split())
    average = words / len(sentences)
    if 15 <= average <= 20:
        return 1.0
    if 10 <= average <= 30:
        return 0.8
    return 0.5


def determine_primary_intent(text: str) -> PrimaryIntent:
    for intent, keywords in INTENT_KEYWORDS:
        if contains_any(text, keywords):
            return intent
    return PrimaryIntent.INFORM


def _keyword_text(content: SlideContent, body_text: str) -> str:
    parts = [body_text, content.quote]
    for column in content.columns():
        parts.extend(column.text_parts())
    return " ".join(part for part in parts if part)


def has_numeric_data(content: SlideContent, text: str) -> bool:
    if content.has_chart() or content.column_metrics():
        return True
    return bool(NUMERIC_PATTERN.search(text)) or contains_any(text, NUMERIC_KEYWORDS)


def has_comparative_data(content: SlideContent, text: str) -> bool:
    if content.has_both_columns():
        return True
    if content.comparison_table is not None and not content.comparison_table.is_empty:
        return True
    return contains_any(text, COMPARATIVE_KEYWORDS)


def has_sequential_data(content: SlideContent, text: str) -> bool:
    if content.timeline or content.process_steps:
        return True
    return contains_any(text, SEQUENTIAL_KEYWORDS)


def has_quotes(content: SlideContent, text: str) -> bool:
    if content.quote.strip():
        return True
    return contains_any(text, QUOTE_KEYWORDS)


def extract_signals(content: ContentLike) -> ContentSignals:
    """Compute :class:`ContentSignals` for one slide.

    Missing fields are treated as absent signals; the function never raises
    for incomplete or malformed content.
    """

    slide = as_slide_content(content)
    body_text = slide.body_text()
    text_length = len(body_text)
    keyword_text = _keyword_text(slide, body_text)

    signals = ContentSignals(
        text_density=classify_text_density(text_length),
        bullet_count=len(slide.bullets),
        has_numeric_data=has_numeric_data(slide, keyword_text),
        has_comparative_data=has_comparative_data(slide, keyword_text),
        has_sequential_data=has_sequential_data(slide, keyword_text),
        has_quotes=has_quotes(slide, keyword_text),
        has_images=slide.has_image(),
        has_charts=slide.has_chart(),
        has_tables=slide.has_table(),
        has_timeline=bool(slide.timeline),
        complexity_score=complexity_score(slide, text_length),
        readability_score=readability_score(body_text),
        primary_intent=determine_primary_intent(keyword_text),
        text_length=text_length,
    )
    LOGGER.debug("Extracted signals for %r: %s", slide.title, signals)
    return signals
