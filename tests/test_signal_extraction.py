import pytest

from slide_layout.layout_models import PrimaryIntent, SlideContent, TextDensity
from slide_layout.signal_extraction import (
    classify_text_density,
    extract_signals,
    readability_score,
)

from tests.content_fixtures import CHART_SLIDE, COMPARISON_TABLE_SLIDE, bullet_slide


@pytest.mark.parametrize(
    "length, expected",
    [
        (0, TextDensity.LOW),
        (199, TextDensity.LOW),
        (200, TextDensity.MEDIUM),
        (499, TextDensity.MEDIUM),
        (500, TextDensity.HIGH),
    ],
)
def test_text_density_boundaries(length, expected):
    assert classify_text_density(length) is expected


def test_empty_content_has_no_signals():
    for content in ({}, None, SlideContent(), "not a mapping"):
        signals = extract_signals(content)
        assert signals.text_length == 0
        assert signals.bullet_count == 0
        assert signals.text_density is TextDensity.LOW
        assert signals.primary_intent is PrimaryIntent.INFORM
        assert signals.readability_score == 1.0
        assert signals.complexity_score == 0.0
        assert not any(
            [
                signals.has_numeric_data,
                signals.has_comparative_data,
                signals.has_sequential_data,
                signals.has_quotes,
                signals.has_images,
                signals.has_charts,
                signals.has_tables,
                signals.has_timeline,
            ]
        )


def test_text_length_joins_title_paragraph_and_bullets():
    signals = extract_signals({"title": "Ab", "paragraph": "cd", "bullets": ["e", "f"]})

    assert signals.text_length == len("Ab cd e f")
    assert signals.bullet_count == 2


def test_chart_slide_signals():
    signals = extract_signals(CHART_SLIDE)

    assert signals.has_charts
    assert signals.has_numeric_data
    assert not signals.has_tables
    assert signals.complexity_score == pytest.approx(0.3 * len("Quarterly sales") / 500 + 0.2)


def test_comparison_table_marks_comparative_and_table():
    signals = extract_signals(COMPARISON_TABLE_SLIDE)

    assert signals.has_tables
    assert signals.has_comparative_data


def test_chart_without_series_is_not_a_chart():
    signals = extract_signals({"chart": {"categories": ["Q1"], "series": []}})

    assert not signals.has_charts


def test_keyword_signals():
    assert extract_signals({"paragraph": "Cloud versus on-premise"}).has_comparative_data
    assert extract_signals({"bullets": ["Plan", "Build", "Finally ship"]}).has_sequential_data
    assert extract_signals({"quote": "Great tool"}).has_quotes
    assert extract_signals({"paragraph": "Margin grew 15% this year"}).has_numeric_data
    assert extract_signals({"paragraph": "Costs fell to $1,200"}).has_numeric_data


def test_two_columns_are_comparative():
    signals = extract_signals({"left": {"heading": "Old"}, "right": {"heading": "New"}})

    assert signals.has_comparative_data


def test_timeline_and_process_steps():
    timeline = extract_signals({"timeline": [{"date": "2024", "label": "Launch"}]})
    process = extract_signals({"processSteps": ["Plan", "Build"]})

    assert timeline.has_timeline and timeline.has_sequential_data
    assert not process.has_timeline
    assert process.has_sequential_data


def test_images_in_columns_count():
    signals = extract_signals({"right": {"image_url": "photo.png"}})

    assert signals.has_images


@pytest.mark.parametrize(
    "text, intent",
    [
        ("Why it matters", PrimaryIntent.EXPLAIN),
        ("Choose the right plan", PrimaryIntent.PERSUADE),
        ("Demo of the editor", PrimaryIntent.SHOWCASE),
        ("Quarterly update", PrimaryIntent.INFORM),
        ("Why you should choose us", PrimaryIntent.EXPLAIN),
    ],
)
def test_primary_intent_order(text, intent):
    assert extract_signals({"title": text}).primary_intent is intent


def test_readability_score_bands():
    ideal = " ".join(["word"] * 16) + "."
    acceptable = " ".join(["word"] * 12) + "."
    terse = "One two. Three four."

    assert readability_score("") == 1.0
    assert readability_score(ideal) == 1.0
    assert readability_score(acceptable) == 0.8
    assert readability_score(terse) == 0.5


def test_complexity_is_bounded():
    content = {
        "paragraph": "x" * 2000,
        "bullets": ["b"] * 20,
        "chart": {"series": [{"name": "s", "data": [1]}]},
        "table": {"headers": ["h"], "rows": [["r"]]},
        "timeline": [1],
        "image_url": "i.png",
    }

    assert extract_signals(content).complexity_score == pytest.approx(1.0)


def test_malformed_fields_do_not_raise():
    signals = extract_signals(
        {
            "title": 42,
            "bullets": "single bullet",
            "chart": "not a chart",
            "table": ["not", "a", "table"],
            "left": 3,
        }
    )

    assert signals.bullet_count == 1
    assert not signals.has_charts
    assert not signals.has_tables


def test_bullet_count_matches_input():
    assert extract_signals(bullet_slide(8)).bullet_count == 8
