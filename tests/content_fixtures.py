"""Sample slide payloads shared across the test modules."""

from __future__ import annotations

from typing import Any, Dict, List

ONE_LETTER_BULLETS = list("abcdefghi")


def bullet_slide(count: int) -> Dict[str, Any]:
    return {"bullets": ONE_LETTER_BULLETS[:count]}


CHART_SLIDE: Dict[str, Any] = {
    "title": "Quarterly sales",
    "chart": {
        "type": "bar",
        "categories": ["Q1", "Q2", "Q3"],
        "series": [{"name": "2024", "data": [12, 18, 25]}],
    },
}

COMPARISON_TABLE_SLIDE: Dict[str, Any] = {
    "title": "Plans",
    "comparisonTable": {
        "headers": ["Plan", "Price", "Seats"],
        "rows": [["Basic", "10", "1"], ["Team", "40", "5"]],
    },
}

MIXED_SLIDE: Dict[str, Any] = {
    "title": "Quarterly sales",
    "chart": CHART_SLIDE["chart"],
    "table": {
        "headers": ["Region", "Sales"],
        "rows": [["North", "12"], ["South", "18"], ["East", "25"], ["West", "9"]],
    },
}


def labelled_bullets(count: int) -> List[str]:
    labels = ["Alpha", "Beta", "Gamma", "Delta", "Omega", "Sigma"]
    return [f"{label}: {10 * (idx + 1)}" for idx, label in enumerate(labels[:count])]
