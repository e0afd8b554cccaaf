"""Weighted evidence aggregation shared by the layout and visualization engines."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .layout_models import LayoutScore


class ScoreAccumulator:
    """Collect weighted evidence per candidate in first-seen order.

    Each call to :meth:`add` adds ``weight`` to the candidate's raw score,
    records the rationale and remembers the strongest single contribution.
    A fresh accumulator is created for every evaluation.
    """

    def __init__(self) -> None:
        self._scores: Dict[str, LayoutScore] = {}

    def add(self, candidate: str, weight: float, rationale: str) -> None:
        score = self._scores.get(candidate)
        if score is None:
            score = LayoutScore(layout_id=candidate)
            self._scores[candidate] = score
        score.raw_score += weight
        score.reasoning.append(rationale)
        score.strongest_weight = max(score.strongest_weight, weight)

    def add_many(self, candidates: Iterable[str], weight: float, rationale: str) -> None:
        for candidate in candidates:
            self.add(candidate, weight, rationale)

    def __contains__(self, candidate: str) -> bool:
        return candidate in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def get(self, candidate: str) -> LayoutScore:
        return self._scores.get(candidate) or LayoutScore(layout_id=candidate)

    def normalized(self) -> Dict[str, LayoutScore]:
        """Return scores with ``confidence = raw_score / max(raw_score)``."""

        if not self._scores:
            return {}
        max_raw = max(score.raw_score for score in self._scores.values())
        for score in self._scores.values():
            score.confidence = clamp_unit(score.raw_score / max_raw) if max_raw > 0 else 0.0
        return dict(self._scores)


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def to_percent(value: float) -> float:
    """Convert a 0-1 confidence to the 0-100 display scale."""

    return round(clamp_unit(value) * 100, 1)


def rank_scores(scores: Dict[str, LayoutScore]) -> List[LayoutScore]:
    """Order candidates by confidence, then by their strongest single rule.

    Candidates that are still tied keep the order in which they were first
    scored, which follows the rule table order.
    """

    indexed = list(enumerate(scores.values()))
    indexed.sort(key=lambda item: (-item[1].confidence, -item[1].strongest_weight, item[0]))
    return [score for _, score in indexed]
