"""Weighted accessibility score."""

import math
from typing import Iterable

from next_a11y.domain.entities import Violation

RULE_WEIGHTS: dict[str, float] = {
    "img-alt": 2,
    "button-label": 2,
    "link-label": 2,
    "input-label": 3,
    "html-lang": 5,
    "next-metadata-title": 3,
    "next-skip-nav": 3,
    "next-link-no-nested-a": 2,
    "no-positive-tabindex": 1,
    "button-type": 1,
    "next-image-sizes": 1,
    "heading-order": 1,
    "no-div-interactive": 1,
    "emoji-alt": 0.5,
    "link-noopener": 0.5,
}

DEFAULT_WEIGHT = 1.0


class ScoreCalculator:
    """Score is 100 minus the summed rule weights, clamped to [0, 100]."""

    @staticmethod
    def weight(rule_id: str) -> float:
        return RULE_WEIGHTS.get(rule_id, DEFAULT_WEIGHT)

    @classmethod
    def score(cls, violations: Iterable[Violation]) -> int:
        penalty = sum(cls.weight(v.rule) for v in violations)
        # Half points round up: 98.5 scores 99.
        return max(0, min(100, math.floor(100 - penalty + 0.5)))

    @staticmethod
    def badge(score: int) -> str:
        if score >= 90:
            return "Good"
        if score >= 70:
            return "Needs work"
        return "Poor"
