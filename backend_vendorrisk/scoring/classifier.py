"""
Risk tier classification and score aggregation.

Tiers partition 0-100 with inclusive lower bounds:
    low >= 80, medium >= 60, high >= 40, critical < 40.
classify_risk is pure and never detects scale; vendor-level scores on a
0-10 scale go through normalize_score first.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

from backend_vendorrisk.scoring.models import QuestionOutcome


class RiskTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """0 for low up to 3 for critical."""
        return TIER_ORDER.index(self)


TIER_ORDER = (RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH, RiskTier.CRITICAL)

LOW_MIN_SCORE = 80
MEDIUM_MIN_SCORE = 60
HIGH_MIN_SCORE = 40

# Seed 0-10 vendor risk score for a vendor created with a known tier
VENDOR_TIER_RISK_SCORES = {
    RiskTier.CRITICAL: 9,
    RiskTier.HIGH: 7,
    RiskTier.MEDIUM: 5,
    RiskTier.LOW: 2,
}


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def classify_risk(score: float) -> RiskTier:
    """Map a 0-100 score to its tier. Every input gets exactly one tier."""
    if score >= LOW_MIN_SCORE:
        return RiskTier.LOW
    if score >= MEDIUM_MIN_SCORE:
        return RiskTier.MEDIUM
    if score >= HIGH_MIN_SCORE:
        return RiskTier.HIGH
    return RiskTier.CRITICAL


def normalize_score(value: float, scale_max: float = 10.0) -> float:
    """Rescale a 0..scale_max score to 0-100."""
    if scale_max <= 0:
        raise ValueError(f"scale_max must be positive, got {scale_max}")
    return value / scale_max * 100.0


def vendor_risk_score(tier: RiskTier | str) -> int:
    """0-10 vendor risk score stored for a vendor created with the given tier."""
    return VENDOR_TIER_RISK_SCORES[RiskTier(tier)]


def aggregate_score(outcomes: Iterable[QuestionOutcome]) -> int | None:
    """
    Sum of contributions / sum of applicable weights * 100, rounded.

    Returns None when no question is applicable (everything N/A, unanswered
    optional or unscorable).
    """
    earned = 0.0
    possible = 0
    for outcome in outcomes:
        if not outcome.applicable:
            continue
        earned += outcome.contribution or 0.0
        possible += outcome.weight
    if possible == 0:
        return None
    return round_half_up(earned / possible * 100.0)
