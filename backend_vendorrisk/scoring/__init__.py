"""
Scoring package — questionnaire responses to risk score, tier and
per-framework compliance coverage.

Pure and deterministic: the same questions and responses always produce
the same outcome.
"""

from backend_vendorrisk.scoring.models import (
    Question,
    QuestionOutcome,
    QuestionType,
    Response,
    ScoreStatus,
)
from backend_vendorrisk.scoring.question_scorer import score_question
from backend_vendorrisk.scoring.classifier import (
    RiskTier,
    aggregate_score,
    classify_risk,
    normalize_score,
    vendor_risk_score,
)
from backend_vendorrisk.scoring.compliance import aggregate_compliance
from backend_vendorrisk.scoring.assessment import AssessmentScore, score_assessment

__all__ = [
    "Question",
    "QuestionOutcome",
    "QuestionType",
    "Response",
    "ScoreStatus",
    "score_question",
    "RiskTier",
    "aggregate_score",
    "classify_risk",
    "normalize_score",
    "vendor_risk_score",
    "aggregate_compliance",
    "AssessmentScore",
    "score_assessment",
]
