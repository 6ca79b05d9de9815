"""
Assessment-level scoring: run every template question through the scorer,
aggregate the score and tier, compute framework coverage, and count the
required questions left unanswered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from backend_vendorrisk.scoring.classifier import RiskTier, aggregate_score, classify_risk
from backend_vendorrisk.scoring.compliance import aggregate_compliance
from backend_vendorrisk.scoring.models import Question, QuestionOutcome, Response
from backend_vendorrisk.scoring.question_scorer import score_question
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssessmentScore:
    """
    Scoring result for one submitted assessment.

    score and tier are None when no question was applicable.
    unanswered_required lists the ids of required questions left blank;
    the parent assessment reports len() of it as its compliance-gap count.
    """

    score: int | None
    tier: RiskTier | None
    outcomes: tuple[QuestionOutcome, ...]
    compliance_coverage: dict[str, int] = field(default_factory=dict)
    unanswered_required: tuple[str, ...] = ()

    @property
    def unanswered_required_count(self) -> int:
        return len(self.unanswered_required)

    def outcome_for(self, question_id: str) -> QuestionOutcome | None:
        for outcome in self.outcomes:
            if outcome.question_id == question_id:
                return outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "tier": self.tier.value if self.tier else None,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "compliance_coverage": dict(self.compliance_coverage),
            "unanswered_required": list(self.unanswered_required),
            "unanswered_required_count": self.unanswered_required_count,
        }


def score_assessment(
    questions: Iterable[Question],
    responses: Iterable[Response],
) -> AssessmentScore:
    """
    Score a questionnaire submission.

    Responses for question ids not in the template are ignored. When a
    question has several responses the last one wins.
    """
    questions = list(questions)
    known_ids = {q.question_id for q in questions}

    by_question: dict[str, Response] = {}
    for response in responses:
        if response.question_id not in known_ids:
            logger.debug("response_unknown_question", question_id=response.question_id)
            continue
        if response.question_id in by_question:
            logger.warning("response_duplicate", question_id=response.question_id)
        by_question[response.question_id] = response

    outcomes = tuple(score_question(q, by_question.get(q.question_id)) for q in questions)
    score = aggregate_score(outcomes)
    tier = classify_risk(score) if score is not None else None
    coverage = aggregate_compliance(questions, outcomes)
    unanswered = tuple(o.question_id for o in outcomes if o.unanswered_required)

    logger.info(
        "assessment_scored",
        questions=len(questions),
        responses=len(by_question),
        score=score,
        tier=tier.value if tier else None,
        unanswered_required=len(unanswered),
    )
    return AssessmentScore(
        score=score,
        tier=tier,
        outcomes=outcomes,
        compliance_coverage=coverage,
        unanswered_required=unanswered,
    )
