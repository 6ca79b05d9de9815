"""
Per-framework compliance coverage.

coverage(framework) = weight of passing-or-partially-passing questions
mapped to the framework / weight of scored questions mapped to it * 100.
A question mapped to several frameworks counts for each of them. Frameworks
with nothing to divide by are left out of the result.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from backend_vendorrisk.scoring.classifier import round_half_up
from backend_vendorrisk.scoring.models import Question, QuestionOutcome
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)


def aggregate_compliance(
    questions: Iterable[Question],
    outcomes: Mapping[str, QuestionOutcome] | Iterable[QuestionOutcome],
) -> dict[str, int]:
    """
    Compute coverage percentage per framework.

    Args:
        questions: Template questions with their compliance mappings.
        outcomes: Scoring outcomes, keyed by question_id or as an iterable.

    Returns:
        Framework -> coverage (0-100), in order of first appearance.
        Questions with no outcome or a non-scored outcome are skipped.
    """
    if isinstance(outcomes, Mapping):
        by_id = dict(outcomes)
    else:
        by_id = {o.question_id: o for o in outcomes}

    passing: dict[str, int] = {}
    total: dict[str, int] = {}
    for question in questions:
        if not question.compliance_mapping:
            continue
        outcome = by_id.get(question.question_id)
        if outcome is None or not outcome.applicable:
            continue
        for framework in question.compliance_mapping:
            total[framework] = total.get(framework, 0) + question.weight
            if outcome.passing:
                passing[framework] = passing.get(framework, 0) + question.weight

    coverage = {
        framework: round_half_up(passing.get(framework, 0) / weight * 100.0)
        for framework, weight in total.items()
        if weight > 0
    }
    logger.debug("compliance_aggregated", frameworks=list(coverage))
    return coverage
