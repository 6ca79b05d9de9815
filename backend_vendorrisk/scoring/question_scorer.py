"""
Per-question scoring: Question + Response -> contribution in [0, weight].

Rules:
- Boolean and choice types carry a score fraction per choice. Explicit
  fractions come from Question.choice_scores; otherwise Yes=1.0, No=0.0.
- N/A on a yes_no_na question is excluded from numerator and denominator.
- Multi-choice sums the fractions of the selected choices, capped at 1.0.
- Text, file, date and number questions have no pass/fail semantics and are
  unscorable. So is a choice with no defined fraction.
- Blank optional questions are unscored. Blank required questions score 0
  and are marked as unanswered-required compliance gaps.
"""

from __future__ import annotations

from backend_vendorrisk.scoring.models import (
    Question,
    QuestionOutcome,
    QuestionType,
    Response,
    ScoreStatus,
)
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)

POSITIVE_LABELS = frozenset({"yes", "true"})
NEGATIVE_LABELS = frozenset({"no", "false"})
NOT_APPLICABLE_LABELS = frozenset({"n/a", "na", "not applicable"})


class _NotApplicable:
    pass


_NA = _NotApplicable()


def _normalize_label(label: object) -> str:
    return str(label).strip().lower()


def _choice_fraction(question: Question, choice: str | bool) -> float | _NotApplicable | None:
    """
    Fraction for one choice label: float, _NA for N/A, None when undefined.
    """
    if isinstance(choice, bool):
        return 1.0 if choice else 0.0
    label = str(choice).strip()
    if label in question.choice_scores:
        return question.choice_scores[label]
    # Explicit labels match case-insensitively as a second pass.
    lowered = {_normalize_label(k): v for k, v in question.choice_scores.items()}
    norm = _normalize_label(label)
    if norm in lowered:
        return lowered[norm]
    if norm in POSITIVE_LABELS:
        return 1.0
    if norm in NEGATIVE_LABELS:
        return 0.0
    if norm in NOT_APPLICABLE_LABELS and question.question_type == QuestionType.BOOLEAN_NA:
        return _NA
    return None


def _fraction_for_response(question: Question, response: Response) -> float | _NotApplicable | None:
    choice = response.choice
    if choice is None and response.text is not None:
        # Some submission flows store yes/no answers as plain text.
        choice = response.text
    if choice is None:
        return None

    if question.question_type == QuestionType.MULTI_CHOICE:
        selected = choice if isinstance(choice, tuple) else (choice,)
        total = 0.0
        for label in selected:
            if not str(label).strip():
                continue
            frac = _choice_fraction(question, label)
            if frac is None or isinstance(frac, _NotApplicable):
                return None
            total += frac
        return max(0.0, min(1.0, total))

    if isinstance(choice, tuple):
        if len(choice) != 1:
            return None
        choice = choice[0]
    return _choice_fraction(question, choice)


def score_question(question: Question, response: Response | None) -> QuestionOutcome:
    """
    Score one question against its response (or absence of one).

    Returns a QuestionOutcome whose contribution is fraction * weight for
    scored questions and None for not-applicable, unanswered and unscorable.
    """
    blank = response is None or response.is_blank

    if blank:
        if question.required:
            if not question.is_scorable_type:
                return QuestionOutcome(
                    question_id=question.question_id,
                    weight=question.weight,
                    status=ScoreStatus.UNSCORABLE,
                    unanswered_required=True,
                )
            return QuestionOutcome(
                question_id=question.question_id,
                weight=question.weight,
                status=ScoreStatus.SCORED,
                contribution=0.0,
                unanswered_required=True,
            )
        return QuestionOutcome(
            question_id=question.question_id,
            weight=question.weight,
            status=ScoreStatus.UNANSWERED,
        )

    if not question.is_scorable_type:
        return QuestionOutcome(
            question_id=question.question_id,
            weight=question.weight,
            status=ScoreStatus.UNSCORABLE,
        )

    fraction = _fraction_for_response(question, response)
    if isinstance(fraction, _NotApplicable):
        return QuestionOutcome(
            question_id=question.question_id,
            weight=question.weight,
            status=ScoreStatus.NOT_APPLICABLE,
        )
    if fraction is None:
        logger.debug(
            "question_choice_unscorable",
            question_id=question.question_id,
            question_type=question.question_type.value,
        )
        return QuestionOutcome(
            question_id=question.question_id,
            weight=question.weight,
            status=ScoreStatus.UNSCORABLE,
        )
    return QuestionOutcome(
        question_id=question.question_id,
        weight=question.weight,
        status=ScoreStatus.SCORED,
        contribution=fraction * question.weight,
    )
