"""
Data models for questionnaire scoring.

Question catalog entries, vendor responses, and the per-question scoring
outcome. Questions and responses are frozen: editing a catalog creates new
Question objects and never alters what an already-submitted response meant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from backend_vendorrisk.core.exceptions import InvalidQuestionError, InvalidResponseError

MIN_WEIGHT = 1
MAX_WEIGHT = 10
DEFAULT_WEIGHT = 1


class QuestionType(str, Enum):
    """Question types offered by the questionnaire builder."""

    BOOLEAN = "yes_no"
    BOOLEAN_NA = "yes_no_na"
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    SHORT_TEXT = "text"
    LONG_TEXT = "textarea"
    FILE = "file"
    DATE = "date"
    NUMBER = "number"


# Types with pass/fail semantics; everything else is unscorable.
SCORABLE_TYPES = frozenset(
    {
        QuestionType.BOOLEAN,
        QuestionType.BOOLEAN_NA,
        QuestionType.SINGLE_CHOICE,
        QuestionType.MULTI_CHOICE,
    }
)


class ScoreStatus(str, Enum):
    """How a question took part in the aggregate score."""

    SCORED = "scored"
    NOT_APPLICABLE = "not_applicable"
    UNANSWERED = "unanswered"
    UNSCORABLE = "unscorable"


def _control_ids(controls: Any) -> tuple[str, ...]:
    # A single control id may be given bare.
    if isinstance(controls, str):
        return (controls,)
    return tuple(str(c) for c in controls)


def _freeze_mapping(mapping: Mapping[str, Any] | None) -> Mapping[str, tuple[str, ...]]:
    frozen = {str(k): _control_ids(v) for k, v in (mapping or {}).items()}
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class Question:
    """
    One catalog question.

    compliance_mapping: framework name -> control ids (e.g. {"SOC2": ("CC6.1",)}).
    choice_scores: explicit score fraction per choice label; overrides the
    implicit Yes=1 / No=0 / N/A=excluded rule.
    """

    question_id: str
    section: str
    question_type: QuestionType
    weight: int = DEFAULT_WEIGHT
    required: bool = False
    risk_category: str | None = None
    compliance_mapping: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    choice_scores: Mapping[str, float] = field(default_factory=dict)
    text: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.question_type, QuestionType):
            try:
                object.__setattr__(self, "question_type", QuestionType(self.question_type))
            except ValueError as e:
                raise InvalidQuestionError(
                    f"Unknown question type {self.question_type!r} for {self.question_id}"
                ) from e
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise InvalidQuestionError(f"Weight must be an integer, got {self.weight!r}")
        if not MIN_WEIGHT <= self.weight <= MAX_WEIGHT:
            raise InvalidQuestionError(
                f"Weight {self.weight} outside {MIN_WEIGHT}-{MAX_WEIGHT} for {self.question_id}"
            )
        for label, fraction in self.choice_scores.items():
            if not 0.0 <= float(fraction) <= 1.0:
                raise InvalidQuestionError(
                    f"Choice {label!r} score fraction {fraction} outside [0, 1]"
                )
        object.__setattr__(self, "compliance_mapping", _freeze_mapping(self.compliance_mapping))
        object.__setattr__(
            self,
            "choice_scores",
            MappingProxyType({str(k): float(v) for k, v in self.choice_scores.items()}),
        )

    @property
    def is_scorable_type(self) -> bool:
        return self.question_type in SCORABLE_TYPES

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "section": self.section,
            "question_type": self.question_type.value,
            "weight": self.weight,
            "required": self.required,
            "risk_category": self.risk_category,
            "compliance_mapping": {k: list(v) for k, v in self.compliance_mapping.items()},
            "choice_scores": dict(self.choice_scores),
            "text": self.text,
        }


ChoiceValue = str | bool | tuple[str, ...]


@dataclass(frozen=True)
class Response:
    """
    A vendor's answer to one question within one assessment.

    Exactly one of text, choice, file_ref may be set. choice is a label for
    boolean/single-choice questions (or a bool) and a tuple of labels for
    multi-choice questions.
    """

    question_id: str
    text: str | None = None
    choice: ChoiceValue | None = None
    file_ref: str | None = None
    flagged: bool = False
    reviewer_note: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.choice, list):
            object.__setattr__(self, "choice", tuple(self.choice))
        provided = [v for v in (self.text, self.choice, self.file_ref) if v is not None]
        if len(provided) > 1:
            raise InvalidResponseError(
                f"Response to {self.question_id} must carry one of text, choice, file_ref"
            )

    @property
    def is_blank(self) -> bool:
        """True when nothing usable was submitted."""
        if self.text is not None:
            return not self.text.strip()
        if self.choice is not None:
            if isinstance(self.choice, bool):
                return False
            if isinstance(self.choice, tuple):
                return not any(str(c).strip() for c in self.choice)
            return not str(self.choice).strip()
        if self.file_ref is not None:
            return not self.file_ref.strip()
        return True


@dataclass(frozen=True)
class QuestionOutcome:
    """
    Scoring outcome for one question.

    contribution is in [0, weight] when status is SCORED, else None.
    unanswered_required marks a compliance gap: a required question left
    blank. It is reported even when the question type is unscorable.
    """

    question_id: str
    weight: int
    status: ScoreStatus
    contribution: float | None = None
    unanswered_required: bool = False

    @property
    def applicable(self) -> bool:
        """True if the question counts in the score denominator."""
        return self.status == ScoreStatus.SCORED

    @property
    def passing(self) -> bool:
        """Passing or partially passing: scored with a positive contribution."""
        return self.applicable and (self.contribution or 0.0) > 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "weight": self.weight,
            "status": self.status.value,
            "contribution": self.contribution,
            "unanswered_required": self.unanswered_required,
        }
