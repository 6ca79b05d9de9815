"""
Data models for analysis snapshots and their comparison.

A snapshot is one immutable, timestamped result of a risk-analysis run for
a subject (vendor, document or assessment). Re-running an analysis creates
a new snapshot; comparing two snapshots yields a ComparisonResult that is
derived on demand and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from backend_vendorrisk.core.exceptions import SnapshotInvariantError
from backend_vendorrisk.scoring.classifier import RiskTier, classify_risk


class FindingKind(str, Enum):
    STRENGTH = "strength"
    CONCERN = "concern"
    CRITICAL_GAP = "critical_gap"
    NEEDS_CLARIFICATION = "needs_clarification"
    OBSERVATION = "observation"
    """Document key finding with no kind attached."""


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Trend(str, Enum):
    """Risk posture change from baseline to candidate."""

    IMPROVED = "improved"
    WORSENED = "worsened"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Finding:
    """
    A discrete observation, optionally tied to a source question.

    Two findings are the same finding iff their text is exactly equal.
    """

    text: str
    kind: FindingKind = FindingKind.OBSERVATION
    question_id: str | None = None
    detail: str = ""
    compliance_impact: tuple[str, ...] = ()
    recommended_action: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "kind": self.kind.value,
            "question_id": self.question_id,
            "detail": self.detail,
            "compliance_impact": list(self.compliance_impact),
            "recommended_action": self.recommended_action,
        }


@dataclass(frozen=True)
class RiskItem:
    """
    A risk flag; matched by description text. severity is None when the
    source carried a value outside the known levels.
    """

    description: str
    severity: Severity | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "severity": self.severity.value if self.severity else None,
        }


@dataclass(frozen=True)
class RecommendedAction:
    action: str
    priority: Priority = Priority.MEDIUM
    rationale: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "priority": self.priority.value,
            "rationale": self.rationale,
        }


def _freeze_scores(scores: Mapping[str, Any] | None) -> Mapping[str, int]:
    return MappingProxyType({str(k): int(v) for k, v in (scores or {}).items()})


def _freeze_controls(mapping: Mapping[str, Any] | None) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(
        {str(k): (v,) if isinstance(v, str) else tuple(v) for k, v in (mapping or {}).items()}
    )


@dataclass(frozen=True)
class AnalysisSnapshot:
    """
    One analysis run for a subject.

    score: 0-100 (None for document analyses that carry no score).
    tier: always classify_risk(score); passing None derives it.
    compliance_scores: framework -> coverage 0-100.
    compliance_mapping: framework -> control ids referenced by the analysis;
    this is what temporal comparison diffs.
    """

    snapshot_id: str | None = None
    subject_id: str | None = None
    created_at: datetime | None = None
    score: int | None = None
    tier: RiskTier | None = None
    confidence: float = 0.0
    summary: str = ""
    strengths: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()
    compliance_scores: Mapping[str, int] = field(default_factory=dict)
    recommended_actions: tuple[RecommendedAction, ...] = ()
    findings: tuple[Finding, ...] = ()
    risks: tuple[RiskItem, ...] = ()
    compliance_mapping: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.score is not None:
            if not 0 <= self.score <= 100:
                raise SnapshotInvariantError(f"Score {self.score} outside 0-100")
            derived = classify_risk(self.score)
            if self.tier is None:
                object.__setattr__(self, "tier", derived)
            elif RiskTier(self.tier) != derived:
                raise SnapshotInvariantError(
                    f"Tier {RiskTier(self.tier).value} does not match score {self.score} "
                    f"(expected {derived.value})"
                )
            else:
                object.__setattr__(self, "tier", derived)
        elif self.tier is not None:
            raise SnapshotInvariantError("Tier given without a score")
        if not 0.0 <= self.confidence <= 1.0:
            raise SnapshotInvariantError(f"Confidence {self.confidence} outside 0-1")
        for name in ("strengths", "concerns", "recommended_actions", "findings", "risks"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "compliance_scores", _freeze_scores(self.compliance_scores))
        object.__setattr__(self, "compliance_mapping", _freeze_controls(self.compliance_mapping))

    @property
    def high_risk_count(self) -> int:
        return sum(1 for r in self.risks if r.severity == Severity.HIGH)

    def to_dict(self) -> dict[str, Any]:
        return {
            "snapshot_id": self.snapshot_id,
            "subject_id": self.subject_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "score": self.score,
            "tier": self.tier.value if self.tier else None,
            "confidence": self.confidence,
            "summary": self.summary,
            "strengths": list(self.strengths),
            "concerns": list(self.concerns),
            "compliance_scores": dict(self.compliance_scores),
            "recommended_actions": [a.to_dict() for a in self.recommended_actions],
            "findings": [f.to_dict() for f in self.findings],
            "risks": [r.to_dict() for r in self.risks],
            "compliance_mapping": {k: list(v) for k, v in self.compliance_mapping.items()},
        }


@dataclass(frozen=True)
class ComplianceChange:
    framework: str
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "framework": self.framework,
            "added": list(self.added),
            "removed": list(self.removed),
        }


@dataclass(frozen=True)
class ComparisonResult:
    """
    Structural diff between a baseline and a candidate snapshot.

    new_*: present only in the candidate. resolved_*: present only in the
    baseline. compliance_changes only lists frameworks that changed.
    """

    trend: Trend
    new_findings: tuple[Finding, ...] = ()
    resolved_findings: tuple[Finding, ...] = ()
    new_risks: tuple[RiskItem, ...] = ()
    resolved_risks: tuple[RiskItem, ...] = ()
    compliance_changes: tuple[ComplianceChange, ...] = ()

    @property
    def has_changes(self) -> bool:
        return bool(
            self.new_findings
            or self.resolved_findings
            or self.new_risks
            or self.resolved_risks
            or self.compliance_changes
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "trend": self.trend.value,
            "new_findings": [f.to_dict() for f in self.new_findings],
            "resolved_findings": [f.to_dict() for f in self.resolved_findings],
            "new_risks": [r.to_dict() for r in self.new_risks],
            "resolved_risks": [r.to_dict() for r in self.resolved_risks],
            "compliance_changes": [c.to_dict() for c in self.compliance_changes],
        }
