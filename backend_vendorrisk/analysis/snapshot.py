"""
Assemble an AnalysisSnapshot from a computed assessment score plus the
narrative part of an analysis run (summary, strengths, findings, ...).

Score, tier and compliance scores always come from the computation so the
snapshot's tier stays derivable from its own score.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping, Sequence

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    Finding,
    RecommendedAction,
    RiskItem,
)
from backend_vendorrisk.scoring.assessment import AssessmentScore
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)


def build_snapshot(
    assessment_score: AssessmentScore,
    *,
    subject_id: str | None = None,
    snapshot_id: str | None = None,
    created_at: datetime | None = None,
    confidence: float = 0.0,
    summary: str = "",
    strengths: Sequence[str] = (),
    concerns: Sequence[str] = (),
    recommended_actions: Iterable[RecommendedAction] = (),
    findings: Iterable[Finding] = (),
    risks: Iterable[RiskItem] = (),
    compliance_mapping: Mapping[str, Sequence[str]] | None = None,
) -> AnalysisSnapshot:
    """Create a new, immutable snapshot; created_at defaults to now (UTC)."""
    snapshot = AnalysisSnapshot(
        snapshot_id=snapshot_id,
        subject_id=subject_id,
        created_at=created_at or datetime.now(timezone.utc),
        score=assessment_score.score,
        tier=assessment_score.tier,
        confidence=max(0.0, min(1.0, confidence)),
        summary=summary,
        strengths=tuple(strengths),
        concerns=tuple(concerns),
        compliance_scores=dict(assessment_score.compliance_coverage),
        recommended_actions=tuple(recommended_actions),
        findings=tuple(findings),
        risks=tuple(risks),
        compliance_mapping={k: tuple(v) for k, v in (compliance_mapping or {}).items()},
    )
    logger.debug(
        "snapshot_built",
        subject_id=subject_id,
        snapshot_id=snapshot_id,
        score=snapshot.score,
        tier=snapshot.tier.value if snapshot.tier else None,
    )
    return snapshot
