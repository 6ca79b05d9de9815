"""
Temporal comparison of two analysis snapshots.

Findings and risks are matched by exact, case-sensitive text equality
(finding text, risk description). Historical trend results depend on this
rule, so it must not be loosened to fuzzy matching.

Trend rule, evaluated in this order (improved wins when both would fire):
    improved:  cand_high < base_high
               or (len(cand_risks) < len(base_risks) and cand_high <= base_high)
    worsened:  cand_high > base_high or len(cand_risks) > len(base_risks)
    unchanged: otherwise
Only "high" severities are counted. A high that becomes a critical with the
same total count therefore reads as unchanged.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    ComparisonResult,
    ComplianceChange,
    Finding,
    RiskItem,
    Severity,
    Trend,
)
from backend_vendorrisk.analysis.parser import snapshot_from_record
from backend_vendorrisk.core.exceptions import SubjectMismatchError
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)


def _only_in_first(first: Iterable[Finding], second: Iterable[Finding]) -> tuple[Finding, ...]:
    other = {f.text for f in second}
    return tuple(f for f in first if f.text not in other)


def _risks_only_in_first(first: Iterable[RiskItem], second: Iterable[RiskItem]) -> tuple[RiskItem, ...]:
    other = {r.description for r in second}
    return tuple(r for r in first if r.description not in other)


def _count_high(risks: Sequence[RiskItem]) -> int:
    return sum(1 for r in risks if r.severity == Severity.HIGH)


def classify_trend(base_risks: Sequence[RiskItem], cand_risks: Sequence[RiskItem]) -> Trend:
    """Classify risk posture change from baseline risks to candidate risks."""
    base_high = _count_high(base_risks)
    cand_high = _count_high(cand_risks)
    if cand_high < base_high or (len(cand_risks) < len(base_risks) and cand_high <= base_high):
        return Trend.IMPROVED
    if cand_high > base_high or len(cand_risks) > len(base_risks):
        return Trend.WORSENED
    return Trend.UNCHANGED


def compliance_changes(
    baseline: Mapping[str, Sequence[str]],
    candidate: Mapping[str, Sequence[str]],
) -> tuple[ComplianceChange, ...]:
    """
    Per-framework control additions and removals.

    Frameworks are visited in baseline order, then candidate-only frameworks.
    Frameworks with no added and no removed controls are omitted.
    """
    frameworks = list(baseline)
    frameworks.extend(f for f in candidate if f not in baseline)

    changes: list[ComplianceChange] = []
    for framework in frameworks:
        old = baseline.get(framework) or ()
        new = candidate.get(framework) or ()
        old_set = set(old)
        new_set = set(new)
        added = tuple(c for c in new if c not in old_set)
        removed = tuple(c for c in old if c not in new_set)
        if added or removed:
            changes.append(ComplianceChange(framework=framework, added=added, removed=removed))
    return tuple(changes)


def _check_same_subject(baseline: AnalysisSnapshot, candidate: AnalysisSnapshot) -> None:
    if baseline.subject_id and candidate.subject_id and baseline.subject_id != candidate.subject_id:
        raise SubjectMismatchError(
            f"Cannot compare snapshots of {baseline.subject_id} and {candidate.subject_id}"
        )


def diff_analyses(
    baseline: AnalysisSnapshot | Mapping[str, Any],
    candidate: AnalysisSnapshot | Mapping[str, Any],
) -> ComparisonResult:
    """
    Compare an earlier (baseline) and a later (candidate) analysis.

    Args:
        baseline: Earlier snapshot, or a raw analysis record.
        candidate: Later snapshot, or a raw analysis record.

    Returns:
        ComparisonResult with trend, new/resolved findings and risks, and
        compliance mapping changes. Malformed record fields count as empty.

    Raises:
        SubjectMismatchError: both snapshots name a subject and they differ.
    """
    base = snapshot_from_record(baseline)
    cand = snapshot_from_record(candidate)
    _check_same_subject(base, cand)

    result = ComparisonResult(
        trend=classify_trend(base.risks, cand.risks),
        new_findings=_only_in_first(cand.findings, base.findings),
        resolved_findings=_only_in_first(base.findings, cand.findings),
        new_risks=_risks_only_in_first(cand.risks, base.risks),
        resolved_risks=_risks_only_in_first(base.risks, cand.risks),
        compliance_changes=compliance_changes(base.compliance_mapping, cand.compliance_mapping),
    )
    logger.info(
        "analysis_compared",
        subject_id=cand.subject_id or base.subject_id,
        baseline_id=base.snapshot_id,
        candidate_id=cand.snapshot_id,
        trend=result.trend.value,
        new_findings=len(result.new_findings),
        resolved_findings=len(result.resolved_findings),
        new_risks=len(result.new_risks),
        resolved_risks=len(result.resolved_risks),
        compliance_changes=len(result.compliance_changes),
    )
    return result
