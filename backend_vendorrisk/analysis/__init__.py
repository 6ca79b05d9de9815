"""
Analysis package — snapshots of risk-analysis runs and their comparison.

Parses loosely typed analysis records, builds immutable snapshots, diffs
two snapshots into a trend and change list, lines up to four subjects side
by side, and derives review flags and remediation issues.
"""

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    ComparisonResult,
    ComplianceChange,
    Finding,
    FindingKind,
    Priority,
    RecommendedAction,
    RiskItem,
    Severity,
    Trend,
)
from backend_vendorrisk.analysis.parser import snapshot_from_record
from backend_vendorrisk.analysis.snapshot import build_snapshot
from backend_vendorrisk.analysis.differ import classify_trend, compliance_changes, diff_analyses
from backend_vendorrisk.analysis.comparator import (
    MAX_SELECTION,
    SelectionResult,
    SideBySideComparison,
    SubjectSelection,
    compare_side_by_side,
    latest_snapshot,
)
from backend_vendorrisk.analysis.remediation import (
    RemediationIssue,
    ResponseFlag,
    flag_responses,
    plan_remediation,
    response_flag_for,
)

__all__ = [
    "AnalysisSnapshot",
    "ComparisonResult",
    "ComplianceChange",
    "Finding",
    "FindingKind",
    "Priority",
    "RecommendedAction",
    "RiskItem",
    "Severity",
    "Trend",
    "snapshot_from_record",
    "build_snapshot",
    "classify_trend",
    "compliance_changes",
    "diff_analyses",
    "MAX_SELECTION",
    "SelectionResult",
    "SideBySideComparison",
    "SubjectSelection",
    "compare_side_by_side",
    "latest_snapshot",
    "RemediationIssue",
    "ResponseFlag",
    "flag_responses",
    "plan_remediation",
    "response_flag_for",
]
