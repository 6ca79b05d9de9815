"""
Post-analysis actions derived from a snapshot.

- Response flags: findings tied to a question mark that response for
  review with a risk flag (critical_gap -> critical, concern -> high,
  needs_clarification -> medium; strengths and observations are not flagged).
- Remediation issues: one issue per recommended action, due 7/14/30/60 days
  out for critical/high/medium/low priority. Titles are the action text cut
  to 100 characters; a title already open for the assessment is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    FindingKind,
    Priority,
    Severity,
)
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)

ISSUE_TITLE_MAX_LENGTH = 100

REMEDIATION_DUE_DAYS = {
    Priority.CRITICAL: 7,
    Priority.HIGH: 14,
    Priority.MEDIUM: 30,
    Priority.LOW: 60,
}

FINDING_RESPONSE_FLAGS = {
    FindingKind.CRITICAL_GAP: Severity.CRITICAL,
    FindingKind.CONCERN: Severity.HIGH,
    FindingKind.NEEDS_CLARIFICATION: Severity.MEDIUM,
}


@dataclass(frozen=True)
class ResponseFlag:
    """Review flag for the response to one question."""

    question_id: str
    risk_flag: Severity
    detail: str = ""
    recommended_action: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "risk_flag": self.risk_flag.value,
            "detail": self.detail,
            "recommended_action": self.recommended_action,
        }


@dataclass(frozen=True)
class RemediationIssue:
    title: str
    description: str
    severity: Priority
    due_date: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "due_date": self.due_date.isoformat(),
        }


def response_flag_for(kind: FindingKind) -> Severity | None:
    return FINDING_RESPONSE_FLAGS.get(kind)


def flag_responses(snapshot: AnalysisSnapshot) -> list[ResponseFlag]:
    """Flags for every finding that names a question and maps to a risk flag."""
    flags: list[ResponseFlag] = []
    for finding in snapshot.findings:
        if not finding.question_id:
            continue
        risk_flag = response_flag_for(finding.kind)
        if risk_flag is None:
            continue
        flags.append(
            ResponseFlag(
                question_id=finding.question_id,
                risk_flag=risk_flag,
                detail=finding.detail,
                recommended_action=finding.recommended_action,
            )
        )
    return flags


def plan_remediation(
    snapshot: AnalysisSnapshot,
    *,
    assessment_title: str,
    now: datetime | None = None,
    existing_titles: Iterable[str] = (),
) -> list[RemediationIssue]:
    """
    Issues to open for the snapshot's recommended actions.

    Args:
        snapshot: Analysis whose recommended_actions drive the issues.
        assessment_title: Named in each issue description.
        now: Reference time for due dates (default: now, UTC).
        existing_titles: Titles of issues already open for the assessment.

    Returns:
        New issues in action order, skipping duplicate titles.
    """
    now = now or datetime.now(timezone.utc)
    seen = set(existing_titles)
    issues: list[RemediationIssue] = []
    for action in snapshot.recommended_actions:
        title = action.action[:ISSUE_TITLE_MAX_LENGTH]
        if title in seen:
            continue
        seen.add(title)
        days = REMEDIATION_DUE_DAYS.get(action.priority, REMEDIATION_DUE_DAYS[Priority.MEDIUM])
        issues.append(
            RemediationIssue(
                title=title,
                description=(
                    f"{action.rationale}\n\n"
                    f"Generated from AI analysis of assessment: {assessment_title}"
                ),
                severity=action.priority,
                due_date=now + timedelta(days=days),
            )
        )
    logger.info(
        "remediation_planned",
        snapshot_id=snapshot.snapshot_id,
        actions=len(snapshot.recommended_actions),
        issues=len(issues),
    )
    return issues
