"""
Side-by-side comparison of up to four subjects.

SubjectSelection is a value object: add/remove/toggle return a
SelectionResult holding the resulting selection and whether the change was
accepted. A fifth subject is rejected and the selection stays as it was.
compare_side_by_side lines up each selected subject's latest snapshot; it
does not diff.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from backend_vendorrisk.analysis.models import AnalysisSnapshot
from backend_vendorrisk.scoring.classifier import RiskTier
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)

MAX_SELECTION = 4

REASON_SELECTION_FULL = "selection_full"
REASON_ALREADY_SELECTED = "already_selected"
REASON_NOT_SELECTED = "not_selected"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class SelectionResult:
    accepted: bool
    selection: "SubjectSelection"
    reason: str | None = None


@dataclass(frozen=True)
class SubjectSelection:
    """Ordered selection of at most MAX_SELECTION subject ids."""

    subject_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        ids = tuple(self.subject_ids)
        if len(ids) > MAX_SELECTION:
            raise ValueError(f"At most {MAX_SELECTION} subjects can be selected, got {len(ids)}")
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate subject ids in selection")
        object.__setattr__(self, "subject_ids", ids)

    def __len__(self) -> int:
        return len(self.subject_ids)

    def __contains__(self, subject_id: object) -> bool:
        return subject_id in self.subject_ids

    @property
    def is_full(self) -> bool:
        return len(self.subject_ids) >= MAX_SELECTION

    def add(self, subject_id: str) -> SelectionResult:
        if subject_id in self.subject_ids:
            return SelectionResult(False, self, REASON_ALREADY_SELECTED)
        if self.is_full:
            logger.info("selection_rejected", subject_id=subject_id, reason=REASON_SELECTION_FULL)
            return SelectionResult(False, self, REASON_SELECTION_FULL)
        return SelectionResult(True, SubjectSelection(self.subject_ids + (subject_id,)))

    def remove(self, subject_id: str) -> SelectionResult:
        if subject_id not in self.subject_ids:
            return SelectionResult(False, self, REASON_NOT_SELECTED)
        remaining = tuple(s for s in self.subject_ids if s != subject_id)
        return SelectionResult(True, SubjectSelection(remaining))

    def toggle(self, subject_id: str) -> SelectionResult:
        """Remove if selected, otherwise add (subject to the bound)."""
        if subject_id in self.subject_ids:
            return self.remove(subject_id)
        return self.add(subject_id)


def _sort_key(snapshot: AnalysisSnapshot) -> datetime:
    ts = snapshot.created_at
    if ts is None:
        return _EPOCH
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def latest_snapshot(snapshots: Iterable[AnalysisSnapshot]) -> AnalysisSnapshot | None:
    """Most recent snapshot by created_at; undated ones sort oldest, later input wins ties."""
    latest: AnalysisSnapshot | None = None
    for snapshot in snapshots:
        if latest is None or _sort_key(snapshot) >= _sort_key(latest):
            latest = snapshot
    return latest


@dataclass(frozen=True)
class SideBySideComparison:
    """Latest snapshot per selected subject, column order = selection order."""

    subject_ids: tuple[str, ...]
    snapshots: tuple[AnalysisSnapshot | None, ...]

    @property
    def scores(self) -> list[int | None]:
        return [s.score if s else None for s in self.snapshots]

    @property
    def tiers(self) -> list[RiskTier | None]:
        return [s.tier if s else None for s in self.snapshots]

    @property
    def confidences(self) -> list[float | None]:
        return [s.confidence if s else None for s in self.snapshots]

    @property
    def summaries(self) -> list[str]:
        return [s.summary if s else "" for s in self.snapshots]

    @property
    def strengths(self) -> list[tuple[str, ...]]:
        return [s.strengths if s else () for s in self.snapshots]

    @property
    def concerns(self) -> list[tuple[str, ...]]:
        return [s.concerns if s else () for s in self.snapshots]

    @property
    def frameworks(self) -> list[str]:
        """Union of compliance frameworks across columns, first-seen order."""
        seen: list[str] = []
        for snapshot in self.snapshots:
            if snapshot is None:
                continue
            for framework in snapshot.compliance_scores:
                if framework not in seen:
                    seen.append(framework)
        return seen

    def coverage(self, framework: str) -> list[int | None]:
        return [s.compliance_scores.get(framework) if s else None for s in self.snapshots]

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject_ids": list(self.subject_ids),
            "scores": self.scores,
            "tiers": [t.value if t else None for t in self.tiers],
            "confidences": self.confidences,
            "summaries": self.summaries,
            "strengths": [list(s) for s in self.strengths],
            "concerns": [list(c) for c in self.concerns],
            "compliance": {f: self.coverage(f) for f in self.frameworks},
        }


def compare_side_by_side(
    selection: SubjectSelection,
    snapshots_by_subject: Mapping[str, Iterable[AnalysisSnapshot]],
) -> SideBySideComparison:
    """Line up the latest snapshot of every selected subject."""
    columns = tuple(
        latest_snapshot(snapshots_by_subject.get(subject_id, ()))
        for subject_id in selection.subject_ids
    )
    missing = [sid for sid, snap in zip(selection.subject_ids, columns) if snap is None]
    if missing:
        logger.debug("side_by_side_missing_snapshot", subject_ids=missing)
    return SideBySideComparison(subject_ids=selection.subject_ids, snapshots=columns)
