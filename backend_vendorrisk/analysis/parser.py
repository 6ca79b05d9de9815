"""
Coerce loosely typed analysis records into AnalysisSnapshot.

Records come from an AI generation step that is not schema-guaranteed, in
two shapes:
- assessment analyses: overall_score, risk_level, confidence_score,
  executive_summary, key_strengths, key_concerns, recommended_actions,
  compliance_scores, findings (objects with summary / finding_type / ...).
- document analyses: key_findings (strings), risk_flags
  ({severity, description}), compliance_mapping ({framework: [controls]}).

Never raises on shape: missing or malformed fields become empty values and
are logged. The tier is always re-derived from the score.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Mapping

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    Finding,
    FindingKind,
    Priority,
    RecommendedAction,
    RiskItem,
    Severity,
)
from backend_vendorrisk.scoring.classifier import classify_risk, round_half_up
from backend_vendorrisk.vendorrisk_logging import get_logger

logger = get_logger(__name__)


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _as_list(value: Any, field_name: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    logger.debug("analysis_field_not_list", field=field_name, type=type(value).__name__)
    return []


def _as_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    logger.debug("analysis_field_not_mapping", field=field_name, type=type(value).__name__)
    return {}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_number(value: Any) -> float | None:
    """Finite float or None. NaN and infinities (json.loads accepts both) are dropped."""
    if isinstance(value, bool) or value is None:
        return None
    number: float | None = None
    if isinstance(value, (int, float, str)):
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (ValueError, OverflowError):
            return None
    if number is None or not math.isfinite(number):
        return None
    return number


def _enum_or_none(enum_cls: type, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return None


def parse_score(value: Any) -> int | None:
    """Score clamped to 0-100 and rounded; None if absent or not numeric."""
    number = _as_number(value)
    if number is None:
        return None
    return max(0, min(100, round_half_up(number)))


def parse_confidence(value: Any) -> float:
    """Confidence clamped to 0-1; 0.0 if absent."""
    number = _as_number(value)
    if number is None:
        return 0.0
    return max(0.0, min(1.0, number))


def parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("analysis_timestamp_invalid", value=value[:40])
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_strings(value: Any, field_name: str) -> tuple[str, ...]:
    return tuple(s for s in (_as_text(v) for v in _as_list(value, field_name)) if s)


def parse_finding(item: Any) -> Finding | None:
    """Finding from a plain string (document) or an object (assessment)."""
    if isinstance(item, str):
        return Finding(text=item) if item else None
    if not isinstance(item, Mapping):
        return None
    text = _as_text(_first(item, "summary", "text", "finding", "description"))
    if not text:
        return None
    kind = _enum_or_none(FindingKind, _first(item, "finding_type", "kind"))
    return Finding(
        text=text,
        kind=kind or FindingKind.OBSERVATION,
        question_id=_as_text(item.get("question_id")) or None,
        detail=_as_text(item.get("detail")),
        compliance_impact=parse_strings(item.get("compliance_impact"), "compliance_impact"),
        recommended_action=_as_text(item.get("recommended_action")),
    )


def parse_findings(value: Any) -> tuple[Finding, ...]:
    findings = []
    for item in _as_list(value, "findings"):
        finding = parse_finding(item)
        if finding is not None:
            findings.append(finding)
    return tuple(findings)


def parse_risk(item: Any) -> RiskItem | None:
    if isinstance(item, str):
        return RiskItem(description=item) if item else None
    if not isinstance(item, Mapping):
        return None
    description = _as_text(_first(item, "description", "text", "risk"))
    if not description:
        return None
    return RiskItem(description=description, severity=_enum_or_none(Severity, item.get("severity")))


def parse_risks(value: Any) -> tuple[RiskItem, ...]:
    risks = []
    for item in _as_list(value, "risks"):
        risk = parse_risk(item)
        if risk is not None:
            risks.append(risk)
    return tuple(risks)


def parse_recommended_actions(value: Any) -> tuple[RecommendedAction, ...]:
    actions = []
    for item in _as_list(value, "recommended_actions"):
        if isinstance(item, str):
            if item:
                actions.append(RecommendedAction(action=item))
            continue
        if not isinstance(item, Mapping):
            continue
        text = _as_text(item.get("action"))
        if not text:
            continue
        actions.append(
            RecommendedAction(
                action=text,
                priority=_enum_or_none(Priority, item.get("priority")) or Priority.MEDIUM,
                rationale=_as_text(item.get("rationale")),
            )
        )
    return tuple(actions)


def parse_compliance_scores(value: Any) -> dict[str, int]:
    scores: dict[str, int] = {}
    for framework, raw in _as_mapping(value, "compliance_scores").items():
        score = parse_score(raw)
        if score is not None:
            scores[str(framework)] = score
    return scores


def parse_compliance_mapping(value: Any) -> dict[str, tuple[str, ...]]:
    """Framework -> control ids. A bare string is one control; other non-lists become empty."""
    mapping: dict[str, tuple[str, ...]] = {}
    for framework, controls in _as_mapping(value, "compliance_mapping").items():
        if isinstance(controls, str):
            mapping[str(framework)] = (controls,) if controls else ()
        else:
            mapping[str(framework)] = parse_strings(controls, "compliance_mapping")
    return mapping


def snapshot_from_record(record: Any) -> AnalysisSnapshot:
    """
    Build an AnalysisSnapshot from a stored analysis record.

    Accepts both assessment- and document-analysis shapes. A non-mapping
    record yields an empty snapshot.
    """
    if isinstance(record, AnalysisSnapshot):
        return record
    if not isinstance(record, Mapping):
        logger.warning("analysis_record_not_mapping", type=type(record).__name__)
        return AnalysisSnapshot()

    score = parse_score(_first(record, "overall_score", "score"))
    tier = classify_risk(score) if score is not None else None
    declared = _first(record, "risk_level", "tier")
    if tier is not None and isinstance(declared, str) and declared.strip().lower() != tier.value:
        logger.warning(
            "analysis_tier_mismatch",
            snapshot_id=_as_text(record.get("id")) or None,
            score=score,
            declared_tier=declared,
            derived_tier=tier.value,
        )

    return AnalysisSnapshot(
        snapshot_id=_as_text(_first(record, "id", "snapshot_id")) or None,
        subject_id=_as_text(
            _first(record, "subject_id", "vendor_id", "assessment_id", "document_id")
        )
        or None,
        created_at=parse_timestamp(_first(record, "created_at", "analyzed_at", "timestamp")),
        score=score,
        tier=tier,
        confidence=parse_confidence(_first(record, "confidence_score", "confidence")),
        summary=_as_text(_first(record, "executive_summary", "summary")),
        strengths=parse_strings(_first(record, "key_strengths", "strengths"), "strengths"),
        concerns=parse_strings(_first(record, "key_concerns", "concerns"), "concerns"),
        compliance_scores=parse_compliance_scores(record.get("compliance_scores")),
        recommended_actions=parse_recommended_actions(record.get("recommended_actions")),
        findings=parse_findings(_first(record, "findings", "key_findings")),
        risks=parse_risks(_first(record, "risks", "risk_flags")),
        compliance_mapping=parse_compliance_mapping(record.get("compliance_mapping")),
    )
