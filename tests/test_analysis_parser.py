"""
Tests for coercing stored analysis records into snapshots
(parser.snapshot_from_record) and for the snapshot model's invariants.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone

import pytest

from backend_vendorrisk.analysis.models import (
    AnalysisSnapshot,
    FindingKind,
    Priority,
    Severity,
)
from backend_vendorrisk.analysis.parser import snapshot_from_record
from backend_vendorrisk.core.exceptions import SnapshotInvariantError
from backend_vendorrisk.scoring.classifier import RiskTier


def test_assessment_record(assessment_record):
    snap = snapshot_from_record(assessment_record)
    assert snap.snapshot_id == "an-1"
    assert snap.subject_id == "as-1"
    assert snap.created_at == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert snap.score == 72
    assert snap.tier == RiskTier.MEDIUM
    assert snap.confidence == 0.85
    assert snap.strengths == ("MFA enforced", "Encryption at rest")
    assert snap.concerns == ("No tested IR plan",)
    assert dict(snap.compliance_scores) == {"SOC2": 80, "ISO27001": 65, "GDPR": 90}
    assert snap.recommended_actions[0].priority == Priority.HIGH
    finding = snap.findings[0]
    assert finding.text == "Incident response plan never tested"
    assert finding.kind == FindingKind.CONCERN
    assert finding.question_id == "q-ir-plan"
    assert finding.compliance_impact == ("ISO27001 A.16.1",)


def test_document_record(document_record):
    snap = snapshot_from_record(document_record)
    assert snap.subject_id == "vendor-1"
    assert snap.score is None
    assert snap.tier is None
    assert [f.text for f in snap.findings] == ["Annual penetration test performed", "No DPA on file"]
    assert all(f.kind == FindingKind.OBSERVATION for f in snap.findings)
    assert snap.risks[0].severity == Severity.HIGH
    assert snap.high_risk_count == 1
    assert dict(snap.compliance_mapping) == {"SOC2": ("CC6.1",), "GDPR": ("Art.28",)}


def test_declared_tier_is_overridden_by_score():
    """A record claiming critical for score 85 becomes low."""
    snap = snapshot_from_record({"overall_score": 85, "risk_level": "critical"})
    assert snap.tier == RiskTier.LOW


def test_values_clamped():
    snap = snapshot_from_record({"overall_score": 140, "confidence_score": 1.7})
    assert snap.score == 100
    assert snap.confidence == 1.0
    snap = snapshot_from_record({"overall_score": "-5", "confidence_score": "high"})
    assert snap.score == 0
    assert snap.confidence == 0.0


def test_malformed_fields_degrade_to_empty():
    """Wrong shapes become empty lists/maps; the parse never raises."""
    snap = snapshot_from_record(
        {
            "findings": "not a list",
            "risk_flags": {"severity": "high"},
            "compliance_mapping": ["SOC2"],
            "compliance_scores": "90",
            "key_strengths": None,
            "recommended_actions": [42, {"priority": "high"}],
            "created_at": "yesterday",
        }
    )
    assert snap.findings == ()
    assert snap.risks == ()
    assert dict(snap.compliance_mapping) == {}
    assert dict(snap.compliance_scores) == {}
    assert snap.strengths == ()
    assert snap.recommended_actions == ()
    assert snap.created_at is None


def test_partially_malformed_entries():
    """Bad entries inside lists are dropped; unknown enum values degrade."""
    snap = snapshot_from_record(
        {
            "risk_flags": [
                {"severity": "severe", "description": "unknown severity"},
                {"severity": "low"},
                "plain text risk",
            ],
            "findings": [{"finding_type": "weird", "summary": "odd"}, None, ""],
            "recommended_actions": [{"action": "Rotate keys", "priority": "urgent"}],
            "compliance_mapping": {"SOC2": "CC6.1", "GDPR": ["Art.28", None], "PCI": 42},
        }
    )
    assert [r.description for r in snap.risks] == ["unknown severity", "plain text risk"]
    assert snap.risks[0].severity is None
    assert snap.findings[0].kind == FindingKind.OBSERVATION
    assert len(snap.findings) == 1
    assert snap.recommended_actions[0].priority == Priority.MEDIUM
    assert dict(snap.compliance_mapping) == {
        "SOC2": ("CC6.1",),
        "GDPR": ("Art.28",),
        "PCI": (),
    }


def test_non_finite_numbers_are_treated_as_missing():
    """NaN and Infinity (accepted by json.loads) never reach rounding."""
    record = json.loads(
        '{"overall_score": NaN, "confidence_score": NaN, '
        '"compliance_scores": {"SOC2": Infinity, "ISO27001": -Infinity, "GDPR": 80}, '
        '"key_findings": ["a"]}'
    )
    snap = snapshot_from_record(record)
    assert snap.score is None
    assert snap.tier is None
    assert snap.confidence == 0.0
    assert dict(snap.compliance_scores) == {"GDPR": 80}
    assert [f.text for f in snap.findings] == ["a"]


@pytest.mark.parametrize("raw", ["nan", " inf ", "-Infinity", 10**400])
def test_non_finite_score_strings_and_huge_ints(raw):
    snap = snapshot_from_record({"overall_score": raw, "confidence": raw})
    assert snap.score is None
    assert snap.confidence == 0.0


def test_non_mapping_record_is_empty_snapshot():
    snap = snapshot_from_record(["not", "a", "record"])
    assert snap == AnalysisSnapshot()


def test_snapshot_passes_through():
    snap = AnalysisSnapshot(score=50)
    assert snapshot_from_record(snap) is snap


def test_snapshot_rejects_inconsistent_tier():
    with pytest.raises(SnapshotInvariantError):
        AnalysisSnapshot(score=85, tier=RiskTier.CRITICAL)
    with pytest.raises(SnapshotInvariantError):
        AnalysisSnapshot(tier=RiskTier.LOW)
    with pytest.raises(SnapshotInvariantError):
        AnalysisSnapshot(score=101)


def test_snapshot_derives_tier_and_is_immutable():
    snap = AnalysisSnapshot(score=61, compliance_scores={"SOC2": 70})
    assert snap.tier == RiskTier.MEDIUM
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 90
    with pytest.raises(TypeError):
        snap.compliance_scores["SOC2"] = 10


def test_snapshot_to_dict(assessment_record):
    data = snapshot_from_record(assessment_record).to_dict()
    assert data["tier"] == "medium"
    assert data["created_at"] == "2026-03-01T10:00:00+00:00"
    assert data["findings"][0]["kind"] == "concern"


def test_snapshot_wraps_bare_control_id():
    """A single control id given as a string is one control, not characters."""
    snap = AnalysisSnapshot(compliance_mapping={"SOC2": "CC6.1", "GDPR": ["Art.28"]})
    assert dict(snap.compliance_mapping) == {"SOC2": ("CC6.1",), "GDPR": ("Art.28",)}
