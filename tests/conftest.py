"""
Pytest fixtures for VendorRisk tests: a small questionnaire template and
analysis records in both stored shapes (assessment and document).
"""

from __future__ import annotations

import pytest

from backend_vendorrisk.scoring.models import Question, QuestionType


@pytest.fixture
def template():
    """Five questions across SOC2 / ISO27001 / GDPR with mixed types and weights."""
    return [
        Question(
            question_id="q-mfa",
            section="Access Control",
            question_type=QuestionType.BOOLEAN,
            weight=5,
            required=True,
            compliance_mapping={"SOC2": ["CC6.1"], "ISO27001": ["A.9.4.2"]},
        ),
        Question(
            question_id="q-encryption",
            section="Data Protection",
            question_type=QuestionType.BOOLEAN_NA,
            weight=3,
            compliance_mapping={"SOC2": ["CC6.7"], "GDPR": ["Art.32"]},
        ),
        Question(
            question_id="q-ir-plan",
            section="Incident Response",
            question_type=QuestionType.SINGLE_CHOICE,
            weight=2,
            choice_scores={"Tested annually": 1.0, "Documented only": 0.5, "None": 0.0},
            compliance_mapping={"ISO27001": ["A.16.1"]},
        ),
        Question(
            question_id="q-soc-report",
            section="Assurance",
            question_type=QuestionType.FILE,
            weight=4,
            required=True,
        ),
        Question(
            question_id="q-notes",
            section="General",
            question_type=QuestionType.LONG_TEXT,
        ),
    ]


@pytest.fixture
def assessment_record():
    """Assessment analysis record as stored after generation."""
    return {
        "id": "an-1",
        "assessment_id": "as-1",
        "created_at": "2026-03-01T10:00:00Z",
        "overall_score": 72,
        "risk_level": "medium",
        "confidence_score": 0.85,
        "executive_summary": "Adequate controls with gaps in incident response.",
        "key_strengths": ["MFA enforced", "Encryption at rest"],
        "key_concerns": ["No tested IR plan"],
        "recommended_actions": [
            {"action": "Test the incident response plan", "priority": "high", "rationale": "Untested plan"},
        ],
        "compliance_scores": {"SOC2": 80, "ISO27001": 65, "GDPR": 90},
        "findings": [
            {
                "question_id": "q-ir-plan",
                "finding_type": "concern",
                "summary": "Incident response plan never tested",
                "detail": "Plan exists but no tabletop exercise on record.",
                "compliance_impact": ["ISO27001 A.16.1"],
                "recommended_action": "Run a tabletop exercise",
            },
        ],
    }


@pytest.fixture
def document_record():
    """Document analysis record: string findings, risk flags, compliance mapping."""
    return {
        "id": "doc-1",
        "vendor_id": "vendor-1",
        "analyzed_at": "2026-01-15T09:30:00+00:00",
        "key_findings": ["Annual penetration test performed", "No DPA on file"],
        "risk_flags": [
            {"severity": "high", "description": "weak MFA"},
            {"severity": "medium", "description": "stale subprocessor list"},
        ],
        "compliance_mapping": {"SOC2": ["CC6.1"], "GDPR": ["Art.28"]},
    }
