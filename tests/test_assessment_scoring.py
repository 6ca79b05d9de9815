"""
Tests for assessment-level scoring (assessment.score_assessment) using the
five-question template from conftest.
"""

from __future__ import annotations

from backend_vendorrisk.scoring.assessment import score_assessment
from backend_vendorrisk.scoring.classifier import RiskTier
from backend_vendorrisk.scoring.models import Response, ScoreStatus


def _strong_responses():
    return [
        Response("q-mfa", choice="Yes"),
        Response("q-encryption", choice="N/A"),
        Response("q-ir-plan", choice="Documented only"),
        Response("q-notes", text="Hosted in eu-west-1"),
    ]


def test_score_tier_and_coverage(template):
    """(5 + 1) / (5 + 2) = 85.7 -> 86, low; N/A-only GDPR is omitted."""
    result = score_assessment(template, _strong_responses())
    assert result.score == 86
    assert result.tier == RiskTier.LOW
    assert result.compliance_coverage == {"SOC2": 100, "ISO27001": 100}


def test_unanswered_required_propagates(template):
    """Missing required upload is counted as a gap but stays out of the score."""
    result = score_assessment(template, _strong_responses())
    assert result.unanswered_required == ("q-soc-report",)
    assert result.unanswered_required_count == 1
    assert result.outcome_for("q-soc-report").status == ScoreStatus.UNSCORABLE


def test_na_question_same_score_as_removed(template):
    """An N/A answer scores exactly as if the question were not in the catalog."""
    with_na = score_assessment(template, _strong_responses())
    without = score_assessment(
        [q for q in template if q.question_id != "q-encryption"],
        [r for r in _strong_responses() if r.question_id != "q-encryption"],
    )
    assert with_na.score == without.score


def test_weak_responses(template):
    """3 / 10 = 30 -> critical; failing frameworks report their real coverage."""
    responses = [
        Response("q-mfa", choice="No"),
        Response("q-encryption", choice="Yes"),
        Response("q-ir-plan", choice="None"),
        Response("q-soc-report", file_ref="uploads/soc2.pdf"),
    ]
    result = score_assessment(template, responses)
    assert result.score == 30
    assert result.tier == RiskTier.CRITICAL
    assert result.compliance_coverage == {"SOC2": 38, "ISO27001": 0, "GDPR": 100}
    assert result.unanswered_required == ()


def test_required_blank_counts_as_failure(template):
    """Blank required MFA question contributes 0 with its full weight: 5 / 10 = 50."""
    responses = [
        Response("q-encryption", choice="Yes"),
        Response("q-ir-plan", choice="Tested annually"),
    ]
    result = score_assessment(template, responses)
    assert result.score == 50
    assert result.tier == RiskTier.HIGH
    assert set(result.unanswered_required) == {"q-mfa", "q-soc-report"}


def test_unknown_and_duplicate_responses(template):
    """Responses to unknown questions are ignored; the last duplicate wins."""
    responses = [
        Response("q-mfa", choice="No"),
        Response("q-mfa", choice="Yes"),
        Response("q-retired", choice="No"),
    ]
    result = score_assessment(template, responses)
    assert result.outcome_for("q-mfa").contribution == 5.0
    assert result.outcome_for("q-retired") is None


def test_nothing_applicable_has_no_score(template):
    only_text = [q for q in template if q.question_id == "q-notes"]
    result = score_assessment(only_text, [Response("q-notes", text="n/a")])
    assert result.score is None
    assert result.tier is None
    assert result.to_dict()["tier"] is None


def test_deterministic(template):
    first = score_assessment(template, _strong_responses())
    second = score_assessment(template, _strong_responses())
    assert first == second
