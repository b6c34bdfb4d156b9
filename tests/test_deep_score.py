from __future__ import annotations

import pytest

from finhealth.deep_score import (
    calculate_wealth_score,
    get_recommendations,
    parse_deep_form,
    score_diversification,
    score_protection,
    score_stability,
)
from finhealth.models import DeepFormData, JobStability, WealthPillarScores


def _strong_form() -> DeepFormData:
    return DeepFormData(
        age="30",
        monthly_income="2,00,000",
        job_stability="Very Stable",
        dependents_count="1",
        monthly_expenses="80000",
        emi_amount="20000",
        equity_assets="3500000",
        fixed_income="500000",
        epf_ppf_nps="500000",
        gold_assets="300000",
        real_estate_total="5000000",
        primary_residence_value="5000000",
        cash_assets="200000",
        life_coverage_amount="30000000",
        health_coverage_amount="1000000",
        emergency_fund_months="8",
    )


def test_empty_form_scores_thirty():
    r = calculate_wealth_score(DeepFormData())
    p = r.pillar_scores
    assert (p.savings_rate, p.emergency_fund, p.allocation_suitability,
            p.protection, p.diversification, p.stability) == (0, 3, 5, 0, 15, 7)
    assert r.total_score == 30
    assert r.net_worth == 0
    assert r.has_protection_gap is True
    assert r.recommendations[0].startswith("Improve savings discipline")
    assert r.recommendations[1].startswith("Close your protection gap")
    assert r.recommendations[2].startswith("Build an emergency reserve immediately")


def test_garbage_text_counts_as_zero():
    r = calculate_wealth_score(DeepFormData(age="abc", monthly_income=None, cash_assets="n/a"))
    assert r.total_score == 30


def test_strong_profile():
    r = calculate_wealth_score(_strong_form())
    p = r.pillar_scores
    assert (p.savings_rate, p.emergency_fund, p.allocation_suitability,
            p.protection, p.diversification, p.stability) == (25, 15, 20, 15, 15, 9)
    assert r.total_score == 99
    assert r.savings_rate_pct == pytest.approx(0.5)
    # primary residence counts toward net worth but not toward the equity base
    assert r.net_worth == pytest.approx(10_000_000)
    assert r.current_equity_pct == pytest.approx(70.0)
    assert r.ideal_equity_pct == 70
    assert r.life_cover_ratio == pytest.approx(12.5)
    assert r.has_protection_gap is False
    assert r.recommendations[0].startswith("Build income stability")
    assert r.recommendations[1].startswith("Strengthen your emergency buffer")
    assert r.recommendations[2].startswith("Close your protection gap")


def test_secondary_income_only_counts_when_flagged():
    base = dict(monthly_income="100000", secondary_income="50000")
    assert parse_deep_form(DeepFormData(**base)).monthly_income == 100_000
    assert parse_deep_form(DeepFormData(has_secondary_income=True, **base)).monthly_income == 150_000


def test_emi_burden_message_uses_primary_income():
    inputs = parse_deep_form(DeepFormData(
        monthly_income="50000",
        has_secondary_income=True,
        secondary_income="100000",
        emi_amount="25000",
        emergency_fund_months="6",
    ))
    pillars = WealthPillarScores(25, 15, 20, 15, 0, 10)
    recs = get_recommendations(inputs, pillars, savings_rate_pct=0.3, allocation_gap=0)
    assert recs[0].startswith("High EMI burden detected")


@pytest.mark.parametrize(
    "gap, prefix",
    [(-20, "Increase equity exposure"), (20, "Rebalance toward debt"), (5, "Maintain annual portfolio")],
)
def test_allocation_message_follows_gap_direction(gap, prefix):
    inputs = parse_deep_form(DeepFormData(emergency_fund_months="6"))
    pillars = WealthPillarScores(25, 15, 0, 15, 15, 10)
    assert get_recommendations(inputs, pillars, 0.3, gap)[0].startswith(prefix)


def test_diversification_penalties():
    assert score_diversification(7, 0, 1, 10, age=30) == 5
    assert score_diversification(7, 0, 1, 10, age=45) == 10
    assert score_diversification(0, 2.5, 5, 10, age=45) == 12
    assert score_diversification(0, 0, 0, 0, age=25) == 15


def test_protection_and_stability_floors():
    assert score_protection(0, 0, 0) == 0
    assert score_protection(1_200_000, 1_200_000, 100_000) == 0
    assert score_protection(12_000_000, 1_200_000, 600_000) == 15
    assert score_stability(JobStability.UNCERTAIN, 0.6, 5) == 0
    assert score_stability(JobStability.VERY_STABLE, 0.0, 0) == 10
