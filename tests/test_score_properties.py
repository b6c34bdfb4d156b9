"""Properties that hold across the input space, not just at pinned scenarios."""
from __future__ import annotations

import dataclasses
import itertools
import random

import pytest

from finhealth import deep_score, health_score
from finhealth.deep_score import WEALTH_PILLAR_MAX, calculate_wealth_score
from finhealth.health_score import (
    EXPENSE_MIDPOINTS,
    INCOME_MIDPOINTS,
    PILLAR_MAX,
    SAVINGS_MIDPOINTS,
    calculate_financial_health_score,
)
from finhealth.ignite import (
    WealthScoreInputs,
    calculate_composite_wealth_score,
    calculate_ignite_metrics,
    calculate_teaser_score,
)
from finhealth.models import (
    DeepFormData,
    IgniteUserData,
    InsuranceStatus,
    LoanType,
    MarketBehavior,
    Stage1Answers,
    Stage2Data,
)
from finhealth.projections import simulate_salary_increments


def _random_amount(rng: random.Random) -> str:
    return rng.choice(["", "abc", "0", "-25000", str(rng.randint(0, 500_000)),
                       f"₹{rng.randint(0, 50_000_000):,}"])


def _random_deep_form(rng: random.Random) -> DeepFormData:
    return DeepFormData(
        age=str(rng.randint(18, 80)),
        monthly_income=_random_amount(rng),
        has_secondary_income=rng.random() < 0.5,
        secondary_income=_random_amount(rng),
        job_stability=rng.choice(["Very Stable", "Stable", "Moderate", "Uncertain", "??"]),
        dependents_count=str(rng.randint(-1, 6)),
        monthly_expenses=_random_amount(rng),
        emi_amount=_random_amount(rng),
        equity_assets=_random_amount(rng),
        fixed_income=_random_amount(rng),
        epf_ppf_nps=_random_amount(rng),
        gold_assets=_random_amount(rng),
        real_estate_total=_random_amount(rng),
        primary_residence_value=_random_amount(rng),
        cash_assets=_random_amount(rng),
        life_coverage_amount=_random_amount(rng),
        health_coverage_amount=_random_amount(rng),
        emergency_fund_months=str(rng.randint(-2, 24)),
    )


# ============================================================================
# Bounds
# ============================================================================

def test_basic_score_and_pillars_stay_in_bounds():
    loans = [t.value for t in LoanType] + ["", "Student loan"]
    insurance = [s.value for s in InsuranceStatus] + [""]
    behaviors = [MarketBehavior.PANIC.value, MarketBehavior.NERVOUS_HOLD.value,
                 MarketBehavior.BUYING_OPPORTUNITY.value, "", "no idea"]
    for inc, exp, sav, loan, ins, beh in itertools.product(
            INCOME_MIDPOINTS, EXPENSE_MIDPOINTS, SAVINGS_MIDPOINTS, loans, insurance, behaviors):
        r = calculate_financial_health_score({1: "35-40", 2: inc, 3: exp, 4: sav, 5: loan, 6: ins, 7: beh})
        assert 0 <= r.score <= 100
        for name, value in dataclasses.asdict(r.pillar_breakdown).items():
            assert 0 <= value <= PILLAR_MAX[name]
        assert r.equity + r.debt + r.gold == 100


@pytest.mark.parametrize("seed", range(20))
def test_deep_score_and_pillars_stay_in_bounds(seed):
    rng = random.Random(seed)
    for _ in range(25):
        r = calculate_wealth_score(_random_deep_form(rng))
        assert 0 <= r.total_score <= 100
        for name, value in dataclasses.asdict(r.pillar_scores).items():
            assert 0 <= value <= WEALTH_PILLAR_MAX[name]
        assert len(r.recommendations) == 3


# ============================================================================
# Monotonicity in savings rate
# ============================================================================

def test_basic_savings_pillar_never_drops_as_expenses_fall():
    scores = [health_score.score_savings_rate(100_000, e) for e in range(150_000, -1, -5_000)]
    assert scores == sorted(scores)

    by_bucket = [
        calculate_financial_health_score({2: "₹1,00,000-2,00,000", 3: label}).pillar_breakdown.savings_rate
        for label in reversed(list(EXPENSE_MIDPOINTS))
    ]
    assert by_bucket == sorted(by_bucket)


@pytest.mark.parametrize("emi", [0, 10_000, 40_000])
def test_deep_savings_pillar_never_drops_as_expenses_fall(emi):
    scores = [deep_score.score_savings_rate(100_000, e, emi) for e in range(150_000, -1, -5_000)]
    assert scores == sorted(scores)


def test_ignite_score_never_drops_as_savings_rate_rises():
    def score(rate: float) -> int:
        return calculate_composite_wealth_score(
            WealthScoreInputs(rate, 3, 6, 50, 60, 1_000_000, 0, 40, 70))

    scores = [score(r / 100) for r in range(-20, 61)]
    assert scores == sorted(scores)


# ============================================================================
# Idempotence
# ============================================================================

def test_scorers_are_pure():
    answers = {1: "30-35", 2: "₹50,000-1,00,000", 3: "₹30,000-60,000", 4: "₹10-25 lakhs",
               5: "Home loan only", 6: "Only one", 7: "Panic and sell"}
    assert calculate_financial_health_score(answers) == calculate_financial_health_score(dict(answers))

    form = _random_deep_form(random.Random(7))
    assert calculate_wealth_score(form) == calculate_wealth_score(form)

    data = IgniteUserData(
        stage1=Stage1Answers.from_quiz_answers(answers),
        stage2=Stage2Data(exact_monthly_income=90_000, equity_mf=400_000, cash_savings=150_000),
    )
    assert calculate_ignite_metrics(data) == calculate_ignite_metrics(data)
    assert calculate_teaser_score(data.stage1) == calculate_teaser_score(data.stage1)


# ============================================================================
# Simulator
# ============================================================================

def test_simulator_runs_to_sixty_by_default():
    points = simulate_salary_increments(30, 100_000, 0, 0.2, 0.05, 50)
    assert len(points) == 31
    assert [p.age for p in points] == list(range(30, 61))
    corpus = [p.corpus for p in points]
    assert corpus == sorted(corpus)
