"""
Ignite dashboard engine.

Stage 1 gives coarse quiz buckets; stage 2 gives exact figures. Before any
scoring runs, resolve_effective_inputs() merges the two into one record:
exact stage-2 figures win wherever they are present and nonzero, bucket
midpoints fill the rest. The metrics have the same shape either way.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import math

from .assumptions import DEFAULT_ASSUMPTIONS, Assumptions
from .models import (
    IgniteMetrics,
    IgniteUserData,
    InsuranceStatus,
    MarketBehavior,
    RiskProfile,
    Stage1Answers,
    Stage2Data,
    TeaserScore,
)
from .projections import calculate_required_corpus, calculate_retirement_corpus
from .utils.parsing import clamp, round_half_up

_log = logging.getLogger(__name__)

__all__ = [
    "AGE_MIDPOINTS",
    "INCOME_MIDPOINTS",
    "EXPENSE_MIDPOINTS",
    "SAVINGS_MIDPOINTS",
    "EffectiveInputs",
    "resolve_effective_inputs",
    "calculate_ideal_equity_percent",
    "WealthScoreInputs",
    "calculate_composite_wealth_score",
    "calculate_ignite_metrics",
    "calculate_teaser_score",
    "income_bracket",
    "investable_bracket",
]


# ============================================================================
# Bucket tables (separate from the basic quiz tables; the values differ)
# ============================================================================

AGE_MIDPOINTS: Mapping[str, float] = {
    "Under 25": 23,
    "25-30": 27,
    "30-35": 32,
    "35-40": 37,
    "40-45": 42,
    "45+": 50,
}

INCOME_MIDPOINTS: Mapping[str, float] = {
    "Under ₹50,000": 40_000,
    "₹50,000-1,00,000": 75_000,
    "₹1,00,000-2,00,000": 150_000,
    "Above ₹2,00,000": 300_000,
}

EXPENSE_MIDPOINTS: Mapping[str, float] = {
    "Under ₹30,000": 25_000,
    "₹30,000-60,000": 45_000,
    "₹60,000-1,00,000": 80_000,
    "Above ₹1,00,000": 130_000,
}

SAVINGS_MIDPOINTS: Mapping[str, float] = {
    "Under ₹5 lakhs": 300_000,
    "₹5-10 lakhs": 750_000,
    "₹10-25 lakhs": 1_750_000,
    "₹25-50 lakhs": 3_750_000,
    "Above ₹50 lakhs": 7_500_000,
}

DEFAULT_AGE = 30
DEFAULT_INCOME = 75_000
DEFAULT_EXPENSES = 45_000
DEFAULT_SAVINGS = 500_000

IDEAL_EQUITY_MIN = 30
IDEAL_EQUITY_MAX = 80
RISK_ADJUSTMENT: Mapping[RiskProfile, int] = {
    RiskProfile.CONSERVATIVE: -10,
    RiskProfile.MODERATE: 0,
    RiskProfile.AGGRESSIVE: 10,
}

HIGH_REAL_ESTATE_CONCENTRATION = 50


# ============================================================================
# Effective inputs
# ============================================================================

@dataclass(frozen=True)
class EffectiveInputs:
    """Stage 1 estimates merged with stage 2 figures; the only input to scoring."""
    current_age: float
    monthly_income: float
    secondary_income: float
    estimated_expenses: float
    estimated_savings: float
    reported_assets: float          # stage-2 asset total, 0 when not filled in
    liquid_assets: float            # stage-2 assets excluding real estate
    equity_assets: float            # equity MF + RSUs
    real_estate: float
    total_liabilities: float
    total_emis: float
    retirement_age: float
    risk_profile: RiskProfile

    @property
    def total_monthly_income(self) -> float:
        return self.monthly_income + self.secondary_income

    @property
    def has_detailed_assets(self) -> bool:
        return self.reported_assets > 0

    @property
    def effective_assets(self) -> float:
        return self.reported_assets if self.has_detailed_assets else self.estimated_savings

    @property
    def effective_liquid_assets(self) -> float:
        return self.liquid_assets if self.has_detailed_assets else self.estimated_savings


def resolve_effective_inputs(
    stage1: Stage1Answers,
    stage2: Optional[Stage2Data] = None,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> EffectiveInputs:
    """
    Merge quiz buckets with the detailed form.

    Precedence: exact monthly income, asset totals and retirement age from
    stage 2 when nonzero; otherwise bucket midpoints (income, savings) and the
    default retirement age. Age and expenses always come from stage 1.
    """
    s2 = stage2 or Stage2Data()
    rsu = s2.rsu_value if s2.has_rsu else 0.0

    liquid = s2.equity_mf + s2.fixed_income + s2.epf_ppf_nps + s2.gold_assets + s2.cash_savings + rsu
    return EffectiveInputs(
        current_age=AGE_MIDPOINTS.get(stage1.age, DEFAULT_AGE),
        monthly_income=s2.exact_monthly_income or INCOME_MIDPOINTS.get(stage1.monthly_income, DEFAULT_INCOME),
        secondary_income=s2.secondary_income_amount if s2.has_secondary_income else 0.0,
        estimated_expenses=EXPENSE_MIDPOINTS.get(stage1.monthly_expenses, DEFAULT_EXPENSES),
        estimated_savings=SAVINGS_MIDPOINTS.get(stage1.total_savings, DEFAULT_SAVINGS),
        reported_assets=liquid + s2.real_estate,
        liquid_assets=liquid,
        equity_assets=s2.equity_mf + rsu,
        real_estate=s2.real_estate,
        total_liabilities=(s2.home_loan_outstanding + s2.car_loan_outstanding
                           + s2.personal_loan_outstanding + s2.credit_card_debt),
        total_emis=s2.home_loan_emi + s2.car_loan_emi + s2.personal_loan_emi + s2.other_emis,
        retirement_age=s2.retirement_age or assumptions.default_retirement_age,
        risk_profile=s2.risk_profile or RiskProfile.MODERATE,
    )


def calculate_ideal_equity_percent(age: float, risk_profile: RiskProfile = RiskProfile.MODERATE) -> float:
    """100 - age, -10 conservative / +10 aggressive, clamped to [30, 80]."""
    adj = RISK_ADJUSTMENT.get(RiskProfile.from_label(risk_profile), 0)
    return clamp(100 - age + adj, IDEAL_EQUITY_MIN, IDEAL_EQUITY_MAX)


# ============================================================================
# Composite wealth score
# ============================================================================

@dataclass(frozen=True)
class WealthScoreInputs:
    savings_rate: float
    emergency_months: float
    ideal_emergency_months: float
    current_equity_percent: float
    ideal_equity_percent: float
    life_cover_gap: float
    health_cover_gap: float
    real_estate_concentration: float
    retirement_readiness_percent: float


def calculate_composite_wealth_score(inputs: WealthScoreInputs) -> int:
    """
    Seven fixed-tier components summed and clamped to [0, 100].

    Max points: savings rate 25, emergency fund 15, allocation gap 20,
    life cover gap 12, health cover gap 8, real estate concentration 10,
    retirement readiness 10. Insurance tiers are absolute rupee gaps.
    """
    score = 0

    # Savings rate (25)
    sr = inputs.savings_rate
    if sr >= 0.4:
        score += 25
    elif sr >= 0.3:
        score += 22
    elif sr >= 0.2:
        score += 18
    elif sr >= 0.1:
        score += 12
    elif sr >= 0.05:
        score += 8
    elif sr > 0:
        score += 4

    # Emergency fund (15)
    ratio = inputs.emergency_months / inputs.ideal_emergency_months if inputs.ideal_emergency_months > 0 else 0
    if ratio >= 1:
        score += 15
    elif ratio >= 0.75:
        score += 12
    elif ratio >= 0.5:
        score += 8
    elif ratio >= 0.25:
        score += 4
    else:
        score += 2

    # Asset allocation (20)
    gap = abs(inputs.current_equity_percent - inputs.ideal_equity_percent)
    if gap <= 5:
        score += 20
    elif gap <= 10:
        score += 16
    elif gap <= 20:
        score += 12
    elif gap <= 30:
        score += 8
    else:
        score += 4

    # Life insurance (12)
    if inputs.life_cover_gap <= 0:
        score += 12
    elif inputs.life_cover_gap <= 2_000_000:
        score += 9
    elif inputs.life_cover_gap <= 5_000_000:
        score += 6
    else:
        score += 2

    # Health insurance (8)
    if inputs.health_cover_gap <= 0:
        score += 8
    elif inputs.health_cover_gap <= 500_000:
        score += 6
    else:
        score += 2

    # Real estate concentration (10)
    rec = inputs.real_estate_concentration
    if rec <= 30:
        score += 10
    elif rec <= 50:
        score += 7
    elif rec <= 70:
        score += 4
    else:
        score += 2

    # Retirement readiness (10)
    rr = inputs.retirement_readiness_percent
    if rr >= 100:
        score += 10
    elif rr >= 80:
        score += 8
    elif rr >= 60:
        score += 6
    elif rr >= 40:
        score += 4
    else:
        score += 2

    return round_half_up(clamp(score, 0, 100))


# ============================================================================
# Full metrics
# ============================================================================

def calculate_ignite_metrics(
    data: IgniteUserData,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> IgniteMetrics:
    """Every dashboard figure for one user, from whatever data is available."""
    s2 = data.stage2 or Stage2Data()
    eff = resolve_effective_inputs(data.stage1, s2, assumptions)

    total_income = eff.total_monthly_income
    assets = eff.effective_assets
    net_worth = assets - eff.total_liabilities
    liquid_net_worth = eff.effective_liquid_assets - eff.total_liabilities

    total_expenses = eff.estimated_expenses + eff.total_emis
    surplus = total_income - total_expenses
    savings_rate = surplus / total_income if total_income > 0 else 0.0

    # Retirement
    years_to_retirement = max(0, eff.retirement_age - eff.current_age)
    ideal_equity = calculate_ideal_equity_percent(eff.current_age, eff.risk_profile)
    projected = calculate_retirement_corpus(
        assets, max(0.0, surplus), years_to_retirement, ideal_equity, assumptions)
    required = calculate_required_corpus(
        total_expenses, eff.current_age, eff.retirement_age, assumptions)
    readiness = min(100.0, projected / required * 100) if required > 0 else 0.0

    # Allocation
    current_equity = eff.equity_assets / assets * 100 if assets > 0 else 0.0
    real_estate_concentration = eff.real_estate / assets * 100 if assets > 0 else 0.0

    # Protection
    ideal_life_cover = total_income * 12 * assumptions.ideal_life_cover_multiple
    life_cover_gap = max(0.0, ideal_life_cover - s2.term_life_cover)
    ideal_health_cover = assumptions.ideal_health_cover
    health_cover_gap = max(0.0, ideal_health_cover - s2.health_cover)

    emergency_months = s2.emergency_fund_months
    if not emergency_months and s2.cash_savings > 0 and total_expenses > 0:
        emergency_months = math.floor(s2.cash_savings / total_expenses)

    wealth_score = calculate_composite_wealth_score(WealthScoreInputs(
        savings_rate=savings_rate,
        emergency_months=emergency_months,
        ideal_emergency_months=assumptions.ideal_emergency_months,
        current_equity_percent=current_equity,
        ideal_equity_percent=ideal_equity,
        life_cover_gap=life_cover_gap,
        health_cover_gap=health_cover_gap,
        real_estate_concentration=real_estate_concentration,
        retirement_readiness_percent=readiness,
    ))

    _log.debug(
        "ignite score=%s detailed=%s net_worth=%.0f readiness=%.1f",
        wealth_score, eff.has_detailed_assets, net_worth, readiness,
    )

    return IgniteMetrics(
        wealth_score=wealth_score,
        total_assets=assets,
        total_liabilities=eff.total_liabilities,
        net_worth=net_worth,
        liquid_net_worth=liquid_net_worth,
        total_monthly_income=total_income,
        total_monthly_expenses=total_expenses,
        total_emis=eff.total_emis,
        monthly_surplus=surplus,
        savings_rate=savings_rate,
        current_age=eff.current_age,
        retirement_age=eff.retirement_age,
        years_to_retirement=years_to_retirement,
        projected_corpus_at_retirement=projected,
        required_corpus_at_retirement=required,
        retirement_gap=required - projected,
        retirement_readiness_percent=readiness,
        current_equity_percent=current_equity,
        ideal_equity_percent=ideal_equity,
        equity_alignment_gap=current_equity - ideal_equity,
        real_estate_concentration=real_estate_concentration,
        ideal_life_cover=ideal_life_cover,
        current_life_cover=s2.term_life_cover,
        life_cover_gap=life_cover_gap,
        ideal_health_cover=ideal_health_cover,
        current_health_cover=s2.health_cover,
        health_cover_gap=health_cover_gap,
        emergency_months=emergency_months,
        ideal_emergency_months=assumptions.ideal_emergency_months,
        risk_profile=eff.risk_profile,
        has_personal_loan=s2.personal_loan_outstanding > 0,
        has_rsu=s2.has_rsu,
        high_real_estate_concentration=real_estate_concentration > HIGH_REAL_ESTATE_CONCENTRATION,
    )


# ============================================================================
# Teaser (stage 1 only)
# ============================================================================
# Deliberately coarser than calculate_composite_wealth_score: different tiers
# and weights, a flat 10% growth rate and a 25x expenses target.

TEASER_GROWTH_RATE = 0.10
TEASER_RETIREMENT_AGE = 60
TEASER_CORPUS_MULTIPLE = 25


def calculate_teaser_score(stage1: Stage1Answers) -> TeaserScore:
    """Preview score from quiz buckets alone, shown before the detailed form."""
    income = INCOME_MIDPOINTS.get(stage1.monthly_income, DEFAULT_INCOME)
    expenses = EXPENSE_MIDPOINTS.get(stage1.monthly_expenses, DEFAULT_EXPENSES)
    savings = SAVINGS_MIDPOINTS.get(stage1.total_savings, DEFAULT_SAVINGS)
    age = AGE_MIDPOINTS.get(stage1.age, DEFAULT_AGE)

    savings_rate = (income - expenses) / income if income > 0 else 0.0

    years = TEASER_RETIREMENT_AGE - age
    projected = savings * (1 + TEASER_GROWTH_RATE) ** years
    required = expenses * 12 * TEASER_CORPUS_MULTIPLE
    readiness = min(100.0, projected / required * 100) if required > 0 else 0.0

    score = 0
    if savings_rate >= 0.3:
        score += 30
    elif savings_rate >= 0.2:
        score += 22
    elif savings_rate >= 0.1:
        score += 14
    else:
        score += 6

    if savings >= 2_500_000:
        score += 25
    elif savings >= 1_000_000:
        score += 18
    elif savings >= 500_000:
        score += 12
    else:
        score += 6

    if readiness >= 60:
        score += 20
    elif readiness >= 40:
        score += 14
    elif readiness >= 20:
        score += 8
    else:
        score += 4

    # exact labels only; anything else adds nothing
    if stage1.insurance == InsuranceStatus.BOTH.value:
        score += 15
    elif stage1.insurance == InsuranceStatus.ONLY_ONE.value:
        score += 8

    if stage1.market_behavior == MarketBehavior.BUYING_OPPORTUNITY.value:
        score += 10
    elif stage1.market_behavior == MarketBehavior.NERVOUS_HOLD.value:
        score += 6

    return TeaserScore(
        estimated_score=round_half_up(clamp(score, 0, 100)),
        estimated_net_worth=savings,
        savings_rate=savings_rate,
        retirement_readiness=readiness,
    )


# ============================================================================
# Bracket labels (lead segmentation)
# ============================================================================

def income_bracket(monthly_income: float) -> str:
    if monthly_income < 50_000:
        return "Below 50K"
    if monthly_income < 100_000:
        return "50K-1L"
    if monthly_income < 200_000:
        return "1L-2L"
    if monthly_income < 500_000:
        return "2L-5L"
    return "5L+"


def investable_bracket(liquid_net_worth: float) -> str:
    if liquid_net_worth < 500_000:
        return "Below 5L"
    if liquid_net_worth < 1_000_000:
        return "5L-10L"
    if liquid_net_worth < 2_500_000:
        return "10L-25L"
    if liquid_net_worth < 5_000_000:
        return "25L-50L"
    if liquid_net_worth < 10_000_000:
        return "50L-1Cr"
    return "1Cr+"
