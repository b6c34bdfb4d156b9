"""Deep wealth score (0-100) from the 5-step assessment form."""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Mapping, Tuple
import logging

from .models import DeepFormData, JobStability, WealthPillarScores, WealthScoreResult
from .utils.parsing import parse_numeric_or_zero, round_half_up

_log = logging.getLogger(__name__)

__all__ = ["DeepInputs", "parse_deep_form", "calculate_wealth_score", "WEALTH_PILLAR_MAX"]

WEALTH_PILLAR_MAX: Mapping[str, int] = {
    "savings_rate": 25,
    "emergency_fund": 15,
    "allocation_suitability": 20,
    "protection": 15,
    "diversification": 15,
    "stability": 10,
}

MAX_IDEAL_EQUITY = 75
MIN_HEALTH_COVER = 500_000
TARGET_LIFE_COVER_MULTIPLE = 10

STABILITY_POINTS: Mapping[JobStability, int] = {
    JobStability.VERY_STABLE: 5,
    JobStability.STABLE: 4,
    JobStability.MODERATE: 2,
    JobStability.UNCERTAIN: 0,
}


@dataclass(frozen=True)
class DeepInputs:
    """DeepFormData after permissive parsing; every figure is a float."""
    age: float
    primary_income: float
    monthly_income: float           # primary + secondary (if flagged)
    monthly_expenses: float
    emi: float
    dependents: float
    equity: float
    fixed_income: float
    epf_ppf_nps: float
    gold: float
    real_estate_total: float
    primary_residence: float
    cash: float
    life_coverage: float
    health_coverage: float
    emergency_months: float
    job_stability: JobStability

    @property
    def annual_income(self) -> float:
        return self.monthly_income * 12

    @property
    def real_estate_non_primary(self) -> float:
        return max(0.0, self.real_estate_total - self.primary_residence)

    @property
    def net_worth(self) -> float:
        # primary residence counts toward net worth
        return (self.equity + self.fixed_income + self.epf_ppf_nps + self.gold
                + self.real_estate_total + self.cash)

    @property
    def investable_base(self) -> float:
        # ...but not toward the base used for allocation checks
        return (self.equity + self.fixed_income + self.epf_ppf_nps + self.gold
                + self.real_estate_non_primary + self.cash)


def parse_deep_form(data: DeepFormData) -> DeepInputs:
    n = parse_numeric_or_zero
    primary = n(data.monthly_income)
    secondary = n(data.secondary_income) if data.has_secondary_income else 0.0
    return DeepInputs(
        age=n(data.age),
        primary_income=primary,
        monthly_income=primary + secondary,
        monthly_expenses=n(data.monthly_expenses),
        emi=n(data.emi_amount),
        dependents=n(data.dependents_count),
        equity=n(data.equity_assets),
        fixed_income=n(data.fixed_income),
        epf_ppf_nps=n(data.epf_ppf_nps),
        gold=n(data.gold_assets),
        real_estate_total=n(data.real_estate_total),
        primary_residence=n(data.primary_residence_value),
        cash=n(data.cash_assets),
        life_coverage=n(data.life_coverage_amount),
        health_coverage=n(data.health_coverage_amount),
        emergency_months=n(data.emergency_fund_months),
        job_stability=JobStability.from_label(data.job_stability),
    )


# ─── Pillar scorers ──────────────────────────────────────────────────────────

def score_savings_rate(income: float, expenses: float, emi: float) -> int:
    """Max 25."""
    if income <= 0:
        return 0
    rate = (income - expenses - emi) / income
    if rate >= 0.35:
        return 25
    if rate >= 0.20:
        return 18
    if rate >= 0.10:
        return 10
    return 5


def score_emergency_fund(months: float) -> int:
    """Max 15."""
    if months >= 6:
        return 15
    if months >= 4:
        return 12
    if months >= 2:
        return 7
    return 3


def ideal_equity_pct(age: float) -> float:
    return min(100 - age, MAX_IDEAL_EQUITY)


def score_allocation_suitability(age: float, current_equity_pct: float) -> int:
    """Max 20."""
    gap = abs(current_equity_pct - ideal_equity_pct(age))
    if gap <= 10:
        return 20
    if gap <= 20:
        return 12
    return 5


def score_protection(life_coverage: float, annual_income: float, health_coverage: float) -> int:
    """Max 15. Life cover as a multiple of income, minus 5 for thin health cover."""
    ratio = life_coverage / annual_income if annual_income > 0 else 0
    if ratio >= 10:
        score = 15
    elif ratio >= 5:
        score = 10
    else:
        score = 5
    if health_coverage < MIN_HEALTH_COVER:
        score -= 5
    return max(0, score)


def score_diversification(
    real_estate_non_primary: float,
    gold: float,
    equity: float,
    investable_base: float,
    age: float,
) -> int:
    """Max 15; concentration penalties only apply when there is a base to measure."""
    score = 15
    if investable_base > 0:
        if real_estate_non_primary / investable_base > 0.60:
            score -= 5
        if gold / investable_base > 0.20:
            score -= 3
        if age < 40 and equity / investable_base < 0.30:
            score -= 5
    return max(0, min(15, score))


def score_stability(job_stability: JobStability, emi_ratio: float, dependents: float) -> int:
    """Max 10: job (0-5) + EMI load (0-3) + dependents (0-2)."""
    score = STABILITY_POINTS.get(job_stability, 2)
    if emi_ratio < 0.20:
        score += 3
    elif emi_ratio < 0.35:
        score += 2
    elif emi_ratio < 0.50:
        score += 1
    if dependents == 0:
        score += 2
    elif dependents <= 2:
        score += 1
    return min(10, score)


# ─── Recommendations ─────────────────────────────────────────────────────────

def get_recommendations(
    inputs: DeepInputs,
    pillars: WealthPillarScores,
    savings_rate_pct: float,
    allocation_gap: float,
    n: int = 3,
) -> Tuple[str, ...]:
    """
    Messages for the `n` lowest raw pillar scores (stable sort, declaration order on ties).

    Several pillars pick between message variants; the EMI-burden check uses
    primary income only.
    """
    if savings_rate_pct < 0.15:
        savings_msg = "Improve savings discipline — automate a SIP to reach a 20%+ savings rate consistently."
    else:
        savings_msg = ("Fine-tune your savings rate — even a 5% increase compounded over 10 years "
                       "creates significant wealth.")

    if inputs.emergency_months < 3:
        emergency_msg = "Build an emergency reserve immediately — target 6 months of expenses in a liquid fund."
    else:
        emergency_msg = "Strengthen your emergency buffer to 6 full months before increasing investment exposure."

    if allocation_gap < -10:
        allocation_msg = ("Increase equity exposure gradually — your allocation is below ideal "
                          "for your age and horizon.")
    elif allocation_gap > 10:
        allocation_msg = "Rebalance toward debt or gold — your equity concentration is above your ideal range."
    else:
        allocation_msg = "Maintain annual portfolio rebalancing to stay within your target allocation band."

    if inputs.primary_income > 0 and inputs.emi / inputs.primary_income > 0.40:
        diversification_msg = ("High EMI burden detected — prioritise prepaying high-interest debt "
                               "to free up monthly cash flow.")
    else:
        diversification_msg = "Reduce asset concentration — spread investments across equity, debt, and gold for resilience."

    candidates: List[Tuple[int, str]] = [
        (pillars.savings_rate, savings_msg),
        (pillars.emergency_fund, emergency_msg),
        (pillars.allocation_suitability, allocation_msg),
        (pillars.protection,
         "Close your protection gap — secure term life cover at 10× income and health insurance above ₹10 Lakhs."),
        (pillars.diversification, diversification_msg),
        (pillars.stability,
         "Build income stability — develop a secondary income stream or upskill to reduce career risk."),
    ]
    ranked = sorted(candidates, key=lambda c: c[0])
    return tuple(msg for _, msg in ranked[:n])


# ─── Main entry point ────────────────────────────────────────────────────────

def calculate_wealth_score(data: DeepFormData) -> WealthScoreResult:
    """
    Score the deep assessment form.

    All numeric fields are parsed permissively first, so an empty form
    produces a low but well-defined score instead of an error.
    """
    inp = parse_deep_form(data)

    investable = inp.investable_base
    current_equity = (inp.equity / investable) * 100 if investable > 0 else 0.0
    ideal_equity = ideal_equity_pct(inp.age)
    allocation_gap = current_equity - ideal_equity

    income = inp.monthly_income
    savings_rate_pct = (income - inp.monthly_expenses - inp.emi) / income if income > 0 else 0.0
    emi_ratio = inp.emi / income if income > 0 else 0.0

    annual_income = inp.annual_income
    life_cover_ratio = inp.life_coverage / annual_income if annual_income > 0 else 0.0
    has_protection_gap = life_cover_ratio < TARGET_LIFE_COVER_MULTIPLE or inp.health_coverage < MIN_HEALTH_COVER

    pillars = WealthPillarScores(
        savings_rate=score_savings_rate(income, inp.monthly_expenses, inp.emi),
        emergency_fund=score_emergency_fund(inp.emergency_months),
        allocation_suitability=score_allocation_suitability(inp.age, current_equity),
        protection=score_protection(inp.life_coverage, annual_income, inp.health_coverage),
        diversification=score_diversification(
            inp.real_estate_non_primary, inp.gold, inp.equity, investable, inp.age),
        stability=score_stability(inp.job_stability, emi_ratio, inp.dependents),
    )
    total = round_half_up(pillars.total())

    _log.debug("wealth score=%s pillars=%s gap=%.1f", total, pillars, allocation_gap)

    return WealthScoreResult(
        total_score=total,
        savings_rate_pct=savings_rate_pct,
        net_worth=inp.net_worth,
        current_equity_pct=current_equity,
        ideal_equity_pct=ideal_equity,
        allocation_gap=allocation_gap,
        has_protection_gap=has_protection_gap,
        life_cover_ratio=life_cover_ratio,
        pillar_scores=pillars,
        recommendations=get_recommendations(inp, pillars, savings_rate_pct, allocation_gap),
    )
