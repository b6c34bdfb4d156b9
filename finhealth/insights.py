"""
Dashboard insights derived from IgniteMetrics.

Nothing here rescores; every function is a small read-only view over a
metrics record (quick wins, milestones, FIRE progress, EMI load, liquidity).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import math

from .assumptions import DEFAULT_ASSUMPTIONS, Assumptions
from .models import IgniteMetrics
from .utils.formatting import format_inr
from .utils.parsing import round_half_up

__all__ = [
    "QuickWin",
    "Milestone",
    "FireProjection",
    "EmiLoad",
    "quick_wins",
    "milestones",
    "fire_projection",
    "emi_load",
    "liquidity_ratio",
    "wealth_mirror",
]

TARGET_SAVINGS_RATE = 0.25
REBALANCE_GAP = 15
ALIGNED_GAP = 10
HIGH_EMI_RATIO = 0.4
FIRE_NOT_REACHABLE_YEARS = 99


@dataclass(frozen=True)
class QuickWin:
    title: str
    description: str
    impact: str
    priority: str   # "high" | "medium" | "low"


@dataclass(frozen=True)
class Milestone:
    title: str
    achieved: bool
    value: str


@dataclass(frozen=True)
class FireProjection:
    fire_number: float
    progress_percent: float
    years_to_fire: int


@dataclass(frozen=True)
class EmiLoad:
    ratio: float
    is_high: bool


def quick_wins(m: IgniteMetrics) -> List[QuickWin]:
    """Personalised next steps in display order; never empty."""
    wins: List[QuickWin] = []

    if m.savings_rate < TARGET_SAVINGS_RATE:
        wins.append(QuickWin(
            "Boost Savings Rate",
            f"Increase monthly savings by {format_inr(m.total_monthly_income * 0.05)} (5%)",
            "+₹12L over 10 years",
            "high",
        ))
    if m.emergency_months < m.ideal_emergency_months:
        shortfall = m.total_monthly_expenses * (m.ideal_emergency_months - m.emergency_months)
        wins.append(QuickWin(
            "Build Emergency Fund",
            f"Add {format_inr(shortfall)} to liquid savings",
            "Financial security",
            "high",
        ))
    if m.life_cover_gap > 0:
        wins.append(QuickWin(
            "Get Term Insurance",
            f"Cover gap of {format_inr(m.life_cover_gap)}",
            "Family protection",
            "high",
        ))
    if m.has_personal_loan:
        wins.append(QuickWin(
            "Clear High-Interest Debt",
            "Pay off personal loans before investing",
            "Save 12-18% interest",
            "high",
        ))
    if abs(m.equity_alignment_gap) > REBALANCE_GAP:
        wins.append(QuickWin(
            "Rebalance Portfolio",
            "Reduce equity exposure to match risk profile" if m.equity_alignment_gap > 0
            else "Increase equity allocation for better returns",
            "Risk-adjusted returns",
            "medium",
        ))

    if not wins:
        wins.append(QuickWin(
            "Stay the Course",
            "You're doing great! Keep up your current habits.",
            "Compound growth",
            "low",
        ))
    return wins


def milestones(m: IgniteMetrics) -> List[Milestone]:
    emergency_done = m.emergency_months >= m.ideal_emergency_months
    insured = m.life_cover_gap <= 0 and m.health_cover_gap <= 0
    aligned = abs(m.equity_alignment_gap) <= ALIGNED_GAP
    return [
        Milestone(
            "Emergency Fund",
            emergency_done,
            "Complete" if emergency_done else f"{m.emergency_months:g}/{m.ideal_emergency_months} months",
        ),
        Milestone("Insurance Coverage", insured, "Adequate" if insured else "Gaps exist"),
        Milestone(
            "25% Savings Rate",
            m.savings_rate >= TARGET_SAVINGS_RATE,
            f"{round_half_up(m.savings_rate * 100)}%",
        ),
        Milestone("Portfolio Aligned", aligned, "Balanced" if aligned else "Needs rebalancing"),
    ]


def fire_projection(m: IgniteMetrics, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> FireProjection:
    """
    FIRE number = 25x annual expenses. Years to FIRE solves the monthly
    annuity equation at 10%/12 for the month the liquid corpus plus surplus
    reaches it; 99 when there is no positive surplus to get there.
    """
    fire_number = m.total_monthly_expenses * 12 * assumptions.fire_multiple
    progress = min(100.0, m.liquid_net_worth / fire_number * 100) if fire_number > 0 else 0.0

    years = FIRE_NOT_REACHABLE_YEARS
    r = assumptions.fire_growth_rate / 12
    if m.savings_rate > 0 and m.monthly_surplus > 0 and r > 0:
        numerator = fire_number * r + m.monthly_surplus
        denominator = m.liquid_net_worth * r + m.monthly_surplus
        if denominator > 0:
            months = math.log(numerator / denominator) / math.log(1 + r)
            years = max(0, math.ceil(months / 12))
    return FireProjection(fire_number=fire_number, progress_percent=progress, years_to_fire=years)


def emi_load(total_emis: float, total_monthly_income: float) -> EmiLoad:
    ratio = total_emis / total_monthly_income if total_monthly_income > 0 else 0.0
    return EmiLoad(ratio=ratio, is_high=ratio > HIGH_EMI_RATIO)


def liquidity_ratio(m: IgniteMetrics) -> int:
    """Liquid net worth as a whole percent of net worth; 0 when net worth <= 0."""
    if m.net_worth <= 0:
        return 0
    return round_half_up(m.liquid_net_worth / m.net_worth * 100)


def wealth_mirror(m: IgniteMetrics, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> Tuple[float, float]:
    """(current projected corpus, corpus on the optimised path)."""
    current = m.projected_corpus_at_retirement
    return current, current * assumptions.optimised_uplift
