"""
Basic financial health score (0-100) from the 8-question quiz.

Five pillars, each a step function over a ratio or a category:

    savings rate     max 25
    emergency fund   max 25
    risk alignment   max 20
    debt health      max 15
    insurance        max 15

The total is the plain sum of the pillars. Action items are the fixed
messages for the three weakest pillars relative to their maxima.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Tuple
import logging

from .allocation import calculate_allocation
from .models import (
    InsuranceStatus,
    LoanType,
    MarketBehavior,
    PillarBreakdown,
    PrimaryGoal,
    ScoreResult,
)
from .utils.formatting import format_amount

_log = logging.getLogger(__name__)

__all__ = [
    "Question",
    "QUIZ_QUESTIONS",
    "AGE_MIDPOINTS",
    "INCOME_MIDPOINTS",
    "EXPENSE_MIDPOINTS",
    "SAVINGS_MIDPOINTS",
    "PILLAR_MAX",
    "calculate_financial_health_score",
]


# ============================================================================
# Question bank
# ============================================================================

@dataclass(frozen=True)
class Question:
    id: int
    text: str
    options: Tuple[str, ...]


QUIZ_QUESTIONS: Tuple[Question, ...] = (
    Question(1, "What is your age?",
             ("Under 25", "25-30", "30-35", "35-40", "40-45", "45+")),
    Question(2, "What is your monthly in-hand salary?",
             ("Under ₹50,000", "₹50,000-1,00,000", "₹1,00,000-2,00,000", "Above ₹2,00,000")),
    Question(3, "What are your average monthly expenses?",
             ("Under ₹30,000", "₹30,000-60,000", "₹60,000-1,00,000", "Above ₹1,00,000")),
    Question(4, "What is your total current savings (all investments + bank)?",
             ("Under ₹5 lakhs", "₹5-10 lakhs", "₹10-25 lakhs", "₹25-50 lakhs", "Above ₹50 lakhs")),
    Question(5, "Do you currently have any EMIs or loans?",
             tuple(t.value for t in LoanType)),
    Question(6, "Do you have health insurance and/or term life insurance?",
             tuple(s.value for s in InsuranceStatus)),
    Question(7, "If markets fall 20%, what would you do?",
             (MarketBehavior.PANIC.value, MarketBehavior.NERVOUS_HOLD.value,
              MarketBehavior.BUYING_OPPORTUNITY.value)),
    Question(8, "What is your primary financial goal right now?",
             tuple(g.value for g in PrimaryGoal)),
)


# ============================================================================
# Bucket label -> representative midpoint
# ============================================================================

AGE_MIDPOINTS: Mapping[str, float] = {
    "Under 25": 22,
    "25-30": 27,
    "30-35": 32,
    "35-40": 37,
    "40-45": 42,
    "45+": 50,
}

INCOME_MIDPOINTS: Mapping[str, float] = {
    "Under ₹50,000": 35_000,
    "₹50,000-1,00,000": 75_000,
    "₹1,00,000-2,00,000": 150_000,
    "Above ₹2,00,000": 250_000,
}

EXPENSE_MIDPOINTS: Mapping[str, float] = {
    "Under ₹30,000": 20_000,
    "₹30,000-60,000": 45_000,
    "₹60,000-1,00,000": 80_000,
    "Above ₹1,00,000": 125_000,
}

SAVINGS_MIDPOINTS: Mapping[str, float] = {
    "Under ₹5 lakhs": 250_000,
    "₹5-10 lakhs": 750_000,
    "₹10-25 lakhs": 1_750_000,
    "₹25-50 lakhs": 3_750_000,
    "Above ₹50 lakhs": 6_000_000,
}

DEFAULT_AGE = 30
DEFAULT_INCOME = 75_000
DEFAULT_EXPENSES = 45_000
DEFAULT_SAVINGS = 250_000

EMERGENCY_MONTHS_TARGET = 6

PILLAR_MAX: Mapping[str, int] = {
    "savings_rate": 25,
    "emergency_fund": 25,
    "risk_alignment": 20,
    "debt_health": 15,
    "insurance": 15,
}


# ============================================================================
# Pillar scorers
# ============================================================================

def score_savings_rate(income: float, expenses: float) -> int:
    if income <= 0:
        return 0
    rate = (income - expenses) / income
    if rate >= 0.40:
        return PILLAR_MAX["savings_rate"]
    if rate >= 0.25:
        return 18
    if rate >= 0.10:
        return 10
    if rate >= 0:
        return 5
    return 0


def score_emergency_fund(savings: float, expenses: float) -> int:
    """Liquid savings measured in months of expenses: 6x, 3x, 1x."""
    if expenses <= 0:
        return 2
    if savings >= 6 * expenses:
        return PILLAR_MAX["emergency_fund"]
    if savings >= 3 * expenses:
        return 15
    if savings >= expenses:
        return 8
    return 2


def score_risk_alignment(behavior: MarketBehavior) -> int:
    if behavior is MarketBehavior.BUYING_OPPORTUNITY:
        return PILLAR_MAX["risk_alignment"]
    if behavior is MarketBehavior.NERVOUS_HOLD:
        return 12
    return 5


def score_debt_health(loan_type: LoanType) -> int:
    return {
        LoanType.NONE: PILLAR_MAX["debt_health"],
        LoanType.HOME_ONLY: 12,
        LoanType.CAR_OR_PERSONAL: 8,
    }.get(loan_type, 4)


def score_insurance(insurance: InsuranceStatus) -> int:
    return {
        InsuranceStatus.BOTH: PILLAR_MAX["insurance"],
        InsuranceStatus.ONLY_ONE: 8,
    }.get(insurance, 0)


# ============================================================================
# Action items
# ============================================================================

def _action_messages(emergency_required: float) -> Mapping[str, str]:
    return {
        "savings_rate":
            "Increase your savings rate by 10% — automate a SIP to eliminate the temptation to spend.",
        "emergency_fund":
            f"Build a {format_amount(emergency_required)} emergency buffer in a liquid fund or high-yield savings account.",
        "risk_alignment":
            "Build investing confidence — start small SIPs so market dips feel like opportunities, not threats.",
        "debt_health":
            "Clear high-interest debt (personal/car loans) aggressively before increasing investments.",
        "insurance":
            "Get term life + health insurance immediately — these are your non-negotiable financial safety net.",
    }


def get_action_items(breakdown: PillarBreakdown, emergency_required: float, n: int = 3) -> Tuple[str, ...]:
    """
    Messages for the `n` weakest pillars by score/max, weakest first.

    sorted() is stable, so ties keep declaration order
    (savings_rate, emergency_fund, risk_alignment, debt_health, insurance).
    """
    messages = _action_messages(emergency_required)
    ranked = sorted(PILLAR_MAX, key=lambda k: getattr(breakdown, k) / PILLAR_MAX[k])
    return tuple(messages[k] for k in ranked[:n])


# ============================================================================
# Main entry point
# ============================================================================

def calculate_financial_health_score(answers: Mapping[int, str]) -> ScoreResult:
    """
    Score the basic quiz.

    `answers` maps question id (1..8) to the chosen option text. Missing or
    unrecognised buckets fall back to age 30, income 75,000, expenses 45,000,
    savings 2,50,000; missing categorical answers fall back to "No loans",
    "None" (insurance) and "Feel nervous but hold". Never raises.
    """
    answers = answers or {}
    age = AGE_MIDPOINTS.get(answers.get(1), DEFAULT_AGE)
    income = INCOME_MIDPOINTS.get(answers.get(2), DEFAULT_INCOME)
    expenses = EXPENSE_MIDPOINTS.get(answers.get(3), DEFAULT_EXPENSES)
    savings = SAVINGS_MIDPOINTS.get(answers.get(4), DEFAULT_SAVINGS)
    loan_type = LoanType.from_label(answers.get(5))
    insurance = InsuranceStatus.from_label(answers.get(6))
    behavior = MarketBehavior.from_label(answers.get(7))

    breakdown = PillarBreakdown(
        savings_rate=score_savings_rate(income, expenses),
        emergency_fund=score_emergency_fund(savings, expenses),
        risk_alignment=score_risk_alignment(behavior),
        debt_health=score_debt_health(loan_type),
        insurance=score_insurance(insurance),
    )
    score = breakdown.total()

    allocation = calculate_allocation(age, behavior)
    emergency_required = EMERGENCY_MONTHS_TARGET * expenses
    action_items = get_action_items(breakdown, emergency_required)

    _log.debug("health score=%s breakdown=%s allocation=%s", score, breakdown, allocation)

    return ScoreResult(
        score=score,
        equity=allocation.equity,
        debt=allocation.debt,
        gold=allocation.gold,
        emergency_required=emergency_required,
        pillar_breakdown=breakdown,
        action_items=action_items,
    )
