from __future__ import annotations

from finhealth.health_score import (
    PILLAR_MAX,
    QUIZ_QUESTIONS,
    calculate_financial_health_score,
    score_debt_health,
)
from finhealth.models import LoanType


STRONG = {
    1: "25-30",
    2: "₹50,000-1,00,000",
    3: "₹30,000-60,000",
    4: "₹5-10 lakhs",
    5: "No loans",
    6: "Both health and term",
    7: "See it as buying opportunity",
    8: "Retirement",
}


def test_question_bank_has_eight_questions():
    assert [q.id for q in QUIZ_QUESTIONS] == list(range(1, 9))
    assert QUIZ_QUESTIONS[4].options == ("No loans", "Home loan only", "Car/Personal loan", "Multiple loans")
    assert sum(PILLAR_MAX.values()) == 100


def test_strong_profile_scores_full_marks():
    r = calculate_financial_health_score(STRONG)
    assert r.score == 100
    assert (r.equity, r.debt, r.gold) == (75, 15, 10)
    assert r.emergency_required == 270_000
    assert r.pillar_breakdown.total() == r.score


def test_ties_keep_pillar_order_in_action_items():
    r = calculate_financial_health_score(STRONG)
    assert len(r.action_items) == 3
    assert r.action_items[0].startswith("Increase your savings rate")
    assert r.action_items[1] == (
        "Build a ₹2.7 Lakhs emergency buffer in a liquid fund or high-yield savings account."
    )
    assert r.action_items[2].startswith("Build investing confidence")


def test_empty_answers_use_defaults():
    r = calculate_financial_health_score({})
    b = r.pillar_breakdown
    # income 75k, expenses 45k, savings 2.5L, no loans, no insurance, nervous hold
    assert (b.savings_rate, b.emergency_fund, b.risk_alignment, b.debt_health, b.insurance) == (25, 15, 12, 15, 0)
    assert r.score == 67
    assert (r.equity, r.debt, r.gold) == (70, 20, 10)
    assert r.action_items[0].startswith("Get term life + health insurance")
    assert r.action_items[1].startswith("Build a")
    assert r.action_items[2].startswith("Build investing confidence")


def test_weak_profile():
    r = calculate_financial_health_score({
        1: "45+",
        2: "Under ₹50,000",
        3: "Above ₹1,00,000",
        4: "Under ₹5 lakhs",
        5: "Multiple loans",
        6: "Only one",
        7: "Panic and sell",
    })
    b = r.pillar_breakdown
    assert (b.savings_rate, b.emergency_fund, b.risk_alignment, b.debt_health, b.insurance) == (0, 8, 5, 4, 8)
    assert r.score == 25
    assert (r.equity, r.debt) == (35, 55)
    assert r.emergency_required == 750_000


def test_unknown_loan_label_scores_as_multiple():
    assert score_debt_health(LoanType.from_label("Student loan")) == 4
    assert score_debt_health(LoanType.from_label(None)) == 15
