"""Retirement corpus projections and the salary-increment simulator."""

from __future__ import annotations
from typing import List, Sequence

import numpy as np
import pandas as pd

from .assumptions import DEFAULT_ASSUMPTIONS, Assumptions
from .models import SalarySimulationPoint
from .utils.parsing import round_half_up


def blended_return(equity_percent: float, assumptions: Assumptions = DEFAULT_ASSUMPTIONS) -> float:
    """equity% * 12% + (1 - equity%) * 7% with the default assumptions."""
    return assumptions.blended_return(equity_percent)


def calculate_retirement_corpus(
    current_savings: float,
    monthly_sip: float,
    years_to_retirement: float,
    equity_percent: float,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    """Projected corpus: current savings compounded annually plus FV of a monthly SIP.

    The SIP leg is an annuity-due: FV = P * ((1+r)^n - 1) / r * (1+r), r = annual/12.
    """
    annual = assumptions.blended_return(equity_percent)
    fv_savings = current_savings * (1 + annual) ** years_to_retirement

    monthly_rate = annual / 12
    months = years_to_retirement * 12
    if monthly_rate == 0:
        fv_sip = monthly_sip * months
    else:
        fv_sip = monthly_sip * (((1 + monthly_rate) ** months - 1) / monthly_rate) * (1 + monthly_rate)
    return fv_savings + fv_sip


def calculate_required_corpus(
    current_monthly_expenses: float,
    current_age: float,
    retirement_age: float,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    """Annual expenses inflated to retirement, divided by the safe withdrawal rate."""
    years = retirement_age - current_age
    expenses_at_retirement = current_monthly_expenses * 12 * (1 + assumptions.inflation) ** years
    return expenses_at_retirement / assumptions.withdrawal_rate


def corpus_growth_path(
    current_savings: float,
    monthly_sip: float,
    years_to_retirement: int,
    equity_percent: float,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> pd.Series:
    """Projected corpus at each whole year 0..years, indexed by year (for charts)."""
    years = np.arange(0, max(0, int(years_to_retirement)) + 1)
    values = [
        calculate_retirement_corpus(current_savings, monthly_sip, int(y), equity_percent, assumptions)
        for y in years
    ]
    return pd.Series(values, index=pd.Index(years, name="year"), name="corpus", dtype=float)


def simulate_salary_increments(
    current_age: int,
    current_monthly_salary: float,
    current_corpus: float,
    savings_rate: float,
    annual_increment_rate: float,
    equity_percent: float,
    target_age: int = 60,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> List[SalarySimulationPoint]:
    """
    One point per age from current_age to target_age inclusive.

    Each year records the corpus *before* growth, then grows it:
        corpus <- (corpus + annual_savings) * (1 + blended_return)
        salary <- salary * (1 + annual_increment_rate)
    so the first point is today's corpus and the last is the corpus entering target_age.
    Rates are fractions (0.08 = 8%). Returns [] when target_age < current_age.
    """
    rate = assumptions.blended_return(equity_percent)
    salary = current_monthly_salary * 12
    corpus = current_corpus

    points: List[SalarySimulationPoint] = []
    for age in range(int(current_age), int(target_age) + 1):
        annual_savings = salary * savings_rate
        points.append(SalarySimulationPoint(
            year=age - int(current_age),
            age=age,
            salary=salary,
            savings=annual_savings,
            corpus=round_half_up(corpus),
        ))
        corpus = (corpus + annual_savings) * (1 + rate)
        salary = salary * (1 + annual_increment_rate)
    return points


def simulation_frame(points: Sequence[SalarySimulationPoint]) -> pd.DataFrame:
    """Simulator output as a DataFrame with columns year, age, salary, savings, corpus."""
    cols = ["year", "age", "salary", "savings", "corpus"]
    if not points:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame(
        [[p.year, p.age, p.salary, p.savings, p.corpus] for p in points],
        columns=cols,
    )


__all__ = [
    "blended_return",
    "calculate_retirement_corpus",
    "calculate_required_corpus",
    "corpus_growth_path",
    "simulate_salary_increments",
    "simulation_frame",
]
