from __future__ import annotations

import pytest

from finhealth.allocation import calculate_allocation, calculate_equity_percent
from finhealth.models import MarketBehavior


@pytest.mark.parametrize(
    "age, behavior, equity",
    [
        (27, MarketBehavior.BUYING_OPPORTUNITY, 75),   # 83 capped
        (22, MarketBehavior.PANIC, 63),
        (50, MarketBehavior.NERVOUS_HOLD, 50),
        (70, MarketBehavior.PANIC, 35),                # 15 floored
        (32, "I'd probably do nothing", 68),           # unrecognised text: no adjustment
    ],
)
def test_equity_percent(age, behavior, equity):
    assert calculate_equity_percent(age, behavior) == equity


def test_allocation_debt_takes_remainder():
    a = calculate_allocation(27, "See it as buying opportunity")
    assert (a.equity, a.debt, a.gold) == (75, 15, 10)


def test_allocation_always_sums_to_100():
    for age in range(18, 90, 3):
        for behavior in MarketBehavior:
            a = calculate_allocation(age, behavior)
            assert a.equity + a.debt + a.gold == 100
            assert 35 <= a.equity <= 75
            assert a.gold == 10
