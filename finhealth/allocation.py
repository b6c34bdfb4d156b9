"""Age- and behaviour-driven equity/debt/gold split for the basic quiz."""
from __future__ import annotations
from typing import Any

from .models import AssetAllocation, MarketBehavior
from .utils.parsing import clamp

EQUITY_MIN = 35
EQUITY_MAX = 75
GOLD_FIXED = 10
PANIC_ADJUSTMENT = -15
OPPORTUNITY_ADJUSTMENT = 10


def calculate_equity_percent(age: float, behavior: Any) -> int:
    """
    Equity % = 100 - age, -15 for panic sellers, +10 for dip buyers, clamped to [35, 75].

    Age is not validated; callers pass a bucket midpoint. `behavior` may be a
    MarketBehavior or the raw answer text.
    """
    b = MarketBehavior.from_label(behavior)
    equity = 100 - age
    if b is MarketBehavior.PANIC:
        equity += PANIC_ADJUSTMENT
    elif b is MarketBehavior.BUYING_OPPORTUNITY:
        equity += OPPORTUNITY_ADJUSTMENT
    return int(clamp(equity, EQUITY_MIN, EQUITY_MAX))


def calculate_allocation(age: float, behavior: Any) -> AssetAllocation:
    """Gold is fixed at 10%; debt takes whatever equity and gold leave."""
    equity = calculate_equity_percent(age, behavior)
    gold = GOLD_FIXED
    return AssetAllocation(equity=equity, debt=100 - equity - gold, gold=gold)


__all__ = ["calculate_equity_percent", "calculate_allocation", "EQUITY_MIN", "EQUITY_MAX", "GOLD_FIXED"]
