# finhealth/assumptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

# Growth assumptions
EQUITY_RETURN = 0.12
DEBT_RETURN = 0.07
INFLATION = 0.06
RETIREMENT_WITHDRAWAL_RATE = 0.04
DEFAULT_RETIREMENT_AGE = 60

# Protection targets
IDEAL_LIFE_COVER_MULTIPLE = 12  # x annual income
IDEAL_HEALTH_COVER = 1_500_000
IDEAL_EMERGENCY_MONTHS = 6

# FIRE preview
FIRE_MULTIPLE = 25
FIRE_GROWTH_RATE = 0.10
OPTIMISED_UPLIFT = 1.35


@dataclass(frozen=True)
class Assumptions:
    """Market and planning assumptions shared by the Ignite engine and simulators."""
    equity_return: float = EQUITY_RETURN
    debt_return: float = DEBT_RETURN
    inflation: float = INFLATION
    withdrawal_rate: float = RETIREMENT_WITHDRAWAL_RATE
    default_retirement_age: int = DEFAULT_RETIREMENT_AGE
    ideal_life_cover_multiple: float = IDEAL_LIFE_COVER_MULTIPLE
    ideal_health_cover: float = IDEAL_HEALTH_COVER
    ideal_emergency_months: int = IDEAL_EMERGENCY_MONTHS
    fire_multiple: float = FIRE_MULTIPLE
    fire_growth_rate: float = FIRE_GROWTH_RATE
    optimised_uplift: float = OPTIMISED_UPLIFT

    def __post_init__(self):
        if self.withdrawal_rate <= 0:
            raise ValueError(f"withdrawal_rate must be positive, got {self.withdrawal_rate}")
        if self.ideal_emergency_months <= 0:
            raise ValueError(f"ideal_emergency_months must be positive, got {self.ideal_emergency_months}")

    def blended_return(self, equity_percent: float) -> float:
        """Annual return of an equity/debt mix; equity_percent is 0..100."""
        equity_alloc = equity_percent / 100
        return equity_alloc * self.equity_return + (1 - equity_alloc) * self.debt_return


DEFAULT_ASSUMPTIONS = Assumptions()


def assumptions_from_config(cfg: Dict[str, Any]) -> Assumptions:
    """Build Assumptions from a dict shaped like config/config.yaml (see utils.load_config)."""
    proj = cfg.get("projections", {}) or {}
    prot = cfg.get("protection", {}) or {}
    fire = cfg.get("fire", {}) or {}
    return Assumptions(
        equity_return=float(proj.get("equity_return", EQUITY_RETURN)),
        debt_return=float(proj.get("debt_return", DEBT_RETURN)),
        inflation=float(proj.get("inflation", INFLATION)),
        withdrawal_rate=float(proj.get("withdrawal_rate", RETIREMENT_WITHDRAWAL_RATE)),
        default_retirement_age=int(proj.get("default_retirement_age", DEFAULT_RETIREMENT_AGE)),
        ideal_life_cover_multiple=float(prot.get("ideal_life_cover_multiple", IDEAL_LIFE_COVER_MULTIPLE)),
        ideal_health_cover=float(prot.get("ideal_health_cover", IDEAL_HEALTH_COVER)),
        ideal_emergency_months=int(prot.get("ideal_emergency_months", IDEAL_EMERGENCY_MONTHS)),
        fire_multiple=float(fire.get("multiple", FIRE_MULTIPLE)),
        fire_growth_rate=float(fire.get("growth_rate", FIRE_GROWTH_RATE)),
        optimised_uplift=float(fire.get("optimised_uplift", OPTIMISED_UPLIFT)),
    )
