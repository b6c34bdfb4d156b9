"""
Lead payloads for an external lead-capture sink.

The scorers never depend on this module. Payload builders pick a flat,
JSON-safe subset of a result; dispatch_lead hands it to whatever sink the
caller provides and reports, but never raises, a delivery failure.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple
import logging

from .ignite import income_bracket, investable_bracket
from .models import IgniteMetrics, ScoreResult, WealthScoreResult
from .utils.env_tools import env_flag
from .utils.parsing import round_half_up

_log = logging.getLogger(__name__)

LeadSink = Callable[[Dict[str, Any]], Any]

__all__ = [
    "LeadContact",
    "BehavioralState",
    "LeadSink",
    "build_basic_lead",
    "build_deep_lead",
    "build_ignite_lead",
    "dispatch_lead",
]


@dataclass(frozen=True)
class LeadContact:
    name: str
    email: str
    phone: Optional[str] = None

    def as_fields(self) -> Dict[str, Any]:
        phone = (self.phone or "").strip()
        return {"name": self.name.strip(), "email": self.email.strip(), "phone": phone or None}


@dataclass(frozen=True)
class BehavioralState:
    """What the user did on the dashboard before asking for a call."""
    simulator_interacted: bool = False
    scenario_cards_used: Tuple[str, ...] = ()


def build_basic_lead(contact: LeadContact, result: ScoreResult, interested: bool = False) -> Dict[str, Any]:
    return {
        **contact.as_fields(),
        "score": result.score,
        "equity_percent": result.equity,
        "debt_percent": result.debt,
        "gold_percent": result.gold,
        "emergency_required": result.emergency_required,
        "interested": interested,
    }


def build_deep_lead(contact: LeadContact, result: WealthScoreResult) -> Dict[str, Any]:
    return {
        **contact.as_fields(),
        "wealth_score": result.total_score,
        "savings_rate": round_half_up(result.savings_rate_pct * 100),
        "net_worth": round_half_up(result.net_worth),
        "allocation_gap": round_half_up(result.allocation_gap),
    }


def build_ignite_lead(
    contact: LeadContact,
    metrics: IgniteMetrics,
    behavior: BehavioralState = BehavioralState(),
    primary_goal: Optional[str] = None,
) -> Dict[str, Any]:
    """Dashboard lead; primary_goal falls back to the risk profile label when not given."""
    risk = metrics.risk_profile.value
    return {
        **contact.as_fields(),
        "wealth_score": metrics.wealth_score,
        "net_worth": round_half_up(metrics.net_worth),
        "liquid_net_worth": round_half_up(metrics.liquid_net_worth),
        "retirement_gap": round_half_up(metrics.retirement_gap),
        "savings_rate": round_half_up(metrics.savings_rate * 100),
        "life_cover_gap": round_half_up(metrics.life_cover_gap),
        "health_cover_gap": round_half_up(metrics.health_cover_gap),
        "equity_alignment": round_half_up(metrics.equity_alignment_gap),
        "emergency_months": metrics.emergency_months,
        "primary_goal": primary_goal or risk,
        "risk_profile": risk,
        "investable_bracket": investable_bracket(metrics.liquid_net_worth),
        "income_bracket": income_bracket(metrics.total_monthly_income),
        "has_rsu": metrics.has_rsu,
        "has_personal_loan": metrics.has_personal_loan,
        "real_estate_concentration": round_half_up(metrics.real_estate_concentration),
        "simulator_interacted": behavior.simulator_interacted,
        "scenario_cards_used": len(behavior.scenario_cards_used),
        "interested_1to1": True,
    }


def dispatch_lead(sink: Optional[LeadSink], payload: Dict[str, Any]) -> bool:
    """
    Fire-and-forget delivery. Returns True when the sink accepted the payload.

    A missing sink, FINHEALTH_LEADS_DRY_RUN=1, or any exception from the sink
    returns False; the failure is logged, not raised.
    """
    if sink is None:
        _log.info("no lead sink configured; dropping lead for %s", payload.get("email"))
        return False
    if env_flag("FINHEALTH_LEADS_DRY_RUN", False):
        _log.info("[dry-run] lead for %s: %s", payload.get("email"), sorted(payload))
        return False
    try:
        sink(payload)
    except Exception as e:
        _log.warning("lead capture failed for %s: %s", payload.get("email"), e)
        return False
    return True
