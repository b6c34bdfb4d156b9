from importlib.metadata import version, PackageNotFoundError
__all__ = ["allocation","health_score","deep_score","ignite","projections","insights","leads","models","utils"]
try:
    __version__ = version("finhealth")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Re-export the scoring entry points so callers can do: from finhealth import calculate_wealth_score
from .allocation import calculate_allocation, calculate_equity_percent
from .health_score import calculate_financial_health_score
from .deep_score import calculate_wealth_score
from .ignite import calculate_ignite_metrics, calculate_teaser_score
from .projections import simulate_salary_increments
__all__ += [
    "calculate_allocation",
    "calculate_equity_percent",
    "calculate_financial_health_score",
    "calculate_wealth_score",
    "calculate_ignite_metrics",
    "calculate_teaser_score",
    "simulate_salary_increments",
]
