from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .utils.env_tools import _truthy
from .utils.parsing import parse_numeric_or_zero

__all__ = [
    "MarketBehavior",
    "LoanType",
    "InsuranceStatus",
    "JobStability",
    "RiskProfile",
    "HousingStatus",
    "PrimaryGoal",
    "AssetAllocation",
    "PillarBreakdown",
    "ScoreResult",
    "WealthPillarScores",
    "WealthScoreResult",
    "DeepFormData",
    "Stage1Answers",
    "Stage2Data",
    "IgniteUserData",
    "IgniteMetrics",
    "TeaserScore",
    "SalarySimulationPoint",
]


# ============================================================================
# Categorical answers
# ============================================================================
# Enum values are the exact option labels shown to the user. from_label() is
# the one place free text is classified; scorers only ever see members.


class MarketBehavior(str, Enum):
    PANIC = "Panic and sell"
    NERVOUS_HOLD = "Feel nervous but hold"
    BUYING_OPPORTUNITY = "See it as buying opportunity"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: Any, default: Optional["MarketBehavior"] = None) -> "MarketBehavior":
        """
        Classify a reaction-to-a-20%-drop answer.

        Substring rules, checked in order: "Panic" -> PANIC,
        "buying opportunity" -> BUYING_OPPORTUNITY, "nervous"/"hold" -> NERVOUS_HOLD.
        Missing text returns `default` (NERVOUS_HOLD if not given); text matching
        nothing returns OTHER.
        """
        if isinstance(label, cls):
            return label
        if label is None or str(label) == "":
            return default if default is not None else cls.NERVOUS_HOLD
        text = str(label)
        if "Panic" in text:
            return cls.PANIC
        if "buying opportunity" in text:
            return cls.BUYING_OPPORTUNITY
        if "nervous" in text or "hold" in text:
            return cls.NERVOUS_HOLD
        return cls.OTHER


class LoanType(str, Enum):
    NONE = "No loans"
    HOME_ONLY = "Home loan only"
    CAR_OR_PERSONAL = "Car/Personal loan"
    MULTIPLE = "Multiple loans"

    @classmethod
    def from_label(cls, label: Any) -> "LoanType":
        """Missing -> NONE; unrecognised text -> MULTIPLE (lowest debt tier)."""
        if isinstance(label, cls):
            return label
        if label is None or str(label) == "":
            return cls.NONE
        try:
            return cls(str(label))
        except ValueError:
            return cls.MULTIPLE


class InsuranceStatus(str, Enum):
    BOTH = "Both health and term"
    ONLY_ONE = "Only one"
    NONE = "None"

    @classmethod
    def from_label(cls, label: Any) -> "InsuranceStatus":
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label))
        except ValueError:
            return cls.NONE


class JobStability(str, Enum):
    VERY_STABLE = "Very Stable"
    STABLE = "Stable"
    MODERATE = "Moderate"
    UNCERTAIN = "Uncertain"

    @classmethod
    def from_label(cls, label: Any) -> "JobStability":
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label))
        except ValueError:
            return cls.MODERATE


class RiskProfile(str, Enum):
    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"

    @classmethod
    def from_label(cls, label: Any) -> "RiskProfile":
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label))
        except ValueError:
            return cls.MODERATE


class HousingStatus(str, Enum):
    OWN = "Own"
    RENT = "Rent"

    @classmethod
    def from_label(cls, label: Any) -> "HousingStatus":
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label))
        except ValueError:
            return cls.RENT


class PrimaryGoal(str, Enum):
    RETIREMENT = "Retirement"
    BUY_HOME = "Buy a home"
    KIDS_EDUCATION = "Kids education"
    FINANCIAL_FREEDOM = "Financial freedom"
    GETTING_STARTED = "Just getting started"


# ============================================================================
# Basic quiz
# ============================================================================

@dataclass(frozen=True)
class AssetAllocation:
    """Equity/debt/gold split in whole percent; the three always sum to 100."""
    equity: int
    debt: int
    gold: int


@dataclass(frozen=True)
class PillarBreakdown:
    savings_rate: int       # max 25
    emergency_fund: int     # max 25
    risk_alignment: int     # max 20
    debt_health: int        # max 15
    insurance: int          # max 15

    def total(self) -> int:
        return (self.savings_rate + self.emergency_fund + self.risk_alignment
                + self.debt_health + self.insurance)


@dataclass(frozen=True)
class ScoreResult:
    score: int
    equity: int
    debt: int
    gold: int
    emergency_required: float
    pillar_breakdown: PillarBreakdown
    action_items: Tuple[str, ...]


# ============================================================================
# Deep assessment
# ============================================================================

@dataclass(frozen=True)
class WealthPillarScores:
    savings_rate: int               # max 25
    emergency_fund: int             # max 15
    allocation_suitability: int     # max 20
    protection: int                 # max 15
    diversification: int            # max 15
    stability: int                  # max 10

    def total(self) -> int:
        return (self.savings_rate + self.emergency_fund + self.allocation_suitability
                + self.protection + self.diversification + self.stability)


@dataclass(frozen=True)
class WealthScoreResult:
    total_score: int
    savings_rate_pct: float         # fraction, e.g. 0.32
    net_worth: float
    current_equity_pct: float
    ideal_equity_pct: float
    allocation_gap: float           # + over-allocated, - under-allocated
    has_protection_gap: bool
    life_cover_ratio: float
    pillar_scores: WealthPillarScores
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class DeepFormData:
    """
    The 5-step deep assessment form exactly as the UI holds it.

    Numeric fields are free text (default ""); calculate_wealth_score parses
    them permissively, so "", "abc" and None all count as 0.
    """
    # Step 1: income
    age: Any = ""
    monthly_income: Any = ""
    has_secondary_income: bool = False
    secondary_income: Any = ""
    job_stability: JobStability = JobStability.MODERATE
    dependents_count: Any = ""
    # Step 2: expenses
    monthly_expenses: Any = ""
    emi_amount: Any = ""
    housing_status: HousingStatus = HousingStatus.RENT
    # Step 3: assets
    equity_assets: Any = ""
    fixed_income: Any = ""
    epf_ppf_nps: Any = ""
    gold_assets: Any = ""
    real_estate_total: Any = ""
    primary_residence_value: Any = ""
    cash_assets: Any = ""
    # Step 4: protection
    life_coverage_amount: Any = ""
    health_coverage_amount: Any = ""
    emergency_fund_months: Any = ""
    # Step 5: goals
    retirement_age: Any = ""
    primary_goal: str = ""
    risk_comfort: RiskProfile = RiskProfile.MODERATE

    def __post_init__(self):
        # frozen dataclass workaround: normalise categorical fields given as text
        object.__setattr__(self, "job_stability", JobStability.from_label(self.job_stability))
        object.__setattr__(self, "housing_status", HousingStatus.from_label(self.housing_status))
        object.__setattr__(self, "risk_comfort", RiskProfile.from_label(self.risk_comfort))
        object.__setattr__(self, "has_secondary_income", _truthy(self.has_secondary_income))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DeepFormData":
        """Accept snake_case or the UI's camelCase keys; unknown keys are ignored."""
        return cls(**_pick_fields(cls, raw))


# ============================================================================
# Ignite (two-stage) dashboard
# ============================================================================

@dataclass(frozen=True)
class Stage1Answers:
    """Bucket labels from the 8-question quiz, reused as Ignite stage 1."""
    age: str = ""
    monthly_income: str = ""
    monthly_expenses: str = ""
    total_savings: str = ""
    loans: str = ""
    insurance: str = ""
    market_behavior: str = ""
    primary_goal: str = ""

    @classmethod
    def from_quiz_answers(cls, answers: Mapping[int, str]) -> "Stage1Answers":
        """Map quiz answers keyed by question id (1..8) onto named fields."""
        answers = answers or {}
        return cls(
            age=answers.get(1, ""),
            monthly_income=answers.get(2, ""),
            monthly_expenses=answers.get(3, ""),
            total_savings=answers.get(4, ""),
            loans=answers.get(5, ""),
            insurance=answers.get(6, ""),
            market_behavior=answers.get(7, ""),
            primary_goal=answers.get(8, ""),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Stage1Answers":
        """Accept snake_case or the UI's camelCase keys (monthlyIncome, totalSavings, ...)."""
        return cls(**{k: str(v) for k, v in _pick_fields(cls, raw).items() if v is not None})


MAX_TOP_GOALS = 3


@dataclass(frozen=True)
class Stage2Data:
    """Detailed financial snapshot. All amounts are already-parsed rupee figures."""
    # Income
    exact_monthly_income: float = 0.0
    has_secondary_income: bool = False
    secondary_income_amount: float = 0.0
    job_stability: JobStability = JobStability.MODERATE
    dependents: float = 0.0
    # Assets
    equity_mf: float = 0.0
    fixed_income: float = 0.0
    epf_ppf_nps: float = 0.0
    gold_assets: float = 0.0
    real_estate: float = 0.0
    cash_savings: float = 0.0
    has_rsu: bool = False
    rsu_value: float = 0.0
    # Liabilities (outstanding, EMI)
    home_loan_outstanding: float = 0.0
    home_loan_emi: float = 0.0
    car_loan_outstanding: float = 0.0
    car_loan_emi: float = 0.0
    personal_loan_outstanding: float = 0.0
    personal_loan_emi: float = 0.0
    credit_card_debt: float = 0.0
    other_emis: float = 0.0
    # Protection
    term_life_cover: float = 0.0
    health_cover: float = 0.0
    emergency_fund_months: float = 0.0
    # Goals
    retirement_age: float = 0.0     # 0 means "not given" (engine uses 60)
    risk_profile: RiskProfile = RiskProfile.MODERATE
    top_goals: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "job_stability", JobStability.from_label(self.job_stability))
        object.__setattr__(self, "risk_profile", RiskProfile.from_label(self.risk_profile))
        goals = self.top_goals or ()
        if isinstance(goals, str):
            goals = (goals,)
        object.__setattr__(self, "top_goals", tuple(goals)[:MAX_TOP_GOALS])
        # form flags arrive as "true"/"false"/"on" as often as real bools
        for flag in ("has_secondary_income", "has_rsu"):
            object.__setattr__(self, flag, _truthy(getattr(self, flag)))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Stage2Data":
        """
        Build from raw form values (snake_case or camelCase keys).

        Numeric fields go through parse_numeric_or_zero, so a half-filled form
        never raises.
        """
        picked = _pick_fields(cls, raw)
        for f in fields(cls):
            if f.name in picked and f.type in ("float", float):
                picked[f.name] = parse_numeric_or_zero(picked[f.name])
        return cls(**picked)


@dataclass(frozen=True)
class IgniteUserData:
    """Both stages of the Ignite questionnaire; stage 2 may be entirely defaulted."""
    stage1: Stage1Answers = Stage1Answers()
    stage2: Stage2Data = Stage2Data()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "IgniteUserData":
        raw = raw or {}
        return cls(
            stage1=Stage1Answers.from_dict(raw.get("stage1") or {}),
            stage2=Stage2Data.from_dict(raw.get("stage2") or {}),
        )


@dataclass(frozen=True)
class IgniteMetrics:
    wealth_score: int
    # Net worth
    total_assets: float
    total_liabilities: float
    net_worth: float
    liquid_net_worth: float
    # Cash flow
    total_monthly_income: float
    total_monthly_expenses: float
    total_emis: float
    monthly_surplus: float
    savings_rate: float             # fraction
    # Retirement
    current_age: float
    retirement_age: float
    years_to_retirement: float
    projected_corpus_at_retirement: float
    required_corpus_at_retirement: float
    retirement_gap: float
    retirement_readiness_percent: float
    # Allocation
    current_equity_percent: float
    ideal_equity_percent: float
    equity_alignment_gap: float
    real_estate_concentration: float
    # Protection
    ideal_life_cover: float
    current_life_cover: float
    life_cover_gap: float
    ideal_health_cover: float
    current_health_cover: float
    health_cover_gap: float
    emergency_months: float
    ideal_emergency_months: int
    risk_profile: RiskProfile
    # Flags
    has_personal_loan: bool
    has_rsu: bool
    high_real_estate_concentration: bool


@dataclass(frozen=True)
class TeaserScore:
    estimated_score: int
    estimated_net_worth: float
    savings_rate: float
    retirement_readiness: float


@dataclass(frozen=True)
class SalarySimulationPoint:
    year: int
    age: int
    salary: float       # annual
    savings: float      # annual
    corpus: int         # recorded before this year's growth


# ============================================================================
# helpers
# ============================================================================

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


# UI keys whose camelCase spelling does not follow the snake_case field name
_KEY_ALIASES: Dict[str, str] = {
    "equityMF": "equity_mf",
    "homeLoanEMI": "home_loan_emi",
    "carLoanEMI": "car_loan_emi",
    "personalLoanEMI": "personal_loan_emi",
    "otherEMIs": "other_emis",
    "hasRSU": "has_rsu",
    "dependentsCount": "dependents",
}


def _pick_fields(cls, raw: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    by_camel = {_camel(n): n for n in names}
    out: Dict[str, Any] = {}
    for key, value in (raw or {}).items():
        if key in names:
            out[key] = value
        elif key in by_camel:
            out[by_camel[key]] = value
        elif key in _KEY_ALIASES and _KEY_ALIASES[key] in names:
            out[_KEY_ALIASES[key]] = value
    return out
