"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from rto_engine.utils.money import to_cents


class Verdict(str, Enum):
    QUALIFIES = "qualifies"
    CONDITIONAL = "conditional"
    DOES_NOT_QUALIFY = "does_not_qualify"


class RiskTier(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    DECLINED = "declined"


class TrendDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    FLAT = "flat"


@dataclass(frozen=True)
class LoanTerms:
    """Rent-to-own contract terms for a single property"""

    property_price_cents: int
    down_payment_ratio: float
    term_months: int
    annual_rate_percent: float

    @property
    def financed_cents(self) -> int:
        return to_cents(self.property_price_cents * (1 - self.down_payment_ratio))

    @property
    def down_payment_cents(self) -> int:
        return self.property_price_cents - self.financed_cents


@dataclass(frozen=True)
class PaymentPeriod:
    """One month of the schedule, split into occupancy cost and ownership credit"""

    index: int
    total_payment_cents: int
    rent_cents: int
    equity_cents: int
    cumulative_equity_cents: int
    remaining_balance_cents: int


@dataclass(frozen=True)
class ScheduleSummary:
    """Headline figures for a rent-to-own contract"""

    property_price_cents: int
    down_payment_cents: int
    financed_cents: int
    monthly_payment_cents: int
    total_payments_cents: int
    total_rent_cents: int
    total_cost_cents: int
    term_months: int


@dataclass(frozen=True)
class AffordabilityProfile:
    """Household cash flow against a proposed monthly payment"""

    monthly_income_cents: int
    monthly_debt_cents: int
    proposed_payment_cents: int


@dataclass(frozen=True)
class AffordabilityResult:
    """Output of affordability evaluation"""

    ratio: float
    verdict: Verdict
    headroom_cents: int  # payment room left before the qualifying ratio


@dataclass(frozen=True)
class RiskInputs:
    affordability: AffordabilityResult
    credit_quality: float
    trend_volatility: float


@dataclass(frozen=True)
class RiskComponents:
    """Per-factor scores (0-100, higher is safer) feeding the composite"""

    affordability: float
    credit: float
    market_stability: float


@dataclass(frozen=True)
class RiskAssessment:
    """Output of risk scoring"""

    score: float
    tier: RiskTier
    recommended_down_payment_adjustment: float  # percentage points, advisory
    components: RiskComponents
    warnings: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PricePoint:
    timestamp: date
    price_cents: int


@dataclass(frozen=True)
class TrendSummary:
    """Direction, volatility and near-term projection for one market segment"""

    direction: TrendDirection
    volatility: float
    projected_price_cents: int
    slope_cents_per_period: float
    mean_price_cents: int
    points: int


@dataclass(frozen=True)
class Segment:
    """City / property-type market key, normalized for lookups"""

    city: str
    property_type: str

    @classmethod
    def of(cls, city: str, property_type: str) -> "Segment":
        return cls(city.strip().lower(), property_type.strip().lower())


@dataclass(frozen=True)
class BuyerProfile:
    monthly_income_cents: int
    monthly_debt_cents: int
    credit_quality: float
    term_months: int
    budget_cents: Optional[int] = None
    preferred_city: Optional[str] = None
    preferred_property_type: Optional[str] = None
    down_payment_ratio: Optional[float] = None


@dataclass(frozen=True)
class PropertyCandidate:
    property_id: str
    price_cents: int
    city: str
    property_type: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def segment(self) -> Segment:
        return Segment.of(self.city, self.property_type)


@dataclass(frozen=True)
class RankedRecommendation:
    property_id: str
    composite_score: float
    affordability_fit: float
    risk_tier: RiskTier
    risk_score: float
    trend_favorability: float
    verdict: Verdict
    monthly_payment_cents: int
    price_cents: int
    within_budget: bool
    matches_preferences: bool
    reasons: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CandidateDiagnostic:
    """Why a candidate was left out of a ranking"""

    property_id: str
    error: str
    message: str


@dataclass
class RankingResult:
    recommendations: List[RankedRecommendation] = field(default_factory=list)
    diagnostics: List[CandidateDiagnostic] = field(default_factory=list)
