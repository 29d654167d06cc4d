"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import Any, Dict, List, Optional


class LoanTermsSchema(BaseModel):
    """Rent-to-own contract terms"""

    property_price_cents: int = Field(..., gt=0, description="Property price in cents")
    down_payment_ratio: float = Field(..., ge=0, le=1, description="Down payment as a fraction of price")
    term_months: int = Field(..., gt=0, description="Contract length in months")
    annual_rate_percent: float = Field(..., ge=0, description="Nominal annual rate, e.g. 12.5")


class PaymentPeriodSchema(BaseModel):
    index: int
    total_payment_cents: int
    rent_cents: int
    equity_cents: int
    cumulative_equity_cents: int
    remaining_balance_cents: int


class ScheduleSummarySchema(BaseModel):
    property_price_cents: int
    down_payment_cents: int
    financed_cents: int
    monthly_payment_cents: int
    total_payments_cents: int
    total_rent_cents: int
    total_cost_cents: int
    term_months: int


class ScheduleResponse(BaseModel):
    """Response for POST /v1/schedule"""

    summary: ScheduleSummarySchema
    periods: List[PaymentPeriodSchema]


class AffordabilityRequest(BaseModel):
    """Request body for POST /v1/affordability"""

    monthly_income_cents: int = Field(..., description="Gross monthly household income in cents")
    monthly_debt_cents: int = Field(0, ge=0, description="Existing monthly debt obligations in cents")
    proposed_payment_cents: int = Field(..., ge=0, description="Proposed monthly rent-to-own payment in cents")


class AffordabilityResponse(BaseModel):
    ratio: float
    verdict: str
    headroom_cents: int


class MaxPriceRequest(BaseModel):
    """Request body for POST /v1/affordability/max-price"""

    monthly_income_cents: int
    monthly_debt_cents: int = Field(0, ge=0)
    down_payment_ratio: float = Field(..., ge=0, lt=1)
    term_months: int = Field(..., gt=0)
    annual_rate_percent: float = Field(..., ge=0)


class MaxPriceResponse(BaseModel):
    max_price_cents: int
    qualifying_ratio: float


class RiskRequest(BaseModel):
    """Request body for POST /v1/risk"""

    monthly_income_cents: int
    monthly_debt_cents: int = Field(0, ge=0)
    proposed_payment_cents: int = Field(..., ge=0)
    credit_quality: float
    trend_volatility: float = Field(0.0, description="Volatility from /v1/trends")


class RiskComponentsSchema(BaseModel):
    affordability: float
    credit: float
    market_stability: float


class RiskResponse(BaseModel):
    """Response for POST /v1/risk"""

    affordability: AffordabilityResponse
    score: float
    tier: str
    recommended_down_payment_adjustment: float
    components: RiskComponentsSchema
    warnings: List[str]
    strengths: List[str]
    recommendations: List[str]


class PricePointSchema(BaseModel):
    timestamp: date
    price_cents: int


class TrendRequest(BaseModel):
    """Request body for POST /v1/trends"""

    points: List[PricePointSchema]


class TrendResponse(BaseModel):
    direction: str
    volatility: float
    projected_price_cents: int
    slope_cents_per_period: float
    mean_price_cents: int
    points: int


class BuyerSchema(BaseModel):
    monthly_income_cents: int
    monthly_debt_cents: int = Field(0, ge=0)
    credit_quality: float
    term_months: int = Field(180, gt=0)
    budget_cents: Optional[int] = None
    preferred_city: Optional[str] = None
    preferred_property_type: Optional[str] = None
    down_payment_ratio: Optional[float] = Field(None, ge=0, le=1)


class CandidateSchema(BaseModel):
    property_id: str
    price_cents: int
    city: str
    property_type: str
    attributes: Dict[str, Any] = Field(default_factory=dict)


class SegmentSeriesSchema(BaseModel):
    city: str
    property_type: str
    points: List[PricePointSchema]


class RecommendationRequest(BaseModel):
    """Request body for POST /v1/recommendations"""

    buyer: BuyerSchema
    candidates: List[CandidateSchema]
    market: List[SegmentSeriesSchema] = Field(default_factory=list)


class RecommendationSchema(BaseModel):
    property_id: str
    composite_score: float
    affordability_fit: float
    risk_tier: str
    risk_score: float
    trend_favorability: float
    verdict: str
    monthly_payment_cents: int
    price_cents: int
    within_budget: bool
    matches_preferences: bool
    reasons: List[str]


class DiagnosticSchema(BaseModel):
    property_id: str
    error: str
    message: str


class RecommendationResponse(BaseModel):
    """Response for POST /v1/recommendations"""

    recommendations: List[RecommendationSchema]
    diagnostics: List[DiagnosticSchema]
