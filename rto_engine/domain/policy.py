"""Scoring policy objects passed explicitly into every engine call.

Defaults are placeholders pending a confirmed lending policy; override per
call or through environment settings (see ``rto_engine.config``).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AffordabilityPolicy:
    """Debt-to-income thresholds (upper bounds are inclusive)"""

    qualify_max_ratio: float = 0.36
    conditional_max_ratio: float = 0.45


@dataclass(frozen=True)
class TrendPolicy:
    # Slope within +/- flat_tolerance * mean price per period counts as flat
    flat_tolerance: float = 0.001


@dataclass(frozen=True)
class RiskPolicy:
    affordability_weight: float = 40.0
    credit_weight: float = 35.0
    stability_weight: float = 25.0

    credit_min: float = 0.0
    credit_max: float = 100.0

    # Ratio / volatility at which the component bottoms out at zero
    dti_ceiling: float = 0.60
    volatility_ceiling: float = 0.10

    low_cutoff: float = 75.0
    moderate_cutoff: float = 50.0
    high_cutoff: float = 25.0

    tier_step_adjustment_pp: float = 5.0
    volatility_adjustment_pp: float = 5.0

    def __post_init__(self):
        weights = (self.affordability_weight, self.credit_weight, self.stability_weight)
        if min(weights) < 0 or sum(weights) <= 0:
            raise ValueError(f"risk weights must be non-negative with a positive sum, got {weights}")
        if self.credit_max <= self.credit_min:
            raise ValueError(f"credit_max must exceed credit_min, got [{self.credit_min}, {self.credit_max}]")
        if self.dti_ceiling <= 0 or self.volatility_ceiling <= 0:
            raise ValueError("dti_ceiling and volatility_ceiling must be positive")


@dataclass(frozen=True)
class RankingPolicy:
    affordability_weight: float = 0.50
    risk_weight: float = 0.30
    trend_weight: float = 0.20

    default_down_payment_ratio: float = 0.10
    annual_rate_percent: float = 12.5

    # Per-period decline, as a fraction of mean price, treated as falling fast
    fast_decline_ratio: float = 0.01
    high_volatility: float = 0.05

    def __post_init__(self):
        weights = (self.affordability_weight, self.risk_weight, self.trend_weight)
        if min(weights) < 0 or sum(weights) <= 0:
            raise ValueError(f"ranking weights must be non-negative with a positive sum, got {weights}")


@dataclass(frozen=True)
class EnginePolicy:
    affordability: AffordabilityPolicy = field(default_factory=AffordabilityPolicy)
    trend: TrendPolicy = field(default_factory=TrendPolicy)
    risk: RiskPolicy = field(default_factory=RiskPolicy)
    ranking: RankingPolicy = field(default_factory=RankingPolicy)
