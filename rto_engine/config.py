"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from rto_engine.domain.policy import (
    AffordabilityPolicy,
    EnginePolicy,
    RankingPolicy,
    RiskPolicy,
    TrendPolicy,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="RTO_", extra="ignore"
    )

    # Service
    service_name: str = "rto-engine"
    log_level: str = "INFO"

    # Affordability thresholds (debt-to-income)
    qualify_max_ratio: float = 0.36
    conditional_max_ratio: float = 0.45

    # Trend flatness tolerance, relative to mean price
    trend_flat_tolerance: float = 0.001

    # Risk weights and tier cutoffs
    risk_affordability_weight: float = 40.0
    risk_credit_weight: float = 35.0
    risk_stability_weight: float = 25.0
    risk_low_cutoff: float = 75.0
    risk_moderate_cutoff: float = 50.0
    risk_high_cutoff: float = 25.0

    # Ranking weights and implied contract terms
    ranking_affordability_weight: float = 0.50
    ranking_risk_weight: float = 0.30
    ranking_trend_weight: float = 0.20
    default_down_payment_ratio: float = 0.10
    default_annual_rate_percent: float = 12.5

    def engine_policy(self) -> EnginePolicy:
        """Build the scoring policy handed to every engine call"""
        return EnginePolicy(
            affordability=AffordabilityPolicy(
                qualify_max_ratio=self.qualify_max_ratio,
                conditional_max_ratio=self.conditional_max_ratio,
            ),
            trend=TrendPolicy(flat_tolerance=self.trend_flat_tolerance),
            risk=RiskPolicy(
                affordability_weight=self.risk_affordability_weight,
                credit_weight=self.risk_credit_weight,
                stability_weight=self.risk_stability_weight,
                low_cutoff=self.risk_low_cutoff,
                moderate_cutoff=self.risk_moderate_cutoff,
                high_cutoff=self.risk_high_cutoff,
            ),
            ranking=RankingPolicy(
                affordability_weight=self.ranking_affordability_weight,
                risk_weight=self.ranking_risk_weight,
                trend_weight=self.ranking_trend_weight,
                default_down_payment_ratio=self.default_down_payment_ratio,
                annual_rate_percent=self.default_annual_rate_percent,
            ),
        )


settings = Settings()
