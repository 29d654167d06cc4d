"""Unit tests for scoring policy validation"""

import pytest
from rto_engine.domain.policy import EnginePolicy, RankingPolicy, RiskPolicy


def test_default_policies_are_valid():
    policy = EnginePolicy()

    assert policy.risk.credit_max > policy.risk.credit_min
    assert policy.ranking.affordability_weight + policy.ranking.risk_weight + policy.ranking.trend_weight == pytest.approx(1.0)


def test_risk_policy_single_factor_weights_allowed():
    assert RiskPolicy(affordability_weight=1, credit_weight=0, stability_weight=0).affordability_weight == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"affordability_weight": 0, "credit_weight": 0, "stability_weight": 0},
        {"credit_weight": -5},
        {"credit_min": 50, "credit_max": 50},
        {"credit_min": 850, "credit_max": 300},
        {"dti_ceiling": 0},
        {"volatility_ceiling": 0},
    ],
)
def test_risk_policy_rejects_degenerate_settings(overrides):
    with pytest.raises(ValueError):
        RiskPolicy(**overrides)


@pytest.mark.parametrize(
    "overrides",
    [
        {"affordability_weight": 0, "risk_weight": 0, "trend_weight": 0},
        {"trend_weight": -0.2},
    ],
)
def test_ranking_policy_rejects_degenerate_weights(overrides):
    with pytest.raises(ValueError):
        RankingPolicy(**overrides)
