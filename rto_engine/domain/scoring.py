"""Risk scoring engine - composite risk for a rent-to-own applicant"""

import math
from typing import List

from rto_engine.domain.exceptions import InvalidRiskInputError
from rto_engine.domain.models import RiskAssessment, RiskComponents, RiskInputs, RiskTier, Verdict
from rto_engine.domain.policy import RiskPolicy
from rto_engine.utils.money import clamp

# Steps above "moderate" used to scale the down payment adjustment
_TIER_STEPS = {
    RiskTier.LOW: 0,
    RiskTier.MODERATE: 0,
    RiskTier.HIGH: 1,
    RiskTier.DECLINED: 2,
}


def _validate(inputs: RiskInputs, policy: RiskPolicy) -> None:
    credit = inputs.credit_quality
    if not math.isfinite(credit) or not policy.credit_min <= credit <= policy.credit_max:
        raise InvalidRiskInputError(
            f"credit_quality must be within [{policy.credit_min}, {policy.credit_max}], got {credit}"
        )
    volatility = inputs.trend_volatility
    if not math.isfinite(volatility) or volatility < 0:
        raise InvalidRiskInputError(f"trend_volatility must be non-negative, got {volatility}")


def calculate_components(inputs: RiskInputs, policy: RiskPolicy) -> RiskComponents:
    """
    Normalize each risk factor onto 0-100 where higher means safer.

    - Affordability: falls linearly from 100 at zero DTI to 0 at dti_ceiling
    - Credit: credit quality rescaled from its declared scale
    - Market stability: falls linearly from 100 at zero volatility to 0 at volatility_ceiling
    """
    affordability = 100 * (1 - clamp(inputs.affordability.ratio / policy.dti_ceiling))
    credit = 100 * (inputs.credit_quality - policy.credit_min) / (policy.credit_max - policy.credit_min)
    stability = 100 * (1 - clamp(inputs.trend_volatility / policy.volatility_ceiling))

    return RiskComponents(
        affordability=affordability,
        credit=credit,
        market_stability=stability,
    )


def calculate_risk_score(components: RiskComponents, policy: RiskPolicy) -> float:
    """Weighted composite of the components, 0 (riskiest) to 100 (safest)"""
    total_weight = policy.affordability_weight + policy.credit_weight + policy.stability_weight
    score = (
        policy.affordability_weight * components.affordability
        + policy.credit_weight * components.credit
        + policy.stability_weight * components.market_stability
    ) / total_weight

    return round(clamp(score, 0.0, 100.0), 2)


def determine_tier(score: float, policy: RiskPolicy) -> RiskTier:
    """
    Map composite score to a risk tier.

    Default bands:
    - 75+:     low
    - 50 - 75: moderate
    - 25 - 50: high
    - < 25:    declined
    """
    if score >= policy.low_cutoff:
        return RiskTier.LOW
    elif score >= policy.moderate_cutoff:
        return RiskTier.MODERATE
    elif score >= policy.high_cutoff:
        return RiskTier.HIGH
    else:
        return RiskTier.DECLINED


def down_payment_adjustment(tier: RiskTier, volatility: float, policy: RiskPolicy) -> float:
    """Advisory extra down payment in percentage points for lender exposure"""
    tier_part = _TIER_STEPS[tier] * policy.tier_step_adjustment_pp
    volatility_part = policy.volatility_adjustment_pp * clamp(volatility / policy.volatility_ceiling)
    return round(tier_part + volatility_part, 2)


def _warnings(components: RiskComponents) -> List[str]:
    warnings = []
    if components.affordability < 40:
        warnings.append("Debt-to-income ratio is high; consider a lower-priced property or a larger down payment.")
    if components.credit < 50:
        warnings.append("Weak credit quality may limit eligibility; work on credit before applying.")
    if components.market_stability < 50:
        warnings.append("Prices in this market are volatile; expect a larger down payment requirement.")
    return warnings


def _strengths(components: RiskComponents) -> List[str]:
    strengths = []
    if components.affordability >= 60:
        strengths.append("Low debt-to-income ratio leaves room in the monthly budget.")
    if components.credit >= 75:
        strengths.append("Strong credit quality supports better contract terms.")
    if components.market_stability >= 80:
        strengths.append("Stable local prices protect the value of equity built up.")
    return strengths


def _recommendations(inputs: RiskInputs, composite: float, adjustment: float, policy: RiskPolicy) -> List[str]:
    recommendations = []
    verdict = inputs.affordability.verdict
    if verdict == Verdict.CONDITIONAL:
        recommendations.append("Pay down existing debts to bring the debt-to-income ratio into the qualifying band.")
    elif verdict == Verdict.DOES_NOT_QUALIFY:
        recommendations.append("Look at lower-priced properties; this payment is above the qualifying limit.")
    if adjustment > 0:
        recommendations.append(f"Add about {adjustment:g} percentage points to the down payment to offset lender exposure.")
    if composite < policy.moderate_cutoff:
        recommendations.append("Review the contract with a housing finance advisor before committing.")
    return recommendations


def score(inputs: RiskInputs, policy: RiskPolicy) -> RiskAssessment:
    """
    Main entry point: score affordability, credit and market stability.

    Returns the composite score, its tier and the advisory down payment
    adjustment, with the component breakdown behind them and advisory
    warnings, strengths and recommendations derived from it.
    """
    _validate(inputs, policy)

    components = calculate_components(inputs, policy)
    composite = calculate_risk_score(components, policy)
    tier = determine_tier(composite, policy)
    adjustment = down_payment_adjustment(tier, inputs.trend_volatility, policy)

    return RiskAssessment(
        score=composite,
        tier=tier,
        recommended_down_payment_adjustment=adjustment,
        components=components,
        warnings=_warnings(components),
        strengths=_strengths(components),
        recommendations=_recommendations(inputs, composite, adjustment, policy),
    )
