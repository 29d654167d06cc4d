"""Property recommendation ranking - affordability, risk and market trend combined"""

import logging
from typing import Dict, List, Mapping, Sequence

from rto_engine.domain import affordability, amortization, scoring, trends
from rto_engine.domain.exceptions import (
    DomainException,
    InsufficientDataError,
    InvalidIncomeError,
    InvalidRiskInputError,
    InvalidTermsError,
)
from rto_engine.domain.models import (
    AffordabilityProfile,
    BuyerProfile,
    CandidateDiagnostic,
    LoanTerms,
    PricePoint,
    PropertyCandidate,
    RankedRecommendation,
    RankingResult,
    RiskInputs,
    RiskTier,
    Segment,
    TrendDirection,
    TrendSummary,
    Verdict,
)
from rto_engine.domain.policy import EnginePolicy, RankingPolicy
from rto_engine.utils.money import clamp

logger = logging.getLogger(__name__)

MAX_REASONS = 5


def trend_favorability(summary: TrendSummary, verdict: Verdict, policy: RankingPolicy) -> float:
    """
    Score a segment's trend for this buyer, 0.0 to 1.0.

    - Rising and the buyer qualifies (fully or conditionally): 1.0
    - Rising but out of reach: 0.75
    - Flat: 0.5
    - Falling: 0.25, or 0.0 when falling faster than fast_decline_ratio of mean price
    - Volatile markets lose a further 0.25
    """
    if summary.direction == TrendDirection.RISING:
        favorability = 1.0 if verdict != Verdict.DOES_NOT_QUALIFY else 0.75
    elif summary.direction == TrendDirection.FLAT:
        favorability = 0.5
    elif -summary.slope_cents_per_period > policy.fast_decline_ratio * summary.mean_price_cents:
        favorability = 0.0
    else:
        favorability = 0.25

    if summary.volatility > policy.high_volatility:
        favorability -= 0.25

    return clamp(favorability)


def _matches_preferences(buyer: BuyerProfile, candidate: PropertyCandidate) -> bool:
    segment = candidate.segment
    if buyer.preferred_city and buyer.preferred_city.strip().lower() != segment.city:
        return False
    if buyer.preferred_property_type and buyer.preferred_property_type.strip().lower() != segment.property_type:
        return False
    return True


def _reasons(
    buyer: BuyerProfile,
    candidate: PropertyCandidate,
    verdict: Verdict,
    tier: RiskTier,
    summary: TrendSummary,
) -> List[str]:
    """Short buyer-facing reasons for a recommendation, most personal first"""
    reasons = []
    segment = candidate.segment
    if buyer.preferred_city and buyer.preferred_city.strip().lower() == segment.city:
        reasons.append(f"Located in your preferred city: {candidate.city}")
    if buyer.preferred_property_type and buyer.preferred_property_type.strip().lower() == segment.property_type:
        reasons.append(f"Matches your preferred property type: {candidate.property_type}")
    if buyer.budget_cents is not None and candidate.price_cents <= buyer.budget_cents:
        reasons.append("Within your specified budget")
    if verdict == Verdict.QUALIFIES:
        reasons.append("Monthly payment fits comfortably within your income")
    elif verdict == Verdict.CONDITIONAL:
        reasons.append("Monthly payment is affordable with some stretch")
    if tier == RiskTier.LOW:
        reasons.append("Low risk profile for a rent-to-own contract")
    if summary.direction == TrendDirection.RISING:
        reasons.append("Rising local prices add to the value of your equity")
    return reasons[:MAX_REASONS]


def _validate_buyer(buyer: BuyerProfile, policy: EnginePolicy) -> None:
    if buyer.monthly_income_cents <= 0:
        raise InvalidIncomeError(f"monthly income must be positive, got {buyer.monthly_income_cents}")
    if not isinstance(buyer.term_months, int) or buyer.term_months <= 0:
        raise InvalidTermsError(f"term_months must be a positive integer, got {buyer.term_months!r}")
    risk_policy = policy.risk
    if not risk_policy.credit_min <= buyer.credit_quality <= risk_policy.credit_max:
        raise InvalidRiskInputError(
            f"credit_quality must be within [{risk_policy.credit_min}, {risk_policy.credit_max}], "
            f"got {buyer.credit_quality}"
        )
    ratio = buyer.down_payment_ratio
    if ratio is not None and not 0.0 <= ratio <= 1.0:
        raise InvalidTermsError(f"down_payment_ratio must be within [0, 1], got {ratio}")


def evaluate_candidate(
    buyer: BuyerProfile,
    candidate: PropertyCandidate,
    summary: TrendSummary,
    policy: EnginePolicy,
) -> RankedRecommendation:
    """Run schedule, affordability and risk for one property and combine them"""
    ranking_policy = policy.ranking
    down_payment_ratio = (
        buyer.down_payment_ratio
        if buyer.down_payment_ratio is not None
        else ranking_policy.default_down_payment_ratio
    )
    terms = LoanTerms(
        property_price_cents=candidate.price_cents,
        down_payment_ratio=down_payment_ratio,
        term_months=buyer.term_months,
        annual_rate_percent=ranking_policy.annual_rate_percent,
    )
    schedule = amortization.compute_schedule(terms)
    monthly_payment = schedule[0].total_payment_cents

    afford = affordability.evaluate(
        AffordabilityProfile(
            monthly_income_cents=buyer.monthly_income_cents,
            monthly_debt_cents=buyer.monthly_debt_cents,
            proposed_payment_cents=monthly_payment,
        ),
        policy.affordability,
    )
    risk = scoring.score(
        RiskInputs(
            affordability=afford,
            credit_quality=buyer.credit_quality,
            trend_volatility=summary.volatility,
        ),
        policy.risk,
    )

    fit = clamp(1 - afford.ratio)
    favorability = trend_favorability(summary, afford.verdict, ranking_policy)

    total_weight = ranking_policy.affordability_weight + ranking_policy.risk_weight + ranking_policy.trend_weight
    composite = (
        ranking_policy.affordability_weight * fit
        + ranking_policy.risk_weight * (risk.score / 100)
        + ranking_policy.trend_weight * favorability
    ) / total_weight

    return RankedRecommendation(
        property_id=candidate.property_id,
        composite_score=round(composite, 4),
        affordability_fit=round(fit, 4),
        risk_tier=risk.tier,
        risk_score=risk.score,
        trend_favorability=favorability,
        verdict=afford.verdict,
        monthly_payment_cents=monthly_payment,
        price_cents=candidate.price_cents,
        within_budget=buyer.budget_cents is None or candidate.price_cents <= buyer.budget_cents,
        matches_preferences=_matches_preferences(buyer, candidate),
        reasons=_reasons(buyer, candidate, afford.verdict, risk.tier, summary),
    )


def rank(
    buyer: BuyerProfile,
    candidates: Sequence[PropertyCandidate],
    market: Mapping[Segment, Sequence[PricePoint]],
    policy: EnginePolicy,
) -> RankingResult:
    """
    Score and order candidates for a buyer, best first.

    Ordering: composite score descending, then lower risk (higher risk
    score), then lower price, then property id.

    A candidate that fails evaluation (bad price, missing or short market
    history) is left out and reported in diagnostics; the rest are still
    ranked. Invalid buyer inputs (income, term, down payment, credit
    quality) fail the whole call.
    """
    result = RankingResult()
    if not candidates:
        return result

    _validate_buyer(buyer, policy)

    # Each segment is summarized at most once per call
    summaries: Dict[Segment, TrendSummary] = {}

    for candidate in candidates:
        try:
            segment = candidate.segment
            if segment not in summaries:
                if segment not in market:
                    raise InsufficientDataError(
                        f"No price history for {segment.city}/{segment.property_type}"
                    )
                summaries[segment] = trends.summarize(market[segment], policy.trend)

            result.recommendations.append(evaluate_candidate(buyer, candidate, summaries[segment], policy))

        except DomainException as e:
            logger.warning(
                f"Candidate excluded from ranking: {e}",
                extra={"property_id": candidate.property_id, "error": type(e).__name__},
            )
            result.diagnostics.append(
                CandidateDiagnostic(
                    property_id=candidate.property_id,
                    error=type(e).__name__,
                    message=str(e),
                )
            )

    result.recommendations.sort(
        key=lambda r: (-r.composite_score, -r.risk_score, r.price_cents, str(r.property_id))
    )

    logger.debug(
        "Ranking complete",
        extra={"ranked": len(result.recommendations), "excluded": len(result.diagnostics)},
    )
    return result
