"""POST /v1/risk - composite risk assessment for a rent-to-own applicant"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from rto_engine.api.v1.schemas import (
    AffordabilityResponse,
    RiskComponentsSchema,
    RiskRequest,
    RiskResponse,
)
from rto_engine.api.dependencies import get_policy, get_request_id
from rto_engine.domain import affordability, scoring
from rto_engine.domain.exceptions import DomainException
from rto_engine.domain.models import AffordabilityProfile, RiskInputs
from rto_engine.domain.policy import EnginePolicy
from rto_engine.infrastructure.observability.logging import log_assessment
from rto_engine.infrastructure.observability.metrics import record_assessment

router = APIRouter()


@router.post("/risk", response_model=RiskResponse)
def assess_risk(
    request_body: RiskRequest,
    request_id: str = Depends(get_request_id),
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Score an applicant for a specific payment.

    Flow:
    1. Evaluate debt-to-income for the proposed payment
    2. Combine it with credit quality and market volatility
    3. Return score, tier and advisory down payment adjustment
    """
    start_time = time.time()

    try:
        afford = affordability.evaluate(
            AffordabilityProfile(
                monthly_income_cents=request_body.monthly_income_cents,
                monthly_debt_cents=request_body.monthly_debt_cents,
                proposed_payment_cents=request_body.proposed_payment_cents,
            ),
            policy.affordability,
        )
        assessment = scoring.score(
            RiskInputs(
                affordability=afford,
                credit_quality=request_body.credit_quality,
                trend_volatility=request_body.trend_volatility,
            ),
            policy.risk,
        )

    except DomainException as e:
        logging.warning(f"Risk assessment rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_assessment(afford.verdict.value, assessment.tier.value, assessment.score)
    log_assessment(request_id, afford.verdict.value, assessment.tier.value, assessment.score, duration_ms)

    return RiskResponse(
        affordability=AffordabilityResponse(
            ratio=round(afford.ratio, 4),
            verdict=afford.verdict.value,
            headroom_cents=afford.headroom_cents,
        ),
        score=assessment.score,
        tier=assessment.tier.value,
        recommended_down_payment_adjustment=assessment.recommended_down_payment_adjustment,
        components=RiskComponentsSchema(
            affordability=round(assessment.components.affordability, 2),
            credit=round(assessment.components.credit, 2),
            market_stability=round(assessment.components.market_stability, 2),
        ),
        warnings=assessment.warnings,
        strengths=assessment.strengths,
        recommendations=assessment.recommendations,
    )
