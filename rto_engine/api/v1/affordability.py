"""POST /v1/affordability - debt-to-income verdicts and maximum price"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from rto_engine.api.v1.schemas import (
    AffordabilityRequest,
    AffordabilityResponse,
    MaxPriceRequest,
    MaxPriceResponse,
)
from rto_engine.api.dependencies import get_policy, get_request_id
from rto_engine.domain import affordability
from rto_engine.domain.exceptions import DomainException
from rto_engine.domain.models import AffordabilityProfile
from rto_engine.domain.policy import EnginePolicy
from rto_engine.infrastructure.observability.metrics import affordability_verdict_counter

router = APIRouter()


@router.post("/affordability", response_model=AffordabilityResponse)
def evaluate_affordability(
    request_body: AffordabilityRequest,
    request_id: str = Depends(get_request_id),
    policy: EnginePolicy = Depends(get_policy),
):
    """Evaluate the debt-to-income ratio of a proposed monthly payment"""
    profile = AffordabilityProfile(
        monthly_income_cents=request_body.monthly_income_cents,
        monthly_debt_cents=request_body.monthly_debt_cents,
        proposed_payment_cents=request_body.proposed_payment_cents,
    )

    try:
        result = affordability.evaluate(profile, policy.affordability)
    except DomainException as e:
        logging.warning(f"Affordability rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    affordability_verdict_counter.labels(verdict=result.verdict.value).inc()

    return AffordabilityResponse(
        ratio=round(result.ratio, 4),
        verdict=result.verdict.value,
        headroom_cents=result.headroom_cents,
    )


@router.post("/affordability/max-price", response_model=MaxPriceResponse)
def max_price(
    request_body: MaxPriceRequest,
    request_id: str = Depends(get_request_id),
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Highest property price the household qualifies for at the given terms.

    Returns:
        Price in cents whose payment sits exactly on the qualifying ratio
    """
    try:
        price = affordability.max_affordable_price(
            request_body.monthly_income_cents,
            request_body.monthly_debt_cents,
            request_body.down_payment_ratio,
            request_body.term_months,
            request_body.annual_rate_percent,
            policy.affordability,
        )
    except DomainException as e:
        logging.warning(f"Max price rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return MaxPriceResponse(
        max_price_cents=price,
        qualifying_ratio=policy.affordability.qualify_max_ratio,
    )
