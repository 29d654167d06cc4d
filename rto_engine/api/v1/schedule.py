"""POST /v1/schedule - rent-to-own payment schedule"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from rto_engine.api.v1.schemas import (
    LoanTermsSchema,
    PaymentPeriodSchema,
    ScheduleResponse,
    ScheduleSummarySchema,
)
from rto_engine.api.dependencies import get_request_id
from rto_engine.domain.amortization import compute_schedule, summarize_schedule
from rto_engine.domain.exceptions import DomainException
from rto_engine.domain.models import LoanTerms

router = APIRouter()


@router.post("/schedule", response_model=ScheduleResponse)
def create_schedule(request_body: LoanTermsSchema, request_id: str = Depends(get_request_id)):
    """
    Compute the month-by-month schedule for a rent-to-own contract.

    Returns:
        Headline totals plus every period's rent / equity split
    """
    terms = LoanTerms(
        property_price_cents=request_body.property_price_cents,
        down_payment_ratio=request_body.down_payment_ratio,
        term_months=request_body.term_months,
        annual_rate_percent=request_body.annual_rate_percent,
    )

    try:
        periods = compute_schedule(terms)
    except DomainException as e:
        logging.warning(f"Invalid terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    summary = summarize_schedule(terms, periods)

    return ScheduleResponse(
        summary=ScheduleSummarySchema(**vars(summary)),
        periods=[PaymentPeriodSchema(**vars(p)) for p in periods],
    )
