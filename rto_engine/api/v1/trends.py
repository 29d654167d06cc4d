"""POST /v1/trends - market trend summary for one segment"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from rto_engine.api.v1.schemas import TrendRequest, TrendResponse
from rto_engine.api.dependencies import get_policy, get_request_id
from rto_engine.domain import trends
from rto_engine.domain.exceptions import DomainException
from rto_engine.domain.models import PricePoint
from rto_engine.domain.policy import EnginePolicy

router = APIRouter()


@router.post("/trends", response_model=TrendResponse)
def summarize_trend(
    request_body: TrendRequest,
    request_id: str = Depends(get_request_id),
    policy: EnginePolicy = Depends(get_policy),
):
    """Summarize a city/property-type price history"""
    series = [PricePoint(timestamp=p.timestamp, price_cents=p.price_cents) for p in request_body.points]

    try:
        summary = trends.summarize(series, policy.trend)
    except DomainException as e:
        logging.warning(f"Trend summary rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return TrendResponse(
        direction=summary.direction.value,
        volatility=round(summary.volatility, 6),
        projected_price_cents=summary.projected_price_cents,
        slope_cents_per_period=round(summary.slope_cents_per_period, 2),
        mean_price_cents=summary.mean_price_cents,
        points=summary.points,
    )
