"""POST /v1/recommendations - rank candidate properties for a buyer"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from rto_engine.api.v1.schemas import (
    DiagnosticSchema,
    RecommendationRequest,
    RecommendationResponse,
    RecommendationSchema,
)
from rto_engine.api.dependencies import get_policy, get_request_id
from rto_engine.domain.exceptions import DomainException
from rto_engine.domain.models import BuyerProfile, PricePoint, PropertyCandidate, Segment
from rto_engine.domain.policy import EnginePolicy
from rto_engine.domain.ranking import rank
from rto_engine.infrastructure.observability.logging import log_ranking
from rto_engine.infrastructure.observability.metrics import record_ranking

router = APIRouter()


@router.post("/recommendations", response_model=RecommendationResponse)
def recommend(
    request_body: RecommendationRequest,
    request_id: str = Depends(get_request_id),
    policy: EnginePolicy = Depends(get_policy),
):
    """
    Rank properties by affordability fit, risk and market trend.

    Candidates that cannot be evaluated are listed in diagnostics rather than
    failing the request.
    """
    start_time = time.time()

    buyer = BuyerProfile(**request_body.buyer.model_dump())
    candidates = [PropertyCandidate(**c.model_dump()) for c in request_body.candidates]
    market = {
        Segment.of(s.city, s.property_type): [
            PricePoint(timestamp=p.timestamp, price_cents=p.price_cents) for p in s.points
        ]
        for s in request_body.market
    }

    try:
        result = rank(buyer, candidates, market, policy)
    except DomainException as e:
        logging.warning(f"Ranking rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_ranking(len(result.recommendations), [d.error for d in result.diagnostics])
    log_ranking(request_id, len(candidates), len(result.recommendations), len(result.diagnostics), duration_ms)

    return RecommendationResponse(
        recommendations=[
            RecommendationSchema(
                property_id=r.property_id,
                composite_score=r.composite_score,
                affordability_fit=r.affordability_fit,
                risk_tier=r.risk_tier.value,
                risk_score=r.risk_score,
                trend_favorability=r.trend_favorability,
                verdict=r.verdict.value,
                monthly_payment_cents=r.monthly_payment_cents,
                price_cents=r.price_cents,
                within_budget=r.within_budget,
                matches_preferences=r.matches_preferences,
                reasons=r.reasons,
            )
            for r in result.recommendations
        ],
        diagnostics=[DiagnosticSchema(**vars(d)) for d in result.diagnostics],
    )
