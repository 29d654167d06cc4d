"""Market trend aggregation over a segment's historical price series"""

import statistics
from typing import List, Sequence

from rto_engine.domain.exceptions import InsufficientDataError, InvalidPriceSeriesError
from rto_engine.domain.models import PricePoint, TrendDirection, TrendSummary
from rto_engine.domain.policy import TrendPolicy
from rto_engine.utils.money import to_cents


def _ordered_points(series: Sequence[PricePoint]) -> List[PricePoint]:
    if len(series) < 2:
        raise InsufficientDataError(f"At least 2 price points required, got {len(series)}")

    points = sorted(series, key=lambda p: p.timestamp)
    for previous, current in zip(points, points[1:]):
        if previous.timestamp == current.timestamp:
            raise InvalidPriceSeriesError(f"Duplicate timestamp {current.timestamp.isoformat()}")
    for point in points:
        if point.price_cents <= 0:
            raise InvalidPriceSeriesError(
                f"Price must be positive, got {point.price_cents} at {point.timestamp.isoformat()}"
            )
    return points


def summarize(series: Sequence[PricePoint], policy: TrendPolicy) -> TrendSummary:
    """
    Summarize one city/property-type segment.

    - Direction: sign of the least-squares slope over the period index, with
      anything inside +/- flat_tolerance * mean price counted as flat
    - Volatility: population std dev of period-over-period fractional changes
    - Projection: fitted line one period past the last point, floored at zero
    """
    points = _ordered_points(series)
    prices = [float(p.price_cents) for p in points]
    periods = list(range(len(prices)))

    mean_price = statistics.fmean(prices)
    slope, intercept = statistics.linear_regression(periods, prices)

    tolerance = policy.flat_tolerance * mean_price
    if slope > tolerance:
        direction = TrendDirection.RISING
    elif slope < -tolerance:
        direction = TrendDirection.FALLING
    else:
        direction = TrendDirection.FLAT

    changes = [(curr - prev) / prev for prev, curr in zip(prices, prices[1:])]
    volatility = statistics.pstdev(changes)

    projected = max(intercept + slope * len(prices), 0.0)

    return TrendSummary(
        direction=direction,
        volatility=volatility,
        projected_price_cents=to_cents(projected),
        slope_cents_per_period=slope,
        mean_price_cents=to_cents(mean_price),
        points=len(points),
    )
