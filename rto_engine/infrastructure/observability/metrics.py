"""Prometheus metrics for monitoring verdicts, risk tiers and ranking quality"""

from prometheus_client import Counter, Histogram

# Affordability metrics
affordability_verdict_counter = Counter(
    "rto_affordability_verdict_total",
    "Affordability evaluations by verdict",
    ["verdict"],  # qualifies | conditional | does_not_qualify
)

# Risk metrics
risk_tier_counter = Counter(
    "rto_risk_tier_total",
    "Risk assessments by tier",
    ["tier"],  # low | moderate | high | declined
)

risk_score_histogram = Histogram(
    "rto_risk_score",
    "Distribution of composite risk scores",
    buckets=[10, 25, 40, 50, 60, 75, 90, 100],
)

# Ranking metrics
recommendations_counter = Counter(
    "rto_recommendations_total",
    "Properties returned in ranked recommendations",
)

ranking_exclusions_counter = Counter(
    "rto_ranking_exclusions_total",
    "Candidates excluded from ranking",
    ["error"],  # InsufficientDataError | InvalidTermsError | ...
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(verdict: str, tier: str, score: float) -> None:
    """Record a full affordability + risk outcome"""
    affordability_verdict_counter.labels(verdict=verdict).inc()
    risk_tier_counter.labels(tier=tier).inc()
    risk_score_histogram.observe(score)


def record_ranking(ranked: int, excluded_errors: list[str]) -> None:
    """Record how many candidates were served and why the rest were dropped"""
    recommendations_counter.inc(ranked)
    for error in excluded_errors:
        ranking_exclusions_counter.labels(error=error).inc()
