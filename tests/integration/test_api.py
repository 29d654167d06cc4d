"""Integration tests for API endpoints"""

import logging

import pytest
from fastapi.testclient import TestClient

from rto_engine.api.main import create_app


@pytest.fixture
def market_payload() -> list[dict]:
    """Monthly Nairobi apartment and Nakuru house history"""
    return [
        {
            "city": "Nairobi",
            "property_type": "Apartment",
            "points": [
                {"timestamp": f"2024-{month:02d}-01", "price_cents": 820_000_000 + month * 8_200_000}
                for month in range(1, 13)
            ],
        },
        {
            "city": "Nakuru",
            "property_type": "House",
            "points": [
                {"timestamp": f"2024-{month:02d}-01", "price_cents": 650_000_000}
                for month in range(1, 13)
            ],
        },
    ]


@pytest.fixture
def buyer_payload() -> dict:
    return {
        "monthly_income_cents": 40_000_000,
        "monthly_debt_cents": 2_000_000,
        "credit_quality": 80,
        "term_months": 180,
        "preferred_city": "Nairobi",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "rto_risk_tier_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    """Test forwarded X-Request-ID is reused"""
    response = client.get("/health", headers={"X-Request-ID": "front-end-123"})
    assert response.headers["X-Request-ID"] == "front-end-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_schedule_endpoint_zero_rate(client: TestClient):
    """Test POST /v1/schedule straight-line example"""
    response = client.post(
        "/v1/schedule",
        json={
            "property_price_cents": 1_000_000_000,
            "down_payment_ratio": 0.10,
            "term_months": 120,
            "annual_rate_percent": 0,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["financed_cents"] == 900_000_000
    assert data["summary"]["monthly_payment_cents"] == 7_500_000
    assert len(data["periods"]) == 120
    assert data["periods"][-1]["cumulative_equity_cents"] == 900_000_000


def test_schedule_endpoint_rejects_bad_terms(client: TestClient):
    """Test POST /v1/schedule with a zero-month term"""
    response = client.post(
        "/v1/schedule",
        json={
            "property_price_cents": 1_000_000_000,
            "down_payment_ratio": 0.10,
            "term_months": 0,
            "annual_rate_percent": 12.5,
        },
    )
    assert response.status_code == 422


def test_affordability_endpoint_conditional(client: TestClient):
    """Test POST /v1/affordability with the 0.3667 example"""
    response = client.post(
        "/v1/affordability",
        json={
            "monthly_income_cents": 15_000_000,
            "monthly_debt_cents": 1_000_000,
            "proposed_payment_cents": 4_500_000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["ratio"] == 0.3667
    assert data["verdict"] == "conditional"


def test_affordability_endpoint_zero_income(client: TestClient):
    """Test POST /v1/affordability surfaces InvalidIncomeError as 422"""
    response = client.post(
        "/v1/affordability",
        json={"monthly_income_cents": 0, "proposed_payment_cents": 4_500_000},
    )

    assert response.status_code == 422
    assert "income" in response.json()["detail"]


def test_max_price_endpoint(client: TestClient):
    """Test POST /v1/affordability/max-price"""
    response = client.post(
        "/v1/affordability/max-price",
        json={
            "monthly_income_cents": 10_000_000,
            "monthly_debt_cents": 0,
            "down_payment_ratio": 0.20,
            "term_months": 100,
            "annual_rate_percent": 0,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert abs(data["max_price_cents"] - 450_000_000) <= 1
    assert data["qualifying_ratio"] == 0.36


def test_risk_endpoint(client: TestClient):
    """Test POST /v1/risk"""
    response = client.post(
        "/v1/risk",
        json={
            "monthly_income_cents": 10_000_000,
            "monthly_debt_cents": 0,
            "proposed_payment_cents": 3_000_000,
            "credit_quality": 80,
            "trend_volatility": 0.02,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["affordability"]["verdict"] == "qualifies"
    assert data["score"] == 68.0
    assert data["tier"] == "moderate"
    assert data["components"]["affordability"] == 50.0
    assert "strengths" in data
    assert any("percentage points" in r for r in data["recommendations"])


def test_risk_endpoint_credit_out_of_range(client: TestClient):
    """Test POST /v1/risk surfaces InvalidRiskInputError as 422"""
    response = client.post(
        "/v1/risk",
        json={
            "monthly_income_cents": 10_000_000,
            "proposed_payment_cents": 3_000_000,
            "credit_quality": 700,
        },
    )
    assert response.status_code == 422


def test_trends_endpoint(client: TestClient, market_payload: list[dict]):
    """Test POST /v1/trends on a rising series"""
    response = client.post("/v1/trends", json={"points": market_payload[0]["points"]})

    assert response.status_code == 200
    data = response.json()
    assert data["direction"] == "rising"
    assert data["points"] == 12


def test_trends_endpoint_insufficient_data(client: TestClient):
    """Test POST /v1/trends with a single point"""
    response = client.post(
        "/v1/trends",
        json={"points": [{"timestamp": "2024-01-01", "price_cents": 650_000_000}]},
    )
    assert response.status_code == 422


def test_recommendations_endpoint(client: TestClient, buyer_payload: dict, market_payload: list[dict]):
    """Test POST /v1/recommendations ranks and reports excluded candidates"""
    response = client.post(
        "/v1/recommendations",
        json={
            "buyer": buyer_payload,
            "candidates": [
                {"property_id": "102", "price_cents": 650_000_000, "city": "Nakuru", "property_type": "House"},
                {"property_id": "101", "price_cents": 850_000_000, "city": "Nairobi", "property_type": "Apartment"},
                {"property_id": "201", "price_cents": 700_000_000, "city": "Mombasa", "property_type": "Townhouse"},
            ],
            "market": market_payload,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [r["property_id"] for r in data["recommendations"]] == ["101", "102"]
    assert data["recommendations"][0]["matches_preferences"] is True
    assert data["recommendations"][0]["reasons"][0] == "Located in your preferred city: Nairobi"
    assert data["diagnostics"] == [
        {
            "property_id": "201",
            "error": "InsufficientDataError",
            "message": "No price history for mombasa/townhouse",
        }
    ]


def test_recommendations_endpoint_empty_candidates(client: TestClient, buyer_payload: dict):
    """Test POST /v1/recommendations with nothing to rank"""
    response = client.post(
        "/v1/recommendations",
        json={"buyer": buyer_payload, "candidates": []},
    )

    assert response.status_code == 200
    assert response.json() == {"recommendations": [], "diagnostics": []}


def test_unhandled_error_logs_traceback(caplog):
    """Unexpected failures return 500 and keep the traceback in the log"""
    app = create_app()

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    record = next(r for r in caplog.records if r.getMessage().startswith("Unexpected error"))
    assert record.exc_info is not None
    assert record.exc_info[0] is RuntimeError
