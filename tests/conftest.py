"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from rto_engine.api.main import create_app
from rto_engine.domain.models import BuyerProfile, PricePoint, PropertyCandidate, Segment
from rto_engine.domain.policy import EnginePolicy


def monthly_series(prices: list[int], start: date = date(2024, 1, 1)) -> list[PricePoint]:
    """Build a month-spaced price series starting at ``start``"""
    points = []
    for i, price in enumerate(prices):
        year = start.year + (start.month - 1 + i) // 12
        month = (start.month - 1 + i) % 12 + 1
        points.append(PricePoint(timestamp=date(year, month, 1), price_cents=price))
    return points


@pytest.fixture
def make_series():
    return monthly_series


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def policy() -> EnginePolicy:
    return EnginePolicy()


@pytest.fixture
def rising_series() -> list[PricePoint]:
    """Nairobi apartments: steady ~1% monthly growth from KES 8.2M"""
    return monthly_series([820_000_000 + i * 8_200_000 for i in range(12)])


@pytest.fixture
def flat_series() -> list[PricePoint]:
    return monthly_series([650_000_000] * 12)


@pytest.fixture
def falling_series() -> list[PricePoint]:
    """Prices dropping ~3% a month"""
    return monthly_series([900_000_000 - i * 27_000_000 for i in range(12)])


@pytest.fixture
def market(rising_series, flat_series, falling_series) -> dict[Segment, list[PricePoint]]:
    return {
        Segment.of("Nairobi", "Apartment"): rising_series,
        Segment.of("Nakuru", "House"): flat_series,
        Segment.of("Eldoret", "House"): falling_series,
    }


@pytest.fixture
def buyer() -> BuyerProfile:
    """KES 400k/month household, modest debts, good credit, 15-year term"""
    return BuyerProfile(
        monthly_income_cents=40_000_000,
        monthly_debt_cents=2_000_000,
        credit_quality=80,
        term_months=180,
        budget_cents=1_000_000_000,
        preferred_city="Nairobi",
        preferred_property_type="apartment",
    )


@pytest.fixture
def candidates() -> list[PropertyCandidate]:
    return [
        PropertyCandidate("101", 850_000_000, "Nairobi", "Apartment", {"bedrooms": 2}),
        PropertyCandidate("102", 650_000_000, "Nakuru", "House", {"bedrooms": 3}),
        PropertyCandidate("103", 800_000_000, "Eldoret", "House", {"bedrooms": 4}),
    ]
