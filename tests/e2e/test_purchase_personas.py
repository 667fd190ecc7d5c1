"""
E2E tests for shopper personas against a real categorization endpoint.

These tests require the mock categorization server to be running:
    uvicorn mock.categorization_server.main:app --port 8001

Shopper personas:
- essentials shopper: cheap household basics, classified ESSENTIAL_DAILY
- gadget browser: small discretionary buys, classified DISCRETIONARY_SMALL
- big-ticket buyer: $300+, HIGH_VALUE by price without an API call
- stretched budget: Don't Buy with flip suggestions
- unlucky shopper: categorizer answers nonsense, falls back
"""

import pytest
from fastapi.testclient import TestClient
from purchase_advisor.api.main import create_app


@pytest.fixture
def live_client() -> TestClient:
    """App wired to the real categorization client and a fresh cache"""
    return TestClient(create_app())


@pytest.mark.integration
def test_essentials_shopper(live_client: TestClient):
    """
    Hand sanitizer wipes for $7
    Expected: ESSENTIAL_DAILY, then served from cache
    """
    body = {"item_name": "Purell disinfecting wipes", "cost": 7}

    first = live_client.post("/v1/classification", json=body).json()
    second = live_client.post("/v1/classification", json=body).json()

    assert first == {"category": "ESSENTIAL_DAILY", "cached": False}
    assert second == {"category": "ESSENTIAL_DAILY", "cached": True}


@pytest.mark.integration
def test_gadget_browser(live_client: TestClient):
    response = live_client.post(
        "/v1/decision",
        json={
            "item_name": "Phone case",
            "cost": 20,
            "purpose": "old one broke",
            "frequency": "Daily",
            "financial_profile": {
                "monthly_income": 4000,
                "monthly_expenses": 2000,
                "current_savings": 9000,
            },
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] == "Buy"
    assert data["category"] == "DISCRETIONARY_SMALL"
    assert "behavioral finance advisor" in data["summary_prompt"]


@pytest.mark.integration
def test_big_ticket_buyer(live_client: TestClient):
    response = live_client.post("/v1/classification", json={"item_name": "MacBook Air M3", "cost": 1299})

    assert response.json() == {"category": "HIGH_VALUE", "cached": False}


@pytest.mark.integration
def test_stretched_budget(live_client: TestClient):
    """
    $1000 laptop against $500/month net income
    Expected: Don't Buy, price cut of $850 as the smallest flip
    """
    response = live_client.post(
        "/v1/decision",
        json={
            "item_name": "Laptop",
            "cost": 1000,
            "purpose": "work",
            "frequency": "Daily",
            "financial_profile": {"monthly_income": 3000, "monthly_expenses": 2500},
        },
    )

    data = response.json()
    assert data["decision"] == "Don't Buy"
    assert data["flip_suggestions"]["path_a"]["delta"] == 850
    assert data["category"] == "HIGH_VALUE"


@pytest.mark.integration
def test_unlucky_shopper(live_client: TestClient):
    """The categorizer returns an unknown label; the result falls back and is not cached"""
    body = {"item_name": "Broken umbrella", "cost": 12}

    first = live_client.post("/v1/classification", json=body).json()
    stats = live_client.get("/v1/classification/cache").json()

    assert first == {"category": "DISCRETIONARY_SMALL", "cached": False}
    assert stats["size"] == 0
