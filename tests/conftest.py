"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from purchase_advisor.api.main import create_app
from purchase_advisor.domain.classification import ClassificationCache, PurchaseClassifier
from purchase_advisor.domain.models import FinancialProfile, PurchaseInput


class FakeCategorizer:
    """Stands in for the categorization API; records every call"""

    def __init__(self, response: str = "DISCRETIONARY_SMALL"):
        self.response = response
        self.error: Exception | None = None
        self.calls: list[tuple[str, float]] = []

    async def categorize(self, item_name: str, cost: float) -> str:
        self.calls.append((item_name, cost))
        if self.error is not None:
            raise self.error
        return self.response


class FakeClock:
    """Manually advanced replacement for time.time"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_categorizer() -> FakeCategorizer:
    return FakeCategorizer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ClassificationCache:
    return ClassificationCache(max_size=100, ttl_seconds=30 * 60, clock=clock)


@pytest.fixture
def classifier(cache: ClassificationCache, fake_categorizer: FakeCategorizer) -> PurchaseClassifier:
    return PurchaseClassifier(cache=cache, categorizer=fake_categorizer)


@pytest.fixture
def client(classifier: PurchaseClassifier) -> TestClient:
    """Create FastAPI test client with an offline classifier"""
    app = create_app()
    app.state.classifier = classifier
    return TestClient(app)


@pytest.fixture
def tight_budget_profile() -> FinancialProfile:
    """$3000 income, $2500 expenses, no debt, no savings: $500/month net"""
    return FinancialProfile(
        monthly_income=3000,
        monthly_expenses=2500,
        debt_payments=0,
        current_savings=0,
    )


@pytest.fixture
def comfortable_profile() -> FinancialProfile:
    """$6000 income, $2500 expenses, no debt, 8 months of savings"""
    return FinancialProfile(
        monthly_income=6000,
        monthly_expenses=2500,
        debt_payments=0,
        current_savings=20000,
    )


@pytest.fixture
def laptop_purchase(tight_budget_profile: FinancialProfile) -> PurchaseInput:
    """$1000 work laptop on a tight budget: scores 55.5 (Don't Buy)"""
    return PurchaseInput(
        item_name="Laptop",
        cost=1000,
        purpose="work",
        frequency="Daily",
        financial_profile=tight_budget_profile,
    )


@pytest.fixture
def toothbrush_purchase(comfortable_profile: FinancialProfile) -> PurchaseInput:
    """$100 daily-use health item on a comfortable budget: scores 79.0 (Buy)"""
    return PurchaseInput(
        item_name="Toothbrush",
        cost=100,
        purpose="health",
        frequency="Daily",
        financial_profile=comfortable_profile,
    )
