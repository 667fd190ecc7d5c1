"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


BUY = "Buy"
DONT_BUY = "Don't Buy"

FREQUENCIES = ("Daily", "Weekly", "Monthly", "Rarely", "One-time", "")


class PurchaseCategory(str, Enum):
    """Spend bucket used to pick the summary rewrite prompt"""

    ESSENTIAL_DAILY = "ESSENTIAL_DAILY"
    DISCRETIONARY_SMALL = "DISCRETIONARY_SMALL"
    # Referenced by prompt/decision code but never produced by the classifier
    DISCRETIONARY_MEDIUM = "DISCRETIONARY_MEDIUM"
    HIGH_VALUE = "HIGH_VALUE"


@dataclass(frozen=True)
class FinancialSummary:
    """Metrics derived from a FinancialProfile's raw fields"""

    monthly_net_income: float
    debt_to_income_ratio: float  # percent of monthly income
    emergency_fund_months: float

    @property
    def monthly_surplus(self) -> float:
        """Money left each month after expenses and debt payments"""
        return self.monthly_net_income


@dataclass(frozen=True)
class FinancialProfile:
    """User's financial snapshot; the summary is always derived, never stored"""

    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    debt_payments: float = 0.0
    current_savings: float = 0.0
    risk_tolerance: Optional[str] = "moderate"  # "low" | "moderate" | "high"
    financial_goal: Optional[str] = None  # "save" | "debt" | "invest" | "balance"

    @property
    def summary(self) -> FinancialSummary:
        income = self.monthly_income
        outgoings = self.monthly_expenses + self.debt_payments

        debt_to_income = (self.debt_payments * 100) / income if income > 0 else 0.0

        if outgoings > 0:
            fund_months = self.current_savings / outgoings
        else:
            # Savings with nothing to cover last indefinitely
            fund_months = math.inf if self.current_savings > 0 else 0.0

        return FinancialSummary(
            monthly_net_income=income - self.monthly_expenses - self.debt_payments,
            debt_to_income_ratio=debt_to_income,
            emergency_fund_months=fund_months,
        )


@dataclass(frozen=True)
class Alternative:
    """Cheaper or comparable option the user found elsewhere"""

    name: str
    price: float
    retailer: str = ""


@dataclass(frozen=True)
class PurchaseInput:
    """A prospective purchase plus the context needed to score it"""

    item_name: str
    cost: float
    purpose: str = ""
    frequency: str = ""  # one of FREQUENCIES
    financial_profile: Optional[FinancialProfile] = None
    alternative: Optional[Alternative] = None

    @property
    def has_cheaper_alternative(self) -> bool:
        return self.alternative is not None and bool(self.alternative.price) and self.alternative.price < self.cost


@dataclass(frozen=True)
class CriterionDefinition:
    """Static description of one decision criterion"""

    id: str
    name: str
    description: str
    category: str  # "financial" | "utility" | "psychological" | "risk"
    relative_weight: float  # share of the category weight


@dataclass(frozen=True)
class Criterion:
    """A criterion after scoring"""

    id: str
    name: str
    description: str
    category: str
    weight: float
    score: float

    @property
    def weighted_score(self) -> float:
        return self.score * self.weight


@dataclass
class DecisionAnalysis:
    """Output of the weighted decision matrix"""

    scores: Dict[str, Criterion]
    final_score: float
    decision: str  # BUY or DONT_BUY
    confidence: str  # "High" | "Medium" | "Low"


@dataclass
class Reason:
    """Structured explanation for a Don't Buy outcome"""

    factor: str
    label: str
    message: str
    impact_weight: float


@dataclass
class StructuredRecommendation:
    """Canned explanation built from a DecisionAnalysis"""

    decision: str
    reasoning: str
    summary: str
    final_score: float
    confidence: str
    top_positive: List[str]
    top_negative: List[str]
    quote: str = ""


@dataclass
class FlipSuggestion:
    """Minimal change to one lever that turns Don't Buy into Buy"""

    lever: str
    delta: float
    unit: str  # "USD" | "USD_per_month"
    message: str
    timeline_months: Optional[int] = None


@dataclass
class FlipSuggestions:
    """Path A (smallest change) and Path B (price cut), offered side by side"""

    path_a: Optional[FlipSuggestion] = None
    path_b: Optional[FlipSuggestion] = None
    candidates: List[FlipSuggestion] = field(default_factory=list)


@dataclass
class CacheEntry:
    """Cached classification for one item/cost key"""

    key: str
    category: PurchaseCategory
    timestamp: float
    expires_at: float


@dataclass
class ClassificationResult:
    """Category plus whether it was served from cache"""

    category: PurchaseCategory
    cached: bool
