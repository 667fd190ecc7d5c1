"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

from purchase_advisor.domain.models import Alternative, FinancialProfile, PurchaseInput


class FinancialProfileSchema(BaseModel):
    """User's monthly financial snapshot"""

    monthly_income: float = Field(0.0, ge=0, description="Monthly take-home income in USD")
    monthly_expenses: float = Field(0.0, ge=0, description="Monthly living expenses in USD")
    debt_payments: float = Field(0.0, ge=0, description="Monthly debt payments in USD")
    current_savings: float = Field(0.0, ge=0, description="Emergency fund / liquid savings in USD")
    risk_tolerance: Optional[str] = "moderate"
    financial_goal: Optional[str] = None

    def to_domain(self) -> FinancialProfile:
        return FinancialProfile(**self.model_dump())


class AlternativeSchema(BaseModel):
    """Alternative product the user is comparing against"""

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    retailer: str = ""


class DecisionRequest(BaseModel):
    """Request body for POST /v1/decision"""

    item_name: str = Field(..., min_length=1, description="Item being considered")
    cost: float = Field(..., ge=0, description="Price in USD")
    purpose: str = ""
    frequency: Literal["Daily", "Weekly", "Monthly", "Rarely", "One-time", ""] = ""
    financial_profile: Optional[FinancialProfileSchema] = None
    alternative: Optional[AlternativeSchema] = None
    classify: bool = Field(True, description="Classify the purchase and select a summary prompt")

    def to_domain(self) -> PurchaseInput:
        return PurchaseInput(
            item_name=self.item_name,
            cost=self.cost,
            purpose=self.purpose,
            frequency=self.frequency,
            financial_profile=self.financial_profile.to_domain() if self.financial_profile else None,
            alternative=Alternative(**self.alternative.model_dump()) if self.alternative else None,
        )


class CriterionSchema(BaseModel):
    """Single scored criterion"""

    id: str
    name: str
    category: str
    score: float
    weight: float
    weighted_score: float


class ReasonSchema(BaseModel):
    """Structured reason behind a Don't Buy"""

    factor: str
    label: str
    message: str
    impact_weight: float


class FlipSuggestionSchema(BaseModel):
    """Minimal change that would turn the decision into Buy"""

    lever: str
    delta: float
    unit: str
    message: str
    timeline_months: Optional[int] = None


class FlipSuggestionsSchema(BaseModel):
    """Path A (smallest change) and Path B (price cut)"""

    path_a: Optional[FlipSuggestionSchema] = None
    path_b: Optional[FlipSuggestionSchema] = None
    candidates: List[FlipSuggestionSchema] = []


class MatrixRowSchema(BaseModel):
    """Criterion row in the decision matrix display"""

    criterion: str
    score: float
    weight: str
    impact: str


class DecisionResponse(BaseModel):
    """Response for POST /v1/decision"""

    decision: str
    final_score: float
    confidence: str
    summary: str
    reasoning: str
    quote: str
    top_positive: List[str]
    top_negative: List[str]
    criteria: List[CriterionSchema]
    reasons: List[ReasonSchema]
    decision_matrix: Dict[str, List[MatrixRowSchema]]
    flip_suggestions: Optional[FlipSuggestionsSchema] = None
    category: Optional[str] = None
    summary_prompt: Optional[str] = None


class ClassificationRequest(BaseModel):
    """Request body for POST /v1/classification; malformed values map to the fallback category"""

    item_name: Any = None
    cost: Any = None


class ClassificationResponse(BaseModel):
    """Response for POST /v1/classification"""

    category: str
    cached: bool


class CacheEntrySchema(BaseModel):
    """Single classification cache entry"""

    key: str
    category: str
    timestamp: float
    expires_at: float


class CacheStatsResponse(BaseModel):
    """Response for GET /v1/classification/cache"""

    size: int
    max_size: int
    entries: List[CacheEntrySchema]
