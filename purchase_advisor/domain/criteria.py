"""Decision criteria and their scoring functions

Each scorer maps raw purchase inputs to a score from 0 (worst) to 10 (best).
Scorers are total: when the inputs they need are missing they return the
neutral score of 5 instead of raising.
"""

from typing import Callable, Dict, List, Optional
from purchase_advisor.domain.models import (
    Alternative,
    CriterionDefinition,
    FinancialProfile,
    PurchaseInput,
)

NEUTRAL_SCORE = 5.0
MIN_SCORE = 0.0
MAX_SCORE = 10.0


CRITERIA: List[CriterionDefinition] = [
    # Financial
    CriterionDefinition("affordability", "Affordability", "Can you afford this without financial strain?", "financial", 0.375),
    CriterionDefinition("valueForMoney", "Value for Money", "Does the price match the expected value?", "financial", 0.25),
    CriterionDefinition("opportunityCost", "Opportunity Cost", "What else could you do with this money?", "financial", 0.25),
    CriterionDefinition("financialGoalAlignment", "Financial Goal Alignment", "Does this align with your financial goals?", "financial", 0.125),
    # Utility
    CriterionDefinition("necessity", "Necessity", "How necessary is this item?", "utility", 1 / 3),
    CriterionDefinition("frequencyOfUse", "Frequency of Use", "How often will you use it?", "utility", 1 / 3),
    CriterionDefinition("longevity", "Longevity", "How long will this item last?", "utility", 1 / 3),
    # Psychological
    CriterionDefinition("emotionalValue", "Emotional Value", "Will this purchase bring lasting satisfaction?", "psychological", 0.25),
    CriterionDefinition("socialFactors", "Social Factors", "Are you buying for the right reasons?", "psychological", 0.25),
    CriterionDefinition("buyersRemorse", "Buyer's Remorse Risk", "Will you regret this purchase?", "psychological", 0.5),
    # Risk
    CriterionDefinition("financialRisk", "Financial Risk", "Risk to your financial stability", "risk", 0.5),
    CriterionDefinition("alternativeAvailability", "Alternative Availability", "Are there better alternatives?", "risk", 0.5),
]

CRITERIA_BY_ID: Dict[str, CriterionDefinition] = {c.id: c for c in CRITERIA}

NECESSITY_KEYWORDS = ("food", "medicine", "health", "safety", "work", "education", "repair")
LUXURY_KEYWORDS = ("entertainment", "luxury", "want", "desire", "upgrade", "collection")
DURABLE_KEYWORDS = ("appliance", "furniture", "tool", "equipment", "device")
CONSUMABLE_KEYWORDS = ("food", "subscription", "ticket", "service")
EMOTIONAL_KEYWORDS = ("gift", "special", "celebrate", "memorial", "dream")
IMPULSE_KEYWORDS = ("impulse", "bored", "sad", "angry", "revenge")
PRESSURE_KEYWORDS = ("everyone has", "peer", "trend", "popular", "status")

FREQUENCY_SCORES = {
    "Daily": 10.0,
    "Weekly": 8.0,
    "Monthly": 6.0,
    "Rarely": 3.0,
    "One-time": 2.0,
}


def clamp_score(score: float) -> float:
    """Clamp a raw score into [0, 10]"""
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _text(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p).lower()


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def cost_percent_of_income(cost: float, profile: Optional[FinancialProfile]) -> Optional[float]:
    """Cost as a percentage of monthly net income, None when it can't be computed"""
    if profile is None:
        return None
    monthly_net = profile.summary.monthly_net_income
    if monthly_net <= 0:
        return None
    return (cost * 100) / monthly_net


def score_affordability(cost: float, profile: Optional[FinancialProfile]) -> float:
    """
    Band cost as % of monthly net income.

    Purchases under 5% of monthly net income are highly affordable;
    anything over half of it scores zero. No net income at all is a hard zero.
    """
    if profile is None:
        return NEUTRAL_SCORE
    if profile.summary.monthly_net_income <= 0:
        return 0.0

    pct = cost_percent_of_income(cost, profile)
    if pct <= 5:
        return 10.0
    if pct <= 10:
        return 8.0
    if pct <= 20:
        return 6.0
    if pct <= 30:
        return 4.0
    if pct <= 50:
        return 2.0
    return 0.0


def score_value_for_money(cost: float, alternative: Optional[Alternative]) -> float:
    """Penalise by how much a cheaper alternative would save"""
    if alternative is not None and cost > 0 and alternative.price < cost:
        savings = ((cost - alternative.price) / cost) * 100
        if savings > 50:
            return 2.0
        if savings > 30:
            return 4.0
        if savings > 20:
            return 6.0
        if savings > 10:
            return 7.0
    return 8.0


def score_opportunity_cost(profile: Optional[FinancialProfile]) -> float:
    if profile is None:
        return NEUTRAL_SCORE

    summary = profile.summary
    has_debt = summary.debt_to_income_ratio > 0
    thin_fund = summary.emergency_fund_months < 3

    if thin_fund and has_debt:
        return 2.0
    if thin_fund:
        return 4.0
    if summary.debt_to_income_ratio > 30:
        return 4.0
    if has_debt:
        return 6.0
    return 8.0


def score_financial_goal_alignment(profile: Optional[FinancialProfile], purpose: Optional[str]) -> float:
    if profile is None:
        return NEUTRAL_SCORE

    goal = profile.financial_goal or "balance"
    if goal in ("save", "debt"):
        return 3.0
    if goal == "invest" and "investment" in _text(purpose):
        return 9.0
    if goal == "balance":
        return 6.0
    return NEUTRAL_SCORE


def score_necessity(item_name: Optional[str], purpose: Optional[str]) -> float:
    text = _text(item_name, purpose)
    if _contains_any(text, NECESSITY_KEYWORDS):
        return 9.0
    if _contains_any(text, LUXURY_KEYWORDS):
        return 3.0
    return 6.0


def score_frequency_of_use(frequency: Optional[str]) -> float:
    return FREQUENCY_SCORES.get(frequency or "", NEUTRAL_SCORE)


def score_longevity(item_name: Optional[str], cost: float) -> float:
    """Durable goods last; pricier durables are assumed better built"""
    text = _text(item_name)
    if _contains_any(text, DURABLE_KEYWORDS):
        return 9.0 if cost > 100 else 7.0
    if _contains_any(text, CONSUMABLE_KEYWORDS):
        return 3.0
    return 6.0


def score_emotional_value(purpose: Optional[str]) -> float:
    text = _text(purpose)
    if _contains_any(text, EMOTIONAL_KEYWORDS):
        return 8.0
    if _contains_any(text, IMPULSE_KEYWORDS):
        return 2.0
    return NEUTRAL_SCORE


def score_social_factors(item_name: Optional[str], purpose: Optional[str]) -> float:
    if _contains_any(_text(item_name, purpose), PRESSURE_KEYWORDS):
        return 3.0
    return 7.0


def score_buyers_remorse(cost: float, profile: Optional[FinancialProfile], frequency: Optional[str]) -> float:
    """Expensive, rarely used items carry the most regret risk"""
    score = NEUTRAL_SCORE

    pct = cost_percent_of_income(cost, profile)
    if pct is not None:
        if pct > 30:
            score -= 3
        elif pct > 20:
            score -= 2
        elif pct > 10:
            score -= 1

    if frequency in ("Rarely", "One-time"):
        score -= 2

    return max(MIN_SCORE, score)


def score_financial_risk(profile: Optional[FinancialProfile]) -> float:
    if profile is None:
        return NEUTRAL_SCORE

    summary = profile.summary
    score = 10.0

    if summary.emergency_fund_months < 3:
        score -= 3
    if summary.debt_to_income_ratio > 40:
        score -= 3
    elif summary.debt_to_income_ratio > 30:
        score -= 2
    elif summary.debt_to_income_ratio > 20:
        score -= 1

    return max(MIN_SCORE, score)


def score_alternative_availability(purchase: PurchaseInput) -> float:
    """A cheaper alternative signals the current choice is suboptimal"""
    return 3.0 if purchase.has_cheaper_alternative else 8.0


Scorer = Callable[[PurchaseInput], float]

SCORERS: Dict[str, Scorer] = {
    "affordability": lambda p: score_affordability(p.cost, p.financial_profile),
    "valueForMoney": lambda p: score_value_for_money(p.cost, p.alternative),
    "opportunityCost": lambda p: score_opportunity_cost(p.financial_profile),
    "financialGoalAlignment": lambda p: score_financial_goal_alignment(p.financial_profile, p.purpose),
    "necessity": lambda p: score_necessity(p.item_name, p.purpose),
    "frequencyOfUse": lambda p: score_frequency_of_use(p.frequency),
    "longevity": lambda p: score_longevity(p.item_name, p.cost),
    "emotionalValue": lambda p: score_emotional_value(p.purpose),
    "socialFactors": lambda p: score_social_factors(p.item_name, p.purpose),
    "buyersRemorse": lambda p: score_buyers_remorse(p.cost, p.financial_profile, p.frequency),
    "financialRisk": lambda p: score_financial_risk(p.financial_profile),
    "alternativeAvailability": score_alternative_availability,
}
