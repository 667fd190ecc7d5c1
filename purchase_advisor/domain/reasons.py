"""Reason and factor extraction - explains a decision in canned phrases"""

from typing import Dict, List
from purchase_advisor.domain.criteria import cost_percent_of_income
from purchase_advisor.domain.models import (
    BUY,
    Criterion,
    DecisionAnalysis,
    PurchaseInput,
    Reason,
    StructuredRecommendation,
)
from purchase_advisor.utils.money import format_usd

POSITIVE_SCORE = 7.0
NEGATIVE_SCORE = 4.0
MAX_FACTORS = 3
MIN_EMERGENCY_FUND_MONTHS = 3

STRONG_BUY_SCORE = 80.0
STRONG_DONT_BUY_SCORE = 30.0

QUOTES: Dict[str, List[str]] = {
    "strongBuy": [
        "Price is what you pay. Value is what you get.",
        "The best investment you can make is in yourself.",
        "Opportunities come infrequently. When it rains gold, put out the bucket, not the thimble.",
    ],
    "buy": [
        "It's far better to buy a wonderful company at a fair price than a fair company at a wonderful price.",
        "The big money is not in the buying and selling, but in the owning.",
        "Time is the friend of the wonderful company, the enemy of the mediocre.",
    ],
    "dontBuy": [
        "The big money is not in the buying and selling, but in the waiting.",
        "You don't have to swing at everything. You can wait for your pitch.",
        "The first rule of compounding: Never interrupt it unnecessarily.",
    ],
    "strongDontBuy": [
        "It's better to be roughly right than precisely wrong.",
        "The iron rule of nature is: you get what you reward for.",
        "Simplicity has a way of improving performance by enabling us to better understand what we are doing.",
    ],
}

SCORE_EXPLANATIONS: Dict[str, Dict[str, str]] = {
    "affordability": {"high": "Well within your budget", "medium": "Manageable expense", "low": "Significant financial impact"},
    "valueForMoney": {"high": "Excellent value proposition", "medium": "Fair market value", "low": "Overpriced compared to alternatives"},
    "opportunityCost": {"high": "Minimal impact on other goals", "medium": "Some trade-offs required", "low": "Significant opportunity cost"},
    "financialGoalAlignment": {"high": "Aligns well with financial goals", "medium": "Neutral impact on goals", "low": "May detract from financial goals"},
    "necessity": {"high": "Essential item", "medium": "Useful but not critical", "low": "Luxury or want"},
    "frequencyOfUse": {"high": "Will be used regularly", "medium": "Moderate usage expected", "low": "Limited usage anticipated"},
    "longevity": {"high": "Durable and long-lasting", "medium": "Average lifespan", "low": "Consumable or short-lived"},
    "emotionalValue": {"high": "High potential for satisfaction", "medium": "Some emotional benefit", "low": "Low emotional return"},
    "socialFactors": {"high": "Purchase is internally motivated", "medium": "Some social influence", "low": "Likely driven by social pressure"},
    "buyersRemorse": {"high": "Low risk of regret", "medium": "Some risk of regret", "low": "High risk of buyer's remorse"},
    "financialRisk": {"high": "Low risk to financial stability", "medium": "Moderate financial impact", "low": "High risk to financial health"},
    "alternativeAvailability": {"high": "This is a good option", "medium": "Alternatives exist but are comparable", "low": "Better alternatives are likely available"},
}


def score_band(score: float) -> str:
    if score >= POSITIVE_SCORE:
        return "high"
    if score >= NEGATIVE_SCORE:
        return "medium"
    return "low"


def score_explanation(criterion_id: str, score: float) -> str:
    phrases = SCORE_EXPLANATIONS.get(criterion_id)
    if phrases is None:
        return f"Score: {score:g}/10"
    return phrases[score_band(score)]


def quote_band(decision: str, final_score: float) -> str:
    if decision == BUY:
        return "strongBuy" if final_score >= STRONG_BUY_SCORE else "buy"
    return "strongDontBuy" if final_score <= STRONG_DONT_BUY_SCORE else "dontBuy"


def select_quote(decision: str, final_score: float) -> str:
    """Investing quote matching the decision; the same score always gets the same quote"""
    quotes = QUOTES[quote_band(decision, final_score)]
    return quotes[int(final_score) % len(quotes)]


def top_positive_factors(analysis: DecisionAnalysis, limit: int = MAX_FACTORS) -> List[Criterion]:
    """Highest weighted scores among criteria scoring 7 or more"""
    ranked = sorted(analysis.scores.values(), key=lambda c: c.weighted_score, reverse=True)
    return [c for c in ranked if c.score >= POSITIVE_SCORE][:limit]


def top_negative_factors(analysis: DecisionAnalysis, limit: int = MAX_FACTORS) -> List[Criterion]:
    """Lowest weighted scores among criteria scoring 4 or less"""
    ranked = sorted(analysis.scores.values(), key=lambda c: c.weighted_score)
    return [c for c in ranked if c.score <= NEGATIVE_SCORE][:limit]


def generate_summary(analysis: DecisionAnalysis) -> str:
    """Two-sentence summary built around the most influential factors"""
    by_impact = sorted(
        analysis.scores.values(),
        key=lambda c: abs(c.score - 5) * c.weight,
        reverse=True,
    )
    top_positive = next((c for c in by_impact if c.score >= POSITIVE_SCORE), None)
    top_negative = next((c for c in by_impact if c.score <= NEGATIVE_SCORE), None)

    positive = top_positive.name.lower() if top_positive else "its potential utility"
    negative = top_negative.name.lower() if top_negative else "the overall cost"

    if analysis.decision == BUY:
        return (
            f"This appears to be a reasonable purchase, primarily due to its {positive}. "
            f"However, carefully consider the concern of {negative} before making a final decision."
        )
    return (
        f"It might be wise to hold off on this purchase, mainly because of concerns about {negative}. "
        f"While its {positive} is a point in its favor, it may not be the right time to buy."
    )


def build_recommendation(analysis: DecisionAnalysis, purchase: PurchaseInput) -> StructuredRecommendation:
    """Assemble the detailed reasoning text and summary for a decision"""
    positives = top_positive_factors(analysis)
    negatives = top_negative_factors(analysis)

    lines = [f"Based on a comprehensive decision analysis using {len(analysis.scores)} criteria:", ""]

    if positives:
        lines.append("**Positive factors:**")
        lines.extend(f"• {c.name}: {score_explanation(c.id, c.score)}" for c in positives)
        lines.append("")

    if negatives:
        lines.append("**Concerns:**")
        lines.extend(f"• {c.name}: {score_explanation(c.id, c.score)}" for c in negatives)
        lines.append("")

    lines.append(
        f"**Overall Assessment:** The weighted score is {analysis.final_score:.1f}/100 "
        f"({analysis.confidence} confidence)."
    )
    lines.append("")

    if analysis.decision == BUY:
        lines.append("This purchase appears to be well-justified based on your financial situation and the item's utility.")
    else:
        lines.append("This purchase may not be optimal at this time. Consider waiting or exploring alternatives.")

    if purchase.has_cheaper_alternative:
        alternative = purchase.alternative
        lines.append("")
        lines.append(
            f"**Note:** A cheaper alternative ({alternative.name}) is available for {format_usd(alternative.price)}, "
            f"which could save you ${purchase.cost - alternative.price:,.2f}."
        )

    return StructuredRecommendation(
        decision=analysis.decision,
        reasoning="\n".join(lines),
        summary=generate_summary(analysis),
        final_score=round(analysis.final_score, 1),
        confidence=analysis.confidence,
        top_positive=[c.name for c in positives],
        top_negative=[c.name for c in negatives],
        quote=select_quote(analysis.decision, analysis.final_score),
    )


def extract_reasons(analysis: DecisionAnalysis, purchase: PurchaseInput) -> List[Reason]:
    """
    Structured "why not" reasons for Don't Buy outcomes.

    Emitted for poor affordability and for financial risk backed by a thin
    emergency fund. Buy outcomes get no reasons.
    """
    if analysis.decision == BUY:
        return []

    reasons: List[Reason] = []
    profile = purchase.financial_profile

    affordability = analysis.scores.get("affordability")
    if affordability is not None and affordability.score <= NEGATIVE_SCORE:
        pct = cost_percent_of_income(purchase.cost, profile)
        if pct is not None:
            message = f"This purchase would take {pct:.0f}% of your monthly net income."
        else:
            message = "You have no monthly net income left over to absorb this purchase."
        reasons.append(
            Reason(
                factor="affordability",
                label=affordability.name,
                message=message,
                impact_weight=affordability.weight,
            )
        )

    financial_risk = analysis.scores.get("financialRisk")
    if financial_risk is not None and financial_risk.score <= NEGATIVE_SCORE and profile is not None:
        months = profile.summary.emergency_fund_months
        if months < MIN_EMERGENCY_FUND_MONTHS:
            reasons.append(
                Reason(
                    factor="financialRisk",
                    label=financial_risk.name,
                    message=(
                        f"Your emergency fund covers {months:.1f} months of expenses; "
                        f"{MIN_EMERGENCY_FUND_MONTHS} months is the recommended minimum."
                    ),
                    impact_weight=financial_risk.weight,
                )
            )

    return sorted(reasons, key=lambda r: r.impact_weight, reverse=True)


def format_decision_matrix(analysis: DecisionAnalysis) -> Dict[str, List[dict]]:
    """Group scored criteria by category for display"""
    matrix: Dict[str, List[dict]] = {"financial": [], "utility": [], "psychological": [], "risk": []}

    for criterion in analysis.scores.values():
        if criterion.category not in matrix:
            continue
        if criterion.score >= POSITIVE_SCORE:
            impact = "Positive"
        elif criterion.score <= NEGATIVE_SCORE:
            impact = "Negative"
        else:
            impact = "Neutral"
        matrix[criterion.category].append(
            {
                "criterion": criterion.name,
                "score": criterion.score,
                "weight": f"{criterion.weight * 100:.0f}%",
                "impact": impact,
            }
        )

    return matrix
