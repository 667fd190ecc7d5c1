"""Decision aggregator - weighted decision matrix over the twelve criteria"""

from typing import Dict, Optional
from purchase_advisor.domain.criteria import CRITERIA, SCORERS, clamp_score
from purchase_advisor.domain.models import BUY, DONT_BUY, Criterion, DecisionAnalysis, PurchaseInput
from purchase_advisor.domain.weights import build_criterion_weights

BUY_THRESHOLD = 60.0


def weights_for(purchase: PurchaseInput) -> Dict[str, float]:
    """Criterion weights personalised by the purchase's financial profile"""
    profile = purchase.financial_profile
    return build_criterion_weights(profile.risk_tolerance if profile else None)


def score_criteria(purchase: PurchaseInput, weights: Dict[str, float]) -> Dict[str, Criterion]:
    """Run every registered scorer and attach its weight"""
    scores: Dict[str, Criterion] = {}
    for definition in CRITERIA:
        scores[definition.id] = Criterion(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            category=definition.category,
            weight=weights[definition.id],
            score=clamp_score(SCORERS[definition.id](purchase)),
        )
    return scores


def calculate_final_score(scores: Dict[str, Criterion]) -> float:
    """
    Normalise the weighted sum to a 0-100 scale.

    Divides by the actual weight sum rather than assuming 1.0 so any residual
    normalisation drift cancels out.
    """
    total_weight = sum(c.weight for c in scores.values())
    if total_weight <= 0:
        return 50.0
    total_weighted = sum(c.weighted_score for c in scores.values())
    return (total_weighted / total_weight) * 10


def determine_decision(final_score: float) -> str:
    return BUY if final_score >= BUY_THRESHOLD else DONT_BUY


def determine_confidence(final_score: float) -> str:
    """
    Confidence is highest far from the middle of the scale.

    - >= 80 or <= 20: High
    - >= 65 or <= 35: Medium
    - otherwise:      Low
    """
    if final_score >= 80 or final_score <= 20:
        return "High"
    if final_score >= 65 or final_score <= 35:
        return "Medium"
    return "Low"


def calculate_decision_scores(
    purchase: PurchaseInput,
    weights: Optional[Dict[str, float]] = None,
) -> DecisionAnalysis:
    """
    Main entry point: score a purchase and make the Buy / Don't Buy call.

    Pass precomputed weights to reuse them across repeated evaluations of
    variants of the same purchase.
    """
    if weights is None:
        weights = weights_for(purchase)

    scores = score_criteria(purchase, weights)
    final_score = calculate_final_score(scores)

    return DecisionAnalysis(
        scores=scores,
        final_score=final_score,
        decision=determine_decision(final_score),
        confidence=determine_confidence(final_score),
    )
