"""Criteria weight builder - category weights personalised by risk tolerance"""

from typing import Dict, Optional
from purchase_advisor.domain.criteria import CRITERIA

BASE_CATEGORY_WEIGHTS: Dict[str, float] = {
    "financial": 0.40,
    "utility": 0.30,
    "psychological": 0.20,
    "risk": 0.10,
}

RISK_TOLERANCE_ADJUSTMENTS: Dict[str, Dict[str, float]] = {
    "low": {"risk": 0.05, "utility": -0.03, "psychological": -0.02},
    "moderate": {},
    "high": {"risk": -0.03, "utility": 0.02, "psychological": 0.01},
}

DEFAULT_RISK_TOLERANCE = "moderate"
NORMALIZATION_EPSILON = 0.001


def normalize_risk_tolerance(risk_tolerance: Optional[str]) -> str:
    """Fall back to moderate for missing or unrecognised settings"""
    if isinstance(risk_tolerance, str):
        key = risk_tolerance.strip().lower()
        if key in RISK_TOLERANCE_ADJUSTMENTS:
            return key
    return DEFAULT_RISK_TOLERANCE


def build_category_weights(risk_tolerance: Optional[str] = None) -> Dict[str, float]:
    """
    Apply the risk-tolerance deltas to the base category weights.

    Weights are renormalised only when their sum drifts from 1.0 by more
    than NORMALIZATION_EPSILON.
    """
    adjustments = RISK_TOLERANCE_ADJUSTMENTS[normalize_risk_tolerance(risk_tolerance)]

    weights = {
        category: base + adjustments.get(category, 0.0)
        for category, base in BASE_CATEGORY_WEIGHTS.items()
    }

    total = sum(weights.values())
    if abs(total - 1.0) > NORMALIZATION_EPSILON:
        weights = {category: weight / total for category, weight in weights.items()}

    return weights


def build_criterion_weights(risk_tolerance: Optional[str] = None) -> Dict[str, float]:
    """Absolute weight per criterion: category weight x relative weight"""
    category_weights = build_category_weights(risk_tolerance)
    return {
        criterion.id: category_weights[criterion.category] * criterion.relative_weight
        for criterion in CRITERIA
    }
