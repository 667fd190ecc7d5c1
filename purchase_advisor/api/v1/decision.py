"""POST /v1/decision - Buy / Don't Buy decision endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from purchase_advisor.api.v1.schemas import (
    CriterionSchema,
    DecisionRequest,
    DecisionResponse,
    FlipSuggestionSchema,
    FlipSuggestionsSchema,
    MatrixRowSchema,
    ReasonSchema,
)
from purchase_advisor.api.dependencies import get_classifier, get_request_id
from purchase_advisor.domain.classification import PurchaseClassifier
from purchase_advisor.domain.models import DONT_BUY, FlipSuggestion
from purchase_advisor.domain.prompts import prompt_for_category
from purchase_advisor.domain.reasons import build_recommendation, extract_reasons, format_decision_matrix
from purchase_advisor.domain.scoring import calculate_decision_scores
from purchase_advisor.domain.sensitivity import solve_flip
from purchase_advisor.infrastructure.observability.metrics import record_classification, record_decision
from purchase_advisor.infrastructure.observability.logging import log_classification, log_decision

router = APIRouter()


def _suggestion_schema(suggestion: FlipSuggestion | None) -> FlipSuggestionSchema | None:
    if suggestion is None:
        return None
    return FlipSuggestionSchema(
        lever=suggestion.lever,
        delta=suggestion.delta,
        unit=suggestion.unit,
        message=suggestion.message,
        timeline_months=suggestion.timeline_months,
    )


@router.post("/decision", response_model=DecisionResponse)
async def create_decision(
    request_body: DecisionRequest,
    request: Request,
    classifier: PurchaseClassifier = Depends(get_classifier),
):
    """
    Score a prospective purchase and explain the outcome.

    Flow:
    1. Score the twelve criteria and aggregate into a 0-100 final score
    2. Build canned reasoning, summary, and structured reasons
    3. For Don't Buy, solve for the minimal change that flips the decision
    4. Optionally classify the purchase and select the summary rewrite prompt
    5. Record metrics and logs, return the analysis
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        purchase = request_body.to_domain()

        # 1. Score
        analysis = calculate_decision_scores(purchase)

        # 2. Explain
        recommendation = build_recommendation(analysis, purchase)
        reasons = extract_reasons(analysis, purchase)

        # 3. Flip suggestions for Don't Buy only
        flips = None
        if analysis.decision == DONT_BUY:
            flips = solve_flip(purchase, analysis.final_score)

        # 4. Category and prompt selection
        category = None
        summary_prompt = None
        if request_body.classify:
            result = await classifier.classify(purchase.item_name, purchase.cost)
            category = result.category.value
            summary_prompt = prompt_for_category(result.category, recommendation.summary, analysis.decision)
            record_classification(category, result.cached, len(classifier.cache))
            log_classification(request_id, purchase.item_name, category, result.cached)

        # Record metrics and logs
        flip_levers = [s.lever for s in flips.candidates] if flips else []
        duration_ms = (time.time() - start_time) * 1000
        record_decision(analysis.decision, analysis.final_score, flip_levers)
        log_decision(request_id, purchase.item_name, analysis.decision, analysis.final_score, flip_levers, duration_ms)

        matrix = format_decision_matrix(analysis)

        return DecisionResponse(
            decision=analysis.decision,
            final_score=round(analysis.final_score, 1),
            confidence=analysis.confidence,
            summary=recommendation.summary,
            reasoning=recommendation.reasoning,
            quote=recommendation.quote,
            top_positive=recommendation.top_positive,
            top_negative=recommendation.top_negative,
            criteria=[
                CriterionSchema(
                    id=c.id,
                    name=c.name,
                    category=c.category,
                    score=c.score,
                    weight=c.weight,
                    weighted_score=c.weighted_score,
                )
                for c in analysis.scores.values()
            ],
            reasons=[
                ReasonSchema(factor=r.factor, label=r.label, message=r.message, impact_weight=r.impact_weight)
                for r in reasons
            ],
            decision_matrix={
                category_name: [MatrixRowSchema(**row) for row in rows]
                for category_name, rows in matrix.items()
            },
            flip_suggestions=(
                FlipSuggestionsSchema(
                    path_a=_suggestion_schema(flips.path_a),
                    path_b=_suggestion_schema(flips.path_b),
                    candidates=[_suggestion_schema(s) for s in flips.candidates],
                )
                if flips
                else None
            ),
            category=category,
            summary_prompt=summary_prompt,
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
