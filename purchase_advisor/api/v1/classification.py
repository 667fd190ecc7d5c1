"""/v1/classification - Spend category classification and cache management"""

from fastapi import APIRouter, Depends, Request, Response

from purchase_advisor.api.v1.schemas import (
    CacheEntrySchema,
    CacheStatsResponse,
    ClassificationRequest,
    ClassificationResponse,
)
from purchase_advisor.api.dependencies import get_classifier, get_request_id
from purchase_advisor.domain.classification import PurchaseClassifier
from purchase_advisor.infrastructure.observability.metrics import classification_cache_size_gauge, record_classification
from purchase_advisor.infrastructure.observability.logging import log_classification

router = APIRouter()


@router.post("/classification", response_model=ClassificationResponse)
async def classify_purchase(
    request_body: ClassificationRequest,
    request: Request,
    classifier: PurchaseClassifier = Depends(get_classifier),
):
    """
    Classify a purchase into a spend category.

    Returns:
        Category plus whether it was served from cache. Malformed input or a
        failed categorization call yields DISCRETIONARY_SMALL.
    """
    result = await classifier.classify(request_body.item_name, request_body.cost)

    record_classification(result.category.value, result.cached, len(classifier.cache))
    log_classification(get_request_id(request), str(request_body.item_name), result.category.value, result.cached)

    return ClassificationResponse(category=result.category.value, cached=result.cached)


@router.get("/classification/cache", response_model=CacheStatsResponse)
def get_cache_stats(classifier: PurchaseClassifier = Depends(get_classifier)):
    """Live (non-expired) cache entries, least recently touched first"""
    stats = classifier.cache.stats()
    return CacheStatsResponse(
        size=stats["size"],
        max_size=stats["max_size"],
        entries=[CacheEntrySchema(**entry) for entry in stats["entries"]],
    )


@router.delete("/classification/cache", status_code=204)
def reset_cache(classifier: PurchaseClassifier = Depends(get_classifier)):
    """Drop every cached classification"""
    classifier.cache.clear()
    classification_cache_size_gauge.set(0)
    return Response(status_code=204)
