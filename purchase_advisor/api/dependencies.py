"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from purchase_advisor.config import settings
from purchase_advisor.domain.classification import ClassificationCache, PurchaseClassifier
from purchase_advisor.infrastructure.clients.categorization import CategorizationClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_classifier() -> PurchaseClassifier:
    """Construct the process-wide classifier with its cache and API client"""
    cache = ClassificationCache(
        max_size=settings.classification_cache_max_size,
        ttl_seconds=settings.classification_cache_ttl_seconds,
    )
    return PurchaseClassifier(cache=cache, categorizer=CategorizationClient())


def get_classifier(request: Request) -> PurchaseClassifier:
    """Provide the classifier built once at application startup"""
    return request.app.state.classifier
