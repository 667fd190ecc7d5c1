"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from purchase_advisor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from purchase_advisor.api.dependencies import build_classifier
from purchase_advisor.api.v1 import decision, classification
from purchase_advisor.infrastructure.observability.logging import setup_logging
from purchase_advisor.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Purchase Advisor",
        description="Buy / Don't Buy scoring, flip suggestions, and purchase classification",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # One classifier (and cache) per application instance
    app.state.classifier = build_classifier()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])
    app.include_router(classification.router, prefix="/v1", tags=["classification"])

    return app


app = create_app()
