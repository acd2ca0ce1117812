"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payment_calculator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from payment_calculator.api.v1 import compare, curve, rates
from payment_calculator.infrastructure.observability.logging import setup_logging
from payment_calculator.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Payment Processing Cost Calculator",
        description="Compare direct card processing against a merchant of record",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(compare.router, prefix="/v1", tags=["comparison"])
    app.include_router(curve.router, prefix="/v1", tags=["curve"])
    app.include_router(rates.router, prefix="/v1", tags=["rates"])

    return app


app = create_app()
