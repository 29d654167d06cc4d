"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from rto_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from rto_engine.api.v1 import affordability, recommendations, risk, schedule, trends
from rto_engine.infrastructure.observability.logging import setup_logging
from rto_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Rent-to-Own Engine",
        description="Payment schedules, affordability, risk and property recommendations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logging.error(f"Unexpected error: {exc}", exc_info=exc, extra={"request_id": request_id})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(schedule.router, prefix="/v1", tags=["schedules"])
    app.include_router(affordability.router, prefix="/v1", tags=["affordability"])
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(trends.router, prefix="/v1", tags=["trends"])
    app.include_router(recommendations.router, prefix="/v1", tags=["recommendations"])

    return app


app = create_app()
