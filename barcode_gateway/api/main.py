"""Payment barcode gateway application"""

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import Session
from starlette.responses import Response

from barcode_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from barcode_gateway.api.v1 import barcodes, quota
from barcode_gateway.infrastructure.database.session import get_db, ping
from barcode_gateway.infrastructure.observability.logging import setup_logging
from barcode_gateway.config import settings

setup_logging(settings.log_level)

OPENAPI_TAGS = [
    {"name": "barcodes", "description": "Three-segment payment barcode schedules (pure computation)"},
    {"name": "quota", "description": "Idempotent quota deduction and balance lookup"},
]


def create_app() -> FastAPI:
    """Build the gateway: barcode and quota routers plus operational endpoints"""
    app = FastAPI(
        title="Payment Barcode Gateway",
        description="Payment barcode generation and idempotent quota deduction",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
    )

    # Last added runs first, so the request id exists before metrics are taken
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", include_in_schema=False)
    def health_check():
        """Liveness: the process is up; says nothing about the database"""
        return {"status": "ok", "service": settings.service_name}

    @app.get("/ready", include_in_schema=False)
    def readiness_check(db: Session = Depends(get_db)):
        """Readiness: quota deductions need the database, barcode generation does not"""
        if not ping(db):
            return JSONResponse(status_code=503, content={"status": "unavailable", "database": "down"})
        return {"status": "ok", "database": "up"}

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(barcodes.router, prefix="/v1", tags=["barcodes"])
    app.include_router(quota.router, prefix="/v1", tags=["quota"])

    return app


app = create_app()
