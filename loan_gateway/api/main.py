"""FastAPI application factory"""

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from loan_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_gateway.api.routers import credit, customers, kyc, offers
from loan_gateway.api.routers.schemas import HealthResponse
from loan_gateway.infrastructure.clients.kyc_verifier import VerificationCoordinator
from loan_gateway.infrastructure.database.fixtures import seed_database
from loan_gateway.infrastructure.database.models import Base
from loan_gateway.infrastructure.database.session import build_engine, build_session_factory
from loan_gateway.infrastructure.observability.logging import setup_logging
from loan_gateway.config import Settings, settings
from loan_gateway.utils.date_utils import utc_now_iso

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create and seed the store on startup; cancel pending verifications on shutdown"""
    Base.metadata.create_all(bind=app.state.engine)
    if app.state.settings.seed_fixtures:
        db = app.state.session_factory()
        try:
            seed_database(db)
        finally:
            db.close()

    yield

    await app.state.kyc_verifier.shutdown()
    app.state.engine.dispose()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
    logging.warning(
        "Request validation failed",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "path": request.url.path},
    )
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request", "details": details},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Loan Gateway",
        description="Mock loan-origination backend: customers, KYC, offers and credit decisions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    rng = random.Random(app_settings.random_seed)
    app.state.settings = app_settings
    app.state.engine = build_engine(app_settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.rng = rng
    app.state.kyc_verifier = VerificationCoordinator(
        rng=rng,
        min_delay_seconds=app_settings.kyc_verification_min_delay_seconds,
        max_delay_seconds=app_settings.kyc_verification_max_delay_seconds,
        timeout_seconds=app_settings.kyc_verification_timeout_seconds,
        poll_interval_seconds=app_settings.kyc_verification_poll_interval_seconds,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse(status="ok", service=app_settings.service_name, timestamp=utc_now_iso())

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(customers.router, prefix="/customers", tags=["customers"])
    app.include_router(kyc.router, prefix="/kyc", tags=["kyc"])
    app.include_router(credit.router, prefix="/credit", tags=["credit"])
    app.include_router(offers.router, prefix="/offers", tags=["offers"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    uvicorn.run("loan_gateway.api.main:app", host="0.0.0.0", port=3000, log_config=None)
