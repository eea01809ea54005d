"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finance_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finance_tracker.api.v1 import advice, cards, dashboard, fixed_expenses, income
from finance_tracker.bootstrap import run_startup_rollover
from finance_tracker.infrastructure.database.session import SessionLocal, init_db
from finance_tracker.infrastructure.observability.logging import setup_logging
from finance_tracker.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create storage and run the month rollover once, before serving requests"""
    init_db()
    db = SessionLocal()
    try:
        run_startup_rollover(db)
    finally:
        db.close()
    yield


def create_app(run_startup: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finance Tracker",
        description="Income, fixed expenses and card installments with monthly accrual",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan if run_startup else None,
    )

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
    app.include_router(dashboard.router, prefix="/v1", tags=["reports"])
    app.include_router(income.router, prefix="/v1", tags=["income"])
    app.include_router(fixed_expenses.router, prefix="/v1", tags=["fixed-expenses"])
    app.include_router(cards.router, prefix="/v1", tags=["cards"])
    app.include_router(advice.router, prefix="/v1", tags=["advice"])

    return app


app = create_app()
