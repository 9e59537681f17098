"""FastAPI application entry point (remote payment links service)."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.api.routes import dashboard, health, orders, stores
from src.database import create_tables
from src.logging_config import configure_logging
import structlog

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level, settings.log_json)
    if settings.is_development:
        await create_tables()
    logger.info("application_startup", env=settings.app_env)
    yield
    logger.info("application_shutdown")


# Create FastAPI app
app = FastAPI(
    title="Payment Links API",
    description="Stores, payment-link orders and dashboard metrics",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(stores.router, prefix="/api", tags=["Stores"])
app.include_router(orders.router, prefix="/api", tags=["Orders"])
app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Payment Links API",
        "version": "0.1.0",
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=5000,
        reload=settings.is_development,
    )
