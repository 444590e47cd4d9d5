"""
FastAPI Application Entry Point

Integrates:
  - Auth routes (login, current user)
  - Order routes (CRUD + AI summary)
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import hash_password
from config import Config, ProviderCredentials
from ordering import select_provider
from routes import auth_router, orders_router
from routes.dependencies import get_store
from storage import StorageError

# Setup logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def seed_test_user() -> None:
    """Ensure the configured test login exists with the configured password."""
    try:
        get_store().upsert_user(Config.SEED_USER_EMAIL, hash_password(Config.SEED_USER_PASSWORD))
        logger.info(f"Seeded test user {Config.SEED_USER_EMAIL}")
    except StorageError as e:
        logger.error(f"seed: insert test user failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    choice = select_provider(ProviderCredentials.from_env())
    logger.info("=" * 60)
    logger.info("Order service starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"Database: {Config.DATABASE_PATH}")
    logger.info(f"Summary provider: {choice.provider if choice else 'none (fallback only)'}")
    logger.info("=" * 60)

    seed_test_user()

    yield

    # Shutdown
    logger.info("Order service shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Order Preferences API",
    description="Order preferences with AI-generated order summaries",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error envelope: {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "invalid json"})


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "internal error"},
        )


# Include routers
app.include_router(auth_router)
app.include_router(orders_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness probe)."""
    if not Config.validate():
        return JSONResponse(status_code=503, content={"status": "not_ready", "reason": "invalid configuration"})
    try:
        get_store()
    except StorageError as e:
        return JSONResponse(status_code=503, content={"status": "not_ready", "reason": str(e)})
    return {"status": "ready"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=Config.APP_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
