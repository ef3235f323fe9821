"""Main FastAPI application"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from api.routes import admin, comedians, episodes, moments, reviews
from api.schemas import HealthResponse
from app.config import get_settings
from app.middleware import TimingMiddleware
from core.database import close_db, get_engine
from core.exceptions import BucketPullError
from core.logging_config import setup_logging

APP_VERSION = "0.1.0"

settings = get_settings()

setup_logging()
logger = logging.getLogger(__name__)


async def check_database() -> str | None:
    """Run a trivial query; returns the error text, or None when reachable."""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database check failed: {e}", exc_info=True)
        return str(e)
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database before serving; dispose the pool on shutdown"""
    logger.info(f"Starting {settings.app_name} v{APP_VERSION} ({settings.app_env})")

    error = await check_database()
    if error is not None:
        raise RuntimeError(f"Database unavailable on startup: {error}")
    logger.info("Database connection verified on startup")

    yield

    await close_db()
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="Comedy podcast fan site API",
    version=APP_VERSION,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TimingMiddleware)

for router_module in (episodes, comedians, reviews, moments, admin):
    app.include_router(router_module.router)


@app.exception_handler(BucketPullError)
async def bucketpull_error_handler(request: Request, exc: BucketPullError):
    """Render service errors raised outside route bodies, e.g. by the admin gate"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "name": settings.app_name,
        "version": APP_VERSION,
        "status": "running",
        "environment": settings.app_env,
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health():
    """Health check endpoint"""
    error = await check_database()
    return HealthResponse(
        status="healthy" if error is None else "unhealthy",
        database_connected=error is None,
        database_error=error,
        version=APP_VERSION,
    )


@app.get("/api", tags=["API"])
async def api_info():
    """List the public route groups"""
    return {
        "name": settings.app_name,
        "version": APP_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs" if settings.debug else "disabled",
            "episodes": episodes.router.prefix,
            "comedians": comedians.router.prefix,
            "reviews": reviews.router.prefix,
            "moments": moments.router.prefix,
            "admin": admin.router.prefix,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
