from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from src.api.config import settings
from src.api.core.engine import get_precipitation_feed
from src.models.errors import ValidationError
from src.services.precipitation_feed import PrecipitationFeed
from src.utils.logger import get_logger, setup_logging

setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(
        f"Precipitation feed: {settings.PRECIPITATION_API_URL} "
        f"(refresh every {settings.PRECIPITATION_REFRESH_SECONDS}s)"
    )

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


# Initialize FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Flood risk scoring, scenario simulation and precipitation map API",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression for responses
app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response


# Engine input errors
@app.exception_handler(ValidationError)
async def engine_validation_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected input on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "field": exc.field,
            "detail": str(exc)
        }
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check(feed: PrecipitationFeed = Depends(get_precipitation_feed)):
    """Health check endpoint for monitoring"""
    snapshot = feed.snapshot
    return {
        "status": "healthy",
        "version": VERSION,
        "precipitation_feed": "stale" if snapshot.is_empty else "ready",
        "precipitation_fetched_at": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None
    }


# API version prefix
API_V1_PREFIX = settings.API_V1_STR

# Import routers
from src.api.routers import precipitation, risk, simulation

# Include routers
app.include_router(
    risk.router,
    prefix=f"{API_V1_PREFIX}/risk",
    tags=["Risk"]
)
app.include_router(
    simulation.router,
    prefix=f"{API_V1_PREFIX}/simulation",
    tags=["Simulation"]
)
app.include_router(
    precipitation.router,
    prefix=f"{API_V1_PREFIX}/precipitation",
    tags=["Precipitation"]
)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """API root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "docs": "/api/docs",
        "version": VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/api/docs",
            "risk": f"{API_V1_PREFIX}/risk",
            "simulation": f"{API_V1_PREFIX}/simulation",
            "precipitation": f"{API_V1_PREFIX}/precipitation"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
