"""
CFIP: FastAPI Main Application
Carbon footprint API for freight shipments, with rate limiting,
structured error handling and structured logging.
"""
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from api.api.v1 import api_router as api_v1_router
from api.config import settings
from api.core.logging import setup_logging, bind_request_context, clear_request_context
from api.core.rate_limit import limiter
from api.schemas import HealthResponse
from api.services.database import AsyncSessionLocal, init_db, check_db_health
from api.utils.seeders import seed_emission_factors
from carbon.emission_factors import FactorNotFoundError

setup_logging(
    level=settings.LOG_LEVEL,
    json_format=settings.LOG_JSON,
    environment=settings.ENV
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info(
        "Starting CFIP API",
        version="1.0.0",
        environment=settings.ENV,
        region=settings.DEFAULT_REGION
    )
    await init_db()

    if settings.SEED_EMISSION_FACTORS:
        async with AsyncSessionLocal() as db:
            result = await seed_emission_factors(db)
            logger.info("emission_factor_seed", status=result["status"], total=result["total"])

    yield

    logger.info("Shutting down CFIP API")


app = FastAPI(
    title="CFIP API",
    description="Carbon footprint calculator for freight shipments",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Add rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==========================================
# REQUEST LOGGING MIDDLEWARE
# ==========================================
@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log all HTTP requests with timing and a request ID."""
    request_id = bind_request_context(
        correlation_id=request.headers.get("X-Correlation-ID")
    )
    correlation_id = structlog.contextvars.get_contextvars()["correlation_id"]
    start_time = time.time()

    logger.info(
        "request_started",
        method=request.method,
        path=request.url.path,
        client_ip=get_remote_address(request)
    )

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(process_time * 1000, 2)
        )

        response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Correlation-ID"] = correlation_id
        return response

    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            "request_failed",
            method=request.method,
            path=request.url.path,
            error=str(e),
            duration_ms=round(process_time * 1000, 2)
        )
        raise

    finally:
        clear_request_context()


# ==========================================
# ERROR HANDLERS
# ==========================================
def _error_body(request: Request, message: str, code: int) -> dict:
    return {
        "error": message,
        "code": code,
        "timestamp": datetime.utcnow().isoformat(),
        "path": str(request.url)
    }


@app.exception_handler(FactorNotFoundError)
async def factor_not_found_handler(request: Request, exc: FactorNotFoundError):
    """No emission factor for the requested mode/fuel: nothing to retry."""
    logger.warning(
        "factor_not_found",
        path=request.url.path,
        transport_mode=exc.transport_mode,
        fuel_type=exc.fuel_type,
        region=exc.region
    )
    return JSONResponse(status_code=404, content=_error_body(request, str(exc), 404))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with structured response."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.detail, exc.status_code)
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions."""
    logger.warning(
        "value_error",
        path=request.url.path,
        error=str(exc)
    )
    return JSONResponse(status_code=400, content=_error_body(request, str(exc), 400))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions gracefully."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc)
    )
    content = _error_body(request, "Internal server error", 500)
    content["request_id"] = str(uuid4())[:8]
    return JSONResponse(status_code=500, content=content)


# ==========================================
# HEALTH CHECK
# ==========================================
@app.get("/health", response_model=HealthResponse, tags=["Health"])
@limiter.limit("60/minute")
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    db_health = await check_db_health()

    return HealthResponse(
        status="healthy" if db_health["status"] == "healthy" else "degraded",
        timestamp=datetime.utcnow(),
        database=db_health["status"]
    )


app.include_router(api_v1_router, prefix="/api/v1")
