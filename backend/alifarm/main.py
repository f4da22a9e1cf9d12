"""
Ali Farm - FastAPI Backend
Main application entry point
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
import logging
import traceback

from alifarm.api.v1.endpoints import investors, livestock
from alifarm.core.config import settings
from alifarm.core.database import check_connection, engine
from alifarm.services.investors.errors import (
    Conflict,
    ContractError,
    InvalidState,
    NotFound,
    TransientStorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidState: status.HTTP_409_CONFLICT,
    Conflict: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransientStorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    yield
    try:
        logger.info("Closing database connection pool...")
        engine.dispose(close=True)
        logger.info("Database connection pool closed successfully")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Backend API for Ali Farm - Sheep investment contracts",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(ContractError)
async def contract_error_handler(request: Request, exc: ContractError):
    """Map service errors to HTTP status codes"""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_class, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_class):
            status_code = code
            break

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.error_type}): {exc}")

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": exc.error_type},
    )


# Connection errors raised outside the contract repository
@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    error_msg = str(exc.orig) if hasattr(exc, 'orig') else str(exc)

    if "could not translate host name" in error_msg or "nodename nor servname provided" in error_msg:
        logger.error(f"Database DNS resolution error: {error_msg}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": "Database host name cannot be resolved. Check DATABASE_URL and the database status.",
                "error_type": "database_connection_error",
            }
        )

    logger.error(f"Database operational error: {error_msg}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Database temporarily unavailable, retry later.",
            "error_type": "database_error",
        }
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions and return a generic 500"""
    tb = traceback.format_exc()
    logger.error(f"Unhandled exception: {exc}\n{tb}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error.",
        }
    )


# Include routers
app.include_router(investors.router, prefix="/api/v1")
app.include_router(livestock.router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Fast health check, no database round trip"""
    return {
        "status": "healthy",
        "service": "alifarm-api",
        "version": settings.APP_VERSION
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Health check with database connectivity test"""
    try:
        check_connection()
        return {
            "status": "healthy",
            "service": "alifarm-api",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "service": "alifarm-api",
                "database": "disconnected",
                "error": str(e)
            }
        )


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
