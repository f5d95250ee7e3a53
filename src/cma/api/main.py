"""
FastAPI Main Application

CMA analysis engine REST API.
"""
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from sqlalchemy.orm import Session

from src.cma import __version__
from src.cma.api.dependencies import get_db, get_statistics_cache
from src.cma.api.routers import cma, properties, seller_updates
from src.cma.api.schemas import HealthCheck
from src.cma.db.session import ping
from src.cma.utils.logger import bind_context, clear_context, get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="CMA Analysis API",
    description="Property search, comparable market statistics, price timelines and seller updates",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(properties.router)
app.include_router(cma.router)
app.include_router(seller_updates.router)


@app.middleware("http")
async def request_logging_context(request: Request, call_next):
    """Bind method and path to every log entry emitted while serving a request."""
    clear_context()
    bind_context(method=request.method, path=request.url.path)
    response = await call_next(request)
    logger.info("request_completed", status_code=response.status_code)
    return response


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        Health status with database connectivity check
    """
    error = ping(db)
    database_status = "connected" if error is None else f"error: {error}"

    cache = get_statistics_cache()
    cache_status = cache.backend if cache is not None else "disabled"

    return HealthCheck(
        status="healthy" if database_status == "connected" else "degraded",
        version=__version__,
        database=database_status,
        cache=cache_status,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "CMA Analysis API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.cma.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
