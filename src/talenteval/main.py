"""
TalentEval FastAPI Application

Student talent-evaluation records for teachers, coaches and administrators.
"""

import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from talenteval import __version__
from talenteval.config import settings
from talenteval.core.database import close_db, engine, init_db
from talenteval.core.errors import TalentEvalError
from talenteval.core.logging import generate_request_id, request_id_var, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Configure JSON logging
    - Create missing tables

    Shutdown:
    - Close database connections
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("TalentEval starting", extra={"environment": settings.ENVIRONMENT})

    try:
        await init_db()
    except Exception as e:
        logger.error(f"Database initialisation failed: {e}")
        raise

    logger.info("TalentEval ready")

    yield

    logger.info("TalentEval shutting down")
    await close_db()


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag each request with an id and log its start and completion."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    token = request_id_var.set(request_id)
    start = time.perf_counter()

    logger.info(
        "Request started", extra={"method": request.method, "path": request.url.path}
    )
    try:
        response = await call_next(request)
        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        request_id_var.reset(token)


async def talenteval_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map domain errors to their HTTP status with a `detail` body."""
    assert isinstance(exc, TalentEvalError)
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", extra={"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _database_ok() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Database check failed: {e}")
        return False
    return True


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="TalentEval",
        description="Student talent evaluation records",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(TalentEvalError, talenteval_error_handler)

    # Health check endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "TalentEval",
            "status": "operational",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check() -> JSONResponse:
        """Health check endpoint for load balancers."""
        checks: dict[str, dict[str, Any]] = {}

        if await _database_ok():
            checks["database"] = {"status": "healthy"}
        else:
            checks["database"] = {"status": "unhealthy"}

        checks["identity_provider"] = {
            "status": "healthy" if settings.IDENTITY_API_KEY else "unconfigured"
        }

        healthy = checks["database"]["status"] == "healthy"
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check() -> dict[str, str] | JSONResponse:
        """Readiness check: 200 once the database answers."""
        if await _database_ok():
            return {"status": "ready"}
        return JSONResponse(status_code=503, content={"status": "not_ready"})

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check: 200 while the process is up."""
        return {"status": "alive"}

    # Register API routers
    from talenteval.api.v1 import (
        auth,
        evaluations,
        navigation,
        profile,
        reports,
        students,
        templates,
        users,
    )

    app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
    app.include_router(students.router, prefix="/api/v1/students", tags=["Students"])
    app.include_router(templates.router, prefix="/api/v1/templates", tags=["Templates"])
    app.include_router(evaluations.router, prefix="/api/v1/evaluations", tags=["Evaluations"])
    app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
    app.include_router(profile.router, prefix="/api/v1/profile", tags=["Profile"])
    app.include_router(navigation.router, prefix="/api/v1/navigation", tags=["Navigation"])
    app.include_router(reports.router, prefix="/api/v1/reports", tags=["Reports"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "talenteval.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
