"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from sqlalchemy.engine import make_url
from starlette.responses import JSONResponse

from books_api.api.http.app_data import ApplicationDependencies
from books_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": get_config().app.name}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check - returns 200 when the database answers, 503 otherwise."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    db_healthy = app_deps.database_service.health_check()
    checks = {
        "database": {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": make_url(config.database.url).get_backend_name(),
        }
    }

    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": checks,
        "environment": config.app.environment,
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
