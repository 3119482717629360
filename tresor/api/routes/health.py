"""Health and metrics endpoints"""

import time

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from tresor.api.dependencies import get_settings_dep
from tresor.core.config import Settings
from tresor.core.exceptions import NotFoundError
from tresor.infrastructure.metrics import get_metrics, get_metrics_content_type

router = APIRouter(tags=["health"])

_started_at = time.time()


@router.get("/health")
async def health(
    request: Request,
    settings: Settings = Depends(get_settings_dep)
) -> JSONResponse:
    """Report liveness and whether the user store answers"""
    checks = {
        "database": "ok" if await request.app.state.db.ping() else "unavailable",
    }

    healthy = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "tresor",
            "version": settings.app_version,
            "uptime_seconds": round(time.time() - _started_at, 3),
            "checks": checks,
        },
    )


@router.get("/metrics")
async def metrics(settings: Settings = Depends(get_settings_dep)) -> Response:
    """Prometheus scrape endpoint"""
    if not settings.enable_metrics:
        raise NotFoundError("Metrics are disabled")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
