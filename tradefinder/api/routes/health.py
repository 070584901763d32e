import time
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ...external.league_store import LeagueStore
from ..dependencies import get_league_store


router = APIRouter()


class HealthStatus(BaseModel):
    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: datetime
    version: str
    uptime_seconds: float
    checks: Dict[str, Any]


class SystemMetrics(BaseModel):
    cpu_percent: float
    memory_percent: float
    memory_available_mb: float
    disk_usage_percent: float


# Track startup time for uptime calculation
_startup_time = time.time()


def _version(request: Request) -> str:
    return request.app.state.settings.version


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request):
    """
    Basic health check endpoint.

    Fast enough for load balancer health checks; touches no dependencies.
    """
    uptime = time.time() - _startup_time

    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=_version(request),
        uptime_seconds=uptime,
        checks={"api": "healthy", "uptime_seconds": uptime},
    )


@router.get("/health/detailed", response_model=Dict[str, Any])
async def detailed_health_check(request: Request, store: LeagueStore = Depends(get_league_store)):
    """
    Detailed health check with system metrics and dependency checks.

    Used for monitoring dashboards. May take a second because CPU usage is
    sampled.
    """
    uptime = time.time() - _startup_time

    memory = psutil.virtual_memory()
    disk = psutil.disk_usage('/')

    system_metrics = SystemMetrics(
        cpu_percent=psutil.cpu_percent(interval=0.1),
        memory_percent=memory.percent,
        memory_available_mb=memory.available / 1024 / 1024,
        disk_usage_percent=disk.percent
    )

    dependency_checks = {
        "league_store": "healthy" if await store.ping() else "unhealthy",
    }

    failed_checks = [name for name, status in dependency_checks.items()
                     if status != "healthy"]

    if failed_checks:
        if len(failed_checks) == len(dependency_checks):
            overall_status = "unhealthy"
        else:
            overall_status = "degraded"
    else:
        overall_status = "healthy"

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": _version(request),
        "uptime_seconds": uptime,
        "system_metrics": system_metrics.model_dump(),
        "dependency_checks": dependency_checks,
        "failed_checks": failed_checks,
    }


@router.get("/health/ready")
async def readiness_check(store: LeagueStore = Depends(get_league_store)):
    """
    Readiness check: 503 until the league store answers.
    """
    if not await store.ping():
        raise HTTPException(status_code=503, detail="League store not reachable")

    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/live")
async def liveness_check():
    """
    Liveness check: if we can respond, we're alive.
    """
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
