"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (storage backend reachable)
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from nodash.backend.core.dependencies import NoteRepo
from nodash.backend.core.logging import get_logger
from nodash.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(repo: NoteRepo) -> dict[str, Any]:
    """
    Check storage connectivity.

    Returns:
        Dict with status, backend, latency, and optional error message
    """
    backend = repo.binding.name
    try:
        start = utc_now()
        await repo.ping()
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "backend": backend,
            "error": str(e),
        }

    return {
        "status": "healthy",
        "backend": backend,
        "latency_ms": latency_ms,
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(repo: NoteRepo) -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if the storage backend answers a trivial query,
    503 otherwise.
    """
    checks = {"database": await check_database(repo)}

    if checks["database"]["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
