"""
Liveness and readiness probes.

Only MongoDB gates readiness: the ledgers live there. Redis backs the rate
limiter, which lets traffic through without it, so its state is reported
but never fails the probe.
"""
from fastapi import APIRouter, Response, status

from tradedesk.database.connections import get_mongo_client, get_redis_client, ping_mongo

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check():
    """200 while the process is serving requests."""
    return {"status": "healthy"}


async def _mongo_status() -> str:
    try:
        await ping_mongo(await get_mongo_client())
    except Exception as e:
        return f"unhealthy: {e}"
    return "healthy"


async def _rate_limiter_status() -> str:
    try:
        redis = await get_redis_client()
        await redis.ping()
    except Exception as e:
        return f"unavailable (requests are not limited): {e}"
    return "healthy"


@router.get(
    "/health/ready",
    summary="Readiness probe",
    responses={503: {"description": "MongoDB unreachable"}},
)
async def readiness_check(response: Response):
    """
    Ready when MongoDB answers a ping.

    Returns 503 with ``status: "unavailable"`` otherwise. The ``rate_limiter``
    entry is informational.
    """
    mongodb = await _mongo_status()
    rate_limiter = await _rate_limiter_status()

    ready = mongodb == "healthy"
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ready" if ready else "unavailable",
        "checks": {
            "mongodb": mongodb,
            "rate_limiter": rate_limiter,
        },
    }
