"""
Sentinel - Health Router
========================

Liveness check for load balancers and uptime monitors.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from sentinel.api.dependencies import get_config
from sentinel.core.config import Config


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(config: Config = Depends(get_config)) -> dict:
    """
    Basic health check.

    `configured` reports whether the interaction endpoint can verify
    requests; secrets themselves are never echoed.
    """
    return {
        "status": "healthy",
        "configured": config.discord_public_key is not None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


__all__ = ["router"]
