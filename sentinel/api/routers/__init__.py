"""
Sentinel - API Routers
======================
"""

from sentinel.api.routers.health import router as health_router
from sentinel.api.routers.interactions import router as interactions_router
from sentinel.api.routers.setup import router as setup_router


__all__ = [
    "health_router",
    "interactions_router",
    "setup_router",
]
