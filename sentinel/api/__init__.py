"""
Sentinel - API Package
======================

FastAPI surface for the Discord interactions webhook.

Standalone (for development):
    uvicorn sentinel.api.app:create_app --factory --reload
"""

from sentinel.api.app import create_app


__all__ = ["create_app"]
