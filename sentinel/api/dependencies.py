"""
Sentinel - API Dependencies
===========================

FastAPI dependency injection utilities.

Services are built once by create_app() and stored on app.state; these
dependencies hand them to the routers.
"""

import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sentinel.api.errors import APIError, ErrorCode
from sentinel.core.config import Config
from sentinel.core.logger import logger
from sentinel.discord.rest import DiscordRestClient
from sentinel.interactions.dispatcher import InteractionDispatcher
from sentinel.moderation.audit import AuditNotifier


# =============================================================================
# Security
# =============================================================================

security = HTTPBearer(auto_error=False)


# =============================================================================
# Services
# =============================================================================

def get_config(request: Request) -> Config:
    return request.app.state.config


def get_rest_client(request: Request) -> DiscordRestClient:
    return request.app.state.rest


def get_dispatcher(request: Request) -> InteractionDispatcher:
    return request.app.state.dispatcher


def get_notifier(request: Request) -> AuditNotifier:
    return request.app.state.notifier


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def require_setup_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    config: Config = Depends(get_config),
) -> None:
    """
    Require `Authorization: Bearer <SENTINEL_SETUP_TOKEN>`.

    Raises 401 when the header is missing, wrong, or no secret is set.
    """
    expected = config.setup_token
    provided = credentials.credentials if credentials else None

    if not expected or not provided or not secrets.compare_digest(provided, expected):
        logger.warning("Setup Request Rejected", [
            ("Header", "present" if credentials else "missing"),
            ("Secret Configured", str(bool(expected))),
        ])
        raise APIError(
            ErrorCode.AUTH_INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        )


__all__ = [
    "security",
    "get_config",
    "get_rest_client",
    "get_dispatcher",
    "get_notifier",
    "require_setup_token",
]
