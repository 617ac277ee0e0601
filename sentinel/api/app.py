"""
Sentinel - FastAPI Application
==============================

Application factory wiring config, REST client, executor, dispatcher
and audit notifier into the HTTP routes.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from sentinel import __version__
from sentinel.api.errors import ErrorCode, error_response
from sentinel.api.routers import health_router, interactions_router, setup_router
from sentinel.core.config import Config, get_config
from sentinel.core.logger import logger
from sentinel.discord.rest import DiscordRestClient
from sentinel.interactions.dispatcher import InteractionDispatcher
from sentinel.moderation.actions import ActionExecutor
from sentinel.moderation.audit import AuditNotifier


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and close the Discord HTTP session on shutdown."""
    config: Config = app.state.config
    logger.tree("Sentinel Starting", [
        ("Version", __version__),
        ("Public Key", "set" if config.discord_public_key else "MISSING"),
        ("Bot Token", "set" if config.discord_bot_token else "MISSING"),
        ("Audit Channel", str(config.audit_channel_id or "disabled")),
    ], emoji="🚀")

    yield

    logger.tree("Sentinel Stopping", [], emoji="🛑")
    await app.state.rest.close()


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    config: Optional[Config] = None,
    rest: Optional[DiscordRestClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Configuration to use, defaults to the environment singleton.
        rest: Discord REST client, defaults to one built from config.
    """
    config = config or get_config()
    rest = rest or DiscordRestClient(config)

    app = FastAPI(
        title="Sentinel",
        description="Discord interaction webhook for moderation commands.",
        version=__version__,
        docs_url="/api/docs" if config.debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if config.debug else None,
        lifespan=lifespan,
    )

    executor = ActionExecutor(rest, config)
    app.state.config = config
    app.state.rest = rest
    app.state.dispatcher = InteractionDispatcher(config, executor)
    app.state.notifier = AuditNotifier(rest, config)

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with a consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])

        return error_response(
            ErrorCode.SERVER_ERROR,
            details={"path": str(request.url.path)} if config.debug else None,
        )

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(interactions_router, prefix="/api")
    app.include_router(setup_router, prefix="/api")
    app.include_router(health_router)

    return app


__all__ = ["create_app"]
