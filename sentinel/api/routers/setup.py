"""
Sentinel - Setup Router
=======================

Maintenance endpoint that (re)publishes the slash commands.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sentinel.api.dependencies import get_config, get_rest_client, require_setup_token
from sentinel.api.errors import ErrorCode, error_response
from sentinel.core.config import Config
from sentinel.core.errors import ConfigurationError, UpstreamError
from sentinel.core.logger import logger
from sentinel.discord.rest import DiscordRestClient
from sentinel.moderation.commands import register_commands


router = APIRouter(prefix="/setup", tags=["Setup"])


@router.post("", dependencies=[Depends(require_setup_token)])
async def setup_commands(
    rest: DiscordRestClient = Depends(get_rest_client),
    config: Config = Depends(get_config),
) -> JSONResponse:
    """Register every sentinel-* command with Discord."""
    try:
        registered = await register_commands(rest, config)
    except ConfigurationError as e:
        logger.error("Command Registration Failed", [("Error", str(e))])
        return error_response(ErrorCode.SERVER_MISCONFIGURED, message=str(e))
    except UpstreamError as e:
        logger.error("Command Registration Failed", [("Error", str(e)[:100])])
        return error_response(ErrorCode.SERVER_DISCORD_ERROR, details={"reason": str(e)})

    return JSONResponse({"status": "commands registered", "count": len(registered)})


__all__ = ["router"]
