"""
Sentinel - Discord REST Client
==============================

Thin aiohttp wrapper around the Discord HTTP API.

DESIGN:
    One persistent ClientSession, created lazily and closed on app
    shutdown. Every call returns parsed JSON (None for 204) or raises
    DiscordAPIError, so callers never inspect HTTP statuses themselves.
    No retries: a failed call is reported to the moderator right away.
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from sentinel import __version__
from sentinel.core.config import Config
from sentinel.core.constants import REASON_MAX_LENGTH
from sentinel.core.errors import DiscordAPIError
from sentinel.core.logger import logger


USER_AGENT = f"DiscordBot (https://github.com/sentinel-moderation/sentinel, {__version__})"


class DiscordRestClient:
    """Authenticated Discord REST calls used by the moderation actions."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._base_url = config.api_base.rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the persistent HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.request_timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session on shutdown."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # =========================================================================
    # Core Request
    # =========================================================================

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        reason: Optional[str] = None,
    ) -> Any:
        """
        Perform an authenticated request.

        Args:
            method: HTTP method.
            path: Path relative to the API base, starting with "/".
            json: Optional JSON body.
            params: Optional query parameters.
            reason: Optional audit log reason (X-Audit-Log-Reason).

        Returns:
            Parsed JSON body, or None for empty responses.

        Raises:
            ConfigurationError: If no bot token is configured.
            DiscordAPIError: On transport failure, timeout or non-2xx status.
        """
        token = self._config.require("discord_bot_token")
        headers = {
            "Authorization": f"Bot {token}",
            "User-Agent": USER_AGENT,
        }
        if reason:
            headers["X-Audit-Log-Reason"] = quote(reason[:REASON_MAX_LENGTH], safe=" ")

        session = await self._get_session()
        url = f"{self._base_url}{path}"

        try:
            async with session.request(
                method, url, json=json, params=params, headers=headers
            ) as resp:
                if resp.status == 204:
                    return None

                payload = await self._read_body(resp)

                if resp.status >= 400:
                    raise self._api_error(resp.status, payload)
                return payload
        except asyncio.TimeoutError as e:
            logger.error("Discord Request Timed Out", [
                ("Method", method),
                ("Path", path[:60]),
                ("Timeout", f"{self._config.request_timeout}s"),
            ])
            raise DiscordAPIError(
                f"Discord did not respond within {self._config.request_timeout:g}s"
            ) from e
        except aiohttp.ClientError as e:
            logger.error("Discord Request Failed", [
                ("Method", method),
                ("Path", path[:60]),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])
            raise DiscordAPIError(f"Could not reach Discord ({type(e).__name__})") from e

    @staticmethod
    async def _read_body(resp: aiohttp.ClientResponse) -> Any:
        if resp.content_type == "application/json":
            return await resp.json()
        text = await resp.text()
        return text or None

    @staticmethod
    def _api_error(status: int, payload: Any) -> DiscordAPIError:
        message = f"HTTP {status}"
        code = None
        if isinstance(payload, dict):
            message = payload.get("message") or message
            code = payload.get("code")
        elif isinstance(payload, str) and payload:
            message = payload[:200]

        logger.warning("Discord API Error", [
            ("Status", str(status)),
            ("Code", str(code)),
            ("Message", str(message)[:100]),
        ])
        return DiscordAPIError(message, status=status, code=code)

    # =========================================================================
    # Members
    # =========================================================================

    async def kick_member(self, guild_id: str, user_id: str, reason: Optional[str] = None) -> None:
        await self.request("DELETE", f"/guilds/{guild_id}/members/{user_id}", reason=reason)

    async def ban_member(
        self,
        guild_id: str,
        user_id: str,
        delete_message_seconds: int = 0,
        reason: Optional[str] = None,
    ) -> None:
        await self.request(
            "PUT",
            f"/guilds/{guild_id}/bans/{user_id}",
            json={"delete_message_seconds": delete_message_seconds},
            reason=reason,
        )

    async def timeout_member(
        self,
        guild_id: str,
        user_id: str,
        until: datetime,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Set communication_disabled_until on a guild member."""
        return await self.request(
            "PATCH",
            f"/guilds/{guild_id}/members/{user_id}",
            json={"communication_disabled_until": until.isoformat()},
            reason=reason,
        )

    # =========================================================================
    # Messages
    # =========================================================================

    async def create_message(self, channel_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", f"/channels/{channel_id}/messages", json=payload)

    async def get_channel_messages(self, channel_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Fetch the most recent messages of a channel, newest first."""
        return await self.request(
            "GET",
            f"/channels/{channel_id}/messages",
            params={"limit": str(limit)},
        )

    async def send_direct_message(self, user_id: str, content: str) -> Dict[str, Any]:
        """Open (or reuse) a DM channel with a user and post a message to it."""
        channel = await self.request("POST", "/users/@me/channels", json={"recipient_id": user_id})
        return await self.create_message(channel["id"], {"content": content})

    # =========================================================================
    # Application Commands
    # =========================================================================

    async def bulk_overwrite_global_commands(
        self,
        application_id: str,
        commands: List[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        return await self.request("PUT", f"/applications/{application_id}/commands", json=commands)


__all__ = ["DiscordRestClient", "USER_AGENT"]
