"""
Sentinel - Audit Notifier
=========================

Posts an embed describing each moderation outcome to the audit channel.

DESIGN:
    Best effort only. broadcast() never raises: a missing channel makes it
    a no-op and every delivery failure is logged and dropped, so the
    moderator's acknowledgment can never depend on it.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sentinel.core.config import Config
from sentinel.core.constants import EmbedColors
from sentinel.core.errors import AuditError
from sentinel.core.logger import logger
from sentinel.discord.models import Interaction
from sentinel.discord.rest import DiscordRestClient


AUDIT_TITLES = {
    "sentinel-kick": ("Sentinel Kick Issued", EmbedColors.KICK),
    "sentinel-ban": ("Sentinel Ban Issued", EmbedColors.BAN),
    "sentinel-timeout": ("Sentinel Timeout Issued", EmbedColors.TIMEOUT),
    "sentinel-warn": ("Sentinel Warning Issued", EmbedColors.WARN),
    "sentinel-scan": ("Sentinel Channel Scan", EmbedColors.SCAN),
}
DEFAULT_TITLE = ("Sentinel Moderation Action", EmbedColors.DEFAULT)

UNKNOWN_MODERATOR = "Unknown moderator"


def moderator_reference(interaction: Interaction) -> str:
    """Mention of the acting moderator, or a fixed label when absent."""
    member = interaction.member
    if member is not None and member.user is not None:
        return member.user.mention
    return UNKNOWN_MODERATOR


def build_audit_embed(interaction: Interaction, message: str) -> Dict[str, Any]:
    title, color = AUDIT_TITLES.get(interaction.command_name or "", DEFAULT_TITLE)
    return {
        "title": title,
        "description": message,
        "color": color,
        "footer": {"text": f"Moderator: {moderator_reference(interaction)}"},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class AuditNotifier:
    """Sends audit embeds to the configured channel."""

    def __init__(self, rest: DiscordRestClient, config: Config) -> None:
        self.rest = rest
        self.config = config

    @property
    def enabled(self) -> bool:
        return self.config.audit_channel_id is not None

    async def broadcast(self, interaction: Interaction, message: str) -> None:
        """Post one audit embed. Never raises."""
        if not self.enabled:
            return

        try:
            await self._deliver(build_audit_embed(interaction, message))
        except AuditError as e:
            logger.warning("Audit Broadcast Failed", [
                ("Channel", str(self.config.audit_channel_id)),
                ("Command", interaction.command_name or "N/A"),
                ("Error", str(e)[:100]),
            ])

    async def _deliver(self, embed: Dict[str, Any]) -> None:
        try:
            await self.rest.create_message(
                str(self.config.audit_channel_id), {"embeds": [embed]}
            )
        except Exception as e:
            raise AuditError(str(e) or type(e).__name__) from e


__all__ = [
    "AuditNotifier",
    "build_audit_embed",
    "moderator_reference",
    "UNKNOWN_MODERATOR",
]
