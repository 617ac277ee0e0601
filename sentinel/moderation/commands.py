"""
Sentinel - Command Registry
===========================

Slash command definitions and their one-shot registration with Discord.

Registration is a bulk overwrite of the application's global commands,
so running it again simply republishes the same set.
"""

from typing import Any, Dict, List

from sentinel.core.config import Config
from sentinel.core.constants import (
    BAN_DELETE_DAYS_MAX,
    SCAN_MAX_HOURS,
    WARN_SEVERITIES,
    OptionType,
    Permissions,
)
from sentinel.core.logger import logger
from sentinel.discord.rest import DiscordRestClient


def _user_option(description: str) -> Dict[str, Any]:
    return {"type": OptionType.USER, "name": "user", "description": description, "required": True}


def _reason_option() -> Dict[str, Any]:
    return {
        "type": OptionType.STRING,
        "name": "reason",
        "description": "Reason recorded in the audit log",
        "max_length": 512,
    }


def _notify_option() -> Dict[str, Any]:
    return {
        "type": OptionType.BOOLEAN,
        "name": "notify",
        "description": "Send the member a DM about this action (default: yes)",
    }


SENTINEL_COMMANDS: List[Dict[str, Any]] = [
    {
        "name": "sentinel-kick",
        "description": "Kick a member from the server",
        "default_member_permissions": str(Permissions.KICK_MEMBERS),
        "dm_permission": False,
        "options": [_user_option("Member to kick"), _reason_option(), _notify_option()],
    },
    {
        "name": "sentinel-ban",
        "description": "Ban a member and optionally purge their recent messages",
        "default_member_permissions": str(Permissions.BAN_MEMBERS),
        "dm_permission": False,
        "options": [
            _user_option("Member to ban"),
            _reason_option(),
            {
                "type": OptionType.INTEGER,
                "name": "delete_days",
                "description": "Days of message history to delete (0-7)",
                "min_value": 0,
                "max_value": BAN_DELETE_DAYS_MAX,
            },
            _notify_option(),
        ],
    },
    {
        "name": "sentinel-timeout",
        "description": "Time out a member (up to 28 days)",
        "default_member_permissions": str(Permissions.MODERATE_MEMBERS),
        "dm_permission": False,
        "options": [
            _user_option("Member to time out"),
            {
                "type": OptionType.STRING,
                "name": "duration",
                "description": "How long, e.g. 10m, 2h, 1d (default 1h)",
            },
            _reason_option(),
            _notify_option(),
        ],
    },
    {
        "name": "sentinel-warn",
        "description": "Issue a structured warning",
        "default_member_permissions": str(Permissions.MODERATE_MEMBERS),
        "dm_permission": False,
        "options": [
            _user_option("Member to warn"),
            {
                "type": OptionType.STRING,
                "name": "severity",
                "description": "Warning severity",
                "choices": [{"name": s.title(), "value": s} for s in WARN_SEVERITIES],
            },
            _reason_option(),
        ],
    },
    {
        "name": "sentinel-scan",
        "description": "Scan recent channel activity for suspicious signals",
        "default_member_permissions": str(Permissions.MANAGE_MESSAGES),
        "dm_permission": False,
        "options": [
            {
                "type": OptionType.CHANNEL,
                "name": "channel",
                "description": "Channel to scan (default: this channel)",
            },
            {
                "type": OptionType.INTEGER,
                "name": "hours",
                "description": f"Window to inspect in hours (1-{SCAN_MAX_HOURS}, default 24)",
                "min_value": 1,
                "max_value": SCAN_MAX_HOURS,
            },
        ],
    },
]


async def register_commands(rest: DiscordRestClient, config: Config) -> List[Dict[str, Any]]:
    """
    Publish SENTINEL_COMMANDS as the application's global commands.

    Raises:
        ConfigurationError: If the application ID or bot token is missing.
        DiscordAPIError: If Discord rejects the registration.
    """
    application_id = config.require("discord_application_id")
    registered = await rest.bulk_overwrite_global_commands(application_id, SENTINEL_COMMANDS)

    logger.tree("Commands Registered", [
        ("Application", application_id),
        ("Count", str(len(registered or []))),
        ("Names", ", ".join(c["name"] for c in SENTINEL_COMMANDS)),
    ], emoji="📝")
    return registered or []


__all__ = ["SENTINEL_COMMANDS", "register_commands"]
