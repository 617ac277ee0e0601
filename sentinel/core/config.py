"""
Sentinel - Configuration Module
===============================

Centralized configuration loaded from environment variables.

DESIGN:
    Single source of truth for every secret and setting. Secrets are
    loaded as optional so the HTTP server can still start and answer
    with a 500 when the operator forgot one; code that needs a value
    calls Config.require(), which raises ConfigurationError naming the
    environment variable.

    Key patterns:
    - Singleton via get_config()
    - Parsing happens once at load time, not on every access
    - Invalid integers fail fast with ConfigurationError
"""

import os
from dataclasses import dataclass
from typing import Optional

from sentinel.core.errors import ConfigurationError


DEFAULT_API_BASE = "https://discord.com/api/v10"


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Sentinel configuration.

    Attributes:
        discord_public_key: Hex Ed25519 key used to verify interactions.
        discord_bot_token: Bot token for REST calls.
        discord_application_id: Application ID for command registration.
        audit_channel_id: Channel receiving audit embeds, None disables.
        setup_token: Bearer secret guarding the maintenance endpoint.
    """

    # -------------------------------------------------------------------------
    # Secrets
    # -------------------------------------------------------------------------

    discord_public_key: Optional[str] = None
    discord_bot_token: Optional[str] = None
    discord_application_id: Optional[str] = None
    setup_token: Optional[str] = None

    # -------------------------------------------------------------------------
    # Optional: Channels
    # -------------------------------------------------------------------------

    audit_channel_id: Optional[int] = None

    # -------------------------------------------------------------------------
    # Optional: Discord API
    # -------------------------------------------------------------------------

    api_base: str = DEFAULT_API_BASE
    request_timeout: float = 10.0

    # -------------------------------------------------------------------------
    # Optional: Server
    # -------------------------------------------------------------------------

    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    def require(self, name: str) -> str:
        """
        Return a configured value or raise ConfigurationError.

        Args:
            name: Field name on this dataclass.
        """
        value = getattr(self, name)
        if value is None or value == "":
            raise ConfigurationError(f"Missing required configuration: {ENV_NAMES[name]}")
        return value


ENV_NAMES = {
    "discord_public_key": "DISCORD_PUBLIC_KEY",
    "discord_bot_token": "DISCORD_BOT_TOKEN",
    "discord_application_id": "DISCORD_APPLICATION_ID",
    "setup_token": "SENTINEL_SETUP_TOKEN",
    "audit_channel_id": "SENTINEL_AUDIT_CHANNEL_ID",
    "api_base": "DISCORD_API_BASE",
    "request_timeout": "DISCORD_REQUEST_TIMEOUT",
    "host": "SENTINEL_API_HOST",
    "port": "SENTINEL_API_PORT",
    "debug": "SENTINEL_API_DEBUG",
}
"""Field name -> environment variable."""


# =============================================================================
# Parsing Helpers
# =============================================================================

def _parse_str_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_int_optional(value: Optional[str], name: str) -> Optional[int]:
    """
    Parse optional string to integer.

    Raises:
        ConfigurationError: If the value is set but not an integer.
    """
    if not value or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid integer for {name}: {value}")


def _parse_float(value: Optional[str], default: float, name: str) -> float:
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid number for {name}: {value}")


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Build a Config from the current environment.

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed.
    """
    port = _parse_int_optional(os.getenv("SENTINEL_API_PORT"), "SENTINEL_API_PORT")

    return Config(
        discord_public_key=_parse_str_optional(os.getenv("DISCORD_PUBLIC_KEY")),
        discord_bot_token=_parse_str_optional(os.getenv("DISCORD_BOT_TOKEN")),
        discord_application_id=_parse_str_optional(os.getenv("DISCORD_APPLICATION_ID")),
        setup_token=_parse_str_optional(os.getenv("SENTINEL_SETUP_TOKEN")),
        audit_channel_id=_parse_int_optional(
            os.getenv("SENTINEL_AUDIT_CHANNEL_ID"), "SENTINEL_AUDIT_CHANNEL_ID"
        ),
        api_base=(os.getenv("DISCORD_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
        request_timeout=_parse_float(
            os.getenv("DISCORD_REQUEST_TIMEOUT"), 10.0, "DISCORD_REQUEST_TIMEOUT"
        ),
        host=os.getenv("SENTINEL_API_HOST", "0.0.0.0"),
        port=port if port is not None else 8080,
        debug=os.getenv("SENTINEL_API_DEBUG", "false").lower() == "true",
    )


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the configuration singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None


__all__ = [
    "Config",
    "ENV_NAMES",
    "DEFAULT_API_BASE",
    "load_config",
    "get_config",
    "reset_config",
]
