"""
Sentinel - Core Package
=======================

Configuration, logging, constants and the error taxonomy shared by
every other package.

DESIGN:
    - get_config() returns the same Config instance
    - logger is a single global TreeLogger instance
"""

# =============================================================================
# Core Imports
# =============================================================================

from .config import Config, get_config, load_config, reset_config
from .errors import (
    AuditError,
    AuthenticationError,
    ConfigurationError,
    DiscordAPIError,
    ErrorKind,
    SentinelError,
    UpstreamError,
    ValidationError,
)
from .logger import TreeLogger, logger


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    # Config
    "Config",
    "get_config",
    "load_config",
    "reset_config",
    # Errors
    "ErrorKind",
    "SentinelError",
    "ConfigurationError",
    "AuthenticationError",
    "ValidationError",
    "UpstreamError",
    "DiscordAPIError",
    "AuditError",
    # Logger
    "logger",
    "TreeLogger",
]
