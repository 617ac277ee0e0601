"""
Sentinel - Constants
====================

Discord protocol values, permission bits, limits and embed colors.
"""


# =============================================================================
# Interaction Protocol
# =============================================================================

class InteractionType:
    """Inbound interaction types."""

    PING = 1
    APPLICATION_COMMAND = 2


class ResponseType:
    """Outbound interaction callback types."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4


EPHEMERAL_FLAG = 1 << 6

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

COMMAND_PREFIX = "sentinel-"


# =============================================================================
# Application Command Option Types
# =============================================================================

class OptionType:
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7


# =============================================================================
# Permission Bits
# =============================================================================

class Permissions:
    """Guild permission bits checked before an action runs."""

    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_MESSAGES = 1 << 13
    MODERATE_MEMBERS = 1 << 40


# =============================================================================
# Message Types
# =============================================================================

MESSAGE_TYPE_MEMBER_JOIN = 7


# =============================================================================
# Limits
# =============================================================================

BAN_DELETE_DAYS_MAX = 7
TIMEOUT_MAX_SECONDS = 28 * 86400
DEFAULT_TIMEOUT = "1h"

SCAN_DEFAULT_HOURS = 24
SCAN_MAX_HOURS = 72
SCAN_MESSAGE_LIMIT = 100

REASON_MAX_LENGTH = 512
"""Discord caps X-Audit-Log-Reason at 512 characters."""

WARN_SEVERITIES = ("low", "medium", "high")
DEFAULT_REASON = "No reason provided"


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Audit embed palette."""

    INDIGO = 0x6366F1
    RED = 0xDC3545
    ORANGE = 0xFF9800
    GOLD = 0xE6B84A
    BLUE = 0x3498DB

    DEFAULT = INDIGO
    KICK = ORANGE
    BAN = RED
    TIMEOUT = GOLD
    WARN = INDIGO
    SCAN = BLUE


__all__ = [
    "InteractionType",
    "ResponseType",
    "EPHEMERAL_FLAG",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "COMMAND_PREFIX",
    "OptionType",
    "Permissions",
    "MESSAGE_TYPE_MEMBER_JOIN",
    "BAN_DELETE_DAYS_MAX",
    "TIMEOUT_MAX_SECONDS",
    "DEFAULT_TIMEOUT",
    "SCAN_DEFAULT_HOURS",
    "SCAN_MAX_HOURS",
    "SCAN_MESSAGE_LIMIT",
    "REASON_MAX_LENGTH",
    "WARN_SEVERITIES",
    "DEFAULT_REASON",
    "EmbedColors",
]
