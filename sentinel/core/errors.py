"""
Sentinel - Error Taxonomy
=========================

Exception types shared by the dispatcher, executor and REST client.

DESIGN:
    Only configuration and authentication failures ever become non-200
    HTTP statuses. Validation and upstream failures are reported back
    to the moderator in-band, so each exception carries an ErrorKind that
    the executor turns into an ActionError value.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(str, Enum):
    """Tag carried by every Sentinel error."""

    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    AUDIT = "audit"


# =============================================================================
# Exceptions
# =============================================================================

class SentinelError(Exception):
    """Base class for all Sentinel errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SentinelError):
    """A required secret or setting is missing or invalid."""

    kind = ErrorKind.CONFIGURATION


class AuthenticationError(SentinelError):
    """Request signature or bearer token did not check out."""

    kind = ErrorKind.AUTHENTICATION


class ValidationError(SentinelError):
    """Bad command options, missing context or missing permission."""

    kind = ErrorKind.VALIDATION


class UpstreamError(SentinelError):
    """A Discord REST call failed."""

    kind = ErrorKind.UPSTREAM


class DiscordAPIError(UpstreamError):
    """
    Non-2xx response (or transport failure) from the Discord API.

    Attributes:
        status: HTTP status, None when the request never got a response.
        code: Discord JSON error code, if the body carried one.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"Discord API error {self.status}: {self.message}"


class AuditError(SentinelError):
    """Audit broadcast failed. Never surfaced to the moderator."""

    kind = ErrorKind.AUDIT


__all__ = [
    "ErrorKind",
    "SentinelError",
    "ConfigurationError",
    "AuthenticationError",
    "ValidationError",
    "UpstreamError",
    "DiscordAPIError",
    "AuditError",
]
