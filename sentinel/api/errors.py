"""
Sentinel - API Error System
===========================

Error codes and JSON error responses for the HTTP surface.

The interactions webhook answers Discord with plain text on 401/500;
these helpers cover the maintenance endpoint and unhandled exceptions.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Error codes returned by the API.

    Format: CATEGORY_SPECIFIC_ERROR
    """

    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"

    SERVER_ERROR = "SERVER_ERROR"
    SERVER_MISCONFIGURED = "SERVER_MISCONFIGURED"
    SERVER_DISCORD_ERROR = "SERVER_DISCORD_ERROR"


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.AUTH_INVALID_TOKEN: "Unauthorized",
    ErrorCode.SERVER_ERROR: "An internal server error occurred",
    ErrorCode.SERVER_MISCONFIGURED: "Server misconfiguration",
    ErrorCode.SERVER_DISCORD_ERROR: "Failed to communicate with Discord",
}


ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.AUTH_INVALID_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_MISCONFIGURED: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_DISCORD_ERROR: HTTP_502_BAD_GATEWAY,
}


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    HTTP exception carrying an ErrorCode.

    Usage:
        raise APIError(ErrorCode.AUTH_INVALID_TOKEN, headers={"WWW-Authenticate": "Bearer"})
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")
        self.error_details = details

        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail=_error_body(code, self.error_message, details),
            headers=headers,
        )


def _error_body(code: ErrorCode, message: str, details: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "success": False,
        "error_code": code.value,
        "message": message,
        "details": details,
    }


def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Create a JSON error response without raising an exception."""
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content=_error_body(code, message or ERROR_MESSAGES.get(code, "An error occurred"), details),
    )


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_response",
]
