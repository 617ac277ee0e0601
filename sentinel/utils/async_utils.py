"""
Sentinel - Async Utilities
==========================

Helpers for optional async steps whose failure must not abort the
surrounding operation.

Usage:
    from sentinel.utils.async_utils import safe_async_operation

    delivered = await safe_async_operation(
        "Send DM", rest.send_direct_message(user_id, text), default=False,
    )
"""

from typing import Any, Coroutine

from sentinel.core.logger import logger


async def safe_async_operation(
    name: str,
    coro: Coroutine[Any, Any, Any],
    default: Any = None,
) -> Any:
    """
    Run a single async operation, logging and absorbing any failure.

    Args:
        name: Name of the operation for logging.
        coro: The coroutine to run.
        default: Value to return if the operation fails.

    Returns:
        Result of the coroutine, or default if it raised.
    """
    try:
        return await coro
    except Exception as e:
        logger.warning("Async Operation Failed", [
            ("Operation", name),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])

        return default


__all__ = ["safe_async_operation"]
