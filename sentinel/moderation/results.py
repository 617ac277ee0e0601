"""
Sentinel - Moderation Result Types
==================================

Values returned by the action executor.

DESIGN:
    perform() never raises for an expected failure. It returns an
    ActionOutcome holding exactly one of a ModerationResult or an
    ActionError, and the dispatcher turns either into an ephemeral
    message at the response boundary.
"""

from dataclasses import dataclass
from typing import Optional

from sentinel.core.errors import ErrorKind, SentinelError


@dataclass(frozen=True)
class ModerationResult:
    """Moderator-facing summary of an executed action."""

    message: str
    notify_channel: bool = True


@dataclass(frozen=True)
class ActionError:
    """Expected failure of an action, tagged with its kind."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: Exception) -> "ActionError":
        if isinstance(exc, SentinelError):
            return cls(kind=exc.kind, message=str(exc))
        return cls(kind=ErrorKind.UPSTREAM, message=str(exc))


@dataclass(frozen=True)
class ActionOutcome:
    result: Optional[ModerationResult] = None
    error: Optional[ActionError] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("ActionOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: ModerationResult) -> "ActionOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, error: ActionError) -> "ActionOutcome":
        return cls(error=error)


__all__ = [
    "ModerationResult",
    "ActionError",
    "ActionOutcome",
]
