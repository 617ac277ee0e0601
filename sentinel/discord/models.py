"""
Sentinel - Interaction Models
=============================

Pydantic models for the inbound interaction payload and the outbound
interaction response.

Only the fields Sentinel reads are declared; Discord sends many more
and they are ignored.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sentinel.core.constants import EPHEMERAL_FLAG, ResponseType


# =============================================================================
# Inbound
# =============================================================================

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class User(_Frozen):
    id: str
    username: Optional[str] = None

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"


class Member(_Frozen):
    """Invoking guild member."""

    user: Optional[User] = None
    permissions: Optional[str] = None


class CommandOption(_Frozen):
    name: str
    value: Optional[Union[str, int, float, bool]] = None


class InteractionData(_Frozen):
    name: str
    options: List[CommandOption] = Field(default_factory=list)


class Interaction(_Frozen):
    """
    Inbound Discord interaction.

    `type` is 1 for the endpoint handshake (PING) and 2 for an
    application command; anything else is unsupported.
    """

    id: Optional[str] = None
    type: int
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    data: Optional[InteractionData] = None
    member: Optional[Member] = None
    user: Optional[User] = None

    @property
    def command_name(self) -> Optional[str]:
        return self.data.name if self.data else None

    @property
    def invoker(self) -> Optional[User]:
        """User behind the interaction, guild member or DM user."""
        if self.member and self.member.user:
            return self.member.user
        return self.user

    def option(self, name: str, default: Any = None) -> Any:
        """Value of a top-level command option, or `default` if absent."""
        if self.data:
            for opt in self.data.options:
                if opt.name == name and opt.value is not None:
                    return opt.value
        return default


# =============================================================================
# Outbound
# =============================================================================

class InteractionCallbackData(BaseModel):
    content: str
    flags: int = EPHEMERAL_FLAG


class InteractionResponse(BaseModel):
    type: int
    data: Optional[InteractionCallbackData] = None

    @classmethod
    def pong(cls) -> "InteractionResponse":
        return cls(type=ResponseType.PONG)

    @classmethod
    def ephemeral(cls, content: str) -> "InteractionResponse":
        """Channel message only the invoking user can see."""
        return cls(
            type=ResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
            data=InteractionCallbackData(content=content, flags=EPHEMERAL_FLAG),
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


__all__ = [
    "User",
    "Member",
    "CommandOption",
    "InteractionData",
    "Interaction",
    "InteractionCallbackData",
    "InteractionResponse",
]
