"""
Sentinel - Interaction Dispatcher
=================================

Turns one signed webhook request into one interaction response.

DESIGN:
    Three terminal branches, checked in order:
    1. Public key missing  -> 500 (operator misconfiguration)
    2. Signature invalid   -> 401 (body is never parsed)
    3. Verified request    -> 200 with a Discord-shaped payload

    After authentication every branch answers 200, because Discord
    treats other statuses as a broken integration. Command failures
    become ephemeral "⚠️" messages instead.

    The audit broadcast is not run here. The outcome only carries what
    should be broadcast; the HTTP layer schedules it after the response
    has been sent.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PayloadValidationError

from sentinel.core.config import Config
from sentinel.core.constants import COMMAND_PREFIX, InteractionType
from sentinel.core.errors import AuthenticationError, ConfigurationError
from sentinel.core.logger import logger
from sentinel.discord.models import Interaction, InteractionResponse
from sentinel.moderation.actions import ActionExecutor
from sentinel.security.signature import verify_request


MISCONFIGURED_TEXT = "Server misconfiguration"
INVALID_SIGNATURE_TEXT = "Invalid request signature"
UNSUPPORTED_TEXT = (
    f"Unsupported interaction type. Use `/{COMMAND_PREFIX}*` commands to moderate your server."
)
FAILURE_PREFIX = "⚠️ Moderation action failed: "
UNKNOWN_ERROR_TEXT = "Unknown error occurred"


@dataclass(frozen=True)
class PendingBroadcast:
    interaction: Interaction
    message: str


@dataclass(frozen=True)
class DispatchOutcome:
    """
    HTTP-level result of a dispatch.

    Attributes:
        status_code: 200, 401 or 500.
        body: JSON payload for 200, plain text otherwise.
        broadcast: Audit broadcast to run after responding, if any.
    """

    status_code: int
    body: Union[Dict[str, Any], str]
    broadcast: Optional[PendingBroadcast] = None

    @property
    def is_json(self) -> bool:
        return isinstance(self.body, dict)


class InteractionDispatcher:
    """Verifies, routes and answers interaction webhooks."""

    def __init__(self, config: Config, executor: ActionExecutor) -> None:
        self.config = config
        self.executor = executor

    async def dispatch(
        self,
        raw_body: bytes,
        signature: Optional[str],
        timestamp: Optional[str],
    ) -> DispatchOutcome:
        try:
            self._authenticate(raw_body, signature, timestamp)
        except ConfigurationError as e:
            logger.error("Interaction Rejected", [
                ("Reason", "Configuration"),
                ("Error", str(e)),
            ])
            return DispatchOutcome(status_code=500, body=MISCONFIGURED_TEXT)
        except AuthenticationError as e:
            logger.warning("Interaction Rejected", [
                ("Reason", str(e)),
                ("Signature", "present" if signature else "missing"),
                ("Timestamp", "present" if timestamp else "missing"),
            ])
            return DispatchOutcome(status_code=401, body=INVALID_SIGNATURE_TEXT)

        try:
            interaction = Interaction.model_validate_json(raw_body)
        except PayloadValidationError as e:
            logger.warning("Malformed Interaction", [
                ("Errors", str(e.error_count())),
            ])
            return self._respond(InteractionResponse.ephemeral(UNSUPPORTED_TEXT))

        if interaction.type == InteractionType.PING:
            return self._respond(InteractionResponse.pong())

        if interaction.type == InteractionType.APPLICATION_COMMAND and interaction.data:
            return await self._run_command(interaction)

        logger.info("Unsupported Interaction", [
            ("Type", str(interaction.type)),
            ("Has Data", str(interaction.data is not None)),
        ])
        return self._respond(InteractionResponse.ephemeral(UNSUPPORTED_TEXT))

    def _authenticate(
        self,
        raw_body: bytes,
        signature: Optional[str],
        timestamp: Optional[str],
    ) -> None:
        """
        Raises:
            ConfigurationError: If no public key is configured.
            AuthenticationError: If a header is missing or the signature is invalid.
        """
        public_key = self.config.require("discord_public_key")
        if not signature or not timestamp:
            raise AuthenticationError("Missing signature headers")
        if not verify_request(raw_body, signature, timestamp, public_key):
            raise AuthenticationError("Invalid signature")

    async def _run_command(self, interaction: Interaction) -> DispatchOutcome:
        command = interaction.data.name
        outcome = await self.executor.perform(command, interaction)

        if outcome.error is not None:
            detail = outcome.error.message or UNKNOWN_ERROR_TEXT
            logger.tree("Command Failed", [
                ("Command", command),
                ("Guild", interaction.guild_id or "N/A"),
                ("Kind", outcome.error.kind.value),
                ("Error", detail[:100]),
            ], emoji="⚠️")
            return self._respond(InteractionResponse.ephemeral(f"{FAILURE_PREFIX}{detail}"))

        result = outcome.result
        broadcast = PendingBroadcast(interaction, result.message) if result.notify_channel else None

        logger.tree("Command Handled", [
            ("Interaction", interaction.id or "N/A"),
            ("Command", command),
            ("Guild", interaction.guild_id or "N/A"),
            ("Audit", "queued" if broadcast else "skipped"),
        ], emoji="🛡️")
        return self._respond(InteractionResponse.ephemeral(result.message), broadcast)

    @staticmethod
    def _respond(
        response: InteractionResponse,
        broadcast: Optional[PendingBroadcast] = None,
    ) -> DispatchOutcome:
        return DispatchOutcome(status_code=200, body=response.to_payload(), broadcast=broadcast)


__all__ = [
    "InteractionDispatcher",
    "DispatchOutcome",
    "PendingBroadcast",
    "MISCONFIGURED_TEXT",
    "INVALID_SIGNATURE_TEXT",
    "UNSUPPORTED_TEXT",
    "FAILURE_PREFIX",
    "UNKNOWN_ERROR_TEXT",
]
