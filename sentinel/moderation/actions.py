"""
Sentinel - Moderation Actions
=============================

Maps slash command names to handlers and runs them against the
Discord REST API.

DESIGN:
    Each handler is a plain coroutine taking an ActionContext and
    returning a ModerationResult. Handlers raise ValidationError or
    UpstreamError on failure; ActionExecutor.perform() converts every
    exception into an ActionOutcome so nothing escapes to the dispatcher.

    Optional steps (DMing the target) go through safe_async_operation:
    their failure changes the message text, never the primary action.

Usage:
    executor = ActionExecutor(rest, config)
    outcome = await executor.perform("sentinel-kick", interaction)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Dict, Optional

from sentinel.core.config import Config
from sentinel.core.constants import (
    BAN_DELETE_DAYS_MAX,
    DEFAULT_REASON,
    DEFAULT_TIMEOUT,
    REASON_MAX_LENGTH,
    SCAN_DEFAULT_HOURS,
    SCAN_MAX_HOURS,
    SCAN_MESSAGE_LIMIT,
    TIMEOUT_MAX_SECONDS,
    WARN_SEVERITIES,
    Permissions,
)
from sentinel.core.errors import SentinelError, ValidationError
from sentinel.core.logger import logger
from sentinel.discord.models import Interaction
from sentinel.discord.rest import DiscordRestClient
from sentinel.moderation.results import ActionError, ActionOutcome, ModerationResult
from sentinel.moderation.scan import analyze_messages, format_report
from sentinel.utils.async_utils import safe_async_operation
from sentinel.utils.duration import format_duration, parse_duration


PERMISSION_NAMES = {
    Permissions.KICK_MEMBERS: "Kick Members",
    Permissions.BAN_MEMBERS: "Ban Members",
    Permissions.MANAGE_MESSAGES: "Manage Messages",
    Permissions.MODERATE_MEMBERS: "Timeout Members",
}


# =============================================================================
# Action Context
# =============================================================================

@dataclass
class ActionContext:
    """Everything a handler needs for one interaction."""

    interaction: Interaction
    rest: DiscordRestClient
    config: Config

    @property
    def command(self) -> str:
        return self.interaction.command_name or "unknown"

    @property
    def moderator_label(self) -> str:
        invoker = self.interaction.invoker
        if invoker is None:
            return "unknown moderator"
        return invoker.username or invoker.id

    def require_guild(self) -> str:
        if not self.interaction.guild_id:
            raise ValidationError(f"`/{self.command}` can only be used inside a server.")
        return self.interaction.guild_id

    def require_permission(self, permission: int) -> None:
        """
        Check the invoker's permission bitfield.

        Skipped when Discord did not send member permissions; the command's
        default_member_permissions still gates it platform-side.
        """
        member = self.interaction.member
        if member is None or member.permissions is None:
            return
        try:
            granted = int(member.permissions)
        except ValueError:
            raise ValidationError("Could not read your permissions.")
        if granted & Permissions.ADMINISTRATOR or granted & permission:
            return
        raise ValidationError(
            f"You need the **{PERMISSION_NAMES[permission]}** permission to use `/{self.command}`."
        )

    def require_target(self) -> str:
        """ID of the `user` option, refusing self-targeting."""
        target = self.interaction.option("user")
        if target is None or str(target).strip() == "":
            raise ValidationError("A target `user` is required.")
        target = str(target).strip()

        invoker = self.interaction.invoker
        if invoker is not None and invoker.id == target:
            raise ValidationError("You cannot perform this action on yourself.")
        return target

    def reason(self) -> str:
        value = self.interaction.option("reason")
        text = str(value).strip() if value is not None else ""
        return (text or DEFAULT_REASON)[:REASON_MAX_LENGTH]

    def audit_reason(self, reason: str) -> str:
        return f"{reason} (by {self.moderator_label})"

    def int_option(self, name: str, default: int) -> int:
        value = self.interaction.option(name, default)
        if isinstance(value, bool):
            raise ValidationError(f"Option `{name}` must be a whole number.")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Option `{name}` must be a whole number.")

    async def notify_target(self, user_id: str, text: str) -> str:
        """
        DM the target if the `notify` option allows it.

        Returns:
            Suffix for the result message describing the DM outcome.
        """
        if not self.interaction.option("notify", True):
            return ""

        delivered = await safe_async_operation(
            "Send DM",
            self.rest.send_direct_message(user_id, text),
            default=None,
        )
        if delivered is None:
            return "\n📭 Could not DM the user."
        return "\n📨 User was notified by DM."


Handler = Callable[[ActionContext], Awaitable[ModerationResult]]


# =============================================================================
# Handlers
# =============================================================================

async def handle_kick(ctx: ActionContext) -> ModerationResult:
    guild_id = ctx.require_guild()
    ctx.require_permission(Permissions.KICK_MEMBERS)
    target = ctx.require_target()
    reason = ctx.reason()

    # DM first; once kicked the bot may no longer share a server with them.
    # The kick can still fail afterwards, so the DM only says it was issued.
    dm_note = await ctx.notify_target(
        target, f"A moderator issued a kick against you.\nReason: {reason}"
    )
    await ctx.rest.kick_member(guild_id, target, reason=ctx.audit_reason(reason))

    return ModerationResult(
        message=f"👢 Kicked <@{target}>.\nReason: {reason}{dm_note}",
        notify_channel=True,
    )


async def handle_ban(ctx: ActionContext) -> ModerationResult:
    guild_id = ctx.require_guild()
    ctx.require_permission(Permissions.BAN_MEMBERS)
    target = ctx.require_target()
    reason = ctx.reason()

    delete_days = ctx.int_option("delete_days", 0)
    if not 0 <= delete_days <= BAN_DELETE_DAYS_MAX:
        raise ValidationError(
            f"`delete_days` must be between 0 and {BAN_DELETE_DAYS_MAX}, got {delete_days}."
        )

    # Same ordering as kick: the DM must not claim the ban already happened
    dm_note = await ctx.notify_target(
        target, f"A moderator issued a ban against you.\nReason: {reason}"
    )
    await ctx.rest.ban_member(
        guild_id,
        target,
        delete_message_seconds=delete_days * 86400,
        reason=ctx.audit_reason(reason),
    )

    purge = f"\nDeleted messages from the last {delete_days} day(s)." if delete_days else ""
    return ModerationResult(
        message=f"🔨 Banned <@{target}>.\nReason: {reason}{purge}{dm_note}",
        notify_channel=True,
    )


async def handle_timeout(ctx: ActionContext) -> ModerationResult:
    guild_id = ctx.require_guild()
    ctx.require_permission(Permissions.MODERATE_MEMBERS)
    target = ctx.require_target()
    reason = ctx.reason()

    raw_duration = str(ctx.interaction.option("duration", DEFAULT_TIMEOUT))
    seconds = parse_duration(raw_duration)
    if not seconds:
        raise ValidationError(
            f"Invalid duration `{raw_duration}`. Use formats like `10m`, `2h` or `1d`."
        )
    if seconds > TIMEOUT_MAX_SECONDS:
        raise ValidationError("Timeouts cannot be longer than 28 days.")

    until = datetime.now(timezone.utc) + timedelta(seconds=seconds)
    await ctx.rest.timeout_member(guild_id, target, until, reason=ctx.audit_reason(reason))

    display = format_duration(seconds)
    dm_note = await ctx.notify_target(
        target, f"You have been timed out for {display}.\nReason: {reason}"
    )
    return ModerationResult(
        message=f"⏳ Timed out <@{target}> for {display}.\nReason: {reason}{dm_note}",
        notify_channel=True,
    )


async def handle_warn(ctx: ActionContext) -> ModerationResult:
    ctx.require_permission(Permissions.MODERATE_MEMBERS)
    target = ctx.require_target()
    reason = ctx.reason()

    severity = str(ctx.interaction.option("severity", "medium")).strip().lower()
    if severity not in WARN_SEVERITIES:
        raise ValidationError(
            f"Severity must be one of {', '.join(WARN_SEVERITIES)}, got `{severity}`."
        )

    return ModerationResult(
        message=f"⚠️ Warning issued to <@{target}> (severity: {severity}).\nReason: {reason}",
        notify_channel=True,
    )


async def handle_scan(ctx: ActionContext) -> ModerationResult:
    ctx.require_permission(Permissions.MANAGE_MESSAGES)

    channel_id = ctx.interaction.option("channel") or ctx.interaction.channel_id
    if not channel_id:
        raise ValidationError("No channel to scan.")
    channel_id = str(channel_id)

    hours = ctx.int_option("hours", SCAN_DEFAULT_HOURS)
    if not 1 <= hours <= SCAN_MAX_HOURS:
        raise ValidationError(f"`hours` must be between 1 and {SCAN_MAX_HOURS}, got {hours}.")

    messages = await ctx.rest.get_channel_messages(channel_id, limit=SCAN_MESSAGE_LIMIT)
    report = analyze_messages(messages or [], window_hours=hours)

    return ModerationResult(message=format_report(report, channel_id), notify_channel=False)


COMMAND_HANDLERS: Dict[str, Handler] = {
    "sentinel-kick": handle_kick,
    "sentinel-ban": handle_ban,
    "sentinel-timeout": handle_timeout,
    "sentinel-warn": handle_warn,
    "sentinel-scan": handle_scan,
}


# =============================================================================
# Executor
# =============================================================================

class ActionExecutor:
    """Runs the handler registered for a command name."""

    def __init__(
        self,
        rest: DiscordRestClient,
        config: Config,
        handlers: Optional[Dict[str, Handler]] = None,
    ) -> None:
        self.rest = rest
        self.config = config
        self.handlers = dict(COMMAND_HANDLERS if handlers is None else handlers)

    async def perform(self, command_name: str, interaction: Interaction) -> ActionOutcome:
        """
        Execute a moderation command.

        Returns:
            ActionOutcome with the result, or with an ActionError for
            unknown commands, validation failures and upstream failures.
        """
        handler = self.handlers.get(command_name)
        if handler is None:
            return ActionOutcome.failure(
                ActionError.from_exception(ValidationError(f"Unknown command `{command_name}`."))
            )

        ctx = ActionContext(interaction=interaction, rest=self.rest, config=self.config)

        try:
            result = await handler(ctx)
        except SentinelError as e:
            logger.warning("Moderation Action Rejected", [
                ("Command", command_name),
                ("Kind", e.kind.value),
                ("Error", str(e)[:100]),
            ])
            return ActionOutcome.failure(ActionError.from_exception(e))
        except Exception as e:
            logger.error("Moderation Action Crashed", [
                ("Command", command_name),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])
            return ActionOutcome.failure(ActionError.from_exception(e))

        logger.success("Moderation Action Completed", [
            ("Command", command_name),
            ("Moderator", ctx.moderator_label),
            ("Guild", interaction.guild_id or "N/A"),
        ])
        return ActionOutcome.success(result)


__all__ = [
    "ActionContext",
    "ActionExecutor",
    "COMMAND_HANDLERS",
    "handle_kick",
    "handle_ban",
    "handle_timeout",
    "handle_warn",
    "handle_scan",
]
