"""
Tests for sentinel/moderation/actions.py

Each handler is exercised through ActionExecutor.perform() with the
REST client mocked, so every test sees the same outcome shape the
dispatcher does.
"""

from datetime import datetime, timedelta, timezone

import pytest

from sentinel.core.constants import Permissions
from sentinel.core.errors import ConfigurationError, DiscordAPIError, ErrorKind
from sentinel.moderation.actions import ActionExecutor
from sentinel.moderation.results import ActionError, ActionOutcome, ModerationResult


TARGET = "123456789"
MODERATOR = "111222333"
GUILD = "987654321"
CHANNEL = "555666777"


@pytest.fixture
def executor(mock_rest, config):
    return ActionExecutor(mock_rest, config)


# =============================================================================
# Result Types
# =============================================================================

class TestActionOutcome:
    """Tests for ActionOutcome invariants."""

    def test_exactly_one_side(self):
        with pytest.raises(ValueError):
            ActionOutcome()
        with pytest.raises(ValueError):
            ActionOutcome(
                result=ModerationResult("x"),
                error=ActionError(ErrorKind.VALIDATION, "y"),
            )

    def test_from_foreign_exception_is_upstream(self):
        error = ActionError.from_exception(RuntimeError("boom"))
        assert error.kind == ErrorKind.UPSTREAM
        assert error.message == "boom"


# =============================================================================
# Executor
# =============================================================================

class TestExecutor:
    """Tests for routing and error conversion."""

    @pytest.mark.asyncio
    async def test_unknown_command(self, executor, make_interaction, mock_rest):
        outcome = await executor.perform("sentinel-nuke", make_interaction("sentinel-nuke"))
        assert not outcome.ok
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert "sentinel-nuke" in outcome.error.message
        assert mock_rest.mock_calls == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(self, mock_rest, config, make_interaction):
        async def broken(ctx):
            raise RuntimeError("kaboom")

        executor = ActionExecutor(mock_rest, config, handlers={"sentinel-kick": broken})
        outcome = await executor.perform("sentinel-kick", make_interaction("sentinel-kick"))
        assert outcome.error.kind == ErrorKind.UPSTREAM
        assert outcome.error.message == "kaboom"

    @pytest.mark.asyncio
    async def test_missing_bot_token_is_configuration_error(
        self, mock_rest, config, make_interaction
    ):
        mock_rest.kick_member.side_effect = ConfigurationError(
            "Missing required configuration: DISCORD_BOT_TOKEN"
        )
        executor = ActionExecutor(mock_rest, config)
        outcome = await executor.perform(
            "sentinel-kick",
            make_interaction("sentinel-kick", {"user": TARGET, "notify": False}),
        )
        assert outcome.error.kind == ErrorKind.CONFIGURATION
        assert "DISCORD_BOT_TOKEN" in outcome.error.message


# =============================================================================
# Kick
# =============================================================================

class TestKick:
    """Tests for /sentinel-kick."""

    @pytest.mark.asyncio
    async def test_kick_success(self, executor, make_interaction, mock_rest):
        interaction = make_interaction("sentinel-kick", {"user": TARGET, "reason": "spam"})
        outcome = await executor.perform("sentinel-kick", interaction)

        assert outcome.ok
        assert f"<@{TARGET}>" in outcome.result.message
        assert "spam" in outcome.result.message
        assert "📨" in outcome.result.message
        assert outcome.result.notify_channel is True

        mock_rest.kick_member.assert_awaited_once()
        args, kwargs = mock_rest.kick_member.call_args
        assert args == (GUILD, TARGET)
        assert kwargs["reason"].startswith("spam (by moduser)")

    @pytest.mark.asyncio
    async def test_kick_default_reason(self, executor, make_interaction):
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": TARGET})
        )
        assert "No reason provided" in outcome.result.message

    @pytest.mark.asyncio
    async def test_dm_failure_only_changes_message(self, executor, make_interaction, mock_rest):
        mock_rest.send_direct_message.side_effect = DiscordAPIError(
            "Cannot send messages to this user", status=403, code=50007
        )
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": TARGET})
        )
        assert outcome.ok
        assert "Could not DM the user" in outcome.result.message
        mock_rest.kick_member.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dm_does_not_claim_failed_kick(self, executor, make_interaction, mock_rest):
        mock_rest.kick_member.side_effect = DiscordAPIError("Missing Permissions", status=403)
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": TARGET, "reason": "spam"})
        )

        assert outcome.error.kind == ErrorKind.UPSTREAM
        user_id, text = mock_rest.send_direct_message.call_args.args
        assert user_id == TARGET
        assert "issued a kick" in text
        assert "have been kicked" not in text

    @pytest.mark.asyncio
    async def test_notify_false_skips_dm(self, executor, make_interaction, mock_rest):
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": TARGET, "notify": False})
        )
        assert outcome.ok
        mock_rest.send_direct_message.assert_not_awaited()
        assert "DM" not in outcome.result.message

    @pytest.mark.asyncio
    async def test_kick_requires_guild(self, executor, make_interaction, mock_rest):
        interaction = make_interaction("sentinel-kick", {"user": TARGET}, guild_id=None)
        outcome = await executor.perform("sentinel-kick", interaction)
        assert outcome.error.kind == ErrorKind.VALIDATION
        mock_rest.kick_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_kick_requires_target(self, executor, make_interaction):
        outcome = await executor.perform("sentinel-kick", make_interaction("sentinel-kick"))
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert "user" in outcome.error.message

    @pytest.mark.asyncio
    async def test_cannot_target_self(self, executor, make_interaction, mock_rest):
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": MODERATOR})
        )
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert "yourself" in outcome.error.message
        mock_rest.kick_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_permission_denied(self, executor, make_interaction, mock_rest):
        interaction = make_interaction(
            "sentinel-kick", {"user": TARGET}, permissions=str(Permissions.MANAGE_MESSAGES)
        )
        outcome = await executor.perform("sentinel-kick", interaction)
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert "Kick Members" in outcome.error.message
        mock_rest.kick_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_administrator_passes(self, executor, make_interaction):
        interaction = make_interaction(
            "sentinel-kick", {"user": TARGET}, permissions=str(Permissions.ADMINISTRATOR)
        )
        outcome = await executor.perform("sentinel-kick", interaction)
        assert outcome.ok

    @pytest.mark.asyncio
    async def test_upstream_failure(self, executor, make_interaction, mock_rest):
        mock_rest.kick_member.side_effect = DiscordAPIError("Missing Permissions", status=403)
        outcome = await executor.perform(
            "sentinel-kick", make_interaction("sentinel-kick", {"user": TARGET})
        )
        assert outcome.error.kind == ErrorKind.UPSTREAM
        assert outcome.error.message == "Discord API error 403: Missing Permissions"


# =============================================================================
# Ban
# =============================================================================

class TestBan:
    """Tests for /sentinel-ban."""

    @pytest.mark.asyncio
    async def test_ban_with_purge(self, executor, make_interaction, mock_rest):
        interaction = make_interaction(
            "sentinel-ban", {"user": TARGET, "reason": "raid", "delete_days": 3}
        )
        outcome = await executor.perform("sentinel-ban", interaction)

        assert outcome.ok
        assert outcome.result.message.startswith(f"🔨 Banned <@{TARGET}>.")
        assert "3 day(s)" in outcome.result.message
        _, kwargs = mock_rest.ban_member.call_args
        assert kwargs["delete_message_seconds"] == 3 * 86400

    @pytest.mark.asyncio
    async def test_ban_default_keeps_messages(self, executor, make_interaction, mock_rest):
        await executor.perform("sentinel-ban", make_interaction("sentinel-ban", {"user": TARGET}))
        _, kwargs = mock_rest.ban_member.call_args
        assert kwargs["delete_message_seconds"] == 0

    @pytest.mark.asyncio
    async def test_dm_does_not_claim_failed_ban(self, executor, make_interaction, mock_rest):
        mock_rest.ban_member.side_effect = DiscordAPIError("Missing Permissions", status=403)
        outcome = await executor.perform(
            "sentinel-ban", make_interaction("sentinel-ban", {"user": TARGET})
        )

        assert outcome.error.kind == ErrorKind.UPSTREAM
        _, text = mock_rest.send_direct_message.call_args.args
        assert "issued a ban" in text
        assert "have been banned" not in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [-1, 8, 30])
    async def test_ban_rejects_out_of_range_days(self, executor, make_interaction, mock_rest, days):
        interaction = make_interaction("sentinel-ban", {"user": TARGET, "delete_days": days})
        outcome = await executor.perform("sentinel-ban", interaction)
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert "delete_days" in outcome.error.message
        mock_rest.ban_member.assert_not_awaited()


# =============================================================================
# Timeout
# =============================================================================

class TestTimeout:
    """Tests for /sentinel-timeout."""

    @pytest.mark.asyncio
    async def test_timeout_success(self, executor, make_interaction, mock_rest):
        before = datetime.now(timezone.utc)
        interaction = make_interaction("sentinel-timeout", {"user": TARGET, "duration": "2h"})
        outcome = await executor.perform("sentinel-timeout", interaction)

        assert outcome.ok
        assert f"Timed out <@{TARGET}> for 2h" in outcome.result.message

        args, _ = mock_rest.timeout_member.call_args
        until = args[2]
        assert before + timedelta(hours=2) <= until <= datetime.now(timezone.utc) + timedelta(hours=2)

    @pytest.mark.asyncio
    async def test_timeout_default_duration(self, executor, make_interaction):
        outcome = await executor.perform(
            "sentinel-timeout", make_interaction("sentinel-timeout", {"user": TARGET})
        )
        assert "for 1h" in outcome.result.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", ["soon", "0m", "29d", "5w"])
    async def test_timeout_rejects_bad_duration(
        self, executor, make_interaction, mock_rest, duration
    ):
        interaction = make_interaction("sentinel-timeout", {"user": TARGET, "duration": duration})
        outcome = await executor.perform("sentinel-timeout", interaction)
        assert outcome.error.kind == ErrorKind.VALIDATION
        mock_rest.timeout_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_timeout_accepts_28_days(self, executor, make_interaction):
        interaction = make_interaction("sentinel-timeout", {"user": TARGET, "duration": "28d"})
        outcome = await executor.perform("sentinel-timeout", interaction)
        assert outcome.ok
        assert "for 4w" in outcome.result.message


# =============================================================================
# Warn
# =============================================================================

class TestWarn:
    """Tests for /sentinel-warn."""

    @pytest.mark.asyncio
    async def test_warn_makes_no_discord_calls(self, executor, make_interaction, mock_rest):
        interaction = make_interaction(
            "sentinel-warn", {"user": "123", "reason": "spam", "severity": "high"}
        )
        outcome = await executor.perform("sentinel-warn", interaction)

        assert outcome.ok
        assert outcome.result.message == (
            "⚠️ Warning issued to <@123> (severity: high).\nReason: spam"
        )
        assert outcome.result.notify_channel is True
        assert mock_rest.mock_calls == []

    @pytest.mark.asyncio
    async def test_warn_without_member_or_guild(self, executor, make_interaction):
        interaction = make_interaction(
            "sentinel-warn", {"user": "123", "reason": "spam"}, guild_id=None, moderator_id=None
        )
        outcome = await executor.perform("sentinel-warn", interaction)
        assert outcome.ok
        assert "severity: medium" in outcome.result.message

    @pytest.mark.asyncio
    async def test_warn_rejects_unknown_severity(self, executor, make_interaction):
        interaction = make_interaction("sentinel-warn", {"user": "123", "severity": "extreme"})
        outcome = await executor.perform("sentinel-warn", interaction)
        assert outcome.error.kind == ErrorKind.VALIDATION


# =============================================================================
# Scan
# =============================================================================

class TestScan:
    """Tests for /sentinel-scan."""

    @pytest.mark.asyncio
    async def test_scan_defaults_to_current_channel(self, executor, make_interaction, mock_rest):
        outcome = await executor.perform("sentinel-scan", make_interaction("sentinel-scan"))

        assert outcome.ok
        assert outcome.result.notify_channel is False
        assert f"<#{CHANNEL}>" in outcome.result.message
        assert "last 24h" in outcome.result.message
        mock_rest.get_channel_messages.assert_awaited_once_with(CHANNEL, limit=100)

    @pytest.mark.asyncio
    async def test_scan_explicit_channel(self, executor, make_interaction, mock_rest):
        interaction = make_interaction("sentinel-scan", {"channel": "999", "hours": 6})
        outcome = await executor.perform("sentinel-scan", interaction)
        assert "<#999>" in outcome.result.message
        assert "last 6h" in outcome.result.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hours", [0, 73])
    async def test_scan_rejects_out_of_range_hours(self, executor, make_interaction, hours):
        outcome = await executor.perform(
            "sentinel-scan", make_interaction("sentinel-scan", {"hours": hours})
        )
        assert outcome.error.kind == ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_scan_requires_manage_messages(self, executor, make_interaction, mock_rest):
        interaction = make_interaction(
            "sentinel-scan", permissions=str(Permissions.KICK_MEMBERS)
        )
        outcome = await executor.perform("sentinel-scan", interaction)
        assert "Manage Messages" in outcome.error.message
        mock_rest.get_channel_messages.assert_not_awaited()
