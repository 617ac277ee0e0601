"""
Sentinel - Moderation Package
=============================

Command handlers, the action executor, the audit notifier and the
slash command registry.
"""

from .actions import COMMAND_HANDLERS, ActionExecutor
from .audit import AuditNotifier
from .commands import SENTINEL_COMMANDS, register_commands
from .results import ActionError, ActionOutcome, ModerationResult


__all__ = [
    "ActionExecutor",
    "COMMAND_HANDLERS",
    "AuditNotifier",
    "SENTINEL_COMMANDS",
    "register_commands",
    "ActionError",
    "ActionOutcome",
    "ModerationResult",
]
