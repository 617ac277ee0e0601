"""
Sentinel
========

Discord interaction webhook that turns signed slash commands into
moderation actions (kick, ban, timeout, warn, scan).
"""

__version__ = "1.0.0"
