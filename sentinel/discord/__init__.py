"""
Sentinel - Discord Package
==========================

Interaction payload models and the REST client.
"""

from .models import Interaction, InteractionResponse
from .rest import DiscordRestClient


__all__ = [
    "Interaction",
    "InteractionResponse",
    "DiscordRestClient",
]
