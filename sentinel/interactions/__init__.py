"""
Sentinel - Interactions Package
===============================
"""

from .dispatcher import DispatchOutcome, InteractionDispatcher


__all__ = ["InteractionDispatcher", "DispatchOutcome"]
