"""
Sentinel - Security Package
===========================
"""

from .signature import verify_request


__all__ = ["verify_request"]
