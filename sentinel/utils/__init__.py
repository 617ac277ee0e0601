"""Sentinel - Utilities."""
