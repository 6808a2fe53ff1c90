"""Errors raised while reading rollcall settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when an environment setting has a value rollcall cannot use."""
