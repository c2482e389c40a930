"""Exceptions raised for structural problems that must stop a run."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when the input or configuration makes the analysis unsound.

    Covers missing required columns, unreadable input, denylist entries
    that match no package and unsupported configuration values. Raised
    before any per-package work starts.
    """
