"""
Input parsing utilities.

This package contains code for reading holdings exports.
"""

from .holdings_csv import apply_denylist, package_names, read_holdings

__all__ = ["apply_denylist", "package_names", "read_holdings"]
