"""
Serials Overlap - package overlap analysis for library serials holdings.

This package reads a holdings export (which journals each subscribed
package provides, and over which dates) and reports, for every package,
the share of its journals that another package covers at least as well.

Main entry point is the CLI via `serials-overlap run` command.

Example:
    $ serials-overlap run -i holdings.csv -o output/ --exclude "Trial Package"
"""

__all__ = ["__version__", "run_overlap", "normalize_holdings", "read_holdings", "summarize"]
__version__ = "0.1.0"

from .core.coverage import normalize_holdings
from .core.engine import run_overlap
from .core.summary import summarize
from .input.holdings_csv import read_holdings
