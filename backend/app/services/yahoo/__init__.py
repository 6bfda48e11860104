"""Yahoo Finance data fetching via yahooquery.

This package splits Yahoo Finance operations into focused modules:
- info: Single-ticker quote/profile lookup flattened into one record
- history: OHLCV history fetching
- search: Symbol search and ISIN-to-ticker mapping

All public functions are re-exported here so consumers can use:
    from app.services.yahoo import <name>
"""

from app.services.yahoo.history import PERIOD_MAP, fetch_history
from app.services.yahoo.info import INFO_MODULES, fetch_quote_record
from app.services.yahoo.search import is_isin, symbol_for_isin

__all__ = [
    # info
    "INFO_MODULES",
    "fetch_quote_record",
    # history
    "PERIOD_MAP",
    "fetch_history",
    # search
    "is_isin",
    "symbol_for_isin",
]
