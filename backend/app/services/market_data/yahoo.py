"""Yahoo Finance market data source, a thin wrapper around the yahoo/ service functions."""

import pandas as pd

from app.services.market_data.base import MarketDataSource
from app.services.yahoo import (
    fetch_history as _fetch_history,
    fetch_quote_record as _fetch_quote_record,
)


class YahooMarketDataSource(MarketDataSource):
    """Delegates all lookups to the yahoo/ service package."""

    async def lookup(self, symbol: str) -> dict | None:
        return await _fetch_quote_record(symbol)

    async def fetch_history(self, symbol: str, period: str = "1y") -> pd.DataFrame:
        return await _fetch_history(symbol, period=period)
