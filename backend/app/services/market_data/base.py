"""Abstract base class for market data sources."""

from abc import ABC, abstractmethod

import pandas as pd


class MarketDataSource(ABC):
    """Provider interface for quote records and OHLCV history.

    Implementations wrap a specific data source (Yahoo Finance, ...).
    Consumers call get_market_data_source() and use this interface without
    knowing which backend is active.
    """

    @abstractmethod
    async def lookup(self, symbol: str) -> dict | None:
        """Look up one exact ticker.

        Returns a flat record keyed by provider field names, or None when the
        source has no listing for the symbol. Transport failures raise.
        """

    @abstractmethod
    async def fetch_history(self, symbol: str, period: str = "1y") -> pd.DataFrame:
        """Fetch daily OHLCV history for a single symbol.

        Returns DataFrame with index=date, columns=[open, high, low, close, volume].
        Raises ValueError if no data is available.
        """
