"""Yahoo Finance OHLCV history fetching."""

import pandas as pd
from yahooquery import Ticker

from app.config import settings
from app.utils import async_threadable

PERIOD_MAP = {
    "1mo": "1mo", "3mo": "3mo", "6mo": "6mo",
    "1y": "1y", "2y": "2y", "5y": "5y",
    "ytd": "ytd", "max": "max",
}


@async_threadable
def fetch_history(symbol: str, period: str = "1y", interval: str = "1d") -> pd.DataFrame:
    """Fetch OHLCV data from Yahoo Finance.

    Returns DataFrame with columns: open, high, low, close, volume.
    Index: date. Raises ValueError when Yahoo has no bars for the symbol.
    """
    ticker = Ticker(symbol, timeout=settings.yahoo_timeout)
    normalized = PERIOD_MAP.get(period.lower(), period)
    df = ticker.history(period=normalized, interval=interval)

    if isinstance(df, dict) or df.empty:
        raise ValueError(f"No data found for {symbol}")

    if isinstance(df.index, pd.MultiIndex):
        df = df.reset_index().set_index("date")

    columns = [c for c in ("open", "high", "low", "close", "volume") if c in df.columns]
    return df[columns]
