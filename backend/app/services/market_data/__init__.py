"""Market data source registry: resolves a provider name to a singleton instance."""

from app.config import settings
from app.services.market_data.base import MarketDataSource
from app.services.market_data.yahoo import YahooMarketDataSource

__all__ = ["MarketDataSource", "init_market_data_source", "get_market_data_source"]

_PROVIDERS: dict[str, type[MarketDataSource]] = {
    "yahoo": YahooMarketDataSource,
}

_instance: MarketDataSource | None = None


def init_market_data_source() -> None:
    """Instantiate the configured market data source (called once at startup)."""
    global _instance
    name = settings.market_data_provider
    cls = _PROVIDERS.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown market data provider: {name!r}. Available: {list(_PROVIDERS)}"
        )
    _instance = cls()


def get_market_data_source() -> MarketDataSource:
    """Return the active market data source singleton.

    Raises RuntimeError if init_market_data_source() hasn't been called yet.
    """
    if _instance is None:
        raise RuntimeError(
            "Market data source not initialized, call init_market_data_source() first"
        )
    return _instance
