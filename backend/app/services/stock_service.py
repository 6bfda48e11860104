"""Stock search, detail and chart business logic."""

import logging

from fastapi import HTTPException

from app.config import settings
from app.schemas.stock import (
    ChartResponse,
    HistoricalBar,
    SearchResponse,
    StockDetailResponse,
)
from app.services.chart import build_chart_series, frame_to_bars
from app.services.market_data import MarketDataSource, get_market_data_source
from app.services.normalizer import NormalizationError, normalize_detail, normalize_summary
from app.services.resolver import resolve

logger = logging.getLogger(__name__)


def _require_symbol(symbol: str | None) -> str:
    if not symbol or not symbol.strip():
        raise HTTPException(400, "Symbol is required")
    return symbol.strip()


async def search_stocks(query: str | None) -> SearchResponse:
    """Resolve a symbol/ISIN query to at most one listing.

    "Nothing found" is a successful, empty search; only a failure to run the
    search at all is an error.
    """
    if not query or not query.strip():
        raise HTTPException(400, "Query parameter is required")
    query = query.strip()
    logger.info("Search query: %s", query)

    try:
        match = await resolve(query)
        if match is None:
            return SearchResponse(results=[])
        summary = normalize_summary(match.record)
    except Exception as exc:
        logger.exception("Search for %r failed", query)
        raise HTTPException(500, f"Search failed: {exc}") from exc

    return SearchResponse(results=[summary])


async def _load_history(source: MarketDataSource, symbol: str, period: str) -> list[HistoricalBar]:
    """Fetch history as bars; an empty list when the source has none."""
    try:
        df = await source.fetch_history(symbol, period=period)
    except ValueError:
        logger.warning("No price history for %s (%s)", symbol, period)
        return []
    except Exception as exc:
        logger.exception("History fetch failed for %s", symbol)
        raise HTTPException(500, f"Failed to fetch price history for {symbol}: {exc}") from exc
    return frame_to_bars(df)


async def get_stock_detail(symbol: str | None, period: str | None = None) -> StockDetailResponse:
    """Look up one exact symbol (no suffix search) and return its normalized detail."""
    symbol = _require_symbol(symbol)
    period = period or settings.default_history_period
    source = get_market_data_source()

    try:
        record = await source.lookup(symbol)
    except Exception as exc:
        logger.exception("Lookup failed for %s", symbol)
        raise HTTPException(500, f"Failed to fetch stock data for {symbol}: {exc}") from exc

    if record is None:
        raise HTTPException(404, "Failed to fetch stock data")

    try:
        detail = normalize_detail(record)
    except NormalizationError as exc:
        logger.warning("Discarding malformed record for %s: %s", symbol, exc)
        raise HTTPException(404, "Failed to fetch stock data") from exc

    detail.history = await _load_history(source, symbol, period)
    return detail


async def get_stock_chart(symbol: str | None, period: str | None = None) -> ChartResponse:
    """Return candlestick and volume series built from the sane bars only."""
    symbol = _require_symbol(symbol)
    period = period or settings.default_history_period
    source = get_market_data_source()

    try:
        df = await source.fetch_history(symbol, period=period)
    except ValueError as exc:
        raise HTTPException(404, f"No price data available for {symbol}") from exc
    except Exception as exc:
        logger.exception("History fetch failed for %s", symbol)
        raise HTTPException(500, f"Failed to fetch price history for {symbol}: {exc}") from exc

    return build_chart_series(frame_to_bars(df))
