"""Yahoo Finance quote and profile lookup for a single ticker.

The quote, price, statistics and profile modules are fetched in one request
and flattened into a single record keyed by Yahoo's own field names, which is
the raw shape the quote normalizer consumes.
"""

import logging
import math
from datetime import date, datetime, timezone

from yahooquery import Ticker

from app.config import settings
from app.services.yahoo.search import is_isin, symbol_for_isin
from app.utils import async_threadable

logger = logging.getLogger(__name__)

# Merged in order; the first module that supplies a key wins.
INFO_MODULES: tuple[str, ...] = (
    "quoteType",
    "price",
    "summaryDetail",
    "defaultKeyStatistics",
    "fundProfile",
    "summaryProfile",
)

# Yahoo reports these as fractions (0.0082); the record carries percentage points.
PERCENT_FIELDS: tuple[str, ...] = ("regularMarketChangePercent",)

# yahooquery formats these as "YYYY-MM-DD" strings; anything else is coerced to match.
DATE_FIELDS: tuple[str, ...] = ("fundInceptionDate",)


def _iso_date(value: object) -> object:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return datetime.fromtimestamp(value, tz=timezone.utc).date().isoformat()
    if isinstance(value, str):
        return value[:10]
    return value


def _merge_modules(payload: dict) -> dict:
    """Flatten per-module dicts into one record.

    Empty placeholders (``{}``) are skipped so they never shadow a real value
    supplied by a later module.
    """
    record: dict = {}
    for module in INFO_MODULES:
        values = payload.get(module)
        if not isinstance(values, dict):
            continue
        for key, value in values.items():
            if value == {}:
                continue
            record.setdefault(key, value)

    for key in PERCENT_FIELDS:
        value = record.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            record[key] = round(value * 100, 4)

    for key in DATE_FIELDS:
        if key in record:
            record[key] = _iso_date(record[key])

    return record


def fetch_quote_record_sync(symbol: str) -> dict | None:
    """Look up one ticker (or ISIN) and return its flattened record.

    Returns None when Yahoo has no listing for the symbol; Yahoo signals this
    with a plain error string instead of the module dict. Transport errors
    from yahooquery propagate to the caller.
    """
    isin = None
    yahoo_symbol = symbol
    if is_isin(symbol):
        resolved = symbol_for_isin(symbol.strip().upper())
        if resolved is None:
            return None
        isin, yahoo_symbol = symbol.strip().upper(), resolved
        logger.info("Resolved ISIN %s to %s", isin, yahoo_symbol)

    ticker = Ticker(yahoo_symbol, timeout=settings.yahoo_timeout)
    data = ticker.get_modules(list(INFO_MODULES))

    payload = data.get(yahoo_symbol) if isinstance(data, dict) else None
    if not isinstance(payload, dict):
        logger.info("Yahoo returned no quote data for %s: %s", yahoo_symbol, repr(payload)[:200])
        return None

    record = _merge_modules(payload)
    if not record:
        return None
    if isin:
        record["isin"] = isin
    return record


@async_threadable
def fetch_quote_record(symbol: str) -> dict | None:
    """Async wrapper for the single-ticker quote lookup."""
    return fetch_quote_record_sync(symbol)
