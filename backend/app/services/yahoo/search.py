"""Yahoo Finance symbol search, used to map ISINs onto exchange tickers."""

import logging
import re

from yahooquery import search as _yq_search

logger = logging.getLogger(__name__)

ISIN_RE = re.compile(r"^[A-Z]{2}[A-Z0-9]{9}[0-9]$")


def is_isin(value: str) -> bool:
    """Return True when ``value`` is shaped like an ISIN (e.g. US0378331005)."""
    return bool(ISIN_RE.match(value.strip().upper()))


def symbol_for_isin(isin: str) -> str | None:
    """Return the first Yahoo ticker listed for an ISIN, or None if Yahoo knows none."""
    raw = _yq_search(isin, first_quote=False)
    quotes = raw.get("quotes", []) if isinstance(raw, dict) else []
    for item in quotes:
        symbol = item.get("symbol") if isinstance(item, dict) else None
        if symbol:
            return symbol
    logger.info("Yahoo search returned no listing for ISIN %s", isin)
    return None
