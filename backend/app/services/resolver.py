"""Symbol resolution: map a free-form query onto the first exchange listing that exists."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from app.config import settings
from app.services.market_data import get_market_data_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """A successful lookup: the ticker named by the matching record, and the record itself."""

    symbol: str
    record: dict


def candidate_tickers(query: str, suffixes: list[str] | None = None) -> list[str]:
    """Query plus each exchange suffix, in priority order (bare query first)."""
    if suffixes is None:
        suffixes = settings.search_suffixes
    return [query + suffix for suffix in suffixes]


def _has_symbol(record: object) -> bool:
    if not isinstance(record, Mapping):
        return False
    symbol = record.get("symbol")
    return isinstance(symbol, str) and bool(symbol.strip())


async def resolve(query: str) -> Resolution | None:
    """Try each candidate ticker in turn and return the first listing found.

    Candidates are looked up strictly one at a time, with a fixed politeness
    delay between them. A candidate that raises, returns nothing, or returns
    a record without a symbol is skipped. Returns None when no candidate
    matches, which is a normal outcome rather than an error.
    """
    source = get_market_data_source()
    candidates = candidate_tickers(query)

    for i, candidate in enumerate(candidates):
        if i and settings.search_delay_seconds > 0:
            await asyncio.sleep(settings.search_delay_seconds)

        logger.info("Trying symbol: %s", candidate)
        try:
            record = await source.lookup(candidate)
        except Exception as exc:
            logger.warning("Lookup failed for %s: %s", candidate, exc)
            continue

        if not _has_symbol(record):
            logger.debug("No listing for %s", candidate)
            continue

        logger.info("Resolved %r to %s", query, candidate)
        return Resolution(symbol=record["symbol"].strip(), record=dict(record))

    logger.info("No listing found for %r after %d candidates", query, len(candidates))
    return None
