"""Shared constants for symbol resolution, instrument kinds and history periods."""

from typing import Literal

# Canonical period type used by the detail and chart endpoints.
PeriodType = Literal["1mo", "3mo", "6mo", "1y", "2y", "5y"]

# Exchange suffixes tried, in order, when resolving a search query.
# The bare query comes first so an exact listing always wins.
EXCHANGE_SUFFIXES: tuple[str, ...] = (
    "",
    ".PA",  # Paris
    ".F",   # Frankfurt
    ".L",   # London
    ".MI",  # Milan
    ".MC",  # Madrid
    ".AS",  # Amsterdam
    ".BR",  # Brussels
    ".ST",  # Stockholm
    ".CO",  # Copenhagen
    ".HE",  # Helsinki
    ".LS",  # Lisbon
    ".SW",  # Swiss Exchange
)

# Yahoo quoteType values that unlock fund-only fields.
FUND_QUOTE_TYPES: frozenset[str] = frozenset({"MUTUALFUND", "ETF"})
