"""Quote normalization: raw provider records to stable, null-safe response shapes.

Yahoo omits or nulls fields inconsistently, so every optional value goes
through ``clean_value`` and the detail payload carries per-field completeness
flags. Fund-only fields exist only on fund records; for other instruments the
keys are absent from the JSON rather than null.
"""

import enum
import math
import numbers
from collections.abc import Mapping

import pandas as pd
from pydantic import ValidationError

from app.constants import FUND_QUOTE_TYPES
from app.schemas.stock import (
    DataCompleteness,
    FundDataCompleteness,
    FundInfo,
    FundQuoteMetadata,
    QuoteMetadata,
    StockDetailResponse,
    StockInfo,
    StockSummary,
)


class NormalizationError(ValueError):
    """Raised when a raw quote record cannot be mapped to a response shape."""


class InstrumentKind(str, enum.Enum):
    EQUITY = "EQUITY"
    FUND = "FUND"
    OTHER = "OTHER"


# Mapping: output_field → raw Yahoo key
SUMMARY_FIELDS: dict[str, str] = {
    "symbol": "symbol",
    "short_name": "shortName",
    "long_name": "longName",
    "exchange": "exchange",
    "isin": "isin",
    "currency": "currency",
}

PRICE_FIELDS: dict[str, str] = {
    "last_price": "regularMarketPrice",
    "previous_close": "regularMarketPreviousClose",
    "day_change": "regularMarketChange",
    "day_change_percent": "regularMarketChangePercent",
    "fifty_two_week_high": "fiftyTwoWeekHigh",
    "fifty_two_week_low": "fiftyTwoWeekLow",
    "fifty_day_average": "fiftyDayAverage",
    "two_hundred_day_average": "twoHundredDayAverage",
    "open": "regularMarketOpen",
    "day_high": "regularMarketDayHigh",
    "day_low": "regularMarketDayLow",
    "volume": "regularMarketVolume",
    "average_volume": "averageVolume",
    "market_cap": "marketCap",
}

PROFILE_FIELDS: dict[str, str] = {
    "sector": "sector",
    "industry": "industry",
    "website": "website",
    "description": "longBusinessSummary",
}

FUND_FIELDS: dict[str, str] = {
    "ytd_return": "ytdReturn",
    "fund_family": "fundFamily",
    "fund_inception_date": "fundInceptionDate",
    "annual_holdings_turnover": "annualHoldingsTurnover",
}

# Mapping: completeness flag → raw Yahoo key
FUND_FLAGS: dict[str, str] = {
    "has_ytd_return": "ytdReturn",
    "has_fund_family": "fundFamily",
    "has_inception_date": "fundInceptionDate",
    "has_holdings_turnover": "annualHoldingsTurnover",
}

# String fields where "not None" is enough to count as present.
_NOT_NONE_FLAGS = {"has_fund_family"}


def is_missing(value: object) -> bool:
    """True for the provider's missing-sentinel (None, NaN, NaT), never for 0 or False."""
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def clean_value(value: object) -> object:
    """Map missing values to None and numbers to finite floats; pass anything else through."""
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Real):
        f = float(value)
        return f if math.isfinite(f) else None
    return value


def quote_type_of(raw: Mapping) -> str:
    value = clean_value(raw.get("quoteType"))
    return value.upper() if isinstance(value, str) else ""


def instrument_kind(raw: Mapping) -> InstrumentKind:
    quote_type = quote_type_of(raw)
    if quote_type in FUND_QUOTE_TYPES:
        return InstrumentKind.FUND
    if quote_type == "EQUITY":
        return InstrumentKind.EQUITY
    return InstrumentKind.OTHER


def has_field(raw: Mapping, key: str, *, not_none: bool = False) -> bool:
    """Whether the source actually supplied ``key`` with a usable value."""
    if key not in raw:
        return False
    if not_none:
        return raw[key] is not None
    return not is_missing(raw[key])


def _require_mapping(raw: object) -> Mapping:
    if not isinstance(raw, Mapping):
        raise NormalizationError(f"Expected a quote record mapping, got {type(raw).__name__}")
    return raw


def _pick(raw: Mapping, fields: dict[str, str]) -> dict[str, object]:
    return {name: clean_value(raw.get(key)) for name, key in fields.items()}


def _build(model: type, values: dict, raw: Mapping):
    try:
        return model(**values)
    except ValidationError as exc:
        symbol = raw.get("symbol", "<unknown>")
        fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e.get("loc"))
        raise NormalizationError(f"Malformed quote record for {symbol}: invalid {fields}") from exc


def normalize_summary(raw: object) -> StockSummary:
    """Build the search-result shape from a raw record."""
    raw = _require_mapping(raw)
    return _build(StockSummary, _pick(raw, SUMMARY_FIELDS), raw)


def _completeness(raw: Mapping, kind: InstrumentKind) -> DataCompleteness:
    has_price = has_field(raw, "regularMarketPrice")
    if kind is not InstrumentKind.FUND:
        return DataCompleteness(has_price=has_price)
    flags = {
        flag: has_field(raw, key, not_none=flag in _NOT_NONE_FLAGS)
        for flag, key in FUND_FLAGS.items()
    }
    return FundDataCompleteness(has_price=has_price, **flags)


def normalize_detail(raw: object) -> StockDetailResponse:
    """Build the detail payload (info and metadata) from a raw record.

    Fund-only fields and their completeness flags are included only when the
    instrument is a mutual fund or ETF.
    """
    raw = _require_mapping(raw)
    kind = instrument_kind(raw)
    quote_type = quote_type_of(raw)

    values = _pick(raw, SUMMARY_FIELDS)
    if values["long_name"] is None:
        values["long_name"] = values["short_name"]
    values["quote_type"] = quote_type
    values.update(_pick(raw, PRICE_FIELDS))
    values.update(_pick(raw, PROFILE_FIELDS))

    if kind is InstrumentKind.FUND:
        values.update(_pick(raw, FUND_FIELDS))
        info = _build(FundInfo, values, raw)
        metadata = FundQuoteMetadata(quote_type=quote_type, data_completeness=_completeness(raw, kind))
    else:
        info = _build(StockInfo, values, raw)
        metadata = QuoteMetadata(quote_type=quote_type, data_completeness=_completeness(raw, kind))

    return StockDetailResponse(info=info, metadata=metadata)
