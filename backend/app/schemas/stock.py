from typing import Annotated, Any, Union

from pydantic import BaseModel, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

from app.constants import FUND_QUOTE_TYPES


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON keys."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "allow_inf_nan": False,
    }


class StockSummary(CamelModel):
    symbol: str | None = Field(default=None, description="Ticker symbol (e.g. AIR.PA)")
    short_name: str | None = Field(default=None, description="Short display name")
    long_name: str | None = Field(default=None, description="Full company or fund name")
    exchange: str | None = Field(default=None, description="Exchange code (e.g. PAR)")
    isin: str | None = Field(default=None, description="ISIN, when the lookup was made by ISIN")
    currency: str | None = Field(default=None, description="ISO 4217 currency code")


class SearchResponse(BaseModel):
    results: list[StockSummary] = Field(
        default_factory=list,
        description="Zero or one matching listing",
    )


class StockInfo(StockSummary):
    quote_type: str = Field(default="", description="Upper-cased Yahoo quoteType (EQUITY, ETF, MUTUALFUND, ...)")

    last_price: float | None = Field(default=None, description="Latest traded price")
    previous_close: float | None = Field(default=None, description="Previous session close price")
    day_change: float | None = Field(default=None, description="Absolute change from previous close")
    day_change_percent: float | None = Field(default=None, description="Percentage change from previous close")
    fifty_two_week_high: float | None = Field(default=None, description="52-week high")
    fifty_two_week_low: float | None = Field(default=None, description="52-week low")
    fifty_day_average: float | None = Field(default=None, description="50-day moving average")
    two_hundred_day_average: float | None = Field(default=None, description="200-day moving average")

    open: float | None = Field(default=None, description="Session open price")
    day_high: float | None = Field(default=None, description="Session high")
    day_low: float | None = Field(default=None, description="Session low")
    volume: float | None = Field(default=None, description="Session volume")
    average_volume: float | None = Field(default=None, description="Average daily volume")
    market_cap: float | None = Field(default=None, description="Market capitalisation")

    sector: str | None = Field(default=None, description="Sector (equities only)")
    industry: str | None = Field(default=None, description="Industry (equities only)")
    website: str | None = Field(default=None, description="Company website")
    description: str | None = Field(default=None, description="Business summary")


class FundInfo(StockInfo):
    ytd_return: float | None = Field(default=None, description="Year-to-date return")
    fund_family: str | None = Field(default=None, description="Fund family / issuer")
    fund_inception_date: str | None = Field(default=None, description="Inception date (ISO 8601, e.g. 2009-09-25)")
    annual_holdings_turnover: float | None = Field(default=None, description="Annual holdings turnover")


class DataCompleteness(CamelModel):
    has_price: bool = Field(description="Source supplied a last price")


class FundDataCompleteness(DataCompleteness):
    has_ytd_return: bool = Field(description="Source supplied a YTD return")
    has_fund_family: bool = Field(description="Source supplied a fund family")
    has_inception_date: bool = Field(description="Source supplied an inception date")
    has_holdings_turnover: bool = Field(description="Source supplied holdings turnover")


class QuoteMetadata(CamelModel):
    quote_type: str = Field(default="", description="Upper-cased Yahoo quoteType")
    data_completeness: DataCompleteness


class FundQuoteMetadata(QuoteMetadata):
    data_completeness: FundDataCompleteness


def _kind_tag(value: Any) -> str:
    """Pick the fund or standard variant from the quote type.

    Called with raw dicts during validation and with model instances during
    serialization.
    """
    if isinstance(value, dict):
        quote_type = value.get("quoteType", value.get("quote_type"))
    else:
        quote_type = getattr(value, "quote_type", None)
    return "fund" if str(quote_type or "").upper() in FUND_QUOTE_TYPES else "standard"


InstrumentInfo = Annotated[
    Union[Annotated[FundInfo, Tag("fund")], Annotated[StockInfo, Tag("standard")]],
    Discriminator(_kind_tag),
]

InstrumentMetadata = Annotated[
    Union[Annotated[FundQuoteMetadata, Tag("fund")], Annotated[QuoteMetadata, Tag("standard")]],
    Discriminator(_kind_tag),
]


class HistoricalBar(CamelModel):
    date: str = Field(description="Trading date (ISO 8601)")
    open: float | None = Field(default=None, description="Opening price")
    high: float | None = Field(default=None, description="Highest price of the day")
    low: float | None = Field(default=None, description="Lowest price of the day")
    close: float | None = Field(default=None, description="Closing price")
    volume: int | None = Field(default=None, description="Trading volume")


class StockDetailResponse(CamelModel):
    info: InstrumentInfo
    metadata: InstrumentMetadata
    history: list[HistoricalBar] = Field(
        default_factory=list,
        description="Daily OHLCV bars, oldest first",
    )


class Candle(CamelModel):
    time: str = Field(description="Trading date (ISO 8601)")
    open: float
    high: float
    low: float
    close: float


class VolumeBar(CamelModel):
    time: str = Field(description="Trading date (ISO 8601)")
    value: float = Field(description="Trading volume")
    color: str = Field(description="Bar colour: green when close >= open, red otherwise")


class ChartResponse(CamelModel):
    candles: list[Candle] = Field(default_factory=list, description="Candlestick series")
    volume: list[VolumeBar] = Field(default_factory=list, description="Volume histogram series")
    dropped: int = Field(default=0, description="Bars removed by the OHLC sanity filter")


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error message")
