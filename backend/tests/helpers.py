"""Shared test helpers: Yahoo-shaped raw records and history frames."""

from datetime import date

import pandas as pd


def make_equity_record(symbol: str = "AIR.PA", **overrides) -> dict:
    """Flattened Yahoo record for a stock, as returned by the info lookup."""
    record = {
        "symbol": symbol,
        "shortName": "AIRBUS SE",
        "longName": "Airbus SE",
        "exchange": "PAR",
        "currency": "EUR",
        "quoteType": "EQUITY",
        "regularMarketPrice": 142.5,
        "regularMarketPreviousClose": 140.0,
        "regularMarketChange": 2.5,
        "regularMarketChangePercent": 1.7857,
        "regularMarketOpen": 140.2,
        "regularMarketDayHigh": 143.0,
        "regularMarketDayLow": 139.8,
        "regularMarketVolume": 1_250_000,
        "averageVolume": 1_400_000,
        "marketCap": 112_000_000_000,
        "fiftyTwoWeekHigh": 172.8,
        "fiftyTwoWeekLow": 121.1,
        "fiftyDayAverage": 150.3,
        "twoHundredDayAverage": 148.9,
        "sector": "Industrials",
        "industry": "Aerospace & Defense",
        "website": "https://www.airbus.com",
        "longBusinessSummary": "Airbus SE designs, manufactures and delivers aircraft.",
    }
    record.update(overrides)
    return record


def make_fund_record(symbol: str = "IWDA.AS", quote_type: str = "ETF", **overrides) -> dict:
    """Flattened Yahoo record for an ETF or mutual fund."""
    record = {
        "symbol": symbol,
        "shortName": "iShares Core MSCI World UCITS ETF",
        "longName": "iShares Core MSCI World UCITS ETF USD (Acc)",
        "exchange": "AMS",
        "currency": "EUR",
        "quoteType": quote_type,
        "regularMarketPrice": 98.12,
        "regularMarketPreviousClose": 97.5,
        "regularMarketChange": 0.62,
        "regularMarketChangePercent": 0.6359,
        "fiftyTwoWeekHigh": 101.0,
        "fiftyTwoWeekLow": 80.2,
        "fiftyDayAverage": 96.4,
        "twoHundredDayAverage": 92.7,
        "ytdReturn": 0.1123,
        "fundFamily": "iShares",
        "fundInceptionDate": "2009-09-25",
        "annualHoldingsTurnover": 0.03,
    }
    record.update(overrides)
    return record


def make_yahoo_df(n_days: int = 10, base_price: float = 100.0) -> pd.DataFrame:
    """Create a DataFrame that looks like Yahoo Finance output."""
    dates = pd.bdate_range(end=date(2025, 6, 30), periods=n_days)
    prices = [base_price + i * 0.5 for i in range(n_days)]
    return pd.DataFrame({
        "open": [p - 0.5 for p in prices],
        "high": [p + 1.0 for p in prices],
        "low": [p - 1.0 for p in prices],
        "close": prices,
        "volume": [1_000_000] * n_days,
    }, index=dates)
