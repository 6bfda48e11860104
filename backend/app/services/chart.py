"""Price history shaping for the candlestick/volume chart."""

import logging
import math
from collections.abc import Iterable

import pandas as pd

from app.schemas.stock import Candle, ChartResponse, HistoricalBar, VolumeBar
from app.services.normalizer import clean_value

logger = logging.getLogger(__name__)

UP_COLOR = "#26a69a80"
DOWN_COLOR = "#ef535080"


def frame_to_bars(df: pd.DataFrame) -> list[HistoricalBar]:
    """Convert an OHLCV DataFrame (index=date) to bars, oldest first.

    Yahoo sometimes repeats the current session as a second row; the last
    row per date wins. Missing prices become None.
    """
    if df.empty:
        return []

    df = df.copy()
    df.index = [pd.Timestamp(idx).date() for idx in df.index]
    df = df[~df.index.duplicated(keep="last")].sort_index()

    bars = []
    for day, row in df.iterrows():
        volume = clean_value(row.get("volume"))
        bars.append(HistoricalBar(
            date=day.isoformat(),
            open=clean_value(row.get("open")),
            high=clean_value(row.get("high")),
            low=clean_value(row.get("low")),
            close=clean_value(row.get("close")),
            volume=int(volume) if volume is not None else None,
        ))
    return bars


def is_valid_bar(bar: HistoricalBar) -> bool:
    """OHLC sanity: all prices finite and positive, high >= low, high >= max(open, close)."""
    prices = (bar.open, bar.high, bar.low, bar.close)
    if any(p is None or not math.isfinite(p) or p <= 0 for p in prices):
        return False
    return bar.high >= bar.low and bar.high >= max(bar.open, bar.close)


def build_chart_series(bars: Iterable[HistoricalBar]) -> ChartResponse:
    bars = list(bars)
    valid = [b for b in bars if is_valid_bar(b)]
    dropped = len(bars) - len(valid)
    if dropped:
        logger.info("Dropped %d/%d bars failing OHLC sanity checks", dropped, len(bars))

    candles = [
        Candle(time=b.date, open=b.open, high=b.high, low=b.low, close=b.close)
        for b in valid
    ]
    volume = [
        VolumeBar(
            time=b.date,
            value=float(b.volume or 0),
            color=UP_COLOR if b.close >= b.open else DOWN_COLOR,
        )
        for b in valid
    ]
    return ChartResponse(candles=candles, volume=volume, dropped=dropped)
