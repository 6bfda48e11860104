from fastapi import APIRouter, HTTPException, Query

from app.constants import PeriodType
from app.schemas.stock import ChartResponse, ErrorResponse, SearchResponse, StockDetailResponse
from app.services import stock_service

router = APIRouter(prefix="/api/stock", tags=["stock"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Missing query or symbol"},
    500: {"model": ErrorResponse, "description": "Market data source failed"},
}


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Resolve a symbol or ISIN to a listing",
    responses=_ERRORS,
)
async def search_stock(
    query: str | None = Query(None, description="Ticker symbol or ISIN (e.g. AIR, FR0000120404)"),
):
    """Try the query as-is, then with each European exchange suffix
    (`.PA`, `.F`, `.L`, ...) until a listing is found.

    Returns at most one result. A query that matches nothing returns
    `{"results": []}` with status 200, not an error.
    """
    return await stock_service.search_stocks(query)


@router.get("", include_in_schema=False)
@router.get("/", include_in_schema=False)
async def missing_symbol():
    raise HTTPException(400, "Symbol is required")


@router.get(
    "/{symbol}",
    response_model=StockDetailResponse,
    summary="Get quote, metadata and price history for a symbol",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Symbol not found"}},
)
async def get_stock(
    symbol: str,
    period: PeriodType | None = Query(None, description="History period (default 1y)"),
):
    """Look up the exact symbol given (no suffix search).

    `info` holds the normalized quote; fund-only fields (`ytdReturn`,
    `fundFamily`, `fundInceptionDate`, `annualHoldingsTurnover`) are present
    only for mutual funds and ETFs. `metadata.dataCompleteness` flags which
    optional fields the source actually supplied.
    """
    return await stock_service.get_stock_detail(symbol, period)


@router.get(
    "/{symbol}/chart",
    response_model=ChartResponse,
    summary="Get candlestick and volume series for a symbol",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "No price history"}},
)
async def get_stock_chart(
    symbol: str,
    period: PeriodType | None = Query(None, description="History period (default 1y)"),
):
    """Return chart-ready series built from the price history.

    Bars with a non-positive price, `high < low`, or `high` below the open or
    close are dropped; `dropped` reports how many.
    """
    return await stock_service.get_stock_chart(symbol, period)
