import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import FileResponse

from app.config import settings as app_settings
from app.routers import stock
from app.services.market_data import init_market_data_source

logging.basicConfig(level=app_settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_market_data_source()
    logger.info("Market data source initialized: %s", app_settings.market_data_provider)
    yield


app = FastAPI(
    title="Stockscope",
    summary="Look up a stock, ETF or fund by symbol or ISIN and view its quote and price chart.",
    description=(
        "Stockscope is a small market-data viewer backed by Yahoo Finance.\n\n"
        "**Key concepts:**\n"
        "- Search resolves a symbol or ISIN to a single listing by trying the query "
        "as-is and then with a fixed list of European exchange suffixes. No match is "
        "an empty result, not an error.\n"
        "- Detail lookups take an exact symbol. Numeric fields are finite numbers or "
        "`null`; fund-only fields appear only for mutual funds and ETFs, and "
        "`metadata.dataCompleteness` says which optional fields the source supplied.\n"
        "- Chart series are built from daily bars after dropping bars that fail basic "
        "OHLC sanity checks.\n"
        "- Nothing is cached or persisted: every request goes to the data source.\n\n"
        "Errors are returned as `{\"error\": \"...\"}`."
    ),
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "stock",
            "description": "Symbol/ISIN search, quote detail and chart series.",
        },
        {
            "name": "system",
            "description": "Health checks and operational endpoints.",
        },
    ],
)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return JSONResponse({"error": problems or "Invalid request"}, status_code=400)


app.include_router(stock.router)


@app.get("/api/health", summary="Health check", tags=["system"])
async def health():
    """Return `{\"status\": \"ok\"}` when the service is running."""
    return {"status": "ok"}


# --- Static page serving ---
# The search/detail page lives in backend/static. When the directory is
# missing the API still works and the mount is skipped entirely.
_SPA_DIR = Path(__file__).resolve().parent.parent / "static"

if (_SPA_DIR / "index.html").exists():
    app.mount("/assets", StaticFiles(directory=_SPA_DIR / "assets"), name="static-assets")

    @app.get("/{path:path}", include_in_schema=False)
    async def _spa_fallback(path: str):
        if path == "api" or path.startswith("api/"):
            raise HTTPException(404, "Not Found")
        file = _SPA_DIR / path
        if file.is_file() and file.resolve().is_relative_to(_SPA_DIR.resolve()):
            return FileResponse(file)
        return FileResponse(_SPA_DIR / "index.html")
