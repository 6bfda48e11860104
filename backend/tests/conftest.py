from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import app


@pytest.fixture(autouse=True)
def no_search_delay(monkeypatch):
    monkeypatch.setattr(settings, "search_delay_seconds", 0)


@pytest.fixture
def source():
    """Stub market data source wired into the resolver and stock service.

    Defaults: every lookup finds nothing and every history fetch has no data.
    """
    provider = MagicMock()
    provider.lookup = AsyncMock(return_value=None)
    provider.fetch_history = AsyncMock(side_effect=ValueError("No data found"))
    with patch("app.services.resolver.get_market_data_source", return_value=provider), \
            patch("app.services.stock_service.get_market_data_source", return_value=provider):
        yield provider


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
