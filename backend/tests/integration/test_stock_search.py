"""Integration tests for the stock search endpoint."""

import math

import pytest

from tests.helpers import make_equity_record, make_fund_record

pytestmark = pytest.mark.asyncio(loop_scope="function")


def _listings(**by_symbol):
    """Lookup stub that only knows the given candidate tickers."""
    async def lookup(symbol):
        return by_symbol.get(symbol)
    return lookup


class TestSearchValidation:
    async def test_missing_query(self, client, source):
        resp = await client.get("/api/stock/search")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Query parameter is required"}
        source.lookup.assert_not_awaited()

    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query(self, client, source, query):
        resp = await client.get("/api/stock/search", params={"query": query})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Query parameter is required"}


class TestSearchResults:
    async def test_no_match_returns_empty_list(self, client, source):
        resp = await client.get("/api/stock/search", params={"query": "ZZZZ"})
        assert resp.status_code == 200
        assert resp.json() == {"results": []}
        assert source.lookup.await_count == 13

    async def test_suffix_match(self, client, source):
        source.lookup.side_effect = _listings(**{"AIR.PA": make_equity_record("AIR.PA")})

        resp = await client.get("/api/stock/search", params={"query": "AIR"})

        assert resp.status_code == 200
        assert resp.json() == {"results": [{
            "symbol": "AIR.PA",
            "shortName": "AIRBUS SE",
            "longName": "Airbus SE",
            "exchange": "PAR",
            "isin": None,
            "currency": "EUR",
        }]}
        tried = [call.args[0] for call in source.lookup.await_args_list]
        assert tried == ["AIR", "AIR.PA"]

    async def test_bare_symbol_wins(self, client, source):
        source.lookup.side_effect = _listings(
            AIR=make_equity_record("AIR", exchange="NYQ", currency="USD"),
            **{"AIR.PA": make_equity_record("AIR.PA")},
        )

        resp = await client.get("/api/stock/search", params={"query": "AIR"})

        results = resp.json()["results"]
        assert len(results) == 1
        assert results[0]["symbol"] == "AIR"
        assert results[0]["currency"] == "USD"

    async def test_isin_query(self, client, source):
        source.lookup.side_effect = _listings(
            NL0000235190=make_equity_record("AIR.PA", isin="NL0000235190"),
        )

        resp = await client.get("/api/stock/search", params={"query": "NL0000235190"})

        assert resp.json()["results"][0]["isin"] == "NL0000235190"

    async def test_missing_names_are_null(self, client, source):
        source.lookup.side_effect = _listings(
            XYZ={"symbol": "XYZ", "shortName": math.nan, "currency": None},
        )

        resp = await client.get("/api/stock/search", params={"query": "XYZ"})

        result = resp.json()["results"][0]
        assert result["shortName"] is None
        assert result["longName"] is None
        assert result["currency"] is None

    async def test_summary_has_no_fund_fields(self, client, source):
        source.lookup.side_effect = _listings(**{"IWDA.AS": make_fund_record()})

        resp = await client.get("/api/stock/search", params={"query": "IWDA"})

        assert "ytdReturn" not in resp.json()["results"][0]

    async def test_lookup_errors_fall_through(self, client, source):
        async def lookup(symbol):
            if symbol == "AIR":
                raise ConnectionError("connection reset")
            return make_equity_record(symbol) if symbol == "AIR.PA" else None
        source.lookup.side_effect = lookup

        resp = await client.get("/api/stock/search", params={"query": "AIR"})

        assert resp.status_code == 200
        assert resp.json()["results"][0]["symbol"] == "AIR.PA"


class TestSearchFailures:
    async def test_malformed_record_is_500(self, client, source):
        source.lookup.side_effect = _listings(AIR=make_equity_record("AIR", exchange={"code": "PAR"}))

        resp = await client.get("/api/stock/search", params={"query": "AIR"})

        assert resp.status_code == 500
        assert resp.json()["error"].startswith("Search failed:")
