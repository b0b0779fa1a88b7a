"""Tests for the FastAPI endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import USDC_ETH
from fakes import FakeProvider, descriptor
from omniswap.api.app import create_app, lifespan
from omniswap.routing.aggregator import QuoteAggregator
from omniswap.routing.base import ProviderCategory
from omniswap.web.services.quote_service import (
    QuoteService,
    get_quote_service,
    set_quote_service,
)


def quote_body(amount="100", **overrides):
    body = {
        "input_token": {"chain_id": "1", "address": USDC_ETH, "symbol": "USDC", "decimals": 6},
        "output_token": {"chain_id": "56", "address": "", "symbol": "BNB", "decimals": 18},
        "input_amount": amount,
    }
    body.update(overrides)
    return body


def build_service(*providers, fallback=None):
    aggregator = QuoteAggregator(
        providers=list(providers),
        fallback=fallback,
        catalog=tuple(
            descriptor(p.provider_id, ProviderCategory.BRIDGE, chains=("1", "56"))
            for p in providers
        ),
    )
    return QuoteService(aggregator)


@pytest.fixture
def test_app():
    """Application whose quote service is backed by fake providers."""
    app = create_app()
    service = build_service(
        FakeProvider("lifi", output="0.31"),
        FakeProvider("socket", output="0.305"),
        FakeProvider("rango"),
        fallback=FakeProvider("estimate", output="0.3", is_estimated=True),
    )
    app.dependency_overrides[get_quote_service] = lambda: service
    return app


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "omniswap"

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        """Detailed health lists providers and never leaks API keys."""
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "environment" in data["config"]
        assert set(data["config"]["api_keys"].values()) <= {"***", "(not set)"}
        assert [p["id"] for p in data["providers"]] == [
            "lifi", "1inch", "jupiter", "socket", "rango", "mexc", "changelly", "changenow",
        ]


class TestQuoteEndpoints:
    """Tests for the quote endpoints."""

    @pytest.mark.asyncio
    async def test_ranked_quotes(self, client):
        response = await client.post("/quotes/", json=quote_body())

        assert response.status_code == 200
        data = response.json()
        assert [q["provider_id"] for q in data["quotes"]] == ["lifi", "socket", "estimate"]
        assert [q["is_best_rate"] for q in data["quotes"]] == [True, False, False]
        assert data["quotes"][0]["tags"] == ["BEST_RETURN"]
        assert data["quotes"][1]["tags"] == []
        assert data["quotes"][2]["is_estimated"] is True
        assert data["best_quote"]["provider_id"] == "lifi"
        assert data["best_quote"]["output_amount"] == "0.31"
        assert data["best_quote"]["exchange_rate_display"].startswith("1 USDC = ")

    @pytest.mark.asyncio
    async def test_best_quote(self, client):
        response = await client.post("/quotes/best", json=quote_body())

        assert response.status_code == 200
        quote = response.json()["quote"]
        assert quote["provider_id"] == "lifi"
        assert quote["is_best_rate"] is True

    @pytest.mark.asyncio
    async def test_zero_amount_is_bad_request(self, client):
        response = await client.post("/quotes/", json=quote_body("0"))

        assert response.status_code == 400
        assert "positive" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_chain_mismatch_is_bad_request(self, client):
        body = quote_body(input_chain={"id": "56"})
        response = await client.post("/quotes/best", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_field_is_bad_request(self, client):
        body = quote_body()
        del body["output_token"]
        response = await client.post("/quotes/", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_no_quotes_is_empty_result(self, test_app, client):
        test_app.dependency_overrides[get_quote_service] = lambda: build_service(
            FakeProvider("lifi")
        )

        response = await client.post("/quotes/", json=quote_body())
        assert response.status_code == 200
        assert response.json() == {"quotes": [], "best_quote": None}

        response = await client.post("/quotes/best", json=quote_body())
        assert response.status_code == 200
        assert response.json() == {"quote": None}


class TestLifespan:
    """Tests for startup and shutdown."""

    @pytest.mark.asyncio
    async def test_worker_runs_for_app_lifetime(self):
        app = create_app()

        async with lifespan(app):
            worker = app.state.price_oracle.worker
            assert worker.is_running is True
            assert isinstance(get_quote_service(), QuoteService)

        assert worker.is_running is False

    def test_service_outside_lifespan_has_no_worker(self):
        """Without the lifespan nobody drains refreshes, so none are queued."""
        set_quote_service(None)
        try:
            service = get_quote_service()
            assert service.aggregator.fallback.oracle.worker is None
            assert get_quote_service() is service
        finally:
            set_quote_service(None)
