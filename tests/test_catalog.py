"""Tests for the provider catalog, applicability rules and request validation."""

import pytest

from conftest import make_token
from fakes import descriptor
from omniswap.routing.base import Chain, ProviderCategory, QuoteValidationError
from omniswap.routing.catalog import (
    PROVIDER_CATALOG,
    applicable_providers,
    build_catalog,
    is_applicable,
)


def ids(descriptors):
    return [d.id for d in descriptors]


class TestApplicability:
    """Tests for the applicability filter over the default catalog."""

    def test_same_chain_ethereum(self, make_request, usdc_eth, eth_native):
        request = make_request(usdc_eth, eth_native)
        assert ids(applicable_providers(request)) == [
            "lifi", "1inch", "socket", "rango", "mexc", "changelly", "changenow",
        ]

    def test_same_chain_solana(self, make_request, usdc_sol, sol_native):
        request = make_request(usdc_sol, sol_native)
        assert ids(applicable_providers(request)) == ["jupiter", "rango", "changelly"]

    def test_cross_chain_excludes_dexes(self, usdc_to_bnb):
        result = ids(applicable_providers(usdc_to_bnb))
        assert result == ["lifi", "socket", "rango", "mexc", "changelly", "changenow"]
        assert "1inch" not in result

    def test_cross_chain_evm_to_solana(self, make_request, usdc_eth, sol_native):
        request = make_request(usdc_eth, sol_native)
        assert ids(applicable_providers(request)) == ["rango", "changelly"]

    def test_cross_chain_evm_to_sui(self, make_request, usdc_eth):
        sui = make_token("784", "SUI", 9)
        request = make_request(usdc_eth, sui)
        assert ids(applicable_providers(request)) == ["rango"]

    def test_zksync_same_chain(self, make_request):
        eth = make_token("324", "ETH", 18)
        usdc = make_token("324", "USDC", 6, "0x1d17CBcF0D6D143135aE902365D2E5e2A16538D4")
        request = make_request(usdc, eth)
        assert ids(applicable_providers(request)) == ["lifi", "1inch", "socket", "rango"]

    def test_unknown_chain_has_no_providers(self, make_request):
        request = make_request(make_token("999", "AAA", 18), make_token("999", "BBB", 18))
        assert applicable_providers(request) == ()

    def test_bridge_needs_both_chains(self, make_request, usdc_eth):
        bridge = descriptor("bridge", ProviderCategory.BRIDGE, chains=("1",))
        request = make_request(usdc_eth, make_token("56", "BNB", 18))
        assert is_applicable(bridge, request) is False

    def test_bridge_serves_same_chain(self, make_request, usdc_eth, eth_native):
        bridge = descriptor("bridge", ProviderCategory.BRIDGE, chains=("1",))
        assert is_applicable(bridge, make_request(usdc_eth, eth_native)) is True

    def test_cex_needs_both_chains(self, usdc_to_bnb):
        cex = descriptor("cex", ProviderCategory.CEX, chains=("1", "56"))
        assert is_applicable(cex, usdc_to_bnb) is True
        cex_one_side = descriptor("cex", ProviderCategory.CEX, chains=("56",))
        assert is_applicable(cex_one_side, usdc_to_bnb) is False

    def test_disabled_provider_never_applicable(self, make_request, usdc_eth, eth_native):
        dex = descriptor("dex", chains=("1",), enabled=False)
        assert is_applicable(dex, make_request(usdc_eth, eth_native)) is False

    def test_custom_catalog_order_preserved(self, make_request, usdc_eth, eth_native):
        catalog = (descriptor("z"), descriptor("a"), descriptor("m"))
        result = applicable_providers(make_request(usdc_eth, eth_native), catalog)
        assert ids(result) == ["z", "a", "m"]


class TestBuildCatalog:
    """Tests for disabling providers through configuration."""

    def test_disables_named_providers(self, make_request, usdc_eth, eth_native):
        catalog = build_catalog(disabled=["1inch", "MEXC"])
        by_id = {d.id: d for d in catalog}

        assert by_id["1inch"].enabled is False
        assert by_id["mexc"].enabled is False
        assert by_id["lifi"].enabled is True

        result = ids(applicable_providers(make_request(usdc_eth, eth_native), catalog))
        assert "1inch" not in result
        assert "mexc" not in result

    def test_default_catalog_untouched(self):
        build_catalog(disabled=["lifi"])
        assert all(d.enabled for d in PROVIDER_CATALOG)

    def test_catalog_ids_unique(self):
        catalog_ids = ids(PROVIDER_CATALOG)
        assert len(catalog_ids) == len(set(catalog_ids))


class TestRequestValidation:
    """Tests for QuoteRequest.validate()."""

    def test_valid_request(self, usdc_to_bnb):
        usdc_to_bnb.validate()
        assert usdc_to_bnb.is_cross_chain is True

    @pytest.mark.parametrize(
        "amount", ["0", "0.000", "-5", "abc", "", ".", "1e2", "1_00", "1E-3", "+5"]
    )
    def test_rejects_bad_amount(self, make_request, usdc_eth, bnb_native, amount):
        request = make_request(usdc_eth, bnb_native, amount)
        with pytest.raises(QuoteValidationError):
            request.validate()

    def test_rejects_token_chain_mismatch(self, make_request, usdc_eth, bnb_native):
        request = make_request(usdc_eth, bnb_native)
        request.input_chain = Chain(id="56")
        with pytest.raises(QuoteValidationError, match="USDC"):
            request.validate()

    def test_rejects_negative_slippage(self, make_request, usdc_eth, bnb_native):
        request = make_request(usdc_eth, bnb_native, slippage_bps=-1)
        with pytest.raises(QuoteValidationError):
            request.validate()

    def test_slippage_percent(self, make_request, usdc_eth, bnb_native):
        request = make_request(usdc_eth, bnb_native, slippage_bps=50)
        assert str(request.slippage_percent) == "0.5"
