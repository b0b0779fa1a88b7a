"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["DISABLED_PROVIDERS"] = ""

from omniswap.routing.base import Chain, QuoteRequest, Token

USDC_ETH = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT_ETH = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
USDC_SOL = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def make_token(chain_id: str, symbol: str, decimals: int, address: str = "") -> Token:
    return Token(chain_id=chain_id, address=address, symbol=symbol, decimals=decimals)


@pytest.fixture
def usdc_eth() -> Token:
    return make_token("1", "USDC", 6, USDC_ETH)


@pytest.fixture
def eth_native() -> Token:
    return make_token("1", "ETH", 18)


@pytest.fixture
def bnb_native() -> Token:
    return make_token("56", "BNB", 18)


@pytest.fixture
def sol_native() -> Token:
    return make_token("101", "SOL", 9)


@pytest.fixture
def usdc_sol() -> Token:
    return make_token("101", "USDC", 6, USDC_SOL)


@pytest.fixture
def make_request():
    """Build a QuoteRequest whose chains follow the tokens."""

    def _make(input_token: Token, output_token: Token, amount: str = "100", **kwargs):
        return QuoteRequest(
            input_token=input_token,
            output_token=output_token,
            input_chain=Chain(id=input_token.chain_id),
            output_chain=Chain(id=output_token.chain_id),
            input_amount=amount,
            **kwargs,
        )

    return _make


@pytest.fixture
def usdc_to_bnb(make_request, usdc_eth, bnb_native) -> QuoteRequest:
    """100 USDC on Ethereum -> BNB on BSC."""
    return make_request(usdc_eth, bnb_native, "100")
