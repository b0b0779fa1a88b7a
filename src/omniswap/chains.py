"""Per-chain naming data used by quote providers and price sources.

Every provider names chains and native assets its own way. This module keeps
those mappings in one place, keyed by the canonical chain id string
(EVM chain id, 101 for Solana, 784 for Sui).
"""

from dataclasses import dataclass
from typing import Optional

# Native-asset markers accepted on input
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
_NATIVE_MARKERS = {"", "native", NATIVE_TOKEN_ADDRESS.lower(), ZERO_ADDRESS}


@dataclass(frozen=True)
class ChainConfig:
    """Naming data for one blockchain."""

    chain_id: str
    name: str
    native_symbol: str
    kind: str = "evm"  # evm, solana, sui
    wrapped_native_address: Optional[str] = None
    rango_blockchain: Optional[str] = None
    changenow_network: Optional[str] = None
    dexscreener_id: Optional[str] = None
    defillama_id: Optional[str] = None
    native_coingecko_id: Optional[str] = None


# ======================
# Chain Configurations
# ======================

CHAINS: dict[str, ChainConfig] = {
    "1": ChainConfig(
        chain_id="1",
        name="Ethereum",
        changenow_network="eth",
        native_symbol="ETH",
        wrapped_native_address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        rango_blockchain="ETH",
        dexscreener_id="ethereum",
        defillama_id="ethereum",
        native_coingecko_id="ethereum",
    ),
    "56": ChainConfig(
        chain_id="56",
        name="BNB Smart Chain",
        changenow_network="bsc",
        native_symbol="BNB",
        wrapped_native_address="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
        rango_blockchain="BSC",
        dexscreener_id="bsc",
        defillama_id="bsc",
        native_coingecko_id="binancecoin",
    ),
    "137": ChainConfig(
        chain_id="137",
        name="Polygon",
        changenow_network="matic",
        native_symbol="POL",
        wrapped_native_address="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
        rango_blockchain="POLYGON",
        dexscreener_id="polygon",
        defillama_id="polygon",
        native_coingecko_id="polygon-ecosystem-token",
    ),
    "42161": ChainConfig(
        chain_id="42161",
        name="Arbitrum",
        changenow_network="arbitrum",
        native_symbol="ETH",
        wrapped_native_address="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
        rango_blockchain="ARBITRUM",
        dexscreener_id="arbitrum",
        defillama_id="arbitrum",
        native_coingecko_id="ethereum",
    ),
    "10": ChainConfig(
        chain_id="10",
        name="Optimism",
        changenow_network="op",
        native_symbol="ETH",
        wrapped_native_address="0x4200000000000000000000000000000000000006",
        rango_blockchain="OPTIMISM",
        dexscreener_id="optimism",
        defillama_id="optimism",
        native_coingecko_id="ethereum",
    ),
    "8453": ChainConfig(
        chain_id="8453",
        name="Base",
        changenow_network="base",
        native_symbol="ETH",
        wrapped_native_address="0x4200000000000000000000000000000000000006",
        rango_blockchain="BASE",
        dexscreener_id="base",
        defillama_id="base",
        native_coingecko_id="ethereum",
    ),
    "43114": ChainConfig(
        chain_id="43114",
        name="Avalanche",
        changenow_network="avaxc",
        native_symbol="AVAX",
        wrapped_native_address="0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
        rango_blockchain="AVAX_CCHAIN",
        dexscreener_id="avalanche",
        defillama_id="avax",
        native_coingecko_id="avalanche-2",
    ),
    "250": ChainConfig(
        chain_id="250",
        name="Fantom",
        changenow_network="ftm",
        native_symbol="FTM",
        wrapped_native_address="0x21be370D5312f44cB42ce377BC9b8a0cEF1A4C83",
        rango_blockchain="FANTOM",
        dexscreener_id="fantom",
        defillama_id="fantom",
        native_coingecko_id="fantom",
    ),
    "324": ChainConfig(
        chain_id="324",
        name="zkSync Era",
        changenow_network="zksync",
        native_symbol="ETH",
        wrapped_native_address="0x5AEa5775959fBC2557Cc8789bC1bf90A239D9a91",
        dexscreener_id="zksync",
        defillama_id="era",
        native_coingecko_id="ethereum",
    ),
    "59144": ChainConfig(
        chain_id="59144",
        name="Linea",
        changenow_network="linea",
        native_symbol="ETH",
        wrapped_native_address="0xe5D7C2a44FfDDf6b295A15c148167daaAf5Cf34f",
        dexscreener_id="linea",
        defillama_id="linea",
        native_coingecko_id="ethereum",
    ),
    "534352": ChainConfig(
        chain_id="534352",
        name="Scroll",
        native_symbol="ETH",
        wrapped_native_address="0x5300000000000000000000000000000000000004",
        dexscreener_id="scroll",
        defillama_id="scroll",
        native_coingecko_id="ethereum",
    ),
    # Solana - wrapped SOL mint
    "101": ChainConfig(
        chain_id="101",
        name="Solana",
        native_symbol="SOL",
        kind="solana",
        wrapped_native_address="So11111111111111111111111111111111111111112",
        rango_blockchain="SOLANA",
        dexscreener_id="solana",
        defillama_id="solana",
        native_coingecko_id="solana",
    ),
    "784": ChainConfig(
        chain_id="784",
        name="Sui",
        native_symbol="SUI",
        kind="sui",
        wrapped_native_address="0x2::sui::SUI",
        rango_blockchain="SUI",
        dexscreener_id="sui",
        defillama_id="sui",
        native_coingecko_id="sui",
    ),
}

# Reverse lookup for Rango path steps
RANGO_BLOCKCHAIN_TO_CHAIN: dict[str, str] = {
    cfg.rango_blockchain: chain_id
    for chain_id, cfg in CHAINS.items()
    if cfg.rango_blockchain
}


def get_chain_config(chain_id: str) -> Optional[ChainConfig]:
    """Get chain configuration by canonical chain id."""
    return CHAINS.get(str(chain_id))


def is_native_address(address: Optional[str]) -> bool:
    """Check whether an address is one of the native-asset markers."""
    return (address or "").strip().lower() in _NATIVE_MARKERS


def evm_token_address(address: Optional[str]) -> str:
    """Address as EVM aggregators expect it (native -> 0xEeee... marker)."""
    return NATIVE_TOKEN_ADDRESS if is_native_address(address) else str(address)


def get_wrapped_native_address(chain_id: str) -> Optional[str]:
    """Get the wrapped native asset address for a chain."""
    config = get_chain_config(chain_id)
    return config.wrapped_native_address if config else None
