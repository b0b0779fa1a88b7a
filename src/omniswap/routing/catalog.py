"""Provider catalog and applicability rules.

The catalog is immutable configuration built once at startup. Deciding which
providers may quote a request is a pure function of the request's chains and
each provider's category and supported chains.
"""

from dataclasses import replace
from typing import Iterable, Sequence

from omniswap.routing.base import ProviderCategory, ProviderDescriptor, QuoteRequest

_EVM_MAJOR = ("1", "56", "137", "42161", "10", "8453", "43114")

PROVIDER_CATALOG: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        id="lifi",
        name="LI.FI",
        category=ProviderCategory.BRIDGE,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250", "324", "59144")),
    ),
    ProviderDescriptor(
        id="1inch",
        name="1inch",
        category=ProviderCategory.DEX,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250", "324")),
    ),
    ProviderDescriptor(
        id="jupiter",
        name="Jupiter",
        category=ProviderCategory.DEX,
        supported_chain_ids=frozenset({"101"}),
    ),
    ProviderDescriptor(
        id="socket",
        name="Socket",
        category=ProviderCategory.BRIDGE,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250", "324", "59144", "534352")),
    ),
    ProviderDescriptor(
        id="rango",
        name="Rango",
        category=ProviderCategory.BRIDGE,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250", "324", "59144", "101", "784")),
    ),
    ProviderDescriptor(
        id="mexc",
        name="MEXC",
        category=ProviderCategory.CEX,
        supported_chain_ids=frozenset(_EVM_MAJOR),
    ),
    ProviderDescriptor(
        id="changelly",
        name="Changelly",
        category=ProviderCategory.CEX,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250", "101")),
    ),
    ProviderDescriptor(
        id="changenow",
        name="ChangeNOW",
        category=ProviderCategory.CEX,
        supported_chain_ids=frozenset(_EVM_MAJOR + ("250",)),
    ),
)


def build_catalog(
    disabled: Iterable[str] = (),
    base: Sequence[ProviderDescriptor] = PROVIDER_CATALOG,
) -> tuple[ProviderDescriptor, ...]:
    """Return a catalog with the given provider ids disabled."""
    disabled_ids = {provider_id.lower() for provider_id in disabled}
    return tuple(
        replace(descriptor, enabled=False) if descriptor.id.lower() in disabled_ids else descriptor
        for descriptor in base
    )


def is_applicable(descriptor: ProviderDescriptor, request: QuoteRequest) -> bool:
    """Check whether a provider may quote the request."""
    if not descriptor.enabled:
        return False

    from_chain = str(request.input_chain.id)
    to_chain = str(request.output_chain.id)

    if descriptor.category == ProviderCategory.DEX:
        # Same-chain exchanges cannot bridge
        if request.is_cross_chain:
            return False
        return descriptor.supports_chain(from_chain)

    # Bridges and CEXes need both ends
    return descriptor.supports_chain(from_chain) and descriptor.supports_chain(to_chain)


def applicable_providers(
    request: QuoteRequest,
    catalog: Sequence[ProviderDescriptor] = PROVIDER_CATALOG,
) -> tuple[ProviderDescriptor, ...]:
    """Select catalog providers eligible to quote the request, in catalog order."""
    return tuple(descriptor for descriptor in catalog if is_applicable(descriptor, request))
