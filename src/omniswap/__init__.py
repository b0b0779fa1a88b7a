"""OmniSwap multi-provider swap quote aggregation."""

__version__ = "0.1.0"
