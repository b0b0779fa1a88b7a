"""HTTP boundary layer for quote requests.

This layer only translates between HTTP contracts and the quote engine.
It never signs, submits or stores anything.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
