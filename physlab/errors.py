"""Shared error types for physlab engines and orchestration layers."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when simulation parameters are malformed or out of range."""


class InstabilityError(ValueError):
    """Raised when the explicit diffusion scheme would be unstable."""

    def __init__(self, courant: float, limit: float = 0.5) -> None:
        self.courant = float(courant)
        self.limit = float(limit)
        super().__init__(f"unstable parameters: r = {self.courant:f} > {self.limit:g}")


class DeckError(ValueError):
    """Raised when a deck is invalid or execution fails."""
