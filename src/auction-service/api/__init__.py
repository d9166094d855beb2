"""API layer - controllers and request dependencies."""

from api.controllers import AuctionsController

__all__ = [
    "AuctionsController",
]
