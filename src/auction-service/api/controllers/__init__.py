"""API controllers."""

from api.controllers.auctions_controller import AuctionsController

__all__ = [
    "AuctionsController",
]
