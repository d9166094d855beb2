"""Integration models (DTOs)."""

from integration.models.auction_dto import AuctionDto

__all__ = [
    "AuctionDto",
]
