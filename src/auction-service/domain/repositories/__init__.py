"""Domain repository interfaces for the Auction Service."""

from domain.repositories.auction_repository import AuctionPatch, AuctionRepository

__all__ = [
    "AuctionPatch",
    "AuctionRepository",
]
