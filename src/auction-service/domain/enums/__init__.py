"""Enums for the Auction domain."""

from domain.enums.auction_enums import AuctionStatus

__all__ = [
    "AuctionStatus",
]
