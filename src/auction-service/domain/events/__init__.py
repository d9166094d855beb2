"""Domain events for the Auction Service."""

from domain.events.auction import (
    AuctionCreatedDomainEvent,
    AuctionDeletedDomainEvent,
    AuctionUpdatedDomainEvent,
)

__all__ = [
    "AuctionCreatedDomainEvent",
    "AuctionUpdatedDomainEvent",
    "AuctionDeletedDomainEvent",
]
