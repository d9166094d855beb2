"""Auction repository implementations."""

from integration.repositories.in_memory_auction_repository import InMemoryAuctionRepository
from integration.repositories.motor_auction_repository import MotorAuctionRepository

__all__ = [
    "InMemoryAuctionRepository",
    "MotorAuctionRepository",
]
