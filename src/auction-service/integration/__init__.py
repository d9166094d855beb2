"""Integration layer models and repositories."""

from integration.models import AuctionDto
from integration.repositories import InMemoryAuctionRepository, MotorAuctionRepository

__all__ = [
    # DTOs
    "AuctionDto",
    # Repositories
    "InMemoryAuctionRepository",
    "MotorAuctionRepository",
]
