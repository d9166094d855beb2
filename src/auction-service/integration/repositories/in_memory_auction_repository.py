"""In-memory implementation of AuctionRepository."""

import asyncio
import copy
from collections.abc import AsyncIterator
from datetime import datetime

from domain.entities import Auction, advance_timestamp
from domain.exceptions import DuplicateAuctionError
from domain.repositories import AuctionPatch, AuctionRepository


class InMemoryAuctionRepository(AuctionRepository):
    """In-memory implementation of AuctionRepository for development and testing.

    A single lock serializes writes so a mutation is never observed half-applied.
    """

    def __init__(self) -> None:
        self._auctions: dict[str, Auction] = {}
        self._lock = asyncio.Lock()

    async def list_async(self, since: datetime | None = None) -> AsyncIterator[Auction]:
        """Iterate over a snapshot of the auctions, ordered by make."""
        async with self._lock:
            snapshot = [copy.deepcopy(auction) for auction in self._auctions.values() if since is None or auction.updated_at > since]
        snapshot.sort(key=lambda auction: auction.item.make)
        for auction in snapshot:
            yield auction

    async def get_async(self, auction_id: str) -> Auction | None:
        """Retrieve an auction by ID."""
        async with self._lock:
            auction = self._auctions.get(auction_id)
            return copy.deepcopy(auction) if auction is not None else None

    async def add_async(self, auction: Auction) -> Auction:
        """Add a new auction."""
        async with self._lock:
            if auction.id in self._auctions:
                raise DuplicateAuctionError(auction.id)
            self._auctions[auction.id] = copy.deepcopy(auction)
            return copy.deepcopy(auction)

    async def mutate_async(self, auction_id: str, patch: AuctionPatch, timestamp: datetime) -> Auction | None:
        """Patch an existing auction and advance its timestamp."""
        async with self._lock:
            current = self._auctions.get(auction_id)
            if current is None:
                return None
            working = copy.deepcopy(current)
            patch(working)
            working.updated_at = advance_timestamp(current.updated_at, timestamp)
            self._auctions[auction_id] = working
            return copy.deepcopy(working)

    async def remove_async(self, auction_id: str) -> bool:
        """Delete an auction by ID."""
        async with self._lock:
            return self._auctions.pop(auction_id, None) is not None

    def __len__(self) -> int:
        return len(self._auctions)
