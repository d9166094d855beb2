"""Repository interface for the Auction entity.

Implementations live in ``integration/repositories`` (MongoDB via Motor, and an
in-memory store for development and tests).

Every implementation must hand out copies: mutating an Auction returned by
``get_async`` or ``list_async`` never changes what other readers see until it
is committed through ``add_async`` or ``mutate_async``.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable
from datetime import datetime

from domain.entities import Auction

AuctionPatch = Callable[[Auction], None]
"""Merge function applied in place to the stored auction inside ``mutate_async``."""


class AuctionRepository(ABC):
    """Durable keyed storage for auctions.

    Backend failures raise ``AuctionStoreError``; inserting an existing id
    raises ``DuplicateAuctionError``.
    """

    @abstractmethod
    def list_async(self, since: datetime | None = None) -> AsyncIterator[Auction]:
        """Iterate over auctions ordered by item make (ascending).

        Args:
            since: When given, only auctions with ``updated_at`` strictly
                greater than this instant are returned

        Returns:
            A single-pass async iterator
        """
        ...

    @abstractmethod
    async def get_async(self, auction_id: str) -> Auction | None:
        """Get an auction by id, or None if it does not exist."""
        ...

    @abstractmethod
    async def add_async(self, auction: Auction) -> Auction:
        """Insert a new auction.

        Raises:
            DuplicateAuctionError: If the id is already taken
        """
        ...

    @abstractmethod
    async def mutate_async(self, auction_id: str, patch: AuctionPatch, timestamp: datetime) -> Auction | None:
        """Apply ``patch`` to the stored auction as one atomic unit.

        ``updated_at`` is advanced to ``timestamp`` within the same unit, or to
        one resolution step past the stored value when ``timestamp`` is not later.

        Args:
            auction_id: The auction to mutate
            patch: In-place merge function
            timestamp: Time of the operation

        Returns:
            The committed auction, or None if it does not exist
        """
        ...

    @abstractmethod
    async def remove_async(self, auction_id: str) -> bool:
        """Hard delete an auction.

        Returns:
            True if removed, False if it did not exist
        """
        ...
