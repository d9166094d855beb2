"""Get auctions query with handler.

Reads straight from the auction repository and maps to DTOs inline.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.results import service_unavailable
from application.services import AuctionLifecycleOptions
from domain.entities import Auction
from domain.exceptions import AuctionStoreError
from domain.repositories import AuctionRepository
from integration.models import AuctionDto

log = logging.getLogger(__name__)


def _map_auction_to_dto(auction: Auction) -> AuctionDto:
    """Map an Auction entity to its flattened DTO representation.

    Args:
        auction: The entity to map

    Returns:
        The mapped DTO
    """
    item = auction.item
    return AuctionDto(
        id=auction.id,
        seller=auction.seller,
        make=item.make,
        model=item.model,
        year=item.year,
        color=item.color,
        mileage=item.mileage,
        image_url=item.image_url,
        reserve_price=auction.reserve_price,
        current_high_bid=auction.current_high_bid,
        winner=auction.winner,
        sold_amount=auction.sold_amount,
        status=auction.status,
        auction_end=auction.auction_end,
        created_at=auction.created_at,
        updated_at=auction.updated_at,
    )


@dataclass
class GetAuctionsQuery(Query[OperationResult[list[AuctionDto]]]):
    """Query to list auctions ordered by make."""

    since: datetime | None = None
    """Only return auctions updated strictly after this instant (naive means UTC)."""


class GetAuctionsQueryHandler(QueryHandler[GetAuctionsQuery, OperationResult[list[AuctionDto]]]):
    """Handler for GetAuctionsQuery."""

    def __init__(
        self,
        auction_repository: AuctionRepository,
        options: AuctionLifecycleOptions,
    ):
        self._repository = auction_repository
        self._options = options

    async def handle_async(self, query: GetAuctionsQuery) -> OperationResult[list[AuctionDto]]:
        """Handle the get auctions query.

        Args:
            query: The query to handle

        Returns:
            OperationResult containing the list of auction DTOs
        """
        since = query.since
        if since is not None and since.tzinfo is None:
            since = since.replace(tzinfo=UTC)
        log.debug(f"Listing auctions (since={since})")

        async def collect() -> list[Auction]:
            return [auction async for auction in self._repository.list_async(since)]

        try:
            auctions = await asyncio.wait_for(collect(), timeout=self._options.store_timeout_seconds)
        except (AuctionStoreError, asyncio.TimeoutError) as e:
            log.error(f"Failed to list auctions: {e}")
            return service_unavailable("Could not read from the DB")

        return self.ok([_map_auction_to_dto(auction) for auction in auctions])
