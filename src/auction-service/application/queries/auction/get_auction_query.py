"""Get auction query with handler."""

import asyncio
import logging
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.results import service_unavailable
from application.services import AuctionLifecycleOptions
from domain.entities import Auction
from domain.exceptions import AuctionStoreError
from domain.repositories import AuctionRepository
from integration.models import AuctionDto

from .get_auctions_query import _map_auction_to_dto

log = logging.getLogger(__name__)


@dataclass
class GetAuctionQuery(Query[OperationResult[AuctionDto]]):
    """Query to get an auction by ID."""

    auction_id: str
    """The auction to retrieve."""


class GetAuctionQueryHandler(QueryHandler[GetAuctionQuery, OperationResult[AuctionDto]]):
    """Handler for GetAuctionQuery."""

    def __init__(
        self,
        auction_repository: AuctionRepository,
        options: AuctionLifecycleOptions,
    ):
        self._repository = auction_repository
        self._options = options

    async def handle_async(self, query: GetAuctionQuery) -> OperationResult[AuctionDto]:
        log.debug(f"Getting auction: {query.auction_id}")

        try:
            auction = await asyncio.wait_for(self._repository.get_async(query.auction_id), timeout=self._options.store_timeout_seconds)
        except (AuctionStoreError, asyncio.TimeoutError) as e:
            log.error(f"Failed to load auction {query.auction_id}: {e}")
            return service_unavailable("Could not read from the DB")

        if auction is None:
            return self.not_found(Auction, query.auction_id)
        return self.ok(_map_auction_to_dto(auction))
