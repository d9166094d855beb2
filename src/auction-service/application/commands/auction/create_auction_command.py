"""Create auction command with handler."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from neuroglia.core import OperationResult
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes
from opentelemetry import trace

from application.commands.command_handler_base import CommandHandlerBase
from application.queries.auction.get_auctions_query import _map_auction_to_dto
from application.results import unprocessable_entity
from application.services import AuctionEventPublisher, AuctionLifecycleOptions
from domain.entities import Auction
from domain.exceptions import AuctionStoreError, EventPublishingError
from domain.models import Item
from domain.repositories import AuctionRepository
from integration.models import AuctionDto
from observability import auction_processing_time, auctions_created

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class CreateAuctionCommand(Command[OperationResult[AuctionDto]]):
    """Command to list a vehicle for auction.

    The auction starts live, with a generated id and no bids.
    """

    make: str
    """Vehicle manufacturer."""

    model: str
    """Vehicle model."""

    year: int | None
    """Model year."""

    seller: str
    """Identity of the caller listing the vehicle."""

    color: str | None = None
    mileage: int | None = None
    image_url: str | None = None

    reserve_price: int = 0
    """Minimum accepted price."""

    auction_end: datetime | None = None
    """Scheduled end of the auction (optional)."""


def _validate(command: CreateAuctionCommand) -> str | None:
    if not command.make or not command.make.strip():
        return "Make is required"
    if not command.model or not command.model.strip():
        return "Model is required"
    if command.year is None or command.year <= 0:
        return "Year must be a positive number"
    if not command.seller or not command.seller.strip():
        return "Seller is required"
    if command.mileage is not None and command.mileage < 0:
        return "Mileage cannot be negative"
    if command.reserve_price is not None and command.reserve_price < 0:
        return "Reserve price cannot be negative"
    return None


class CreateAuctionCommandHandler(
    CommandHandlerBase,
    CommandHandler[CreateAuctionCommand, OperationResult[AuctionDto]],
):
    """Handler for creating new auctions."""

    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: AuctionEventPublisher,
        options: AuctionLifecycleOptions,
        auction_repository: AuctionRepository,
    ):
        super().__init__(mediator, mapper, event_publisher, options)
        self.auction_repository = auction_repository

    async def handle_async(self, request: CreateAuctionCommand) -> OperationResult[AuctionDto]:
        """Handle the create auction command."""
        command = request
        start_time = time.time()

        add_span_attributes(
            {
                "auction.make": command.make,
                "auction.model": command.model,
                "auction.seller": command.seller,
            }
        )

        error = _validate(command)
        if error:
            log.warning(f"Rejected auction creation: {error}")
            return unprocessable_entity(error)

        with tracer.start_as_current_span("create_auction_entity") as span:
            item = Item(
                make=command.make.strip(),
                model=command.model.strip(),
                year=command.year,
                color=command.color,
                mileage=command.mileage,
                image_url=command.image_url,
            )
            auction = Auction.create(
                item=item,
                seller=command.seller.strip(),
                reserve_price=command.reserve_price or 0,
                auction_end=command.auction_end,
            )
            span.set_attribute("auction.id", auction.id)

        try:
            await self.publish_async(auction.created_event())
        except EventPublishingError as e:
            return self.publish_failed("create", e)

        try:
            await self.commit_async(self.auction_repository.add_async(auction))
        except AuctionStoreError as e:
            return self.persistence_failed("create", e)

        processing_time_ms = (time.time() - start_time) * 1000
        auctions_created.add(1, {"make": auction.item.make})
        auction_processing_time.record(processing_time_ms, {"operation": "create"})

        log.info(f"Created auction {auction.id} for {auction.item.year} {auction.item.make} {auction.item.model}")
        return self.created(_map_auction_to_dto(auction))
