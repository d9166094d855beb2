"""Update auction command with handler."""

import logging
import time
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes

from application.commands.command_handler_base import CommandHandlerBase
from application.queries.auction.get_auctions_query import _map_auction_to_dto
from application.results import unprocessable_entity
from application.services import AuctionEventPublisher, AuctionLifecycleOptions
from domain.entities import Auction, utc_now
from domain.exceptions import AuctionStoreError, EventPublishingError
from domain.models import ItemPatch
from domain.repositories import AuctionRepository
from integration.models import AuctionDto
from observability import auction_processing_time, auctions_updated

log = logging.getLogger(__name__)


@dataclass
class UpdateAuctionCommand(Command[OperationResult[AuctionDto]]):
    """Command to change the item of an auction.

    Only the fields that are set are changed, the others keep their current value.
    """

    auction_id: str
    """The auction to update."""

    make: str | None = None
    model: str | None = None
    year: int | None = None
    color: str | None = None
    mileage: int | None = None
    image_url: str | None = None

    def to_patch(self) -> ItemPatch:
        """Build the item patch, trimming make and model like creation does."""
        return ItemPatch(
            make=self.make.strip() if self.make is not None else None,
            model=self.model.strip() if self.model is not None else None,
            year=self.year,
            color=self.color,
            mileage=self.mileage,
            image_url=self.image_url,
        )


class UpdateAuctionCommandHandler(CommandHandlerBase, CommandHandler[UpdateAuctionCommand, OperationResult[AuctionDto]]):
    """Handler for UpdateAuctionCommand."""

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

    async def handle_async(self, command: UpdateAuctionCommand) -> OperationResult[AuctionDto]:
        """Handle the update auction command.

        Args:
            command: The command to handle

        Returns:
            OperationResult containing the updated auction DTO or error
        """
        start_time = time.time()
        patch = command.to_patch()
        add_span_attributes({"auction.id": command.auction_id, "auction.patched_fields": ",".join(patch.changes())})

        if patch.make is not None and not patch.make.strip():
            return unprocessable_entity("Make cannot be blank")
        if patch.model is not None and not patch.model.strip():
            return unprocessable_entity("Model cannot be blank")
        if patch.year is not None and patch.year <= 0:
            return unprocessable_entity("Year must be a positive number")
        if patch.mileage is not None and patch.mileage < 0:
            return unprocessable_entity("Mileage cannot be negative")

        try:
            auction = await self.commit_async(self.auction_repository.get_async(command.auction_id))
        except AuctionStoreError as e:
            return self.store_unavailable("update", e)
        if auction is None:
            return self.not_found(Auction, command.auction_id)

        if not auction.apply_patch(patch):
            log.debug(f"Update of auction {command.auction_id} changes nothing")
            return self.ok(_map_auction_to_dto(auction))

        try:
            await self.publish_async(auction.updated_event())
        except EventPublishingError as e:
            return self.publish_failed("update", e)

        try:
            committed = await self.commit_async(self.auction_repository.mutate_async(command.auction_id, lambda stored: stored.apply_patch(patch), utc_now()))
        except AuctionStoreError as e:
            return self.persistence_failed("update", e)
        if committed is None:
            return self.persistence_failed("update", AuctionStoreError(f"Auction '{command.auction_id}' was removed before the update was committed"))

        processing_time_ms = (time.time() - start_time) * 1000
        auctions_updated.add(1)
        auction_processing_time.record(processing_time_ms, {"operation": "update"})

        log.info(f"Updated auction: {command.auction_id}")
        return self.ok(_map_auction_to_dto(committed))
