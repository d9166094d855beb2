"""Delete auction command with handler."""

import logging
import time
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes

from application.commands.command_handler_base import CommandHandlerBase
from application.services import AuctionEventPublisher, AuctionLifecycleOptions
from domain.entities import Auction
from domain.exceptions import AuctionStoreError, EventPublishingError
from domain.repositories import AuctionRepository
from observability import auction_processing_time, auctions_deleted

log = logging.getLogger(__name__)


@dataclass
class DeleteAuctionCommand(Command[OperationResult[bool]]):
    """Command to remove an auction for good."""

    auction_id: str
    """The auction to delete."""


class DeleteAuctionCommandHandler(CommandHandlerBase, CommandHandler[DeleteAuctionCommand, OperationResult[bool]]):
    """Handler for DeleteAuctionCommand."""

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

    async def handle_async(self, command: DeleteAuctionCommand) -> OperationResult[bool]:
        start_time = time.time()
        add_span_attributes({"auction.id": command.auction_id})

        try:
            auction = await self.commit_async(self.auction_repository.get_async(command.auction_id))
        except AuctionStoreError as e:
            return self.store_unavailable("delete", e)
        if auction is None:
            return self.not_found(Auction, command.auction_id)

        try:
            await self.publish_async(auction.deleted_event())
        except EventPublishingError as e:
            return self.publish_failed("delete", e)

        try:
            removed = await self.commit_async(self.auction_repository.remove_async(command.auction_id))
        except AuctionStoreError as e:
            return self.persistence_failed("delete", e)
        if not removed:
            return self.persistence_failed("delete", AuctionStoreError(f"Auction '{command.auction_id}' was already gone when the delete was committed"))

        processing_time_ms = (time.time() - start_time) * 1000
        auctions_deleted.add(1)
        auction_processing_time.record(processing_time_ms, {"operation": "delete"})

        log.info(f"Deleted auction: {command.auction_id}")
        return self.ok(True)
