import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from neuroglia.core import OperationResult
from neuroglia.data.abstractions import DomainEvent
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

from application.results import service_unavailable
from application.services import AuctionEventPublisher, AuctionLifecycleOptions, cloud_event_type_of
from domain.exceptions import AuctionStoreError, EventPublishingError
from observability import auction_persistence_failures, auction_publish_failures

log = logging.getLogger(__name__)

T = TypeVar("T")

PERSISTENCE_FAILED_DETAIL = "Could not save changes to the DB"


class CommandHandlerBase:
    """Represents the base class for all services used to handle auction Commands.

    Every write runs the same sequence: the event is published first, then the
    store is committed. Both calls are bounded by the lifecycle timeouts. A
    publish failure aborts before the store is touched; a store failure after a
    successful publish is reported as is, without compensating the event.
    """

    mediator: Mediator
    """ Gets the service used to mediate calls """

    mapper: Mapper
    """ Gets the service used to map objects """

    event_publisher: AuctionEventPublisher
    """ Gets the service used to publish auction events to the message bus """

    options: AuctionLifecycleOptions
    """ Gets the timeouts applied to the store and the message bus """

    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: AuctionEventPublisher,
        options: AuctionLifecycleOptions,
    ):
        self.mediator = mediator
        self.mapper = mapper
        self.event_publisher = event_publisher
        self.options = options

    async def publish_async(self, event: DomainEvent) -> None:
        """Publishes the event and waits for the bus to accept it.

        Raises:
            EventPublishingError: If the bus rejected the event or did not answer in time
        """
        event_type = cloud_event_type_of(event)
        try:
            await asyncio.wait_for(self.event_publisher.publish_async(event), timeout=self.options.publish_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise EventPublishingError(f"Timed out after {self.options.publish_timeout_seconds}s publishing {event_type}", event_type=event_type, cause=e) from e
        log.debug(f"Published {event_type} for {event.aggregate_id}")

    async def commit_async(self, operation: Awaitable[T]) -> T:
        """Awaits a store operation within the store timeout.

        Raises:
            AuctionStoreError: If the store failed or did not answer in time
        """
        try:
            return await asyncio.wait_for(operation, timeout=self.options.store_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise AuctionStoreError(f"Store did not answer within {self.options.store_timeout_seconds}s", cause=e) from e

    def publish_failed(self, operation: str, error: EventPublishingError) -> OperationResult[Any]:
        """Builds the result of a write aborted because its event was not published."""
        log.error(f"Aborted {operation}: {error}")
        auction_publish_failures.add(1, {"operation": operation})
        return service_unavailable(f"Could not publish the {operation} event to the message bus")

    def persistence_failed(self, operation: str, error: Exception) -> OperationResult[Any]:
        """Builds the result of a write whose event went out but whose store commit failed."""
        log.error(f"Event for {operation} was published but the store commit failed: {error}")
        auction_persistence_failures.add(1, {"operation": operation})
        return self.bad_request(PERSISTENCE_FAILED_DETAIL)

    def store_unavailable(self, operation: str, error: Exception) -> OperationResult[Any]:
        """Builds the result of a write aborted because the auction could not be loaded."""
        log.error(f"Aborted {operation}: could not load the auction: {error}")
        return service_unavailable("Could not read from the DB")
