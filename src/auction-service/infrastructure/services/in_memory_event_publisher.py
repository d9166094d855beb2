"""In-memory event publisher.

Keeps published events in a list instead of sending them anywhere. Used when
``event_publisher`` is set to ``memory`` and by the tests, which can arm it to
fail in order to simulate a bus outage.
"""

import logging

from neuroglia.data.abstractions import DomainEvent

from application.services import AuctionEventPublisher, cloud_event_type_of
from domain.exceptions import EventPublishingError

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(AuctionEventPublisher):
    """Records published events in order."""

    def __init__(self) -> None:
        self.published: list[DomainEvent] = []
        self._failures_remaining = 0

    def fail_next(self, count: int = 1) -> None:
        """Make the next ``count`` publish calls raise ``EventPublishingError``."""
        self._failures_remaining = count

    def clear(self) -> None:
        """Forget all recorded events."""
        self.published.clear()

    async def publish_async(self, event: DomainEvent) -> None:
        """Record the event, or fail if armed to."""
        event_type = cloud_event_type_of(event)
        if self._failures_remaining > 0:
            self._failures_remaining -= 1
            raise EventPublishingError(f"Message bus unavailable, {event_type} not published", event_type=event_type)

        self.published.append(event)
        logger.debug(f"Recorded {event_type} for '{event.aggregate_id}'")
