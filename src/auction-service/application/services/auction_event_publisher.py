"""Event publisher interface for auction domain events.

Unlike the fire-and-forget ``CloudEventBus`` stream, ``publish_async`` only
returns once the bus has acknowledged the event, and raises otherwise, so the
write path can refuse to touch the store when the bus is down.
"""

from abc import ABC, abstractmethod
from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any

from neuroglia.data.abstractions import DomainEvent


def cloud_event_type_of(event: DomainEvent) -> str:
    """Get the ``@cloudevent`` type of a domain event (class name as fallback)."""
    return getattr(type(event), "__cloudevent__type__", None) or type(event).__name__


def event_to_dict(event: DomainEvent) -> dict[str, Any]:
    """Convert a domain event to a JSON-compatible dictionary.

    Args:
        event: The domain event to convert

    Returns:
        Dictionary representation of the event
    """
    data: dict[str, Any] = {}
    for f in fields(event):
        value = getattr(event, f.name, None)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        data[f.name] = value
    return data


class AuctionEventPublisher(ABC):
    """Publishes auction domain events to the message bus."""

    @abstractmethod
    async def publish_async(self, event: DomainEvent) -> None:
        """Publish a domain event and wait for the bus to accept it.

        Args:
            event: The domain event to publish

        Raises:
            EventPublishingError: If the bus did not accept the event
        """
        ...
