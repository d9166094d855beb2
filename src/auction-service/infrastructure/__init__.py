"""Infrastructure services for the Auction Service."""

from infrastructure.services import HttpCloudEventPublisher, InMemoryEventPublisher

__all__ = [
    "HttpCloudEventPublisher",
    "InMemoryEventPublisher",
]
