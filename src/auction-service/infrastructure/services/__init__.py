"""Event publisher implementations."""

from infrastructure.services.cloud_event_http_publisher import HttpCloudEventPublisher
from infrastructure.services.in_memory_event_publisher import InMemoryEventPublisher

__all__ = [
    "HttpCloudEventPublisher",
    "InMemoryEventPublisher",
]
