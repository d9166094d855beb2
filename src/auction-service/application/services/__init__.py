"""Application services."""

from application.services.auction_event_publisher import AuctionEventPublisher, cloud_event_type_of, event_to_dict
from application.services.lifecycle_options import AuctionLifecycleOptions

__all__ = [
    "AuctionEventPublisher",
    "AuctionLifecycleOptions",
    "cloud_event_type_of",
    "event_to_dict",
]
