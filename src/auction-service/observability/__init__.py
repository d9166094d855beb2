"""Observability utilities and metrics."""

from .metrics import auction_persistence_failures, auction_processing_time, auction_publish_failures, auctions_created, auctions_deleted, auctions_updated

__all__ = [
    "auctions_created",
    "auctions_updated",
    "auctions_deleted",
    "auction_publish_failures",
    "auction_persistence_failures",
    "auction_processing_time",
]
