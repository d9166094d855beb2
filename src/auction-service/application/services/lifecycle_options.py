"""Options for the auction write path."""

from dataclasses import dataclass


@dataclass
class AuctionLifecycleOptions:
    """Timeouts bounding the external calls of each write operation."""

    store_timeout_seconds: float = 5.0
    """Upper bound for a single store read or write."""

    publish_timeout_seconds: float = 5.0
    """Upper bound for the bus to acknowledge an event."""
