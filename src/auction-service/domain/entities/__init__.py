"""Domain entities for the Auction Service."""

from domain.entities.auction import TIMESTAMP_RESOLUTION, Auction, advance_timestamp, utc_now

__all__ = [
    "Auction",
    "TIMESTAMP_RESOLUTION",
    "advance_timestamp",
    "utc_now",
]
