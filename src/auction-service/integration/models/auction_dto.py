"""Auction DTO with queryable decorator."""

from dataclasses import dataclass
from datetime import datetime

from neuroglia.data.abstractions import queryable

from domain.enums import AuctionStatus


@queryable
@dataclass
class AuctionDto:
    """DTO for the auction read model.

    The item is flattened onto the listing, as consumed by the catalog UI.
    """

    id: str
    """Unique auction identifier."""

    seller: str
    """Who listed the vehicle."""

    make: str
    model: str
    year: int

    color: str | None = None
    mileage: int | None = None
    image_url: str | None = None

    reserve_price: int = 0
    """Minimum accepted price."""

    current_high_bid: int | None = None
    winner: str | None = None
    sold_amount: int | None = None

    status: AuctionStatus = AuctionStatus.LIVE
    """Auction lifecycle status."""

    auction_end: datetime | None = None
    """Scheduled end of the auction."""

    created_at: datetime | None = None
    """When the auction was created."""

    updated_at: datetime | None = None
    """When the auction was last modified."""
