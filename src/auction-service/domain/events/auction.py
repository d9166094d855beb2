"""Domain events for the Auction entity.

Each event carries enough data for a consumer (search index, bidding,
notifications) to rebuild or invalidate its own projection of the auction
without calling back into this service.
"""

from dataclasses import dataclass
from datetime import datetime

from neuroglia.data.abstractions import DomainEvent
from neuroglia.eventing.cloud_events.decorators import cloudevent


@cloudevent("auction.created.v1")
@dataclass
class AuctionCreatedDomainEvent(DomainEvent):
    """Event raised when a new auction listing is created."""

    aggregate_id: str
    make: str
    model: str
    year: int
    color: str | None
    mileage: int | None
    image_url: str | None
    seller: str
    reserve_price: int
    status: str
    auction_end: datetime | None
    created_at: datetime
    updated_at: datetime

    def __init__(
        self,
        aggregate_id: str,
        make: str,
        model: str,
        year: int,
        seller: str,
        reserve_price: int,
        status: str,
        created_at: datetime,
        updated_at: datetime,
        color: str | None = None,
        mileage: int | None = None,
        image_url: str | None = None,
        auction_end: datetime | None = None,
    ) -> None:
        super().__init__(aggregate_id)
        self.aggregate_id = aggregate_id
        self.make = make
        self.model = model
        self.year = year
        self.color = color
        self.mileage = mileage
        self.image_url = image_url
        self.seller = seller
        self.reserve_price = reserve_price
        self.status = status
        self.auction_end = auction_end
        self.created_at = created_at
        self.updated_at = updated_at


@cloudevent("auction.updated.v1")
@dataclass
class AuctionUpdatedDomainEvent(DomainEvent):
    """Event raised when the item of an auction is updated.

    Carries the full merged item, not only the changed fields.
    """

    aggregate_id: str
    make: str
    model: str
    year: int
    color: str | None
    mileage: int | None
    image_url: str | None

    def __init__(
        self,
        aggregate_id: str,
        make: str,
        model: str,
        year: int,
        color: str | None = None,
        mileage: int | None = None,
        image_url: str | None = None,
    ) -> None:
        super().__init__(aggregate_id)
        self.aggregate_id = aggregate_id
        self.make = make
        self.model = model
        self.year = year
        self.color = color
        self.mileage = mileage
        self.image_url = image_url


@cloudevent("auction.deleted.v1")
@dataclass
class AuctionDeletedDomainEvent(DomainEvent):
    """Event raised when an auction is removed (hard delete)."""

    aggregate_id: str

    def __init__(self, aggregate_id: str) -> None:
        super().__init__(aggregate_id)
        self.aggregate_id = aggregate_id
