"""Auction entity.

A plain ``Entity`` rather than an event-sourced ``AggregateRoot``: the write
path publishes events explicitly, before the store commit, so the entity must
not queue events for the repository to dispatch after persistence.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from neuroglia.data import Entity

from domain.enums import AuctionStatus
from domain.events import AuctionCreatedDomainEvent, AuctionDeletedDomainEvent, AuctionUpdatedDomainEvent
from domain.models import Item, ItemPatch, apply_item_patch

# MongoDB stores dates with millisecond precision
TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)


def utc_now() -> datetime:
    """Current UTC time truncated to the store's timestamp resolution."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def advance_timestamp(previous: datetime, candidate: datetime) -> datetime:
    """Return a timestamp strictly later than ``previous``.

    ``candidate`` is used as is when it is already later, otherwise the result
    is ``previous`` plus one resolution step (clock skew, or two writes within
    the same millisecond).
    """
    if candidate > previous:
        return candidate
    return previous + TIMESTAMP_RESOLUTION


@dataclass(kw_only=True)
class Auction(Entity[str]):
    """An auction listing for a single vehicle."""

    item: Item
    seller: str
    id: str = field(default_factory=lambda: str(uuid4()))
    reserve_price: int = 0
    current_high_bid: int | None = None
    winner: str | None = None
    sold_amount: int | None = None
    status: AuctionStatus = AuctionStatus.LIVE
    auction_end: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        item: Item,
        seller: str,
        reserve_price: int = 0,
        auction_end: datetime | None = None,
        now: datetime | None = None,
    ) -> "Auction":
        """Create a new live auction with a freshly generated identifier."""
        timestamp = now or utc_now()
        return cls(
            item=item,
            seller=seller,
            reserve_price=reserve_price,
            auction_end=auction_end,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def apply_patch(self, patch: ItemPatch) -> bool:
        """Merge a partial update into the item.

        Returns:
            True if at least one item field changed
        """
        merged = apply_item_patch(self.item, patch)
        if merged == self.item:
            return False
        self.item = merged
        return True

    def created_event(self) -> AuctionCreatedDomainEvent:
        """Build the event announcing this auction's creation."""
        return AuctionCreatedDomainEvent(
            aggregate_id=self.id,
            make=self.item.make,
            model=self.item.model,
            year=self.item.year,
            color=self.item.color,
            mileage=self.item.mileage,
            image_url=self.item.image_url,
            seller=self.seller,
            reserve_price=self.reserve_price,
            status=self.status.value,
            auction_end=self.auction_end,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def updated_event(self) -> AuctionUpdatedDomainEvent:
        """Build the event announcing the current item state."""
        return AuctionUpdatedDomainEvent(
            aggregate_id=self.id,
            make=self.item.make,
            model=self.item.model,
            year=self.item.year,
            color=self.item.color,
            mileage=self.item.mileage,
            image_url=self.item.image_url,
        )

    def deleted_event(self) -> AuctionDeletedDomainEvent:
        """Build the event announcing this auction's removal."""
        return AuctionDeletedDomainEvent(aggregate_id=self.id)
