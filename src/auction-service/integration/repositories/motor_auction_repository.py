"""MongoDB repository implementation for the Auction entity."""

import logging
from collections.abc import AsyncIterator
from datetime import datetime

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from domain.entities import Auction, advance_timestamp
from domain.enums import AuctionStatus
from domain.exceptions import AuctionStoreError, DuplicateAuctionError
from domain.models import Item
from domain.repositories import AuctionPatch, AuctionRepository

log = logging.getLogger(__name__)


def _to_document(auction: Auction) -> dict:
    """Serialize an auction to a MongoDB document keyed by ``_id``."""
    return {
        "_id": auction.id,
        "item": auction.item.to_dict(),
        "seller": auction.seller,
        "reserve_price": auction.reserve_price,
        "current_high_bid": auction.current_high_bid,
        "winner": auction.winner,
        "sold_amount": auction.sold_amount,
        "status": auction.status.value,
        "auction_end": auction.auction_end,
        "created_at": auction.created_at,
        "updated_at": auction.updated_at,
    }


def _from_document(doc: dict) -> Auction:
    """Deserialize a MongoDB document into an auction."""
    return Auction(
        id=doc["_id"],
        item=Item.from_dict(doc["item"]),
        seller=doc["seller"],
        reserve_price=doc.get("reserve_price", 0),
        current_high_bid=doc.get("current_high_bid"),
        winner=doc.get("winner"),
        sold_amount=doc.get("sold_amount"),
        status=AuctionStatus(doc.get("status", AuctionStatus.LIVE.value)),
        auction_end=doc.get("auction_end"),
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class MotorAuctionRepository(AuctionRepository):
    """MongoDB-based repository for auctions.

    Item fields are stored as a nested ``item`` sub-document so listings can be
    sorted on ``item.make``. The client must be created with ``tz_aware=True``
    so timestamps read back as UTC-aware datetimes.

    ``mutate_async`` is a compare-and-swap on ``updated_at``: the patched
    document only replaces the stored one if nobody committed in between,
    otherwise the patch is re-applied to the fresh document.
    """

    MAX_MUTATE_ATTEMPTS = 5

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection
        self._indexes_ready = False

    @classmethod
    def from_connection_string(cls, connection_string: str, database_name: str, collection_name: str) -> "MotorAuctionRepository":
        """Create a repository with its own Motor client.

        Args:
            connection_string: MongoDB connection URL
            database_name: Database holding the auctions
            collection_name: Collection holding the auctions

        Returns:
            The repository
        """
        client = AsyncIOMotorClient(connection_string, tz_aware=True)
        log.info(f"MotorAuctionRepository initialized with {database_name}.{collection_name}")
        return cls(client[database_name][collection_name])

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Get the MongoDB collection."""
        return self._collection

    async def ensure_indexes_async(self) -> None:
        """Create the indexes used by the listing scan (idempotent)."""
        if self._indexes_ready:
            return
        try:
            await self._collection.create_index([("item.make", ASCENDING)])
            await self._collection.create_index([("updated_at", ASCENDING)])
        except PyMongoError as e:
            raise AuctionStoreError("Failed to create auction indexes", cause=e) from e
        self._indexes_ready = True

    async def list_async(self, since: datetime | None = None) -> AsyncIterator[Auction]:
        """Stream auctions ordered by make, optionally updated after ``since``."""
        await self.ensure_indexes_async()
        query = {} if since is None else {"updated_at": {"$gt": since}}
        try:
            cursor = self._collection.find(query).sort("item.make", ASCENDING)
            async for doc in cursor:
                yield _from_document(doc)
        except PyMongoError as e:
            log.error(f"Failed to list auctions: {e}")
            raise AuctionStoreError("Failed to list auctions", cause=e) from e

    async def get_async(self, auction_id: str) -> Auction | None:
        """Retrieve an auction by ID."""
        try:
            doc = await self._collection.find_one({"_id": auction_id})
        except PyMongoError as e:
            log.error(f"Failed to load auction {auction_id}: {e}")
            raise AuctionStoreError(f"Failed to load auction '{auction_id}'", cause=e) from e
        return _from_document(doc) if doc else None

    async def add_async(self, auction: Auction) -> Auction:
        """Insert a new auction."""
        try:
            await self._collection.insert_one(_to_document(auction))
        except DuplicateKeyError as e:
            raise DuplicateAuctionError(auction.id) from e
        except PyMongoError as e:
            log.error(f"Failed to insert auction {auction.id}: {e}")
            raise AuctionStoreError(f"Failed to insert auction '{auction.id}'", cause=e) from e
        return auction

    async def mutate_async(self, auction_id: str, patch: AuctionPatch, timestamp: datetime) -> Auction | None:
        """Patch an auction with compare-and-swap on ``updated_at``."""
        try:
            for attempt in range(1, self.MAX_MUTATE_ATTEMPTS + 1):
                doc = await self._collection.find_one({"_id": auction_id})
                if doc is None:
                    return None

                auction = _from_document(doc)
                previous = auction.updated_at
                patch(auction)
                auction.updated_at = advance_timestamp(previous, timestamp)

                result = await self._collection.replace_one({"_id": auction_id, "updated_at": previous}, _to_document(auction))
                if result.matched_count == 1:
                    return auction
                log.debug(f"Concurrent write on auction {auction_id}, retrying (attempt {attempt})")
        except PyMongoError as e:
            log.error(f"Failed to update auction {auction_id}: {e}")
            raise AuctionStoreError(f"Failed to update auction '{auction_id}'", cause=e) from e

        raise AuctionStoreError(f"Gave up updating auction '{auction_id}' after {self.MAX_MUTATE_ATTEMPTS} concurrent writes")

    async def remove_async(self, auction_id: str) -> bool:
        """Delete an auction by ID."""
        try:
            result = await self._collection.delete_one({"_id": auction_id})
        except PyMongoError as e:
            log.error(f"Failed to delete auction {auction_id}: {e}")
            raise AuctionStoreError(f"Failed to delete auction '{auction_id}'", cause=e) from e
        return result.deleted_count > 0

    async def ping_async(self) -> bool:
        """Check that the MongoDB server answers."""
        try:
            await self._collection.database.client.admin.command("ping")
        except PyMongoError as e:
            log.warning(f"MongoDB ping failed: {e}")
            return False
        return True
