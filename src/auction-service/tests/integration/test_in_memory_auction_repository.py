"""Tests for the in-memory auction repository."""

from datetime import timedelta

import pytest

from domain.exceptions import DuplicateAuctionError
from integration.repositories import InMemoryAuctionRepository
from tests.fixtures.factories import AuctionFactory


@pytest.mark.repository
class TestInMemoryAuctionRepository:
    """Test InMemoryAuctionRepository."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = AuctionFactory.create()

        await auction_repository.add_async(auction)

        assert await auction_repository.get_async(auction.id) == auction
        assert await auction_repository.get_async("missing") is None

    @pytest.mark.asyncio
    async def test_add_duplicate_id(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = AuctionFactory.create(auction_id="a1")
        await auction_repository.add_async(auction)

        with pytest.raises(DuplicateAuctionError):
            await auction_repository.add_async(AuctionFactory.create(auction_id="a1"))

    @pytest.mark.asyncio
    async def test_returned_auctions_are_copies(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(color="Red"))

        loaded = await auction_repository.get_async(auction.id)
        loaded.item.color = "Green"

        assert (await auction_repository.get_async(auction.id)).item.color == "Red"

    @pytest.mark.asyncio
    async def test_list_orders_by_make_and_filters_on_since(self, auction_repository: InMemoryAuctionRepository) -> None:
        auctions = AuctionFactory.create_many(["Mercedes", "Audi", "Ford"])
        for auction in auctions:
            await auction_repository.add_async(auction)

        everything = [a.item.make async for a in auction_repository.list_async()]
        recent = [a.item.make async for a in auction_repository.list_async(auctions[0].updated_at)]

        assert everything == ["Audi", "Ford", "Mercedes"]
        assert recent == ["Audi", "Ford"]

    @pytest.mark.asyncio
    async def test_mutate_applies_patch_and_advances_timestamp(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(mileage=10))
        later = auction.updated_at + timedelta(seconds=30)

        def patch(stored):
            stored.item.mileage = 20

        committed = await auction_repository.mutate_async(auction.id, patch, later)

        assert committed.item.mileage == 20
        assert committed.updated_at == later
        assert (await auction_repository.get_async(auction.id)).item.mileage == 20

    @pytest.mark.asyncio
    async def test_mutate_with_stale_timestamp_still_moves_forward(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())

        committed = await auction_repository.mutate_async(auction.id, lambda stored: None, auction.updated_at - timedelta(hours=1))

        assert committed.updated_at > auction.updated_at

    @pytest.mark.asyncio
    async def test_mutate_missing_auction(self, auction_repository: InMemoryAuctionRepository) -> None:
        assert await auction_repository.mutate_async("missing", lambda stored: None, AuctionFactory.BASE_TIME) is None

    @pytest.mark.asyncio
    async def test_remove(self, auction_repository: InMemoryAuctionRepository) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())

        assert await auction_repository.remove_async(auction.id) is True
        assert await auction_repository.remove_async(auction.id) is False
        assert len(auction_repository) == 0
