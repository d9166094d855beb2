"""Application layer tests for the auction command handlers.

Handlers run against the in-memory store and publisher, so every test can
check both what was published and what was committed.
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

from application.commands import (
    CreateAuctionCommand,
    CreateAuctionCommandHandler,
    DeleteAuctionCommand,
    DeleteAuctionCommandHandler,
    UpdateAuctionCommand,
    UpdateAuctionCommandHandler,
)
from application.services import AuctionLifecycleOptions
from domain.events import AuctionCreatedDomainEvent, AuctionDeletedDomainEvent, AuctionUpdatedDomainEvent
from domain.exceptions import AuctionStoreError
from infrastructure import InMemoryEventPublisher
from integration.repositories import InMemoryAuctionRepository
from tests.fixtures.factories import AuctionFactory


@pytest.mark.command
class TestCreateAuctionCommand:
    """Test CreateAuctionCommand handler."""

    @pytest.fixture
    def handler(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        auction_repository: InMemoryAuctionRepository,
    ) -> CreateAuctionCommandHandler:
        return CreateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, auction_repository)

    @pytest.mark.asyncio
    async def test_create_auction(self, handler: CreateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        """Create a Ford Mustang as the default caller."""
        command = CreateAuctionCommand(make="Ford", model="Mustang", year=2020, seller="test")

        result = await handler.handle_async(command)

        assert result.is_success
        assert result.status == 201
        dto = result.data
        assert dto.id
        assert dto.seller == "test"
        assert (dto.make, dto.model, dto.year) == ("Ford", "Mustang", 2020)
        assert dto.created_at == dto.updated_at

        stored = await auction_repository.get_async(dto.id)
        assert stored is not None
        assert stored.item.make == "Ford"

        assert len(event_publisher.published) == 1
        event = event_publisher.published[0]
        assert isinstance(event, AuctionCreatedDomainEvent)
        assert event.aggregate_id == dto.id
        assert event.seller == "test"
        assert (event.make, event.model, event.year) == ("Ford", "Mustang", 2020)

    @pytest.mark.asyncio
    async def test_create_generates_unique_ids(self, handler: CreateAuctionCommandHandler) -> None:
        ids = set()
        for _ in range(5):
            result = await handler.handle_async(CreateAuctionCommand(make="Ford", model="Mustang", year=2020, seller="test"))
            ids.add(result.data.id)

        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_create_trims_text_fields(self, handler: CreateAuctionCommandHandler) -> None:
        result = await handler.handle_async(CreateAuctionCommand(make="  Ford ", model=" Mustang", year=2020, seller=" alice "))

        assert result.data.make == "Ford"
        assert result.data.model == "Mustang"
        assert result.data.seller == "alice"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"make": ""},
            {"make": "   "},
            {"model": ""},
            {"year": None},
            {"year": 0},
            {"year": -1},
            {"seller": ""},
            {"mileage": -5},
            {"reserve_price": -1},
        ],
    )
    async def test_invalid_input_is_rejected_without_side_effects(
        self,
        handler: CreateAuctionCommandHandler,
        auction_repository: InMemoryAuctionRepository,
        event_publisher: InMemoryEventPublisher,
        overrides: dict,
    ) -> None:
        fields = {"make": "Ford", "model": "Mustang", "year": 2020, "seller": "test"}
        fields.update(overrides)

        result = await handler.handle_async(CreateAuctionCommand(**fields))

        assert not result.is_success
        assert result.status == 422
        assert len(auction_repository) == 0
        assert event_publisher.published == []

    @pytest.mark.asyncio
    async def test_publish_failure_leaves_store_untouched(self, handler: CreateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        event_publisher.fail_next()

        result = await handler.handle_async(CreateAuctionCommand(make="Ford", model="Mustang", year=2020, seller="test"))

        assert result.status == 503
        assert len(auction_repository) == 0
        assert event_publisher.published == []

    @pytest.mark.asyncio
    async def test_store_failure_after_publish(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        mock_repository: MagicMock,
    ) -> None:
        """The event is already out when the insert fails; it is not compensated."""
        mock_repository.add_async = AsyncMock(side_effect=AuctionStoreError("connection reset"))
        handler = CreateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, mock_repository)

        result = await handler.handle_async(CreateAuctionCommand(make="Ford", model="Mustang", year=2020, seller="test"))

        assert result.status == 400
        assert result.detail == "Could not save changes to the DB"
        assert len(event_publisher.published) == 1
        attempted = mock_repository.add_async.call_args[0][0]
        event = event_publisher.published[0]
        assert event.aggregate_id == attempted.id
        assert event.make == attempted.item.make
        assert event.created_at == attempted.created_at


@pytest.mark.command
class TestUpdateAuctionCommand:
    """Test UpdateAuctionCommand handler."""

    @pytest.fixture
    def handler(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        auction_repository: InMemoryAuctionRepository,
    ) -> UpdateAuctionCommandHandler:
        return UpdateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, auction_repository)

    @pytest.mark.asyncio
    async def test_update_merges_patch(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(color="Red", mileage=15000))

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, color="Blue"))

        assert result.status == 200
        assert result.data.color == "Blue"
        assert result.data.mileage == 15000
        assert result.data.make == "Ford"

        stored = await auction_repository.get_async(auction.id)
        assert stored.item.color == "Blue"
        assert stored.item.mileage == 15000
        assert stored.updated_at > auction.updated_at

        assert len(event_publisher.published) == 1
        event = event_publisher.published[0]
        assert isinstance(event, AuctionUpdatedDomainEvent)
        assert event.aggregate_id == auction.id
        assert event.color == "Blue"
        assert event.mileage == 15000

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_not_found(self, handler: UpdateAuctionCommandHandler, event_publisher: InMemoryEventPublisher) -> None:
        result = await handler.handle_async(UpdateAuctionCommand(auction_id="missing", color="Blue"))

        assert result.status == 404
        assert event_publisher.published == []

    @pytest.mark.asyncio
    async def test_update_that_changes_nothing_is_a_no_op(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(color="Red"))

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, color="Red"))

        assert result.status == 200
        assert result.data.updated_at == auction.updated_at
        assert event_publisher.published == []
        stored = await auction_repository.get_async(auction.id)
        assert stored.updated_at == auction.updated_at

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fields", [{"make": " "}, {"model": ""}, {"year": 0}, {"mileage": -1}])
    async def test_invalid_patch_is_rejected(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher, fields: dict) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, **fields))

        assert result.status == 422
        assert event_publisher.published == []

    @pytest.mark.asyncio
    async def test_update_trims_text_fields(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, make="  BMW ", model=" M3"))

        assert result.status == 200
        assert (result.data.make, result.data.model) == ("BMW", "M3")
        stored = await auction_repository.get_async(auction.id)
        assert (stored.item.make, stored.item.model) == ("BMW", "M3")
        assert len(event_publisher.published) == 1
        assert (event_publisher.published[0].make, event_publisher.published[0].model) == ("BMW", "M3")

    @pytest.mark.asyncio
    async def test_updated_at_strictly_increases(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(mileage=0))
        previous = auction.updated_at

        for mileage in range(1, 6):
            result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, mileage=mileage))
            assert result.data.updated_at > previous
            previous = result.data.updated_at

    @pytest.mark.asyncio
    async def test_publish_failure_leaves_store_untouched(self, handler: UpdateAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create(color="Red"))
        event_publisher.fail_next()

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, color="Blue"))

        assert result.status == 503
        stored = await auction_repository.get_async(auction.id)
        assert stored == auction

    @pytest.mark.asyncio
    async def test_record_removed_before_commit(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        mock_repository: MagicMock,
    ) -> None:
        auction = AuctionFactory.create(color="Red")
        mock_repository.get_async = AsyncMock(return_value=auction)
        mock_repository.mutate_async = AsyncMock(return_value=None)
        handler = UpdateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, mock_repository)

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, color="Blue"))

        assert result.status == 400
        assert result.detail == "Could not save changes to the DB"
        assert len(event_publisher.published) == 1

    @pytest.mark.asyncio
    async def test_store_timeout_after_publish(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        mock_repository: MagicMock,
    ) -> None:
        async def slow_mutate(*args, **kwargs):
            await asyncio.sleep(5)

        auction = AuctionFactory.create(color="Red")
        mock_repository.get_async = AsyncMock(return_value=auction)
        mock_repository.mutate_async = slow_mutate
        handler = UpdateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, mock_repository)

        result = await handler.handle_async(UpdateAuctionCommand(auction_id=auction.id, color="Blue"))

        assert result.status == 400
        assert event_publisher.published[0].color == "Blue"

    @pytest.mark.asyncio
    async def test_store_unavailable_on_load(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        mock_repository: MagicMock,
    ) -> None:
        mock_repository.get_async = AsyncMock(side_effect=AuctionStoreError("down"))
        handler = UpdateAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, mock_repository)

        result = await handler.handle_async(UpdateAuctionCommand(auction_id="any", color="Blue"))

        assert result.status == 503
        assert event_publisher.published == []


@pytest.mark.command
class TestDeleteAuctionCommand:
    """Test DeleteAuctionCommand handler."""

    @pytest.fixture
    def handler(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        auction_repository: InMemoryAuctionRepository,
    ) -> DeleteAuctionCommandHandler:
        return DeleteAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, auction_repository)

    @pytest.mark.asyncio
    async def test_delete_auction(self, handler: DeleteAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())

        result = await handler.handle_async(DeleteAuctionCommand(auction_id=auction.id))

        assert result.status == 200
        assert await auction_repository.get_async(auction.id) is None
        assert len(event_publisher.published) == 1
        event = event_publisher.published[0]
        assert isinstance(event, AuctionDeletedDomainEvent)
        assert event.aggregate_id == auction.id

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_not_found(self, handler: DeleteAuctionCommandHandler, event_publisher: InMemoryEventPublisher) -> None:
        result = await handler.handle_async(DeleteAuctionCommand(auction_id="missing"))

        assert result.status == 404
        assert event_publisher.published == []

    @pytest.mark.asyncio
    async def test_publish_failure_keeps_auction(self, handler: DeleteAuctionCommandHandler, auction_repository: InMemoryAuctionRepository, event_publisher: InMemoryEventPublisher) -> None:
        auction = await auction_repository.add_async(AuctionFactory.create())
        event_publisher.fail_next()

        result = await handler.handle_async(DeleteAuctionCommand(auction_id=auction.id))

        assert result.status == 503
        assert await auction_repository.get_async(auction.id) is not None

    @pytest.mark.asyncio
    async def test_publish_timeout_keeps_auction(
        self,
        mediator: Mediator,
        mapper: Mapper,
        auction_repository: InMemoryAuctionRepository,
    ) -> None:
        async def hang(event):
            await asyncio.sleep(5)

        publisher = MagicMock()
        publisher.publish_async = hang
        options = AuctionLifecycleOptions(store_timeout_seconds=1, publish_timeout_seconds=0.05)
        handler = DeleteAuctionCommandHandler(mediator, mapper, publisher, options, auction_repository)
        auction = await auction_repository.add_async(AuctionFactory.create())

        result = await handler.handle_async(DeleteAuctionCommand(auction_id=auction.id))

        assert result.status == 503
        assert await auction_repository.get_async(auction.id) is not None

    @pytest.mark.asyncio
    async def test_removal_failure_after_publish(
        self,
        mediator: Mediator,
        mapper: Mapper,
        event_publisher: InMemoryEventPublisher,
        lifecycle_options: AuctionLifecycleOptions,
        mock_repository: MagicMock,
    ) -> None:
        auction = AuctionFactory.create(updated_at=AuctionFactory.BASE_TIME + timedelta(days=1))
        mock_repository.get_async = AsyncMock(return_value=auction)
        mock_repository.remove_async = AsyncMock(return_value=False)
        handler = DeleteAuctionCommandHandler(mediator, mapper, event_publisher, lifecycle_options, mock_repository)

        result = await handler.handle_async(DeleteAuctionCommand(auction_id=auction.id))

        assert result.status == 400
        assert result.detail == "Could not save changes to the DB"
        assert [e.aggregate_id for e in event_publisher.published] == [auction.id]
