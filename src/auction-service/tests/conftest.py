"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- In-memory store and event publisher
- Neuroglia service mocks
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from _pytest.config import Config
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

from application.services import AuctionLifecycleOptions
from infrastructure import InMemoryEventPublisher
from integration.repositories import InMemoryAuctionRepository

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "domain: Domain model tests")
    config.addinivalue_line("markers", "repository: Repository layer tests")
    config.addinivalue_line("markers", "command: Command handler tests")
    config.addinivalue_line("markers", "query: Query handler tests")
    config.addinivalue_line("markers", "api: API controller tests")


# ============================================================================
# STORE AND MESSAGE BUS FIXTURES
# ============================================================================


@pytest.fixture
def auction_repository() -> InMemoryAuctionRepository:
    """Provide an empty in-memory auction store."""
    return InMemoryAuctionRepository()


@pytest.fixture
def event_publisher() -> InMemoryEventPublisher:
    """Provide an in-memory event publisher that records what is published."""
    return InMemoryEventPublisher()


@pytest.fixture
def lifecycle_options() -> AuctionLifecycleOptions:
    """Provide short timeouts so timeout tests stay fast."""
    return AuctionLifecycleOptions(store_timeout_seconds=0.2, publish_timeout_seconds=0.2)


@pytest.fixture
def mock_repository() -> MagicMock:
    """Provide a mock auction repository for failure injection."""
    mock: MagicMock = MagicMock()
    mock.get_async = AsyncMock(return_value=None)
    mock.add_async = AsyncMock()
    mock.mutate_async = AsyncMock(return_value=None)
    mock.remove_async = AsyncMock(return_value=True)
    return mock


# ============================================================================
# NEUROGLIA SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def mediator() -> Mediator:
    return MagicMock(spec=Mediator)


@pytest.fixture
def mapper() -> Mapper:
    return MagicMock(spec=Mapper)
