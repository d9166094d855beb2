"""Exceptions raised by the auction store and event publisher.

Command handlers translate these into typed ``OperationResult`` failures.
"""


class AuctionStoreError(Exception):
    """Base exception for auction store failures.

    Raised when a durable read or write cannot be completed.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class DuplicateAuctionError(AuctionStoreError):
    """An auction with the same identifier already exists in the store."""

    def __init__(self, auction_id: str):
        super().__init__(f"An auction with id '{auction_id}' already exists")
        self.auction_id = auction_id


class EventPublishingError(Exception):
    """The message bus did not acknowledge a published event."""

    def __init__(self, message: str, event_type: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.event_type = event_type
        self.cause = cause
