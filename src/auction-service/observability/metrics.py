"""Business metrics for the Auction Service.

Defines OpenTelemetry metrics for the auction write path. The two failure
counters are tagged with the operation so the publish-before-commit window
(event sent, store write failed) can be watched per operation.
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

auctions_created = meter.create_counter(
    name="auction_service.auctions.created",
    description="Total auctions created",
    unit="1",
)

auctions_updated = meter.create_counter(
    name="auction_service.auctions.updated",
    description="Total auctions updated",
    unit="1",
)

auctions_deleted = meter.create_counter(
    name="auction_service.auctions.deleted",
    description="Total auctions deleted",
    unit="1",
)

auction_publish_failures = meter.create_counter(
    name="auction_service.auctions.publish_failures",
    description="Write operations aborted because the event could not be published",
    unit="1",
)

auction_persistence_failures = meter.create_counter(
    name="auction_service.auctions.persistence_failures",
    description="Write operations whose store commit failed after the event was published",
    unit="1",
)

auction_processing_time = meter.create_histogram(
    name="auction_service.auction.processing_time",
    description="Time to process auction operations",
    unit="ms",
)
