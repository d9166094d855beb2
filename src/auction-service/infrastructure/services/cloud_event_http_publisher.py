"""CloudEvent HTTP Publisher.

Publishes auction domain events as structured-mode CloudEvents 1.0 by
POSTing them to the configured event sink (broker ingress, event gateway...).

The call is awaited: a 2xx answer from the sink is the bus acknowledgement.
Any other status, a timeout or a network error raises ``EventPublishingError``.
"""

import datetime
import logging
import uuid

import httpx
from neuroglia.data.abstractions import DomainEvent
from opentelemetry import trace

from application.services import AuctionEventPublisher, cloud_event_type_of, event_to_dict
from domain.exceptions import EventPublishingError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CLOUD_EVENT_CONTENT_TYPE = "application/cloudevents+json"


class HttpCloudEventPublisher(AuctionEventPublisher):
    """Publishes domain events to an HTTP CloudEvent sink.

    Example:
        publisher = HttpCloudEventPublisher(
            sink_url="http://event-player:8080/events/pub",
            source="https://auction-service.system.io",
            type_prefix="io.system.auction-service",
        )
        await publisher.publish_async(auction.created_event())
    """

    def __init__(
        self,
        sink_url: str,
        source: str,
        type_prefix: str,
        http_timeout: float = 5.0,
    ):
        """Initialize the publisher.

        Args:
            sink_url: URL the CloudEvents are POSTed to
            source: CloudEvent ``source`` attribute
            type_prefix: Prefix of the CloudEvent ``type`` attribute
            http_timeout: HTTP request timeout in seconds
        """
        self._sink_url = sink_url
        self._source = source
        self._type_prefix = type_prefix
        self._http_timeout = http_timeout

    def build_cloud_event(self, event: DomainEvent) -> dict:
        """Wrap a domain event in a structured-mode CloudEvent envelope."""
        return {
            "id": str(uuid.uuid4()).replace("-", ""),
            "source": self._source,
            "type": f"{self._type_prefix}.{cloud_event_type_of(event)}",
            "specversion": "1.0",
            "time": datetime.datetime.now(datetime.UTC).isoformat(),
            "subject": event.aggregate_id,
            "datacontenttype": "application/json",
            "data": event_to_dict(event),
        }

    async def publish_async(self, event: DomainEvent) -> None:
        """POST the event to the sink and wait for the acknowledgement."""
        cloud_event = self.build_cloud_event(event)
        event_type = cloud_event["type"]

        with tracer.start_as_current_span("cloud_event.publish") as span:
            span.set_attribute("cloudevent.type", event_type)
            span.set_attribute("cloudevent.subject", cloud_event["subject"])

            try:
                async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                    response = await client.post(
                        self._sink_url,
                        json=cloud_event,
                        headers={"Content-Type": CLOUD_EVENT_CONTENT_TYPE},
                    )

            except httpx.TimeoutException as e:
                logger.error(
                    "CloudEvent publishing timed out",
                    extra={"event_type": event_type, "sink_url": self._sink_url},
                    exc_info=e,
                )
                raise EventPublishingError(f"Timeout publishing {event_type} to {self._sink_url}", event_type=event_type, cause=e) from e

            except httpx.RequestError as e:
                logger.error(
                    "CloudEvent publishing network error",
                    extra={"event_type": event_type, "sink_url": self._sink_url},
                    exc_info=e,
                )
                raise EventPublishingError(f"Network error publishing {event_type}: {e}", event_type=event_type, cause=e) from e

            span.set_attribute("http.status_code", response.status_code)

            if not 200 <= response.status_code < 300:
                logger.error(
                    "CloudEvent rejected by sink",
                    extra={"event_type": event_type, "status_code": response.status_code},
                )
                raise EventPublishingError(f"Event sink rejected {event_type} with status {response.status_code}", event_type=event_type)

        logger.info(f"Published CloudEvent {event_type} for '{cloud_event['subject']}'")
