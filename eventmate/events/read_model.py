import logging
from abc import ABC, abstractmethod

from eventmate.api import urls
from eventmate.api.client import EventMateClient, validate_response
from eventmate.api.errors import EventMateApiError
from eventmate.events.dtos import Event

logger = logging.getLogger(__name__)


class EventReadModel(ABC):
    @abstractmethod
    async def get_event(self, event_id: int) -> Event:
        """Event with its ticket tiers attached."""
        raise NotImplementedError


class HttpEventReadModel(EventReadModel):
    def __init__(self, client: EventMateClient) -> None:
        self._client = client

    async def get_event(self, event_id: int) -> Event:
        data = await self._client.get(urls.EVENT_URL.format(event_id=event_id))
        if isinstance(data, dict) and not data.get("ticketTiers"):
            # older events keep their tiers behind the ticket-types endpoint
            try:
                data["ticketTiers"] = await self._client.get(
                    urls.EVENT_TICKET_TYPES_URL.format(event_id=event_id)
                ) or []
            except EventMateApiError:
                logger.debug("No ticket types for event %s", event_id)
        return validate_response(Event, data)
