import logging
from abc import ABC, abstractmethod

from eventmate.api import urls
from eventmate.api.client import EventMateClient, validate_response
from eventmate.bookings.dtos import BookingResult, GroupEnrollRequest, SoloEnrollRequest

logger = logging.getLogger(__name__)


class BookingWriteModel(ABC):
    @abstractmethod
    async def enroll(self, request: SoloEnrollRequest | GroupEnrollRequest) -> BookingResult:
        """
        Submit a booking. A single attempt, the backend decides on seat,
        capacity and duplicate conflicts.

        Raises:
            EventMateApiError: When the backend rejects the booking.
        """
        raise NotImplementedError


class HttpBookingWriteModel(BookingWriteModel):
    def __init__(self, client: EventMateClient) -> None:
        self._client = client

    async def enroll(self, request: SoloEnrollRequest | GroupEnrollRequest) -> BookingResult:
        logger.info(
            "Submitting %s enrollment for event %s (seat %s)",
            request.booking_type,
            request.event_id,
            request.seat_number,
        )
        data = await self._client.post(urls.ENROLL_URL, json=request.to_payload())
        result = validate_response(BookingResult, data)
        logger.info("Enrolled in event %s, ticket %s", request.event_id, result.ticket_code)
        return result
