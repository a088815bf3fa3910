"""Read side of the booking API. Returns DTOs, never raw payloads."""

from abc import ABC, abstractmethod

from eventmate.api import urls
from eventmate.api.client import EventMateClient, validate_response
from eventmate.bookings.dtos import EnrollmentStatus
from eventmate.users.dtos import UserProfile, UserSummary


class BookingReadModel(ABC):
    @abstractmethod
    async def get_booked_seats(self, event_id: int) -> list[int]:
        """Seat numbers already taken for an event."""
        raise NotImplementedError

    @abstractmethod
    async def search_users(self, query: str) -> list[UserSummary]:
        """Users whose name or email contains the query."""
        raise NotImplementedError

    @abstractmethod
    async def get_profile(self) -> UserProfile:
        """Profile of the signed in user."""
        raise NotImplementedError

    @abstractmethod
    async def is_enrolled(self, event_id: int) -> bool:
        """Whether the signed in user already holds a booking for the event."""
        raise NotImplementedError


class HttpBookingReadModel(BookingReadModel):
    def __init__(self, client: EventMateClient) -> None:
        self._client = client

    async def get_booked_seats(self, event_id: int) -> list[int]:
        seats = await self._client.get(urls.BOOKED_SEATS_URL.format(event_id=event_id))
        seats = validate_response(list[int | None], seats or [])
        return [seat for seat in seats if seat is not None]

    async def search_users(self, query: str) -> list[UserSummary]:
        users = await self._client.get(urls.USER_SEARCH_URL, params={"query": query})
        return validate_response(list[UserSummary], users or [])

    async def get_profile(self) -> UserProfile:
        profile = validate_response(UserProfile, await self._client.get(urls.USER_PROFILE_URL))
        self._client.session.set_user(profile)
        return profile

    async def is_enrolled(self, event_id: int) -> bool:
        data = await self._client.get(urls.CHECK_ENROLLMENT_URL.format(event_id=event_id))
        return validate_response(EnrollmentStatus, data or {}).is_enrolled
