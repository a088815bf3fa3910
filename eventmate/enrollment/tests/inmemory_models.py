"""In-memory models for testing - no backend required."""

from decimal import Decimal

from eventmate.api.errors import EventMateApiError
from eventmate.bookings.dtos import BookingResult, GroupEnrollRequest, SoloEnrollRequest
from eventmate.bookings.read_model import BookingReadModel
from eventmate.bookings.write_model import BookingWriteModel
from eventmate.enrollment.notifier import Notifier
from eventmate.events.dtos import Event, EventFormat, TicketTier, TicketType
from eventmate.users.dtos import UserProfile, UserSummary


class RecordingNotifier(Notifier):
    """Keeps every message instead of showing it."""

    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class InMemoryBookingReadModel(BookingReadModel):
    def __init__(
        self,
        profile: UserProfile | None = None,
        booked_seats: list[int] | None = None,
        users: list[UserSummary] | None = None,
    ):
        self.profile = profile or make_profile()
        self.booked_seats = booked_seats or []
        self.users = users or []
        self.enrolled: set[int] = set()
        self.fail_with: EventMateApiError | None = None
        self.calls: list[str] = []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def get_booked_seats(self, event_id: int) -> list[int]:
        self.calls.append("get_booked_seats")
        self._maybe_fail()
        return list(self.booked_seats)

    async def search_users(self, query: str) -> list[UserSummary]:
        self.calls.append("search_users")
        self._maybe_fail()
        needle = query.lower()
        return [
            user
            for user in self.users
            if needle in (user.full_name or "").lower() or needle in user.email.lower()
        ]

    async def get_profile(self) -> UserProfile:
        self.calls.append("get_profile")
        self._maybe_fail()
        return self.profile

    async def is_enrolled(self, event_id: int) -> bool:
        self.calls.append("is_enrolled")
        return event_id in self.enrolled


class InMemoryBookingWriteModel(BookingWriteModel):
    def __init__(self, result: BookingResult | None = None):
        self.requests: list[SoloEnrollRequest | GroupEnrollRequest] = []
        self.result = result
        self.fail_with: EventMateApiError | None = None

    async def enroll(self, request: SoloEnrollRequest | GroupEnrollRequest) -> BookingResult:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.result is not None:
            return self.result
        return BookingResult(
            ticket_code="TKT-42",
            group_code="GRP-7" if request.booking_type == "GROUP" else None,
        )


def make_profile(**overrides) -> UserProfile:
    data = {
        "user_id": 1,
        "full_name": "Asha Rao",
        "email": "asha@example.com",
        "phone_number": "+91 90000 00001",
        "company_name": "Acme",
    }
    data.update(overrides)
    return UserProfile(**data)


def make_user(user_id: int, full_name: str, email: str) -> UserSummary:
    return UserSummary(user_id=user_id, full_name=full_name, email=email)


def make_event(**overrides) -> Event:
    data = {
        "event_id": 10,
        "title": "PyCon Meetup",
        "event_format": EventFormat.ONSITE,
        "ticket_type": TicketType.FREE,
        "total_capacity": 100,
    }
    data.update(overrides)
    return Event(**data)


def make_paid_event(**overrides) -> Event:
    data = {
        "event_format": EventFormat.REMOTE,
        "ticket_type": TicketType.PAID,
        "ticket_price": Decimal("500"),
        "allow_coupon": True,
        "coupon_code": "SAVE10",
        "discount_percentage": Decimal("10"),
    }
    data.update(overrides)
    return make_event(**data)


def make_tier(tier_id: int, name: str, price: str) -> TicketTier:
    return TicketTier(id=tier_id, name=name, price=Decimal(price))
