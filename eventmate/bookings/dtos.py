from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class BookingType(str, Enum):
    SOLO = "SOLO"
    GROUP = "GROUP"


class _EnrollRequestBase(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    event_id: int
    ticket_type_id: int | None = None
    ticket_tier_id: int | None = None
    attendee_name: str | None = None
    contact_number: str | None = None
    attendee_age: int
    company_name: str | None = None
    job_title: str | None = None
    dietary_restrictions: str | None = None
    accessibility_needs: str | None = None
    seat_number: int | None = None
    group_code: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class SoloEnrollRequest(_EnrollRequestBase):
    """Booking for the signed in attendee only."""

    booking_type: Literal["SOLO"] = "SOLO"


class GroupEnrollRequest(_EnrollRequestBase):
    """Booking that also invites other users by email under a shared group code."""

    booking_type: Literal["GROUP"] = "GROUP"
    invited_users: list[str] = Field(default_factory=list)


EnrollRequest = Annotated[
    SoloEnrollRequest | GroupEnrollRequest,
    Field(discriminator="booking_type"),
]

_enroll_request_adapter: TypeAdapter[EnrollRequest] = TypeAdapter(EnrollRequest)


def parse_enroll_request(data: dict[str, Any]) -> SoloEnrollRequest | GroupEnrollRequest:
    """Validate a raw payload, picking the request type from ``bookingType``.

    Raises:
        pydantic.ValidationError: On a missing/unknown booking type, missing
            required fields or any field the request type does not declare.
    """
    return _enroll_request_adapter.validate_python(data)


class BookingResult(BaseModel):
    """What the backend hands back for a successful enrollment."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    ticket_code: str
    group_code: str | None = None
    booking_id: int | None = None
    booking_type: BookingType | None = None
    status: str | None = None
    seat_number: int | None = None


class EnrollmentStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    is_enrolled: bool = False
