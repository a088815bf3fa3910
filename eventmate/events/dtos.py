from decimal import Decimal
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class EventFormat(str, Enum):
    ONSITE = "ONSITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"


class TicketType(str, Enum):
    FREE = "FREE"
    PAID = "PAID"


_NULL_DEFAULTS = {"ticket_tiers": (), "allow_coupon": False, "total_capacity": 0}


class TicketTier(BaseModel):
    """A priced category of ticket for an event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # /events/{id} returns tiers as {id, name}, /ticket-types returns {ticketTypeId, typeName}
    id: int = Field(validation_alias=AliasChoices("id", "ticketTypeId"))
    name: str = Field(default="Standard", validation_alias=AliasChoices("name", "typeName"))
    price: Decimal = Decimal("0")
    description: str | None = None
    capacity: int | None = None


class Event(BaseModel):
    """Event as seen by an attendee during enrollment. Never mutated client side."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    event_id: int
    title: str
    event_format: EventFormat = EventFormat.ONSITE
    ticket_type: TicketType = TicketType.FREE
    total_capacity: int = 0
    ticket_price: Decimal | None = None
    allow_coupon: bool = False
    coupon_code: str | None = None
    discount_percentage: Decimal | None = None
    meeting_url: str | None = None
    ticket_tiers: tuple[TicketTier, ...] = ()

    @field_validator("ticket_tiers", "allow_coupon", "total_capacity", mode="before")
    @classmethod
    def _null_as_default(cls, value, info: ValidationInfo):
        # unset columns come back as null
        if value is None:
            return _NULL_DEFAULTS[info.field_name]
        return value

    @property
    def is_paid(self) -> bool:
        return self.ticket_type == TicketType.PAID

    @property
    def is_onsite(self) -> bool:
        return self.event_format == EventFormat.ONSITE

    def find_tier(self, tier_id: int | None) -> TicketTier | None:
        if tier_id is None:
            return None
        for tier in self.ticket_tiers:
            if tier.id == tier_id:
                return tier
        return None
