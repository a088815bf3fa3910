from dataclasses import dataclass
from decimal import Decimal

from eventmate.enrollment.errors import InvalidPromoCodeError, PromoNotAllowedError
from eventmate.events.dtos import Event, TicketTier


def base_price(event: Event, tier: TicketTier | None) -> Decimal:
    """Price of the selected tier, falling back to the event's flat price."""
    if tier is not None:
        return tier.price
    return event.ticket_price or Decimal("0")


@dataclass
class BillSummary:
    ticket_name: str
    base_price: Decimal
    discount: Decimal = Decimal("0")
    discount_applied: bool = False
    promo_code: str = ""
    final_amount: Decimal | None = None

    def __post_init__(self) -> None:
        if self.final_amount is None:
            self.final_amount = self.base_price

    @classmethod
    def for_booking(cls, event: Event, tier: TicketTier | None) -> "BillSummary":
        return cls(
            ticket_name=tier.name if tier else "Standard",
            base_price=base_price(event, tier),
        )

    def apply_promo(self, code: str, event: Event) -> Decimal:
        """Apply the event coupon and return the discounted percentage.

        Raises:
            PromoNotAllowedError: The event does not take coupons. The bill is
                left as it was.
            InvalidPromoCodeError: The code does not match. Any previous
                discount is removed.
        """
        if not event.allow_coupon:
            raise PromoNotAllowedError()

        self.promo_code = code
        valid_code = event.coupon_code or ""
        if not code or not valid_code or code.strip().upper() != valid_code.upper():
            self.discount = Decimal("0")
            self.final_amount = self.base_price
            self.discount_applied = False
            raise InvalidPromoCodeError(code)

        percentage = event.discount_percentage or Decimal("0")
        self.discount = self.base_price * (percentage / 100)
        self.final_amount = self.base_price - self.discount
        self.discount_applied = True
        return percentage
