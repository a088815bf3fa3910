"""Enrollment flow for a single event.

Steps:
    FORM -> [BILL_SUMMARY -> PAYMENT_METHOD_SELECT -> PAYMENT_DETAILS] -> RESULT

The bracketed steps only exist for paid events. Every step before RESULT can
go back to FORM, and close() drops the whole pending booking. Nothing here is
persisted: the backend is the only authority on seats, capacity and payment.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Protocol

from eventmate.api.errors import EventMateApiError
from eventmate.bookings.dtos import (
    BookingResult,
    BookingType,
    GroupEnrollRequest,
    SoloEnrollRequest,
)
from eventmate.bookings.read_model import BookingReadModel
from eventmate.bookings.write_model import BookingWriteModel
from eventmate.config.settings import settings
from eventmate.enrollment.attendee import AttendeeForm, parse_age
from eventmate.enrollment.errors import (
    EnrollmentValidationError,
    InvalidStepError,
    PaymentError,
    PromoCodeError,
)
from eventmate.enrollment.group import GroupInvitation
from eventmate.enrollment.notifier import LoggingNotifier, Notifier
from eventmate.enrollment.payment import MockPaymentProvider, PaymentMethod, PaymentProvider
from eventmate.enrollment.pricing import BillSummary
from eventmate.enrollment.seats import SeatSelection
from eventmate.events.dtos import Event, TicketTier
from eventmate.users.dtos import UserProfile, UserSummary

logger = logging.getLogger(__name__)


class EnrollmentStep(str, Enum):
    FORM = "form"
    BILL_SUMMARY = "bill_summary"
    PAYMENT_METHOD_SELECT = "payment_method_select"
    PAYMENT_DETAILS = "payment_details"
    RESULT = "result"
    CLOSED = "closed"


class FlowConfig(Protocol):
    frontend_url: str
    strict_age_parsing: bool
    minimum_attendee_age: int


class EnrollmentFlow:
    def __init__(
        self,
        event: Event,
        read_model: BookingReadModel,
        write_model: BookingWriteModel,
        notifier: Notifier | None = None,
        payment_provider: PaymentProvider | None = None,
        initial_group_code: str | None = None,
        config: FlowConfig = settings,
    ) -> None:
        self.event = event
        self._read_model = read_model
        self._write_model = write_model
        self._notifier = notifier or LoggingNotifier()
        self._payment_provider = payment_provider or MockPaymentProvider()
        self._config = config
        self._initial_group_code = initial_group_code
        self._reset()

    def _reset(self) -> None:
        default_tier = self.event.ticket_tiers[0].id if self.event.ticket_tiers else None
        self.step = EnrollmentStep.FORM
        self.booking_type = BookingType.SOLO
        self.form = AttendeeForm(
            group_code=self._initial_group_code or "",
            ticket_tier_id=default_tier,
        )
        self.current_user: UserProfile | None = None
        self.profile_loading = False
        self.invitation = GroupInvitation(self._read_model, self._notifier)
        self.selected_seat: int | None = None
        self.seat_selection: SeatSelection | None = None
        self.bill: BillSummary | None = None
        self.payment_method: PaymentMethod | None = None
        self.result: BookingResult | None = None
        self.submitting = False

    # -------------------------------------------------------------------------
    # State helpers
    # -------------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self.step == EnrollmentStep.CLOSED

    @property
    def selected_tier(self) -> TicketTier | None:
        return self.event.find_tier(self.form.ticket_tier_id)

    @property
    def invite_link(self) -> str | None:
        if self.result is None or self.booking_type != BookingType.GROUP:
            return None
        if not self.result.group_code:
            return None
        frontend_url = self._config.frontend_url.rstrip("/")
        return f"{frontend_url}/events/{self.event.event_id}?group={self.result.group_code}"

    def _require_step(self, operation: str, *steps: EnrollmentStep) -> None:
        if self.step not in steps:
            raise InvalidStepError(operation, self.step.value)

    # -------------------------------------------------------------------------
    # FORM
    # -------------------------------------------------------------------------

    async def open(self) -> UserProfile | None:
        """Load the attendee's profile and prefill the form with it."""
        self._require_step("load the profile", EnrollmentStep.FORM)
        self.profile_loading = True
        try:
            profile = await self._read_model.get_profile()
        except EventMateApiError as e:
            logger.warning("Could not load profile: %s", e)
            self._notifier.error("Failed to load profile")
            return None
        finally:
            self.profile_loading = False

        if self.closed:
            return None

        self.current_user = profile
        self.invitation.current_user_id = profile.user_id
        self.form.prefill(profile)
        self._warn_incomplete_profile()
        return profile

    def _warn_incomplete_profile(self) -> None:
        if self.booking_type != BookingType.SOLO or self.current_user is None:
            return
        missing = self.current_user.missing_fields()
        if missing:
            self._notifier.error(f"Please complete your profile: Missing {', '.join(missing)}")

    def set_booking_type(self, booking_type: BookingType | str) -> None:
        self._require_step("change the booking type", EnrollmentStep.FORM)
        self.booking_type = BookingType(booking_type)
        self._warn_incomplete_profile()

    def select_ticket_tier(self, tier_id: int) -> TicketTier:
        self._require_step("select a ticket", EnrollmentStep.FORM)
        tier = self.event.find_tier(tier_id)
        if tier is None:
            raise ValueError(f"Ticket tier {tier_id} does not belong to event {self.event.event_id}")
        self.form.ticket_tier_id = tier.id
        return tier

    async def open_seat_selection(self) -> SeatSelection | None:
        """Fetch the booked seats once and hand out a seat picker built on them."""
        self._require_step("choose a seat", EnrollmentStep.FORM)
        if not self.event.is_onsite:
            logger.warning("Event %s has no seating", self.event.event_id)
            return None

        try:
            booked_seats = await self._read_model.get_booked_seats(self.event.event_id)
        except EventMateApiError as e:
            logger.warning("Could not load booked seats for event %s: %s", self.event.event_id, e)
            self._notifier.error("Failed to load seat availability")
            return None

        if self.closed:
            return None

        self.seat_selection = SeatSelection(
            total_capacity=self.event.total_capacity,
            booked_seats=booked_seats,
            on_confirm=self._seat_confirmed,
            on_close=self._seat_selection_closed,
        )
        return self.seat_selection

    def _seat_confirmed(self, seat_number: int) -> None:
        if self.closed:
            logger.debug("Ignoring seat %s picked after close", seat_number)
            return
        self.selected_seat = seat_number
        self.seat_selection = None
        self._notifier.success(f"Seat {seat_number} selected!")

    def _seat_selection_closed(self) -> None:
        self.seat_selection = None

    def clear_seat(self) -> None:
        self._require_step("change the seat", EnrollmentStep.FORM)
        self.selected_seat = None

    async def search_members(self, query: str) -> list[UserSummary]:
        self._require_step("search for members", EnrollmentStep.FORM)
        return await self.invitation.search(query)

    def add_member(self, user: UserSummary) -> None:
        self._require_step("add a member", EnrollmentStep.FORM)
        self.invitation.add(user)

    def remove_member(self, user_id: int) -> None:
        self._require_step("remove a member", EnrollmentStep.FORM)
        self.invitation.remove(user_id)

    def validate(self) -> int:
        """Check the form before anything is sent. Returns the attendee's age.

        Raises:
            EnrollmentValidationError: With the first problem found.
        """
        if self.event.ticket_tiers and self.selected_tier is None:
            raise EnrollmentValidationError("Please select a ticket type")

        if self.event.is_onsite and self.selected_seat is None:
            raise EnrollmentValidationError("Please select a seat first")

        if self.booking_type == BookingType.SOLO:
            missing = self.form.missing_profile_fields()
            if missing:
                raise EnrollmentValidationError(
                    f"Please complete your profile: Missing {', '.join(missing)}"
                )

        if not self.form.consent:
            raise EnrollmentValidationError("You must agree to the terms")

        age = parse_age(self.form.attendee_age, strict=self._config.strict_age_parsing)
        if age < self._config.minimum_attendee_age:
            raise EnrollmentValidationError(
                f"Attendees must be at least {self._config.minimum_attendee_age} years old"
            )
        return age

    async def submit(self) -> BookingResult | None:
        """Submit the form: free events enroll right away, paid ones go to the bill."""
        self._require_step("submit the form", EnrollmentStep.FORM)
        try:
            self.validate()
        except EnrollmentValidationError as e:
            self._notifier.error(e.message)
            return None

        if self.event.is_paid:
            self.bill = BillSummary.for_booking(self.event, self.selected_tier)
            self.step = EnrollmentStep.BILL_SUMMARY
            logger.debug("Bill for event %s: %s", self.event.event_id, self.bill.base_price)
            return None

        return await self.process_enrollment()

    # -------------------------------------------------------------------------
    # BILL_SUMMARY and payment
    # -------------------------------------------------------------------------

    def apply_promo(self, code: str) -> bool:
        self._require_step("apply a promo code", EnrollmentStep.BILL_SUMMARY)
        try:
            percentage = self.bill.apply_promo(code, self.event)
        except PromoCodeError as e:
            self._notifier.error(e.message)
            return False
        self._notifier.success(f"Promo code applied! {_format_percentage(percentage)}% Discount")
        return True

    def proceed_to_payment(self) -> None:
        self._require_step("proceed to payment", EnrollmentStep.BILL_SUMMARY)
        self.step = EnrollmentStep.PAYMENT_METHOD_SELECT

    def choose_payment_method(self, method: PaymentMethod | str) -> None:
        self._require_step("choose a payment method", EnrollmentStep.PAYMENT_METHOD_SELECT)
        self.payment_method = PaymentMethod(method)
        self.step = EnrollmentStep.PAYMENT_DETAILS

    def back_to_payment_methods(self) -> None:
        self._require_step("change the payment method", EnrollmentStep.PAYMENT_DETAILS)
        self.payment_method = None
        self.step = EnrollmentStep.PAYMENT_METHOD_SELECT

    async def confirm_payment(self) -> BookingResult | None:
        self._require_step("confirm the payment", EnrollmentStep.PAYMENT_DETAILS)
        try:
            await self._payment_provider.confirm(self.payment_method, self.bill.final_amount)
        except PaymentError as e:
            self._notifier.error(e.message)
            return None
        return await self.process_enrollment()

    def back(self) -> None:
        """Return to the form, keeping what was filled in."""
        self._require_step(
            "go back",
            EnrollmentStep.FORM,
            EnrollmentStep.BILL_SUMMARY,
            EnrollmentStep.PAYMENT_METHOD_SELECT,
            EnrollmentStep.PAYMENT_DETAILS,
        )
        self.bill = None
        self.payment_method = None
        self.step = EnrollmentStep.FORM

    def close(self) -> None:
        """Drop the pending booking. Requests still in flight are ignored when they land."""
        logger.debug("Closing enrollment for event %s on step %s", self.event.event_id, self.step)
        self._reset()
        self.step = EnrollmentStep.CLOSED

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def build_request(self) -> SoloEnrollRequest | GroupEnrollRequest:
        form = self.form
        fields = dict(
            event_id=self.event.event_id,
            ticket_type_id=form.ticket_tier_id,
            ticket_tier_id=form.ticket_tier_id,
            attendee_name=form.attendee_name or None,
            contact_number=form.contact_number or None,
            attendee_age=parse_age(form.attendee_age, strict=self._config.strict_age_parsing),
            company_name=form.company_name or None,
            job_title=form.job_title or None,
            dietary_restrictions=form.dietary_restrictions or None,
            accessibility_needs=form.accessibility_needs or None,
            seat_number=self.selected_seat,
            group_code=form.group_code or None,
        )
        if self.booking_type == BookingType.GROUP:
            return GroupEnrollRequest(**fields, invited_users=self.invitation.emails)
        return SoloEnrollRequest(**fields)

    async def process_enrollment(self) -> BookingResult | None:
        """Send the booking, once. Failures leave everything as it was."""
        self._require_step("enroll", EnrollmentStep.FORM, EnrollmentStep.PAYMENT_DETAILS)
        if self.step == EnrollmentStep.FORM and self.event.is_paid:
            raise InvalidStepError("enroll without paying", self.step.value)
        if self.submitting:
            return None

        try:
            self.validate()
            request = self.build_request()
        except EnrollmentValidationError as e:
            self._notifier.error(e.message)
            return None

        self.submitting = True
        try:
            result = await self._write_model.enroll(request)
        except EventMateApiError as e:
            if not self.closed:
                self._notifier.error(e.message or "Enrollment failed")
            return None
        finally:
            self.submitting = False

        if self.closed:
            logger.info(
                "Enrollment for event %s completed after close, ticket %s",
                self.event.event_id,
                result.ticket_code,
            )
            return None

        self.result = result
        self.step = EnrollmentStep.RESULT
        self._notifier.success("Enrollment Successful!")
        return result


def _format_percentage(percentage: Decimal) -> str:
    if percentage == percentage.to_integral_value():
        return str(int(percentage))
    return str(percentage)
