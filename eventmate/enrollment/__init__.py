from eventmate.api.client import EventMateClient
from eventmate.bookings.read_model import HttpBookingReadModel
from eventmate.bookings.write_model import HttpBookingWriteModel
from eventmate.config.settings import settings
from eventmate.enrollment.flow import EnrollmentFlow, EnrollmentStep
from eventmate.enrollment.notifier import LoggingNotifier, Notifier
from eventmate.enrollment.payment import MockPaymentProvider, PaymentMethod, PaymentProvider
from eventmate.enrollment.seats import SEATS_PER_FLOOR, SeatSelection, SeatState
from eventmate.events.dtos import Event
from eventmate.session import Session


def get_client(session: Session | None = None) -> EventMateClient:
    return EventMateClient(session=session or Session.from_settings(settings))


def get_enrollment_flow(
    event: Event,
    client: EventMateClient,
    notifier: Notifier | None = None,
    payment_provider: PaymentProvider | None = None,
    initial_group_code: str | None = None,
) -> EnrollmentFlow:
    return EnrollmentFlow(
        event=event,
        read_model=HttpBookingReadModel(client),
        write_model=HttpBookingWriteModel(client),
        notifier=notifier,
        payment_provider=payment_provider,
        initial_group_code=initial_group_code,
    )


__all__ = [
    "EnrollmentFlow",
    "EnrollmentStep",
    "LoggingNotifier",
    "MockPaymentProvider",
    "Notifier",
    "PaymentMethod",
    "PaymentProvider",
    "SEATS_PER_FLOOR",
    "SeatSelection",
    "SeatState",
    "get_client",
    "get_enrollment_flow",
]
