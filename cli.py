"""CLI commands for enrolling in EventMate events."""

import asyncio

import sentry_sdk
import typer

from eventmate.api.errors import EventMateApiError
from eventmate.bookings.dtos import BookingType
from eventmate.bookings.read_model import HttpBookingReadModel
from eventmate.config.logging import setup_logging
from eventmate.config.settings import settings
from eventmate.enrollment import (
    EnrollmentFlow,
    EnrollmentStep,
    Notifier,
    PaymentMethod,
    SeatSelection,
    SeatState,
    get_client,
    get_enrollment_flow,
)
from eventmate.events.read_model import HttpEventReadModel

app = typer.Typer(help="CLI commands for enrolling in EventMate events")

SEATS_PER_ROW = 10

SEAT_COLORS = {
    SeatState.AVAILABLE: typer.colors.GREEN,
    SeatState.BOOKED: typer.colors.RED,
    SeatState.SELECTED: typer.colors.BLUE,
}


class TyperNotifier(Notifier):
    """Prints notifications to the terminal."""

    def success(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.GREEN)

    def error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, err=True)


@app.callback()
def main() -> None:
    setup_logging()
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            send_default_pii=False,
        )


def render_floor(selection: SeatSelection) -> None:
    typer.secho(
        f"Floor {selection.current_floor} of {selection.total_floors}",
        fg=typer.colors.MAGENTA,
    )
    seats = selection.seats_on_floor()
    for start in range(0, len(seats), SEATS_PER_ROW):
        row = seats[start : start + SEATS_PER_ROW]
        typer.echo(
            " ".join(
                typer.style(
                    f"{seat.number:>4}" if seat.state != SeatState.BOOKED else "  --",
                    fg=SEAT_COLORS[seat.state],
                )
                for seat in row
            )
        )


def _choose_ticket_tier(flow: EnrollmentFlow) -> None:
    tiers = flow.event.ticket_tiers
    if not tiers:
        return
    typer.secho("Tickets:", fg=typer.colors.GREEN)
    for index, tier in enumerate(tiers, start=1):
        price = "Free" if tier.price == 0 else f"{tier.price:.2f}"
        typer.secho(f"  {index}. {tier.name} ({price})", fg=typer.colors.BLUE)
    choice = typer.prompt("Ticket", default=1, type=int)
    if not 1 <= choice <= len(tiers):
        raise typer.BadParameter(f"Choose a ticket between 1 and {len(tiers)}")
    flow.select_ticket_tier(tiers[choice - 1].id)


async def _choose_seat(flow: EnrollmentFlow) -> None:
    selection = await flow.open_seat_selection()
    if selection is None:
        return

    while flow.seat_selection is not None:
        render_floor(selection)
        answer = typer.prompt(
            "Seat number, [n]ext / [p]revious floor, [c]onfirm or [q]uit", default="c"
        ).strip().lower()
        if answer == "n":
            selection.next_floor()
        elif answer == "p":
            selection.previous_floor()
        elif answer == "c":
            if selection.confirm() is None:
                typer.secho("Pick a seat first", fg=typer.colors.YELLOW)
        elif answer == "q":
            selection.close()
        elif answer.isdigit():
            try:
                selection.click(int(answer))
            except ValueError as e:
                typer.secho(str(e), fg=typer.colors.RED)
        else:
            typer.secho(f"Unknown option: {answer}", fg=typer.colors.YELLOW)


async def _invite_members(flow: EnrollmentFlow) -> None:
    typer.secho("Invite members (leave empty to finish)", fg=typer.colors.GREEN)
    while True:
        query = typer.prompt("Search by name or email", default="", show_default=False)
        if not query:
            return
        results = await flow.search_members(query)
        if not results:
            typer.secho("  No users found", fg=typer.colors.YELLOW)
            continue
        for index, user in enumerate(results, start=1):
            typer.secho(f"  {index}. {user.display_name} <{user.email}>", fg=typer.colors.BLUE)
        choice = typer.prompt("Add member #", default=0, type=int)
        if 1 <= choice <= len(results):
            flow.add_member(results[choice - 1])


def _fill_form(flow: EnrollmentFlow) -> None:
    form = flow.form
    form.attendee_name = typer.prompt("Full name", default=form.attendee_name or "")
    form.contact_number = typer.prompt("Contact number", default=form.contact_number or "")
    form.attendee_age = typer.prompt("Age", default=form.attendee_age or "")
    form.company_name = typer.prompt("Company", default=form.company_name, show_default=False)
    form.job_title = typer.prompt("Job title", default=form.job_title, show_default=False)
    form.dietary_restrictions = typer.prompt(
        "Dietary restrictions", default="", show_default=False
    )
    form.accessibility_needs = typer.prompt("Accessibility needs", default="", show_default=False)
    form.consent = typer.confirm("I agree to the terms and conditions", default=False)


async def _pay(flow: EnrollmentFlow) -> None:
    bill = flow.bill
    typer.secho(f"Ticket ({bill.ticket_name}): {bill.base_price:.2f}", fg=typer.colors.BLUE)

    code = typer.prompt("Promo code", default="", show_default=False)
    if code:
        flow.apply_promo(code)
    if bill.discount_applied:
        typer.secho(f"Discount ({bill.promo_code}): -{bill.discount:.2f}", fg=typer.colors.GREEN)
    typer.secho(f"Total payable: {bill.final_amount:.2f}", fg=typer.colors.CYAN)

    if not typer.confirm("Proceed to payment?", default=True):
        flow.back()
        return
    flow.proceed_to_payment()

    method = typer.prompt(
        "Payment method",
        default=PaymentMethod.CARD.value,
        type=typer.Choice([method.value for method in PaymentMethod]),
    )
    flow.choose_payment_method(method)
    if typer.confirm("I have made the payment", default=True):
        await flow.confirm_payment()
    else:
        flow.back()


@app.command()
def enroll(
    event_id: int = typer.Argument(
        ...,
        help="Event ID",
    ),
    booking_type: BookingType = typer.Option(
        BookingType.SOLO,
        "--booking-type",
        "-b",
        help="SOLO or GROUP booking",
    ),
    group_code: str = typer.Option(
        None,
        "--group",
        "-g",
        help="Group code from an invite link",
    ),
):
    """Enroll in an event interactively."""

    async def _enroll():
        client = get_client()
        if not client.session.is_authenticated:
            raise ValueError("Not signed in: set EVENTMATE_API_TOKEN")

        event = await HttpEventReadModel(client).get_event(event_id)
        if await HttpBookingReadModel(client).is_enrolled(event_id):
            raise ValueError(f"You are already enrolled in {event.title}")

        flow = get_enrollment_flow(
            event, client, notifier=TyperNotifier(), initial_group_code=group_code
        )
        typer.secho(f"Enrolling in {event.title}", fg=typer.colors.GREEN)
        if group_code:
            typer.secho(f"  Joining group: {group_code}", fg=typer.colors.MAGENTA)

        await flow.open()
        flow.set_booking_type(booking_type)

        while flow.step != EnrollmentStep.RESULT:
            if flow.step != EnrollmentStep.FORM:
                flow.back()
            _choose_ticket_tier(flow)
            if event.is_onsite and flow.selected_seat is None:
                await _choose_seat(flow)
            if flow.booking_type == BookingType.GROUP:
                await _invite_members(flow)
            _fill_form(flow)

            await flow.submit()
            if flow.step == EnrollmentStep.BILL_SUMMARY:
                await _pay(flow)

            if flow.step != EnrollmentStep.RESULT and not typer.confirm("Try again?", default=True):
                flow.close()
                return flow
        return flow

    try:
        flow = asyncio.run(_enroll())
    except (ValueError, EventMateApiError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    if flow.result is None:
        typer.secho("Enrollment cancelled", fg=typer.colors.YELLOW)
        raise typer.Exit(1)

    typer.echo()
    typer.secho(f"  Ticket code: {flow.result.ticket_code}", fg=typer.colors.CYAN)
    if flow.selected_seat is not None:
        typer.secho(f"  Seat: {flow.selected_seat}", fg=typer.colors.BLUE)
    if flow.invite_link:
        typer.secho(f"  Group code: {flow.result.group_code}", fg=typer.colors.MAGENTA)
        typer.secho(f"  Invite link: {flow.invite_link}", fg=typer.colors.MAGENTA)


@app.command()
def seats(
    event_id: int = typer.Argument(
        ...,
        help="Event ID",
    ),
    floor: int = typer.Option(
        1,
        "--floor",
        "-f",
        help="Floor to show (100 seats per floor)",
    ),
):
    """Show seat availability for an onsite event."""

    async def _seats():
        client = get_client()
        event = await HttpEventReadModel(client).get_event(event_id)
        booked = await HttpBookingReadModel(client).get_booked_seats(event_id)
        return SeatSelection(event.total_capacity, booked)

    try:
        selection = asyncio.run(_seats())
    except EventMateApiError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    if not 1 <= floor <= max(selection.total_floors, 1):
        typer.secho(f"Floor must be between 1 and {selection.total_floors}", fg=typer.colors.RED)
        raise typer.Exit(1)
    selection.current_floor = floor
    render_floor(selection)
    typer.secho(
        f"{len(selection.booked_seats)} of {selection.total_capacity} seats booked",
        fg=typer.colors.CYAN,
    )


@app.command()
def check(
    event_id: int = typer.Argument(
        ...,
        help="Event ID",
    ),
):
    """Show whether you are already enrolled in an event."""
    try:
        enrolled = asyncio.run(HttpBookingReadModel(get_client()).is_enrolled(event_id))
    except EventMateApiError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    if enrolled:
        typer.secho(f"Enrolled in event {event_id}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"Not enrolled in event {event_id}", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
