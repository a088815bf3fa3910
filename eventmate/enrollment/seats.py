import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

SEATS_PER_FLOOR = 100


class SeatState(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    SELECTED = "selected"


@dataclass(frozen=True)
class Seat:
    number: int
    state: SeatState

    @property
    def is_selectable(self) -> bool:
        return self.state != SeatState.BOOKED


class SeatSelection:
    """Seat picker for one venue, paged into floors of 100 seats.

    Works on the snapshot of booked seats it is given. It never talks to the
    backend, so the snapshot can go stale while the picker is open.
    """

    def __init__(
        self,
        total_capacity: int,
        booked_seats: Iterable[int],
        on_confirm: Callable[[int], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.total_capacity = max(total_capacity, 0)
        self.booked_seats = frozenset(booked_seats)
        self.current_floor = 1
        self.selected_seat: int | None = None
        self._on_confirm = on_confirm
        self._on_close = on_close

    @property
    def total_floors(self) -> int:
        return math.ceil(self.total_capacity / SEATS_PER_FLOOR)

    def floor_range(self, floor: int | None = None) -> range:
        floor = self.current_floor if floor is None else floor
        start = (floor - 1) * SEATS_PER_FLOOR + 1
        end = min(floor * SEATS_PER_FLOOR, self.total_capacity)
        return range(start, end + 1)

    def seat_state(self, number: int) -> SeatState:
        if number in self.booked_seats:
            return SeatState.BOOKED
        if number == self.selected_seat:
            return SeatState.SELECTED
        return SeatState.AVAILABLE

    def seats_on_floor(self, floor: int | None = None) -> list[Seat]:
        return [Seat(number, self.seat_state(number)) for number in self.floor_range(floor)]

    def click(self, number: int) -> int | None:
        """Toggle ``number`` and return the resulting selection."""
        if not 1 <= number <= self.total_capacity:
            raise ValueError(f"Seat {number} does not exist (capacity {self.total_capacity})")
        if number in self.booked_seats:
            return self.selected_seat
        self.selected_seat = None if number == self.selected_seat else number
        return self.selected_seat

    def next_floor(self) -> int:
        if self.current_floor < self.total_floors:
            self.current_floor += 1
        return self.current_floor

    def previous_floor(self) -> int:
        if self.current_floor > 1:
            self.current_floor -= 1
        return self.current_floor

    def confirm(self) -> int | None:
        if self.selected_seat is None:
            return None
        if self._on_confirm is not None:
            self._on_confirm(self.selected_seat)
        return self.selected_seat

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
