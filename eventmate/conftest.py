"""Shared fixtures: an in-process fake of the EventMate backend.

The real EventMateClient talks to a small FastAPI app through
httpx.ASGITransport, so the HTTP layer is exercised without a server.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Any

import httpx
import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from eventmate.api.client import EventMateClient
from eventmate.session import Session

TEST_TOKEN = "test-token"
TEST_API_BASE_URL = "http://testserver/api"


@dataclass
class ClientTestConfig:
    api_base_url: str = TEST_API_BASE_URL
    request_timeout_seconds: float = 5.0


@dataclass
class FakeBackend:
    """State behind the fake API. Tests seed it and inspect what was sent."""

    events: dict[int, dict] = field(default_factory=dict)
    ticket_types: dict[int, list[dict]] = field(default_factory=dict)
    booked_seats: dict[int, list[int]] = field(default_factory=dict)
    users: list[dict] = field(default_factory=list)
    profile: dict = field(
        default_factory=lambda: {
            "userId": 1,
            "fullName": "Asha Rao",
            "email": "asha@example.com",
            "phoneNumber": "+91 90000 00001",
            "companyName": "Acme",
        }
    )
    enrolled: set[int] = field(default_factory=set)
    enroll_requests: list[dict] = field(default_factory=list)
    search_queries: list[str] = field(default_factory=list)
    enroll_error: tuple[int, dict] | None = None
    token: str = TEST_TOKEN
    ticket_code: str = "TKT-0001"
    group_code: str = "GRP-0001"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_fake_backend_app(backend: FakeBackend) -> FastAPI:
    app = FastAPI()
    router = APIRouter(prefix="/api")

    def authorized(request: Request) -> bool:
        return request.headers.get("Authorization") == f"Bearer {backend.token}"

    @router.get("/events/{event_id}")
    async def get_event(event_id: int, request: Request):
        if event_id not in backend.events:
            return _error(404, "Event not found")
        return backend.events[event_id]

    @router.get("/ticket-types/event/{event_id}")
    async def get_ticket_types(event_id: int):
        if event_id not in backend.ticket_types:
            return _error(404, "No ticket types")
        return backend.ticket_types[event_id]

    @router.get("/bookings/event/{event_id}/seats")
    async def get_booked_seats(event_id: int, request: Request):
        if not authorized(request):
            return _error(401, "Unauthorized")
        return backend.booked_seats.get(event_id, [])

    @router.get("/bookings/event/{event_id}/check")
    async def check_enrollment(event_id: int, request: Request):
        if not authorized(request):
            return _error(401, "Unauthorized")
        return {"isEnrolled": event_id in backend.enrolled}

    @router.get("/user/profile")
    async def get_profile(request: Request):
        if not authorized(request):
            return _error(401, "Unauthorized")
        return backend.profile

    @router.get("/user/search")
    async def search_users(query: str, request: Request):
        if not authorized(request):
            return _error(401, "Unauthorized")
        backend.search_queries.append(query)
        needle = query.lower()
        return [
            user
            for user in backend.users
            if needle in (user.get("fullName") or "").lower() or needle in user["email"].lower()
        ]

    @router.post("/bookings/enroll")
    async def enroll(request: Request):
        if not authorized(request):
            return _error(401, "Unauthorized")
        payload: dict[str, Any] = await request.json()
        backend.enroll_requests.append(payload)

        if backend.enroll_error is not None:
            status_code, body = backend.enroll_error
            return JSONResponse(status_code=status_code, content=body)

        event_id = payload["eventId"]
        if event_id in backend.enrolled:
            return _error(409, "Already enrolled in this event")
        seat = payload.get("seatNumber")
        seats = backend.booked_seats.setdefault(event_id, [])
        if seat is not None and seat in seats:
            return _error(409, f"Seat {seat} is already booked")
        if seat is not None:
            seats.append(seat)
        backend.enrolled.add(event_id)

        return {
            "bookingId": len(backend.enroll_requests),
            "ticketCode": backend.ticket_code,
            "groupCode": backend.group_code if payload["bookingType"] == "GROUP" else None,
            "bookingType": payload["bookingType"],
            "status": "CONFIRMED",
            "seatNumber": seat,
        }

    app.include_router(router)
    return app


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session() -> Session:
    return Session(token=TEST_TOKEN)


@pytest.fixture
def api_client(backend: FakeBackend, session: Session) -> EventMateClient:
    transport = httpx.ASGITransport(app=create_fake_backend_app(backend))
    return EventMateClient(
        session=session,
        http_client_class=partial(httpx.AsyncClient, transport=transport),
        config=ClientTestConfig(),
    )
