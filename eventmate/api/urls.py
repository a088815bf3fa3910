EVENT_URL = "/events/{event_id}"
EVENT_TICKET_TYPES_URL = "/ticket-types/event/{event_id}"

BOOKED_SEATS_URL = "/bookings/event/{event_id}/seats"
CHECK_ENROLLMENT_URL = "/bookings/event/{event_id}/check"
ENROLL_URL = "/bookings/enroll"

USER_PROFILE_URL = "/user/profile"
USER_SEARCH_URL = "/user/search"
