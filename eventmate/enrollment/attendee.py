import re
from dataclasses import dataclass

from eventmate.enrollment.errors import EnrollmentValidationError
from eventmate.users.dtos import UserProfile

DEFAULT_ATTENDEE_AGE = 18

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass
class AttendeeForm:
    """The fields the attendee fills in before submitting."""

    attendee_name: str = ""
    contact_number: str = ""
    attendee_age: str = ""
    company_name: str = ""
    job_title: str = ""
    dietary_restrictions: str = ""
    accessibility_needs: str = ""
    group_code: str = ""
    ticket_tier_id: int | None = None
    consent: bool = False

    def prefill(self, profile: UserProfile) -> None:
        self.attendee_name = profile.full_name or ""
        self.contact_number = profile.phone_number or ""
        self.company_name = profile.company_name or ""
        self.job_title = profile.job_title or ""

    def missing_profile_fields(self) -> list[str]:
        missing = []
        if not self.attendee_name.strip():
            missing.append("Full Name")
        if not self.contact_number.strip():
            missing.append("Contact Number")
        return missing


def parse_age(raw: str | int | None, strict: bool = False) -> int:
    """Read the leading integer of the age input.

    Input without one falls back to DEFAULT_ATTENDEE_AGE, unless ``strict``
    is set, in which case it is rejected.
    """
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw or "")
    if match:
        return int(match.group(1))
    if strict:
        raise EnrollmentValidationError("Please enter a valid age")
    return DEFAULT_ATTENDEE_AGE
