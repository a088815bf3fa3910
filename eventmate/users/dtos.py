from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserSummary(BaseModel):
    """A user returned by the member search, i.e. a candidate group member."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    user_id: int = Field(validation_alias=AliasChoices("userId", "id"))
    email: str
    full_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


class UserProfile(UserSummary):
    """Profile of the signed in attendee, used to prefill solo bookings."""

    phone_number: str | None = None
    company_name: str | None = None
    job_title: str | None = None

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.full_name:
            missing.append("Full Name")
        if not self.phone_number:
            missing.append("Contact Number")
        return missing
