import logging

from eventmate.api.errors import EventMateApiError
from eventmate.bookings.read_model import BookingReadModel
from eventmate.enrollment.notifier import Notifier
from eventmate.users.dtos import UserSummary

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


class GroupInvitation:
    """Members the organizer of a group booking is inviting.

    The member list only lives here until the booking is submitted, where it
    is sent as a list of email addresses.
    """

    def __init__(
        self,
        read_model: BookingReadModel,
        notifier: Notifier,
        current_user_id: int | None = None,
    ) -> None:
        self._read_model = read_model
        self._notifier = notifier
        self.current_user_id = current_user_id
        self.query = ""
        self.results: list[UserSummary] = []
        self.members: list[UserSummary] = []
        self.searching = False

    @property
    def emails(self) -> list[str]:
        return [member.email for member in self.members]

    def is_invited(self, user_id: int) -> bool:
        return any(member.user_id == user_id for member in self.members)

    async def search(self, query: str) -> list[UserSummary]:
        """Run the search for the current input, called on every keystroke."""
        self.query = query
        if len(query) < MIN_SEARCH_LENGTH:
            self.results = []
            return self.results

        self.searching = True
        try:
            users = await self._read_model.search_users(query)
        except EventMateApiError as e:
            logger.warning("User search for %r failed: %s", query, e.message)
            if query == self.query:
                self._notifier.error("User search failed")
            return self.results
        finally:
            self.searching = False

        if query != self.query:
            # a newer keystroke already replaced this query
            return self.results

        self.results = [
            user
            for user in users
            if user.user_id != self.current_user_id and not self.is_invited(user.user_id)
        ]
        return self.results

    def add(self, user: UserSummary) -> None:
        if not self.is_invited(user.user_id):
            self.members.append(user)
        self.results = []
        self.query = ""
        self._notifier.success(f"{user.display_name} added to group")

    def remove(self, user_id: int) -> None:
        self.members = [member for member in self.members if member.user_id != user_id]
