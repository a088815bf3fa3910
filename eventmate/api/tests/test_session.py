from dataclasses import dataclass

from eventmate.session import Session
from eventmate.users.dtos import UserProfile


@dataclass
class StubConfig:
    api_token: str


def test_session_from_settings():
    assert Session.from_settings(StubConfig(api_token="tok")).token == "tok"
    assert Session.from_settings(StubConfig(api_token="")).token is None


def test_login_and_clear():
    session = Session()
    user = UserProfile(user_id=1, email="asha@example.com")

    session.login("tok", user)
    assert session.is_authenticated
    assert session.auth_headers() == {"Authorization": "Bearer tok"}
    assert session.user == user

    session.clear()
    assert not session.is_authenticated
    assert session.user is None
    assert session.auth_headers() == {}
