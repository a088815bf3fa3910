"""Explicit session state for API calls.

A single Session is created by the caller and handed to every collaborator
that needs the bearer token or the signed in user. Nothing reads credentials
from ambient globals.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from eventmate.users.dtos import UserProfile

logger = logging.getLogger(__name__)


class SessionConfig(Protocol):
    api_token: str


@dataclass
class Session:
    token: str | None = None
    user: UserProfile | None = None

    @classmethod
    def from_settings(cls, config: SessionConfig) -> "Session":
        return cls(token=config.api_token or None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, token: str, user: UserProfile | None = None) -> None:
        self.token = token
        self.user = user

    def set_user(self, user: UserProfile) -> None:
        self.user = user

    def clear(self) -> None:
        if self.token:
            logger.info("Clearing session")
        self.token = None
        self.user = None

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
