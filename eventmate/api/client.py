import logging
from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from eventmate.api.errors import EventMateApiError
from eventmate.config.settings import settings
from eventmate.session import Session

logger = logging.getLogger(__name__)


class ClientConfig(Protocol):
    api_base_url: str
    request_timeout_seconds: float


class EventMateClient:
    """Thin JSON client for the EventMate REST API.

    Every call is a single attempt. Failures are turned into
    EventMateApiError carrying the backend's human readable message.
    """

    def __init__(
        self,
        session: Session,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        config: ClientConfig = settings,
    ):
        self._session = session
        self._http_client_class = http_client_class
        self._config = config

    @property
    def session(self) -> Session:
        return self._session

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self._request("POST", path, json=json)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        async with self._http_client_class(
            base_url=self._config.api_base_url.rstrip("/"),
            timeout=self._config.request_timeout_seconds,
        ) as client:
            try:
                response = await client.request(
                    method,
                    path,
                    headers={
                        "Content-Type": "application/json",
                        **self._session.auth_headers(),
                    },
                    **kwargs,
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning("API call failed: %s %s -> %s", method, path, status_code)
                if status_code == 401:
                    self._session.clear()
                raise EventMateApiError(
                    _error_message(e.response), status_code=status_code
                ) from e
            except httpx.RequestError as e:
                logger.warning("API call failed: %s %s -> %s", method, path, e)
                raise EventMateApiError() from e

            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                logger.warning(
                    "API call returned no JSON: %s %s -> %s", method, path, response.status_code
                )
                raise EventMateApiError(status_code=response.status_code) from e


def _error_message(response: httpx.Response) -> str | None:
    """Pull the user facing message out of an error payload."""
    try:
        payload = response.json()
    except ValueError:
        return None

    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def validate_response(response_type: Any, data: Any) -> Any:
    """Validate a decoded body, treating a malformed one like a failed call."""
    try:
        return TypeAdapter(response_type).validate_python(data)
    except ValidationError as e:
        logger.warning("Unexpected API response (%s errors): %s", e.error_count(), e)
        raise EventMateApiError() from e
