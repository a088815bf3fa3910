class EventMateApiError(Exception):
    """Raised when a backend call fails, either with an HTTP error or on the network.

    ``message`` is the backend's own human readable message, or None when the
    response carried none (or there was no response at all).
    """

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"EventMate API request failed (status {status_code})")

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401
