from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Backend
    api_base_url: str = "http://localhost:8080/api"
    api_token: str = ""
    request_timeout_seconds: float = 10.0

    # Used to build shareable group invite links
    frontend_url: str = "http://localhost:5173"

    # Enrollment
    strict_age_parsing: bool = False
    minimum_attendee_age: int = 18

    debug: bool = False

    ENVIRONMENT: str = "Production"

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    class Config:
        env_prefix = "EVENTMATE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
