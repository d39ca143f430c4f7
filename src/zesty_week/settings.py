from __future__ import annotations

import calendar
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from zesty_week import __version__

ZESTY_ENDPOINT = "https://api.zesty.com/client_portal_api"
USER_AGENT = f"zesty-week/{__version__} (+terminal client)"
TIMEOUT = 20                 # seconds per request
RETRY_ATTEMPTS = 3
RETRY_WAIT_SECONDS = 2

# palette
YELLOW = "#FFFFA5"
GREEN = "#69FF94"
BLUE = "#D6ACFF"
RED = "#ffb3ba"

WEEK_STARTS = {
    "monday": calendar.MONDAY,
    "sunday": calendar.SUNDAY,
}

MISSING_CLIENT_ID = 'Please set environment variable "ZESTY_ID" as your Zesty client id first.'


class ConfigError(ValueError):
    pass


class Settings(BaseModel):
    client_id: str
    endpoint: str = Field(default=ZESTY_ENDPOINT)
    timeout: float = Field(default=TIMEOUT, gt=0)
    first_weekday: int = Field(default=calendar.MONDAY, ge=0, le=6)

    @field_validator("client_id")
    @classmethod
    def _client_id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("client id must not be blank")
        return value

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def parse_week_start(name: str) -> int:
    """Map 'monday' / 'sunday' to a weekday number (Monday=0)."""
    try:
        return WEEK_STARTS[name.strip().lower()]
    except KeyError:
        choices = ", ".join(WEEK_STARTS)
        raise ConfigError(f"Unknown week start {name!r}; expected one of: {choices}") from None


def load_settings(
    client_id: Optional[str] = None,
    week_start: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build Settings from explicit arguments, falling back to the environment.

    A ``.env`` file in the working directory is loaded first, so ``ZESTY_ID``
    can live there instead of the shell profile.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    client_id = client_id or env.get("ZESTY_ID")
    if not client_id or not client_id.strip():
        raise ConfigError(MISSING_CLIENT_ID)

    week_start = week_start or env.get("ZESTY_WEEK_START") or "monday"
    values = {
        "client_id": client_id,
        "endpoint": env.get("ZESTY_ENDPOINT") or ZESTY_ENDPOINT,
        "first_weekday": parse_week_start(week_start),
    }
    if env.get("ZESTY_TIMEOUT"):
        values["timeout"] = env["ZESTY_TIMEOUT"]

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
