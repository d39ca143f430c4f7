from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from zesty_week.models import ClientResponse, DeliveryRecord, MealsResponse
from zesty_week.schedule import ScheduleIndex
from zesty_week.settings import RETRY_ATTEMPTS, RETRY_WAIT_SECONDS, USER_AGENT, Settings

log = logging.getLogger("zesty_week.fetch")

HEADERS = {"User-Agent": USER_AGENT, "Accept": "application/json"}


class FetchError(RuntimeError):
    pass


@dataclass(frozen=True)
class Schedule:
    client_name: str
    index: ScheduleIndex


class ZestyClient:
    """Client-portal API calls for a single Zesty client."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def url(self, path: str) -> str:
        return f"{self.settings.endpoint}/{path.lstrip('/')}"

    @retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_fixed(RETRY_WAIT_SECONDS),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self.url(path)
        log.debug("GET %s params=%s", url, params)
        resp = self.session.get(url, params=params, timeout=self.settings.timeout)
        resp.raise_for_status()
        return resp.json()

    def fetch_meals(self) -> List[DeliveryRecord]:
        data = self.get_json("meals", params={"client_id": self.settings.client_id})
        meals = MealsResponse.model_validate(data).meals
        log.info("Fetched %d meals for client %s", len(meals), self.settings.client_id)
        return [m.to_record() for m in meals]

    def fetch_client(self) -> str:
        data = self.get_json(f"clients/{self.settings.client_id}")
        return ClientResponse.model_validate(data).client.name

    def load_schedule(self) -> Schedule:
        """Fetch meals and client info; any failure surfaces as FetchError."""
        try:
            records = self.fetch_meals()
            client_name = self.fetch_client()
        except requests.RequestException as e:
            raise FetchError(f"Request to Zesty failed: {e}") from e
        except ValidationError as e:
            raise FetchError(f"Unexpected payload from Zesty: {e}") from e
        return Schedule(client_name=client_name, index=ScheduleIndex(records))


def load_schedule(settings: Settings, session: Optional[requests.Session] = None) -> Schedule:
    return ZestyClient(settings, session=session).load_schedule()
