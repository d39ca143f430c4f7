from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from tenacity import wait_none

from zesty_week.fetch import FetchError, ZestyClient, load_schedule
from zesty_week.models import MealPayload
from zesty_week.settings import Settings

MEALS = {
    "meals": [
        {
            "id": 11,
            "delivery_date": "2024-01-01T12:00:00",
            "restaurant_name": "Souvla",
            "restaurant_cuisine": "Greek",
            "extra": "ignored",
        },
        {
            "id": 12,
            "delivery_date": "2024-01-10T18:30:00",
            "restaurant_name": "Nopalito",
            "restaurant_cuisine": "Mexican",
        },
    ]
}
CLIENT = {"client": {"name": "Acme Corp", "id": "abc"}}


def make_response(payload, status=200):
    resp = MagicMock()
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    return resp


def make_session(*responses):
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = list(responses)
    return session


@pytest.fixture
def settings():
    return Settings(client_id="abc", endpoint="https://zesty.test/api/")


def test_load_schedule(settings):
    session = make_session(make_response(MEALS), make_response(CLIENT))

    schedule = load_schedule(settings, session=session)

    assert schedule.client_name == "Acme Corp"
    assert [r.id for r in schedule.index] == [11, 12]
    assert schedule.index.first_record().delivery_instant == datetime(2024, 1, 1, 12, 0)
    assert schedule.index.last_record().cuisine == "Mexican"

    meals_call, client_call = session.get.call_args_list
    assert meals_call.args[0] == "https://zesty.test/api/meals"
    assert meals_call.kwargs["params"] == {"client_id": "abc"}
    assert client_call.args[0] == "https://zesty.test/api/clients/abc"
    assert "User-Agent" in session.headers


def test_empty_meal_list(settings):
    session = make_session(make_response({"meals": []}), make_response(CLIENT))
    schedule = load_schedule(settings, session=session)
    assert len(schedule.index) == 0


def test_http_error_becomes_fetch_error(settings):
    session = make_session(make_response({}, status=500))
    with pytest.raises(FetchError, match="500"):
        ZestyClient(settings, session=session).load_schedule()
    assert session.get.call_count == 1


def test_invalid_payload_becomes_fetch_error(settings):
    session = make_session(make_response({"meals": [{"id": 1}]}))
    with pytest.raises(FetchError, match="Unexpected payload"):
        load_schedule(settings, session=session)


def test_aware_timestamps_become_local_naive():
    payload = MealPayload.model_validate(
        {"id": "x", "delivery_date": "2024-01-01T20:00:00Z", "restaurant_name": None}
    )
    record = payload.to_record()

    expected = datetime(2024, 1, 1, 20, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert record.delivery_instant == expected
    assert record.delivery_instant.tzinfo is None
    assert record.restaurant_name == ""


@pytest.fixture
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(ZestyClient.get_json.retry, "wait", wait_none())


def test_connection_error_is_retried(settings, no_retry_wait):
    session = make_session(requests.ConnectionError("reset"), make_response(MEALS), make_response(CLIENT))

    schedule = load_schedule(settings, session=session)

    assert session.get.call_count == 3
    assert [r.id for r in schedule.index] == [11, 12]


def test_timeout_gives_up_after_three_attempts(settings, no_retry_wait):
    session = make_session(*[requests.Timeout("slow")] * 3)

    with pytest.raises(FetchError, match="slow"):
        load_schedule(settings, session=session)
    assert session.get.call_count == 3
