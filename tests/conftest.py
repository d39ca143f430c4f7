from datetime import datetime

import pytest

from zesty_week.models import DeliveryRecord
from zesty_week.schedule import ScheduleIndex


def make_record(record_id, when: datetime, restaurant: str = "Souvla", cuisine: str = "Greek") -> DeliveryRecord:
    return DeliveryRecord(id=record_id, delivery_instant=when, restaurant_name=restaurant, cuisine=cuisine)


@pytest.fixture
def two_week_index() -> ScheduleIndex:
    # Mon 2024-01-01 and Wed 2024-01-10
    return ScheduleIndex([
        make_record(1, datetime(2024, 1, 1, 12, 0)),
        make_record(2, datetime(2024, 1, 10, 18, 30), restaurant="Nopalito", cuisine="Mexican"),
    ])


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 3, 9, 15)
