"""Calendar-week windows over a client's delivery schedule."""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from zesty_week.models import DeliveryRecord

log = logging.getLogger("zesty_week.schedule")

WEEK = timedelta(days=7)

GroupedWeek = Dict[date, Tuple[DeliveryRecord, ...]]


class ScheduleIndex:
    """Read-only, chronologically ordered view of one client's deliveries."""

    def __init__(self, records: Iterable[DeliveryRecord] = ()) -> None:
        received = tuple(records)
        ordered = tuple(sorted(received, key=lambda r: r.delivery_instant))
        if ordered != received:
            log.warning("Delivery records arrived out of order; sorted %d records by delivery time", len(ordered))
        self._records = ordered

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DeliveryRecord]:
        return iter(self._records)

    def records_in_range(self, start: datetime, end_exclusive: datetime) -> Tuple[DeliveryRecord, ...]:
        return tuple(r for r in self._records if start <= r.delivery_instant < end_exclusive)

    def first_record(self) -> Optional[DeliveryRecord]:
        return self._records[0] if self._records else None

    def last_record(self) -> Optional[DeliveryRecord]:
        return self._records[-1] if self._records else None


@dataclass(frozen=True)
class WeekWindow:
    start: datetime   # local midnight on the first day of the week
    end: datetime     # exclusive

    @property
    def last_day(self) -> date:
        return (self.end - timedelta(days=1)).date()


def week_bounds(d: date, first_weekday: int = calendar.MONDAY) -> Tuple[date, date]:
    """Return (first_day, last_day) of the week containing date d."""
    start = d - timedelta(days=(d.weekday() - first_weekday) % 7)
    end = start + timedelta(days=6)
    return start, end


def week_window(now: datetime, week_offset: int = 0, first_weekday: int = calendar.MONDAY) -> WeekWindow:
    """Window for the week ``week_offset`` weeks away from the one containing ``now``."""
    anchor = (now + week_offset * WEEK).date()
    first_day, _ = week_bounds(anchor, first_weekday)
    start = datetime.combine(first_day, datetime.min.time())
    return WeekWindow(start=start, end=start + WEEK)


def group_by_day(records: Sequence[DeliveryRecord]) -> GroupedWeek:
    buckets: Dict[date, list] = {}
    for record in records:
        buckets.setdefault(record.delivery_day, []).append(record)
    return {day: tuple(items) for day, items in buckets.items()}


def first_shown(days: GroupedWeek) -> Optional[DeliveryRecord]:
    for records in days.values():
        if records:
            return records[0]
    return None


def last_shown(days: GroupedWeek) -> Optional[DeliveryRecord]:
    for records in reversed(list(days.values())):
        if records:
            return records[-1]
    return None


def navigability(index: ScheduleIndex, days: GroupedWeek) -> Tuple[bool, bool]:
    """Return (can_go_prev, can_go_next) for a grouped week.

    A direction is closed only when the week already shows the dataset's
    earliest (or latest) record, compared by id. An empty week never matches,
    so empty weeks stay open both ways.
    """
    earliest, latest = index.first_record(), index.last_record()
    shown_first, shown_last = first_shown(days), last_shown(days)
    can_go_prev = shown_first is None or earliest is None or shown_first.id != earliest.id
    can_go_next = shown_last is None or latest is None or shown_last.id != latest.id
    return can_go_prev, can_go_next
