from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from zesty_week.schedule import GroupedWeek, ScheduleIndex, WeekWindow, group_by_day, navigability, week_window

log = logging.getLogger("zesty_week.navigator")


class PageCommand(Enum):
    PREV = "prev"
    NEXT = "next"


@dataclass(frozen=True)
class NavigatorState:
    week_offset: int = 0


@dataclass(frozen=True)
class WeekView:
    """What the presentation layer draws for one week."""

    window: WeekWindow
    days: GroupedWeek
    can_go_prev: bool
    can_go_next: bool
    week_offset: int

    @property
    def is_empty(self) -> bool:
        return not self.days

    @property
    def meal_count(self) -> int:
        return sum(len(records) for records in self.days.values())


def current_view(
    state: NavigatorState,
    index: ScheduleIndex,
    now: datetime,
    first_weekday: int = calendar.MONDAY,
) -> WeekView:
    window = week_window(now, state.week_offset, first_weekday)
    days = group_by_day(index.records_in_range(window.start, window.end))
    can_go_prev, can_go_next = navigability(index, days)
    return WeekView(
        window=window,
        days=days,
        can_go_prev=can_go_prev,
        can_go_next=can_go_next,
        week_offset=state.week_offset,
    )


def page_prev(
    state: NavigatorState,
    index: ScheduleIndex,
    now: datetime,
    first_weekday: int = calendar.MONDAY,
) -> NavigatorState:
    if not current_view(state, index, now, first_weekday).can_go_prev:
        log.debug("Ignoring previous-week command at offset %d: earliest delivery already shown", state.week_offset)
        return state
    return replace(state, week_offset=state.week_offset - 1)


def page_next(
    state: NavigatorState,
    index: ScheduleIndex,
    now: datetime,
    first_weekday: int = calendar.MONDAY,
) -> NavigatorState:
    if not current_view(state, index, now, first_weekday).can_go_next:
        log.debug("Ignoring next-week command at offset %d: latest delivery already shown", state.week_offset)
        return state
    return replace(state, week_offset=state.week_offset + 1)


TRANSITIONS = {
    PageCommand.PREV: page_prev,
    PageCommand.NEXT: page_next,
}


class WeekNavigator:
    """Owns the current NavigatorState for one ScheduleIndex.

    ``clock`` supplies "now" whenever a call does not pass one explicitly.
    """

    def __init__(
        self,
        index: ScheduleIndex,
        first_weekday: int = calendar.MONDAY,
        clock: Callable[[], datetime] = datetime.now,
        state: Optional[NavigatorState] = None,
    ) -> None:
        self._index = index
        self._first_weekday = first_weekday
        self._clock = clock
        self._state = state or NavigatorState()

    @property
    def state(self) -> NavigatorState:
        return self._state

    @property
    def index(self) -> ScheduleIndex:
        return self._index

    @property
    def clock(self) -> Callable[[], datetime]:
        return self._clock

    def current_view(self, now: Optional[datetime] = None) -> WeekView:
        return current_view(self._state, self._index, now or self._clock(), self._first_weekday)

    def apply(self, command: PageCommand, now: Optional[datetime] = None) -> bool:
        """Apply a page command; returns True when the week changed."""
        transition = TRANSITIONS[command]
        new_state = transition(self._state, self._index, now or self._clock(), self._first_weekday)
        changed = new_state != self._state
        self._state = new_state
        return changed

    def page_prev(self, now: Optional[datetime] = None) -> bool:
        return self.apply(PageCommand.PREV, now)

    def page_next(self, now: Optional[datetime] = None) -> bool:
        return self.apply(PageCommand.NEXT, now)
