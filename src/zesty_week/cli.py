from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Iterable, List, Optional

from rich.console import Console

from zesty_week.controls import read_commands
from zesty_week.fetch import FetchError, Schedule, load_schedule
from zesty_week.navigator import PageCommand, WeekNavigator
from zesty_week.render import draw, render_markdown
from zesty_week.settings import RED, WEEK_STARTS, YELLOW, ConfigError, load_settings

log = logging.getLogger("zesty_week")

FETCH_FAILED = "Something went wrong with the request to Zesty, check the error below to debug"


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="zesty-week",
        description="Browse your scheduled Zesty meal deliveries one week at a time.",
    )
    parser.add_argument("--client-id", help="Zesty client id (defaults to $ZESTY_ID)")
    parser.add_argument("--week-start", choices=sorted(WEEK_STARTS), help="First day of the week (default: monday)")
    parser.add_argument("--once", action="store_true", help="Print the current week as markdown and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def browse(
    navigator: WeekNavigator,
    schedule: Schedule,
    console: Console,
    commands: Optional[Iterable[PageCommand]] = None,
    redraw: Callable = draw,
) -> None:
    """Draw the current week, then redraw after every command that moves it.

    Each command is guarded against the same "now" the screen was drawn with.
    """
    now = navigator.clock()
    redraw(console, navigator.current_view(now), schedule.client_name)
    for command in commands if commands is not None else read_commands():
        if navigator.apply(command, now):
            now = navigator.clock()
            redraw(console, navigator.current_view(now), schedule.client_name)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.verbose)
    console = Console()

    try:
        settings = load_settings(client_id=args.client_id, week_start=args.week_start)
    except ConfigError as e:
        console.print(str(e), style=YELLOW, markup=False)
        return 1

    try:
        with console.status("Loading Meals", spinner="dots", spinner_style="green"):
            schedule = load_schedule(settings)
    except FetchError as e:
        console.print(FETCH_FAILED, style=f"bold {RED}", markup=False)
        console.print(str(e), markup=False)
        log.debug("Fetch failed", exc_info=True)
        return 1

    navigator = WeekNavigator(schedule.index, first_weekday=settings.first_weekday)
    if args.once:
        console.print(render_markdown(navigator.current_view(), schedule.client_name), markup=False, highlight=False, soft_wrap=True)
        return 0

    browse(navigator, schedule, console)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
