from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from zesty_week.navigator import WeekView
from zesty_week.settings import BLUE, GREEN, YELLOW

TEMPLATES = Path(__file__).resolve().parent / "templates"
CONTROLS_HINT = "'left' and 'right' to toggle through weeks"


def format_time(instant: datetime) -> str:
    """7:30PM style, no leading zero."""
    return instant.strftime("%I:%M%p").lstrip("0")


def format_day_title(day: date) -> str:
    return day.strftime("%a %b %d, %Y")


def format_week_range(view: WeekView) -> str:
    return f"{view.window.start.strftime('%b %d, %Y')} - {view.window.last_day.strftime('%b %d, %Y')}"


def day_header(day: date) -> Rule:
    title = Text.assemble((day.strftime("%a"), YELLOW), " ", day.strftime("%b %d, %Y"))
    return Rule(title)


def meal_line(record) -> Text:
    return Text.assemble(
        f"{format_time(record.delivery_instant):>10} | ",
        (record.restaurant_name, GREEN),
        (f" [{record.cuisine}]", BLUE),
    )


def controls_line(view: WeekView) -> Text:
    return Text.assemble(
        ("<".ljust(6), GREEN if view.can_go_prev else "dim"),
        CONTROLS_HINT,
        (">".rjust(6), GREEN if view.can_go_next else "dim"),
        ("   q to quit", "dim"),
    )


def build_week(view: WeekView, client_name: str = "") -> RenderableType:
    parts: list[RenderableType] = []
    if client_name:
        parts.append(Panel(Text(client_name, style=f"bold {GREEN}", justify="center")))
    if view.is_empty:
        parts.append(Text(f"No deliveries scheduled for {format_week_range(view)}", style="dim"))
        parts.append(Text(""))
    for day, records in view.days.items():
        parts.append(day_header(day))
        parts.append(Text(""))
        parts.extend(meal_line(r) for r in records)
        parts.append(Text(""))
    parts.append(Text(""))
    parts.append(controls_line(view))
    return Group(*parts)


def draw(console: Console, view: WeekView, client_name: str = "") -> None:
    console.clear()
    console.print(build_week(view, client_name))


def make_env(template_dir: Path = TEMPLATES) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["time"] = format_time
    env.filters["day_title"] = format_day_title
    return env


def render_markdown(view: WeekView, client_name: str = "", template_name: str = "week.md.j2") -> str:
    tpl = make_env().get_template(template_name)
    return tpl.render(
        client_name=client_name,
        week_range=format_week_range(view),
        days=view.days,
        meal_count=view.meal_count,
        can_go_prev=view.can_go_prev,
        can_go_next=view.can_go_next,
    )
