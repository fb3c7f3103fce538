"""Weekly digest rendering (HTML + plain text).

Read-only: grid -> text. Every day and band is rendered regardless of how
sparse the grid is; empty slots show ``-``.
"""

import html as html_lib
from dataclasses import dataclass
from datetime import date

from app.calendar.constants import CALENDAR_TITLE, DAYS, TIME_BANDS
from app.calendar.grid import WeekGrid, get_slot
from app.calendar.week_keys import format_short, week_dates, week_end_for

EMPTY_SLOT = "-"

_CONTAINER_STYLE = "font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto;"
_TH_STYLE = "padding: 12px; border: 1px solid #2980b9;"
_LABEL_STYLE = "padding: 10px; border: 1px solid #ddd; background: #ebf5fb; font-weight: bold; text-align: center;"
_CELL_STYLE = "padding: 10px; border: 1px solid #ddd; vertical-align: top;"
_CHIP_STYLE = "display: inline-block; background: #85c1e9; padding: 4px 10px; border-radius: 15px; margin: 2px; font-size: 12px;"


@dataclass(frozen=True)
class Digest:
    """Rendered week.

    Attributes:
        html: Self-contained HTML table with inline styles (email-safe)
        text: Plain-text rendering, one block per day
    """

    html: str
    text: str


def week_range_label(week_start: date) -> str:
    return f"{format_short(week_start)} - {format_short(week_end_for(week_start))}"


def render_text(grid: WeekGrid | None, week_start: date, title: str = CALENDAR_TITLE) -> str:
    lines = [title, f"Week of {week_range_label(week_start)}", ""]
    for day in DAYS:
        lines.append(f"{day}:")
        for band in TIME_BANDS:
            people = get_slot(grid, day, band.id)
            lines.append(f"  {band.label}: {', '.join(people) if people else EMPTY_SLOT}")
        lines.append("")
    return "\n".join(lines)


def _render_cell(people: list[str]) -> str:
    chips = "".join(f'<span style="{_CHIP_STYLE}">{html_lib.escape(p)}</span>' for p in people)
    return f'<td style="{_CELL_STYLE}">{chips or EMPTY_SLOT}</td>'


def render_html(grid: WeekGrid | None, week_start: date, title: str = CALENDAR_TITLE) -> str:
    parts = [
        f'<div style="{_CONTAINER_STYLE}">',
        f'<h1 style="color: #3498db; text-align: center;">{html_lib.escape(title)}</h1>',
        f'<h2 style="color: #666; text-align: center; font-weight: normal;">Week of {week_range_label(week_start)}</h2>',
        '<table style="width: 100%; border-collapse: collapse; margin-top: 20px;">',
        '<thead><tr style="background: #3498db; color: white;">',
        f'<th style="{_TH_STYLE}">Time</th>',
    ]
    for day, day_date in zip(DAYS, week_dates(week_start)):
        parts.append(f'<th style="{_TH_STYLE}">{day}<br><small>{format_short(day_date)}</small></th>')
    parts.append("</tr></thead><tbody>")

    for band in TIME_BANDS:
        parts.append(f'<tr><td style="{_LABEL_STYLE}">{band.label}</td>')
        parts.extend(_render_cell(get_slot(grid, day, band.id)) for day in DAYS)
        parts.append("</tr>")

    parts.append("</tbody></table></div>")
    return "".join(parts)


def build_digest(grid: WeekGrid | None, week_start: date, title: str = CALENDAR_TITLE) -> Digest:
    """Render one week's grid as HTML and plain text."""
    return Digest(
        html=render_html(grid, week_start, title),
        text=render_text(grid, week_start, title),
    )
