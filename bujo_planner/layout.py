"""
Page layout math. Everything here is pure: functions take a GridSystem and
dates and return dicts of grid cells / point rects / destination names that
the renderers draw. Nothing in this module touches a canvas.
"""
import math
from datetime import date

from loguru import logger

from bujo_planner import dates
from bujo_planner.grid import Cell, GridSystem

# Weekly page proportions
DAILY_SECTION_FRACTION = 0.175
CUES_FRACTION = 0.25
SUMMARY_FRACTION = 0.20

# Day column internals (points)
DAY_HEADER_HEIGHT = 30      # name, date and highlight lines, 10pt each
DAY_HEADER_PADDING = 2
DAY_HEADER_LINES = 3
DAY_LINES_START = 35
DAY_LINES_PADDING = 40
DAY_LINE_MARGIN = 3
TIME_LABELS = ("AM", "PM", "EVE")

# Content area shared by the sidebar pages
WEEKLY_CONTENT = Cell(3, 0, 39, 55)
NAV_ROWS = 2

# Year at a glance
YEAR_CONTENT_COL = 2
YEAR_CONTENT_WIDTH = 40
YEAR_HEADER_ROW = 2
YEAR_DAYS_ROW = 3
YEAR_DAY_HEIGHT = 1.5

# Seasonal calendar
SEASON_LABEL_OFFSET = 2
MONTH_BLOCK_ROWS = 8   # title + weekday initials + 6 week rows
MONTH_GUTTER_ROWS = 1
SEASON_COLUMNS = (
    (("Winter", (1, 2)), ("Spring", (3, 4, 5, 6))),
    (("Summer", (7, 8)), ("Fall", (9, 10, 11)), ("Winter", (12,))),
)

# Week sidebar
SIDEBAR_START_COL = 0.25
SIDEBAR_WIDTH_BOXES = 1.75   # ends where page content starts (col 2)
SIDEBAR_START_ROW = 2

WEEKDAY_INITIALS = ("M", "T", "W", "T", "F", "S", "S")
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _quantize(value: float) -> int:
    """Round half up to a whole number of boxes."""
    return int(math.floor(value + 0.5))


def week_dest(week_num: int) -> str:
    return f"week_{week_num}"


# ── weekly page ──────────────────────────────────────

def weekly_sections(
    content: Cell = WEEKLY_CONTENT,
    nav_rows: float = NAV_ROWS,
    footer_rows: float = 0,
    section_gap: float = 0,
) -> dict[str, Cell]:
    """
    Split the weekly content area (grid boxes) into navigation, daily strip
    and the three Cornell regions.

    usable  = content - nav - footer
    daily   = 17.5% of usable, Cornell = the rest (82.5%)
    cues    = 25% of the width, notes = 75%
    summary = 20% of the Cornell height, spanning both columns

    Fractions are rounded to whole boxes. With the default 39x55 content
    area this gives 9 daily rows, 35 note rows, 9 summary rows and a
    10/29 cue/note column split.
    """
    usable = content.height - nav_rows - footer_rows
    daily_rows = _quantize(usable * DAILY_SECTION_FRACTION)
    cornell_rows = usable - daily_rows
    summary_rows = _quantize(cornell_rows * SUMMARY_FRACTION)
    notes_rows = cornell_rows - summary_rows - section_gap
    cues_cols = _quantize(content.width * CUES_FRACTION)
    notes_cols = content.width - cues_cols

    daily_row = content.row + nav_rows
    notes_row = daily_row + daily_rows
    summary_row = notes_row + notes_rows + section_gap

    return {
        "nav":     Cell(content.col, content.row, content.width, nav_rows),
        "daily":   Cell(content.col, daily_row, content.width, daily_rows),
        "cornell": Cell(content.col, notes_row, content.width, cornell_rows),
        "cues":    Cell(content.col, notes_row, cues_cols, notes_rows),
        "notes":   Cell(content.col + cues_cols, notes_row, notes_cols, notes_rows),
        "summary": Cell(content.col, summary_row, content.width, summary_rows),
    }


def day_columns(
    grid: GridSystem,
    week_dates: list[date],
    daily: Cell,
    line_count: int = 4,
    quantize: bool = True,
    first_day: str = "monday",
) -> list[dict]:
    """
    One descriptor per day of the daily strip: rect (points), header line
    rects, labels, weekend flag and the y of each ruled line.

    Columns follow `first_day`; a Sunday-first strip shows the week's Sunday
    in the first column. Weekend is decided by the date itself
    (Saturday/Sunday), not by the column position, and the time labels stay
    on the Monday column.
    """
    order = dates.weekday_order(first_day)
    by_weekday = {d.weekday(): d for d in week_dates}
    ordered = [by_weekday[w] for w in order if w in by_weekday]
    cells = grid.week_grid(daily.col, daily.row, daily.width, daily.height, quantize=quantize)
    line_height = DAY_HEADER_HEIGHT / float(DAY_HEADER_LINES)
    columns = []
    for index, (d, rect) in enumerate(zip(ordered, cells)):
        line_top = rect["y"] - DAY_LINES_START
        spacing = (rect["height"] - DAY_LINES_PADDING) / float(line_count) if line_count else 0
        name_rect, date_rect, note_rect = (
            {**rect, "y": rect["y"] - DAY_HEADER_PADDING - i * line_height, "height": line_height}
            for i in range(DAY_HEADER_LINES)
        )
        columns.append({
            "index":       index,
            "date":        d,
            "day_name":    d.strftime("%A"),
            "date_label":  f"{d.month}/{d.day}",
            "weekend":     d.weekday() >= 5,
            "rect":        rect,
            "name_rect":   name_rect,
            "date_rect":   date_rect,
            "note_rect":   note_rect,
            "time_labels": TIME_LABELS if d.weekday() == 0 else (),
            "line_ys":     [line_top - i * spacing for i in range(line_count)],
            "line_x1":     rect["x"] + DAY_LINE_MARGIN,
            "line_x2":     rect["x"] + rect["width"] - DAY_LINE_MARGIN,
        })
    return columns


def weekly_navigation(grid: GridSystem, year: int, week_num: int, nav: Cell) -> list[dict]:
    """Year link, previous/next week links. Missing neighbours are left out."""
    total = dates.total_weeks(year)
    links = [{
        "label": f"< {year}",
        "cell":  Cell(nav.col, nav.row, 4, nav.height),
        "dest":  "seasonal",
        "align": "left",
    }]
    if week_num > 1:
        links.append({
            "label": f"< w{week_num - 1}",
            "cell":  Cell(nav.col + 5, nav.row, 3, nav.height),
            "dest":  week_dest(week_num - 1),
            "align": "left",
        })
    if week_num < total:
        links.append({
            "label": f"w{week_num + 1} >",
            "cell":  Cell(nav.col + nav.width - 3, nav.row, 3, nav.height),
            "dest":  week_dest(week_num + 1),
            "align": "right",
        })
    return links


def weekly_layout(
    grid: GridSystem,
    year: int,
    week_num: int,
    line_count: int = 4,
    content: Cell = WEEKLY_CONTENT,
    first_day: str = "monday",
) -> dict:
    start = dates.week_start(year, week_num)
    end = dates.week_end(year, week_num)
    sections = weekly_sections(content)
    days = day_columns(grid, dates.week_dates(year, week_num), sections["daily"], line_count,
                       first_day=first_day)

    logger.log("VISUAL", "Week {} layout: daily {} | cues {} | notes {} | summary {}",
               week_num, sections["daily"], sections["cues"], sections["notes"], sections["summary"])

    return {
        "year":       year,
        "week_num":   week_num,
        "start":      start,
        "end":        end,
        "dest":       week_dest(week_num),
        "title":      f"Week {week_num}: {start:%b} {start.day} - {end:%b} {end.day}, {end.year}",
        "sections":   sections,
        "days":       days,
        "navigation": weekly_navigation(grid, year, week_num, sections["nav"]),
    }


# ── year at a glance ─────────────────────────────────

def month_header_cells(grid: GridSystem, year: int) -> list[dict]:
    """Twelve month headers, each linking to the week holding the 1st."""
    col_width = YEAR_CONTENT_WIDTH / 12.0
    headers = []
    for month in range(1, 13):
        col = YEAR_CONTENT_COL + (month - 1) * col_width
        headers.append({
            "month": month,
            "label": dates.MONTH_NAMES[month - 1][:3],
            "cell":  Cell(col, YEAR_HEADER_ROW, col_width, 1),
            "rect":  grid.rect(col, YEAR_HEADER_ROW, col_width, 1),
            "link":  grid.link_bounds(col, YEAR_HEADER_ROW, col_width, 1),
            "dest":  week_dest(dates.first_week_of_month(year, month)),
        })
    return headers


def year_at_glance_cells(grid: GridSystem, year: int) -> list[dict]:
    """
    12 x 31 day cells, day-major (all months of day 1, then day 2, ...).

    Days past the end of a month (Feb 30, Apr 31, ...) come back with
    `date=None` and `dest=None`; no date is ever built for them.
    """
    col_width = YEAR_CONTENT_WIDTH / 12.0
    cells = []
    for day in range(1, 32):
        row = YEAR_DAYS_ROW + (day - 1) * YEAR_DAY_HEIGHT
        for month in range(1, 13):
            col = YEAR_CONTENT_COL + (month - 1) * col_width
            valid = day <= dates.days_in_month(year, month)
            d = date(year, month, day) if valid else None
            cells.append({
                "month": month,
                "day":   day,
                "date":  d,
                "valid": valid,
                "cell":  Cell(col, row, col_width, YEAR_DAY_HEIGHT),
                "rect":  grid.rect(col, row, col_width, YEAR_DAY_HEIGHT),
                "link":  grid.link_bounds(col, row, col_width, YEAR_DAY_HEIGHT),
                "dest":  week_dest(dates.week_number_for_date(d, year)) if valid else None,
            })
    return cells


# ── seasonal calendar ────────────────────────────────

def season_height(month_count: int) -> int:
    return month_count * MONTH_BLOCK_ROWS + (month_count - 1) * MONTH_GUTTER_ROWS


def mini_month_cells(
    grid: GridSystem,
    year: int,
    month: int,
    col: float,
    row: float,
    width_boxes: float,
    first_day: str = "monday",
) -> dict:
    """
    A mini calendar occupying MONTH_BLOCK_ROWS rows at (col, row): title
    row, weekday initials row, then up to six week rows. Weeks start on
    `first_day`.
    """
    col_width = width_boxes / 7.0
    order = dates.weekday_order(first_day)
    first_weekday = order.index(date(year, month, 1).weekday())
    days = []
    for day in range(1, dates.days_in_month(year, month) + 1):
        slot = first_weekday + day - 1
        cell_col = col + (slot % 7) * col_width
        cell_row = row + 2 + slot // 7
        d = date(year, month, day)
        days.append({
            "date": d,
            "day":  day,
            "cell": Cell(cell_col, cell_row, col_width, 1),
            "rect": grid.rect(cell_col, cell_row, col_width, 1),
            "link": grid.link_bounds(cell_col, cell_row, col_width, 1),
            "dest": week_dest(dates.week_number_for_date(d, year)),
        })
    return {
        "month":    month,
        "title":    dates.MONTH_NAMES[month - 1],
        "title_cell": Cell(col, row, width_boxes, 1),
        "weekday_cells": [
            (initial, Cell(col + i * col_width, row + 1, col_width, 1))
            for i, initial in enumerate(WEEKDAY_INITIALS[w] for w in order)
        ],
        "days":     days,
    }


def seasonal_layout(grid: GridSystem, year: int, first_day: str = "monday") -> list[dict]:
    """
    Seasons as fieldsets in two columns: Winter (Jan-Feb) and Spring
    (Mar-Jun) on the left, Summer (Jul-Aug), Fall (Sep-Nov) and Winter (Dec)
    on the right.
    """
    half_width = (grid.cols - SEASON_LABEL_OFFSET) // 2
    seasons = []
    for column_index, column in enumerate(SEASON_COLUMNS):
        col = SEASON_LABEL_OFFSET + column_index * half_width
        row = NAV_ROWS
        for name, months in column:
            height = season_height(len(months))
            month_blocks = []
            month_row = row
            for month in months:
                month_blocks.append(mini_month_cells(grid, year, month, col, month_row, half_width, first_day))
                month_row += MONTH_BLOCK_ROWS + MONTH_GUTTER_ROWS
            seasons.append({
                "name":   name,
                "cell":   Cell(col, row, half_width, height),
                "months": month_blocks,
            })
            row += height + MONTH_GUTTER_ROWS
    return seasons


# ── week sidebar ─────────────────────────────────────

def week_sidebar_entries(grid: GridSystem, year: int, current_week: int | None = None) -> list[dict]:
    """
    One entry per week down the left edge. Rows shrink below one box when
    the year has more weeks than rows left on the page.
    """
    total = dates.total_weeks(year)
    row_height = min(1.0, (grid.rows - SIDEBAR_START_ROW) / float(total))
    letters = dates.week_to_month_letter_map(year)
    entries = []
    for week in range(1, total + 1):
        row = SIDEBAR_START_ROW + (week - 1) * row_height
        entries.append({
            "week":    week,
            "label":   f"w{week:02d}",
            "month_letter": letters.get(week),
            "current": week == current_week,
            "cell":    Cell(SIDEBAR_START_COL, row, SIDEBAR_WIDTH_BOXES, row_height),
            "rect":    grid.rect(SIDEBAR_START_COL, row, SIDEBAR_WIDTH_BOXES, row_height),
            "link":    grid.link_bounds(SIDEBAR_START_COL, row, SIDEBAR_WIDTH_BOXES, row_height),
            "dest":    week_dest(week),
        })
    return entries


# ── multi-year overview ──────────────────────────────

MULTI_YEAR_LABEL_WIDTH = 3
MULTI_YEAR_WIDTH = 37
MULTI_YEAR_HEADER_ROWS = 2
MULTI_YEAR_MONTH_ROWS = 4


def multi_year_layout(grid: GridSystem, year: int, count: int) -> dict:
    """
    `count` consecutive years side by side with a row per month. Only the
    first year's months link anywhere; the following years have no weekly
    pages in this document.
    """
    label_col = YEAR_CONTENT_COL
    columns = grid.divide_columns(label_col + MULTI_YEAR_LABEL_WIDTH, MULTI_YEAR_WIDTH, count)
    years = [
        {"year": year + i, "cell": Cell(c.col, 0, c.width, MULTI_YEAR_HEADER_ROWS)}
        for i, c in enumerate(columns)
    ]
    months = []
    for month in range(1, 13):
        row = MULTI_YEAR_HEADER_ROWS + (month - 1) * MULTI_YEAR_MONTH_ROWS
        months.append({
            "month": month,
            "label": dates.MONTH_NAMES[month - 1][:3],
            "label_cell": Cell(label_col, row, MULTI_YEAR_LABEL_WIDTH, MULTI_YEAR_MONTH_ROWS),
            "cells": [Cell(c.col, row, c.width, MULTI_YEAR_MONTH_ROWS) for c in columns],
            "dest":  week_dest(dates.first_week_of_month(year, month)),
        })
    return {
        "years":  years,
        "months": months,
        "table":  Cell(label_col, 0, MULTI_YEAR_LABEL_WIDTH + MULTI_YEAR_WIDTH,
                       MULTI_YEAR_HEADER_ROWS + 12 * MULTI_YEAR_MONTH_ROWS),
    }


# ── wheels ───────────────────────────────────────────
#
# Radii are proportions of the outer extent, scaled so the wheel fills the
# page width less a 2-box margin on each side:
#   0-3  circles 1-4 (drawn)
#   4    circle 5 (not drawn, divisions still stop there)
#   5    outer end of the division lines

WHEEL_CIRCLE_5 = 360.0 / 380.0
WHEEL_BAND = 5.0 / 380.0
WHEEL_OUTER_EXTENSION = 80.0 / 380.0
WHEEL_MARGIN_BOXES = 2
WHEEL_ARC_STEPS = 8
# (inner, outer) radius indexes of the division bands; circles 2-3 stay empty
WHEEL_DIVISION_BANDS = ((0, 1), (2, 3), (3, 4), (4, 5))
WHEEL_SHADE_BAND = (2, 3)

HOUR_LABEL_OFFSET = 12.0 / 380.0
NIGHT_HOURS = (22, 23, 0, 1, 2, 3, 4, 5, 6)
MONTH_LINE_INWARD = 8.0 / 380.0
MONTH_LABEL_OFFSET = 18.0 / 380.0
MONTH_LABEL_BOX = 24


def wheel_geometry(grid: GridSystem) -> dict:
    proportions = [
        WHEEL_CIRCLE_5 - 4 * WHEEL_BAND,
        WHEEL_CIRCLE_5 - 3 * WHEEL_BAND,
        WHEEL_CIRCLE_5 - 2 * WHEEL_BAND,
        WHEEL_CIRCLE_5 - WHEEL_BAND,
        WHEEL_CIRCLE_5,
        WHEEL_CIRCLE_5 + WHEEL_OUTER_EXTENSION,
    ]
    usable = grid.config.page_width - 2 * grid.width(WHEEL_MARGIN_BOXES)
    scale = (usable / 2.0) / max(proportions)
    return {
        "cx":    grid.config.page_width / 2.0,
        "cy":    grid.config.page_height / 2.0,
        "scale": scale,
        "radii": [p * scale for p in proportions],
    }


def _polar(geometry: dict, radius: float, angle: float) -> tuple[float, float]:
    return (geometry["cx"] + math.cos(angle) * radius,
            geometry["cy"] + math.sin(angle) * radius)


def arc_band(geometry: dict, inner: float, outer: float, angle1: float, angle2: float,
             steps: int = WHEEL_ARC_STEPS) -> list[tuple[float, float]]:
    """Polygon approximating the ring segment between two radii and two angles."""
    points = [_polar(geometry, outer, angle1 + (angle2 - angle1) * i / steps) for i in range(steps + 1)]
    points += [_polar(geometry, inner, angle2 + (angle1 - angle2) * i / steps) for i in range(steps + 1)]
    return points


def _divisions(geometry: dict, angle: float) -> list:
    radii = geometry["radii"]
    return [(_polar(geometry, radii[a], angle), _polar(geometry, radii[b], angle))
            for a, b in WHEEL_DIVISION_BANDS]


def daily_wheel(grid: GridSystem) -> dict:
    """
    48 half-hour divisions, midnight at the bottom running clockwise. Night
    hours (22:00-07:00) are shaded in the band between circles 3 and 4.
    """
    geometry = wheel_geometry(grid)
    radii = geometry["radii"]
    segments = 48
    step = 2 * math.pi / segments
    start = -math.pi / 2.0

    divisions = []
    for segment in range(segments):
        divisions.append({
            "hour":  segment % 2 == 0,
            "lines": _divisions(geometry, start - segment * step),
        })

    inner, outer = (radii[i] for i in WHEEL_SHADE_BAND)
    shaded = [
        arc_band(geometry, inner, outer, start - s * step, start - (s + 1) * step)
        for hour in NIGHT_HOURS
        for s in (2 * hour, 2 * hour + 1)
    ]

    label_radius = radii[5] + HOUR_LABEL_OFFSET * geometry["scale"]
    labels = [
        {"text": str(hour), "point": _polar(geometry, label_radius, start - hour * 2 * step)}
        for hour in range(24)
    ]
    return {**geometry, "divisions": divisions, "shaded": shaded, "labels": labels}


def year_wheel(grid: GridSystem, year: int) -> dict:
    """
    One division per day of `year`, January 1 at the top running clockwise.
    Weekends are shaded between circles 3 and 4 and Mondays are marked
    between circles 2 and 3. Month labels sit inside circle 1 and link to
    the week holding the 1st.
    """
    geometry = wheel_geometry(grid)
    radii, scale = geometry["radii"], geometry["scale"]
    days = dates.days_in_year(year)
    step = 2 * math.pi / days
    start = math.pi / 2.0
    first = date(year, 1, 1)

    divisions, shaded, mondays = [], [], []
    inner, outer = (radii[i] for i in WHEEL_SHADE_BAND)
    for day in range(days):
        angle = start - day * step
        divisions.append(_divisions(geometry, angle))
        weekday = date.fromordinal(first.toordinal() + day).weekday()
        if weekday >= 5:
            shaded.append(arc_band(geometry, inner, outer, angle, angle - step))
        elif weekday == 0:
            mondays.append((_polar(geometry, radii[1], angle), _polar(geometry, radii[2], angle)))

    months = []
    for month in range(1, 13):
        day = date(year, month, 1).timetuple().tm_yday - 1
        angle = start - day * step
        x, y = _polar(geometry, radii[0] - MONTH_LABEL_OFFSET * scale, angle)
        half = MONTH_LABEL_BOX / 2.0
        months.append({
            "month": month,
            "label": dates.MONTH_NAMES[month - 1][:3],
            "line":  (_polar(geometry, radii[0], angle),
                      _polar(geometry, radii[0] - MONTH_LINE_INWARD * scale, angle)),
            "point": (x, y),
            "link":  (x - half, y - half, x + half, y + half),
            "dest":  week_dest(dates.first_week_of_month(year, month)),
        })
    return {**geometry, "days": days, "divisions": divisions, "shaded": shaded,
            "mondays": mondays, "months": months}
