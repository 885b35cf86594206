"""
One render function per page kind. Each takes the shared RenderContext and
the planned page (its `dest`, `title` and `params`) and draws onto
ctx.surface. Geometry comes from layout.py; nothing here converts rows to
points except through the grid.
"""

from loguru import logger

import bujo_planner.settings as settings
from bujo_planner import dates, layout, patterns
from bujo_planner.components import (
    RenderContext,
    draw_background,
    draw_dot_grid,
    draw_fieldset,
    draw_page_header,
    draw_right_sidebar,
    draw_week_sidebar,
    fill_cell,
    hline,
    link_cell,
    next_in_cycle,
    ruled_lines,
    stroke_cell,
    text_in_cell,
    text_in_rect,
)
from bujo_planner.grid import Cell
from bujo_planner.patterns import GRID_GROUP

CONTENT_COL = 2
CONTENT_WIDTH = 40
WEEKEND_ALPHA = 0.1
EMPTY_CELL_ALPHA = 0.2
LEGEND_ROW = 50

REVIEW_PROMPTS = (
    "What went well?",
    "What could be improved?",
    "Focus for next month",
)


def _fit(ctx: RenderContext, text: str, font: str, size: float, max_width: float) -> str:
    """Trim `text` with an ellipsis until it fits in max_width points."""
    if ctx.surface.text_width(text, ctx.font(font), size) <= max_width:
        return text
    while text and ctx.surface.text_width(text + "...", ctx.font(font), size) > max_width:
        text = text[:-1]
    return text + "..." if text else ""


def _page_base(ctx: RenderContext, page, current_week: int | None = None, sidebars: bool = True) -> None:
    draw_background(ctx)
    draw_dot_grid(ctx)
    if sidebars:
        draw_week_sidebar(ctx, current_week)
        draw_right_sidebar(ctx, page.dest)


def _highlight_colors(ctx: RenderContext, highlight) -> tuple[str, str]:
    style = ctx.dates_config.category_style(highlight.category)
    fill = highlight.color or style.get("color") or ctx.color("borders")
    text = highlight.text_color or style.get("text_color") or ctx.color("text_black")
    return fill, text


# ── seasonal calendar ────────────────────────────────

def render_seasonal(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    text_in_cell(ctx, str(ctx.year), Cell(CONTENT_COL, 0, CONTENT_WIDTH, 2), size=16, font="bold")

    for season in layout.seasonal_layout(ctx.grid, ctx.year, ctx.first_day):
        draw_fieldset(ctx, season["cell"], season["name"])
        for month in season["months"]:
            text_in_cell(ctx, month["title"], month["title_cell"], size=9, font="bold")
            link_cell(ctx, month["title_cell"],
                      layout.week_dest(dates.first_week_of_month(ctx.year, month["month"])))
            for initial, cell in month["weekday_cells"]:
                text_in_cell(ctx, initial, cell, size=7, color=ctx.color("text_gray"))
            for day in month["days"]:
                highlight = ctx.dates_config.date_for_day(day["date"])
                color = None
                if highlight:
                    fill, color = _highlight_colors(ctx, highlight)
                    fill_cell(ctx, day["cell"], fill, radius=2)
                elif day["date"].weekday() >= 5:
                    color = ctx.color("text_gray")
                text_in_rect(ctx, str(day["day"]), day["rect"], size=7, color=color)
                link_cell(ctx, day["cell"], day["dest"])


# ── year at a glance ─────────────────────────────────

def _year_grid(ctx: RenderContext, highlights: bool) -> None:
    for header in layout.month_header_cells(ctx.grid, ctx.year):
        text_in_cell(ctx, header["label"], header["cell"], size=8, font="bold")
        link_cell(ctx, header["cell"], header["dest"])

    for cell in layout.year_at_glance_cells(ctx.grid, ctx.year):
        if not cell["valid"]:
            fill_cell(ctx, cell["cell"], ctx.color("empty_cell_overlay"), alpha=EMPTY_CELL_ALPHA)
            continue

        d = cell["date"]
        r = cell["rect"]
        highlight = ctx.dates_config.date_for_day(d) if highlights else None
        if highlight:
            fill, text_color = _highlight_colors(ctx, highlight)
            priority = ctx.dates_config.priority_style(highlight.priority)
            fill_cell(ctx, cell["cell"], fill)
            ctx.surface.draw_rect(r["x"], r["y"] - r["height"], r["width"], r["height"],
                                  stroke=text_color, line_width=priority.get("border_width", 0.5))
            icon = ctx.dates_config.category_style(highlight.category).get("icon", "")
            font = "bold" if priority.get("bold") else "regular"
            label = _fit(ctx, f"{icon} {highlight.label}".strip(), font, 5, r["width"] - 4)
            text_in_rect(ctx, label, r, size=5, font=font, color=text_color, align="left", valign="bottom")
        else:
            stroke_cell(ctx, cell["cell"])
        if d.weekday() >= 5 and not highlight:
            fill_cell(ctx, cell["cell"], ctx.color("weekend_bg"), alpha=WEEKEND_ALPHA)

        text_in_rect(ctx, f"{d.day} {layout.WEEKDAY_INITIALS[d.weekday()]}", r, size=5,
                     color=ctx.color("text_gray"), align="left", valign="top")
        link_cell(ctx, cell["cell"], cell["dest"])


def render_year_events(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    text_in_cell(ctx, f"{ctx.year} Events", Cell(CONTENT_COL, 0, CONTENT_WIDTH, 2), size=14, font="bold")
    _year_grid(ctx, highlights=False)


def render_year_highlights(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    text_in_cell(ctx, f"{ctx.year} Highlights", Cell(CONTENT_COL, 0, CONTENT_WIDTH, 2), size=14, font="bold")
    _year_grid(ctx, highlights=True)
    _highlight_legend(ctx)


def _highlight_legend(ctx: RenderContext) -> None:
    categories = ctx.dates_config.categories
    text_in_cell(ctx, "Legend", Cell(CONTENT_COL, LEGEND_ROW, CONTENT_WIDTH, 1), size=8,
                 font="bold", color=ctx.color("section_headers"), align="left")
    columns = ctx.grid.divide_columns(CONTENT_COL, CONTENT_WIDTH, max(1, len(categories)))
    for column, (name, style) in zip(columns, categories.items()):
        swatch = Cell(column.col, LEGEND_ROW + 1, 1, 1)
        fill_cell(ctx, swatch, style.get("color") or ctx.color("borders"), radius=1)
        text_in_cell(ctx, f"{style.get('icon', '')} {name.title()}".strip(),
                     Cell(column.col + 1.25, LEGEND_ROW + 1, column.width - 1.25, 1),
                     size=7, color=style.get("text_color") or ctx.color("text_black"), align="left")

    priorities = ctx.dates_config.priorities
    columns = ctx.grid.divide_columns(CONTENT_COL, CONTENT_WIDTH, max(1, len(priorities)))
    for column, (name, style) in zip(columns, priorities.items()):
        swatch = Cell(column.col, LEGEND_ROW + 3, 1, 1)
        stroke_cell(ctx, swatch, color=ctx.color("text_gray"), line_width=style.get("border_width", 0.5))
        text_in_cell(ctx, f"{name.title()} priority",
                     Cell(column.col + 1.25, LEGEND_ROW + 3, column.width - 1.25, 1),
                     size=7, font="bold" if style.get("bold") else "regular", align="left")


# ── weekly page ──────────────────────────────────────

def render_weekly(ctx: RenderContext, page) -> None:
    week_num = page.params["week"]
    line_count = page.params.get("line_count", 4)
    _page_base(ctx, page, current_week=week_num)
    week = layout.weekly_layout(ctx.grid, ctx.year, week_num, line_count, first_day=ctx.first_day)

    sections = week["sections"]
    text_in_cell(ctx, week["title"], sections["nav"], size=10, font="bold")
    for nav in week["navigation"]:
        text_in_cell(ctx, nav["label"], nav["cell"], size=8, color=ctx.color("text_gray"), align=nav["align"])
        link_cell(ctx, nav["cell"], nav["dest"])

    for day in week["days"]:
        _day_column(ctx, day)

    for name, label in (("cues", "Cues/Questions"), ("notes", "Notes"), ("summary", "Summary")):
        cell = sections[name]
        stroke_cell(ctx, cell)
        text_in_cell(ctx, label, Cell(cell.col, cell.row, cell.width, 1), size=8,
                     color=ctx.color("section_headers"), align="left")


def _day_column(ctx: RenderContext, day: dict) -> None:
    s = ctx.surface
    r = day["rect"]
    bottom = r["y"] - r["height"]
    if day["weekend"]:
        s.draw_rect(r["x"], bottom, r["width"], r["height"], fill=ctx.color("weekend_bg"), alpha=WEEKEND_ALPHA)
    s.draw_rect(r["x"], bottom, r["width"], r["height"], stroke=ctx.color("borders"))

    text_in_rect(ctx, day["day_name"], day["name_rect"], size=8, font="bold")
    text_in_rect(ctx, day["date_label"], day["date_rect"], size=7, color=ctx.color("text_gray"))

    highlight = ctx.dates_config.date_for_day(day["date"])
    if highlight:
        _, color = _highlight_colors(ctx, highlight)
        label = _fit(ctx, highlight.label, "italic", 5, r["width"] - 4)
        text_in_rect(ctx, label, day["note_rect"], size=5, font="italic", color=color)

    for y in day["line_ys"]:
        s.draw_line(day["line_x1"], y, day["line_x2"], y, color=ctx.color("borders"))

    line_ys = day["line_ys"]
    for i, label in enumerate(day["time_labels"]):
        if not line_ys:
            break
        y = line_ys[min(i * len(line_ys) // len(day["time_labels"]), len(line_ys) - 1)]
        s.draw_text(day["line_x1"], y + 2, label, font=ctx.font(), size=5, color=ctx.color("text_gray"))


# ── front matter ─────────────────────────────────────

def render_index(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    number, count = page.params["number"], page.params["count"]
    title = "Index" if count == 1 else f"Index ({number}/{count})"
    top = draw_page_header(ctx, title)

    row = top + 1
    rows = ctx.grid.rows - 1 - row
    for column in ctx.grid.divide_columns(CONTENT_COL, CONTENT_WIDTH - 1, 2, gap=1):
        text_in_cell(ctx, "Topic", Cell(column.col, row - 1, column.width - 3, 1), size=7,
                     color=ctx.color("section_headers"), align="left", valign="bottom")
        text_in_cell(ctx, "Page", Cell(column.col + column.width - 3, row - 1, 3, 1), size=7,
                     color=ctx.color("section_headers"), valign="bottom")
        ruled_lines(ctx, column.col, row, column.width, rows - 1)
        page_col = ctx.grid.x(column.col + column.width - 3)
        ctx.surface.draw_line(page_col, ctx.grid.y(row), page_col, ctx.grid.y(row + rows),
                              color=ctx.color("borders"))


def render_future_log(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    months = page.params["months"]
    top = draw_page_header(ctx, "Future Log",
                           f"{dates.MONTH_NAMES[months[0] - 1]} - {dates.MONTH_NAMES[months[-1] - 1]} {ctx.year}")

    row = top + 1
    cells = ctx.grid.divide_grid(CONTENT_COL, row, CONTENT_WIDTH - 1, ctx.grid.rows - 1 - row,
                                 2, 3, col_gap=1, row_gap=1)
    slots = [cell for grid_row in cells for cell in grid_row]
    for month, cell in zip(months, slots):
        title_cell = Cell(cell.col, cell.row, cell.width, 1)
        text_in_cell(ctx, dates.MONTH_NAMES[month - 1], title_cell, size=9, font="bold", align="left")
        link_cell(ctx, title_cell, layout.week_dest(dates.first_week_of_month(ctx.year, month)))
        hline(ctx, cell.col, cell.row + 1, cell.width, color=ctx.color("section_headers"))
        line_count = int(cell.height) - 2
        ruled_lines(ctx, cell.col, cell.row + 1, cell.width, line_count)
        # known dates are pre-filled, one per line
        for i, highlight in enumerate(ctx.dates_config.dates_for_month(month, ctx.year)[:line_count]):
            _, color = _highlight_colors(ctx, highlight)
            label = _fit(ctx, f"{highlight.date.day}  {highlight.label}", "regular", 7, ctx.grid.width(cell.width) - 4)
            text_in_cell(ctx, label, Cell(cell.col, cell.row + 1 + i, cell.width, 1), size=7, color=color, align="left")


def render_quarterly(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    quarter = page.params["quarter"]
    months = range(3 * (quarter - 1) + 1, 3 * quarter + 1)
    top = draw_page_header(ctx, f"Q{quarter} {ctx.year} Planning",
                           f"{dates.MONTH_NAMES[months[0] - 1]} - {dates.MONTH_NAMES[months[-1] - 1]}")

    goals = Cell(CONTENT_COL, top + 1, CONTENT_WIDTH - 1, 12)
    draw_fieldset(ctx, goals, "Goals")
    ruled_lines(ctx, goals.col + 1, goals.row + 1, goals.width - 2, int(goals.height) - 2)

    row = goals.row + goals.height + 1
    text_in_cell(ctx, "Weeks", Cell(CONTENT_COL, row, CONTENT_WIDTH - 1, 1), size=9, font="bold", align="left")
    row += 1
    weeks = [w for m in months for w in dates.weeks_for_month(ctx.year, m)]
    row_height = min(2.0, (ctx.grid.rows - 1 - row) / float(max(1, len(weeks))))
    for week in weeks:
        start, end = dates.week_start(ctx.year, week), dates.week_end(ctx.year, week)
        label_cell = Cell(CONTENT_COL, row, 8, row_height)
        text_in_cell(ctx, f"w{week:02d}  {start:%b} {start.day} - {end:%b} {end.day}", label_cell,
                     size=7, color=ctx.color("text_gray"), align="left")
        link_cell(ctx, label_cell, layout.week_dest(week))
        hline(ctx, CONTENT_COL, row + row_height, CONTENT_WIDTH - 1)
        row += row_height


def render_monthly_review(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    month = page.params["month"]
    top = draw_page_header(ctx, f"{dates.MONTH_NAMES[month - 1]} Review", str(ctx.year))

    first_week = dates.first_week_of_month(ctx.year, month)
    jump = Cell(CONTENT_COL + CONTENT_WIDTH - 9, 1, 8, 2)
    text_in_cell(ctx, f"Go to week {first_week} >", jump, size=8, color=ctx.color("text_gray"), align="right")
    link_cell(ctx, jump, layout.week_dest(first_week))

    start = top + 1
    for prompt, cell in zip(REVIEW_PROMPTS, ctx.grid.divide_rows(start, ctx.grid.rows - 1 - start, 3, gap=1)):
        box = Cell(CONTENT_COL, cell.row, CONTENT_WIDTH - 1, cell.height)
        draw_fieldset(ctx, box, prompt)
        ruled_lines(ctx, box.col + 1, box.row + 1, box.width - 2, int(box.height) - 2)


def render_collection(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    collection = page.params["collection"]
    top = draw_page_header(ctx, collection.title, collection.subtitle)
    ruled_lines(ctx, CONTENT_COL, top, CONTENT_WIDTH - 1, ctx.grid.rows - 2 - top)


# ── templates ────────────────────────────────────────

def render_reference(ctx: RenderContext, page) -> None:
    """
    Calibration sheet: numbered grid axes, page outline and the week-grid
    split for a 7-multiple and a non-multiple width, so a printout can be
    checked against the dot spacing.
    """
    _page_base(ctx, page, sidebars=False)
    grid, s = ctx.grid, ctx.surface
    red = ctx.color("diagnostic_red")

    for col in range(0, grid.cols + 1, 5):
        s.draw_line(grid.x(col), grid.y(0), grid.x(col), grid.y(grid.rows), color=red, line_width=0.25, dash=(1, 2))
        s.draw_text(grid.x(col) + 1, grid.y(0) - 6, str(col), font=ctx.font(), size=5, color=red)
    for row in range(0, grid.rows + 1, 5):
        s.draw_line(grid.x(0), grid.y(row), grid.x(grid.cols), grid.y(row), color=red, line_width=0.25, dash=(1, 2))
        s.draw_text(grid.x(0) + 1, grid.y(row) - 6, str(row), font=ctx.font(), size=5, color=red)

    label = Cell(5, 6, 33, 3)
    fill_cell(ctx, label, ctx.color("diagnostic_label_bg"))
    stroke_cell(ctx, label, color=red)
    text_in_cell(ctx, f"Grid {grid.cols} x {grid.rows} boxes, {grid.box_size}pt per box", label,
                 size=10, font="bold", color=red)

    for row, width in ((12, 35), (20, 39)):
        text_in_cell(ctx, f"week grid, {width} boxes", Cell(2, row - 1, 20, 1), size=7,
                     color=ctx.color("text_gray"), align="left")
        for rect in grid.week_grid(2, row, width, 5):
            s.draw_rect(rect["x"], rect["y"] - rect["height"], rect["width"], rect["height"], stroke=red)

    for i, cell in enumerate(grid.divide_columns(2, 39, 4, gap=1)):
        stroke_cell(ctx, Cell(cell.col, 28, cell.width, 3), color=red)
        text_in_cell(ctx, f"{cell.width:g}", Cell(cell.col, 28, cell.width, 3), size=7, color=red)
    logger.log("VISUAL", "Reference page drawn on {}x{} grid", grid.cols, grid.rows)


# ── multi-year overview ──────────────────────────────

def render_multi_year(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    table = layout.multi_year_layout(ctx.grid, ctx.year, page.params["count"])
    for year in table["years"]:
        text_in_cell(ctx, str(year["year"]), year["cell"], size=14, font="bold")
    for month in table["months"]:
        text_in_cell(ctx, month["label"], month["label_cell"], size=8, font="bold", align="left")
        link_cell(ctx, month["label_cell"], month["dest"])
        stroke_cell(ctx, month["label_cell"])
        for cell in month["cells"]:
            stroke_cell(ctx, cell)


# ── grid templates ───────────────────────────────────

SHOWCASE_QUADRANTS = (
    ("Dot Grid",    "dots",         "dots",        Cell(0, 3, 21.5, 26)),
    ("Isometric",   "grid_isometric",   "isometric",   Cell(21.5, 3, 21.5, 26)),
    ("Perspective", "grid_perspective", "perspective", Cell(0, 29, 21.5, 26)),
    ("Hexagon",     "grid_hexagon",     "hexagon",     Cell(21.5, 29, 21.5, 26)),
)

OVERVIEW_SAMPLES = (
    ("Dot Grid",    "dots",   "dots",  "5mm dot spacing for flexible layouts"),
    ("Graph Grid",  "grid_graph", "graph", "5mm square grid for precise drawings"),
    ("Ruled Lines", "grid_lined", "lined", "Standard ruled lines for writing"),
)

PATTERN_LINE_WIDTHS = {"graph": 0.25, "lined": 0.25, "isometric": 0.25, "perspective": 0.35, "hexagon": 0.35}


def _shift(segments, x: float, y: float) -> list:
    return [((x1 + x, y1 + y), (x2 + x, y2 + y)) for (x1, y1), (x2, y2) in segments]


def _draw_pattern(ctx: RenderContext, pattern: str, rect: dict, converging: int = 24) -> None:
    """Draw `pattern` clipped to a top-anchored point rect."""
    s, box = ctx.surface, ctx.grid.box_size
    x, y = rect["x"], rect["y"] - rect["height"]
    width, height = rect["width"], rect["height"]
    color = ctx.color("dot_grid")
    line_width = PATTERN_LINE_WIDTHS.get(pattern, 0.25)

    if pattern == "dots":
        for dx, dy in patterns.dot_positions(width, height, box):
            s.draw_circle(x + dx, y + dy, settings.DOT_RADIUS, fill=color)
        return
    if pattern == "graph":
        segments = patterns.graph_lines(width, height, box)
    elif pattern == "lined":
        spacing = box * patterns.LINED_SPACING_BOXES
        segments = patterns.ruled_lines(width, height, spacing, start=spacing)
        margin = x + box * patterns.LINED_MARGIN_COL
        s.draw_line(margin, y, margin, y + height, color=ctx.color("margin_line"), line_width=0.5)
    elif pattern == "isometric":
        segments = patterns.isometric_lines(width, height, box)
    elif pattern == "perspective":
        guide = patterns.perspective_lines(width, height, box * 2, num_converging=converging)
        segments = [guide["horizon"]] + guide["horizontals"] + guide["converging"]
    elif pattern == "hexagon":
        segments = patterns.hexagon_edges(width, height, box, orientation="flat_top")
    else:
        raise ValueError(f"Unknown grid pattern '{pattern}'")
    s.draw_lines(_shift(segments, x, y), color=color, line_width=line_width)


def render_grid_page(ctx: RenderContext, page) -> None:
    """Full-page grid with a one-row header: back to the overview, title, next grid."""
    draw_background(ctx)
    pattern = page.params["pattern"]
    grid = ctx.grid
    if pattern == "dots":
        draw_dot_grid(ctx)
    else:
        _draw_pattern(ctx, pattern, grid.rect(0, 0, grid.cols, grid.rows))

    header = Cell(0, 0, grid.cols, 1)
    fill_cell(ctx, header, ctx.color("background"))
    back = Cell(1, 0, 5, 1)
    text_in_cell(ctx, "< Grids", back, size=7, color=ctx.color("text_gray"), align="left")
    link_cell(ctx, back, "grids_overview")
    text_in_cell(ctx, page.title, Cell(6, 0, 30, 1), size=7, font="bold", color=ctx.color("text_gray"))
    following = next_in_cycle(ctx, GRID_GROUP, page.dest)
    if following and following != page.dest:
        forward = Cell(grid.cols - 6, 0, 5, 1)
        text_in_cell(ctx, "next >", forward, size=7, color=ctx.color("text_gray"), align="right")
        link_cell(ctx, forward, following)


def render_grid_showcase(ctx: RenderContext, page) -> None:
    _page_base(ctx, page, sidebars=False)
    text_in_cell(ctx, "Grid Types", Cell(0, 0, ctx.grid.cols, 2), size=18, font="bold")
    text_in_cell(ctx, "Visual Reference & Templates", Cell(0, 2, ctx.grid.cols, 1), size=10,
                 color=ctx.color("section_headers"))

    for label, dest, pattern, quadrant in SHOWCASE_QUADRANTS:
        text_in_cell(ctx, label, Cell(quadrant.col, quadrant.row, quadrant.width, 2), size=10, font="bold")
        area = Cell(quadrant.col + 1, quadrant.row + 2, quadrant.width - 2, quadrant.height - 3)
        fill_cell(ctx, area, ctx.color("background"))
        _draw_pattern(ctx, pattern, ctx.grid.rect(*area), converging=8)
        stroke_cell(ctx, area)
        link_cell(ctx, quadrant, dest)


def render_grids_overview(ctx: RenderContext, page) -> None:
    _page_base(ctx, page)
    top = draw_page_header(ctx, "Grid Reference")

    start = top + 1
    rows = ctx.grid.divide_rows(start, ctx.grid.rows - 1 - start, len(OVERVIEW_SAMPLES), gap=1)
    for (label, dest, pattern, description), row in zip(OVERVIEW_SAMPLES, rows):
        box = Cell(CONTENT_COL, row.row, CONTENT_WIDTH - 1, row.height)
        fill_cell(ctx, box, ctx.color("background"))
        stroke_cell(ctx, box)

        preview = Cell(box.col + 1, box.row + 1, 12, box.height - 2)
        _draw_pattern(ctx, pattern, ctx.grid.rect(*preview))
        stroke_cell(ctx, preview)

        text_col, text_width = preview.col + preview.width + 1, box.width - preview.width - 3
        text_in_cell(ctx, label, Cell(text_col, box.row + 1, text_width, 2), size=12, font="bold", align="left")
        text_in_cell(ctx, description, Cell(text_col, box.row + 3, text_width, 1), size=9,
                     color=ctx.color("text_gray"), align="left")
        text_in_cell(ctx, "Tap to view full page", Cell(text_col, box.row + box.height - 2, text_width, 1),
                     size=8, font="italic", color=ctx.color("section_headers"), align="left")
        link_cell(ctx, box, dest)


# ── trackers and wheels ──────────────────────────────

HABITS = ("Exercise", "Read", "Meditate", "Journal", "Water")
HABIT_DAY_HEADERS = (1, 7, 14, 21, 28, 31)
MOOD_METRICS = ("Mood", "Energy", "Sleep (hrs)")
TRACKER_IDEAS = (
    "Water intake (glasses per day)",
    "Gratitude (3 things daily)",
    "Expense tracking (categories)",
    "Reading log (pages/books)",
    "Exercise types and duration",
    "Project progress (milestones)",
)


def render_tracker(ctx: RenderContext, page) -> None:
    """Sample habit tracker, mood log and a list of other tracker ideas on the dot grid."""
    _page_base(ctx, page, sidebars=False)
    gray = ctx.color("text_gray")
    text_in_cell(ctx, "Tracker Ideas", Cell(2, 2, 39, 2), size=18, font="bold", align="left")
    text_in_cell(ctx, "Examples to spark your creativity - adapt these to your needs", Cell(2, 4, 39, 2),
                 size=10, font="italic", color=gray, align="left")

    # habit tracker: one 0.8-box square per day of the month
    text_in_cell(ctx, "Habit Tracker", Cell(2, 8, 39, 2), size=12, font="bold", align="left")
    for day in HABIT_DAY_HEADERS:
        text_in_cell(ctx, str(day), Cell(10 + day - 1, 11, 1, 1), size=7, color=gray)
    for index, habit in enumerate(HABITS):
        row = 13 + index
        text_in_cell(ctx, habit, Cell(2, row, 7, 1), size=8, align="right")
        for day in range(31):
            stroke_cell(ctx, Cell(10 + day + 0.1, row + 0.1, 0.8, 0.8), line_width=0.25)

    text_in_cell(ctx, "Mood / Energy Log", Cell(2, 24, 39, 2), size=12, font="bold", align="left")
    text_in_cell(ctx, "Rate daily (1-5) or use symbols: ++ + = - --", Cell(2, 26, 39, 2), size=8,
                 font="italic", color=gray, align="left")
    order = dates.weekday_order(ctx.first_day)
    for i, weekday in enumerate(order):
        text_in_cell(ctx, layout.WEEKDAY_NAMES[weekday], Cell(10 + i * 4, 29, 4, 1), size=8, font="bold")
    for index, metric in enumerate(MOOD_METRICS):
        row = 31 + index * 2
        text_in_cell(ctx, metric, Cell(2, row, 7, 2), size=8, color=gray, align="right")
        for i in range(len(order)):
            stroke_cell(ctx, Cell(10 + i * 4, row, 3, 2))

    text_in_cell(ctx, "More Ideas", Cell(2, 39, 39, 2), size=12, font="bold", align="left")
    for i, idea in enumerate(TRACKER_IDEAS):
        col, row = (2, 42 + i) if i < 3 else (22, 42 + i - 3)
        text_in_cell(ctx, f"- {idea}", Cell(col, row, 18, 1), size=8, align="left")

    text_in_cell(ctx, "Create your own! Use the dot grid as a canvas for any tracking system that works for you.",
                 Cell(2, 50, 39, 3), size=8, font="italic", color=gray)


def render_daily_wheel(ctx: RenderContext, page) -> None:
    """24-hour clock face for time blocking; night hours shaded."""
    _page_base(ctx, page, sidebars=False)
    s = ctx.surface
    wheel = layout.daily_wheel(ctx.grid)
    _wheel_base(ctx, wheel)
    for division in wheel["divisions"]:
        s.draw_lines(division["lines"], color=ctx.color("text_gray"),
                     line_width=0.75 if division["hour"] else 0.25)
    for label in wheel["labels"]:
        x, y = label["point"]
        s.draw_text(x, y - 7 * 0.35, label["text"], font=ctx.font(), size=7,
                    color=ctx.color("text_gray"), align="center")


def render_year_wheel(ctx: RenderContext, page) -> None:
    """One spoke per day of the year; weekends shaded, Mondays and month starts marked."""
    _page_base(ctx, page, sidebars=False)
    s = ctx.surface
    wheel = layout.year_wheel(ctx.grid, ctx.year)
    _wheel_base(ctx, wheel)
    s.draw_lines([line for lines in wheel["divisions"] for line in lines],
                 color=ctx.color("text_gray"), line_width=0.25)
    s.draw_lines(wheel["mondays"], color=ctx.color("text_gray"), line_width=0.75)
    s.draw_lines([month["line"] for month in wheel["months"]], color=ctx.color("section_headers"),
                 line_width=0.75)
    for month in wheel["months"]:
        x, y = month["point"]
        s.draw_text(x, y - 8 * 0.35, month["label"], font=ctx.font(), size=8,
                    color=ctx.color("text_gray"), align="center")
        if ctx.has_dest(month["dest"]):
            s.add_link(month["dest"], month["link"])
    logger.log("VISUAL", "Year wheel {}: {} divisions, {} weekend segments",
               ctx.year, wheel["days"], len(wheel["shaded"]))


def _wheel_base(ctx: RenderContext, wheel: dict) -> None:
    s = ctx.surface
    for points in wheel["shaded"]:
        s.draw_polygon(points, fill=ctx.color("weekend_bg"), alpha=0.2)
    for radius in wheel["radii"][:4]:
        s.draw_circle(wheel["cx"], wheel["cy"], radius, stroke=ctx.color("section_headers"))


RENDERERS = {
    "seasonal":        render_seasonal,
    "year_events":     render_year_events,
    "year_highlights": render_year_highlights,
    "multi_year":      render_multi_year,
    "weekly":          render_weekly,
    "index":           render_index,
    "future_log":      render_future_log,
    "quarterly":       render_quarterly,
    "review":          render_monthly_review,
    "collection":      render_collection,
    "grid_showcase":   render_grid_showcase,
    "grids_overview":  render_grids_overview,
    "grid":            render_grid_page,
    "tracker":         render_tracker,
    "reference":       render_reference,
    "daily_wheel":     render_daily_wheel,
    "year_wheel":      render_year_wheel,
}
