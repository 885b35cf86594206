"""
Page furniture shared by the renderers: backgrounds, dot grid, sidebars,
fieldsets, ruled lines and grid-positioned text/links.
"""
from dataclasses import dataclass, field

from loguru import logger

import bujo_planner.settings as settings
from bujo_planner import layout
from bujo_planner.config import DatesConfig
from bujo_planner.grid import Cell, GridSystem
from bujo_planner.patterns import GRID_GROUP
from bujo_planner.surface import DrawingSurface

DOT_STAMP = "page_dots"

SIDEBAR_COL = 42
TAB_GAP_PT = 4
TAB_PADDING_PT = 6
TAB_START_OFFSET_PT = 14
TAB_FONT_SIZE = 8
WEEK_SIDEBAR_FONT_SIZE = 6


@dataclass
class RenderContext:
    surface: DrawingSurface
    grid: GridSystem
    theme: dict
    year: int
    fonts: dict = field(default_factory=lambda: {
        "regular": settings.FONT_REGULAR,
        "bold": settings.FONT_BOLD,
        "italic": settings.FONT_ITALIC,
    })
    dates_config: DatesConfig = field(default_factory=DatesConfig)
    destinations: frozenset = frozenset()
    first_day: str = "monday"

    def color(self, role: str) -> str:
        return self.theme["colors"][role]

    def font(self, role: str = "regular") -> str:
        return self.fonts[role]

    def has_dest(self, dest: str | None) -> bool:
        return bool(dest) and dest in self.destinations


# ── grid-positioned primitives ───────────────────────

def fill_cell(ctx: RenderContext, cell: Cell, color: str, alpha: float = 1.0, radius: float = 0) -> None:
    r = ctx.grid.rect(*cell)
    ctx.surface.draw_rect(r["x"], r["y"] - r["height"], r["width"], r["height"],
                          fill=color, alpha=alpha, radius=radius)


def stroke_cell(ctx: RenderContext, cell: Cell, color: str | None = None, line_width: float = 0.5, radius: float = 0) -> None:
    r = ctx.grid.rect(*cell)
    ctx.surface.draw_rect(r["x"], r["y"] - r["height"], r["width"], r["height"],
                          stroke=color or ctx.color("borders"), line_width=line_width, radius=radius)


def text_in_rect(
    ctx: RenderContext,
    text: str,
    rect: dict,
    *,
    size: float,
    font: str = "regular",
    color: str | None = None,
    align: str = "center",
    valign: str = "center",
    padding: float = 2,
) -> None:
    """Single line of text placed inside a top-anchored point rect."""
    if align == "center":
        x = rect["x"] + rect["width"] / 2
    elif align == "right":
        x = rect["x"] + rect["width"] - padding
    else:
        x = rect["x"] + padding

    if valign == "top":
        y = rect["y"] - padding - size * 0.75
    elif valign == "bottom":
        y = rect["y"] - rect["height"] + padding
    else:
        # cap height is roughly 0.7 of the font size
        y = rect["y"] - rect["height"] / 2 - size * 0.35

    ctx.surface.draw_text(x, y, text, font=ctx.font(font), size=size,
                          color=color or ctx.color("text_black"), align=align)


def text_in_cell(ctx: RenderContext, text: str, cell: Cell, **kwargs) -> None:
    text_in_rect(ctx, text, ctx.grid.rect(*cell), **kwargs)


def link_cell(ctx: RenderContext, cell: Cell, dest: str) -> None:
    """Invisible link over a grid region; dropped if the target page is not planned."""
    if not ctx.has_dest(dest):
        logger.debug("No page for destination {}, link skipped", dest)
        return
    ctx.surface.add_link(dest, ctx.grid.link_bounds(*cell))


def hline(ctx: RenderContext, col: float, row: float, width: float, color: str | None = None,
          line_width: float = 0.5, offset_pt: float = 0) -> None:
    y = ctx.grid.y(row) + offset_pt
    ctx.surface.draw_line(ctx.grid.x(col), y, ctx.grid.x(col + width), y,
                          color=color or ctx.color("borders"), line_width=line_width)


def ruled_lines(ctx: RenderContext, col: float, row: float, width: float, count: int,
                spacing: float = 1, color: str | None = None) -> None:
    """`count` writing lines, one every `spacing` rows, sitting just above each row boundary."""
    for i in range(count):
        hline(ctx, col, row + (i + 1) * spacing, width, color=color, offset_pt=3)


# ── page furniture ───────────────────────────────────

def draw_background(ctx: RenderContext) -> None:
    background = ctx.color("background")
    if background.upper() == "#FFFFFF":
        return
    ctx.surface.draw_rect(0, 0, ctx.grid.config.page_width, ctx.grid.config.page_height, fill=background)


def define_dot_grid(surface: DrawingSurface, grid: GridSystem, color: str) -> None:
    """One dot on every grid intersection, recorded once as a reusable stamp."""
    def draw(s: DrawingSurface) -> None:
        for col in range(grid.cols + 1):
            for row in range(grid.rows + 1):
                s.draw_circle(grid.x(col), grid.y(row), settings.DOT_RADIUS, fill=color)

    surface.define_stamp(DOT_STAMP, draw)


def draw_dot_grid(ctx: RenderContext) -> None:
    ctx.surface.use_stamp(DOT_STAMP)


def draw_fieldset(ctx: RenderContext, cell: Cell, legend: str, font_size: float = 10) -> None:
    """Border with a gap in the top edge holding the legend."""
    r = ctx.grid.rect(*cell)
    color = ctx.color("borders")
    pad = 5
    legend_width = ctx.surface.text_width(legend, ctx.font("regular"), font_size) + 2 * pad
    top, bottom = r["y"], r["y"] - r["height"]
    left, right = r["x"], r["x"] + r["width"]
    legend_x = left + r["width"] / 2 - legend_width / 2 + ctx.grid.width(0.5)

    s = ctx.surface
    s.draw_line(left, top, legend_x, top, color=color)
    s.draw_line(legend_x + legend_width, top, right, top, color=color)
    s.draw_line(right, top, right, bottom, color=color)
    s.draw_line(right, bottom, left, bottom, color=color)
    s.draw_line(left, bottom, left, top, color=color)
    s.draw_text(legend_x + pad, top - font_size * 0.35, legend,
                font=ctx.font("regular"), size=font_size, color=ctx.color("section_headers"))


def draw_week_sidebar(ctx: RenderContext, current_week: int | None = None) -> None:
    """w01..wNN down the left edge, month initials beside the first week of each month."""
    s = ctx.surface
    for entry in layout.week_sidebar_entries(ctx.grid, ctx.year, current_week):
        r = entry["rect"]
        width = r["width"] - 2
        height = r["height"] - 2
        bottom = r["y"] - 1 - height
        if entry["current"]:
            s.draw_rect(r["x"], bottom, width, height, stroke=ctx.color("borders"), radius=2)
        else:
            s.draw_rect(r["x"], bottom, width, height, fill=ctx.color("borders"), radius=2, alpha=0.2)

        label = entry["label"]
        if entry["month_letter"]:
            label = f"{entry['month_letter']} {label}"
        text_in_rect(ctx, label, {**r, "width": width}, size=WEEK_SIDEBAR_FONT_SIZE,
                     font="bold" if entry["current"] else "regular",
                     color=ctx.color("text_black") if entry["current"] else ctx.color("text_gray"),
                     align="right")
        if not entry["current"]:
            link_cell(ctx, entry["cell"], entry["dest"])


SIDEBAR_TABS = (
    ("Year", "seasonal"),
    ("Events", "year_events"),
    ("Highlights", "year_highlights"),
    ("Multi", "multi_year"),
    ("Index", "index_1"),
    ("Future", "future_log_1"),
    ("Grids", GRID_GROUP),
)


def next_in_cycle(ctx: RenderContext, group, current: str | None) -> str | None:
    """Planned page after `current` in `group`, wrapping; the first planned page when `current` is outside it."""
    planned = [dest for dest in group if ctx.has_dest(dest)]
    if not planned:
        return None
    if current not in planned:
        return planned[0]
    return planned[(planned.index(current) + 1) % len(planned)]


def sidebar_tabs(ctx: RenderContext, current_dest: str | None = None) -> list[dict]:
    """
    Tabs whose target page is planned. A tab may cover a group of pages:
    from outside the group it opens the first one, from inside it is
    current and cycles to the next planned page, wrapping at the end.
    """
    tabs = []
    for label, target in SIDEBAR_TABS:
        group = (target,) if isinstance(target, str) else target
        dest = next_in_cycle(ctx, group, current_dest)
        if dest is None:
            continue
        current = current_dest in group
        tabs.append({
            "label":   label,
            "dest":    None if dest == current_dest else dest,
            "current": current,
        })
    return tabs


def draw_right_sidebar(ctx: RenderContext, current_dest: str | None = None) -> None:
    """Rotated tabs in the last column; the current tab is outlined and only links when it cycles."""
    s = ctx.surface
    left = ctx.grid.x(SIDEBAR_COL)
    tab_width = ctx.grid.width(1)
    top = ctx.grid.y(0) - TAB_START_OFFSET_PT
    for tab in sidebar_tabs(ctx, current_dest):
        label = tab["label"]
        font = ctx.font("bold" if tab["current"] else "regular")
        height = s.text_width(label, font, TAB_FONT_SIZE) + 2 * TAB_PADDING_PT
        bottom = top - height
        inset = 2
        if tab["current"]:
            s.draw_rect(left + inset, bottom + inset, tab_width - 2 * inset, height - 2 * inset,
                        stroke=ctx.color("borders"), radius=2)
        else:
            s.draw_rect(left + inset, bottom + inset, tab_width - 2 * inset, height - 2 * inset,
                        fill=ctx.color("borders"), radius=2, alpha=0.2)
        if tab["dest"]:
            s.add_link(tab["dest"], (left, bottom, left + tab_width, top))

        # reads top-to-bottom
        s.draw_text(left + tab_width / 2 + TAB_FONT_SIZE * 0.35, top - TAB_PADDING_PT, label,
                    font=font, size=TAB_FONT_SIZE, color=ctx.color("text_gray"), angle=-90)
        top = bottom - TAB_GAP_PT


def draw_page_header(ctx: RenderContext, title: str, subtitle: str | None = None) -> int:
    """Left-aligned page title at rows 1-3; returns the first free row below it."""
    text_in_cell(ctx, title, Cell(2, 1, 39, 3), size=18, font="bold", align="left", valign="bottom")
    row = 4
    if subtitle:
        text_in_cell(ctx, subtitle, Cell(2, 4, 39, 2), size=10, color=ctx.color("text_gray"),
                     align="left", valign="top")
        row = 6
    hline(ctx, 2, row, 39, color=ctx.color("section_headers"))
    return row
