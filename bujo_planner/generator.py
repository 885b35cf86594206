"""
Planner assembly.

Generation runs in two phases. `build_page_plan` walks the whole document
first and fixes the page order and the destination name of every page.
`render_document` then draws the pages in that order, registering each
destination on its page, so links can point at pages that come later. The
reportlab writer resolves the names when the file is saved, once, at the end.
"""
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile

from loguru import logger

import bujo_planner.settings as settings
from bujo_planner import dates, layout
from bujo_planner.components import RenderContext, define_dot_grid
from bujo_planner.config import Collection, DatesConfig
from bujo_planner.fonts import BUILTIN_FONTS
from bujo_planner.grid import GridConfig, GridSystem
from bujo_planner.patterns import GRID_PAGES
from bujo_planner.renderers import RENDERERS
from bujo_planner.surface import DrawingSurface, ReportLabSurface
from bujo_planner.themes import get_theme

QUARTER_START_MONTHS = {1: 1, 4: 2, 7: 3, 10: 4}


@dataclass
class PagePlan:
    key: str
    kind: str
    title: str
    section: str
    params: dict = field(default_factory=dict)
    month: int | None = None

    @property
    def dest(self) -> str:
        return self.key


@dataclass
class OutlineEntry:
    title: str
    dest: str
    level: int
    closed: bool = False
    key: str = ""


def _month_span(months) -> str:
    return f"{dates.MONTH_NAMES[months[0] - 1][:3]}-{dates.MONTH_NAMES[months[-1] - 1][:3]}"


def build_page_plan(
    year: int,
    index_pages: int = settings.INDEX_PAGES,
    future_log: bool = settings.FUTURE_LOG,
    quarterly: bool = settings.QUARTERLY,
    reviews: bool = settings.MONTHLY_REVIEWS,
    collections: list[Collection] | None = None,
    line_count: int = settings.DAY_LINES,
    multi_year_count: int = settings.MULTI_YEAR_COUNT,
) -> list[PagePlan]:
    """
    Every page of the planner in output order. Each page has a unique key,
    which is also its named destination.
    """
    plan = [PagePlan("seasonal", "seasonal", "Seasonal Calendar", "overview")]

    for n in range(1, max(0, index_pages) + 1):
        plan.append(PagePlan(f"index_{n}", "index", f"Index {n}", "front",
                             {"number": n, "count": index_pages}))

    if future_log:
        per_page = 12 // settings.FUTURE_LOG_PAGES
        for n in range(1, settings.FUTURE_LOG_PAGES + 1):
            months = list(range((n - 1) * per_page + 1, n * per_page + 1))
            plan.append(PagePlan(f"future_log_{n}", "future_log", f"Future Log ({_month_span(months)})",
                                 "front", {"number": n, "months": months}))

    plan.append(PagePlan("year_events", "year_events", "Year Events", "overview"))
    plan.append(PagePlan("year_highlights", "year_highlights", "Year Highlights", "overview"))
    if multi_year_count > 0:
        plan.append(PagePlan("multi_year", "multi_year", f"{year}-{year + multi_year_count - 1} Overview",
                             "overview", {"count": multi_year_count}))

    current_month = None
    for week in range(1, dates.total_weeks(year) + 1):
        month = dates.month_for_week(year, week)
        if month != current_month:
            current_month = month
            if quarterly and month in QUARTER_START_MONTHS:
                q = QUARTER_START_MONTHS[month]
                plan.append(PagePlan(f"quarter_{q}", "quarterly", f"Q{q} Planning", "weekly",
                                     {"quarter": q}, month=month))
            if reviews:
                plan.append(PagePlan(f"review_{month}", "review", f"{dates.MONTH_NAMES[month - 1]} Review",
                                     "weekly", {"month": month}, month=month))
        start, end = dates.week_start(year, week), dates.week_end(year, week)
        plan.append(PagePlan(layout.week_dest(week), "weekly",
                             f"Week {week} ({start:%b} {start.day} - {end:%b} {end.day})", "weekly",
                             {"week": week, "line_count": line_count}, month=month))

    plan.append(PagePlan("grid_showcase", "grid_showcase", "Grid Types", "grids"))
    plan.append(PagePlan("grids_overview", "grids_overview", "Grid Reference", "grids"))
    for dest, title, pattern in GRID_PAGES:
        plan.append(PagePlan(dest, "grid", title, "grids", {"pattern": pattern}))

    plan.append(PagePlan("tracker_example", "tracker", "Tracker Ideas", "templates"))
    plan.append(PagePlan("reference", "reference", "Reference", "templates"))
    plan.append(PagePlan("daily_wheel", "daily_wheel", "Daily Wheel", "templates"))
    plan.append(PagePlan("year_wheel", "year_wheel", "Year Wheel", "templates"))

    for collection in collections or []:
        plan.append(PagePlan(collection.dest, "collection", collection.title, "collections",
                             {"collection": collection}))

    keys = [page.key for page in plan]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        raise ValueError(f"Duplicate page destinations: {', '.join(duplicates)}")

    logger.debug("Planned {} pages for {}", len(plan), year)
    return plan


def build_outline(plan: list[PagePlan], year: int) -> list[OutlineEntry]:
    """
    Outline tree in document order:

        <year> Overview  > seasonal, events, highlights, multi-year
        Front Matter     > index and future log pages
        Weekly Pages     > one entry per month > quarter, review and week pages
        Grids            > showcase, overview and the full-page grids
        Templates        > tracker, reference and the wheels
        Collections      > one entry per collection

    Each entry gets its own bookmark key; the first entry pointing at a page
    reuses the page's destination, later ones get `outline_N` on the same page.
    """
    entries: list[OutlineEntry] = []

    def section(name: str, title: str, children):
        pages = [p for p in plan if p.section == name]
        if not pages:
            return
        entries.append(OutlineEntry(title, pages[0].dest, 0))
        children(pages)

    def flat(pages):
        for p in pages:
            entries.append(OutlineEntry(p.title, p.dest, 1))

    def by_month(pages):
        seen = []
        for p in pages:
            if p.month not in seen:
                seen.append(p.month)
                entries.append(OutlineEntry(dates.MONTH_NAMES[p.month - 1], p.dest, 1, closed=True))
            entries.append(OutlineEntry(p.title, p.dest, 2))

    section("overview", f"{year} Overview", flat)
    section("front", "Front Matter", flat)
    section("weekly", "Weekly Pages", by_month)
    section("grids", "Grids", flat)
    section("templates", "Templates", flat)
    section("collections", "Collections", flat)

    used = set()
    for i, entry in enumerate(entries):
        if entry.dest in used:
            entry.key = f"outline_{i}"
        else:
            entry.key = entry.dest
            used.add(entry.dest)
    return entries


def render_document(
    surface: DrawingSurface,
    year: int,
    plan: list[PagePlan],
    theme: dict,
    dates_config: DatesConfig | None = None,
    fonts: dict | None = None,
    grid: GridSystem | None = None,
    first_day: str = "monday",
) -> int:
    """Draw every planned page onto `surface`, then the outline and metadata. Returns the page count."""
    grid = grid or GridSystem()
    ctx = RenderContext(
        surface=surface,
        grid=grid,
        theme=theme,
        year=year,
        fonts=fonts or dict(BUILTIN_FONTS),
        dates_config=dates_config or DatesConfig(),
        destinations=frozenset(page.dest for page in plan),
        first_day=first_day,
    )
    outline = build_outline(plan, year)
    extra_keys: dict[str, list[str]] = {}
    for entry in outline:
        if entry.key != entry.dest:
            extra_keys.setdefault(entry.dest, []).append(entry.key)

    # Forms must exist before the first page's content stream
    define_dot_grid(surface, grid, theme["colors"]["dot_grid"])

    for number, page in enumerate(plan, start=1):
        surface.start_page()
        surface.add_destination(page.dest)
        for key in extra_keys.get(page.dest, ()):
            surface.add_destination(key)
        logger.debug("Page {}: {} ({})", number, page.key, page.kind)
        RENDERERS[page.kind](ctx, page)
        surface.finish_page()

    for entry in outline:
        surface.add_outline_entry(entry.title, entry.key, level=entry.level, closed=entry.closed)

    surface.set_metadata(
        title=f"{year} Planner",
        author=settings.AUTHOR,
        subject=f"Bullet journal planner for {year} ({theme['name']} theme)",
        creator="bujo-planner",
    )
    return len(plan)


def generate_planner(
    year: int,
    output_path: str | Path,
    theme: str | dict | None = None,
    dates_config: DatesConfig | None = None,
    collections: list[Collection] | None = None,
    fonts: dict | None = None,
    grid_config: GridConfig | None = None,
    first_day: str = settings.WEEK_START,
    **plan_options,
) -> Path:
    """
    Build the planner PDF for `year` at `output_path`.

    The document is written to a temporary file next to the target and moved
    into place only after a successful save, so a failed run leaves nothing
    at `output_path`.
    """
    if first_day not in dates.WEEK_STARTS:
        raise ValueError(f"Unknown week start '{first_day}', expected one of {', '.join(dates.WEEK_STARTS)}")
    started = time.perf_counter()
    output_path = Path(output_path)
    palette = theme if isinstance(theme, dict) else get_theme(theme or settings.THEME)
    grid = GridSystem(grid_config)

    plan = build_page_plan(year, collections=collections, **plan_options)
    logger.info("Generating {} planner: {} pages, {} theme", year, len(plan), palette["name"])

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile(suffix=".pdf", dir=output_path.parent, delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        surface = ReportLabSurface(tmp_path, grid.config.page_width, grid.config.page_height)
        render_document(surface, year, plan, palette, dates_config, fonts, grid, first_day)
        surface.save()
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info("Wrote {} in {:.2f}s", output_path, time.perf_counter() - started)
    return output_path
