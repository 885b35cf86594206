from datetime import date

import pytest

from conftest import rects, texts

from bujo_planner import layout
from bujo_planner.components import DOT_STAMP, RenderContext, define_dot_grid
from bujo_planner.config import Collection, DatesConfig, HighlightedDate
from bujo_planner.generator import build_page_plan
from bujo_planner.grid import GridSystem
from bujo_planner.renderers import RENDERERS, SHOWCASE_QUADRANTS
from bujo_planner.themes import get_theme

YEAR = 2025
COLLECTION = Collection("books", "Books to Read", "Title and author")


@pytest.fixture
def plan():
    return build_page_plan(YEAR, index_pages=2, future_log=True, quarterly=True, reviews=True,
                           collections=[COLLECTION], multi_year_count=4)


@pytest.fixture
def render(surface, plan):
    def _render(key, theme="light", dates_config=None, first_day="monday"):
        page = next(p for p in plan if p.key == key)
        ctx = RenderContext(
            surface=surface,
            grid=GridSystem(),
            theme=get_theme(theme),
            year=YEAR,
            dates_config=dates_config or DatesConfig(),
            destinations=frozenset(p.dest for p in plan),
            first_day=first_day,
        )
        define_dot_grid(surface, ctx.grid, ctx.color("dot_grid"))
        surface.start_page()
        RENDERERS[page.kind](ctx, page)
        return surface.page
    return _render


def link_dests(page):
    return [dest for dest, _ in page["links"]]


def test_every_page_kind_has_a_renderer(plan):
    assert {p.kind for p in plan} <= set(RENDERERS)


def test_year_events_march_15_link(render, grid):
    page = render("year_events")
    cell = next(c for c in layout.year_at_glance_cells(grid, YEAR) if (c["month"], c["day"]) == (3, 15))
    assert ("week_11", grid.link_bounds(*cell["cell"])) in page["links"]


def test_year_events_invalid_cells_are_inert(render, grid):
    page = render("year_events")
    overlays = [r for r in rects(page) if r["fill"] == "#000000" and r["alpha"] == 0.2]
    assert len(overlays) == 12 * 31 - 365

    day_links = {c["link"] for c in layout.year_at_glance_cells(grid, YEAR) if c["valid"]}
    invalid_bounds = {c["link"] for c in layout.year_at_glance_cells(grid, YEAR) if not c["valid"]}
    bounds = [b for _, b in page["links"]]
    assert sum(b in day_links for b in bounds) == 365
    assert not any(b in invalid_bounds for b in bounds)


def test_month_headers_linked(render, grid):
    page = render("year_events")
    march = layout.month_header_cells(grid, YEAR)[2]
    assert ("week_9", march["link"]) in page["links"]
    assert "Mar" in texts(page)


def test_year_highlights(render):
    dates_config = DatesConfig(dates=[HighlightedDate(date(YEAR, 7, 4), "Independence Day", "holiday", "high")])
    page = render("year_highlights", dates_config=dates_config)
    assert any(t.startswith("* Indep") for t in texts(page))
    assert any(r["stroke"] == "#CC0000" and r["line_width"] == 1.5 for r in rects(page))
    assert {"Legend", "* Holiday", "High priority", "Normal priority"} <= set(texts(page))


def test_weekly_page(render):
    page = render("week_10")
    t = texts(page)
    assert "Week 10: Mar 3 - Mar 9, 2025" in t
    assert {"Monday", "Sunday", "3/3", "3/9", "Cues/Questions", "Notes", "Summary"} <= set(t)
    assert [t.count(label) for label in ("AM", "PM", "EVE")] == [1, 1, 1]
    weekend = [r for r in rects(page) if r["fill"] == "#CCCCCC" and r["alpha"] == 0.1]
    assert len(weekend) == 2


def test_weekly_navigation_links(render):
    dests = link_dests(render("week_10"))
    assert {"seasonal", "week_9", "week_11"} <= set(dests)
    assert "week_10" not in dests


def test_weekly_page_shows_highlight(render):
    dates_config = DatesConfig(dates=[HighlightedDate(date(YEAR, 3, 5), "Dentist", "personal")])
    assert "Dentist" in texts(render("week_10", dates_config=dates_config))


def test_right_sidebar_skips_current_page(render):
    dests = link_dests(render("year_events"))
    assert "year_events" not in dests
    assert {"seasonal", "year_highlights", "multi_year", "index_1", "future_log_1", "grid_showcase"} <= set(dests)


def test_seasonal_page(render, grid):
    page = render("seasonal")
    t = texts(page)
    assert t.count("Winter") == 2
    assert {"2025", "Spring", "Summer", "Fall", "January", "December"} <= set(t)
    march = next(m for s in layout.seasonal_layout(grid, YEAR) for m in s["months"] if m["month"] == 3)
    day_15 = march["days"][14]
    assert ("week_11", day_15["link"]) in page["links"]
    assert "seasonal" not in link_dests(page)


def test_index_page(render):
    t = texts(render("index_1"))
    assert "Index (1/2)" in t
    assert t.count("Topic") == 2


def test_future_log_page(render):
    t = texts(render("future_log_2"))
    assert "July" in t and "December" in t
    assert "January" not in t


def test_quarterly_page(render):
    t = texts(render("quarter_1"))
    assert "Q1 2025 Planning" in t
    assert "w01  Dec 30 - Jan 5" in t
    assert "w14  Mar 31 - Apr 6" in t
    assert not any(x.startswith("w15  ") for x in t)


def test_monthly_review_page(render):
    page = render("review_3")
    t = texts(page)
    assert "March Review" in t
    assert {"What went well?", "What could be improved?", "Focus for next month"} <= set(t)
    assert "Go to week 9 >" in t
    assert "week_9" in link_dests(page)


def test_collection_page(render):
    t = texts(render("collection_books"))
    assert "Books to Read" in t and "Title and author" in t


def test_reference_page_has_no_navigation(render):
    page = render("reference")
    assert page["links"] == []
    assert "Grid 43 x 55 boxes, 14.17pt per box" in texts(page)


def test_dot_grid_page_uses_stamp(render):
    page = render("dots")
    assert ("stamp", {"name": DOT_STAMP}) in page["ops"]


def test_dark_background(render):
    kind, first = render("dots", theme="dark")["ops"][0]
    assert kind == "rect"
    assert first["fill"] == "#1E1E1E"
    assert (first["width"], first["height"]) == (612.0, 792.0)


def test_light_background_not_painted(render):
    kind, first = render("dots")["ops"][0]
    assert kind == "stamp"


def ops(page, kind):
    return [data for k, data in page["ops"] if k == kind]


def test_weekly_page_sunday_first(render):
    page = render("week_10", first_day="sunday")
    t = texts(page)
    assert t.index("Sunday") < t.index("Monday") < t.index("Saturday")
    assert t.index("3/9") < t.index("3/3")
    assert t.count("AM") == 1
    weekend = [r for r in rects(page) if r["fill"] == "#CCCCCC" and r["alpha"] == 0.1]
    assert len(weekend) == 2


def test_future_log_lists_known_dates(render):
    dates_config = DatesConfig(dates=[
        HighlightedDate(date(YEAR - 1, 7, 4), "Last Year", "holiday"),
        HighlightedDate(date(YEAR, 7, 4), "Independence Day", "holiday"),
        HighlightedDate(date(YEAR, 8, 15), "Trip", "personal"),
    ])
    t = texts(render("future_log_2", dates_config=dates_config))
    assert "4  Independence Day" in t
    assert "15  Trip" in t
    assert not any("Last Year" in x for x in t)


def test_multi_year_page(render, grid):
    page = render("multi_year")
    t = texts(page)
    assert {"2025", "2026", "2027", "2028", "Jan", "Dec"} <= set(t)
    march = layout.multi_year_layout(grid, YEAR, 4)["months"][2]
    assert ("week_9", grid.link_bounds(*march["label_cell"])) in page["links"]
    assert "multi_year" not in link_dests(page)


def test_grids_tab_opens_showcase_from_outside_the_group(render):
    assert "grid_showcase" in link_dests(render("year_events"))


def test_grids_tab_cycles_inside_the_group(render):
    page = render("grids_overview")
    dests = link_dests(page)
    # sample boxes plus the tab, which moves on to the next grid page
    assert dests.count("dots") == 2
    assert {"grid_graph", "grid_lined"} <= set(dests)
    assert "grids_overview" not in dests
    assert {"Grid Reference", "Dot Grid", "Graph Grid", "Ruled Lines"} <= set(texts(page))
    assert texts(page).count("Tap to view full page") == 3


def test_grid_showcase_quadrants_link_full_pages(render, grid):
    page = render("grid_showcase")
    assert page["links"] == [
        (dest, grid.link_bounds(*quadrant))
        for _, dest, _, quadrant in SHOWCASE_QUADRANTS
    ]
    assert {"Grid Types", "Visual Reference & Templates", "Hexagon"} <= set(texts(page))
    assert len(ops(page, "lines")) == 3


@pytest.mark.parametrize("key, width", [
    ("grid_graph", 0.25), ("grid_isometric", 0.25), ("grid_perspective", 0.35), ("grid_hexagon", 0.35),
])
def test_grid_page_draws_pattern(render, key, width):
    page = render(key)
    lines = ops(page, "lines")
    assert len(lines) == 1
    assert lines[0]["color"] == "#CCCCCC"
    assert lines[0]["line_width"] == width
    for (x1, y1), (x2, y2) in lines[0]["segments"]:
        assert -0.01 <= min(x1, x2) and max(x1, x2) <= 612.01
        assert -0.01 <= min(y1, y2) and max(y1, y2) <= 792.01


def test_lined_page_has_margin_line(render, grid):
    page = render("grid_lined")
    margin = [line for line in ops(page, "line") if line["color"] == "#FFCCCC"]
    assert len(margin) == 1
    assert margin[0]["x1"] == margin[0]["x2"] == pytest.approx(grid.x(3))


def test_grid_page_navigation(render):
    page = render("grid_graph")
    assert link_dests(page) == ["grids_overview", "grid_lined"]
    assert {"< Grids", "Graph Grid (5mm)", "next >"} <= set(texts(page))


def test_last_grid_page_wraps_to_showcase(render):
    assert link_dests(render("grid_hexagon")) == ["grids_overview", "grid_showcase"]


def test_tracker_page(render, grid):
    page = render("tracker_example")
    t = texts(page)
    assert {"Tracker Ideas", "Habit Tracker", "Mood / Energy Log", "More Ideas"} <= set(t)
    assert {"Exercise", "Water", "Sleep (hrs)", "- Reading log (pages/books)"} <= set(t)
    assert [t.index(day) for day in ("1", "7", "14", "21", "28", "31")] == sorted(
        t.index(day) for day in ("1", "7", "14", "21", "28", "31"))
    habit_boxes = [r for r in rects(page) if r["width"] == pytest.approx(grid.width(0.8))]
    assert len(habit_boxes) == 5 * 31
    mood_cells = [r for r in rects(page) if r["width"] == pytest.approx(grid.width(3))
                  and r["height"] == pytest.approx(grid.height(2))]
    assert len(mood_cells) == 3 * 7
    assert page["links"] == []


def test_tracker_week_follows_week_start(render):
    t = texts(render("tracker_example", first_day="sunday"))
    assert t.index("Sun") < t.index("Mon") < t.index("Sat")


def test_daily_wheel_page(render):
    page = render("daily_wheel")
    lines = ops(page, "lines")
    assert len(lines) == 48
    assert sorted({line["line_width"] for line in lines}) == [0.25, 0.75]
    shaded = ops(page, "polygon")
    assert len(shaded) == 18
    assert all(p["alpha"] == 0.2 and p["fill"] == "#CCCCCC" for p in shaded)
    assert len(ops(page, "circle")) == 4
    assert [str(h) for h in range(24)] == [x for x in texts(page)]
    assert page["links"] == []


def test_year_wheel_page(render):
    page = render("year_wheel")
    divisions, mondays, months = ops(page, "lines")
    assert len(divisions["segments"]) == 365 * 4
    assert len(mondays["segments"]) == 52
    assert len(months["segments"]) == 12
    assert len(ops(page, "polygon")) == 104
    assert texts(page) == ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    assert link_dests(page)[:3] == ["week_1", "week_5", "week_9"]
    assert len(page["links"]) == 12
