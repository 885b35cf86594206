from datetime import date

import pytest
from loguru import logger
from PyPDF2 import PdfReader

import main
from bujo_planner import dates, layout
from bujo_planner.config import Collection
from bujo_planner.generator import build_page_plan, generate_planner
from bujo_planner.grid import GridSystem

MINIMAL = dict(index_pages=0, future_log=False, quarterly=False, reviews=False, multi_year_count=4)


def _flatten(outline):
    for item in outline:
        if isinstance(item, list):
            yield from _flatten(item)
        else:
            yield item


def _target_page(reader, annot):
    dest = annot["/Dest"] if "/Dest" in annot else annot["/A"]["/D"]
    dest = dest.get_object()
    if isinstance(dest, str):
        return reader.get_destination_page_number(reader.named_destinations[dest.lstrip("/")])
    page_ids = {page.indirect_reference.idnum: i for i, page in enumerate(reader.pages)}
    return page_ids[dest[0].idnum]


@pytest.fixture(scope="module")
def planner_2024(tmp_path_factory):
    out = tmp_path_factory.mktemp("out") / "planner_2024.pdf"
    generate_planner(2024, out, theme="light", **MINIMAL)
    return out


def test_page_count(planner_2024):
    reader = PdfReader(str(planner_2024))
    assert len(reader.pages) == len(build_page_plan(2024, **MINIMAL)) == 1 + 2 + 1 + 53 + 8 + 4


def test_letter_page_size(planner_2024):
    box = PdfReader(str(planner_2024)).pages[0].mediabox
    assert (float(box.width), float(box.height)) == (612.0, 792.0)


def test_outline(planner_2024):
    reader = PdfReader(str(planner_2024))
    entries = list(_flatten(reader.outline))
    titles = [e.title for e in entries]
    assert titles[0] == "2024 Overview"
    assert {"Weekly Pages", "Grids", "Templates", "2024-2027 Overview", "Year Wheel"} <= set(titles)
    assert "Week 53 (Dec 30 - Jan 5)" in titles

    plan_keys = [p.key for p in build_page_plan(2024, **MINIMAL)]
    week_53 = next(e for e in entries if e.title.startswith("Week 53"))
    assert reader.get_destination_page_number(week_53) == plan_keys.index("week_53")


def test_march_15_link_targets_its_week(planner_2024):
    reader = PdfReader(str(planner_2024))
    plan_keys = [p.key for p in build_page_plan(2024, **MINIMAL)]
    grid = GridSystem()
    cell = next(c for c in layout.year_at_glance_cells(grid, 2024) if (c["month"], c["day"]) == (3, 15))
    expected_dest = f"week_{dates.week_number_for_date(date(2024, 3, 15))}"
    assert cell["dest"] == expected_dest

    page = reader.pages[plan_keys.index("year_events")]
    targets = []
    for annot in page["/Annots"]:
        annot = annot.get_object()
        rect = [float(v) for v in annot["/Rect"]]
        if all(abs(a - b) < 0.05 for a, b in zip(rect, cell["link"])):
            targets.append(_target_page(reader, annot))
    assert targets
    assert set(targets) == {plan_keys.index(expected_dest)}


def test_grid_page_next_link_targets_following_grid(planner_2024):
    reader = PdfReader(str(planner_2024))
    plan_keys = [p.key for p in build_page_plan(2024, **MINIMAL)]
    page = reader.pages[plan_keys.index("grid_hexagon")]
    targets = {_target_page(reader, annot.get_object()) for annot in page["/Annots"]}
    # last grid wraps to the showcase; the header also links back to the overview
    assert targets == {plan_keys.index("grid_showcase"), plan_keys.index("grids_overview")}


def test_unknown_week_start_rejected(tmp_path):
    out = tmp_path / "planner.pdf"
    with pytest.raises(ValueError):
        generate_planner(2025, out, first_day="friday", **MINIMAL)
    assert list(tmp_path.iterdir()) == []


def test_failed_generation_leaves_no_file(tmp_path, monkeypatch):
    from bujo_planner import generator

    def boom(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(generator, "render_document", boom)
    out = tmp_path / "planner.pdf"
    with pytest.raises(RuntimeError):
        generate_planner(2025, out, **MINIMAL)
    assert list(tmp_path.iterdir()) == []


def test_full_planner_with_collections(tmp_path):
    out = tmp_path / "full.pdf"
    collections = [Collection("books", "Books to Read")]
    generate_planner(2025, out, theme="dark", collections=collections,
                     index_pages=2, future_log=True, quarterly=True, reviews=True)
    plan = build_page_plan(2025, collections=collections, index_pages=2, future_log=True,
                           quarterly=True, reviews=True)
    reader = PdfReader(str(out))
    assert len(reader.pages) == len(plan)
    assert reader.metadata.title == "2025 Planner"


# ── CLI ──────────────────────────────────────────────

@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_cli_generate(cli_env):
    out = cli_env / "p.pdf"
    code = main.main(["generate", "2025", "--output", str(out), "--theme", "earth",
                      "--dates", str(cli_env / "none.yml"), "--collections", str(cli_env / "none.yml")])
    assert code == 0
    assert out.is_file()


@pytest.mark.parametrize("year", ["abc", "0", "10000"])
def test_cli_rejects_invalid_year(cli_env, year):
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", year])
    assert exc.value.code == 2
    assert list(cli_env.iterdir()) == []


def test_cli_rejects_unknown_theme(cli_env):
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", "2025", "--theme", "neon"])
    assert exc.value.code == 2


def test_cli_generation_failure_exit_code(cli_env, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("backend failure")

    monkeypatch.setattr(main, "generate_planner", boom)
    assert main.main(["generate", "2025", "--output", str(cli_env / "x.pdf")]) == 1
    assert not (cli_env / "x.pdf").exists()


def test_cli_failure_traceback_lands_in_log_file(cli_env, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("backend failure")

    monkeypatch.delenv("APP_LOG_FILE", raising=False)
    monkeypatch.setattr(main, "generate_planner", boom)
    log_file = cli_env / "planner.log"
    try:
        code = main.main(["generate", "2025", "--output", str(cli_env / "x.pdf"),
                          "--log-file", str(log_file)])
    finally:
        logger.remove()
    assert code == 1
    text = log_file.read_text()
    assert "Planner generation failed for 2025" in text
    assert "RuntimeError: backend failure" in text


def test_cli_week_start_option(cli_env, monkeypatch):
    calls = []
    monkeypatch.setattr(main, "generate_planner", lambda *args, **kwargs: calls.append(kwargs))
    monkeypatch.setattr(main, "PdfReader", lambda path: type("Reader", (), {"pages": []})())
    code = main.main(["generate", "2025", "--output", str(cli_env / "x.pdf"), "--week-start", "sunday",
                      "--dates", str(cli_env / "none.yml"), "--collections", str(cli_env / "none.yml")])
    assert code == 0
    assert calls[0]["first_day"] == "sunday"


def test_cli_rejects_unknown_week_start(cli_env):
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", "2025", "--week-start", "friday"])
    assert exc.value.code == 2
