from datetime import date

import pytest

import bujo_planner.settings as settings
from bujo_planner.fonts import BUILTIN_FONTS, init_fonts
from bujo_planner.themes import THEMES, available_themes, get_theme
from bujo_planner.utils import css_color_to_hex, parse_year, slugify


def test_available_themes():
    assert available_themes() == ["dark", "earth", "light"]


@pytest.mark.parametrize("name", ["dark", "Dark", " DARK "])
def test_get_theme_normalizes_name_and_colors(name):
    theme = get_theme(name)
    assert theme["name"] == "Dark"
    assert theme["colors"]["background"] == "#1E1E1E"


def test_default_theme_is_light():
    assert get_theme()["colors"]["background"] == "#FFFFFF"


def test_unknown_theme():
    with pytest.raises(ValueError):
        get_theme("neon")


def test_themes_share_color_roles():
    roles = {frozenset(t["colors"]) for t in THEMES.values()}
    assert len(roles) == 1


@pytest.mark.parametrize("raw, expected", [
    ("FFE5E5", "#FFE5E5"),
    ("#abc", "#AABBCC"),
    ("fff", "#FFFFFF"),
    ("gray(50%)", "#808080"),
    ("grey(0%)", "#000000"),
    ("red", "#FF0000"),
    ("DarkSlateGray", "#2F4F4F"),
])
def test_css_color_to_hex(raw, expected):
    assert css_color_to_hex(raw) == expected


def test_css_color_unknown():
    with pytest.raises(ValueError):
        css_color_to_hex("not-a-color")


@pytest.mark.parametrize("title, slug", [
    ("Books to Read!", "books_to_read"),
    ("  Travel -- 2025 ", "travel_2025"),
    ("!!!", "collection"),
    (None, "collection"),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_parse_year():
    assert parse_year("2024") == 2024
    assert parse_year(" 7 ") == 7
    assert parse_year(None) == date.today().year
    assert parse_year("") == date.today().year


@pytest.mark.parametrize("raw", ["abc", "0", "9999", "10000", "-5", "20.5"])
def test_parse_year_rejects(raw):
    with pytest.raises(ValueError):
        parse_year(raw)


def test_builtin_fonts_without_directory(monkeypatch):
    monkeypatch.setattr(settings, "FONTS_DIR", None)
    assert init_fonts() == BUILTIN_FONTS


def test_missing_font_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        init_fonts(tmp_path)
