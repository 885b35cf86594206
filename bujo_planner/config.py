from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

import yaml
from dateutil import parser as date_parser
from loguru import logger

from bujo_planner.utils import css_color_to_hex, slugify

DEFAULT_CATEGORIES = {
    "holiday":  {"color": "FFE5E5", "text_color": "CC0000", "icon": "*"},
    "personal": {"color": "E5F0FF", "text_color": "0066CC", "icon": "+"},
    "work":     {"color": "FFF5E5", "text_color": "CC7700", "icon": "#"},
    "other":    {"color": "F0F0F0", "text_color": "666666", "icon": "o"},
}

DEFAULT_PRIORITIES = {
    "high":   {"border_width": 1.5, "bold": True},
    "normal": {"border_width": 0.5, "bold": False},
}


@dataclass(frozen=True)
class HighlightedDate:
    date: date
    label: str
    category: str = "other"
    priority: str = "normal"
    color: str | None = None
    text_color: str | None = None


@dataclass
class DatesConfig:
    dates: list[HighlightedDate] = field(default_factory=list)
    categories: dict = field(default_factory=lambda: {k: _normalize_style(v) for k, v in DEFAULT_CATEGORIES.items()})
    priorities: dict = field(default_factory=lambda: {k: dict(v) for k, v in DEFAULT_PRIORITIES.items()})

    def date_for_day(self, d: date) -> HighlightedDate | None:
        return next((h for h in self.dates if h.date == d), None)

    def dates_for_month(self, month: int, year: int | None = None) -> list[HighlightedDate]:
        return [h for h in self.dates if h.date.month == month and (year is None or h.date.year == year)]

    def category_style(self, name: str) -> dict:
        return self.categories.get(name) or self.categories["other"]

    def priority_style(self, name: str) -> dict:
        return self.priorities.get(name) or self.priorities["normal"]


@dataclass(frozen=True)
class Collection:
    id: str
    title: str
    subtitle: str | None = None

    @property
    def dest(self) -> str:
        return f"collection_{self.id}"


def _read_yaml(path: Path) -> dict | None:
    if not path.is_file():
        logger.debug("No config at {}, skipping", path)
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            logger.debug("Loading configuration from {}", path)
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("YAML syntax error in {}: {}", path, e)
        return None
    except ValueError as e:
        # PyYAML builds dates while parsing; 2025-02-30 fails here
        logger.warning("Invalid value in {}: {}", path, e)
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("Invalid config format in {}, expected a mapping", path)
        return None
    return data


def _to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(str(value)).date()


def _normalize_style(style: dict) -> dict:
    out = dict(style)
    for key in ("color", "text_color"):
        if out.get(key):
            out[key] = css_color_to_hex(out[key])
    return out


def _styles(data: dict, section: str) -> dict[str, dict]:
    """The `section` mapping of name -> style dict; anything else is dropped with a warning."""
    styles = data.get(section) or {}
    if not isinstance(styles, dict):
        logger.warning("Invalid {} in config, expected a mapping; using defaults", section)
        return {}
    valid = {}
    for name, style in styles.items():
        if not isinstance(style, dict):
            logger.warning("Invalid style for {} '{}': {!r}, using default", section, name, style)
            continue
        valid[str(name)] = style
    return valid


def load_dates_config(path: str | Path, year: int | None = None) -> DatesConfig:
    """
    Load highlighted dates. A missing or unreadable file yields an empty
    config; entries that cannot be parsed are skipped with a warning.
    """
    config = DatesConfig()
    data = _read_yaml(Path(path))
    if not data:
        return config

    if year and data.get("year") and data["year"] != year:
        logger.warning("Config year ({}) doesn't match planner year ({})", data["year"], year)

    for name, style in _styles(data, "categories").items():
        try:
            config.categories[name] = _normalize_style(style)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid style for category '{}': {}", name, e)
            config.categories[name] = _normalize_style(DEFAULT_CATEGORIES.get(name, DEFAULT_CATEGORIES["other"]))

    for name, style in _styles(data, "priorities").items():
        default = DEFAULT_PRIORITIES.get(name, DEFAULT_PRIORITIES["normal"])
        try:
            config.priorities[name] = {
                "border_width": float(style.get("border_width", default["border_width"])),
                "bold": bool(style.get("bold", default["bold"])),
            }
        except (TypeError, ValueError) as e:
            logger.warning("Invalid style for priority '{}': {}", name, e)
            config.priorities[name] = dict(default)

    for entry in data.get("dates") or []:
        try:
            config.dates.append(HighlightedDate(
                date=_to_date(entry["date"]),
                label=str(entry["label"]),
                category=entry.get("category", "other"),
                priority=entry.get("priority", "normal"),
                color=css_color_to_hex(entry["color"]) if entry.get("color") else None,
                text_color=css_color_to_hex(entry["text_color"]) if entry.get("text_color") else None,
            ))
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.warning("Skipping invalid date: {!r} - {}", entry, e)

    config.dates.sort(key=lambda h: h.date)
    logger.debug("Loaded {} highlighted dates", len(config.dates))
    return config


def load_collections(path: str | Path) -> list[Collection]:
    """Collection pages from YAML; ids are slugged from the title when missing."""
    data = _read_yaml(Path(path))
    if not data:
        return []

    collections = []
    seen = set()
    for entry in data.get("collections") or []:
        if not isinstance(entry, dict):
            logger.warning("Skipping invalid collection: {!r}", entry)
            continue
        title = entry.get("title") or "Untitled Collection"
        cid = slugify(str(entry["id"])) if entry.get("id") else slugify(entry.get("title"))
        if cid in seen:
            logger.warning("Skipping duplicate collection id '{}'", cid)
            continue
        seen.add(cid)
        collections.append(Collection(id=cid, title=str(title), subtitle=entry.get("subtitle")))
    logger.debug("Loaded {} collections", len(collections))
    return collections
