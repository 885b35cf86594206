import os
from pathlib import Path


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in ("0", "false", "no", "disabled")

# File paths
OUTPUT_DIR       = Path(os.getenv("PLANNER_OUTPUT_DIR", "."))
DATES_PATH       = Path(os.getenv("PLANNER_DATES_PATH", "config/dates.yml"))
COLLECTIONS_PATH = Path(os.getenv("PLANNER_COLLECTIONS_PATH", "config/collections.yml"))
FONTS_DIR        = os.getenv("PLANNER_FONTS_DIR")

# Page geometry (US Letter, 5mm dot grid)
PAGE_WIDTH  = 612.0
PAGE_HEIGHT = 792.0
BOX_SIZE    = 14.17
DOT_RADIUS  = 0.5

# Theme
THEME = os.getenv("PLANNER_THEME", "light").strip().lower()

# Optional page groups
INDEX_PAGES       = int(os.getenv("PLANNER_INDEX_PAGES", "2"))
FUTURE_LOG        = _flag("PLANNER_FUTURE_LOG", "true")
QUARTERLY         = _flag("PLANNER_QUARTERLY", "true")
MONTHLY_REVIEWS   = _flag("PLANNER_REVIEWS", "true")
FUTURE_LOG_PAGES  = 2
MULTI_YEAR_COUNT  = int(os.getenv("PLANNER_MULTI_YEAR_COUNT", "4"))

# Weekly page
DAY_LINES = int(os.getenv("PLANNER_DAY_LINES", "4"))
WEEK_START = os.getenv("PLANNER_WEEK_START", "monday").strip().lower()

# Fonts
FONT_REGULAR = "Helvetica"
FONT_BOLD    = "Helvetica-Bold"
FONT_ITALIC  = "Helvetica-Oblique"

# Document metadata
AUTHOR = os.getenv("PLANNER_AUTHOR", "bujo-planner")
