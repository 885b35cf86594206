from pathlib import Path
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from loguru import logger

import bujo_planner.settings as settings

# Registered name -> file name expected inside the fonts directory
CUSTOM_FONTS = [
    ("PlannerSans",        "PlannerSans-Regular.ttf"),
    ("PlannerSans-Bold",   "PlannerSans-Bold.ttf"),
    ("PlannerSans-Italic", "PlannerSans-Italic.ttf"),
]

BUILTIN_FONTS = {
    "regular": "Helvetica",
    "bold":    "Helvetica-Bold",
    "italic":  "Helvetica-Oblique",
}


def init_fonts(fonts_dir: Path | str | None = None) -> dict[str, str]:
    """
    Register the planner fonts with ReportLab and return the role -> font name map.

    Without a fonts directory (argument or PLANNER_FONTS_DIR) the built-in
    Helvetica family is used. With one, every file in CUSTOM_FONTS must exist.
    """
    base = fonts_dir or settings.FONTS_DIR
    if not base:
        logger.debug("No fonts directory configured, using built-in Helvetica")
        return dict(BUILTIN_FONTS)

    base = Path(base)
    for name, fname in CUSTOM_FONTS:
        font_path = (base / fname).resolve()
        if not font_path.is_file():
            msg = f"Font '{fname}' not found in: {base}"
            logger.error("{}", msg)
            raise FileNotFoundError(msg)
        logger.debug("Loading font {} from {}", name, str(font_path))
        pdfmetrics.registerFont(TTFont(name, str(font_path)))

    return {
        "regular": "PlannerSans",
        "bold":    "PlannerSans-Bold",
        "italic":  "PlannerSans-Italic",
    }
