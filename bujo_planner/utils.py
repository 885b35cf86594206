import re
from datetime import date

import webcolors
from loguru import logger

_HEX_RE = re.compile(r'#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})')


def css_color_to_hex(name_or_hex: str) -> str:
    """
    Convert a CSS color name, functional gray(%), or hex code to a '#RRGGBB' string.

    - Accepts hex with or without the leading '#' (YAML files often drop it),
      and expands 3-digit shorthand.
    - Parses CSS4 gray(%) syntax.
    - Falls back to standard CSS color names via webcolors.
    """
    raw = str(name_or_hex).strip()

    m_hex = _HEX_RE.fullmatch(raw)
    if m_hex:
        digits = m_hex.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits.upper()}"

    lower = raw.lower()

    m_pct = re.fullmatch(r'gr[ae]y\(\s*([0-9]+(?:\.[0-9]+)?)%\s*\)', lower)
    if m_pct:
        pct = float(m_pct.group(1))
        level = round(255 * pct / 100)
        return f"#{level:02X}{level:02X}{level:02X}"

    try:
        return webcolors.name_to_hex(lower).upper()
    except ValueError:
        logger.error("Unknown CSS color '{}'.", name_or_hex)
        raise


def slugify(title: str | None) -> str:
    """
    Turn a collection title into a destination-safe id.
    'Books to Read!' -> 'books_to_read'
    """
    if not title:
        return "collection"
    slug = re.sub(r'[^a-z0-9]+', '_', title.lower()).strip('_')
    return slug or "collection"


def parse_year(raw: str | int | None) -> int:
    """
    Parse a CLI year argument. Empty means the current year.
    Raises ValueError for anything that is not a year between 1 and 9998.
    """
    if raw is None or str(raw).strip() == "":
        return date.today().year
    s = str(raw).strip()
    if not re.fullmatch(r'\d{1,4}', s):
        raise ValueError(f"Invalid year: '{raw}'")
    year = int(s)
    if not (1 <= year <= 9998):
        raise ValueError(f"Year out of range [1-9998]: '{raw}'")
    return year
