"""
Drawing surface used by the page renderers.

Renderers only ever talk to a DrawingSurface: shapes, text, links to named
destinations, destinations themselves and outline entries. ReportLabSurface
is the PDF backend. Coordinates are page points with a bottom-left origin;
rectangles passed here are anchored at their bottom-left corner (the grid
layer converts from its top-anchored rects).
"""
from pathlib import Path
from typing import Callable

from loguru import logger
from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas


class DrawingSurface:
    """Capability interface. Subclasses implement every method."""

    page_width: float
    page_height: float

    def start_page(self) -> None:
        raise NotImplementedError

    def finish_page(self) -> None:
        raise NotImplementedError

    def add_destination(self, name: str) -> None:
        raise NotImplementedError

    def add_link(self, dest: str, bounds: tuple[float, float, float, float]) -> None:
        """bounds: (left, bottom, right, top)."""
        raise NotImplementedError

    def draw_rect(self, x, y, width, height, *, stroke=None, fill=None,
                  line_width=0.5, radius=0, alpha=1.0) -> None:
        raise NotImplementedError

    def draw_line(self, x1, y1, x2, y2, *, color, line_width=0.5, dash=None) -> None:
        raise NotImplementedError

    def draw_circle(self, x, y, radius, *, fill=None, stroke=None) -> None:
        raise NotImplementedError

    def draw_lines(self, segments, *, color, line_width=0.25) -> None:
        """segments: iterable of ((x1, y1), (x2, y2)) drawn with one pen."""
        raise NotImplementedError

    def draw_polygon(self, points, *, fill=None, stroke=None, line_width=0.5, alpha=1.0) -> None:
        raise NotImplementedError

    def draw_text(self, x, y, text, *, font, size, color, align="left", angle=0) -> None:
        raise NotImplementedError

    def text_width(self, text: str, font: str, size: float) -> float:
        raise NotImplementedError

    def define_stamp(self, name: str, draw: Callable[["DrawingSurface"], None]) -> None:
        raise NotImplementedError

    def use_stamp(self, name: str) -> None:
        raise NotImplementedError

    def add_outline_entry(self, title: str, dest: str, level: int = 0, closed: bool = False) -> None:
        raise NotImplementedError

    def set_metadata(self, **meta) -> None:
        raise NotImplementedError

    def save(self) -> None:
        raise NotImplementedError


class ReportLabSurface(DrawingSurface):
    """
    DrawingSurface over a reportlab canvas. Named destinations are resolved
    by reportlab when the document is saved, so links may point forward to
    pages that have not been drawn yet.
    """

    def __init__(self, output_path: str | Path, page_width: float, page_height: float):
        self.output_path = str(output_path)
        self.page_width = page_width
        self.page_height = page_height
        self._c = canvas.Canvas(self.output_path, pagesize=(page_width, page_height))
        self._stamps: set[str] = set()
        self._pages = 0
        self._page_open = False

    @property
    def page_count(self) -> int:
        return self._pages

    # ── pages & navigation ───────────────────────────

    def start_page(self) -> None:
        if self._page_open:
            self.finish_page()
        self._page_open = True
        self._pages += 1

    def finish_page(self) -> None:
        if self._page_open:
            self._c.showPage()
            self._page_open = False

    def add_destination(self, name: str) -> None:
        self._c.bookmarkPage(name, fit="Fit")

    def add_link(self, dest: str, bounds) -> None:
        self._c.linkRect("", dest, tuple(bounds), relative=0, thickness=0)

    def add_outline_entry(self, title: str, dest: str, level: int = 0, closed: bool = False) -> None:
        self._c.addOutlineEntry(title, dest, level=level, closed=closed)

    def set_metadata(self, **meta) -> None:
        if meta.get("title"):
            self._c.setTitle(meta["title"])
        if meta.get("author"):
            self._c.setAuthor(meta["author"])
        if meta.get("subject"):
            self._c.setSubject(meta["subject"])
        if meta.get("creator"):
            self._c.setCreator(meta["creator"])

    def save(self) -> None:
        self.finish_page()
        self._c.showOutline()
        self._c.save()
        logger.debug("Saved {} pages to {}", self._pages, self.output_path)

    # ── stamps ───────────────────────────────────────

    def define_stamp(self, name: str, draw) -> None:
        """Record a reusable form. Must happen before any page content is drawn."""
        if name in self._stamps:
            return
        self._c.beginForm(name)
        draw(self)
        self._c.endForm()
        self._stamps.add(name)

    def use_stamp(self, name: str) -> None:
        if name not in self._stamps:
            raise KeyError(f"Stamp '{name}' is not defined")
        self._c.doForm(name)

    # ── drawing ──────────────────────────────────────

    def draw_rect(self, x, y, width, height, *, stroke=None, fill=None,
                  line_width=0.5, radius=0, alpha=1.0) -> None:
        if stroke is None and fill is None:
            return
        c = self._c
        c.saveState()
        if alpha < 1.0:
            c.setFillAlpha(alpha)
            c.setStrokeAlpha(alpha)
        if fill is not None:
            c.setFillColor(HexColor(fill))
        if stroke is not None:
            c.setStrokeColor(HexColor(stroke))
            c.setLineWidth(line_width)
        do_stroke = 1 if stroke is not None else 0
        do_fill = 1 if fill is not None else 0
        if radius:
            c.roundRect(x, y, width, height, radius, stroke=do_stroke, fill=do_fill)
        else:
            c.rect(x, y, width, height, stroke=do_stroke, fill=do_fill)
        c.restoreState()

    def draw_line(self, x1, y1, x2, y2, *, color, line_width=0.5, dash=None) -> None:
        c = self._c
        c.saveState()
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(line_width)
        if dash:
            c.setDash(list(dash))
        c.line(x1, y1, x2, y2)
        c.restoreState()

    def draw_circle(self, x, y, radius, *, fill=None, stroke=None) -> None:
        c = self._c
        c.saveState()
        if fill is not None:
            c.setFillColor(HexColor(fill))
        if stroke is not None:
            c.setStrokeColor(HexColor(stroke))
        c.circle(x, y, radius, stroke=1 if stroke else 0, fill=1 if fill else 0)
        c.restoreState()

    def draw_lines(self, segments, *, color, line_width=0.25) -> None:
        lines = [(x1, y1, x2, y2) for (x1, y1), (x2, y2) in segments]
        if not lines:
            return
        c = self._c
        c.saveState()
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(line_width)
        c.lines(lines)
        c.restoreState()

    def draw_polygon(self, points, *, fill=None, stroke=None, line_width=0.5, alpha=1.0) -> None:
        points = list(points)
        if len(points) < 3 or (fill is None and stroke is None):
            return
        c = self._c
        c.saveState()
        if alpha < 1.0:
            c.setFillAlpha(alpha)
            c.setStrokeAlpha(alpha)
        if fill is not None:
            c.setFillColor(HexColor(fill))
        if stroke is not None:
            c.setStrokeColor(HexColor(stroke))
            c.setLineWidth(line_width)
        path = c.beginPath()
        path.moveTo(*points[0])
        for point in points[1:]:
            path.lineTo(*point)
        path.close()
        c.drawPath(path, stroke=1 if stroke is not None else 0, fill=1 if fill is not None else 0)
        c.restoreState()

    def draw_text(self, x, y, text, *, font, size, color, align="left", angle=0) -> None:
        c = self._c
        c.saveState()
        c.setFillColor(HexColor(color))
        c.setFont(font, size)
        if angle:
            c.translate(x, y)
            c.rotate(angle)
            x, y = 0, 0
        if align == "center":
            c.drawCentredString(x, y, text)
        elif align == "right":
            c.drawRightString(x, y, text)
        else:
            c.drawString(x, y, text)
        c.restoreState()

    def text_width(self, text: str, font: str, size: float) -> float:
        return self._c.stringWidth(text, font, size)
