"""
Grid coordinate system.

Every page is laid out on a grid of square boxes (one box = 5mm of dot
spacing) with a top-left origin:

  - column 0 is the left edge, columns increase rightward
  - row 0 is the top edge, rows increase downward

ReportLab measures from the bottom-left with y increasing upward, so this
module is the single place where rows become y coordinates. `rect()` returns
the TOP edge as `y`; subtract the height to get the bottom edge. Page code is
written against that convention, keep it.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple

import bujo_planner.settings as settings

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class GridConfig:
    cols: int
    rows: int
    box_size: float
    page_width: float
    page_height: float

    @classmethod
    def from_page(cls, page_width: float, page_height: float, box_size: float) -> "GridConfig":
        return cls(
            cols=math.floor(page_width / box_size),
            rows=math.floor(page_height / box_size),
            box_size=box_size,
            page_width=page_width,
            page_height=page_height,
        )

    @classmethod
    def letter(cls) -> "GridConfig":
        """US Letter with 14.17pt boxes: 43 x 55."""
        return cls.from_page(settings.PAGE_WIDTH, settings.PAGE_HEIGHT, settings.BOX_SIZE)


class Cell(NamedTuple):
    """A region in grid boxes."""
    col: float
    row: float
    width: float
    height: float


class GridSystem:
    def __init__(self, config: GridConfig | None = None):
        self.config = config or GridConfig.letter()

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def box_size(self) -> float:
        return self.config.box_size

    # ── point conversion ─────────────────────────────

    def x(self, col: float) -> float:
        """Column -> x in points. Fractional and out-of-page columns are fine."""
        return col * self.config.box_size

    def y(self, row: float) -> float:
        """Row (from the top) -> y in points (from the bottom)."""
        return self.config.page_height - row * self.config.box_size

    def width(self, boxes: float) -> float:
        return boxes * self.config.box_size

    def height(self, boxes: float) -> float:
        return boxes * self.config.box_size

    def rect(self, col: float, row: float, width_boxes: float, height_boxes: float) -> dict[str, float]:
        """
        Bounding box of a grid region. `y` is the TOP edge.

        >>> GridSystem().rect(0, 0, 43, 2)["y"]
        792.0
        """
        return {
            "x":      self.x(col),
            "y":      self.y(row),
            "width":  self.width(width_boxes),
            "height": self.height(height_boxes),
        }

    def bottom(self, row: float, height_boxes: float) -> float:
        return self.y(row + height_boxes)

    def inset(self, rect: dict[str, float], padding_boxes: float) -> dict[str, float]:
        pad = self.width(padding_boxes)
        return {
            "x":      rect["x"] + pad,
            "y":      rect["y"] - pad,
            "width":  rect["width"] - 2 * pad,
            "height": rect["height"] - 2 * pad,
        }

    def link_bounds(self, col: float, row: float, width_boxes: float, height_boxes: float) -> tuple[float, float, float, float]:
        """(left, bottom, right, top) in points, the order link annotations take."""
        return (
            self.x(col),
            self.y(row + height_boxes),
            self.x(col + width_boxes),
            self.y(row),
        )

    # ── subdivision (all in grid boxes) ──────────────

    @staticmethod
    def _split(start: float, span: float, count: int, gap: float) -> list[tuple[float, float]]:
        # Whole-box sizes; the last part absorbs whatever is left over.
        if count < 1:
            return []
        available = span - gap * (count - 1)
        size, remainder = divmod(available, count)
        parts = []
        for i in range(count):
            pos = start + i * (size + gap)
            parts.append((pos, size + remainder if i == count - 1 else size))
        return parts

    def divide_columns(self, col: float, width: float, count: int, gap: float = 0) -> list[Cell]:
        """
        Split a horizontal span into `count` cells separated by `gap` boxes.

        >>> [c.width for c in GridSystem().divide_columns(0, 10, 3)]
        [3, 3, 4]
        """
        return [Cell(pos, 0, size, 0) for pos, size in self._split(col, width, count, gap)]

    def divide_rows(self, row: float, height: float, count: int, gap: float = 0) -> list[Cell]:
        return [Cell(0, pos, 0, size) for pos, size in self._split(row, height, count, gap)]

    def divide_grid(
        self,
        col: float,
        row: float,
        width: float,
        height: float,
        cols: int,
        rows: int,
        col_gap: float = 0,
        row_gap: float = 0,
    ) -> list[list[Cell]]:
        """Row-major cells: result[r][c]."""
        columns = self.divide_columns(col, width, cols, col_gap)
        return [
            [Cell(c.col, r.row, c.width, r.height) for c in columns]
            for r in self.divide_rows(row, height, rows, row_gap)
        ]

    def margins(
        self,
        col: float,
        row: float,
        width: float,
        height: float,
        *,
        left: float | None = None,
        right: float | None = None,
        top: float | None = None,
        bottom: float | None = None,
        all: float | None = None,
    ) -> Cell:
        """Inset a region. `all` is the default for each side; explicit sides win."""
        base = all or 0
        left = base if left is None else left
        right = base if right is None else right
        top = base if top is None else top
        bottom = base if bottom is None else bottom
        return Cell(col + left, row + top, width - left - right, height - top - bottom)

    # ── week grid ────────────────────────────────────

    def week_column_widths(self, width_pt: float, quantize: bool = True) -> list[float]:
        """
        Widths in points of the 7 day columns of a span.

        With `quantize`, a span that is a whole multiple of 7 boxes gets
        whole-box columns so lines land on the dot grid; anything else is
        split proportionally.
        """
        total_boxes = round(width_pt / self.config.box_size)
        if quantize and total_boxes % DAYS_IN_WEEK == 0:
            per_column = total_boxes // DAYS_IN_WEEK
            return [per_column * self.config.box_size] * DAYS_IN_WEEK
        return [width_pt / DAYS_IN_WEEK] * DAYS_IN_WEEK

    def week_grid(
        self,
        col: float,
        row: float,
        width_boxes: float,
        height_boxes: float,
        quantize: bool = True,
        header_height: float = 0.0,
    ) -> list[dict[str, float]]:
        """
        The 7 day-column rects (points, top-anchored) of a week region.
        `header_height` in points is reserved above the cells.
        """
        outer = self.rect(col, row, width_boxes, height_boxes)
        widths = self.week_column_widths(outer["width"], quantize)
        cells = []
        x = outer["x"]
        for w in widths:
            cells.append({
                "x":      x,
                "y":      outer["y"] - header_height,
                "width":  w,
                "height": outer["height"] - header_height,
            })
            x += w
        return cells
