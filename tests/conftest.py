import pytest
from loguru import logger

from bujo_planner.grid import GridSystem
from bujo_planner.surface import DrawingSurface


class RecordingSurface(DrawingSurface):
    """DrawingSurface that keeps every call so tests can inspect pages."""

    def __init__(self, page_width=612.0, page_height=792.0):
        self.page_width = page_width
        self.page_height = page_height
        self.pages = []
        self.stamps = {}
        self.outline = []
        self.metadata = {}
        self.events = []
        self._target = None
        self.saved = False

    @property
    def page(self):
        return self.pages[-1]

    def _record(self, kind, **data):
        if self._target is None:
            raise AssertionError(f"{kind} drawn outside a page")
        self._target.append((kind, data))

    def start_page(self):
        self.pages.append({"destinations": [], "links": [], "ops": []})
        self._target = self.page["ops"]
        self.events.append("start_page")

    def finish_page(self):
        self._target = None
        self.events.append("finish_page")

    def add_destination(self, name):
        self.page["destinations"].append(name)

    def add_link(self, dest, bounds):
        self.page["links"].append((dest, tuple(bounds)))

    def draw_rect(self, x, y, width, height, *, stroke=None, fill=None, line_width=0.5, radius=0, alpha=1.0):
        self._record("rect", x=x, y=y, width=width, height=height, stroke=stroke, fill=fill,
                     line_width=line_width, alpha=alpha)

    def draw_line(self, x1, y1, x2, y2, *, color, line_width=0.5, dash=None):
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2, color=color)

    def draw_circle(self, x, y, radius, *, fill=None, stroke=None):
        self._record("circle", x=x, y=y, radius=radius, fill=fill)

    def draw_lines(self, segments, *, color, line_width=0.25):
        self._record("lines", segments=list(segments), color=color, line_width=line_width)

    def draw_polygon(self, points, *, fill=None, stroke=None, line_width=0.5, alpha=1.0):
        self._record("polygon", points=list(points), fill=fill, stroke=stroke, alpha=alpha)

    def draw_text(self, x, y, text, *, font, size, color, align="left", angle=0):
        self._record("text", x=x, y=y, text=text, font=font, size=size, color=color, angle=angle)

    def text_width(self, text, font, size):
        return len(text) * size * 0.5

    def define_stamp(self, name, draw):
        self.events.append(f"define_stamp:{name}")
        previous, self._target = self._target, []
        draw(self)
        self.stamps[name], self._target = self._target, previous

    def use_stamp(self, name):
        if name not in self.stamps:
            raise KeyError(name)
        self._record("stamp", name=name)

    def add_outline_entry(self, title, dest, level=0, closed=False):
        self.outline.append((title, dest, level, closed))

    def set_metadata(self, **meta):
        self.metadata.update(meta)

    def save(self):
        self.saved = True


def texts(page):
    return [data["text"] for kind, data in page["ops"] if kind == "text"]


def rects(page):
    return [data for kind, data in page["ops"] if kind == "rect"]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def grid():
    return GridSystem()


@pytest.fixture
def log_messages():
    """Messages logged at WARNING and above while the test runs."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
