"""
Line patterns for the grid template pages.

Every function works in a local box of `width` x `height` points with the
origin at the bottom-left and returns segments ((x1, y1), (x2, y2)) that are
already clipped to the box. Renderers shift them onto the page, so the same
pattern fills a whole page or a quadrant preview.
"""
import math

Point = tuple[float, float]
Segment = tuple[Point, Point]

ISOMETRIC_ANGLES = (30, 90, 150)
LINED_SPACING_BOXES = 2
LINED_MARGIN_COL = 3

# (destination, title, pattern) of the full-page templates, in cycle order
GRID_PAGES = (
    ("dots",             "Dot Grid (5mm)",             "dots"),
    ("grid_graph",       "Graph Grid (5mm)",           "graph"),
    ("grid_lined",       "Ruled Lines (10mm)",         "lined"),
    ("grid_isometric",   "Isometric Grid",             "isometric"),
    ("grid_perspective", "Perspective Grid (1-point)", "perspective"),
    ("grid_hexagon",     "Hexagon Grid",               "hexagon"),
)
GRID_GROUP = ("grid_showcase", "grids_overview") + tuple(dest for dest, _, _ in GRID_PAGES)


def clip_segment(x1: float, y1: float, x2: float, y2: float, width: float, height: float) -> Segment | None:
    """Liang-Barsky clip of a segment to [0, width] x [0, height]; None when nothing is left."""
    dx, dy = x2 - x1, y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1), (dx, width - x1), (-dy, y1), (dy, height - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    if t0 > t1:
        return None
    return (x1 + t0 * dx, y1 + t0 * dy), (x1 + t1 * dx, y1 + t1 * dy)


def _clipped(lines, width: float, height: float) -> list[Segment]:
    out = []
    for (x1, y1), (x2, y2) in lines:
        seg = clip_segment(x1, y1, x2, y2, width, height)
        if seg is not None and seg[0] != seg[1]:
            out.append(seg)
    return out


def dot_positions(width: float, height: float, spacing: float) -> list[Point]:
    """Dots on every spacing step, counted from the top-left corner."""
    cols = int(width // spacing)
    rows = int(height // spacing)
    return [(c * spacing, height - r * spacing) for r in range(rows + 1) for c in range(cols + 1)]


def graph_lines(width: float, height: float, spacing: float) -> list[Segment]:
    """Square grid; lines are laid from the top-left so they meet the page dots."""
    lines = [((c * spacing, 0.0), (c * spacing, height)) for c in range(int(width // spacing) + 1)]
    lines += [((0.0, height - r * spacing), (width, height - r * spacing)) for r in range(int(height // spacing) + 1)]
    return lines


def ruled_lines(width: float, height: float, spacing: float, start: float = 0.0) -> list[Segment]:
    """Horizontal writing lines every `spacing` points, starting `start` points below the top."""
    lines = []
    y = height - start
    while y >= 0:
        lines.append(((0.0, y), (width, y)))
        y -= spacing
    return lines


def isometric_lines(width: float, height: float, spacing: float) -> list[Segment]:
    """
    Three families of parallel lines at 30, 90 and 150 degrees. Verticals are
    `spacing` apart; the slanted families are spaced so all three meet in
    shared points, forming equilateral triangles.
    """
    diagonal = math.hypot(width, height)
    lines = []
    for angle in ISOMETRIC_ANGLES:
        rad = math.radians(angle)
        step = spacing if angle == 90 else spacing / math.sin(math.radians(60))
        # unit direction along the line and perpendicular to it
        ux, uy = math.cos(rad), math.sin(rad)
        px, py = -uy, ux
        count = int(math.ceil(2 * diagonal / step))
        for i in range(count + 1):
            offset = -diagonal + i * step
            cx, cy = offset * px, offset * py
            lines.append(((cx - ux * 2 * diagonal, cy - uy * 2 * diagonal),
                          (cx + ux * 2 * diagonal, cy + uy * 2 * diagonal)))
    return _clipped(lines, width, height)


def vanishing_points(width: float, height: float, num_points: int = 1, horizon_y: float | None = None) -> list[Point]:
    horizon = height / 2.0 if horizon_y is None else horizon_y
    if num_points == 1:
        return [(width / 2.0, horizon)]
    if num_points == 2:
        return [(-width * 2, horizon), (width * 3, horizon)]
    if num_points == 3:
        return [(-width * 2, horizon), (width * 3, horizon), (width / 2.0, -height * 2)]
    raise ValueError(f"num_points must be 1, 2 or 3, got {num_points}")


def perspective_lines(
    width: float,
    height: float,
    spacing: float,
    num_points: int = 1,
    num_converging: int = 24,
    horizon_y: float | None = None,
) -> dict:
    """
    Perspective guide: horizontal lines every `spacing` above and below the
    horizon, the horizon itself, and `num_converging` lines per vanishing
    point.

    A one-point grid fans its lines out from the centre to evenly spaced
    points on the box edge; two- and three-point grids fan in from the
    opposite edge toward vanishing points outside the box.
    """
    horizon = height / 2.0 if horizon_y is None else horizon_y
    horizontals = []
    y = horizon + spacing
    while y <= height:
        horizontals.append(((0.0, y), (width, y)))
        y += spacing
    y = horizon - spacing
    while y >= 0:
        horizontals.append(((0.0, y), (width, y)))
        y -= spacing

    points = vanishing_points(width, height, num_points, horizon)
    converging = []
    for vx, vy in points:
        if num_points == 1:
            edge = _perimeter_points(width, height, num_converging)
        elif abs(vy - horizon) > height / 4:
            edge_y = height if vy < height / 2.0 else 0.0
            edge = [((i + 1) * width / (num_converging + 1.0), edge_y) for i in range(num_converging)]
        else:
            edge_x = width if vx < width / 2.0 else 0.0
            edge = [(edge_x, (i + 1) * height / (num_converging + 1.0)) for i in range(num_converging)]
        converging += [((ex, ey), (vx, vy)) for ex, ey in edge]

    return {
        "horizon": ((0.0, horizon), (width, horizon)),
        "horizontals": horizontals,
        "converging": _clipped(converging, width, height),
        "vanishing_points": points,
    }


def _perimeter_points(width: float, height: float, count: int) -> list[Point]:
    """`count` points spread evenly around the box outline, starting at the top-left corner."""
    perimeter = 2 * (width + height)
    points = []
    for i in range(count):
        d = i * perimeter / count
        if d < width:
            points.append((d, height))
        elif d < width + height:
            points.append((width, height - (d - width)))
        elif d < 2 * width + height:
            points.append((width - (d - width - height), 0.0))
        else:
            points.append((0.0, d - 2 * width - height))
    return points


def hexagon_edges(width: float, height: float, size: float, orientation: str = "flat_top") -> list[Segment]:
    """
    Tessellated hexagons with edge length `size`. Shared edges are emitted
    once.
    """
    if orientation == "flat_top":
        h_step, v_step = size * 1.5, size * math.sqrt(3)
        angle_offset = 0
    elif orientation == "pointy_top":
        h_step, v_step = size * math.sqrt(3), size * 1.5
        angle_offset = 30
    else:
        raise ValueError(f"Unknown hexagon orientation '{orientation}'")

    cols = int(math.ceil(width / h_step)) + 2
    rows = int(math.ceil(height / v_step)) + 2
    seen = set()
    edges = []
    for col in range(cols):
        for row in range(rows):
            if orientation == "flat_top":
                cx = col * h_step
                cy = row * v_step + (v_step / 2.0 if col % 2 else 0.0)
            else:
                cx = col * h_step + (h_step / 2.0 if row % 2 else 0.0)
                cy = row * v_step
            if cx - size > width or cy - size > height:
                continue
            corners = [
                (cx + size * math.cos(math.radians(angle_offset + 60 * i)),
                 cy + size * math.sin(math.radians(angle_offset + 60 * i)))
                for i in range(6)
            ]
            for a, b in zip(corners, corners[1:] + corners[:1]):
                key = tuple(sorted(((round(a[0], 3), round(a[1], 3)), (round(b[0], 3), round(b[1], 3)))))
                if key in seen:
                    continue
                seen.add(key)
                edges.append((a, b))
    return _clipped(edges, width, height)
