import pytest

from bujo_planner.grid import Cell, GridConfig, GridSystem


def test_letter_grid_is_43_by_55():
    config = GridConfig.letter()
    assert (config.cols, config.rows) == (43, 55)
    assert config.cols * config.box_size <= config.page_width
    assert config.rows * config.box_size <= config.page_height


def test_row_zero_is_top_of_page(grid):
    assert grid.y(0) == 792.0
    assert grid.x(0) == 0
    assert grid.y(10) < grid.y(9)


def test_rect_y_is_top_edge(grid):
    r = grid.rect(3, 4, 5, 6)
    assert r["x"] == grid.x(3)
    assert r["y"] == grid.y(4)
    assert r["width"] == pytest.approx(grid.width(5))
    assert r["y"] - r["height"] == pytest.approx(grid.y(10))
    assert grid.bottom(4, 6) == pytest.approx(r["y"] - r["height"])


def test_out_of_page_coordinates_are_not_validated(grid):
    assert grid.x(50) == pytest.approx(50 * 14.17)
    assert grid.y(60) < 0


def test_link_bounds_order(grid):
    assert grid.link_bounds(1, 2, 3, 4) == (grid.x(1), grid.y(6), grid.x(4), grid.y(2))


def test_inset(grid):
    r = grid.inset(grid.rect(0, 0, 10, 10), 1)
    assert r["x"] == pytest.approx(grid.x(1))
    assert r["y"] == pytest.approx(grid.y(1))
    assert r["width"] == pytest.approx(grid.width(8))


def test_divide_columns_last_cell_absorbs_remainder(grid):
    cells = grid.divide_columns(0, 10, 3)
    assert [c.width for c in cells] == [3, 3, 4]
    assert [c.col for c in cells] == [0, 3, 6]


def test_divide_columns_with_gap(grid):
    cells = grid.divide_columns(2, 10, 3, gap=1)
    assert [c.col for c in cells] == [2, 5, 8]
    assert [c.width for c in cells] == [2, 2, 4]


def test_divide_rows_even(grid):
    cells = grid.divide_rows(5, 12, 4)
    assert [c.row for c in cells] == [5, 8, 11, 14]
    assert {c.height for c in cells} == {3}


def test_divide_zero_count_is_empty(grid):
    assert grid.divide_columns(0, 10, 0) == []


def test_divide_grid_row_major(grid):
    cells = grid.divide_grid(0, 0, 10, 6, cols=2, rows=3)
    assert len(cells) == 3
    assert all(len(row) == 2 for row in cells)
    assert cells[1][1] == Cell(5, 2, 5, 2)


def test_margins_all_with_override(grid):
    assert grid.margins(0, 0, 10, 10, all=1, left=2) == Cell(2, 1, 7, 8)
    assert grid.margins(0, 0, 10, 10, top=3) == Cell(0, 3, 10, 7)


def test_week_columns_quantized_on_multiple_of_seven(grid):
    widths = grid.week_column_widths(grid.width(35))
    assert widths == [pytest.approx(5 * grid.box_size)] * 7


def test_week_columns_proportional_otherwise(grid):
    widths = grid.week_column_widths(grid.width(39))
    assert widths == [pytest.approx(grid.width(39) / 7)] * 7
    assert sum(widths) == pytest.approx(grid.width(39))


def test_week_grid_columns_are_contiguous(grid):
    cells = grid.week_grid(3, 2, 35, 9)
    assert len(cells) == 7
    for left, right in zip(cells, cells[1:]):
        assert right["x"] == pytest.approx(left["x"] + left["width"])
    assert cells[0]["y"] == grid.y(2)


def test_week_grid_header_height(grid):
    cells = grid.week_grid(0, 0, 14, 4, header_height=10)
    assert cells[0]["y"] == pytest.approx(grid.y(0) - 10)
    assert cells[0]["height"] == pytest.approx(grid.height(4) - 10)
