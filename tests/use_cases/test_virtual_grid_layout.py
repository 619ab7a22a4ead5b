"""
Test suite for the virtualization layout engine.

Sections:
- Layout: breakpoints, preference override, width formula, fallbacks
- Index/cell mapping: exact inverses
- Visible window: overscan, clamping, superset of visible cells
- Render plan: explicit small-list branch
"""

from __future__ import annotations

import math

import pytest

from bloom_catalog.domain.viewport import GridLayout, ScrollState, VisibleRange
from bloom_catalog.use_cases.virtual_grid_layout import (
    FALLBACK_COLUMN_WIDTH,
    MAX_COLUMN_WIDTH,
    WINDOWING_THRESHOLD,
    cell_to_index,
    compute_layout,
    index_to_cell,
    item_at,
    plan_render,
    responsive_column_count,
    row_count,
    visible_window,
)


# ==============================================================================
# Layout
# ==============================================================================


@pytest.mark.parametrize(
    "width,columns",
    [(1920, 4), (1200, 4), (1199, 3), (768, 3), (767, 2), (480, 2), (479, 1), (320, 1)],
)
def test_responsive_breakpoints(width: float, columns: int) -> None:
    assert responsive_column_count(width) == columns


def test_column_width_formula() -> None:
    layout = compute_layout(1000, gap=16)

    assert layout == GridLayout(column_count=3, column_width=312.0, gap=16)


def test_column_width_is_clamped_to_maximum() -> None:
    layout = compute_layout(3000, preferred_column_count=2)

    assert layout.column_count == 2
    assert layout.column_width == MAX_COLUMN_WIDTH


def test_preferred_column_count_is_clamped() -> None:
    assert compute_layout(1000, preferred_column_count=12).column_count == 6
    assert compute_layout(1000, preferred_column_count=0).column_count == 1


@pytest.mark.parametrize("preference", [math.nan, math.inf, -math.inf])
def test_non_finite_preference_falls_back_to_breakpoints(preference: float) -> None:
    layout = compute_layout(1000, preferred_column_count=preference)  # type: ignore[arg-type]

    assert layout == compute_layout(1000)
    assert layout.column_count == 3


@pytest.mark.parametrize("width", [0, -250, math.nan, math.inf, -math.inf])
def test_invalid_container_width_uses_fallback(width: float) -> None:
    layout = compute_layout(width)

    assert layout.column_count == 1
    assert layout.column_width == FALLBACK_COLUMN_WIDTH
    assert math.isfinite(layout.column_width)


def test_invalid_width_keeps_clamped_preference() -> None:
    layout = compute_layout(math.nan, preferred_column_count=3)

    assert layout.column_count == 3
    assert layout.column_width == FALLBACK_COLUMN_WIDTH


@pytest.mark.parametrize("items,columns,rows", [(0, 3, 0), (1, 3, 1), (3, 3, 1), (4, 3, 2), (10, 0, 0)])
def test_row_count(items: int, columns: int, rows: int) -> None:
    assert row_count(items, columns) == rows


# ==============================================================================
# Index / Cell Mapping
# ==============================================================================


@pytest.mark.parametrize("column_count", [1, 2, 3, 4, 6])
def test_cell_and_index_are_exact_inverses(column_count: int) -> None:
    for row in range(25):
        for column in range(column_count):
            index = cell_to_index(row, column, column_count)
            assert index_to_cell(index, column_count) == (row, column)

    for index in range(100):
        assert cell_to_index(*index_to_cell(index, column_count), column_count) == index


def test_index_to_cell_example() -> None:
    assert index_to_cell(7, 3) == (2, 1)
    assert cell_to_index(2, 1, 3) == 7


@pytest.mark.parametrize("args", [(-1, 3), (4, 0)])
def test_index_to_cell_rejects_invalid_input(args: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        index_to_cell(*args)


@pytest.mark.parametrize("args", [(0, 3, 3), (0, -1, 3), (-1, 0, 3), (0, 0, 0)])
def test_cell_to_index_rejects_cells_outside_grid(args: tuple[int, int, int]) -> None:
    with pytest.raises(ValueError):
        cell_to_index(*args)


# ==============================================================================
# Visible Window
# ==============================================================================


@pytest.fixture
def layout() -> GridLayout:
    return compute_layout(1000)  # 3 columns of 312px


def test_window_at_top_includes_overscan_below(layout: GridLayout) -> None:
    window = visible_window(ScrollState(scroll_top=0, viewport_height=800), layout, item_count=100)

    assert window == VisibleRange(row_start=0, row_stop=4, col_start=0, col_stop=3)


def test_window_mid_scroll_pads_both_sides(layout: GridLayout) -> None:
    window = visible_window(ScrollState(scroll_top=2000, viewport_height=800), layout, item_count=100)

    # visible rows 5..6, padded by two rows each side
    assert (window.row_start, window.row_stop) == (3, 9)


def test_window_is_clamped_to_grid(layout: GridLayout) -> None:
    window = visible_window(ScrollState(scroll_top=100_000, viewport_height=800), layout, item_count=10)

    assert window.row_stop <= row_count(10, 3)
    assert window.row_start <= window.row_stop
    assert 0 <= window.col_start <= window.col_stop <= 3


@pytest.mark.parametrize("scroll_top", [0, 150, 399, 400, 1234, 5000])
def test_window_is_superset_of_visible_cells(layout: GridLayout, scroll_top: float) -> None:
    scroll = ScrollState(scroll_top=scroll_top, viewport_height=800, viewport_width=1000)
    rows = row_count(100, layout.column_count)

    window = visible_window(scroll, layout, item_count=100, row_height=400)

    first_visible = math.floor(scroll_top / 400)
    last_visible = min(rows, math.ceil((scroll_top + 800) / 400))
    assert window.row_start <= first_visible
    assert window.row_stop >= last_visible


def test_window_for_empty_list_is_empty(layout: GridLayout) -> None:
    assert visible_window(ScrollState(), layout, item_count=0).is_empty


def test_window_tolerates_non_finite_scroll(layout: GridLayout) -> None:
    scroll = ScrollState(scroll_top=math.nan, scroll_left=-math.inf, viewport_height=math.nan)

    window = visible_window(scroll, layout, item_count=100)

    assert window.row_start == 0
    assert not window.is_empty


# ==============================================================================
# Render Plan
# ==============================================================================


def test_small_list_is_not_windowed(layout: GridLayout) -> None:
    plan = plan_render(WINDOWING_THRESHOLD, ScrollState(scroll_top=10_000), layout)

    assert plan.windowed is False
    assert plan.indices == tuple(range(WINDOWING_THRESHOLD))
    assert plan.visible_range is None


def test_list_above_threshold_is_windowed(layout: GridLayout) -> None:
    plan = plan_render(100, ScrollState(scroll_top=2000, viewport_height=800), layout)

    assert plan.windowed is True
    assert plan.row_count == 34
    assert plan.indices == tuple(range(9, 27))


def test_windowed_indices_never_exceed_item_count(layout: GridLayout) -> None:
    plan = plan_render(10, ScrollState(), layout)

    assert plan.windowed is True
    assert plan.indices == tuple(range(10))


def test_item_at() -> None:
    items = ["a", "b", "c"]

    assert item_at(items, 1) == "b"
    assert item_at(items, 3) is None
    assert item_at(items, -1) is None
