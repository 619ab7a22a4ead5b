"""
Virtualization layout engine.

Pure derived values: given container dimensions, item size and item count,
compute the grid geometry and the minimal window of cells to materialize.
Cells are laid out on a fixed stride of ``column_width`` by ``row_height``;
the gap is applied inside each cell.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from bloom_catalog.domain.viewport import GridLayout, RenderPlan, ScrollState, VisibleRange

T = TypeVar("T")

DEFAULT_GAP = 16.0
DEFAULT_ROW_HEIGHT = 400.0
MIN_COLUMN_WIDTH = 200.0
MAX_COLUMN_WIDTH = 500.0
FALLBACK_COLUMN_WIDTH = MIN_COLUMN_WIDTH
MIN_COLUMNS = 1
MAX_COLUMNS = 6
DEFAULT_OVERSCAN_ROWS = 2
DEFAULT_OVERSCAN_COLUMNS = 1

# Lists this short are rendered whole; windowing costs more than it saves
WINDOWING_THRESHOLD = 8

# (minimum container width, column count), widest first
BREAKPOINTS = ((1200.0, 4), (768.0, 3), (480.0, 2))


def _finite_positive(value: float | None) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _finite_number(value: float | None) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def responsive_column_count(container_width: float) -> int:
    for min_width, columns in BREAKPOINTS:
        if container_width >= min_width:
            return columns
    return MIN_COLUMNS


def compute_layout(
    container_width: float,
    preferred_column_count: int | None = None,
    gap: float = DEFAULT_GAP,
) -> GridLayout:
    """
    Column count and width for a container.

    An explicit finite preference overrides the breakpoints (clamped to
    [1, 6]); a non-finite one is ignored.
    A non-positive or non-finite container width yields the fallback column
    width instead of a non-finite or negative one.
    """
    if not isinstance(gap, (int, float)) or not math.isfinite(gap) or gap < 0:
        gap = DEFAULT_GAP

    if _finite_number(preferred_column_count):
        column_count = max(MIN_COLUMNS, min(MAX_COLUMNS, int(preferred_column_count)))
    elif _finite_positive(container_width):
        column_count = responsive_column_count(container_width)
    else:
        column_count = MIN_COLUMNS

    if not _finite_positive(container_width):
        return GridLayout(column_count=column_count, column_width=FALLBACK_COLUMN_WIDTH, gap=gap)

    available = (container_width - gap * (column_count + 1)) / column_count
    column_width = max(MIN_COLUMN_WIDTH, min(MAX_COLUMN_WIDTH, available))
    return GridLayout(column_count=column_count, column_width=column_width, gap=gap)


def row_count(item_count: int, column_count: int) -> int:
    if item_count <= 0 or column_count <= 0:
        return 0
    return math.ceil(item_count / column_count)


def index_to_cell(index: int, column_count: int) -> tuple[int, int]:
    """Linear index to ``(row, column)``; inverse of ``cell_to_index``."""
    if column_count <= 0:
        raise ValueError("column_count must be > 0")
    if index < 0:
        raise ValueError("index must be >= 0")
    return divmod(index, column_count)


def cell_to_index(row: int, column: int, column_count: int) -> int:
    """``(row, column)`` to linear index: ``row * column_count + column``."""
    if column_count <= 0:
        raise ValueError("column_count must be > 0")
    if row < 0 or not 0 <= column < column_count:
        raise ValueError("cell is outside the grid")
    return row * column_count + column


def visible_window(
    scroll: ScrollState,
    layout: GridLayout,
    item_count: int,
    row_height: float = DEFAULT_ROW_HEIGHT,
    overscan_rows: int = DEFAULT_OVERSCAN_ROWS,
    overscan_columns: int = DEFAULT_OVERSCAN_COLUMNS,
) -> VisibleRange:
    """
    Cells intersecting the viewport, padded by overscan and clamped to the grid.

    Always a superset of the truly visible cells.
    """
    rows = row_count(item_count, layout.column_count)
    if rows == 0:
        return VisibleRange(row_start=0, row_stop=0, col_start=0, col_stop=0)

    if not _finite_positive(row_height):
        row_height = DEFAULT_ROW_HEIGHT
    column_width = layout.column_width if _finite_positive(layout.column_width) else FALLBACK_COLUMN_WIDTH

    top = scroll.scroll_top if math.isfinite(scroll.scroll_top) else 0.0
    left = scroll.scroll_left if math.isfinite(scroll.scroll_left) else 0.0
    top, left = max(0.0, top), max(0.0, left)
    height = scroll.viewport_height if _finite_positive(scroll.viewport_height) else row_height
    width = scroll.viewport_width if _finite_positive(scroll.viewport_width) else column_width

    first_row = math.floor(top / row_height)
    last_row = math.ceil((top + height) / row_height)
    first_col = math.floor(left / column_width)
    last_col = math.ceil((left + width) / column_width)

    overscan_rows = max(0, overscan_rows)
    overscan_columns = max(0, overscan_columns)

    return VisibleRange(
        row_start=min(rows, max(0, first_row - overscan_rows)),
        row_stop=min(rows, max(0, last_row + overscan_rows)),
        col_start=min(layout.column_count, max(0, first_col - overscan_columns)),
        col_stop=min(layout.column_count, max(0, last_col + overscan_columns)),
    )


def plan_render(
    item_count: int,
    scroll: ScrollState,
    layout: GridLayout,
    row_height: float = DEFAULT_ROW_HEIGHT,
    overscan_rows: int = DEFAULT_OVERSCAN_ROWS,
    overscan_columns: int = DEFAULT_OVERSCAN_COLUMNS,
) -> RenderPlan:
    """Indices to materialize for the current viewport."""
    item_count = max(0, item_count)
    rows = row_count(item_count, layout.column_count)

    if item_count <= WINDOWING_THRESHOLD:
        return RenderPlan(windowed=False, indices=tuple(range(item_count)), row_count=rows)

    window = visible_window(scroll, layout, item_count, row_height, overscan_rows, overscan_columns)
    cell_indices = (cell_to_index(row, column, layout.column_count) for row, column in window.cells())
    indices = tuple(index for index in cell_indices if index < item_count)
    return RenderPlan(windowed=True, indices=indices, row_count=rows, visible_range=window)


def item_at(items: Sequence[T], index: int) -> T | None:
    """Cell lookup for the render coordinator; out-of-range indices yield None."""
    if 0 <= index < len(items):
        return items[index]
    return None
