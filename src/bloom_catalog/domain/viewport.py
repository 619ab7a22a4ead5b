from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GridLayout:
    column_count: int
    column_width: float
    gap: float


@dataclass(frozen=True, slots=True)
class ScrollState:
    scroll_top: float = 0.0
    scroll_left: float = 0.0
    viewport_height: float = 800.0
    viewport_width: float = 1200.0


@dataclass(frozen=True, slots=True)
class VisibleRange:
    """
    Half-open cell window: rows [row_start, row_stop) x columns [col_start, col_stop).

    Transient; recomputed on every scroll or resize.
    """

    row_start: int
    row_stop: int
    col_start: int
    col_stop: int

    @property
    def is_empty(self) -> bool:
        return self.row_stop <= self.row_start or self.col_stop <= self.col_start

    def cells(self) -> list[tuple[int, int]]:
        return [
            (row, col)
            for row in range(self.row_start, self.row_stop)
            for col in range(self.col_start, self.col_stop)
        ]


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Which item indices the render coordinator should materialize."""

    windowed: bool
    indices: tuple[int, ...]
    row_count: int
    visible_range: VisibleRange | None = None
