"""Grid layout for profile panels.

Rectangles use inclusive terminal-cell corners ``(x0, y0, x1, y1)``. The grid
is always recomputed over the whole active set; panels are never placed
incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Rect:
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return self.y1 - self.y0 + 1


# Where a freshly created panel sits until the layout pass that follows moves it.
PLACEHOLDER_RECT = Rect(0, 0, 1, 1)


def compute_grid(
    ordered_names: Sequence[str],
    max_cols: int,
    cell_width: int,
    cell_height: int,
    pad: int = 1,
) -> dict[str, Rect]:
    """Place each name on a row-major grid, in the given order."""
    if max_cols < 1:
        raise ValueError(f"max_cols must be >= 1, got {max_cols}")
    if pad < 1:
        raise ValueError(f"pad must be >= 1, got {pad}")
    if cell_width <= pad or cell_height <= pad:
        raise ValueError("cell size must be larger than pad")

    rects: dict[str, Rect] = {}
    for index, name in enumerate(ordered_names):
        row, col = divmod(index, max_cols)
        x0 = col * cell_width
        y0 = row * cell_height
        rects[name] = Rect(x0, y0, x0 + cell_width - pad, y0 + cell_height - pad)
    return rects


def rects_overlap(a: Rect, b: Rect) -> bool:
    return a.x0 <= b.x1 and b.x0 <= a.x1 and a.y0 <= b.y1 and b.y0 <= a.y1


def columns_for_width(width: int, cell_width: int) -> int:
    """How many cells fit across ``width`` columns (at least one)."""
    if cell_width < 1:
        return 1
    return max(1, width // cell_width)
