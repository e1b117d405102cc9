from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..utils import random_uniform
from .config import cfg


class InvalidGeometry(ValueError):
    """Raised when a view or grid has non-positive dimensions."""

    pass


class InvalidCellIndex(IndexError):
    """Raised when a cell index falls outside [0, cols*rows)."""

    pass


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Dimensions:
    w: float
    h: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in image coordinates (views and target boxes)."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def full(cls, dimensions: Dimensions) -> "Rect":
        """The rectangle covering a whole image of the given dimensions."""
        return cls(0.0, 0.0, float(dimensions.w), float(dimensions.h))

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2.0, self.y + self.h / 2.0)


@dataclass(frozen=True)
class Cell:
    """One grid cell: its rectangle plus row/col and flat row-major index."""

    x: float
    y: float
    w: float
    h: float
    row: int
    col: int
    index: int


def grid_cells(
    view: Rect, cols: int = cfg.GRID_COLS, rows: int = cfg.GRID_ROWS
) -> List[Cell]:
    """Partition a view into cols×rows equal cells, row-major."""
    if view.w <= 0 or view.h <= 0:
        raise InvalidGeometry(f"view must have positive size, got {view.w}x{view.h}")
    if cols < 1 or rows < 1:
        raise InvalidGeometry(f"grid must be at least 1x1, got {cols}x{rows}")
    cell_width = view.w / cols
    cell_height = view.h / rows
    cells: List[Cell] = []
    for r in range(rows):
        for c in range(cols):
            cells.append(
                Cell(
                    x=view.x + c * cell_width,
                    y=view.y + r * cell_height,
                    w=cell_width,
                    h=cell_height,
                    row=r,
                    col=c,
                    index=r * cols + c,
                )
            )
    return cells


def pointer_position(view: Rect) -> Point:
    """The pointer tip: center of the view."""
    return view.center


def point_in_rect(point: Point, rect: Rect) -> bool:
    """Inclusive containment on both axes, so edge hits count."""
    return (
        rect.x <= point.x <= rect.x + rect.w and rect.y <= point.y <= rect.y + rect.h
    )


def cell_containing(point: Point, cells: Sequence[Cell]) -> Optional[Cell]:
    """First cell whose half-open rectangle [x, x+w)×[y, y+h) holds the point."""
    for cell in cells:
        if cell.x <= point.x < cell.x + cell.w and cell.y <= point.y < cell.y + cell.h:
            return cell
    return None


def zoom_to_cell(
    view: Rect,
    cell_index: int,
    cols: int = cfg.GRID_COLS,
    rows: int = cfg.GRID_ROWS,
) -> Rect:
    """Return the view obtained by zooming into one cell.

    The new view takes the cell's height and keeps the aspect ratio of the
    current view (not the cell's), centered horizontally on the cell and
    aligned with the cell's top edge.
    """
    cells = grid_cells(view, cols, rows)
    if not 0 <= cell_index < len(cells):
        raise InvalidCellIndex(
            f"cell index {cell_index} outside [0, {len(cells)}) for a {cols}x{rows} grid"
        )
    selected = cells[cell_index]

    aspect_ratio = view.w / view.h
    new_h = selected.h
    new_w = new_h * aspect_ratio
    cell_center_x = selected.x + selected.w / 2.0
    return Rect(cell_center_x - new_w / 2.0, selected.y, new_w, new_h)


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def diagonal(dimensions: Dimensions) -> float:
    return math.hypot(dimensions.w, dimensions.h)


def random_target_box(
    full_dimensions: Dimensions,
    size_ratio: float = cfg.TARGET_SIZE_RATIO,
    rng: Optional[random.Random] = None,
) -> Rect:
    """Square target of side size_ratio*width, fully inside the image."""
    side = full_dimensions.w * size_ratio
    if side <= 0 or side > full_dimensions.w or side > full_dimensions.h:
        raise InvalidGeometry(
            f"target side {side} does not fit in {full_dimensions.w}x{full_dimensions.h}"
        )
    x = random_uniform(0.0, full_dimensions.w - side, rng)
    y = random_uniform(0.0, full_dimensions.h - side, rng)
    return Rect(x, y, side, side)
