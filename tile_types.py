"""
Shared type definitions for the tiling system.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Color = tuple[float, float, float]


# =============================================================================
# Geometry
# =============================================================================


@dataclass(frozen=True)
class CellPosition:
    """A (column, row) address within a grid."""

    col: int
    row: int


@dataclass(frozen=True)
class Rect:
    """An axis-aligned pixel rectangle."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Grid:
    """
    A region of pixels divided into equally sized tiles.

    The column and row counts round up, so the last column/row may overhang
    the region. Drawing sinks clip the overhang.
    """

    left: int
    top: int
    region_width: int
    region_height: int
    tile_width: int
    tile_height: int

    @classmethod
    def over(cls, rect: Rect, tile_width: int, tile_height: int) -> Grid:
        return cls(rect.x, rect.y, rect.width, rect.height, tile_width, tile_height)

    @property
    def cols(self) -> int:
        return math.ceil(self.region_width / self.tile_width)

    @property
    def rows(self) -> int:
        return math.ceil(self.region_height / self.tile_height)

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    def cell_origin(self, col: int, row: int) -> tuple[int, int]:
        """Pixel coordinates of the top-left corner of a cell."""
        return (self.left + col * self.tile_width, self.top + row * self.tile_height)

    def cell_rect(self, col: int, row: int) -> Rect:
        x, y = self.cell_origin(col, row)
        return Rect(x, y, self.tile_width, self.tile_height)


# =============================================================================
# Composition
# =============================================================================


@dataclass(frozen=True)
class Layer:
    """One nesting level of a composition: a traversal and its tile size."""

    traversal: str
    tile_width: int
    tile_height: int
