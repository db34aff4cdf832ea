"""
Recursive tiling of a canvas.

A CompositeShape divides its region into a Grid and paints one child shape per
cell, in an order chosen by the concrete traversal. Children are Tiles by
default, but any shape may be substituted through the child factory, which is
how nested patterns are built. Only Tiles touch the ColorStream: each paints
one rectangle with the current color and then advances the stream once.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterator, Protocol

from color_stream import ColorStream, blend, get_adjust
from tile_types import CellPosition, Color, Grid, Layer, Rect

logger = logging.getLogger(__name__)

STROKE_RATIO = 0.75


class DrawingSink(Protocol):
    """Anything that can fill and stroke a rectangle."""

    def draw_rect(self, rect: Rect, fill: Color, stroke: Color) -> None: ...


class Shape(Protocol):
    def paint(self, stream: ColorStream) -> None: ...


ColorFn = Callable[[Color], Color]

# Builds the shape painted into one cell of a composite
ChildFactory = Callable[[CellPosition, Rect, DrawingSink], Shape]


# =============================================================================
# Tiles
# =============================================================================


def unchanged(color: Color) -> Color:
    return color


class Tile:
    """The terminal shape: one filled and stroked rectangle."""

    def __init__(
        self,
        sink: DrawingSink,
        rect: Rect,
        fill: ColorFn = unchanged,
        stroke: ColorFn | None = None,
    ) -> None:
        self.sink = sink
        self.rect = rect
        self.fill = fill
        self.stroke = stroke if stroke is not None else partial(blend, STROKE_RATIO)

    def paint(self, stream: ColorStream) -> None:
        color = stream.current_color()
        self.sink.draw_rect(self.rect, self.fill(color), self.stroke(color))
        stream.advance()


def tile_factory(fill: ColorFn = unchanged, stroke: ColorFn | None = None) -> ChildFactory:
    """Child factory producing Tiles with the given color derivations."""

    def create(pos: CellPosition, rect: Rect, sink: DrawingSink) -> Shape:
        return Tile(sink, rect, fill, stroke)

    return create


default_child = tile_factory()


# =============================================================================
# Composite shapes
# =============================================================================


class CompositeShape(ABC):
    """
    A tiled region that paints a child shape into each of its cells.

    Subclasses define cells(), which must yield every cell of the grid exactly
    once. Each child is created, painted and dropped before the next cell is
    visited.
    """

    def __init__(
        self,
        sink: DrawingSink,
        rect: Rect,
        tile_width: int,
        tile_height: int,
        create_child: ChildFactory | None = None,
    ) -> None:
        self.sink = sink
        self.rect = rect
        self.grid = Grid.over(rect, tile_width, tile_height)
        self.create_child = create_child if create_child is not None else default_child

    @abstractmethod
    def cells(self) -> Iterator[CellPosition]:
        """Yield the grid's cells in visitation order."""

    def paint(self, stream: ColorStream) -> None:
        for pos in self.cells():
            rect = self.grid.cell_rect(pos.col, pos.row)
            child = self.create_child(pos, rect, self.sink)
            child.paint(stream)


class RowMajor(CompositeShape):
    """Left to right, then top to bottom."""

    def cells(self) -> Iterator[CellPosition]:
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                yield CellPosition(col, row)


def diagonal_successor(pos: CellPosition, cols: int, rows: int) -> CellPosition | None:
    """
    The cell after pos in an anti-diagonal sweep, or None at the last cell.

    Within a diagonal the walk moves up and to the right. When it runs off the
    grid the next diagonal starts from whichever edge it actually touches:
    the left column or the bottom row.
    """
    if pos.col == cols - 1 and pos.row == rows - 1:
        return None

    next_col = pos.col + 1
    next_row = pos.row - 1
    if next_col < cols and next_row >= 0:
        return CellPosition(next_col, next_row)

    next_row += 1
    from_left = next_col
    from_bottom = rows - 1 - next_row
    if from_left < from_bottom:
        return CellPosition(0, next_row + from_left)
    return CellPosition(next_col - from_bottom, rows - 1)


class Diagonal(CompositeShape):
    """Anti-diagonal sweep from the top-left cell, always in the same direction."""

    def cells(self) -> Iterator[CellPosition]:
        cols, rows = self.grid.cols, self.grid.rows
        if cols == 0 or rows == 0:
            return
        pos: CellPosition | None = CellPosition(0, 0)
        while pos is not None:
            yield pos
            pos = diagonal_successor(pos, cols, rows)


# =============================================================================
# Scatter ("pour and pile")
# =============================================================================


# (current_column, column_count) -> candidate column
ColumnChoice = Callable[[int, int], int]


class UniformColumns:
    """Pick any column, ignoring the current one."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def __call__(self, current: int, count: int) -> int:
        return self.rng.randrange(count)


class WalkColumns:
    """Step left, stay, or step right, wrapping around the edges."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def __call__(self, current: int, count: int) -> int:
        return (current + self.rng.randrange(3) - 1) % count


class Scatter(CompositeShape):
    """
    Pours units into columns until every column is full.

    Each unit lands in a column chosen by the column policy, on top of the
    units already there, so columns fill from the bottom row upwards. Full
    columns are skipped by proposing again from the rejected candidate.

    The first cell is selected at construction. Traversal state lives on the
    instance, so cells() can only be consumed once.
    """

    def __init__(
        self,
        sink: DrawingSink,
        rect: Rect,
        tile_width: int,
        tile_height: int,
        choose_column: ColumnChoice,
        create_child: ChildFactory | None = None,
    ) -> None:
        super().__init__(sink, rect, tile_width, tile_height, create_child)
        self.choose_column = choose_column
        self.heights = [0] * self.grid.cols
        self.column = self.grid.cols // 2
        self.row = self.grid.rows
        self.placed = 0
        self.position = self._place_next()

    def _place_next(self) -> CellPosition | None:
        cols, rows = self.grid.cols, self.grid.rows
        if self.placed >= cols * rows:
            logger.debug("Scatter finished: %d cells over %d columns", self.placed, cols)
            return None

        candidate = self.choose_column(self.column, cols)
        while self.heights[candidate] >= rows:
            candidate = self.choose_column(candidate, cols)

        self.heights[candidate] += 1
        self.column = candidate
        self.row = rows - self.heights[candidate]
        self.placed += 1
        return CellPosition(self.column, self.row)

    def cells(self) -> Iterator[CellPosition]:
        while self.position is not None:
            yield self.position
            self.position = self._place_next()


class UniformScatter(Scatter):
    """Scatter with columns drawn uniformly: an even, flat fill."""

    def __init__(
        self,
        sink: DrawingSink,
        rect: Rect,
        tile_width: int,
        tile_height: int,
        rng: random.Random | None = None,
        create_child: ChildFactory | None = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        super().__init__(sink, rect, tile_width, tile_height, UniformColumns(rng), create_child)


class WalkScatter(Scatter):
    """Scatter with a random walk over columns: correlated placements form piles."""

    def __init__(
        self,
        sink: DrawingSink,
        rect: Rect,
        tile_width: int,
        tile_height: int,
        rng: random.Random | None = None,
        create_child: ChildFactory | None = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        super().__init__(sink, rect, tile_width, tile_height, WalkColumns(rng), create_child)


# =============================================================================
# Traversal registry
# =============================================================================


TRAVERSALS: dict[str, type[CompositeShape]] = {
    "row": RowMajor,
    "diagonal": Diagonal,
    "uniform": UniformScatter,
    "walk": WalkScatter,
}

ALIASES: dict[str, str] = {
    "row-major": "row",
    "scatter-uniform": "uniform",
    "scatter-walk": "walk",
}


def resolve_traversal(name: str) -> type[CompositeShape]:
    """Look up a traversal class by name or alias."""
    key = ALIASES.get(name, name)
    if key not in TRAVERSALS:
        known = sorted([*TRAVERSALS, *ALIASES])
        raise ValueError(f"Unknown traversal '{name}'. Expected one of: {', '.join(known)}")
    return TRAVERSALS[key]


def make_traversal(
    traversal: str | type[CompositeShape],
    sink: DrawingSink,
    rect: Rect,
    tile_width: int,
    tile_height: int,
    create_child: ChildFactory | None = None,
    rng: random.Random | None = None,
) -> CompositeShape:
    """Construct a composite by traversal name or class, passing rng where it is used."""
    cls = resolve_traversal(traversal) if isinstance(traversal, str) else traversal
    if issubclass(cls, (UniformScatter, WalkScatter)):
        return cls(sink, rect, tile_width, tile_height, rng=rng, create_child=create_child)
    return cls(sink, rect, tile_width, tile_height, create_child=create_child)


def nested(
    traversal: str | type[CompositeShape],
    tile_width: int,
    tile_height: int,
    create_child: ChildFactory | None = None,
    rng: random.Random | None = None,
) -> ChildFactory:
    """Child factory that fills each parent cell with a finer composite."""

    def create(pos: CellPosition, rect: Rect, sink: DrawingSink) -> Shape:
        return make_traversal(traversal, sink, rect, tile_width, tile_height, create_child, rng)

    return create


# =============================================================================
# Composition
# =============================================================================


DEFAULT_LAYERS: tuple[Layer, ...] = (
    Layer("diagonal", 200, 200),
    Layer("walk", 40, 40),
    Layer("row", 10, 10),
)


@dataclass(frozen=True)
class RenderConfig:
    """Parameters for one render."""

    width: int = 800
    height: int = 800
    layers: tuple[Layer, ...] = DEFAULT_LAYERS
    max_change: float = 6.0
    times: int = 1
    stroke_ratio: float = STROKE_RATIO
    adjust: str = "clamp"
    seed: int | None = None
    background: Color = (255, 255, 255)
    stroke_width: int = 1


def build_shape(
    layers: tuple[Layer, ...],
    sink: DrawingSink,
    rect: Rect,
    rng: random.Random,
    create_tile: ChildFactory | None = None,
) -> Shape:
    """
    Build a shape tree from a layer stack, outermost layer first.

    Every cell of layer k is filled by a composite of layer k+1; the cells of
    the last layer are Tiles.
    """
    factory = create_tile if create_tile is not None else default_child
    if not layers:
        return factory(CellPosition(0, 0), rect, sink)

    for layer in reversed(layers[1:]):
        factory = nested(layer.traversal, layer.tile_width, layer.tile_height, factory, rng)

    root = layers[0]
    logger.debug("build_shape: root=%s depth=%d", root.traversal, len(layers))
    return make_traversal(root.traversal, sink, rect, root.tile_width, root.tile_height, factory, rng)


def paint_composition(config: RenderConfig, sink: DrawingSink) -> ColorStream:
    """Paint the whole composition once and return the stream it consumed."""
    rng = random.Random(config.seed)
    stream = ColorStream(config.max_change, config.times, get_adjust(config.adjust), rng)
    create_tile = tile_factory(stroke=partial(blend, config.stroke_ratio))
    root = build_shape(
        config.layers, sink, Rect(0, 0, config.width, config.height), rng, create_tile
    )

    logger.info(
        "paint_composition: %dx%d layers=%s seed=%s adjust=%s",
        config.width,
        config.height,
        ",".join(layer.traversal for layer in config.layers),
        config.seed,
        config.adjust,
    )
    root.paint(stream)
    logger.info("paint_composition: painted %d tiles", stream.steps)
    return stream
