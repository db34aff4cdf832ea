"""
Tests for terminal rendering of traversals.
"""

import random

from ascii_render import band_color, collect_visits, render_piles, render_visit_order
from raster import RecordingSink
from tile_types import CellPosition, Rect
from tiling import Diagonal, RowMajor, WalkScatter


class TestRenderVisitOrder:
    """Tests for visit-order rendering."""

    def test_row_major(self) -> None:
        """Row-major numbers cells left to right, top to bottom."""
        shape = RowMajor(RecordingSink(), Rect(0, 0, 3, 2), 1, 1)
        assert render_visit_order(shape.cells(), 3, 2, colored=False) == "0 1 2\n3 4 5"

    def test_diagonal(self) -> None:
        """Diagonal numbers follow the anti-diagonals."""
        shape = Diagonal(RecordingSink(), Rect(0, 0, 3, 2), 1, 1)
        assert render_visit_order(shape.cells(), 3, 2, colored=False) == "0 2 4\n1 3 5"

    def test_padding_and_unvisited(self) -> None:
        """Labels are right-aligned and unvisited cells show a dot."""
        cells = [CellPosition(0, 0)] + [CellPosition(1, 0)] * 10
        out = render_visit_order(cells, 2, 2, colored=False)
        label = ",".join(str(step) for step in range(1, 11))
        top, bottom = out.splitlines()
        assert top == "0".rjust(len(label)) + " " + label
        assert bottom == ".".rjust(len(label)) + " " + ".".rjust(len(label))

    def test_colored_output_keeps_labels(self) -> None:
        """Coloring wraps labels but keeps the text."""
        shape = WalkScatter(RecordingSink(), Rect(0, 0, 4, 3), 1, 1, rng=random.Random(0))
        out = render_visit_order(shape.cells(), 4, 3)
        for step in range(12):
            assert str(step) in out


class TestHelpers:
    """Tests for rendering helpers."""

    def test_collect_visits(self) -> None:
        """Repeated visits accumulate their steps."""
        visits = collect_visits([CellPosition(0, 0), CellPosition(1, 0), CellPosition(0, 0)])
        assert visits == {(0, 0): [0, 2], (1, 0): [1]}

    def test_band_color_empty(self) -> None:
        """With no visits the band is the identity."""
        assert band_color(0, 0)("x") == "x"

    def test_render_piles(self) -> None:
        """Piles are drawn bottom-up."""
        assert render_piles([2, 0, 1], 2) == "#..\n#.#"
