"""
ASCII rendering of traversals.

Provides two views:
1. Visit order - each cell shows the step at which it was visited, colored
   in bands from first to last so the sweep direction is visible
2. Piles - a scatter height table drawn as a column chart
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from tile_types import CellPosition

logger = logging.getLogger(__name__)

BANDS: list[Callable[[str], str]] = [
    chalk.blue,
    chalk.cyan,
    chalk.green,
    chalk.yellow,
    chalk.magenta,
    chalk.red,
]


def band_color(index: int, total: int) -> Callable[[str], str]:
    """Color for the index-th visit out of total, earliest visits first in BANDS."""
    if total <= 0:
        return lambda s: s
    return BANDS[index * len(BANDS) // total]


def collect_visits(cells: Iterable[CellPosition]) -> dict[tuple[int, int], list[int]]:
    """Map (col, row) to the step numbers at which the cell was visited."""
    visit_map: dict[tuple[int, int], list[int]] = {}
    for step, pos in enumerate(cells):
        visit_map.setdefault((pos.col, pos.row), []).append(step)
    return visit_map


def render_visit_order(
    cells: Iterable[CellPosition],
    cols: int,
    rows: int,
    colored: bool = True,
) -> str:
    """
    Render a cols x rows grid with each cell's visit step.

    Unvisited cells show '.', cells visited more than once show their steps
    joined with ','. Row 0 is printed first.
    """
    visit_map = collect_visits(cells)
    total = sum(len(steps) for steps in visit_map.values())

    labels: dict[tuple[int, int], str] = {
        key: ",".join(str(s) for s in steps) for key, steps in visit_map.items()
    }
    cell_w = max([len(label) for label in labels.values()] + [1])

    lines: list[str] = []
    for row in range(rows):
        parts: list[str] = []
        for col in range(cols):
            label = labels.get((col, row))
            if label is None:
                parts.append(".".rjust(cell_w))
                continue
            text = label.rjust(cell_w)
            if colored:
                text = band_color(visit_map[(col, row)][0], total)(text)
            parts.append(text)
        lines.append(" ".join(parts))

    logger.debug("render_visit_order: %dx%d, %d visits", cols, rows, total)
    return "\n".join(lines)


def render_piles(heights: list[int], rows: int) -> str:
    """Draw column heights bottom-up, '#' for filled and '.' for empty."""
    lines: list[str] = []
    for level in range(rows, 0, -1):
        lines.append("".join("#" if h >= level else "." for h in heights))
    return "\n".join(lines)
