"""
Drawing sinks and image output.

Canvas draws into a Pillow image. RecordingSink only remembers what it was
asked to draw. All saves include timestamps unless explicitly disabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageDraw

from tile_types import Color, Rect

logger = logging.getLogger(__name__)


def to_rgb(color: Color) -> tuple[int, int, int]:
    """Truncate float channels to 8-bit integers."""
    r, g, b = color
    return (int(r), int(g), int(b))


class Canvas:
    """An RGB raster that tiles are painted onto."""

    def __init__(
        self,
        width: int,
        height: int,
        background: Color = (255, 255, 255),
        stroke_width: int = 1,
    ) -> None:
        self.width = width
        self.height = height
        self.stroke_width = stroke_width
        self.image = Image.new("RGB", (width, height), to_rgb(background))
        self.draw = ImageDraw.Draw(self.image)
        self.rect_count = 0

    def draw_rect(self, rect: Rect, fill: Color, stroke: Color) -> None:
        # Pillow's corners are inclusive; anything past the edge is clipped
        box = (rect.x, rect.y, rect.x + rect.width - 1, rect.y + rect.height - 1)
        self.draw.rectangle(box, fill=to_rgb(fill), outline=to_rgb(stroke), width=self.stroke_width)
        self.rect_count += 1

    def to_array(self) -> np.ndarray:
        """(H, W, 3) uint8 copy of the pixels."""
        return np.array(self.image)


@dataclass(frozen=True)
class DrawnRect:
    rect: Rect
    fill: Color
    stroke: Color


@dataclass
class RecordingSink:
    """Remembers every rectangle in draw order."""

    drawn: list[DrawnRect] = field(default_factory=list)

    def draw_rect(self, rect: Rect, fill: Color, stroke: Color) -> None:
        self.drawn.append(DrawnRect(rect, fill, stroke))

    @property
    def rects(self) -> list[Rect]:
        return [d.rect for d in self.drawn]


# =============================================================================
# Saving
# =============================================================================


def _get_timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _inject_timestamp(path: Path) -> Path:
    """foo.png -> foo_20260204_041500.png"""
    return path.parent / f"{path.stem}_{_get_timestamp()}{path.suffix}"


def save_image(
    data: Union[Image.Image, np.ndarray],
    path: Union[str, Path],
    timestamp: bool = True,
) -> Path:
    """
    Save a rendered image.

    Args:
        data: Pillow image or (H, W, 3) array
        path: Output path (timestamp will be injected before extension)
        timestamp: If True (default), inject timestamp. Only False for explicit overwrites.

    Returns:
        Actual path where file was saved
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if timestamp:
        path = _inject_timestamp(path)

    if isinstance(data, np.ndarray):
        arr = data
        if arr.dtype == np.float32 or arr.dtype == np.float64:
            arr = arr.clip(0, 255)
        image = Image.fromarray(arr.astype(np.uint8))
    else:
        image = data

    image.save(path)
    logger.info("Saved: %s", path)
    return path
