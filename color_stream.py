"""
Color utilities and the drifting color stream.

A ColorStream holds three channel accumulators and moves them by a bounded
random walk. After every step each channel is passed through an adjust
policy (clamp by default, wrap as an alternative) so it stays in [0, 255.9].
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from tile_types import Color

logger = logging.getLogger(__name__)

CHANNEL_MAX = 255.9

Adjust = Callable[[float], float]


# =============================================================================
# Numeric helpers
# =============================================================================


def clamp(value: float, low: float = 0.0, high: float = CHANNEL_MAX) -> float:
    """Saturate a channel value at the boundaries."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def wrap(value: float, high: float = CHANNEL_MAX) -> float:
    """Fold a channel value back into [0, high) instead of saturating."""
    return value % high


ADJUSTMENTS: dict[str, Adjust] = {
    "clamp": clamp,
    "wrap": wrap,
}


def get_adjust(name: str) -> Adjust:
    """Look up an adjust policy by name."""
    try:
        return ADJUSTMENTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown adjust policy '{name}'. Expected one of: {', '.join(sorted(ADJUSTMENTS))}"
        ) from None


def blend(ratio: float, color: Color) -> Color:
    """Scale every channel by ratio, clamping the result."""
    r, g, b = color
    return (clamp(r * ratio), clamp(g * ratio), clamp(b * ratio))


# =============================================================================
# Color stream
# =============================================================================


class ColorStream:
    """
    Stateful source of slowly drifting colors.

    Args:
        max_change: Largest change applied to a channel in one sub-step
        times: Number of sub-steps folded into one advance()
        adjust: Post-step policy applied to each channel (clamp or wrap)
        rng: Random source; a fresh unseeded one is used if omitted
    """

    def __init__(
        self,
        max_change: float,
        times: int = 1,
        adjust: Adjust = clamp,
        rng: random.Random | None = None,
    ) -> None:
        self.max_change = max_change
        self.times = times
        self.adjust = adjust
        self.rng = rng if rng is not None else random.Random()
        # random() is in [0, 1), so channels start in [0, 256)
        self.channels = [self.rng.random() * 256 for _ in range(3)]
        self.steps = 0
        logger.debug(
            "ColorStream: max_change=%s times=%d start=%s",
            max_change,
            times,
            self.current_color(),
        )

    def current_color(self) -> Color:
        """The present color. Reading has no side effect."""
        r, g, b = self.channels
        return (clamp(r), clamp(g), clamp(b))

    def advance(self) -> None:
        """Move every channel by `times` random sub-steps."""
        for _ in range(self.times):
            for i, value in enumerate(self.channels):
                delta = self.rng.uniform(-self.max_change, self.max_change)
                self.channels[i] = self.adjust(value + delta)
        self.steps += 1
