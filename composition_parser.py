"""
Parsing of composition layer stacks.

Format:
- Layers separated by |, outermost first
- Each layer is NAME:SIZE
  * NAME is a traversal name (row, diagonal, uniform, walk) or alias
    (row-major, scatter-uniform, scatter-walk)
  * SIZE is WxH (e.g. 40x20) or a single number for square tiles (e.g. 40)
- Whitespace around names and sizes is ignored

Example:
    "diagonal:200 | walk:40x40 | row:10"
    Creates a 200px diagonal sweep whose cells are 40px scatter-walk piles,
    each filled row by row with 10px tiles.
"""

from __future__ import annotations

from tile_types import Layer
from tiling import ALIASES, resolve_traversal

__all__ = ["parse_layers", "parse_size", "format_layers"]


def parse_size(size_str: str) -> tuple[int, int]:
    """Parse "WxH" or "N" into a positive (width, height) pair."""
    parts = size_str.lower().split("x")
    if len(parts) == 1:
        parts = parts * 2
    if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"Invalid tile size '{size_str}'. Expected WxH or N, e.g. 40x20 or 40")

    width, height = (int(p) for p in parts)
    if width <= 0 or height <= 0:
        raise ValueError(f"Tile size must be positive, got '{size_str}'")
    return (width, height)


def parse_layers(definition: str) -> tuple[Layer, ...]:
    """
    Parse a layer stack definition.

    Args:
        definition: Layers in the format described in the module docstring

    Returns:
        Tuple of Layers, outermost first, with aliases resolved to canonical names
    """
    layers: list[Layer] = []

    for index, layer_str in enumerate(definition.split("|")):
        layer_str = layer_str.strip()
        if not layer_str:
            raise ValueError(f"Empty layer at position {index} in '{definition}'")

        if ":" not in layer_str:
            error_msg = (
                f"Layer {index} '{layer_str}' is missing a tile size. "
                f"Expected format: name:WxH (e.g. diagonal:40x40)"
            )
            raise ValueError(error_msg)

        name, size_str = (part.strip() for part in layer_str.split(":", 1))
        resolve_traversal(name)
        width, height = parse_size(size_str)
        layers.append(Layer(ALIASES.get(name, name), width, height))

    return tuple(layers)


def format_layers(layers: tuple[Layer, ...]) -> str:
    """Inverse of parse_layers, for display."""
    return " | ".join(
        f"{layer.traversal}:{layer.tile_width}x{layer.tile_height}" for layer in layers
    )
