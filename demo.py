"""
Command-line entry point for rendering tiled compositions.

Usage:
    python demo.py                                   # Default composition
    python demo.py --layers "diagonal:100 | walk:20" --seed 7
    python demo.py --preview walk --cols 8 --rows 5  # Visit order in the terminal
"""

from __future__ import annotations

import argparse
import logging
import random

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_piles, render_visit_order
from color_stream import ADJUSTMENTS
from composition_parser import format_layers, parse_layers
from raster import Canvas, RecordingSink, save_image
from tile_types import Rect
from tiling import ALIASES, TRAVERSALS, RenderConfig, Scatter, make_traversal, paint_composition

logger = logging.getLogger(__name__)


def traversal_demo(console: Console, traversal: str, cols: int, rows: int, seed: int | None) -> None:
    """Show the order in which a traversal visits a small grid."""
    shape = make_traversal(
        traversal, RecordingSink(), Rect(0, 0, cols, rows), 1, 1, rng=random.Random(seed)
    )
    cells = list(shape.cells())

    text = Text()
    text.append(f"{traversal} on {cols}x{rows}\n\n", style="bold")
    text.append(Text.from_ansi(render_visit_order(cells, cols, rows)))

    if isinstance(shape, Scatter):
        text.append("\n\nPiles:\n", style="bold cyan")
        text.append(render_piles(shape.heights, rows))

    console.print(Panel(text, title="Visit order", border_style="green"))


def render(config: RenderConfig, output: str, timestamp: bool, console: Console) -> None:
    """Paint one composition and save it."""
    canvas = Canvas(config.width, config.height, config.background, config.stroke_width)
    stream = paint_composition(config, canvas)
    path = save_image(canvas.image, output, timestamp=timestamp)

    r, g, b = stream.current_color()
    status = Text()
    status.append("Layers: ", style="bold")
    status.append(f"{format_layers(config.layers)}\n")
    status.append("Tiles painted: ", style="bold")
    status.append(f"{stream.steps}\n")
    status.append("Final color: ", style="bold")
    status.append(f"({r:.1f}, {g:.1f}, {b:.1f})\n", style=f"rgb({int(r)},{int(g)},{int(b)})")
    status.append("Saved: ", style="bold")
    status.append(str(path))
    console.print(Panel(status, title="Tiled composition", border_style="green"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a recursively tiled composition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Layer format: NAME:WxH separated by |, outermost first.
Traversals: row, diagonal, uniform, walk

Examples:
  python demo.py --layers "diagonal:200 | walk:40 | row:10" --seed 1
  python demo.py --adjust wrap --max-change 12 --times 3
  python demo.py --preview diagonal --cols 6 --rows 4
        """,
    )
    defaults = RenderConfig()
    parser.add_argument("--width", type=int, default=defaults.width)
    parser.add_argument("--height", type=int, default=defaults.height)
    parser.add_argument(
        "--layers", default=format_layers(defaults.layers), help="Layer stack, outermost first"
    )
    parser.add_argument(
        "--max-change", type=float, default=defaults.max_change,
        help="Largest per-channel change in one sub-step",
    )
    parser.add_argument(
        "--times", type=int, default=defaults.times, help="Sub-steps per tile"
    )
    parser.add_argument(
        "--stroke-ratio", type=float, default=defaults.stroke_ratio,
        help="Scale applied to the fill color for tile outlines",
    )
    parser.add_argument("--adjust", choices=sorted(ADJUSTMENTS), default=defaults.adjust)
    parser.add_argument("--stroke-width", type=int, default=defaults.stroke_width)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", "-o", default="output/composition.png")
    parser.add_argument(
        "--no-timestamp", action="store_true", help="Overwrite the output path as given"
    )
    parser.add_argument(
        "--preview", choices=sorted([*TRAVERSALS, *ALIASES]),
        help="Print the visit order of a traversal instead of rendering",
    )
    parser.add_argument("--cols", type=int, default=8, help="Preview grid columns")
    parser.add_argument("--rows", type=int, default=5, help="Preview grid rows")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    console = Console()

    if args.preview:
        traversal_demo(console, args.preview, args.cols, args.rows, args.seed)
        return 0

    try:
        layers = parse_layers(args.layers)
    except ValueError as e:
        parser.error(str(e))

    config = RenderConfig(
        width=args.width,
        height=args.height,
        layers=layers,
        max_change=args.max_change,
        times=args.times,
        stroke_ratio=args.stroke_ratio,
        adjust=args.adjust,
        seed=args.seed,
        stroke_width=args.stroke_width,
    )
    render(config, args.output, not args.no_timestamp, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
