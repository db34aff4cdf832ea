"""
Tests for the command-line entry point.
"""

import pytest
from PIL import Image

from demo import build_parser, main


class TestMain:
    """Tests for demo.main."""

    def test_render_writes_image(self, tmp_path) -> None:
        """A small render is saved at the requested path."""
        out = tmp_path / "small.png"
        code = main(
            [
                "--width", "40",
                "--height", "30",
                "--layers", "diagonal:20 | walk:10x5",
                "--seed", "3",
                "--output", str(out),
                "--no-timestamp",
            ]
        )
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (40, 30)

    def test_preview(self, capsys) -> None:
        """Preview mode prints the visit order and writes nothing."""
        assert main(["--preview", "walk", "--cols", "3", "--rows", "2", "--seed", "1"]) == 0
        captured = capsys.readouterr()
        assert "walk on 3x2" in captured.out
        assert "Piles" in captured.out

    def test_bad_layers_exit(self, tmp_path) -> None:
        """Invalid layer stacks are reported as usage errors."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--layers", "spiral:10", "--output", str(tmp_path / "x.png")])
        assert excinfo.value.code == 2

    def test_defaults_round_trip(self) -> None:
        """The default layer stack is accepted by the parser."""
        args = build_parser().parse_args([])
        assert args.layers == "diagonal:200x200 | walk:40x40 | row:10x10"
        assert args.adjust == "clamp"
