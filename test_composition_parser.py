"""Tests for composition_parser module."""

import pytest

from composition_parser import format_layers, parse_layers, parse_size
from tile_types import Layer


class TestParseSize:
    """Tests for tile size parsing."""

    def test_width_by_height(self) -> None:
        """Parse an explicit WxH size."""
        assert parse_size("40x20") == (40, 20)

    def test_square(self) -> None:
        """A single number means square tiles."""
        assert parse_size("16") == (16, 16)

    def test_uppercase_separator(self) -> None:
        """The separator is case-insensitive."""
        assert parse_size("8X4") == (8, 4)

    @pytest.mark.parametrize("size_str", ["", "x", "40x", "ax4", "4x4x4", "-3", "2.5"])
    def test_malformed(self, size_str: str) -> None:
        """Malformed sizes are rejected."""
        with pytest.raises(ValueError, match="Invalid tile size"):
            parse_size(size_str)

    def test_non_positive(self) -> None:
        """Zero-sized tiles are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            parse_size("0x10")


class TestParseLayers:
    """Tests for layer stack parsing."""

    def test_single_layer(self) -> None:
        """Parse one layer."""
        assert parse_layers("row:10x5") == (Layer("row", 10, 5),)

    def test_stack_outermost_first(self) -> None:
        """Layers keep their order, outermost first."""
        layers = parse_layers("diagonal:200 | walk:40x40 | row:10")
        assert layers == (
            Layer("diagonal", 200, 200),
            Layer("walk", 40, 40),
            Layer("row", 10, 10),
        )

    def test_aliases_resolved(self) -> None:
        """Aliases are stored under their canonical names."""
        layers = parse_layers("row-major:8|scatter-uniform:4|scatter-walk:2")
        assert [layer.traversal for layer in layers] == ["row", "uniform", "walk"]

    def test_whitespace_ignored(self) -> None:
        """Spaces around names and sizes are ignored."""
        assert parse_layers("  walk :  6x3 ") == (Layer("walk", 6, 3),)

    def test_empty_layer(self) -> None:
        """Empty layers are rejected."""
        with pytest.raises(ValueError, match="Empty layer at position 1"):
            parse_layers("row:10||walk:5")

    def test_missing_size(self) -> None:
        """A layer without a size is rejected."""
        with pytest.raises(ValueError, match="missing a tile size"):
            parse_layers("diagonal")

    def test_unknown_traversal(self) -> None:
        """Unknown traversal names are rejected."""
        with pytest.raises(ValueError, match="Unknown traversal 'spiral'"):
            parse_layers("spiral:10")

    def test_format_round_trip(self) -> None:
        """format_layers produces text parse_layers accepts."""
        layers = (Layer("diagonal", 200, 100), Layer("walk", 40, 40))
        assert format_layers(layers) == "diagonal:200x100 | walk:40x40"
        assert parse_layers(format_layers(layers)) == layers
