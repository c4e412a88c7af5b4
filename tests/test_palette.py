import numpy as np
import pytest

from mandelbrot_bench import BOUNDED, REFERENCE_PALETTE, ConfigurationError, color_for, colorize, palette_from_colormap
from mandelbrot_bench.palette import palette_to_rgba, unpack_rgb


def test_reference_palette_cycles_red_green_blue():
    assert len(REFERENCE_PALETTE) == 64
    assert REFERENCE_PALETTE[0] == 0xFF0000
    assert REFERENCE_PALETTE[31] == 0x00FF00
    assert REFERENCE_PALETTE[-1] == 0x0000FF


def test_bounded_points_are_opaque_black():
    assert color_for(BOUNDED, REFERENCE_PALETTE) == (0, 0, 0, 255)


def test_escape_counts_index_the_palette():
    assert color_for(0, REFERENCE_PALETTE) == (255, 0, 0, 255)
    assert color_for(63, REFERENCE_PALETTE) == (0, 0, 255, 255)
    assert color_for(5, (0x123456,)) == (0x12, 0x34, 0x56, 255)


@pytest.mark.parametrize("n", [0, 1, 17, 63, 64, 999])
def test_color_mapping_is_periodic(n):
    palette = REFERENCE_PALETTE
    assert color_for(n, palette) == color_for(n + len(palette), palette)


def test_colorize_matches_color_for():
    counts = np.array([[BOUNDED, 0, 1], [63, 64, 1000]])
    rgba = colorize(counts, REFERENCE_PALETTE)
    assert rgba.shape == (2, 3, 4)
    assert rgba.dtype == np.uint8
    for (row, col), n in np.ndenumerate(counts):
        assert tuple(rgba[row, col]) == color_for(int(n), REFERENCE_PALETTE)


def test_palette_lookup_table():
    table = palette_to_rgba((0xFF8000, 0x000001))
    assert table.tolist() == [[255, 128, 0, 255], [0, 0, 1, 255]]
    assert unpack_rgb(0xABCDEF) == (0xAB, 0xCD, 0xEF, 255)


def test_palette_from_colormap():
    palette = palette_from_colormap("viridis", 16)
    assert len(palette) == 16
    assert all(0 <= color <= 0xFFFFFF for color in palette)
    assert len(set(palette)) > 1


def test_palette_from_unknown_colormap():
    with pytest.raises(ConfigurationError):
        palette_from_colormap("not-a-colormap")


def test_palette_from_colormap_rejects_bad_size():
    with pytest.raises(ConfigurationError):
        palette_from_colormap("viridis", 0)
