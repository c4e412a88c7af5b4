"""Mapping from escape counts to RGBA pixel values."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import ConfigurationError
from .escape import BOUNDED

BLACK = (0, 0, 0, 255)
OPAQUE = 255

# 64 colors cycling red -> green -> blue, packed as 0xRRGGBB.
REFERENCE_PALETTE: tuple[int, ...] = (
    0xff0000, 0xf60800, 0xee1000, 0xe61800,
    0xde2000, 0xd52900, 0xcd3100, 0xc53900,
    0xbd4100, 0xb44a00, 0xac5200, 0xa45a00,
    0x9c6200, 0x946a00, 0x8b7300, 0x837b00,
    0x7b8300, 0x738b00, 0x6a9400, 0x629c00,
    0x5aa400, 0x52ac00, 0x4ab400, 0x41bd00,
    0x39c500, 0x31cd00, 0x29d500, 0x20de00,
    0x18e600, 0x10ee00, 0x08f600, 0x00ff00,
    0x00ff00, 0x00f608, 0x00ee10, 0x00e618,
    0x00de20, 0x00d529, 0x00cd31, 0x00c539,
    0x00bd41, 0x00b44a, 0x00ac52, 0x00a45a,
    0x009c62, 0x00946a, 0x008b73, 0x00837b,
    0x007b83, 0x00738b, 0x006a94, 0x00629c,
    0x005aa4, 0x0052ac, 0x004ab4, 0x0041bd,
    0x0039c5, 0x0031cd, 0x0029d5, 0x0020de,
    0x0018e6, 0x0010ee, 0x0008f6, 0x0000ff,
)


def unpack_rgb(color: int) -> tuple[int, int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF, OPAQUE


def color_for(iterations: int, palette: Sequence[int]) -> tuple[int, int, int, int]:
    """Return the opaque RGBA color for an escape count; bounded points are black."""

    if iterations == BOUNDED:
        return BLACK
    return unpack_rgb(palette[iterations % len(palette)])


def palette_to_rgba(palette: Sequence[int]) -> np.ndarray:
    """Build an ``(N, 4)`` uint8 lookup table from a packed palette."""

    packed = np.asarray(palette, dtype=np.uint32)
    table = np.empty((packed.size, 4), dtype=np.uint8)
    table[:, 0] = (packed >> 16) & 0xFF
    table[:, 1] = (packed >> 8) & 0xFF
    table[:, 2] = packed & 0xFF
    table[:, 3] = OPAQUE
    return table


def colorize(counts: np.ndarray, palette: Sequence[int]) -> np.ndarray:
    """Vectorised ``color_for`` over a grid of escape counts."""

    counts = np.asarray(counts, dtype=np.int64)
    table = palette_to_rgba(palette)
    bounded = counts == BOUNDED
    indices = np.where(bounded, 0, counts) % table.shape[0]
    rgba = table[indices]
    rgba[bounded] = BLACK
    return rgba


def palette_from_colormap(name: str, size: int = 64) -> tuple[int, ...]:
    """Sample ``size`` evenly spaced colors from a matplotlib colormap."""

    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigurationError(f"palette size must be a positive integer, got {size!r}")
    # Render workers import this module; matplotlib stays out of their start-up.
    from matplotlib import colormaps

    try:
        cmap = colormaps[name]
    except KeyError as exc:
        raise ConfigurationError(f"unknown matplotlib colormap {name!r}") from exc

    rgba = np.asarray(cmap(np.linspace(0.0, 1.0, size)), dtype=np.float64)
    rgb = np.uint8(np.clip(rgba[:, :3] * 255, 0, 255)).astype(np.int64)
    packed = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    return tuple(int(color) for color in packed)
