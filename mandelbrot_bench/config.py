"""Immutable configuration for a single Mandelbrot generation run."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Sequence

from .errors import ConfigurationError
from .palette import REFERENCE_PALETTE

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
INTERACTIVE_WIDTH = 1280
INTERACTIVE_HEIGHT = 720
DEFAULT_MAX_ITERATIONS = 1000

DEFAULT_X0 = -2.0
DEFAULT_X1 = 0.5
DEFAULT_Y0 = -1.25
DEFAULT_Y1 = 1.25


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane mapped onto the pixel grid."""

    x0: float = DEFAULT_X0
    x1: float = DEFAULT_X1
    y0: float = DEFAULT_Y0
    y1: float = DEFAULT_Y1

    def __post_init__(self) -> None:
        for name in ("x0", "x1", "y0", "y1"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"viewport {name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigurationError(f"viewport {name} must be finite, got {value!r}")
            object.__setattr__(self, name, float(value))
        if not self.x0 < self.x1:
            raise ConfigurationError(f"viewport requires x0 < x1, got x0={self.x0!r}, x1={self.x1!r}")
        if not self.y0 < self.y1:
            raise ConfigurationError(f"viewport requires y0 < y1, got y0={self.y0!r}, y1={self.y1!r}")


@dataclass(frozen=True)
class GridSpec:
    """Pixel dimensions of the rendered image."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"grid {name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"grid {name} must be positive, got {value!r}")


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered frame."""

    x_min: float
    y_min: float
    x_step: float
    y_step: float
    x_res: int
    y_res: int


@dataclass(frozen=True)
class RenderConfig:
    """Everything a generation strategy needs, passed explicitly into every call."""

    viewport: Viewport = field(default_factory=Viewport)
    grid: GridSpec = field(default_factory=GridSpec)
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    palette: tuple[int, ...] = REFERENCE_PALETTE

    def __post_init__(self) -> None:
        if not isinstance(self.viewport, Viewport):
            raise ConfigurationError(f"viewport must be a Viewport, got {self.viewport!r}")
        if not isinstance(self.grid, GridSpec):
            raise ConfigurationError(f"grid must be a GridSpec, got {self.grid!r}")
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ConfigurationError(f"max_iterations must be an integer, got {self.max_iterations!r}")
        if self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must not be negative, got {self.max_iterations!r}")
        object.__setattr__(self, "palette", _validate_palette(self.palette))

    def with_changes(self, **changes) -> RenderConfig:
        return replace(self, **changes)

    @property
    def metadata(self) -> SamplingMetadata:
        return compute_metadata(self)


def _validate_palette(palette: Sequence[int]) -> tuple[int, ...]:
    colors = tuple(palette)
    if not colors:
        raise ConfigurationError("palette must contain at least one color")
    for index, color in enumerate(colors):
        if isinstance(color, bool) or not isinstance(color, int):
            raise ConfigurationError(f"palette[{index}] must be a packed RGB integer, got {color!r}")
        if not 0 <= color <= 0xFFFFFF:
            raise ConfigurationError(f"palette[{index}] is outside 0x000000..0xFFFFFF: {color:#x}")
    return colors


def compute_metadata(config: RenderConfig) -> SamplingMetadata:
    """Derive the per-pixel step sizes from the viewport and grid."""

    viewport = config.viewport
    grid = config.grid
    return SamplingMetadata(
        x_min=viewport.x0,
        y_min=viewport.y0,
        x_step=(viewport.x1 - viewport.x0) / grid.width,
        y_step=(viewport.y1 - viewport.y0) / grid.height,
        x_res=grid.width,
        y_res=grid.height,
    )
