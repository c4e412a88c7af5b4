"""Strategy selection and the timed generate-and-write entry point."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from .accelerated import AcceleratedBackend, GpuBridge, load_backend
from .benchmark import Comparison, compare_results, ensure_distinct, time_call
from .config import RenderConfig
from .errors import ConfigurationError
from .imaging import write_image
from .log import log
from .renderer import render_parallel, render_sequential


class Strategy(enum.Enum):
    """The closed set of generation strategies."""

    SEQUENTIAL = ("sequential", "SERIAL", "Sequential CPU", "Serial_Fractal.png")
    PARALLEL = ("parallel", "PARALLEL", "Parallel CPU", "Parallel_Fractal.png")
    ACCELERATED = ("accelerated", "ACCELERATED", "Accelerated GPU", "Cuda_Fractal.bmp")

    def __init__(self, key: str, banner: str, label: str, artifact_name: str) -> None:
        self.key = key
        self.banner = banner
        self.label = label
        self.artifact_name = artifact_name

    @classmethod
    def from_name(cls, name: str) -> Strategy:
        lowered = name.strip().lower()
        for strategy in cls:
            if strategy.key == lowered:
                return strategy
        choices = ", ".join(strategy.key for strategy in cls)
        raise ConfigurationError(f"unknown strategy {name!r}; choose one of {choices}")


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one timed generation run."""

    strategy: Strategy
    elapsed_ms: float
    artifact: Optional[Path]
    pixels: Optional[np.ndarray] = None


def describe(strategy: Strategy, config: RenderConfig) -> str:
    viewport = config.viewport
    grid = config.grid
    message = (
        f"Generating {strategy.banner} fractal of {grid.width}x{grid.height} pixels "
        f"with {config.max_iterations} iterations...\n\n"
    )
    message += f"Visible Coordinates\n    x: ({viewport.x0}; {viewport.x1})\n    y: ({viewport.y0}; {viewport.y1})\n"
    return message


def _render_and_write(strategy: Strategy, config: RenderConfig, output: Path,
                      workers: Optional[int], bridge: Optional[GpuBridge]) -> Optional[np.ndarray]:
    if strategy is Strategy.SEQUENTIAL:
        pixels = render_sequential(config)
    elif strategy is Strategy.PARALLEL:
        pixels = render_parallel(config, workers=workers)
    else:
        bridge.render(config, output)
        return None
    write_image(pixels, output)
    return pixels


def generate(
    strategy: Strategy,
    config: RenderConfig,
    *,
    output_dir: str | Path = ".",
    workers: Optional[int] = None,
    backend: Optional[AcceleratedBackend] = None,
) -> GenerationResult:
    """Render ``config`` with ``strategy``, write the artifact and time both steps.

    The clock stops only after the image file has been written. The
    accelerated strategy uses ``backend`` (TensorFlow on a GPU by default) and
    never falls back to a CPU renderer.
    """

    if not isinstance(strategy, Strategy):
        strategy = Strategy.from_name(str(strategy))
    if not isinstance(config, RenderConfig):
        raise ConfigurationError(f"config must be a RenderConfig, got {config!r}")

    bridge = None
    if strategy is Strategy.ACCELERATED:
        bridge = GpuBridge(backend if backend is not None else load_backend("tensorflow"))

    output = Path(output_dir) / strategy.artifact_name
    log(describe(strategy, config))

    elapsed, pixels = time_call(_render_and_write, strategy, config, output, workers, bridge)

    log(f"Fractal generated in {elapsed:0.3f} ms")
    return GenerationResult(strategy=strategy, elapsed_ms=elapsed, artifact=output, pixels=pixels)


def run_interactive(backend: Optional[AcceleratedBackend] = None) -> GenerationResult:
    """Launch the accelerated backend's real-time display; no artifact is written."""

    bridge = GpuBridge(backend if backend is not None else load_backend("tensorflow"), interactive=True)
    elapsed, _ = time_call(bridge.render_interactive)
    return GenerationResult(strategy=Strategy.ACCELERATED, elapsed_ms=elapsed, artifact=None)


def compare(first: Strategy, second: Strategy, config: RenderConfig, **options) -> Comparison:
    """Generate with two different strategies and report which was faster.

    Comparing a strategy with itself raises :class:`ComparisonError` before
    anything is rendered.
    """

    ensure_distinct(first, second)
    results = []
    for strategy in (first, second):
        log(f"------------ {strategy.label} ------------\n")
        results.append(generate(strategy, config, **options))
    return compare_results(*results)
