"""CPU rasterizers: a sequential oracle and a row-partitioned process pool."""

from __future__ import annotations

import multiprocessing
import os
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Optional

import numpy as np

from .config import RenderConfig, SamplingMetadata, compute_metadata
from .errors import ConfigurationError
from .escape import escape_time
from .palette import color_for

CHANNELS = 4


def default_worker_count() -> int:
    """Available hardware parallelism minus one, never less than one worker."""

    return max((os.cpu_count() or 1) - 1, 1)


def pixel_to_complex(metadata: SamplingMetadata, row: int, col: int) -> tuple[float, float]:
    x = metadata.x_min + col * metadata.x_step
    y = metadata.y_min + row * metadata.y_step
    return x, y


def allocate_buffer(config: RenderConfig) -> np.ndarray:
    return np.zeros((config.grid.height, config.grid.width, CHANNELS), dtype=np.uint8)


def render_sequential(config: RenderConfig) -> np.ndarray:
    """Render every pixel on the calling thread, rows then columns in ascending order."""

    metadata = compute_metadata(config)
    pixels = allocate_buffer(config)
    for py in range(metadata.y_res):
        c_imag = metadata.y_min + py * metadata.y_step
        for px in range(metadata.x_res):
            c_real = metadata.x_min + px * metadata.x_step
            iterations = escape_time(c_real, c_imag, config.max_iterations)
            pixels[py, px] = color_for(iterations, config.palette)
    return pixels


def render_row(config: RenderConfig, py: int) -> np.ndarray:
    """Render a single row of the grid; the unit of work handed to pool workers."""

    metadata = compute_metadata(config)
    row = np.zeros((metadata.x_res, CHANNELS), dtype=np.uint8)
    c_imag = metadata.y_min + py * metadata.y_step
    for px in range(metadata.x_res):
        c_real = metadata.x_min + px * metadata.x_step
        row[px] = color_for(escape_time(c_real, c_imag, config.max_iterations), config.palette)
    return row


def render_parallel(config: RenderConfig, workers: Optional[int] = None) -> np.ndarray:
    """Render rows across a process pool and return once every row is written.

    Each row index is produced by exactly one task and copied into its own
    slice of the buffer, so no locking is involved. The result is identical
    to :func:`render_sequential` for any worker count.
    """

    if workers is None:
        workers = default_worker_count()
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigurationError(f"workers must be a positive integer, got {workers!r}")

    height = config.grid.height
    pixels = allocate_buffer(config)
    chunksize = max(1, height // (workers * 4))
    context = multiprocessing.get_context("spawn")
    with ProcessPoolExecutor(max_workers=workers, mp_context=context) as executor:
        rows = executor.map(partial(render_row, config), range(height), chunksize=chunksize)
        for py, row in zip(range(height), rows):
            pixels[py] = row
    return pixels
