"""Accelerated backend that runs the escape-time loop on a TensorFlow device."""

from __future__ import annotations

import time
from typing import Optional, Sequence

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import tensorflow as tf

from .accelerated import AcceleratedBackend
from .config import GridSpec, RenderConfig, Viewport, compute_metadata
from .errors import BackendUnavailableError
from .escape import BOUNDED, ESCAPE_RADIUS_SQUARED
from .imaging import write_image
from .log import log
from .palette import colorize

NON_INTERACTIVE_BACKENDS = frozenset({"agg", "cairo", "pdf", "pgf", "ps", "svg", "template"})


@tf.function
def _escape_step(
    n: tf.Tensor,
    re: tf.Tensor,
    im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single escape-time step for points that have not diverged."""

    real2 = re * re
    imag2 = im * im
    new_im = 2.0 * re * im + c_im
    new_re = real2 - imag2 + c_re
    escaped = tf.logical_and(active, real2 + imag2 > ESCAPE_RADIUS_SQUARED)
    counts = tf.where(escaped, n, counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    re = tf.where(active, new_re, re)
    im = tf.where(active, new_im, im)
    return re, im, counts, active


@tf.function
def _escape_run(c_re: tf.Tensor, c_im: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate every point with a TensorFlow while loop and return escape counts."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    counts = tf.fill(tf.shape(c_re), tf.constant(BOUNDED, dtype=tf.int32))
    active = tf.ones_like(c_re, tf.bool)

    def cond(i, re, im, counts, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, re, im, counts, active):
        re, im, counts, active = _escape_step(i, re, im, c_re, c_im, counts, active)
        return i + 1, re, im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, c_re, c_im, counts, active))
    return counts


def _select_device(require_gpu: bool) -> str:
    gpus = tf.config.list_physical_devices('GPU')
    if gpus:
        try:
            for gpu in gpus:
                tf.config.experimental.set_memory_growth(gpu, True)
        except RuntimeError as e:
            # Memory growth must be set before the GPU is initialised.
            log(e)
        log("GPU found, using %s" % gpus[0].name)
        return '/GPU:0'
    if require_gpu:
        raise BackendUnavailableError("no TensorFlow GPU device is visible; refusing to run on CPU")
    log("No GPU found, using CPU")
    return '/CPU:0'


class TensorFlowBackend(AcceleratedBackend):
    """Escape-time kernel expressed as TensorFlow ops, placed on a GPU by default."""

    name = "tensorflow"

    def __init__(self, device: Optional[str] = None, require_gpu: bool = True) -> None:
        self.device = device if device is not None else _select_device(require_gpu)

    def escape_counts(
        self,
        width: int,
        height: int,
        x0: float,
        y0: float,
        pixel_width: float,
        pixel_height: float,
        max_iterations: int,
    ) -> np.ndarray:
        """Return the ``(height, width)`` grid of escape counts, ``BOUNDED`` for interior points."""

        x = x0 + np.arange(width, dtype=np.float64) * np.float64(pixel_width)
        y = y0 + np.arange(height, dtype=np.float64) * np.float64(pixel_height)
        with tf.device(self.device):
            x_tf = tf.convert_to_tensor(x, dtype=tf.float64)
            y_tf = tf.convert_to_tensor(y, dtype=tf.float64)
            c_re, c_im = tf.meshgrid(x_tf, y_tf)
            counts = _escape_run(c_re, c_im, tf.constant(max_iterations, dtype=tf.int32))
        return counts.numpy()

    def render_to_file(
        self,
        width: int,
        height: int,
        x0: float,
        x1: float,
        y0: float,
        y1: float,
        pixel_width: float,
        pixel_height: float,
        max_iterations: int,
        colors: Sequence[int],
        colors_amount: int,
        file_name: str,
    ) -> float:
        palette: Sequence[int] = tuple(colors)[:colors_amount]
        start = time.perf_counter()
        counts = self.escape_counts(width, height, x0, y0, pixel_width, pixel_height, max_iterations)
        elapsed = (time.perf_counter() - start) * 1000.0
        write_image(colorize(counts, palette), file_name)
        return elapsed

    def render_interactive(self, width: int, height: int) -> None:
        backend = matplotlib.get_backend().lower()
        if backend in NON_INTERACTIVE_BACKENDS:
            raise BackendUnavailableError(
                f"interactive display needs a GUI matplotlib backend, current backend is {backend!r}"
            )

        config = RenderConfig(viewport=Viewport(), grid=GridSpec(width, height))
        metadata = compute_metadata(config)
        counts = self.escape_counts(
            width, height,
            metadata.x_min, metadata.y_min,
            metadata.x_step, metadata.y_step,
            config.max_iterations,
        )
        fig = plt.figure(figsize=(width / 100, height / 100), dpi=100)
        fig.canvas.manager.set_window_title("Mandelbrot Fractal")
        ax = fig.add_axes([0, 0, 1, 1])
        ax.imshow(colorize(counts, config.palette), interpolation="nearest")
        ax.set_axis_off()
        plt.show()
