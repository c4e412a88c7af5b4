"""Call contract for accelerated (GPU) fractal backends."""

from __future__ import annotations

import ctypes
import ctypes.util
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from .config import INTERACTIVE_HEIGHT, INTERACTIVE_WIDTH, RenderConfig, compute_metadata
from .errors import BackendUnavailableError
from .log import log

NATIVE_LIBRARY = "CudaMandelbrot"
RENDER_SYMBOL = "generateFractalBMP"
INTERACTIVE_SYMBOL = "mandelbrotFractalOpenGL"


class AcceleratedBackend(ABC):
    """A device-side implementation reached through a fixed function-call contract."""

    name = "accelerated"

    @abstractmethod
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
        """Render the fractal into ``file_name`` and return the backend's own timing in ms."""

    @abstractmethod
    def render_interactive(self, width: int, height: int) -> None:
        """Launch a real-time display instead of writing a file."""


def bridge_arguments(config: RenderConfig, file_name: str) -> tuple:
    """Order the render parameters exactly as ``render_to_file`` expects them."""

    metadata = compute_metadata(config)
    viewport = config.viewport
    return (
        config.grid.width,
        config.grid.height,
        viewport.x0,
        viewport.x1,
        viewport.y0,
        viewport.y1,
        metadata.x_step,
        metadata.y_step,
        config.max_iterations,
        tuple(config.palette),
        len(config.palette),
        str(file_name),
    )


class GpuBridge:
    """Delegate generation to an accelerated backend without any CPU fallback."""

    def __init__(self, backend: AcceleratedBackend, interactive: bool = False) -> None:
        self.backend = backend
        self.interactive = bool(interactive)

    def render(self, config: RenderConfig, file_name: str | Path) -> float:
        """Write ``file_name`` through the backend, or open the live display when interactive.

        Returns the backend's own timing; interactive runs write nothing and report 0.
        """

        if self.interactive:
            self.render_interactive()
            return 0.0
        output = Path(file_name)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.unlink(missing_ok=True)
        try:
            reported = self.backend.render_to_file(*bridge_arguments(config, str(output)))
        except Exception:
            output.unlink(missing_ok=True)
            raise
        if not output.is_file():
            raise BackendUnavailableError(
                f"{self.backend.name} backend returned without writing {output}"
            )
        log(f"{self.backend.name} backend reported {reported:.3f} ms")
        return reported

    def render_interactive(self, width: int = INTERACTIVE_WIDTH, height: int = INTERACTIVE_HEIGHT) -> None:
        self.backend.render_interactive(width, height)


class NativeBackend(AcceleratedBackend):
    """ctypes adapter for the native CUDA library's exported entry points."""

    name = "native"

    def __init__(self, library: str = NATIVE_LIBRARY) -> None:
        path = ctypes.util.find_library(library) or library
        try:
            self._lib = ctypes.CDLL(path)
        except OSError as exc:
            raise BackendUnavailableError(f"could not load accelerated library {library!r}: {exc}") from exc

        self._render = self._symbol(RENDER_SYMBOL)
        self._render.argtypes = [
            ctypes.c_int, ctypes.c_int,
            ctypes.c_double, ctypes.c_double,
            ctypes.c_double, ctypes.c_double,
            ctypes.c_double, ctypes.c_double,
            ctypes.c_int,
            ctypes.POINTER(ctypes.c_int), ctypes.c_int,
            ctypes.c_char_p,
        ]
        self._render.restype = ctypes.c_double

        self._interactive = self._symbol(INTERACTIVE_SYMBOL)
        self._interactive.argtypes = [ctypes.c_int, ctypes.c_int]
        self._interactive.restype = None

    def _symbol(self, symbol: str):
        try:
            return getattr(self._lib, symbol)
        except AttributeError as exc:
            raise BackendUnavailableError(f"accelerated library does not export {symbol!r}") from exc

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
        color_array = (ctypes.c_int * colors_amount)(*colors)
        return float(self._render(
            width, height,
            x0, x1, y0, y1,
            pixel_width, pixel_height,
            max_iterations,
            color_array, colors_amount,
            str(file_name).encode(),
        ))

    def render_interactive(self, width: int, height: int) -> None:
        self._interactive(width, height)


def load_backend(name: str, **options) -> AcceleratedBackend:
    """Instantiate an accelerated backend by name ("tensorflow" or "native")."""

    if name == "native":
        return NativeBackend(**options)
    if name == "tensorflow":
        from .tensorflow_backend import TensorFlowBackend

        return TensorFlowBackend(**options)
    raise BackendUnavailableError(f"unknown accelerated backend {name!r}")
