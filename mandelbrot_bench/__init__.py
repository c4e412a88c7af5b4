"""Public API for Mandelbrot generation and strategy benchmarking."""

from .accelerated import AcceleratedBackend, GpuBridge, NativeBackend, bridge_arguments, load_backend
from .benchmark import Comparison, compare_results, time_call
from .config import GridSpec, RenderConfig, SamplingMetadata, Viewport, compute_metadata
from .errors import BackendUnavailableError, ComparisonError, ConfigurationError, MandelbrotBenchError
from .escape import BOUNDED, escape_time
from .generator import GenerationResult, Strategy, compare, generate, run_interactive
from .imaging import preview, write_image
from .palette import REFERENCE_PALETTE, color_for, colorize, palette_from_colormap
from .renderer import default_worker_count, pixel_to_complex, render_parallel, render_row, render_sequential

__all__ = [
    "AcceleratedBackend",
    "BOUNDED",
    "BackendUnavailableError",
    "Comparison",
    "ComparisonError",
    "ConfigurationError",
    "GenerationResult",
    "GpuBridge",
    "GridSpec",
    "MandelbrotBenchError",
    "NativeBackend",
    "REFERENCE_PALETTE",
    "RenderConfig",
    "SamplingMetadata",
    "Strategy",
    "Viewport",
    "bridge_arguments",
    "color_for",
    "colorize",
    "compare",
    "compare_results",
    "compute_metadata",
    "default_worker_count",
    "escape_time",
    "generate",
    "load_backend",
    "palette_from_colormap",
    "pixel_to_complex",
    "preview",
    "render_parallel",
    "render_row",
    "render_sequential",
    "run_interactive",
    "time_call",
    "write_image",
]
