"""Exceptions raised by the Mandelbrot generation core."""


class MandelbrotBenchError(Exception):
    """Base class for every error reported by this package."""


class ConfigurationError(MandelbrotBenchError, ValueError):
    """An invalid viewport, grid, iteration cap or palette was supplied."""


class BackendUnavailableError(MandelbrotBenchError, RuntimeError):
    """The accelerated backend, its device or its display is missing."""


class ComparisonError(MandelbrotBenchError):
    """Two strategies cannot be compared (for example, a strategy with itself)."""
