import pytest

from mandelbrot_bench import GridSpec, RenderConfig, Viewport, render_sequential, write_image
from mandelbrot_bench.accelerated import AcceleratedBackend


class RecordingBackend(AcceleratedBackend):
    """Accelerated backend double that renders on the CPU and records its calls."""

    name = "recording"

    def __init__(self):
        self.calls = []
        self.interactive_calls = []

    def render_to_file(self, *args):
        self.calls.append(args)
        width, height, x0, x1, y0, y1, _, _, max_iterations, colors, amount, file_name = args
        config = RenderConfig(
            viewport=Viewport(x0, x1, y0, y1),
            grid=GridSpec(width, height),
            max_iterations=max_iterations,
            palette=tuple(colors)[:amount],
        )
        write_image(render_sequential(config), file_name)
        return 1.5

    def render_interactive(self, width, height):
        self.interactive_calls.append((width, height))


class FailingBackend(AcceleratedBackend):
    name = "failing"

    def render_to_file(self, *args):
        file_name = args[-1]
        with open(file_name, "wb") as handle:
            handle.write(b"partial")
        raise RuntimeError("device lost")

    def render_interactive(self, width, height):
        raise RuntimeError("no display")


@pytest.fixture
def small_config():
    return RenderConfig(grid=GridSpec(24, 16), max_iterations=200)


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def failing_backend():
    return FailingBackend()
