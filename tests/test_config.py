import pytest

from mandelbrot_bench import ConfigurationError, GridSpec, RenderConfig, Viewport, compute_metadata
from mandelbrot_bench.config import DEFAULT_MAX_ITERATIONS


def test_defaults_match_reference_configuration():
    config = RenderConfig()
    assert (config.viewport.x0, config.viewport.x1) == (-2.0, 0.5)
    assert (config.viewport.y0, config.viewport.y1) == (-1.25, 1.25)
    assert (config.grid.width, config.grid.height) == (1024, 1024)
    assert config.max_iterations == DEFAULT_MAX_ITERATIONS == 1000
    assert len(config.palette) == 64


@pytest.mark.parametrize(
    "bounds",
    [(0.5, -2.0, -1.0, 1.0), (0.0, 0.0, -1.0, 1.0), (-1.0, 1.0, 1.0, 1.0), (-1.0, float("inf"), -1.0, 1.0)],
)
def test_viewport_rejects_non_positive_extent(bounds):
    with pytest.raises(ConfigurationError):
        Viewport(*bounds)


@pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5), (True, 5), (2.5, 5)])
def test_grid_rejects_invalid_dimensions(width, height):
    with pytest.raises(ConfigurationError):
        GridSpec(width, height)


def test_negative_iteration_cap_is_rejected():
    with pytest.raises(ConfigurationError, match="max_iterations"):
        RenderConfig(max_iterations=-1)


def test_zero_iteration_cap_is_allowed():
    assert RenderConfig(max_iterations=0).max_iterations == 0


@pytest.mark.parametrize("palette", [(), (0x1000000,), (-1,), ("red",)])
def test_invalid_palettes_are_rejected(palette):
    with pytest.raises(ConfigurationError):
        RenderConfig(palette=palette)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        GridSpec(0, 0)


def test_metadata_follows_viewport_and_grid():
    config = RenderConfig(grid=GridSpec(100, 50))
    metadata = compute_metadata(config)
    assert metadata.x_step == pytest.approx(2.5 / 100)
    assert metadata.y_step == pytest.approx(2.5 / 50)
    assert (metadata.x_res, metadata.y_res) == (100, 50)

    resized = config.with_changes(grid=GridSpec(10, 10))
    assert resized.metadata.x_step == pytest.approx(0.25)


def test_with_changes_revalidates():
    with pytest.raises(ConfigurationError):
        RenderConfig().with_changes(max_iterations=-5)


def test_config_is_immutable():
    config = RenderConfig()
    with pytest.raises(AttributeError):
        config.max_iterations = 3
