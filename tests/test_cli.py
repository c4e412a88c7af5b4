import pytest

import compare as cli
from mandelbrot_bench import REFERENCE_PALETTE, Strategy
from mandelbrot_bench.log import set_verbose

SMALL = ["--width", "12", "--height", "8", "--max-iterations", "60"]


@pytest.fixture(autouse=True)
def _reset_verbosity():
    yield
    set_verbose(False)


def test_defaults_build_reference_config():
    opt = cli.build_parser().parse_args([])
    config = cli.build_config(opt)
    assert (config.grid.width, config.grid.height) == (1024, 1024)
    assert config.palette == REFERENCE_PALETTE
    assert Strategy.from_name(opt.first) is Strategy.SEQUENTIAL


def test_colormap_option_builds_palette():
    opt = cli.build_parser().parse_args(["--colormap", "inferno", "--palette-size", "32"])
    assert len(cli.build_config(opt).palette) == 32


def test_single_generation(tmp_path, capsys):
    assert cli.main([*SMALL, "--first", "parallel", "--workers", "2", "--output-dir", str(tmp_path)]) == 0
    assert (tmp_path / "Parallel_Fractal.png").is_file()
    assert "Parallel CPU" in capsys.readouterr().out


def test_comparison(tmp_path, capsys):
    argv = [*SMALL, "--first", "sequential", "--second", "parallel", "--workers", "2", "--output-dir", str(tmp_path)]
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "faster than" in out
    assert (tmp_path / "Serial_Fractal.png").is_file()
    assert (tmp_path / "Parallel_Fractal.png").is_file()


def test_same_strategy_is_reported_not_fatal(tmp_path, capsys):
    argv = [*SMALL, "--first", "parallel", "--second", "parallel", "--output-dir", str(tmp_path)]
    assert cli.main(argv) == 1
    assert "same" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_invalid_configuration_is_rejected(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--width", "0", "--output-dir", str(tmp_path)])
    assert excinfo.value.code == 2


def test_unavailable_native_backend(tmp_path, capsys):
    argv = [*SMALL, "--first", "accelerated", "--backend", "native",
            "--library", "definitely_missing_mandelbrot", "--output-dir", str(tmp_path)]
    assert cli.main(argv) == 2
    assert "unavailable" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []
