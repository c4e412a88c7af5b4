import os
import sys
import warnings
from argparse import ArgumentParser
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

from mandelbrot_bench import (
    REFERENCE_PALETTE,
    BackendUnavailableError,
    ComparisonError,
    ConfigurationError,
    GridSpec,
    RenderConfig,
    Strategy,
    Viewport,
    compare,
    generate,
    load_backend,
    palette_from_colormap,
    preview,
    run_interactive,
)
from mandelbrot_bench import config as defaults
from mandelbrot_bench.log import log, set_verbose


def _quiet_tensorflow() -> None:
    if not _suppress_messages or "tensorflow" not in sys.modules:
        return
    import tensorflow as tf

    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")


def build_parser():
    parser = ArgumentParser(description='Render the Mandelbrot set with one or two strategies and compare their timings.')
    strategy_names = [strategy.key for strategy in Strategy]

    parser.add_argument('--first', choices=strategy_names, default='sequential',
                        help='strategy used for the first (or only) generation run')
    parser.add_argument('--second', choices=strategy_names, default=None,
                        help='strategy to compare against the first one')

    parser.add_argument('--width', type=int, dest='width', metavar='WIDTH', default=defaults.DEFAULT_WIDTH,
                        help='number of pixels along the x-axis')
    parser.add_argument('--height', type=int, dest='height', metavar='HEIGHT', default=defaults.DEFAULT_HEIGHT,
                        help='number of pixels along the y-axis')
    parser.add_argument('--max-iterations', type=int, dest='max_iterations', metavar='MAX_ITERATIONS',
                        default=defaults.DEFAULT_MAX_ITERATIONS, help='iteration cap for the escape-time search')

    parser.add_argument('--x0', type=float, default=defaults.DEFAULT_X0, help='left edge of the viewport')
    parser.add_argument('--x1', type=float, default=defaults.DEFAULT_X1, help='right edge of the viewport')
    parser.add_argument('--y0', type=float, default=defaults.DEFAULT_Y0, help='top edge of the viewport (row 0)')
    parser.add_argument('--y1', type=float, default=defaults.DEFAULT_Y1, help='bottom edge of the viewport')

    parser.add_argument('--colormap', type=str, default=None, metavar='COLORMAP',
                        help='build the palette from a matplotlib colormap instead of the reference palette')
    parser.add_argument('--palette-size', type=int, default=len(REFERENCE_PALETTE), metavar='N',
                        help='number of colors sampled from --colormap')

    parser.add_argument('--workers', type=int, default=None,
                        help='process count for the parallel strategy (default: CPU count - 1)')
    parser.add_argument('--output-dir', type=str, default='.', dest='output_dir',
                        help='directory in which the artifacts are written')

    parser.add_argument('--backend', choices=['tensorflow', 'native'], default='tensorflow',
                        help='accelerated backend used by the accelerated strategy')
    parser.add_argument('--library', type=str, default='CudaMandelbrot',
                        help='shared library loaded by the native backend')
    parser.add_argument('--allow-cpu-device', action='store_true', dest='allow_cpu_device',
                        help='let the tensorflow backend run on a CPU device when no GPU is visible')

    parser.add_argument('--interactive', action='store_true',
                        help='open the accelerated real-time display instead of writing files')
    parser.add_argument('--preview', action='store_true', help='open the generated images when done')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def build_config(opt) -> RenderConfig:
    palette = REFERENCE_PALETTE
    if opt.colormap:
        palette = palette_from_colormap(opt.colormap, opt.palette_size)
    return RenderConfig(
        viewport=Viewport(opt.x0, opt.x1, opt.y0, opt.y1),
        grid=GridSpec(opt.width, opt.height),
        max_iterations=opt.max_iterations,
        palette=palette,
    )


def build_backend(opt):
    if opt.backend == 'native':
        return load_backend('native', library=opt.library)
    backend = load_backend('tensorflow', require_gpu=not opt.allow_cpu_device)
    _quiet_tensorflow()
    return backend


def main(argv=None) -> int:
    parser = build_parser()
    opt = parser.parse_args(argv)
    set_verbose(opt.verbose)

    try:
        config = build_config(opt)
    except ConfigurationError as exc:
        parser.error(str(exc))

    first = Strategy.from_name(opt.first)
    second = Strategy.from_name(opt.second) if opt.second else None

    backend = None
    if opt.interactive or Strategy.ACCELERATED in (first, second):
        try:
            backend = build_backend(opt)
        except BackendUnavailableError as exc:
            print(f"Accelerated backend unavailable: {exc}")
            return 2

    try:
        if opt.interactive:
            run_interactive(backend)
            return 0

        options = dict(output_dir=Path(opt.output_dir), workers=opt.workers, backend=backend)
        if second is None:
            results = [generate(first, config, **options)]
        else:
            comparison = compare(first, second, config, **options)
            results = [comparison.faster, comparison.slower]
    except ComparisonError as exc:
        print(exc)
        return 1
    except ConfigurationError as exc:
        parser.error(str(exc))
    except BackendUnavailableError as exc:
        print(f"Accelerated backend failed: {exc}")
        return 2

    for result in results:
        print(f"{result.strategy.label}: {result.elapsed_ms:0.3f} ms -> {result.artifact}")
    if second is not None:
        print(comparison.summary())

    if opt.preview:
        for result in results:
            log(f"Opening {result.artifact}")
            preview(result.artifact)
    return 0


if __name__ == '__main__':
    sys.exit(main())
