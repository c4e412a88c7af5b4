from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "160", "--height", "160", "--max-iterations", "300"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]

    @property
    def directory(self) -> Path:
        return EXAMPLES_ROOT / self.name

    def full_args(self) -> list[str]:
        return ["python", "compare.py", *self.args, "--output-dir", str(self.directory)]


def _example(name: str, args: list[str], artifacts: list[str]) -> Example:
    return Example(
        name=name,
        args=args,
        expected=[Expected(EXAMPLES_ROOT / name / artifact) for artifact in artifacts],
    )


EXAMPLES: list[Example] = [
    _example("sequential", [*BASE_ARGS, "--first", "sequential"], ["Serial_Fractal.png"]),
    _example("parallel", [*BASE_ARGS, "--first", "parallel", "--workers", "2"], ["Parallel_Fractal.png"]),
    _example(
        "compare",
        [*BASE_ARGS, "--first", "sequential", "--second", "parallel"],
        ["Serial_Fractal.png", "Parallel_Fractal.png"],
    ),
    _example(
        "accelerated-cpu-device",
        [*BASE_ARGS, "--first", "accelerated", "--allow-cpu-device"],
        ["Cuda_Fractal.bmp"],
    ),
    _example(
        "max-iterations",
        ["--width", "160", "--height", "160", "--max-iterations", "50", "--first", "parallel"],
        ["Parallel_Fractal.png"],
    ),
    _example(
        "viewport",
        [*BASE_ARGS, "--x0", "-0.75", "--x1", "-0.73", "--y0", "0.1", "--y1", "0.12", "--first", "parallel"],
        ["Parallel_Fractal.png"],
    ),
    _example(
        "colormap",
        [*BASE_ARGS, "--colormap", "twilight_shifted", "--palette-size", "128", "--first", "parallel"],
        ["Parallel_Fractal.png"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            shutil.rmtree(path)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.directory])
        example.directory.mkdir(parents=True, exist_ok=True)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
