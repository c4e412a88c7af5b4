"""Wall-clock timing of generation runs and speed comparison between strategies."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from .errors import ComparisonError


def time_call(fn: Callable[..., Any], *args, **kwargs) -> tuple[float, Any]:
    """Call ``fn`` and return ``(elapsed_ms, result)`` measured on a monotonic clock."""

    start = time.perf_counter()
    result = fn(*args, **kwargs)
    elapsed = (time.perf_counter() - start) * 1000.0
    return elapsed, result


def ensure_distinct(first, second) -> None:
    if first == second:
        label = getattr(first, "label", first)
        raise ComparisonError(
            f"Selected strategies are the same ({label})! Please choose different ones."
        )


@dataclass(frozen=True)
class Comparison:
    """Two timed runs ordered by speed."""

    faster: Any
    slower: Any

    @property
    def ratio(self) -> float:
        if self.faster.elapsed_ms <= 0.0:
            return float("inf")
        return self.slower.elapsed_ms / self.faster.elapsed_ms

    def summary(self) -> str:
        return (
            f"{self.faster.strategy.label} was {self.ratio:0.2f}x faster "
            f"than {self.slower.strategy.label}!"
        )


def compare_results(first, second) -> Comparison:
    """Order two generation results by elapsed time."""

    ensure_distinct(first.strategy, second.strategy)
    if first.elapsed_ms > second.elapsed_ms:
        return Comparison(faster=second, slower=first)
    return Comparison(faster=first, slower=second)
