"""Benchmark: RotatingSink write throughput — writes per second.

Measures how many RotatingSink.write() calls complete per second for
typical log-line sized payloads, with and without a forced day change every
``_ROTATE_EVERY`` writes.
"""
from __future__ import annotations

import json
import sys
import tempfile
import time
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dated_rotating_sink.config.loader import RetentionConfig
from dated_rotating_sink.sink.rotating import RotatingSink

_ITERATIONS: int = 100_000
_ROTATE_EVERY: int = 10_000
_LINE: bytes = b"2024-01-11T12:00:00 INFO service request handled in 12ms\n"


class _SteppingClock:
    """Clock that jumps one day every ``step`` calls."""

    def __init__(self, step: int) -> None:
        self._step = step
        self._calls = 0
        self._start = datetime(2024, 1, 11, 12)

    def __call__(self) -> datetime:
        self._calls += 1
        days = self._calls // self._step if self._step else 0
        return self._start + timedelta(days=days)


def _run(rotate_every: int) -> float:
    with tempfile.TemporaryDirectory() as directory:
        sink = RotatingSink(
            Path(directory) / "bench.log",
            config=RetentionConfig(max_files=3, compress=True),
            clock=_SteppingClock(rotate_every),
        )
        start = time.perf_counter()
        for _ in range(_ITERATIONS):
            sink.write(_LINE)
        total = time.perf_counter() - start
        sink.close()
        sink.join_maintenance()
    return total


def bench_write_throughput() -> dict[str, object]:
    """Benchmark RotatingSink.write() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, rotating_total_seconds, rotating_ops_per_second.
    """
    steady = _run(rotate_every=0)
    rotating = _run(rotate_every=_ROTATE_EVERY)

    result: dict[str, object] = {
        "operation": "rotating_sink_write_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(steady, 4),
        "ops_per_second": round(_ITERATIONS / steady, 1),
        "avg_latency_ms": round(steady / _ITERATIONS * 1000, 4),
        "rotating_total_seconds": round(rotating, 4),
        "rotating_ops_per_second": round(_ITERATIONS / rotating, 1),
    }
    print(
        f"[bench_write_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec steady, "
        f"{result['rotating_ops_per_second']:,.0f} ops/sec rotating"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_write_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
