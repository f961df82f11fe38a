"""Benchmarks for Butterworth design and biquad processing.

Compares torchiir against scipy.signal.butter and scipy.signal.sosfilt.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import torch
from scipy import signal as scipy_signal

from torchiir.filter import Butterworth
from torchiir.filter_design import butterworth_design


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Returns
    -------
    dict
        Timing statistics in seconds: 'mean', 'std', 'min' and 'max'.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
        "min": np.min(times),
        "max": np.max(times),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-6:
        return f"{seconds * 1e9:.3f}ns"
    elif seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def print_comparison(
    name: str,
    ts_time: dict[str, float],
    scipy_time: dict[str, float],
) -> None:
    """Print benchmark comparison results."""
    print(f"\n{name}")
    print("-" * len(name))
    print(
        f"  torchiir: {format_time(ts_time['mean'])} "
        f"+/- {format_time(ts_time['std'])}"
    )
    print(
        f"  scipy:    {format_time(scipy_time['mean'])} "
        f"+/- {format_time(scipy_time['std'])}"
    )
    ratio = scipy_time["mean"] / ts_time["mean"]
    if ratio >= 1:
        print(f"  Speedup:  {ratio:.2f}x faster")
    else:
        print(f"  Speedup:  {1 / ratio:.2f}x slower")


class BenchButterworth:
    """Benchmarks for Butterworth design and filtering."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> dict[str, float]:
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_design(
        self, order: int = 8, cutoff=0.3, filter_type: str = "lowpass"
    ) -> None:
        """Benchmark butterworth_design vs scipy.signal.butter."""
        ts_time = self._bench(butterworth_design, order, cutoff, filter_type)
        scipy_time = self._bench(
            scipy_signal.butter,
            order,
            cutoff,
            btype=filter_type,
            output="sos",
        )

        print_comparison(
            f"butterworth_design ({filter_type}, order={order})",
            ts_time,
            scipy_time,
        )

    def bench_process(self, order: int = 4, length: int = 4096) -> None:
        """Benchmark Butterworth.process vs scipy.signal.sosfilt."""
        lowpass = Butterworth(order, 0.3)
        sos = lowpass.sos.numpy()
        x = torch.randn(length, dtype=torch.float64)
        x_np = x.numpy()

        ts_time = self._bench(lowpass.process, x)
        scipy_time = self._bench(scipy_signal.sosfilt, sos, x_np)

        print_comparison(
            f"process (order={order}, length={length})", ts_time, scipy_time
        )

    def run_all(self) -> None:
        """Run all benchmarks."""
        print("=" * 60)
        print("BUTTERWORTH BENCHMARKS")
        print("=" * 60)

        print("\n--- Design ---")
        self.bench_design()
        self.bench_design(filter_type="highpass")
        self.bench_design(cutoff=(0.2, 0.4), filter_type="bandpass")
        self.bench_design(cutoff=(0.2, 0.4), filter_type="bandstop")

        print("\n--- Processing ---")
        self.bench_process()

    def run_scaling(self) -> None:
        """Run scaling benchmarks with varying parameters."""
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        print("\n--- Order Scaling ---")
        for order in [2, 4, 8, 16, 32]:
            self.bench_design(order=order)

        print("\n--- Signal Length Scaling ---")
        for length in [256, 1024, 4096, 16384]:
            self.bench_process(length=length)


if __name__ == "__main__":
    bench = BenchButterworth(warmup=5, iterations=20)
    bench.run_all()
    print("\n")
    bench.run_scaling()
