"""Timing of fixed-precision formatting and unlimited-precision parsing."""

from __future__ import annotations

import argparse
import math
import subprocess
import time
from collections.abc import Callable, Mapping, Sequence
from itertools import cycle
from pathlib import Path

from .from_chars import from_chars_unlimited
from .ieee754 import FloatFormat, Ieee754Bits
from .random_float import (
    generate_correctly_seeded_rng,
    uniformly_randomly_generate_finite_float,
)

Results = dict[str, list[float]]

_FORMAT_NAMES = {FloatFormat.BINARY32: "binary32", FloatFormat.BINARY64: "binary64"}
_INFINITY_WORDS = {"inf", "infinity"}


def _time_per_call(duration_sec: float, call: Callable[[object], object], samples) -> float:
    """Call ``call`` on samples in turn for about ``duration_sec``; mean nanoseconds per call."""
    start = time.perf_counter_ns()
    deadline = start + int(duration_sec * 1e9)
    iterations = 0
    now = start
    for sample in cycle(samples):
        call(sample)
        iterations += 1
        now = time.perf_counter_ns()
        if now > deadline:
            break
    return (now - start) / iterations if iterations else math.inf


def _format_scientific(x: float, precision: int) -> str:
    return f"{x:.{precision}e}"


class ToCharsFixedPrecisionBenchmark:
    """Times formatting functions ``func(x, precision) -> str`` on random finite floats."""

    def __init__(self, fmt: FloatFormat = FloatFormat.BINARY64, rng=None) -> None:
        self.fmt = fmt
        self._rng = rng if rng is not None else generate_correctly_seeded_rng()
        self._samples: list[float] = []
        self._functions: dict[str, Callable[[float, int], object]] = {}

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    @property
    def function_names(self) -> tuple[str, ...]:
        return tuple(self._functions)

    def register_function(self, name: str, func: Callable[[float, int], object]) -> None:
        """Add ``func`` under ``name``; a name already registered keeps its first function."""
        self._functions.setdefault(name, func)

    def prepare_samples(self, number_of_samples: int) -> None:
        if number_of_samples < 1:
            raise ValueError("at least one sample is needed")
        self._samples = [
            uniformly_randomly_generate_finite_float(self.fmt, self._rng)
            for _ in range(number_of_samples)
        ]

    def run(
        self,
        duration_per_each_precision_in_sec: float,
        float_name: str,
        max_precision: int,
        out: Results | None = None,
    ) -> Results:
        """Measure every function at every precision from 0 to ``max_precision``."""
        if max_precision < 0:
            raise ValueError("max_precision must be non-negative")
        if not self._samples:
            raise ValueError("no samples prepared")
        if out is None:
            out = {}
        for precision in range(max_precision + 1):
            print(
                f"Benchmark for precision = {precision} "
                f"with uniformly random {float_name}'s..."
            )
            for name, func in self._functions.items():
                measured = out.setdefault(name, [])
                if not measured:
                    measured.extend([0.0] * (max_precision + 1))
                measured[precision] = _time_per_call(
                    duration_per_each_precision_in_sec,
                    lambda x, f=func, p=precision: f(x, p),
                    self._samples,
                )
        return out


class FromCharsUnlimitedPrecisionBenchmark:
    """Times parsing functions ``func(text) -> float`` on random decimal strings."""

    def __init__(self, fmt: FloatFormat = FloatFormat.BINARY64, rng=None) -> None:
        self.fmt = fmt
        self._rng = rng if rng is not None else generate_correctly_seeded_rng()
        self._samples: list[list[str]] = []
        self._functions: dict[str, Callable[[str], float]] = {}

    @property
    def samples(self) -> tuple[tuple[str, ...], ...]:
        """Sample strings, indexed by precision and then by sample."""
        return tuple(tuple(row) for row in self._samples)

    @property
    def function_names(self) -> tuple[str, ...]:
        return tuple(self._functions)

    def register_function(self, name: str, func: Callable[[str], float]) -> None:
        """Add ``func`` under ``name``; a name already registered keeps its first function."""
        self._functions.setdefault(name, func)

    def prepare_samples(self, number_of_samples: int, max_precision: int) -> None:
        """For each precision, format random finite floats in scientific notation."""
        if max_precision < 0:
            raise ValueError("max_precision must be non-negative")
        if number_of_samples < 1:
            raise ValueError("at least one sample is needed")
        self._samples = [
            [
                _format_scientific(
                    uniformly_randomly_generate_finite_float(self.fmt, self._rng), precision
                )
                for _ in range(number_of_samples)
            ]
            for precision in range(max_precision + 1)
        ]

    def run(
        self,
        duration_per_each_precision_in_sec: float,
        float_name: str,
        out: Results | None = None,
    ) -> Results:
        """Measure every function on the samples of every prepared precision."""
        if out is None:
            out = {}
        for precision, samples in enumerate(self._samples):
            print(f"Benchmark for precision = {precision} with random {float_name}'strings...")
            for name, func in self._functions.items():
                measured = out.setdefault(name, [])
                if not measured:
                    measured.extend([0.0] * len(self._samples))
                measured[precision] = _time_per_call(
                    duration_per_each_precision_in_sec, func, samples
                )
        return out


def parse_with_float(text: str, fmt: FloatFormat = FloatFormat.BINARY64) -> float:
    """Parse with the built-in float; out-of-range or invalid input gives 0."""
    try:
        value = float(text)
        if fmt is FloatFormat.BINARY32:
            value = Ieee754Bits.from_float(value, fmt).to_float()
    except (ValueError, OverflowError):
        return 0.0
    if math.isinf(value) and text.strip().lstrip("+-").lower() not in _INFINITY_WORDS:
        return 0.0
    return value


def write_results(
    path: str | Path,
    number_of_samples: int,
    results: Mapping[str, Sequence[float]],
    max_precision: int,
) -> None:
    """Write measured times as CSV: a sample-count line, a header, one row per name and precision."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as out_file:
        out_file.write(f"number_of_samples,{number_of_samples}\n")
        out_file.write("name,precision,time\n")
        for name, times in results.items():
            for precision in range(max_precision + 1):
                out_file.write(f'"{name}",{precision},{times[precision]:g}\n')


def run_matlab(csv_prefix: str) -> bool:
    """Plot the binary32 and binary64 result files with MATLAB; True if it ran and succeeded."""
    script = (
        "cd('matlab');"
        f"plot_fixed_precision_benchmark('../results/{csv_prefix}_binary32.csv');"
        f"plot_fixed_precision_benchmark('../results/{csv_prefix}_binary64.csv');"
    )
    try:
        completed = subprocess.run(["matlab", "-nosplash", "-r", script], check=False)
    except OSError:
        return False
    return completed.returncode == 0


def _build_parser(prog: str, default_samples: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("--samples", type=int, default=default_samples)
    parser.add_argument("--duration", type=float, default=0.1,
                        help="seconds spent on each precision")
    # Largest number of nonzero decimal digits: 112 for binary32, 767 for binary64.
    parser.add_argument("--max-precision-binary32", type=int, default=120)
    parser.add_argument("--max-precision-binary64", type=int, default=780)
    parser.add_argument("--skip-binary32", action="store_true")
    parser.add_argument("--skip-binary64", action="store_true")
    parser.add_argument("--results-dir", default="results")
    parser.add_argument("--no-matlab", action="store_true")
    return parser


def _selected_formats(args) -> list[tuple[FloatFormat, int]]:
    selected = []
    if not args.skip_binary32:
        selected.append((FloatFormat.BINARY32, args.max_precision_binary32))
    if not args.skip_binary64:
        selected.append((FloatFormat.BINARY64, args.max_precision_binary64))
    return selected


def main_to_chars_fixed_precision(argv: Sequence[str] | None = None) -> int:
    """Run the fixed-precision formatting benchmark and write its CSV files."""
    prefix = "to_chars_fixed_precision_benchmark"
    args = _build_parser(prefix, 1_000_000).parse_args(argv)
    for fmt, max_precision in _selected_formats(args):
        float_name = _FORMAT_NAMES[fmt]
        print(f"[Running fixed-precision formatting benchmark for {float_name}...]")
        bench = ToCharsFixedPrecisionBenchmark(fmt)
        bench.register_function("str.format", _format_scientific)
        print("Generating random samples...")
        bench.prepare_samples(args.samples)
        results = bench.run(args.duration, float_name, max_precision)
        print("Benchmarking done.\nNow writing to files...")
        write_results(Path(args.results_dir) / f"{prefix}_{float_name}.csv",
                      args.samples, results, max_precision)
        print("Done.\n\n")
    if not args.no_matlab:
        run_matlab(prefix)
    return 0


def main_from_chars_unlimited_precision(argv: Sequence[str] | None = None) -> int:
    """Run the unlimited-precision parsing benchmark and write its CSV files."""
    prefix = "from_chars_unlimited_precision_benchmark"
    args = _build_parser(prefix, 10_000).parse_args(argv)
    for fmt, max_precision in _selected_formats(args):
        float_name = _FORMAT_NAMES[fmt]
        print(f"[Running unlimited-precision parsing benchmark for {float_name}...]")
        bench = FromCharsUnlimitedPrecisionBenchmark(fmt)
        bench.register_function("stof/stod", lambda text, f=fmt: parse_with_float(text, f))
        bench.register_function(
            "from_chars_unlimited", lambda text, f=fmt: from_chars_unlimited(text, f).to_float()
        )
        print("Generating random samples...")
        bench.prepare_samples(args.samples, max_precision)
        results = bench.run(args.duration, float_name)
        print("Benchmarking done.\nNow writing to files...")
        write_results(Path(args.results_dir) / f"{prefix}_{float_name}.csv",
                      args.samples, results, max_precision)
        print("Done.\n\n")
    if not args.no_matlab:
        run_matlab(prefix)
    return 0