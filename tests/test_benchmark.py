import math
import random
import re
from unittest import mock

import pytest

from fpconv.benchmark import (
    FromCharsUnlimitedPrecisionBenchmark,
    ToCharsFixedPrecisionBenchmark,
    main_from_chars_unlimited_precision,
    main_to_chars_fixed_precision,
    parse_with_float,
    run_matlab,
    write_results,
)
from fpconv.ieee754 import FloatFormat, Ieee754Bits

SCI = re.compile(r"^-?\d(\.\d+)?e[+-]\d+$")


def test_parse_with_float_plain_value():
    assert parse_with_float("1.5") == 1.5


def test_parse_with_float_out_of_range_gives_zero():
    assert parse_with_float("1e400") == 0.0
    assert parse_with_float("1e39", FloatFormat.BINARY32) == 0.0


def test_parse_with_float_invalid_gives_zero():
    assert parse_with_float("abc") == 0.0


def test_parse_with_float_binary32_rounds():
    expected = Ieee754Bits.from_float(0.1, FloatFormat.BINARY32).to_float()
    assert parse_with_float("0.1", FloatFormat.BINARY32) == expected


def test_to_chars_run_measures_each_precision():
    calls = []
    bench = ToCharsFixedPrecisionBenchmark(FloatFormat.BINARY64, random.Random(1))
    bench.prepare_samples(5)
    bench.register_function("rec", lambda x, p: calls.append(p))
    out = bench.run(0.0005, "binary64", 2)
    assert list(out) == ["rec"]
    assert len(out["rec"]) == 3
    assert all(t > 0 for t in out["rec"])
    assert set(calls) == {0, 1, 2}


def test_to_chars_samples_are_finite():
    bench = ToCharsFixedPrecisionBenchmark(FloatFormat.BINARY32, random.Random(2))
    bench.prepare_samples(50)
    assert len(bench.samples) == 50
    assert all(math.isfinite(x) for x in bench.samples)


def test_register_function_keeps_first():
    first, second = [], []
    bench = ToCharsFixedPrecisionBenchmark(FloatFormat.BINARY64, random.Random(3))
    bench.prepare_samples(2)
    bench.register_function("f", lambda x, p: first.append(x))
    bench.register_function("f", lambda x, p: second.append(x))
    bench.run(0.0002, "binary64", 0)
    assert bench.function_names == ("f",)
    assert first and not second


def test_to_chars_errors():
    bench = ToCharsFixedPrecisionBenchmark(FloatFormat.BINARY64, random.Random(4))
    with pytest.raises(ValueError):
        bench.run(0.001, "binary64", 1)
    with pytest.raises(ValueError):
        bench.prepare_samples(0)
    bench.prepare_samples(1)
    with pytest.raises(ValueError):
        bench.run(0.001, "binary64", -1)


def test_from_chars_samples_shape():
    bench = FromCharsUnlimitedPrecisionBenchmark(FloatFormat.BINARY64, random.Random(5))
    bench.prepare_samples(4, 3)
    assert len(bench.samples) == 4
    for precision, row in enumerate(bench.samples):
        assert len(row) == 4
        for text in row:
            assert SCI.match(text)
            mantissa = text.split("e")[0].lstrip("-")
            digits_after_dot = len(mantissa.split(".")[1]) if "." in mantissa else 0
            assert digits_after_dot == precision


def test_from_chars_high_precision_roundtrips():
    bench = FromCharsUnlimitedPrecisionBenchmark(FloatFormat.BINARY64, random.Random(6))
    bench.prepare_samples(10, 17)
    for text in bench.samples[16]:
        value = float(text)
        assert f"{value:.16e}" == text


def test_from_chars_run_and_errors():
    bench = FromCharsUnlimitedPrecisionBenchmark(FloatFormat.BINARY32, random.Random(7))
    with pytest.raises(ValueError):
        bench.prepare_samples(1, -1)
    bench.prepare_samples(3, 2)
    bench.register_function("float", float)
    out = bench.run(0.0005, "binary32")
    assert len(out["float"]) == 3
    assert all(t > 0 for t in out["float"])


def test_write_results(tmp_path):
    path = tmp_path / "sub" / "out.csv"
    write_results(path, 7, {"f": [1.5, 2.0]}, 1)
    lines = path.read_text().splitlines()
    assert lines[0] == "number_of_samples,7"
    assert lines[1] == "name,precision,time"
    assert lines[2] == '"f",0,1.5'
    assert lines[3] == '"f",1,2'


def test_run_matlab_invokes_matlab():
    with mock.patch("fpconv.benchmark.subprocess.run") as run:
        run.return_value = mock.Mock(returncode=0)
        assert run_matlab("prefix") is True
    command = run.call_args[0][0]
    assert command[0] == "matlab"
    assert "../results/prefix_binary32.csv" in command[-1]
    assert "../results/prefix_binary64.csv" in command[-1]


def test_run_matlab_missing_program():
    with mock.patch("fpconv.benchmark.subprocess.run", side_effect=FileNotFoundError):
        assert run_matlab("prefix") is False


def _args(tmp_path):
    return [
        "--samples", "3", "--duration", "0.0002",
        "--max-precision-binary32", "1", "--max-precision-binary64", "1",
        "--results-dir", str(tmp_path), "--no-matlab",
    ]


def test_main_to_chars(tmp_path):
    assert main_to_chars_fixed_precision(_args(tmp_path)) == 0
    for name in ("binary32", "binary64"):
        lines = (tmp_path / f"to_chars_fixed_precision_benchmark_{name}.csv").read_text().splitlines()
        assert lines[0] == "number_of_samples,3"
        assert len(lines) == 2 + 2


def test_main_from_chars(tmp_path):
    assert main_from_chars_unlimited_precision(_args(tmp_path) + ["--skip-binary32"]) == 0
    assert not (tmp_path / "from_chars_unlimited_precision_benchmark_binary32.csv").exists()
    lines = (
        tmp_path / "from_chars_unlimited_precision_benchmark_binary64.csv"
    ).read_text().splitlines()
    assert lines[1] == "name,precision,time"
    assert len(lines) == 2 + 2 * 2