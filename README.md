# fpconv

`fpconv` parses decimal text into IEEE-754 binary32 and binary64 bit
patterns with correct rounding (to nearest, ties to even). It also has
helpers for inspecting bit patterns, generating random floats, describing
conversion policies, rendering wide integers as hexadecimal table entries,
and two benchmark commands. It uses only the Python standard library.

## Modules

- `fpconv.ieee754`
  - `FloatFormat.BINARY32` and `FloatFormat.BINARY64` describe the two
    formats (`carrier_bits`, `significand_bits`, `exponent_bits`,
    `decimal_digits`, `exponent_bias`, `sign_mask`, `infinity_bits`, ...).
  - `Ieee754Bits(u, fmt)` is a frozen bit pattern. It raises `ValueError`
    if `u` does not fit in the format. `Ieee754Bits.from_float(value, fmt)`
    encodes a Python float, and `to_float()` decodes it. `is_negative()`,
    `is_finite()`, `is_nonzero()`, `extract_exponent_bits()` and
    `extract_significand_bits()` inspect the pattern.
- `fpconv.from_chars`
  - `decimal_to_binary(significand, exponent, is_negative, fmt)` rounds
    `significand * 10**exponent` to the nearest value, ties to even. It
    overflows to infinity and underflows to zero.
  - `from_chars_limited(text, fmt)` accepts at most `fmt.decimal_digits`
    significant digits (9 for binary32, 17 for binary64).
  - `from_chars_unlimited(text, fmt)` accepts any number of digits.
  - Both accept an optional sign, digits with an optional decimal point and
    an optional `e`/`E` exponent. Malformed text raises `ParseError`, a
    subclass of `ValueError`.
- `fpconv.random_float`
  - `RepeatingSeedSeq(values)` has `generate(count)`, `param()` and `len()`.
  - `generate_correctly_seeded_rng()` returns a `random.Random` seeded from
    system entropy.
  - `uniformly_randomly_generate_finite_float(fmt, rng)` picks the sign, the
    exponent field (never all ones) and the significand field uniformly.
  - `uniformly_randomly_generate_general_float(fmt, rng)` picks any bit
    pattern, so the result can be infinite or NaN.
- `fpconv.policy_holder`: chooses one policy per kind.
  - `PolicyKind(name)` is a tag. The module defines `PRECISION`,
    `OUTPUT_FORMAT`, `SIGN`, `TRAILING_ZERO`, `BINARY_ROUNDING`,
    `DECIMAL_ROUNDING`, `CACHE` and `INPUT_VALIDATION`.
  - `make_default(kind, policy)`, `make_default_generator(kind, generator)`
    and `make_default_list(*defaults)` declare the accepted kinds.
  - `make_policy_holder(defaults, *policies)` returns a `PolicyHolder`.
    - A policy whose `policy_kind` is not accepted raises `InvalidPolicyError`.
    - Two policies of one kind raise `RepeatedPolicyError`.
    - Both errors derive from `PolicyError`.
  - `PolicyHolder.policy_for(kind)` returns the chosen policy. Any attribute
    that exactly one held policy has can also be read from the holder.
- `fpconv.policies`: policy enums that act on a `DecimalFp`
  (`significand`, `exponent`, `is_negative`, `may_have_trailing_zeros`,
  `is_signed`).
  - `Sign` (`IGNORE`, `PROPAGATE`)
  - `TrailingZero` (`ALLOW`, `REMOVE`, `REPORT`), together with
    `remove_trailing_zeros(significand)`
  - `BinaryRounding`: its `delegate(bits)` resolves to a `RoundingBehavior`.
    The behaviour gives an `IntervalType` through `interval_type_normal`
    and `interval_type_shorter`.
  - `DecimalRounding`, with `break_rounding_tie`
  - `InputValidation`: its `validate_input` raises `ValueError` for
    non-finite input under `ASSERT_FINITE`.
- `fpconv.cache_write`: `format_cache_entry(entry_type, value)` renders an
  unsigned integer as `0x...` or as `{ 0x..., ... }`, most significant word
  first. It supports the layouts of `CacheEntryType` (`UINT64`, `UINT96`,
  `UINT128`, `UINT192`, `UINT256`).

## Example

```python
from fpconv.ieee754 import FloatFormat
from fpconv.from_chars import from_chars_limited, from_chars_unlimited

bits = from_chars_unlimited("0.1000000000000000055511151231257827", FloatFormat.BINARY64)
print(bits.to_float())                                # 0.1
print(from_chars_limited("-1.5e3", FloatFormat.BINARY32).to_float())  # -1500.0
```

Choosing policies:

```python
from fpconv.policies import Sign, TrailingZero
from fpconv.policy_holder import (
    SIGN, TRAILING_ZERO, make_default, make_default_list, make_policy_holder,
)

holder = make_policy_holder(
    make_default_list(make_default(SIGN, Sign.IGNORE),
                      make_default(TRAILING_ZERO, TrailingZero.ALLOW)),
    Sign.PROPAGATE,
)
holder.policy_for(SIGN)            # Sign.PROPAGATE
holder.policy_for(TRAILING_ZERO)   # TrailingZero.ALLOW
holder.return_has_sign             # True
```

## Benchmarks

```
fpconv-bench-to-chars
fpconv-bench-from-chars
```

`fpconv-bench-to-chars` times Python's built-in scientific formatting
(`"str.format"`) on random finite floats, at every precision.
`fpconv-bench-from-chars` times `float()` (`"stof/stod"`) and
`from_chars_unlimited` on random scientific-notation strings, at every
precision. Both commands work for binary32 and binary64.

Each command writes
`<results-dir>/<name>_binary32.csv` and `..._binary64.csv`. It then runs
`matlab` to plot them if that program is available.

Options:

| Option | Effect |
| --- | --- |
| `--samples` | number of samples |
| `--duration` | seconds per precision, 0.1 by default |
| `--max-precision-binary32` | highest precision for binary32, 120 by default |
| `--max-precision-binary64` | highest precision for binary64, 780 by default |
| `--skip-binary32`, `--skip-binary64` | leave out one of the formats |
| `--results-dir` | output directory, `results` by default |
| `--no-matlab` | do not run `matlab` |

## What the package does not do

- It does not convert binary values to decimal text. It has no
  shortest-round-trip or fixed-precision formatter of its own, and the
  formatting benchmark measures Python's built-in formatting.
- The policies in `fpconv.policies` are not applied by the parsers. Those
  always round to nearest, ties to even.

## Running the tests

```
pip install -e ".[test]"
pytest
```