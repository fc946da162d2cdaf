"""Random generation of floating-point samples."""

from __future__ import annotations

import random
import secrets
from collections.abc import Iterable

from .ieee754 import FloatFormat, Ieee754Bits

_UINT32_MASK = 0xFFFFFFFF
# State size of a 64-bit Mersenne twister, in 32-bit words.
_SEED_WORDS = 312 * 64 // 32


class RepeatingSeedSeq:
    """A seed sequence that fills requests by repeating its stored words."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = [v & _UINT32_MASK for v in values]
        if not self._values:
            raise ValueError("a seed sequence needs at least one value")

    def generate(self, count: int) -> list[int]:
        if count < 0:
            raise ValueError("count must be non-negative")
        repeats, rest = divmod(count, len(self._values))
        return self._values * repeats + self._values[:rest]

    def param(self) -> list[int]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)


def generate_correctly_seeded_rng() -> random.Random:
    """A generator seeded with a full state's worth of system entropy."""
    seq = RepeatingSeedSeq(secrets.randbits(32) for _ in range(_SEED_WORDS))
    seed_bytes = b"".join(w.to_bytes(4, "little") for w in seq.generate(_SEED_WORDS))
    return random.Random(int.from_bytes(seed_bytes, "little"))


def uniformly_randomly_generate_finite_float(fmt: FloatFormat, rng) -> float:
    """Pick sign, exponent field and significand field uniformly, excluding inf and NaN."""
    sign_bit = rng.randint(0, 1)
    exponent_bits = rng.randint(0, (1 << fmt.exponent_bits) - 2)
    significand_bits = rng.randint(0, (1 << fmt.significand_bits) - 1)
    u = (
        (sign_bit << (fmt.carrier_bits - 1))
        | (exponent_bits << fmt.significand_bits)
        | significand_bits
    )
    return Ieee754Bits(u, fmt).to_float()


def uniformly_randomly_generate_general_float(fmt: FloatFormat, rng) -> float:
    """Pick a bit pattern uniformly; the result may be infinite or NaN."""
    return Ieee754Bits(rng.getrandbits(fmt.carrier_bits), fmt).to_float()