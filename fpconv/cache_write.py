"""Text rendering of wide cache entries as hexadecimal word lists."""

from __future__ import annotations

from enum import Enum


class CacheEntryType(Enum):
    """Layouts of cache entries: number of words and bits per word."""

    UINT64 = (1, 64)
    UINT96 = (3, 32)
    UINT128 = (2, 64)
    UINT192 = (3, 64)
    UINT256 = (4, 64)

    def __init__(self, words: int, word_bits: int) -> None:
        self.words = words
        self.word_bits = word_bits

    @property
    def total_bits(self) -> int:
        return self.words * self.word_bits


def format_cache_entry(entry_type: CacheEntryType, value: int) -> str:
    """Render ``value`` as ``0x...`` or ``{ 0x..., ... }``, most significant word first."""
    if value < 0:
        raise ValueError("cache entries are unsigned")
    if value >> entry_type.total_bits:
        raise ValueError(f"value does not fit in {entry_type.total_bits} bits")
    mask = (1 << entry_type.word_bits) - 1
    width = entry_type.word_bits // 4
    parts = [
        f"0x{(value >> (entry_type.word_bits * i)) & mask:0{width}x}"
        for i in reversed(range(entry_type.words))
    ]
    if entry_type.words == 1:
        return parts[0]
    return "{ " + ", ".join(parts) + " }"