"""Parsing decimal strings into correctly rounded IEEE-754 bit patterns."""

from __future__ import annotations

from .ieee754 import FloatFormat, Ieee754Bits

_DIGITS = "0123456789"
_LOG2_10 = 3.321928094887362
_CHUNK = 1000


class ParseError(ValueError):
    """Raised when a string is not a decimal floating-point number."""


def _parse_digit_run(digits: str) -> int:
    """Convert a string of ASCII digits of any length to an int."""
    value = 0
    for start in range(0, len(digits), _CHUNK):
        chunk = digits[start:start + _CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def _round_fraction(num: int, den: int, fmt: FloatFormat) -> int:
    """Round the positive rational num/den to the nearest value of ``fmt`` (ties to even)."""
    p = fmt.significand_bits
    min_e = 1 - fmt.exponent_bias - p

    def quotient(e: int) -> tuple[int, int, int]:
        n, d = (num, den << e) if e >= 0 else (num << -e, den)
        q, r = divmod(n, d)
        return q, r, d

    e = num.bit_length() - den.bit_length() - (p + 1)
    if quotient(e)[0] >= 1 << (p + 1):
        e += 1
    e = max(e, min_e)
    q, r, d = quotient(e)
    if 2 * r > d or (2 * r == d and q & 1):
        q += 1
    if q == 1 << (p + 1):
        q >>= 1
        e += 1
    if q < 1 << p:
        return q
    biased = e - min_e + 1
    if biased >= (1 << fmt.exponent_bits) - 1:
        return fmt.infinity_bits
    return (biased << p) | (q - (1 << p))


def _magnitude_bits(significand: int, exponent: int, fmt: FloatFormat) -> int:
    if significand == 0:
        return 0
    width = significand.bit_length()
    scaled = exponent * _LOG2_10
    if width - 1 + scaled > fmt.exponent_bias + 2:
        return fmt.infinity_bits
    min_e = 1 - fmt.exponent_bias - fmt.significand_bits
    if width + scaled < min_e - 2:
        return 0
    if exponent >= 0:
        return _round_fraction(significand * 10 ** exponent, 1, fmt)
    return _round_fraction(significand, 10 ** -exponent, fmt)


def decimal_to_binary(
    significand: int, exponent: int, is_negative: bool, fmt: FloatFormat = FloatFormat.BINARY64
) -> Ieee754Bits:
    """Correctly round ``significand * 10**exponent`` (nearest, ties to even)."""
    if significand < 0:
        raise ValueError("significand must be non-negative")
    u = _magnitude_bits(significand, exponent, fmt)
    if is_negative:
        u |= fmt.sign_mask
    return Ieee754Bits(u, fmt)


def _read_sign(text: str) -> tuple[int, bool]:
    if text.startswith("-"):
        return 1, True
    if text.startswith("+"):
        return 1, False
    return 0, False


def _read_exponent(text: str, pos: int, *, require_digits: bool) -> int:
    """Read the part after 'e'/'E' starting at ``pos``."""
    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    digits = text[pos:]
    if not digits:
        if require_digits:
            raise ParseError("missing exponent digits")
        return 0
    if any(ch not in _DIGITS for ch in digits):
        raise ParseError(f"invalid exponent {digits!r}")
    value = _parse_digit_run(digits)
    return -value if negative else value


def from_chars_limited(text: str, fmt: FloatFormat = FloatFormat.BINARY64) -> Ieee754Bits:
    """Parse a number with at most ``fmt.decimal_digits`` significant digits."""
    limit = fmt.decimal_digits
    end = len(text)
    pos, negative = _read_sign(text)
    if pos == end:
        raise ParseError("missing significand")

    significand = 0
    digits = 0
    exponent = 0
    in_fraction = False

    head = text[pos]
    if head == ".":
        pos += 1
        if pos == end:
            raise ParseError("missing digits after the decimal point")
        in_fraction = True
    elif head == "0":
        pos += 1
        if pos < end:
            if text[pos] == ".":
                pos += 1
                in_fraction = True
            elif text[pos] not in "eE":
                raise ParseError(f"unexpected {text[pos]!r} after leading zero")
    elif head in "123456789":
        significand = int(head)
        digits = 1
        pos += 1
    else:
        raise ParseError(f"unexpected {head!r}")

    while pos < end and text[pos] not in "eE":
        ch = text[pos]
        if ch == "." and not in_fraction:
            in_fraction = True
        elif ch in _DIGITS:
            digits += 1
            if digits > limit:
                raise ParseError(f"more than {limit} significant digits")
            significand = significand * 10 + int(ch)
            if in_fraction:
                exponent -= 1
        else:
            raise ParseError(f"unexpected {ch!r}")
        pos += 1

    if pos < end:
        pos += 1
        if pos == end:
            raise ParseError("missing exponent")
        if text[pos] in "+-" and pos + 1 == end:
            raise ParseError("missing exponent digits")
        exponent += _read_exponent(text, pos, require_digits=True)

    return decimal_to_binary(significand, exponent, negative, fmt)


def from_chars_unlimited(text: str, fmt: FloatFormat = FloatFormat.BINARY64) -> Ieee754Bits:
    """Parse a number with any count of digits, rounding to nearest with ties to even."""
    end = len(text)
    pos, negative = _read_sign(text)
    if pos == end:
        raise ParseError("missing significand")

    digit_chars: list[str] = []
    dot_seen = False
    fraction_digits = 0
    while pos < end and text[pos] not in "eE":
        ch = text[pos]
        if ch == ".":
            if dot_seen:
                raise ParseError("more than one decimal point")
            dot_seen = True
        elif ch in _DIGITS:
            digit_chars.append(ch)
            if dot_seen:
                fraction_digits += 1
        else:
            raise ParseError(f"unexpected {ch!r}")
        pos += 1
    if not digit_chars:
        raise ParseError("missing significand digits")

    exponent = -fraction_digits
    if pos < end:
        exponent += _read_exponent(text, pos + 1, require_digits=False)

    mantissa = "".join(digit_chars).lstrip("0")
    stripped = mantissa.rstrip("0")
    exponent += len(mantissa) - len(stripped)
    significand = _parse_digit_run(stripped) if stripped else 0
    return decimal_to_binary(significand, exponent, negative, fmt)