"""Conversions between integers and raw floating-point bit patterns.

Integers are plain Python integers checked against a bit width: unsigned
values must lie in ``[0, 2**width)`` and signed values in
``[-2**(width-1), 2**(width-1))``.
"""

from __future__ import annotations

from .formats import FloatFormat

__all__ = [
    "unsigned_to_float",
    "signed_to_float",
    "float_to_unsigned",
    "float_to_signed",
]


def _check_width(width: int) -> None:
    if width <= 0:
        raise ValueError("width must be positive")


def _round_half_even(value: int, shift: int) -> int:
    """Shift ``value`` right by ``shift`` bits, rounding to nearest, ties to even."""
    kept = value >> shift
    dropped = value & ((1 << shift) - 1)
    half = 1 << (shift - 1)
    if dropped > half or (dropped == half and kept & 1):
        kept += 1
    return kept


def _magnitude_to_bits(fmt: FloatFormat, value: int) -> int:
    """Bits of the float nearest to the non-negative integer ``value``."""
    if value == 0:
        return 0
    top = value.bit_length() - 1
    if top + fmt.exp_bias >= fmt.exp_sat:
        return fmt.exp_mask
    if top <= fmt.sig_bits:
        significand = value << (fmt.sig_bits - top)
    else:
        significand = _round_half_even(value, top - fmt.sig_bits)
    # The significand still carries its implicit bit, so the exponent field is
    # one less than the biased exponent; "+" lets a rounding carry spill over.
    result = ((top + fmt.exp_bias - 1) << fmt.sig_bits) + significand
    return min(result, fmt.exp_mask)


def unsigned_to_float(fmt: FloatFormat, value: int, width: int) -> int:
    """Convert an unsigned ``width``-bit integer to the bits of ``fmt``."""
    _check_width(width)
    if not 0 <= value < (1 << width):
        raise ValueError(f"{value!r} does not fit in {width} unsigned bits")
    return _magnitude_to_bits(fmt, value)


def signed_to_float(fmt: FloatFormat, value: int, width: int) -> int:
    """Convert a signed ``width``-bit integer to the bits of ``fmt``."""
    _check_width(width)
    bound = 1 << (width - 1)
    if not -bound <= value < bound:
        raise ValueError(f"{value!r} does not fit in {width} signed bits")
    sign = fmt.sign_mask if value < 0 else 0
    return _magnitude_to_bits(fmt, abs(value)) | sign


def _truncate(fmt: FloatFormat, fbits: int, magnitude_bits: int) -> int | None:
    """Truncate ``fbits`` toward zero.

    Returns ``None`` when the value is at least ``2**magnitude_bits`` (infinity
    included), and zero for values below one and for patterns above infinity.
    """
    one = fmt.exp_bias << fmt.sig_bits
    limit = min((fmt.exp_bias + magnitude_bits) << fmt.sig_bits, fmt.exp_mask)
    if fbits < one:
        return 0
    if fbits < limit:
        exponent = (fbits >> fmt.sig_bits) - fmt.exp_bias
        significand = (fbits & fmt.sig_mask) | fmt.implicit_bit
        if exponent <= fmt.sig_bits:
            return significand >> (fmt.sig_bits - exponent)
        return significand << (exponent - fmt.sig_bits)
    if fbits <= fmt.exp_mask:
        return None
    return 0


def float_to_unsigned(fmt: FloatFormat, bits: int, width: int) -> int:
    """Convert float bits to an unsigned ``width``-bit integer.

    Truncates toward zero; negative values and NaNs give zero, values too
    large (infinity included) saturate to the maximum.
    """
    _check_width(width)
    result = _truncate(fmt, bits & fmt.int_mask, width)
    if result is None:
        return (1 << width) - 1
    return result


def float_to_signed(fmt: FloatFormat, bits: int, width: int) -> int:
    """Convert float bits to a signed ``width``-bit integer.

    Truncates toward zero; NaNs give zero and out-of-range values saturate to
    the minimum or maximum according to their sign.
    """
    _check_width(width)
    bits &= fmt.int_mask
    negative = fmt.is_sign_negative(bits)
    result = _truncate(fmt, bits & (fmt.sign_mask - 1), width - 1)
    if result is None:
        return -(1 << (width - 1)) if negative else (1 << (width - 1)) - 1
    return -result if negative else result