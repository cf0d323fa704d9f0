"""Raising to an integer power on raw bit patterns."""

from __future__ import annotations

from .div import div
from .formats import FloatFormat
from .mul import mul

__all__ = ["powi"]

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def powi(fmt: FloatFormat, a: int, n: int) -> int:
    """Return the bits of ``a`` raised to the 32-bit signed integer power ``n``.

    Uses binary exponentiation with rounding at every step; a negative power
    takes the reciprocal of the positive one at the end.
    """
    if not _I32_MIN <= n <= _I32_MAX:
        raise ValueError(f"exponent {n!r} does not fit in 32 signed bits")
    one = fmt.exp_bias << fmt.sig_bits
    base = a & fmt.int_mask
    power = abs(n)
    result = one
    while True:
        if power & 1:
            result = mul(fmt, result, base)
        power >>= 1
        if power == 0:
            break
        base = mul(fmt, base, base)
    return div(fmt, one, result) if n < 0 else result