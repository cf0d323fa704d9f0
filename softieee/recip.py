"""Reciprocal estimation used by division.

The reciprocal of a divisor's significand is refined with Newton-Raphson
iterations ``x_{n+1} = x_n * (2 - b * x_n)`` on fixed-point integers: the
divisor is a UQ1.(W-1) number in [1, 2) and the estimate a UQ0.W number.
"""

from __future__ import annotations

import struct

from .formats import FloatFormat

__all__ = ["get_iterations", "reciprocal_precision", "c_hw", "next_guess"]

# (3/4 + 1/sqrt(2)) - 1 as a UQ0.128 fixed-point number.
_C_U128 = 0x7504F333F9DE6108B2FB1366EAA6A542

_WORD_BITS = struct.calcsize("P") * 8

_PRECISION = {
    (32, 2, 1): 74,
    (32, 0, 3): 10,
    (64, 3, 1): 220,
    (128, 4, 1): 13922,
}


def get_iterations(fmt: FloatFormat) -> tuple[int, int]:
    """Return ``(half_width, full_width)`` iteration counts for ``fmt``.

    Precision doubles with each iteration from an initial estimate of about
    eight bits. When a double-width product fits in a machine word, every
    iteration runs at full width; otherwise all but one run at half width.
    """
    total = fmt.bits.bit_length() - 1 - 2
    if total < 1:
        raise ValueError(f"{fmt.name} is too narrow for reciprocal iteration")
    if 2 * fmt.bits <= _WORD_BITS:
        return 0, total
    return total - 1, 1


def reciprocal_precision(fmt: FloatFormat) -> int:
    """Bound on the reciprocal's error, in units of 2**-W, for ``fmt``."""
    half, full = get_iterations(fmt)
    if full < 1:
        raise ValueError("must have at least one full iteration")
    try:
        return _PRECISION[(fmt.bits, half, full)]
    except KeyError:
        raise ValueError(
            f"no precision bound for {fmt.name} with {half} + {full} iterations"
        ) from None


def c_hw(fmt: FloatFormat) -> int:
    """The constant C truncated to half the format's width, as UQ0.HW."""
    hw = fmt.bits // 2
    if not 0 < hw <= 128:
        raise ValueError(f"half width {hw} is out of range")
    return _C_U128 >> (128 - hw)


def next_guess(x_uq0: int, b_uq1: int, width: int) -> int:
    """One Newton-Raphson step towards ``1/b`` at ``width`` bits."""
    if width <= 0:
        raise ValueError("width must be positive")
    mask = (1 << width) - 1
    x_uq0 &= mask
    b_uq1 &= mask
    # In UQ1, 0 - v is the same as 2 - v.
    corr_uq1 = -((x_uq0 * b_uq1) >> width) & mask
    return ((x_uq0 * corr_uq1) >> (width - 1)) & mask