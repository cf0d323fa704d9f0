"""Binary interchange formats and bit-level helpers.

Floating-point values are handled as their raw bit patterns, held in
Python integers of the format's width.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

__all__ = [
    "FloatFormat",
    "HALF",
    "SINGLE",
    "DOUBLE",
    "QUAD",
    "leading_zeros",
]


def leading_zeros(value: int, width: int) -> int:
    """Count the leading zero bits of ``value`` seen as a ``width``-bit integer."""
    if width <= 0:
        raise ValueError("width must be positive")
    if not 0 <= value < (1 << width):
        raise ValueError(f"value {value!r} does not fit in {width} unsigned bits")
    return width - value.bit_length()


def _shift_right_even(value: int, shift: int) -> int:
    """Shift ``value`` right, rounding to nearest with ties to even."""
    kept = value >> shift
    dropped = value & ((1 << shift) - 1)
    half = 1 << (shift - 1)
    if dropped > half or (dropped == half and kept & 1):
        kept += 1
    return kept


@dataclass(frozen=True)
class FloatFormat:
    """An IEEE-754 binary format described by its total and significand widths."""

    name: str
    bits: int
    sig_bits: int

    def __post_init__(self) -> None:
        if not 0 < self.sig_bits < self.bits - 2:
            raise ValueError(
                f"invalid format: {self.bits} bits with {self.sig_bits} significand bits"
            )

    @property
    def exp_bits(self) -> int:
        return self.bits - self.sig_bits - 1

    @property
    def exp_sat(self) -> int:
        """Saturated (all ones) exponent field, unshifted."""
        return (1 << self.exp_bits) - 1

    @property
    def exp_bias(self) -> int:
        return self.exp_sat >> 1

    @property
    def int_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def sig_mask(self) -> int:
        return (1 << self.sig_bits) - 1

    @property
    def implicit_bit(self) -> int:
        return 1 << self.sig_bits

    @property
    def quiet_bit(self) -> int:
        return self.implicit_bit >> 1

    @property
    def exp_mask(self) -> int:
        return self.int_mask & ~(self.sign_mask | self.sig_mask)

    def _check(self, bits: int) -> int:
        if not 0 <= bits <= self.int_mask:
            raise ValueError(f"{bits!r} is not a {self.bits}-bit pattern")
        return bits

    def normalize(self, significand: int) -> tuple[int, int]:
        """Return (exponent adjustment, significand shifted up to the implicit bit)."""
        shift = leading_zeros(significand, self.bits) - self.exp_bits
        if shift < 0:
            raise ValueError("significand wider than the format's significand field")
        return 1 - shift, (significand << shift) & self.int_mask

    def from_parts(self, negative: bool, exponent: int, significand: int) -> int:
        """Assemble a bit pattern from sign, exponent field and significand field."""
        return (
            (int(bool(negative)) << (self.bits - 1))
            | ((exponent << self.sig_bits) & self.exp_mask)
            | (significand & self.sig_mask)
        )

    def is_nan(self, bits: int) -> bool:
        return bits & self.exp_mask == self.exp_mask and bits & self.sig_mask != 0

    def is_subnormal(self, bits: int) -> bool:
        """True when the exponent field is zero (zeros included)."""
        return bits & self.exp_mask == 0

    def is_sign_negative(self, bits: int) -> bool:
        return bits & self.sign_mask != 0

    def eq_repr(self, a: int, b: int) -> bool:
        """Bitwise equality, except that any two NaNs compare equal."""
        if self.is_nan(a) and self.is_nan(b):
            return True
        return a == b

    def abs(self, bits: int) -> int:
        return bits & ~self.sign_mask & self.int_mask

    def exp(self, bits: int) -> int:
        """The biased exponent field."""
        return (bits & self.exp_mask) >> self.sig_bits

    def frac(self, bits: int) -> int:
        """The significand field without the implicit bit."""
        return bits & self.sig_mask

    def imp_frac(self, bits: int) -> int:
        """The significand with the implicit bit set."""
        return self.frac(bits) | self.implicit_bit

    def to_signed(self, bits: int) -> int:
        """Reinterpret the pattern as a two's-complement integer."""
        self._check(bits)
        return bits - (1 << self.bits) if bits & self.sign_mask else bits

    def encode(self, value: float) -> int:
        """Round a Python float to this format (nearest, ties to even)."""
        value = float(value)
        sign = self.sign_mask if math.copysign(1.0, value) < 0 else 0
        if math.isnan(value):
            return sign | self.exp_mask | self.quiet_bit
        if math.isinf(value):
            return sign | self.exp_mask
        if value == 0.0:
            return sign
        mantissa, exponent = math.frexp(abs(value))
        n = int(mantissa * (1 << 53))
        top = exponent - 1
        scale = max(top, 1 - self.exp_bias) - self.sig_bits
        shift = (exponent - 53) - scale
        q = n << shift if shift >= 0 else _shift_right_even(n, -shift)
        field = max(top + self.exp_bias, 1) - 1
        result = (field << self.sig_bits) + q
        return sign | min(result, self.exp_mask)

    def decode(self, bits: int) -> float:
        """The Python float nearest to the value of a bit pattern."""
        self._check(bits)
        sign = -1.0 if bits & self.sign_mask else 1.0
        exponent = self.exp(bits)
        fraction = self.frac(bits)
        if exponent == self.exp_sat:
            return math.copysign(math.nan if fraction else math.inf, sign)
        if exponent == 0:
            mant, power = fraction, 1 - self.exp_bias - self.sig_bits
        else:
            mant, power = fraction | self.implicit_bit, exponent - self.exp_bias - self.sig_bits
        exact = Fraction(mant << power) if power >= 0 else Fraction(mant, 1 << -power)
        try:
            magnitude = float(exact)
        except OverflowError:
            magnitude = math.inf
        return math.copysign(magnitude, sign)


HALF = FloatFormat("binary16", 16, 10)
SINGLE = FloatFormat("binary32", 32, 23)
DOUBLE = FloatFormat("binary64", 64, 52)
QUAD = FloatFormat("binary128", 128, 112)