# softieee

Software IEEE-754 binary floating-point arithmetic, worked out bit by bit on
the integer representation of a value. Results are rounded to nearest with
ties to even, and subnormals, signed zeros, infinities and quiet NaNs are
handled as the standard prescribes. Every operation takes and returns plain
Python `int` bit patterns, so you can check a hardware or compiler result
against a reference, or compute in formats that Python's `float` does not
cover.

```python
from softieee.formats import SINGLE
from softieee.add import add

bits = add(SINGLE, SINGLE.encode(1.5), SINGLE.encode(2.25))
SINGLE.decode(bits)  # 3.75
```

## Formats

`softieee.formats.FloatFormat(name, bits, sig_bits)` describes one binary
interchange format by its total width and significand width. Ready-made
instances are `HALF` (16 bits), `SINGLE` (32), `DOUBLE` (64) and `QUAD` (128).

A format exposes its masks and constants as properties (`exp_bits`,
`exp_sat`, `exp_bias`, `int_mask`, `sign_mask`, `sig_mask`, `implicit_bit`,
`quiet_bit`, `exp_mask`) and these methods:

- `normalize(significand)` returns the exponent adjustment and the
  significand shifted up to the implicit bit
- `from_parts(negative, exponent, significand)` assembles a bit pattern
- `exp`, `frac` and `imp_frac` read the exponent field and the significand
  (without or with the implicit bit)
- `is_nan`, `is_subnormal` (true for zeros too), `is_sign_negative` and
  `abs` inspect or change a pattern
- `to_signed` reads the pattern as a two's-complement integer
- `eq_repr(a, b)` compares bit patterns, counting any two NaNs as equal
- `encode(value)` rounds a Python `float` into the format; `decode(bits)`
  gives the nearest Python `float`

`leading_zeros(value, width)` counts leading zero bits of a fixed-width
unsigned integer and raises `ValueError` if the value does not fit.

## Operations

| Module | Functions |
| --- | --- |
| `softieee.add` | `add(fmt, a, b)`, `sub(fmt, a, b)` |
| `softieee.mul` | `mul(fmt, a, b)` |
| `softieee.div` | `div(fmt, a, b)` |
| `softieee.pow` | `powi(fmt, a, n)` with `n` a 32-bit signed integer |
| `softieee.cmp` | `compare(fmt, a, b)` returns an `Ordering`; `unordered(fmt, a, b)` |
| `softieee.extend` | `extend(src, dst, a)` widens a value exactly |
| `softieee.trunc` | `trunc(src, dst, a)` narrows a value with correct rounding |
| `softieee.conv` | `unsigned_to_float`, `signed_to_float`, `float_to_unsigned`, `float_to_signed` |

`Ordering` has the members `LESS`, `EQUAL`, `GREATER` and `UNORDERED`.
`Ordering.le_abi()` and `Ordering.ge_abi()` turn it into `-1` / `0` / `1`;
an unordered result (a NaN was involved) maps to `1` under `le_abi` and to
`-1` under `ge_abi`.

`extend` raises `ValueError` unless `dst` is at least as wide as `src` in
both fields; `trunc` raises `ValueError` unless `dst` is narrower.

The integer conversions take a bit width and raise `ValueError` when the
integer does not fit it. Converting a float to an integer truncates toward
zero and saturates at the bounds of the width (infinities included); a NaN
converts to zero, and so does any negative value in the unsigned case.

`powi` multiplies by repeated squaring, rounding at each step, and takes the
reciprocal with `div` for a negative exponent.

`softieee.recip` holds the Newton-Raphson reciprocal helpers used by
division: `get_iterations`, `reciprocal_precision`, `c_hw` and `next_guess`.

## Limits

- Only round-to-nearest, ties-to-even is implemented; there are no other
  rounding modes and no exception flags.
- There is no square root, fused multiply-add or remainder.
- `div` (and `powi` with a negative exponent) works only for formats with a
  known reciprocal error bound: single, double and quad precision. For half
  precision it raises `ValueError`.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```