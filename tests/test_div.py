import math
import struct
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softieee.div import div
from softieee.formats import DOUBLE, HALF, QUAD, SINGLE


def d2b(value):
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def b2d(bits):
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def f2b(value):
    return struct.unpack("<I", struct.pack("<f", value))[0]


@given(st.integers(0, (1 << 64) - 1), st.integers(0, (1 << 64) - 1))
@settings(max_examples=400)
def test_double_matches_native(a, b):
    x, y = b2d(a), b2d(b)
    if y == 0.0:
        y_is_zero = True
    else:
        y_is_zero = False
    result = div(DOUBLE, a, b)
    if y_is_zero:
        if math.isnan(x) or x == 0.0:
            assert DOUBLE.is_nan(result)
        else:
            assert result & ~DOUBLE.sign_mask == DOUBLE.exp_mask
    else:
        assert DOUBLE.eq_repr(d2b(x / y), result)


@given(st.integers(0, (1 << 32) - 1), st.integers(0, (1 << 32) - 1))
@settings(max_examples=400)
def test_single_matches_native(a, b):
    x, y = SINGLE.decode(a), SINGLE.decode(b)
    result = div(SINGLE, a, b)
    if y == 0.0:
        if math.isnan(x) or x == 0.0:
            assert SINGLE.is_nan(result)
        else:
            assert result & ~SINGLE.sign_mask == SINGLE.exp_mask
    else:
        assert SINGLE.eq_repr(SINGLE.encode(x / y), result)


@given(st.floats(allow_nan=False, allow_infinity=False), st.floats(allow_nan=False, allow_infinity=False))
def test_double_from_floats(x, y):
    if y == 0.0:
        y = 1.0
    assert div(DOUBLE, d2b(x), d2b(y)) == d2b(x / y)


def test_pinned_values():
    assert div(SINGLE, f2b(1.0), f2b(3.0)) == 0x3EAAAAAB
    assert div(DOUBLE, d2b(1.0), d2b(3.0)) == 0x3FD5555555555555
    assert div(DOUBLE, d2b(6.0), d2b(3.0)) == d2b(2.0)
    assert div(DOUBLE, d2b(-1.0), d2b(4.0)) == d2b(-0.25)


def test_subnormal_results():
    min_normal = 0x0010000000000000
    assert div(DOUBLE, min_normal, d2b(2.0)) == 0x0008000000000000
    # Half of the smallest subnormal ties to even, i.e. to zero.
    assert div(DOUBLE, 1, d2b(2.0)) == 0
    assert div(DOUBLE, 3, d2b(2.0)) == 2


def test_overflow_to_infinity():
    max_double = 0x7FEFFFFFFFFFFFFF
    assert div(DOUBLE, max_double, d2b(0.5)) == DOUBLE.exp_mask
    assert div(DOUBLE, max_double, d2b(-0.5)) == DOUBLE.exp_mask | DOUBLE.sign_mask


def test_special_cases():
    inf = DOUBLE.exp_mask
    qnan = inf | DOUBLE.quiet_bit
    assert div(DOUBLE, d2b(1.0), 0) == inf
    assert div(DOUBLE, d2b(-1.0), 0) == inf | DOUBLE.sign_mask
    assert div(DOUBLE, 0, 0) == qnan
    assert div(DOUBLE, inf, inf) == qnan
    assert div(DOUBLE, inf, d2b(-2.0)) == inf | DOUBLE.sign_mask
    assert div(DOUBLE, d2b(5.0), inf) == 0
    assert div(DOUBLE, d2b(-5.0), inf) == DOUBLE.sign_mask
    assert div(DOUBLE, 0, d2b(-3.0)) == DOUBLE.sign_mask


def test_nan_payload_is_quieted():
    assert div(DOUBLE, 0x7FF0000000000001, d2b(1.0)) == 0x7FF8000000000001
    assert div(DOUBLE, d2b(1.0), 0xFFF0000000000002) == 0xFFF8000000000002


def test_quad_pinned():
    one = QUAD.exp_bias << QUAD.sig_bits
    two = (QUAD.exp_bias + 1) << QUAD.sig_bits
    three = QUAD.from_parts(False, QUAD.exp_bias + 1, 1 << (QUAD.sig_bits - 1))
    assert div(QUAD, one, two) == (QUAD.exp_bias - 1) << QUAD.sig_bits
    assert div(QUAD, one, three) == 0x3FFD5555555555555555555555555555
    assert div(QUAD, two, three) == 0x3FFE5555555555555555555555555555


def _quad_fraction(bits):
    exponent = QUAD.exp(bits)
    sig = QUAD.frac(bits)
    if exponent:
        sig |= QUAD.implicit_bit
    power = max(exponent, 1) - QUAD.exp_bias - QUAD.sig_bits
    value = Fraction(sig) * Fraction(2) ** power
    return -value if QUAD.is_sign_negative(bits) else value


quad_normals = st.builds(
    QUAD.from_parts,
    st.booleans(),
    st.integers(QUAD.exp_bias - 200, QUAD.exp_bias + 200),
    st.integers(0, QUAD.sig_mask),
)


@given(quad_normals, quad_normals)
@settings(max_examples=200)
def test_quad_correctly_rounded(a, b):
    q = div(QUAD, a, b)
    exact = _quad_fraction(a) / _quad_fraction(b)
    got = _quad_fraction(q)
    ulp = Fraction(2) ** (max(QUAD.exp(q), 1) - QUAD.exp_bias - QUAD.sig_bits)
    assert abs(got - exact) <= ulp / 2
    assert QUAD.is_sign_negative(q) == (exact < 0)


def test_half_is_unsupported():
    with pytest.raises(ValueError):
        div(HALF, 0x3C00, 0x4000)