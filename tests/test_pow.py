import math
import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from softieee.formats import DOUBLE, SINGLE
from softieee.pow import powi


def d2b(value):
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def b2d(bits):
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def test_exact_powers():
    assert powi(DOUBLE, d2b(2.0), 10) == d2b(1024.0)
    assert powi(DOUBLE, d2b(2.0), -2) == d2b(0.25)
    assert powi(DOUBLE, d2b(-3.0), 3) == d2b(-27.0)
    assert powi(DOUBLE, d2b(-3.0), 2) == d2b(9.0)
    assert powi(SINGLE, SINGLE.encode(1.5), 3) == SINGLE.encode(3.375)


def test_zero_power_is_one():
    one = d2b(1.0)
    assert powi(DOUBLE, d2b(123.5), 0) == one
    assert powi(DOUBLE, 0x7FF8000000000000, 0) == one
    assert powi(DOUBLE, DOUBLE.exp_mask, 0) == one


def test_zero_base_negative_power():
    assert powi(DOUBLE, 0, -1) == DOUBLE.exp_mask
    assert powi(DOUBLE, DOUBLE.sign_mask, -1) == DOUBLE.exp_mask | DOUBLE.sign_mask


def test_overflow_and_underflow():
    assert powi(DOUBLE, d2b(10.0), 400) == DOUBLE.exp_mask
    assert powi(DOUBLE, d2b(10.0), -400) == 0


def test_exponent_range():
    assert powi(DOUBLE, d2b(1.0), -(1 << 31)) == d2b(1.0)
    with pytest.raises(ValueError):
        powi(DOUBLE, d2b(2.0), 1 << 31)
    with pytest.raises(ValueError):
        powi(DOUBLE, d2b(2.0), -(1 << 31) - 1)


@given(st.floats(min_value=0.5, max_value=2.0), st.integers(-64, 64))
def test_double_close_to_native(x, n):
    expected = x**n
    got = b2d(powi(DOUBLE, d2b(x), n))
    assert math.isclose(got, expected, rel_tol=1e-12)


@given(st.floats(min_value=0.5, max_value=2.0, width=32), st.integers(-16, 16))
def test_single_close_to_native(x, n):
    expected = x**n
    got = SINGLE.decode(powi(SINGLE, SINGLE.encode(x), n))
    assert math.isclose(got, expected, rel_tol=1e-4)