"""Three-way and unordered comparison of raw bit patterns."""

from __future__ import annotations

from enum import Enum

from .formats import FloatFormat

__all__ = ["Ordering", "compare", "unordered"]


class Ordering(Enum):
    """Outcome of comparing two floating-point values."""

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    UNORDERED = "unordered"

    def le_abi(self) -> int:
        """Integer result for the "less" family: unordered maps to 1."""
        return _LE_ABI[self]

    def ge_abi(self) -> int:
        """Integer result for the "greater" family: unordered maps to -1."""
        return _GE_ABI[self]


_LE_ABI = {
    Ordering.LESS: -1,
    Ordering.EQUAL: 0,
    Ordering.GREATER: 1,
    Ordering.UNORDERED: 1,
}

_GE_ABI = {
    Ordering.LESS: -1,
    Ordering.EQUAL: 0,
    Ordering.GREATER: 1,
    Ordering.UNORDERED: -1,
}


def _abs_parts(fmt: FloatFormat, a: int, b: int) -> tuple[int, int]:
    abs_mask = fmt.sign_mask - 1
    return a & abs_mask, b & abs_mask


def unordered(fmt: FloatFormat, a: int, b: int) -> bool:
    """True when either operand is a NaN."""
    a_abs, b_abs = _abs_parts(fmt, a & fmt.int_mask, b & fmt.int_mask)
    inf_rep = fmt.exp_mask
    return a_abs > inf_rep or b_abs > inf_rep


def compare(fmt: FloatFormat, a: int, b: int) -> Ordering:
    """Compare two bit patterns as floating-point values."""
    a &= fmt.int_mask
    b &= fmt.int_mask
    a_abs, b_abs = _abs_parts(fmt, a, b)
    inf_rep = fmt.exp_mask

    if a_abs > inf_rep or b_abs > inf_rep:
        return Ordering.UNORDERED
    if a_abs | b_abs == 0:
        return Ordering.EQUAL

    a_signed = fmt.to_signed(a)
    b_signed = fmt.to_signed(b)

    if a_signed & b_signed >= 0:
        # At least one operand is positive: integer order matches float order.
        if a_signed < b_signed:
            return Ordering.LESS
        if a_signed == b_signed:
            return Ordering.EQUAL
        return Ordering.GREATER

    # Both negative: the integer order is reversed.
    if a_signed > b_signed:
        return Ordering.LESS
    if a_signed == b_signed:
        return Ordering.EQUAL
    return Ordering.GREATER