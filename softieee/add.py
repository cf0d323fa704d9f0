"""Addition and subtraction on raw bit patterns."""

from __future__ import annotations

from .formats import FloatFormat

__all__ = ["add", "sub"]


def add(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a + b``, rounded to nearest, ties to even."""
    mask = fmt.int_mask
    bits = fmt.bits
    sig_bits = fmt.sig_bits
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exp_mask
    implicit = fmt.implicit_bit
    quiet = fmt.quiet_bit

    a &= mask
    b &= mask
    a_abs = a & abs_mask
    b_abs = b & abs_mask

    if (a_abs - 1) & mask >= inf_rep - 1 or (b_abs - 1) & mask >= inf_rep - 1:
        if a_abs > inf_rep:
            return a_abs | quiet
        if b_abs > inf_rep:
            return b_abs | quiet
        if a_abs == inf_rep:
            if a ^ b == sign_bit:
                return inf_rep | quiet
            return a
        if b_abs == inf_rep:
            return b
        if a_abs == 0:
            return a & b if b_abs == 0 else b
        if b_abs == 0:
            return a

    if b_abs > a_abs:
        a, b = b, a

    a_exp = (a & inf_rep) >> sig_bits
    b_exp = (b & inf_rep) >> sig_bits
    a_sig = a & fmt.sig_mask
    b_sig = b & fmt.sig_mask

    if a_exp == 0:
        a_exp, a_sig = fmt.normalize(a_sig)
    if b_exp == 0:
        b_exp, b_sig = fmt.normalize(b_sig)

    result_sign = a & sign_bit
    subtraction = (a ^ b) & sign_bit != 0

    # Three extra low bits: round, guard and sticky.
    a_sig = (a_sig | implicit) << 3
    b_sig = (b_sig | implicit) << 3

    align = a_exp - b_exp
    if align:
        if align < bits:
            sticky = int(b_sig & ((1 << align) - 1) != 0)
            b_sig = (b_sig >> align) | sticky
        else:
            b_sig = 1

    if subtraction:
        a_sig -= b_sig
        if a_sig == 0:
            return 0
        top = implicit << 3
        if a_sig < top:
            shift = top.bit_length() - a_sig.bit_length()
            a_sig <<= shift
            a_exp -= shift
    else:
        a_sig += b_sig
        if a_sig & (implicit << 4):
            sticky = a_sig & 1
            a_sig = (a_sig >> 1) | sticky
            a_exp += 1

    if a_exp >= fmt.exp_sat:
        return inf_rep | result_sign

    if a_exp <= 0:
        shift = 1 - a_exp
        sticky = int(a_sig & ((1 << shift) - 1) != 0)
        a_sig = (a_sig >> shift) | sticky
        a_exp = 0

    round_guard_sticky = a_sig & 0x7
    result = (a_sig >> 3) & fmt.sig_mask
    result |= a_exp << sig_bits
    result |= result_sign

    if round_guard_sticky > 0x4:
        result += 1
    elif round_guard_sticky == 0x4:
        result += result & 1
    return result


def sub(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a - b``."""
    return add(fmt, a, (b & fmt.int_mask) ^ fmt.sign_mask)