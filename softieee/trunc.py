"""Narrowing conversion between binary formats."""

from __future__ import annotations

from .formats import FloatFormat

__all__ = ["trunc"]


def trunc(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the bits ``a`` of format ``src`` to the narrower format ``dst``.

    Rounds to nearest with ties to even. Values too large become infinity,
    values too small become subnormals or zero, and NaNs stay quiet NaNs with
    as much of their payload as fits.
    """
    if dst.sig_bits >= src.sig_bits or dst.exp_bits > src.exp_bits:
        raise ValueError(f"{dst.name} is not narrower than {src.name}")

    a &= src.int_mask
    sig_delta = src.sig_bits - dst.sig_bits
    src_abs_mask = src.sign_mask - 1
    src_infinity = src.exp_mask
    round_mask = (1 << sig_delta) - 1
    halfway = 1 << (sig_delta - 1)
    src_nan_code = (1 << (src.sig_bits - 1)) - 1

    dst_qnan = 1 << (dst.sig_bits - 1)
    dst_nan_code = dst_qnan - 1
    dst_infinity = dst.exp_sat << dst.sig_bits

    underflow = (src.exp_bias + 1 - dst.exp_bias) << src.sig_bits
    overflow = (src.exp_bias + dst.exp_sat - dst.exp_bias) << src.sig_bits

    a_abs = a & src_abs_mask
    sign = a & src.sign_mask

    if underflow <= a_abs < overflow:
        # The exponent is in the destination's normal range: shift, rebias, round.
        result = (a_abs >> sig_delta) - ((src.exp_bias - dst.exp_bias) << dst.sig_bits)
        round_bits = a_abs & round_mask
        if round_bits > halfway:
            result += 1
        elif round_bits == halfway:
            result += result & 1
    elif a_abs > src_infinity:
        # NaN: quiet it and keep the top of the payload.
        result = dst_infinity | dst_qnan
        result |= dst_nan_code & ((a_abs & src_nan_code) >> sig_delta)
    elif a_abs >= overflow:
        result = dst_infinity
    else:
        # Underflow to a subnormal or zero: denormalize with a sticky bit.
        a_exp = a_abs >> src.sig_bits
        shift = src.exp_bias - dst.exp_bias - a_exp + 1
        significand = (a & src.sig_mask) | src.implicit_bit
        if shift > src.sig_bits:
            result = 0
        else:
            sticky = int((significand << (src.bits - shift)) & src.int_mask != 0)
            denormalized = (significand >> shift) | sticky
            result = denormalized >> sig_delta
            round_bits = denormalized & round_mask
            if round_bits > halfway:
                result += 1
            elif round_bits == halfway:
                result += result & 1

    return result | (sign >> (src.bits - dst.bits))