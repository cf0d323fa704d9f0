"""Widening conversion between binary formats."""

from __future__ import annotations

from .formats import FloatFormat, leading_zeros

__all__ = ["extend"]


def extend(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the bits ``a`` of format ``src`` to the wider format ``dst`` exactly."""
    if dst.sig_bits < src.sig_bits or dst.exp_bits < src.exp_bits:
        raise ValueError(f"{dst.name} is not wider than {src.name}")

    a &= src.int_mask
    src_abs_mask = src.sign_mask - 1
    src_infinity = src.exp_mask
    src_min_normal = src.implicit_bit

    sig_delta = dst.sig_bits - src.sig_bits
    bias_delta = dst.exp_bias - src.exp_bias
    a_abs = a & src_abs_mask

    if src_min_normal <= a_abs < src_infinity:
        # Normal: shift into place and rebias the exponent.
        result = (a_abs << sig_delta) + (bias_delta << dst.sig_bits)
    elif a_abs >= src_infinity:
        # Infinity or NaN: keep the quiet bit and right-align the payload.
        result = dst.exp_sat << dst.sig_bits
        result |= (a_abs & src.sig_mask) << sig_delta
    elif a_abs:
        # Subnormal: renormalize and clear the leading bit.
        scale = leading_zeros(a_abs, src.bits) - leading_zeros(src_min_normal, src.bits)
        result = a_abs << (sig_delta + scale)
        result = (result ^ dst.implicit_bit) | ((bias_delta - scale + 1) << dst.sig_bits)
    else:
        result = 0

    sign = (a & src.sign_mask) << (dst.bits - src.bits)
    return (result | sign) & dst.int_mask