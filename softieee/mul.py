"""Multiplication on raw bit patterns."""

from __future__ import annotations

from .formats import FloatFormat

__all__ = ["mul"]


def mul(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a * b``, rounded to nearest, ties to even."""
    mask = fmt.int_mask
    bits = fmt.bits
    sig_bits = fmt.sig_bits
    exp_sat = fmt.exp_sat
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exp_mask
    implicit = fmt.implicit_bit
    quiet = fmt.quiet_bit
    qnan_rep = inf_rep | quiet

    a &= mask
    b &= mask

    a_exp = (a >> sig_bits) & exp_sat
    b_exp = (b >> sig_bits) & exp_sat
    product_sign = (a ^ b) & sign_bit

    a_sig = a & fmt.sig_mask
    b_sig = b & fmt.sig_mask
    scale = 0

    # Zero, subnormal, infinity or NaN on either side.
    if not 1 <= a_exp < exp_sat or not 1 <= b_exp < exp_sat:
        a_abs = a & abs_mask
        b_abs = b & abs_mask

        if a_abs > inf_rep:
            return a | quiet
        if b_abs > inf_rep:
            return b | quiet
        if a_abs == inf_rep:
            return a_abs | product_sign if b_abs else qnan_rep
        if b_abs == inf_rep:
            return b_abs | product_sign if a_abs else qnan_rep
        if a_abs == 0 or b_abs == 0:
            return product_sign

        if a_abs < implicit:
            adjust, a_sig = fmt.normalize(a_sig)
            scale += adjust
        if b_abs < implicit:
            adjust, b_sig = fmt.normalize(b_sig)
            scale += adjust

    a_sig |= implicit
    b_sig |= implicit

    # Left-align one operand so the product's high half holds the significand.
    product = a_sig * (b_sig << fmt.exp_bits)
    product_low = product & mask
    product_high = product >> bits

    product_exp = a_exp + b_exp + scale - fmt.exp_bias

    if product_high & implicit:
        product_exp += 1
    else:
        product_high = ((product_high << 1) | (product_low >> (bits - 1))) & mask
        product_low = (product_low << 1) & mask

    if product_exp >= exp_sat:
        return inf_rep | product_sign

    if product_exp <= 0:
        shift = 1 - product_exp
        if shift >= bits:
            return product_sign
        sticky = int((product_low << (bits - shift)) & mask != 0)
        product_low = (
            ((product_high << (bits - shift)) & mask) | (product_low >> shift) | sticky
        )
        product_high >>= shift
    else:
        product_high &= fmt.sig_mask
        product_high |= product_exp << sig_bits

    product_high |= product_sign

    if product_low > sign_bit:
        product_high += 1
    elif product_low == sign_bit:
        product_high += product_high & 1

    return product_high