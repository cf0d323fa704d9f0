"""Division on raw bit patterns.

The quotient is formed by multiplying the dividend's significand with a
fixed-point reciprocal of the divisor's significand. The reciprocal is refined
with Newton-Raphson iterations, and the result is then corrected using the
residual so that it is rounded to nearest, ties to even.
"""

from __future__ import annotations

from .formats import FloatFormat
from .recip import c_hw, get_iterations, next_guess, reciprocal_precision

__all__ = ["div"]

# (3/4 + 1/sqrt(2)) - 1 truncated to 32 fractional bits.
_C_32 = 0x7504F333


def _reciprocal(fmt: FloatFormat, b_uq1: int, half_iterations: int, full_iterations: int) -> int:
    """Approximate ``1/b`` as UQ0.W from the divisor ``b`` given as UQ1.(W-1)."""
    width = fmt.bits
    mask = fmt.int_mask
    hw = width // 2
    hw_mask = (1 << hw) - 1
    lo_mask = mask >> hw

    if half_iterations > 0:
        b_uq1_hw = b_uq1 >> hw
        x_hw = (c_hw(fmt) - b_uq1_hw) & hw_mask
        for _ in range(half_iterations):
            x_hw = next_guess(x_hw, b_uq1_hw, hw)
        # Account for a possible overflow in the half-width iterations.
        x_hw = (x_hw - 1) & hw_mask

        # One final iteration at full width, built from half-width products.
        blo = b_uq1 & lo_mask
        product = (x_hw * b_uq1_hw + ((x_hw * blo) >> hw)) & mask
        corr_uq1 = (1 - product) & mask

        lo_corr = corr_uq1 & lo_mask
        hi_corr = corr_uq1 >> hw

        x_uq0 = (((x_hw * hi_corr) << 1) & mask) + ((x_hw * lo_corr) >> (hw - 1))
        x_uq0 = (x_uq0 - 2) & mask
        return (x_uq0 - 1) & mask

    x_uq0 = ((_C_32 << (width - 32)) - b_uq1) & mask
    for _ in range(full_iterations):
        x_uq0 = next_guess(x_uq0, b_uq1, width)
    return x_uq0


def div(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a / b``, rounded to nearest, ties to even.

    Raises ``ValueError`` for formats whose reciprocal iteration has no
    established error bound.
    """
    width = fmt.bits
    mask = fmt.int_mask
    sig_bits = fmt.sig_bits
    exp_sat = fmt.exp_sat
    implicit = fmt.implicit_bit
    sig_mask = fmt.sig_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exp_mask
    quiet = fmt.quiet_bit
    qnan_rep = inf_rep | quiet

    half_iterations, full_iterations = get_iterations(fmt)
    recip_precision = reciprocal_precision(fmt)
    if width == 128:
        # Quad precision needs one half-width iteration more than estimated.
        half_iterations += 1

    a &= mask
    b &= mask

    a_exp = (a >> sig_bits) & exp_sat
    b_exp = (b >> sig_bits) & exp_sat
    quotient_sign = (a ^ b) & sign_bit

    a_sig = a & sig_mask
    b_sig = b & sig_mask

    res_exp = a_exp - b_exp + fmt.exp_bias

    # Zero, subnormal, infinity or NaN on either side.
    if not 1 <= a_exp < exp_sat or not 1 <= b_exp < exp_sat:
        a_abs = a & abs_mask
        b_abs = b & abs_mask

        if a_abs > inf_rep:
            return a | quiet
        if b_abs > inf_rep:
            return b | quiet
        if a_abs == inf_rep:
            return qnan_rep if b_abs == inf_rep else a_abs | quotient_sign
        if b_abs == inf_rep:
            return quotient_sign
        if a_abs == 0:
            return qnan_rep if b_abs == 0 else quotient_sign
        if b_abs == 0:
            return inf_rep | quotient_sign

        if a_abs < implicit:
            adjust, a_sig = fmt.normalize(a_sig)
            res_exp += adjust
        if b_abs < implicit:
            adjust, b_sig = fmt.normalize(b_sig)
            res_exp -= adjust

    a_sig |= implicit
    b_sig |= implicit

    b_uq1 = (b_sig << (width - sig_bits - 1)) & mask

    x_uq0 = _reciprocal(fmt, b_uq1, half_iterations, full_iterations)
    x_uq0 = (x_uq0 - 2) & mask
    x_uq0 = (x_uq0 - recip_precision) & mask

    quotient = (x_uq0 * ((a_sig << 1) & mask)) >> width

    if quotient < (implicit << 1):
        residual_lo = (((a_sig << (sig_bits + 1)) & mask) - quotient * b_sig) & mask
        res_exp -= 1
        a_sig = (a_sig << 1) & mask
    else:
        quotient >>= 1
        residual_lo = (((a_sig << sig_bits) & mask) - quotient * b_sig) & mask

    if res_exp >= exp_sat:
        return inf_rep | quotient_sign

    if res_exp > 0:
        abs_result = (quotient & sig_mask) | (res_exp << sig_bits)
        residual_lo = (residual_lo << 1) & mask
    else:
        if sig_bits + res_exp < 0:
            return quotient_sign
        abs_result = quotient >> (1 - res_exp)
        residual_lo = (
            ((a_sig << (sig_bits + res_exp)) & mask)
            - (((abs_result * b_sig) & mask) << 1)
        ) & mask

    # Ties to even: this turns the strict comparison below into "or equal".
    residual_lo = (residual_lo + (abs_result & 1)) & mask
    abs_result += int(residual_lo > b_sig)

    if width == 128 or (width == 32 and half_iterations > 0):
        # Never round infinity up into a NaN.
        abs_result += int(abs_result < inf_rep and residual_lo > 3 * b_sig)
    if width == 128:
        abs_result += int(abs_result < inf_rep and residual_lo > 5 * b_sig)

    return abs_result | quotient_sign