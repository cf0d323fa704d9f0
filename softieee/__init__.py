"""Bit-exact software IEEE-754 binary floating-point arithmetic on integer bit patterns."""

__version__ = "0.1.0"
__all__ = ["formats", "add", "cmp", "mul", "extend", "trunc", "recip", "conv", "div", "pow"]