"""
Math modules для floatfmt

Точная (int + Fraction) арифметика десятичного ↔ двоичного движка.
"""

from src.floatfmt.math.decimal_codec import (
    # Constants
    ADAPTIVE_BASE_DIGITS,
    ADAPTIVE_INTEGER_THRESHOLD,
    ADAPTIVE_MIN_DIGITS,
    DIGIT_CHUNK,
    # Digits
    digits_to_int,
    int_to_digits,
    # Parsing
    normalize_binary,
    parse_decimal_literal,
    # Rendering
    adaptive_precision,
    format_adaptive,
    format_decimal,
    format_fixed,
)

__all__ = [
    # Decimal Codec — Constants
    "ADAPTIVE_BASE_DIGITS",
    "ADAPTIVE_INTEGER_THRESHOLD",
    "ADAPTIVE_MIN_DIGITS",
    "DIGIT_CHUNK",
    # Decimal Codec — Digits
    "digits_to_int",
    "int_to_digits",
    # Decimal Codec — Parsing
    "normalize_binary",
    "parse_decimal_literal",
    # Decimal Codec — Rendering
    "adaptive_precision",
    "format_adaptive",
    "format_decimal",
    "format_fixed",
]
