"""
Errors — Таксономия ошибок кодирования/декодирования

Все fallible операции либо возвращают полностью валидное новое значение,
либо выбрасывают одно из исключений ниже. Частично собранных значений нет.

Ошибки программиста (нарушение ширин Format, инвариант длины Float)
сюда НЕ относятся: они падают при конструировании (pydantic ValidationError
или ValueError).
"""

from typing import Optional


class FloatFormatError(Exception):
    """Базовое исключение для всех ошибок floatfmt."""

    message = "float format error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


# =============================================================================
# WIDTH RECONCILIATION
# =============================================================================


class InsufficientExponentBits(FloatFormatError):
    """При сужении поля экспоненты отбрасывается установленный старший бит."""

    message = "insufficient bits to represent the exponent"


class InsufficientMantissaBits(FloatFormatError):
    """При сужении поля мантиссы отбрасывается установленный старший бит."""

    message = "insufficient bits to represent the mantissa"


class MismatchedSignBit(FloatFormatError):
    """Наличие знакового бита у Components и Format не совпадает."""

    message = "mismatched format and value of the sign bit"


class InsufficientBitsForBitPattern(FloatFormatError):
    """Весь bit pattern не помещается в ширину формата."""

    message = "insufficient bits to store the given bit pattern"


# =============================================================================
# PARSING
# =============================================================================


class InvalidRadixPrefix(FloatFormatError):
    """Префикс системы счисления отсутствует или неизвестен."""

    message = "invalid or missing radix prefix"


class InvalidDigit(FloatFormatError):
    """
    Недопустимый символ в строке цифр.

    Attributes:
        radix: Основание системы счисления (2, 8, 10, 16)
        digit: Первый недопустимый символ
    """

    def __init__(self, radix: int, digit: Optional[str] = None):
        self.radix = radix
        self.digit = digit
        super().__init__(f"invalid digit {digit!r} for radix {radix}")


class ParseStringError(FloatFormatError):
    """Некорректный десятичный литерал."""

    message = "invalid number string given for parsing"


class OutOfRange(FloatFormatError):
    """Экспонента вне диапазона, представимого целевым форматом."""

    message = "number string out of range for format"


class NegativeSign(FloatFormatError):
    """Отрицательный знак для беззнакового формата."""

    message = "negative sign for unsigned format"
