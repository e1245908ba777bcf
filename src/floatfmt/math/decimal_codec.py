"""
Decimal Codec — Точный десятичный ↔ двоичный движок

Модуль работает только с точной арифметикой (int + fractions.Fraction),
без промежуточного округления через float:
- Парсинг десятичного литерала в точное рациональное число
- Извлечение нормализованной экспоненты и битов мантиссы (усечение)
- Рендеринг точного рационального числа в десятичный текст

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Мантисса всегда нормализована (ведущая 1 неявная), субнормалей нет
2. Биты за пределами mant_width отбрасываются (truncation, не round-to-nearest)
3. Явная точность: ровно N дробных цифр, round-half-even по точному значению
4. Длина литерала и величина значения не ограничены: десятичные строки
   конвертируются блоками, в обход лимита int/str конвертации интерпретатора

ГРАММАТИКА ЛИТЕРАЛА:
    [+-]? [0-9]+ ( "." [0-9]+ )?
"""

import re
from fractions import Fraction
from typing import Final, Optional

from src.floatfmt.errors import ParseStringError

# =============================================================================
# КОНСТАНТЫ РЕНДЕРИНГА
# =============================================================================

# Значения >= 10^7 рендерятся как целое без дробной части
ADAPTIVE_INTEGER_THRESHOLD: Final[int] = 10**7

# Число дробных цифр для [1, 10); каждая декада выше забирает одну цифру
ADAPTIVE_BASE_DIGITS: Final[int] = 6

# Минимум дробных цифр для [1, 10^7)
ADAPTIVE_MIN_DIGITS: Final[int] = 1

# Размер блока десятичных цифр, конвертируемого напрямую (ниже лимита 4300)
DIGIT_CHUNK: Final[int] = 1000

# log10(2) с запасом вниз, для оценки числа десятичных цифр по bit_length
_LOG10_2: Final[float] = 0.30102999566398

_LITERAL_RE: Final[re.Pattern] = re.compile(r"([+-]?)([0-9]+)(?:\.([0-9]+))?")


# =============================================================================
# ДЕСЯТИЧНЫЕ ЦИФРЫ ↔ INT
# =============================================================================


def digits_to_int(digits: str) -> int:
    """
    Строка десятичных цифр → int произвольной длины.

    Длинные строки делятся пополам: hi * 10^len(lo) + lo.

    Examples:
        >>> digits_to_int("9" * 5000) == 10**5000 - 1
        True
    """
    if len(digits) <= DIGIT_CHUNK:
        return int(digits) if digits else 0

    middle = len(digits) // 2
    low = digits[middle:]
    return digits_to_int(digits[:middle]) * 10 ** len(low) + digits_to_int(low)


def int_to_digits(value: int) -> str:
    """
    Неотрицательный int → строка десятичных цифр без ведущих нулей.

    Большие значения делятся на 10^k, k ≈ половина числа цифр; младшая
    половина дополняется нулями до k цифр.
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")

    if value.bit_length() * _LOG10_2 < DIGIT_CHUNK:
        return str(value)

    half = int(value.bit_length() * _LOG10_2) // 2
    high, low = divmod(value, 10**half)
    return int_to_digits(high) + int_to_digits(low).rjust(half, "0")


# =============================================================================
# ПАРСИНГ
# =============================================================================


def parse_decimal_literal(text: str) -> tuple[bool, Fraction]:
    """
    Парсинг десятичного литерала в точное рациональное значение.

    Args:
        text: Литерал, например "-123456.789012345"

    Returns:
        (negative, magnitude): знак и точная неотрицательная величина

    Raises:
        ParseStringError: Если текст не соответствует грамматике

    Examples:
        >>> parse_decimal_literal("-2.5")
        (True, Fraction(5, 2))
    """
    match = _LITERAL_RE.fullmatch(text)
    if match is None:
        raise ParseStringError(f"invalid number string given for parsing: {text!r}")

    sign, int_digits, frac_digits = match.groups()
    frac_digits = frac_digits or ""

    # Значение = significand × 10^-len(frac_digits)
    significand = digits_to_int(int_digits + frac_digits)
    magnitude = Fraction(significand, 10 ** len(frac_digits))

    return sign == "-", magnitude


# =============================================================================
# ДВОИЧНАЯ НОРМАЛИЗАЦИЯ
# =============================================================================


def normalize_binary(magnitude: Fraction, mant_width: int) -> tuple[int, str]:
    """
    Нормализация положительной величины: 1.mmm × 2^exponent.

    Алгоритм (только целочисленные операции над numerator / denominator):
    1. Оценка экспоненты по разнице bit_length, коррекция на единицу
       точным сравнением: 2^e <= magnitude < 2^(e+1)
    2. floor(magnitude × 2^(mant_width - e)) = 2^mant_width + мантисса;
       floor отбрасывает лишние биты (усечение)

    Args:
        magnitude: Точная величина > 0
        mant_width: Бюджет битов мантиссы

    Returns:
        (exponent, mantissa_bits): несмещённая экспонента и ровно mant_width
        символов '0'/'1'

    Raises:
        ValueError: Если magnitude <= 0
    """
    if magnitude <= 0:
        raise ValueError(f"magnitude must be positive, got {magnitude}")

    num, den = magnitude.numerator, magnitude.denominator

    exponent = num.bit_length() - den.bit_length()
    if exponent >= 0:
        below = num < den << exponent
    else:
        below = num << -exponent < den
    if below:
        exponent -= 1

    shift = mant_width - exponent
    if shift >= 0:
        scaled = (num << shift) // den
    else:
        scaled = num // (den << -shift)

    mantissa = scaled - (1 << mant_width)
    if mant_width == 0:
        return exponent, ""
    return exponent, format(mantissa, f"0{mant_width}b")


# =============================================================================
# РЕНДЕРИНГ
# =============================================================================


def format_fixed(value: Fraction, precision: int) -> str:
    """
    Рендеринг с ровно precision дробными цифрами.

    Округление round-half-even по точному значению.

    Examples:
        >>> format_fixed(Fraction(5, 2), 0)
        '2'
        >>> format_fixed(Fraction(-1, 8), 2)
        '-0.12'
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    scale = 10**precision
    # round(Fraction) без ndigits: ближайшее целое, половины к чётному
    scaled = round(abs(value) * scale)
    int_part, frac_part = divmod(scaled, scale)

    text = int_to_digits(int_part)
    if precision > 0:
        text = f"{text}.{int_to_digits(frac_part).rjust(precision, '0')}"
    return f"-{text}" if value < 0 else text


def adaptive_precision(magnitude: Fraction) -> int:
    """
    Число дробных цифр для адаптивного рендеринга.

    - >= 10^7: 0 (целое)
    - [1, 10^7): max(1, 6 - floor(log10(v)))
    - (0, 1): позиция первой ненулевой дробной цифры + 6
    """
    if magnitude >= ADAPTIVE_INTEGER_THRESHOLD:
        return 0

    if magnitude >= 1:
        decades = len(str(magnitude.numerator // magnitude.denominator)) - 1
        return max(ADAPTIVE_MIN_DIGITS, ADAPTIVE_BASE_DIGITS - decades)

    if magnitude == 0:
        return ADAPTIVE_MIN_DIGITS

    # Наименьшее position: magnitude × 10^position >= 1; оценка снизу по bit_length
    num, den = magnitude.numerator, magnitude.denominator
    position = max(0, int((den.bit_length() - num.bit_length()) * _LOG10_2) - 1)
    while num * 10**position < den:
        position += 1

    return position + ADAPTIVE_BASE_DIGITS


def format_adaptive(value: Fraction) -> str:
    """Рендеринг с адаптивной точностью, хвостовые нули дробной части убираются."""
    text = format_fixed(value, adaptive_precision(abs(value)))
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_decimal(value: Fraction, precision: Optional[int] = None) -> str:
    """Явная точность, если задана, иначе адаптивная."""
    if precision is None:
        return format_adaptive(value)
    return format_fixed(value, precision)
