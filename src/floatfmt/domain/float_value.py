"""
Float — BitPattern, привязанный к Format

Immutable Pydantic модель. Владеет композицией и декомпозицией:
- from_bits / from_comps / from_fields / from_str — сборка в целевой формат
- to_comps — чистая нарезка битов (без ошибок)
- to_fraction / to_f32 / to_f64 — числовое декодирование
- from_f32 / from_f64 / to_f32_raw / to_f64_raw — bit-exact interop с native IEEE
- str() / to_string() / format() — десятичный рендеринг

Pipeline:
    text → точное рациональное → нормализация → Components → fit → BitPattern → Float
    Float → Components → interpret → точное рациональное → text

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(bits) == len(format) для каждого сконструированного Float
2. Float неизменяем
3. Рендеринг и парсинг используют только точную арифметику
"""

import logging
import math
import re
import struct
from fractions import Fraction
from typing import Final, Optional

from pydantic import BaseModel, Field, model_validator

from src.floatfmt.domain.bit_pattern import BitPattern
from src.floatfmt.domain.components import Components
from src.floatfmt.domain.format import Format
from src.floatfmt.errors import (
    NegativeSign,
    OutOfRange,
    ParseStringError,
)
from src.floatfmt.math.decimal_codec import (
    format_decimal,
    normalize_binary,
    parse_decimal_literal,
)

logger = logging.getLogger(__name__)

# Native значения для текстов специальных значений
_SPECIAL_NATIVE: Final[dict[str, float]] = {
    "0": 0.0,
    "-0": -0.0,
    "inf": math.inf,
    "-inf": -math.inf,
    "NaN": math.nan,
    "sNaN": math.nan,
}

_FORMAT_SPEC_RE: Final[re.Pattern] = re.compile(r"\.(\d+)f?")


def _fraction_to_f64(value: Fraction) -> float:
    """Точное рациональное → f64 (переполнение → ±inf)."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _narrow_to_f32(value: float) -> float:
    """Сужение f64 → f32 через native упаковку (переполнение → ±inf)."""
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class Float(BaseModel):
    """
    Число с плавающей точкой произвольного формата.

    Examples:
        >>> f = Float.from_str(Format.ieee_binary32(), "123456")
        >>> str(f)
        '123456'
        >>> Float.from_f32(12345.6).bits.to_hex_string()
        '4640e666'
    """

    format: Format = Field(..., description="Формат (раскладка битов)")
    bits: BitPattern = Field(..., description="Упакованные биты, длина = len(format)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def validate_width(self) -> "Float":
        """Инвариант: длина битов равна ширине формата."""
        if len(self.bits) != len(self.format):
            raise ValueError(
                f"bit pattern length {len(self.bits)} must equal format length {len(self.format)}"
            )
        return self

    # =========================================================================
    # КОМПОЗИЦИЯ
    # =========================================================================

    @classmethod
    def from_bits(cls, format: Format, bits: BitPattern) -> "Float":
        """
        Создание из формата и bit pattern.

        Паттерн вписывается в len(format) целиком как одно поле.

        Raises:
            InsufficientBitsForBitPattern: Отбрасывается установленный старший бит
        """
        return cls(format=format, bits=bits.fit(len(format)))

    @classmethod
    def from_comps(cls, format: Format, comps: Components) -> "Float":
        """
        Создание из формата и компонентов.

        Raises:
            MismatchedSignBit: Наличие знака не совпадает с форматом
            InsufficientExponentBits: Экспонента не помещается
            InsufficientMantissaBits: Мантисса не помещается
        """
        return cls.from_bits(format, comps.fit(format).to_bits())

    @classmethod
    def from_fields(
        cls,
        format: Format,
        sign: Optional[bool],
        exp: str,
        mant: str,
    ) -> "Float":
        """
        Создание из строк полей с префиксом системы счисления.

        Args:
            format: Целевой формат
            sign: Знак (None для беззнакового формата)
            exp: Биты экспоненты, например "0x8C"
            mant: Биты мантиссы, например "0x81CC_CC00"

        Raises:
            InvalidRadixPrefix, InvalidDigit: Ошибки парсинга строк
            MismatchedSignBit, InsufficientExponentBits, InsufficientMantissaBits:
                Ошибки согласования ширин
        """
        return cls.from_comps(format, Components.new(sign, exp, mant))

    @classmethod
    def from_str(cls, format: Format, text: str) -> "Float":
        """
        Парсинг десятичного литерала в формат (с усечением мантиссы).

        Шаги:
        1. Первый символ: цифра, "+" или "-"; "-" для беззнакового формата запрещён
        2. Точный парсинг в рациональное число
        3. Ноль → поле экспоненты все нули
        4-5. Нормализация к 1.mmm × 2^e (без субнормалей)
        6. Проверка диапазона: -bias <= e < 2^exp_width - bias
        7. Смещение экспоненты, рендеринг в "0b..." и from_fields

        Raises:
            ParseStringError: Некорректный литерал
            NegativeSign: Отрицательный литерал для беззнакового формата
            OutOfRange: Экспонента вне диапазона формата

        Examples:
            >>> Float.from_str(Format.ieee_binary32(), "0.1").bits.to_hex_string()
            '3dcccccc'
        """
        if not text or not (text[0].isdigit() or text[0] in "+-"):
            raise ParseStringError(f"invalid number string given for parsing: {text!r}")

        if text[0] == "-" and not format.signed:
            raise NegativeSign()

        negative, magnitude = parse_decimal_literal(text)
        sign = negative if format.signed else None

        if magnitude == 0:
            biased = 0
            mantissa = "0" * format.mant_width
        else:
            exponent, mantissa = normalize_binary(magnitude, format.mant_width)

            biased = exponent + format.bias
            if not 0 <= biased <= format.max_biased_exponent:
                raise OutOfRange(
                    f"exponent {exponent} out of range for format "
                    f"(exp_width={format.exp_width}, bias={format.bias})"
                )

        logger.debug("parsed %r: biased exponent=%d, mantissa=%s", text, biased, mantissa)

        return cls.from_fields(
            format,
            sign,
            f"0b{biased:0{format.exp_width}b}",
            f"0b{mantissa}",
        )

    # =========================================================================
    # NATIVE INTEROP
    # =========================================================================

    @classmethod
    def from_f32(cls, value: float) -> "Float":
        """
        Bit-exact импорт native f32 в формат IEEE binary32.

        Raises:
            OverflowError: value не представимо как f32
        """
        (raw,) = struct.unpack(">I", struct.pack(">f", value))
        return cls.from_bits(Format.ieee_binary32(), BitPattern.from_value(raw, 32))

    @classmethod
    def from_f64(cls, value: float) -> "Float":
        """Bit-exact импорт native f64 в формат IEEE binary64."""
        (raw,) = struct.unpack(">Q", struct.pack(">d", value))
        return cls.from_bits(Format.ieee_binary64(), BitPattern.from_value(raw, 64))

    def to_f32_raw(self) -> float:
        """
        Реинтерпретация упакованных битов как native f32.

        Raises:
            ValueError: Паттерн не 32-битный
        """
        if len(self.bits) != 32:
            raise ValueError(f"raw f32 requires 32 bits, got {len(self.bits)}")
        return struct.unpack(">f", struct.pack(">I", self.bits.to_int()))[0]

    def to_f64_raw(self) -> float:
        """
        Реинтерпретация упакованных битов как native f64.

        Raises:
            ValueError: Паттерн не 64-битный
        """
        if len(self.bits) != 64:
            raise ValueError(f"raw f64 requires 64 bits, got {len(self.bits)}")
        return struct.unpack(">d", struct.pack(">Q", self.bits.to_int()))[0]

    # =========================================================================
    # ДЕКОМПОЗИЦИЯ И ДЕКОДИРОВАНИЕ
    # =========================================================================

    def to_comps(self) -> Components:
        """Чистая нарезка битов на sign / exp / mant."""
        offset = int(self.format.signed)
        exp_end = offset + self.format.exp_width

        return Components(
            sign=self.bits[0] if self.format.signed else None,
            exp=self.bits[offset:exp_end],
            mant=self.bits[exp_end:],
        )

    def special(self) -> Optional[str]:
        """Текст специального значения по стратегии формата (или None)."""
        if self.format.interpret is None:
            return None
        return self.format.interpret(self.to_comps())

    def to_fraction(self) -> Fraction:
        """
        Точное значение по формуле:
            sign × 2^(E - bias) × (1 + M / 2^mant_width)

        Специальные значения стратегии НЕ учитываются.
        """
        comps = self.to_comps()
        exponent = comps.exp.to_int() - self.format.bias
        mantissa = Fraction(comps.mant.to_int(), 1 << self.format.mant_width)

        value = (1 + mantissa) * (Fraction(2) ** exponent)
        return -value if comps.sign else value

    def to_f64(self) -> float:
        """Числовое декодирование в f64 (с потерей точности)."""
        special = self.special()
        if special is not None and special in _SPECIAL_NATIVE:
            return _SPECIAL_NATIVE[special]
        return _fraction_to_f64(self.to_fraction())

    def to_f32(self) -> float:
        """Числовое декодирование в f32 (с потерей точности)."""
        return _narrow_to_f32(self.to_f64())

    def __float__(self) -> float:
        return self.to_f64()

    # =========================================================================
    # РЕНДЕРИНГ
    # =========================================================================

    def to_string(self, precision: Optional[int] = None) -> str:
        """
        Десятичный рендеринг.

        Args:
            precision: Число дробных цифр; None — адаптивная точность

        Returns:
            Текст специального значения (если стратегия его распознала)
            или десятичный литерал точного значения
        """
        special = self.special()
        if special is not None:
            return special
        return format_decimal(self.to_fraction(), precision)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        """Поддерживает "", ".N" и ".Nf" (N дробных цифр)."""
        if not format_spec:
            return self.to_string()

        match = _FORMAT_SPEC_RE.fullmatch(format_spec)
        if match is None:
            raise ValueError(f"Invalid format specifier {format_spec!r} for Float")
        return self.to_string(int(match.group(1)))
