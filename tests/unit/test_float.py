"""
Тесты для Float: композиция, декомпозиция, native interop

Проверяет:
1. from_bits / from_comps / from_fields и инвариант ширины
2. to_comps как обратную операцию упаковки
3. Bit-exact round trip через native f32/f64
4. Числовое декодирование (to_f32 / to_f64 / to_fraction)
5. Рендеринг специальных значений IEEE
"""

import math
import struct
from fractions import Fraction

import pytest
from pydantic import ValidationError

from src.floatfmt.domain import BitPattern, Components, Float, Format
from src.floatfmt.errors import (
    InsufficientBitsForBitPattern,
    InsufficientExponentBits,
    MismatchedSignBit,
)


def _as_f32(value: float) -> float:
    return struct.unpack(">f", struct.pack(">f", value))[0]


@pytest.fixture
def b32():
    return Format.ieee_binary32()


@pytest.fixture
def b64():
    return Format.ieee_binary64()


# =============================================================================
# КОМПОЗИЦИЯ
# =============================================================================


class TestComposition:
    """Тесты сборки Float"""

    def test_from_bits(self, b32) -> None:
        f = Float.from_bits(b32, BitPattern.from_str("0x4640e666"))

        assert len(f.bits) == len(b32)
        assert f.to_f32() == _as_f32(12345.6)

    def test_from_bits_any_radix(self, b32) -> None:
        """Разные префиксы дают одинаковый Float"""
        floats = {
            Float.from_bits(b32, BitPattern.from_str(s))
            for s in (
                "0b0100_0110_0100_0000_1110_0110_0110_0110",
                "0o10620163146",
                "0d1178658406",
                "0x4640e666",
            )
        }
        assert len(floats) == 1

    def test_from_bits_zero_extends(self, b32) -> None:
        f = Float.from_bits(b32, BitPattern.from_str("0x1"))
        assert len(f.bits) == 32
        assert f.bits.to_int() == 1

    def test_from_bits_overflow(self, b32) -> None:
        with pytest.raises(InsufficientBitsForBitPattern):
            Float.from_bits(b32, BitPattern.from_str("0x1_0000_0000"))

    def test_direct_construction_enforces_width(self, b32) -> None:
        """Инвариант ширины проверяется при любом конструировании"""
        with pytest.raises(ValidationError, match="must equal format length"):
            Float(format=b32, bits=BitPattern.zeros(31))

    def test_from_fields(self) -> None:
        f = Float.from_fields(
            Format.new(64, 128, 127),
            False,
            "0x8C",
            "0x81CC_CC00_0000_0000_0000_0000_0000_0000",
        )

        assert len(f.bits) == 1 + 64 + 128
        assert f.to_f64() == _as_f32(12345.6)
        assert f.to_f64() == Float.from_f32(12345.6).to_f64()

    def test_from_fields_errors(self, b32) -> None:
        with pytest.raises(InsufficientExponentBits):
            Float.from_fields(b32, False, "0x1FF", "0x0")
        with pytest.raises(MismatchedSignBit):
            Float.from_fields(b32, None, "0x7F", "0x0")

    def test_from_comps_round_trip(self, b32) -> None:
        """to_comps ∘ from_comps восстанавливает поля после согласования"""
        comps = Components.new(True, "0b101", "0b11")
        f = Float.from_comps(b32, comps)
        back = f.to_comps()

        assert back == comps.fit(b32)
        assert Float.from_bits(b32, back.to_bits()) == f

    def test_frozen(self, b32) -> None:
        f = Float.from_f32(1.0)
        with pytest.raises(ValidationError, match="frozen"):
            f.bits = BitPattern.zeros(32)


# =============================================================================
# ДЕКОМПОЗИЦИЯ
# =============================================================================


class TestDecomposition:
    """Тесты to_comps"""

    def test_slices_fields(self) -> None:
        comps = Float.from_f32(12345.6).to_comps()

        assert comps.sign is False
        assert comps.exp.to_bin_string() == "10001100"
        assert comps.mant.to_hex_string() == "40e666"

    def test_unsigned_format(self) -> None:
        fmt = Format.new_unsigned(3, 2, 3)
        f = Float.from_bits(fmt, BitPattern.from_bin_str("10111"))
        comps = f.to_comps()

        assert comps.sign is None
        assert comps.exp.to_bin_string() == "101"
        assert comps.mant.to_bin_string() == "11"

    def test_zero_width_mantissa(self) -> None:
        fmt = Format.new(4, 0, 7)
        f = Float.from_bits(fmt, BitPattern.from_bin_str("10111"))

        assert len(f.to_comps().mant) == 0
        assert f.to_fraction() == Fraction(-1)


# =============================================================================
# NATIVE INTEROP
# =============================================================================


class TestNative:
    """Тесты bit-exact interop и числового декодирования"""

    @pytest.mark.parametrize("value", [0.2, 1.0, -3.5, 12345.6, 1e-30, 3.0e38, -0.0])
    def test_f32_raw_round_trip(self, value) -> None:
        x = _as_f32(value)
        assert struct.pack(">f", Float.from_f32(x).to_f32_raw()) == struct.pack(">f", x)

    @pytest.mark.parametrize("value", [0.2, 1.0, -3.5, 1e-300, 1.7e308, -0.0, math.inf])
    def test_f64_raw_round_trip(self, value) -> None:
        assert struct.pack(">d", Float.from_f64(value).to_f64_raw()) == struct.pack(">d", value)

    def test_raw_requires_native_width(self) -> None:
        with pytest.raises(ValueError, match="32 bits"):
            Float.from_f64(1.0).to_f32_raw()
        with pytest.raises(ValueError, match="64 bits"):
            Float.from_f32(1.0).to_f64_raw()

    def test_from_native_uses_presets(self) -> None:
        assert Float.from_f32(1.0).format == Format.ieee_binary32()
        assert Float.from_f64(1.0).format == Format.ieee_binary64()
        assert Float.from_f32(1.0).bits.to_hex_string() == "3f800000"

    def test_lossy_decode(self) -> None:
        assert Float.from_f32(0.2).to_f32() == _as_f32(0.2)
        assert Float.from_f64(0.2).to_f64() == 0.2
        assert Float.from_f32(0.2).to_f64() == _as_f32(0.2)
        assert Float.from_f64(0.2).to_f32() == _as_f32(0.2)
        assert float(Float.from_f64(-2.5)) == -2.5

    def test_decode_specials(self) -> None:
        """Специальные паттерны декодируются в native специальные значения"""
        assert Float.from_f32(math.inf).to_f32() == math.inf
        assert math.isnan(Float.from_f64(math.nan).to_f64())
        assert math.copysign(1.0, Float.from_f32(-0.0).to_f32()) == -1.0

    def test_narrowing_overflow(self) -> None:
        """Значение вне диапазона f32 сужается в inf"""
        assert Float.from_f64(1e300).to_f32() == math.inf
        assert Float.from_f64(-1e300).to_f32() == -math.inf

    def test_wide_format_overflow(self) -> None:
        """Экспонента шире f64 даёт inf без потери знака"""
        fmt = Format.new_ieee_excess(16, 8)
        f = Float.from_fields(fmt, True, "0xF000", "0x0")
        assert f.to_f64() == -math.inf

    def test_to_fraction_exact(self) -> None:
        fmt = Format.new(4, 3, 7)
        # 0 1000 100 → 2^(8 - 7) × (1 + 4/8) = 3
        f = Float.from_bits(fmt, BitPattern.from_bin_str("01000100"))
        assert f.to_fraction() == Fraction(3)


# =============================================================================
# СПЕЦИАЛЬНЫЕ ЗНАЧЕНИЯ
# =============================================================================


class TestSpecialRendering:
    """Рендеринг специальных значений ieee_binary32"""

    @pytest.mark.parametrize(
        "bits, text",
        [
            (0x00000000, "0"),
            (0x80000000, "-0"),
            (0x7F800000, "inf"),
            (0xFF800000, "-inf"),
            (0x7FC00000, "NaN"),
            (0xFFC00001, "NaN"),
            (0x7F800001, "sNaN"),
            (0x7FA00000, "sNaN"),
        ],
    )
    def test_ieee_binary32(self, b32, bits, text) -> None:
        f = Float.from_bits(b32, BitPattern.from_value(bits, 32))
        assert str(f) == text
        assert f.to_string(8) == text

    def test_no_interpret_uses_formula(self) -> None:
        """Без стратегии нулевой паттерн рендерится по формуле"""
        fmt = Format.new(2, 1, 1)
        f = Float.from_bits(fmt, BitPattern.zeros(4))
        # 2^(0 - 1) × 1 = 0.5
        assert str(f) == "0.5"

    def test_custom_interpret_closure(self) -> None:
        """Любой callable подходит как стратегия"""
        fmt = Format.new(2, 1, 1).with_interpret(
            lambda comps: "tiny" if comps.exp.is_all_zero() else None
        )
        assert str(Float.from_bits(fmt, BitPattern.zeros(4))) == "tiny"
        assert str(Float.from_bits(fmt, BitPattern.from_bin_str("0010"))) == "1"
