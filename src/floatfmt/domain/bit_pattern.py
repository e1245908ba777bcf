"""
BitPattern — Упорядоченная последовательность битов (MSB first)

Кодек битовых строк с учётом системы счисления:
- Парсинг строк цифр (binary/octal/decimal/hex), опционально с префиксом
- Рендеринг обратно в любую из четырёх систем счисления
- Предикаты all-zero / all-one
- fit(): единый примитив согласования ширины поля

ПОЛИТИКА ЦИФР:
Строка отклоняется на первом недопустимом символе (InvalidDigit).
Разделитель "_" пропускается и не считается цифрой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Равенство и хэш структурные (бит в бит)
2. BitPattern неизменяем
3. fit() никогда не меняет представленную величину молча
"""

from dataclasses import dataclass
from typing import Final, Iterator, Type, Union

from src.floatfmt.errors import (
    FloatFormatError,
    InsufficientBitsForBitPattern,
    InvalidDigit,
    InvalidRadixPrefix,
)
from src.floatfmt.math.decimal_codec import digits_to_int, int_to_digits

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Префиксы систем счисления для from_str
RADIX_PREFIXES: Final[dict[str, int]] = {
    "0b": 2,
    "0o": 8,
    "0d": 10,
    "0x": 16,
}

# Незначащий разделитель цифр
DIGIT_SEPARATOR: Final[str] = "_"

_DIGITS: Final[str] = "0123456789abcdef"

# Число бит на одну цифру для степеней двойки
_BITS_PER_DIGIT: Final[dict[int, int]] = {2: 1, 8: 3, 16: 4}


def _clean_digits(s: str, radix: int) -> str:
    """Удаление разделителей и проверка цифр (reject on first invalid)."""
    valid = _DIGITS[:radix]
    digits = s.replace(DIGIT_SEPARATOR, "").lower()
    for ch in digits:
        if ch not in valid:
            raise InvalidDigit(radix, ch)
    return digits


@dataclass(frozen=True)
class BitPattern:
    """
    Неизменяемая последовательность битов, старший бит первым.

    Ширина не ограничена: ограничение появляется только при привязке
    к Format (см. fit и Float.from_bits).

    Examples:
        >>> BitPattern.from_str("0xace").to_bin_string()
        '101011001110'
        >>> BitPattern.from_bin_str("101011001110").to_oct_string()
        '5316'
    """

    bits: tuple[bool, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "bits", tuple(bool(b) for b in self.bits))

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def zeros(cls, width: int) -> "BitPattern":
        """Паттерн из width нулевых битов."""
        return cls((False,) * width)

    @classmethod
    def from_value(cls, value: int, width: int) -> "BitPattern":
        """
        Точное big-endian извлечение битов беззнакового целого фиксированной ширины.

        Args:
            value: Беззнаковое целое
            width: Ширина целого в битах (длина результата)

        Returns:
            BitPattern длины width

        Raises:
            ValueError: Если value отрицательно или не помещается в width бит
        """
        if value < 0:
            raise ValueError(f"value must be unsigned, got {value}")
        if value.bit_length() > width:
            raise ValueError(f"value {value} does not fit in {width} bits")
        return cls(tuple((value >> shift) & 1 == 1 for shift in range(width - 1, -1, -1)))

    @classmethod
    def from_str(cls, s: str) -> "BitPattern":
        """
        Парсинг строки с обязательным префиксом системы счисления.

        Префиксы: 0b (binary), 0o (octal), 0d (decimal), 0x (hex).
        Строка из одного префикса означает пустой паттерн.

        Args:
            s: Строка вида "0x4640_e666"

        Returns:
            BitPattern

        Raises:
            InvalidRadixPrefix: Если префикс отсутствует, неизвестен или строка короче префикса
            InvalidDigit: Если встречен символ, недопустимый для системы счисления
        """
        prefix = s[:2]
        if len(prefix) < 2 or prefix not in RADIX_PREFIXES:
            raise InvalidRadixPrefix()

        radix = RADIX_PREFIXES[prefix]
        digits = s[2:]

        if radix == 2:
            return cls.from_bin_str(digits)
        if radix == 8:
            return cls.from_oct_str(digits)
        if radix == 10:
            return cls.from_dec_str(digits)
        return cls.from_hex_str(digits)

    @classmethod
    def from_bin_str(cls, s: str) -> "BitPattern":
        """Парсинг двоичных цифр, каждая цифра → 1 бит."""
        return cls(tuple(ch == "1" for ch in _clean_digits(s, 2)))

    @classmethod
    def from_oct_str(cls, s: str) -> "BitPattern":
        """Парсинг восьмеричных цифр, каждая цифра → 3 бита."""
        return cls._from_pow2_digits(s, 8)

    @classmethod
    def from_hex_str(cls, s: str) -> "BitPattern":
        """Парсинг шестнадцатеричных цифр, каждая цифра → 4 бита."""
        return cls._from_pow2_digits(s, 16)

    @classmethod
    def from_dec_str(cls, s: str) -> "BitPattern":
        """
        Парсинг десятичных цифр через точное целое.

        Биты строятся повторным value % 2, value //= 2, поэтому результат
        минимальной ширины (без ведущих нулей); "0" даёт пустой паттерн.
        """
        digits = _clean_digits(s, 10)
        value = digits_to_int(digits)

        reversed_bits: list[bool] = []
        while value > 0:
            reversed_bits.append(value % 2 == 1)
            value //= 2

        return cls(tuple(reversed(reversed_bits)))

    @classmethod
    def _from_pow2_digits(cls, s: str, radix: int) -> "BitPattern":
        width = _BITS_PER_DIGIT[radix]
        bits: list[bool] = []
        for ch in _clean_digits(s, radix):
            chunk = format(int(ch, radix), f"0{width}b")
            bits.extend(b == "1" for b in chunk)
        return cls(tuple(bits))

    # =========================================================================
    # РЕНДЕРИНГ
    # =========================================================================

    def to_bin_string(self) -> str:
        return "".join("1" if b else "0" for b in self.bits)

    def to_oct_string(self) -> str:
        """Группы по 3 бита справа, левая группа дополняется нулями."""
        return self._to_pow2_string(8)

    def to_hex_string(self) -> str:
        """Группы по 4 бита справа, нижний регистр."""
        return self._to_pow2_string(16)

    def to_dec_string(self) -> str:
        """Десятичная величина; пустой паттерн → "0"."""
        return int_to_digits(self.to_int())

    def _to_pow2_string(self, radix: int) -> str:
        width = _BITS_PER_DIGIT[radix]
        padding = (-len(self.bits)) % width
        binary = "0" * padding + self.to_bin_string()
        return "".join(
            _DIGITS[int(binary[i : i + width], 2)] for i in range(0, len(binary), width)
        )

    def to_int(self) -> int:
        """Беззнаковая величина паттерна (acc = acc * 2 + bit)."""
        acc = 0
        for b in self.bits:
            acc = acc * 2 + (1 if b else 0)
        return acc

    # =========================================================================
    # ПРЕДИКАТЫ
    # =========================================================================

    def is_all_zero(self) -> bool:
        return not any(self.bits)

    def is_all_one(self) -> bool:
        return all(self.bits)

    # =========================================================================
    # СОГЛАСОВАНИЕ ШИРИНЫ
    # =========================================================================

    def fit(
        self,
        width: int,
        error: Type[FloatFormatError] = InsufficientBitsForBitPattern,
    ) -> "BitPattern":
        """
        Вписать поле ширины S в ширину T.

        - T >= S: дополнение нулями слева (точно, величина сохраняется)
        - T < S: если среди S - T отбрасываемых старших битов есть 1 → error,
          иначе остаются младшие T битов

        Args:
            width: Целевая ширина T
            error: Класс исключения для данного поля

        Returns:
            BitPattern длины width

        Raises:
            error: Если отбрасывается установленный старший бит

        Examples:
            >>> BitPattern.from_str("0b11").fit(4).to_bin_string()
            '0011'
            >>> BitPattern.from_str("0b0011").fit(2).to_bin_string()
            '11'
        """
        excess = len(self.bits) - width

        if excess <= 0:
            return BitPattern((False,) * -excess + self.bits)

        if any(self.bits[:excess]):
            raise error()

        return BitPattern(self.bits[excess:])

    # =========================================================================
    # SEQUENCE PROTOCOL
    # =========================================================================

    def __len__(self) -> int:
        return len(self.bits)

    def __iter__(self) -> Iterator[bool]:
        return iter(self.bits)

    def __getitem__(self, index: Union[int, slice]) -> Union[bool, "BitPattern"]:
        if isinstance(index, slice):
            return BitPattern(self.bits[index])
        return self.bits[index]

    def __add__(self, other: "BitPattern") -> "BitPattern":
        if not isinstance(other, BitPattern):
            return NotImplemented
        return BitPattern(self.bits + other.bits)

    def __str__(self) -> str:
        return self.to_bin_string()

    def __repr__(self) -> str:
        return f"BitPattern('0b{self.to_bin_string()}')"
