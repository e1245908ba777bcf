"""
Components — Разложение float на {sign, exponent, mantissa}

Transient модель: появляется при парсинге или при декомпозиции Float
и сразу потребляется композицией или рендерингом.

Согласование ширин с целевым Format:
- sign: наличие знакового бита должно совпадать (MismatchedSignBit)
- exp/mant: BitPattern.fit с ошибкой конкретного поля
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.floatfmt.domain.bit_pattern import BitPattern
from src.floatfmt.domain.format import Format
from src.floatfmt.errors import (
    InsufficientExponentBits,
    InsufficientMantissaBits,
    MismatchedSignBit,
)


class Components(BaseModel):
    """
    Компоненты float.

    sign = None означает беззнаковый формат, True — отрицательное значение.

    Examples:
        >>> c = Components.new(True, "0b101011001110", "0b111011010011000")
        >>> str(c)
        'Components(sign=-, exp=101011001110, mant=111011010011000)'
    """

    sign: Optional[bool] = Field(None, description="Знак (None для беззнакового формата)")
    exp: BitPattern = Field(..., description="Биты экспоненты")
    mant: BitPattern = Field(..., description="Биты мантиссы")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, sign: Optional[bool], exp: str, mant: str) -> "Components":
        """
        Создание из строк с префиксом системы счисления.

        Args:
            sign: Знак (None для беззнакового)
            exp: Биты экспоненты, например "0x8C"
            mant: Биты мантиссы, например "0b1010_0000"

        Raises:
            InvalidRadixPrefix: Некорректный префикс
            InvalidDigit: Недопустимая цифра
        """
        return cls(sign=sign, exp=BitPattern.from_str(exp), mant=BitPattern.from_str(mant))

    def format(self, bias: int = 0) -> Format:
        """
        Естественный формат компонентов (ширины полей как есть).

        Raises:
            pydantic.ValidationError: Пустая экспонента (exp_width >= 1)
        """
        return Format(
            signed=self.sign is not None,
            exp_width=len(self.exp),
            mant_width=len(self.mant),
            bias=bias,
        )

    def fit(self, target: Format) -> "Components":
        """
        Согласование ширин полей с целевым форматом.

        Raises:
            MismatchedSignBit: Наличие знака не совпадает с target.signed
            InsufficientExponentBits: Сужение экспоненты теряет установленный бит
            InsufficientMantissaBits: Сужение мантиссы теряет установленный бит
        """
        if (self.sign is not None) != target.signed:
            raise MismatchedSignBit()

        return Components(
            sign=self.sign,
            exp=self.exp.fit(target.exp_width, InsufficientExponentBits),
            mant=self.mant.fit(target.mant_width, InsufficientMantissaBits),
        )

    def to_bits(self) -> BitPattern:
        """Упаковка: sign ++ exp ++ mant."""
        sign = BitPattern() if self.sign is None else BitPattern((self.sign,))
        return sign + self.exp + self.mant

    @property
    def sign_char(self) -> str:
        if self.sign is None:
            return "None"
        return "-" if self.sign else "+"

    def __str__(self) -> str:
        return f"Components(sign={self.sign_char}, exp={self.exp}, mant={self.mant})"

    def __repr__(self) -> str:
        return str(self)
