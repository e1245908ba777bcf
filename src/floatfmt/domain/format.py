"""
Format — Дескриптор битовой раскладки float

Immutable Pydantic модель: {signed, exp_width, mant_width, bias}
плюс прикреплённая стратегия интерпретации специальных значений.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(format) = signed + exp_width + mant_width — точная ширина каждого Float
2. Ограничения ширин проверяются при конструировании (ValidationError),
   а не молча обрезаются
3. Равенство и хэш сравнивают только раскладку; стратегия не входит в identity
"""

from typing import Any, Callable, Final, Optional

from pydantic import BaseModel, Field

from src.floatfmt.domain.interpret import IEEE_INTERPRETER

# =============================================================================
# ОГРАНИЧЕНИЯ ШИРИН
# =============================================================================

# Максимальная ширина экспоненты (bias и смещённая экспонента остаются в int64)
MAX_EXP_WIDTH: Final[int] = 64


def ieee_excess(exp_width: int) -> int:
    """Bias по соглашению IEEE: 2^(exp_width - 1) - 1."""
    if exp_width < 1:
        # Ширину отклонит валидация модели
        return 0
    return (1 << (exp_width - 1)) - 1


class Format(BaseModel):
    """
    Формат float: число бит каждого поля и смещение экспоненты.

    Examples:
        >>> len(Format.ieee_binary32())
        32
        >>> Format.new_ieee_excess(16, 64).bias
        32767
    """

    signed: bool = Field(True, description="Есть ли знаковый бит")
    exp_width: int = Field(..., ge=1, le=MAX_EXP_WIDTH, description="Ширина экспоненты (бит)")
    mant_width: int = Field(..., ge=0, description="Ширина мантиссы (бит)")
    bias: int = Field(..., description="Смещение (excess) экспоненты")
    interpret: Optional[Callable[..., Optional[str]]] = Field(
        None,
        exclude=True,
        repr=False,
        description="Стратегия интерпретации специальных bit patterns",
    )

    model_config = {"frozen": True}

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(cls, exp_width: int, mant_width: int, bias: int) -> "Format":
        """Знаковый формат."""
        return cls(signed=True, exp_width=exp_width, mant_width=mant_width, bias=bias)

    @classmethod
    def new_unsigned(cls, exp_width: int, mant_width: int, bias: int) -> "Format":
        """Беззнаковый формат."""
        return cls(signed=False, exp_width=exp_width, mant_width=mant_width, bias=bias)

    @classmethod
    def new_with_sign(cls, signed: bool, exp_width: int, mant_width: int, bias: int) -> "Format":
        return cls(signed=signed, exp_width=exp_width, mant_width=mant_width, bias=bias)

    @classmethod
    def new_ieee_excess(cls, exp_width: int, mant_width: int) -> "Format":
        """Знаковый формат с bias = 2^(exp_width - 1) - 1."""
        return cls.new_ieee_excess_with_sign(True, exp_width, mant_width)

    @classmethod
    def new_ieee_excess_with_sign(cls, signed: bool, exp_width: int, mant_width: int) -> "Format":
        return cls(
            signed=signed,
            exp_width=exp_width,
            mant_width=mant_width,
            bias=ieee_excess(exp_width),
        )

    @classmethod
    def ieee_binary32(cls) -> "Format":
        """IEEE binary32: экспонента 8 бит (bias 127), мантисса 23 бита."""
        return cls(signed=True, exp_width=8, mant_width=23, bias=127, interpret=IEEE_INTERPRETER)

    @classmethod
    def ieee_binary64(cls) -> "Format":
        """IEEE binary64: экспонента 11 бит (bias 1023), мантисса 52 бита."""
        return cls(signed=True, exp_width=11, mant_width=52, bias=1023, interpret=IEEE_INTERPRETER)

    def with_interpret(self, interpret: Optional[Callable[..., Optional[str]]]) -> "Format":
        """Копия формата с другой стратегией интерпретации."""
        return self.model_copy(update={"interpret": interpret})

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def layout(self) -> tuple[bool, int, int, int]:
        return (self.signed, self.exp_width, self.mant_width, self.bias)

    @property
    def max_biased_exponent(self) -> int:
        """Наибольшее значение поля экспоненты (все единицы)."""
        return (1 << self.exp_width) - 1

    def __len__(self) -> int:
        return int(self.signed) + self.exp_width + self.mant_width

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Format):
            return NotImplemented
        return self.layout == other.layout

    def __hash__(self) -> int:
        return hash(self.layout)
