"""
Interpret — Стратегии интерпретации специальных bit patterns

Стратегия — любой callable (Components) -> str | None, прикреплённый к Format.
Возвращает текст специального значения (ноль, бесконечность, NaN) или None,
если паттерн обычный и должен рендериться по формуле.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Final, Optional

if TYPE_CHECKING:
    from src.floatfmt.domain.components import Components


Interpreter = Callable[["Components"], Optional[str]]


@dataclass(frozen=True)
class IeeeInterpreter:
    """
    Специальные значения по соглашению IEEE 754.

    - exp и mant все нули → "0" / "-0"
    - exp все единицы, mant ноль → "inf" / "-inf"
    - exp все единицы, mant не ноль: старший бит mant 1 → "NaN", 0 → "sNaN"

    Беззнаковые паттерны считаются положительными.
    """

    name: str = "ieee"

    def __call__(self, comps: "Components") -> Optional[str]:
        minus = "-" if comps.sign else ""

        if comps.exp.is_all_zero() and comps.mant.is_all_zero():
            return f"{minus}0"

        if not comps.exp.is_all_one():
            return None

        if comps.mant.is_all_zero():
            return f"{minus}inf"

        # Тихий NaN отличается старшим битом мантиссы
        return "NaN" if comps.mant[0] else "sNaN"


IEEE_INTERPRETER: Final[IeeeInterpreter] = IeeeInterpreter()

# Реестр именованных стратегий (для JSON дескрипторов)
INTERPRETERS: Final[dict[str, Interpreter]] = {
    IEEE_INTERPRETER.name: IEEE_INTERPRETER,
}


def get_interpreter(name: str) -> Interpreter:
    """
    Поиск стратегии по имени.

    Raises:
        ValueError: Если стратегия не зарегистрирована
    """
    try:
        return INTERPRETERS[name]
    except KeyError:
        raise ValueError(f"Unknown interpret strategy: {name!r}") from None


def interpreter_name(interpreter: Optional[Interpreter]) -> Optional[str]:
    """
    Имя зарегистрированной стратегии или None для формата без стратегии.

    Raises:
        ValueError: Если стратегия не зарегистрирована (например, closure)
    """
    if interpreter is None:
        return None

    for name, registered in INTERPRETERS.items():
        if registered == interpreter:
            return name

    raise ValueError(f"Interpret strategy {interpreter!r} is not registered")
