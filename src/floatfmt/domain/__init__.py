"""
Domain models and value objects.

BitPattern, Format, Components, Float и стратегии интерпретации.
"""

from src.floatfmt.domain.bit_pattern import DIGIT_SEPARATOR, RADIX_PREFIXES, BitPattern
from src.floatfmt.domain.components import Components
from src.floatfmt.domain.float_value import Float
from src.floatfmt.domain.format import MAX_EXP_WIDTH, Format, ieee_excess
from src.floatfmt.domain.interpret import (
    IEEE_INTERPRETER,
    INTERPRETERS,
    IeeeInterpreter,
    Interpreter,
    get_interpreter,
    interpreter_name,
)

__all__ = [
    # BitPattern
    "BitPattern",
    "DIGIT_SEPARATOR",
    "RADIX_PREFIXES",
    # Format
    "Format",
    "MAX_EXP_WIDTH",
    "ieee_excess",
    # Components
    "Components",
    # Float
    "Float",
    # Interpret strategies
    "IEEE_INTERPRETER",
    "INTERPRETERS",
    "IeeeInterpreter",
    "Interpreter",
    "get_interpreter",
    "interpreter_name",
]
