"""
Descriptors — Конфигурация форматов через JSON дескрипторы

Дескриптор формата:
    {"signed": true, "exp_width": 8, "mant_width": 23, "bias": 127, "interpret": "ieee"}

Дескриптор значения:
    {"format": {...}, "bits": "0x4640e666"}

Каждый дескриптор сначала проверяется JSON Schema контрактом, затем
собирается в доменную модель (Format / Float).
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Final, Union

from src.floatfmt.contracts.validators import validate_float_format, validate_float_value
from src.floatfmt.domain import (
    BitPattern,
    Float,
    Format,
    get_interpreter,
    interpreter_name,
)

logger = logging.getLogger(__name__)

# Именованные пресеты форматов
PRESETS: Final[Dict[str, Callable[[], Format]]] = {
    "ieee_binary32": Format.ieee_binary32,
    "ieee_binary64": Format.ieee_binary64,
}


def get_preset(name: str) -> Format:
    """
    Пресет формата по имени.

    Raises:
        ValueError: Если пресет неизвестен
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown format preset: {name!r} (expected one of {list(PRESETS)})") from None
    return factory()


# =============================================================================
# FORMAT
# =============================================================================


def load_format(data: Dict[str, Any]) -> Format:
    """
    Сборка Format из дескриптора.

    Raises:
        jsonschema.ValidationError: Дескриптор не соответствует контракту
    """
    validate_float_format(data)

    interpret_name = data.get("interpret")
    fmt = Format(
        signed=data["signed"],
        exp_width=data["exp_width"],
        mant_width=data["mant_width"],
        bias=data["bias"],
        interpret=get_interpreter(interpret_name) if interpret_name else None,
    )

    logger.debug("loaded format descriptor: %s", fmt)
    return fmt


def dump_format(fmt: Format) -> Dict[str, Any]:
    """
    Дескриптор формата.

    Raises:
        ValueError: Стратегия интерпретации не зарегистрирована по имени
    """
    data = fmt.model_dump()
    data["interpret"] = interpreter_name(fmt.interpret)
    return data


def load_format_file(path: Union[str, Path]) -> Format:
    """Загрузка дескриптора формата из JSON файла."""
    with open(path, "r", encoding="utf-8") as f:
        return load_format(json.load(f))


# =============================================================================
# FLOAT
# =============================================================================


def load_float(data: Dict[str, Any]) -> Float:
    """
    Сборка Float из дескриптора значения.

    Raises:
        jsonschema.ValidationError: Дескриптор не соответствует контракту
        InvalidDigit: Недопустимая цифра в bits
        InsufficientBitsForBitPattern: bits шире формата
    """
    validate_float_value(data)
    fmt = load_format(data["format"])
    return Float.from_bits(fmt, BitPattern.from_str(data["bits"]))


def dump_float(value: Float) -> Dict[str, Any]:
    """Дескриптор значения (биты в hex при ширине кратной 4, иначе binary)."""
    if len(value.bits) % 4 == 0:
        bits = f"0x{value.bits.to_hex_string()}"
    else:
        bits = f"0b{value.bits.to_bin_string()}"
    return {"format": dump_format(value.format), "bits": bits}
