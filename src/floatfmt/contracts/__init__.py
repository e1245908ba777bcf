"""
Contract Validation Module

Валидация JSON дескрипторов форматов и значений, сборка доменных моделей.
"""

from .descriptors import (
    PRESETS,
    dump_float,
    dump_format,
    get_preset,
    load_float,
    load_format,
    load_format_file,
)
from .validators import (
    FLOAT_FORMAT_VALIDATOR,
    FLOAT_VALUE_VALIDATOR,
    REGISTRY,
    SCHEMAS,
    load_schema,
    validate_float_format,
    validate_float_value,
)

__all__ = [
    # Schemas
    "SCHEMAS",
    "REGISTRY",
    "load_schema",
    # Validators
    "FLOAT_FORMAT_VALIDATOR",
    "FLOAT_VALUE_VALIDATOR",
    "validate_float_format",
    "validate_float_value",
    # Descriptors
    "PRESETS",
    "get_preset",
    "load_format",
    "dump_format",
    "load_format_file",
    "load_float",
    "dump_float",
]
