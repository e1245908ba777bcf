"""
JSON Schema Contract Validators

Контракты дескрипторов (src/floatfmt/contracts/schema/):
- float_format.json — раскладка формата
- float_value.json — упакованное значение; поле format ссылается
  на float_format.json по $id

Схемы загружаются и проходят meta-validation один раз при импорте,
затем собираются в общий referencing.Registry. Валидаторы модульные
и переиспользуются между вызовами.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final

from jsonschema import Draft202012Validator
from referencing import Registry
from referencing.jsonschema import DRAFT202012

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

# Имена контрактов (файлы schema/<name>.json)
SCHEMA_NAMES: Final[tuple[str, ...]] = ("float_format", "float_value")


# =============================================================================
# SCHEMAS
# =============================================================================


def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка и meta-validation схемы контракта.

    Raises:
        FileNotFoundError: Файл схемы не найден
        jsonschema.SchemaError: Схема не соответствует Draft 2020-12
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    Draft202012Validator.check_schema(schema)
    return schema


SCHEMAS: Final[Dict[str, Dict[str, Any]]] = {name: load_schema(name) for name in SCHEMA_NAMES}

REGISTRY: Final[Registry] = Registry().with_resources(
    (schema["$id"], DRAFT202012.create_resource(schema)) for schema in SCHEMAS.values()
)

FLOAT_FORMAT_VALIDATOR: Final[Draft202012Validator] = Draft202012Validator(
    SCHEMAS["float_format"], registry=REGISTRY
)
FLOAT_VALUE_VALIDATOR: Final[Draft202012Validator] = Draft202012Validator(
    SCHEMAS["float_value"], registry=REGISTRY
)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_float_format(data: Dict[str, Any]) -> None:
    """
    Валидация дескриптора формата.

    Raises:
        jsonschema.ValidationError: Дескриптор не соответствует контракту
    """
    FLOAT_FORMAT_VALIDATOR.validate(data)


def validate_float_value(data: Dict[str, Any]) -> None:
    """
    Валидация дескриптора значения (включая вложенный формат).

    Raises:
        jsonschema.ValidationError: Дескриптор не соответствует контракту
    """
    FLOAT_VALUE_VALIDATOR.validate(data)
