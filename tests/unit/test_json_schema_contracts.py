"""
Tests for JSON Schema Contract Validators

Комплексное тестирование контрактов и дескрипторов:
- Валидность самих схем
- Валидация правильных дескрипторов
- Детекция нарушений required полей, типов и constraints
- Сборка Format / Float из дескрипторов и обратно
"""

import json

import pytest
from jsonschema import ValidationError

from src.floatfmt.contracts import (
    FLOAT_FORMAT_VALIDATOR,
    FLOAT_VALUE_VALIDATOR,
    REGISTRY,
    SCHEMAS,
    dump_float,
    dump_format,
    get_preset,
    load_float,
    load_format,
    load_format_file,
    load_schema,
    validate_float_format,
    validate_float_value,
)
from src.floatfmt.domain import IEEE_INTERPRETER, Float, Format
from src.floatfmt.errors import InsufficientBitsForBitPattern


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def binary32_descriptor():
    """Дескриптор IEEE binary32."""
    return {
        "signed": True,
        "exp_width": 8,
        "mant_width": 23,
        "bias": 127,
        "interpret": "ieee",
    }


# =============================================================================
# SCHEMAS
# =============================================================================


class TestSchemas:
    """Тесты загрузки схем"""

    def test_schemas_load(self) -> None:
        assert SCHEMAS["float_format"]["title"] == "float_format"
        assert SCHEMAS["float_value"]["title"] == "float_value"
        assert load_schema("float_format") == SCHEMAS["float_format"]

    def test_registry_resolves_format_by_id(self) -> None:
        """float_value ссылается на float_format через общий registry"""
        resolved = REGISTRY.resolver().lookup(SCHEMAS["float_format"]["$id"])
        assert resolved.contents == SCHEMAS["float_format"]

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_schema("does_not_exist")


class TestFormatContract:
    """Тесты float_format контракта"""

    def test_valid(self, binary32_descriptor) -> None:
        validate_float_format(binary32_descriptor)
        assert FLOAT_FORMAT_VALIDATOR.is_valid(binary32_descriptor)

    def test_interpret_optional(self, binary32_descriptor) -> None:
        del binary32_descriptor["interpret"]
        validate_float_format(binary32_descriptor)

    def test_missing_required(self, binary32_descriptor) -> None:
        del binary32_descriptor["bias"]
        with pytest.raises(ValidationError, match="'bias' is a required property"):
            validate_float_format(binary32_descriptor)

    def test_exp_width_bounds(self, binary32_descriptor) -> None:
        binary32_descriptor["exp_width"] = 0
        with pytest.raises(ValidationError):
            validate_float_format(binary32_descriptor)

        binary32_descriptor["exp_width"] = 65
        with pytest.raises(ValidationError):
            validate_float_format(binary32_descriptor)

    def test_unknown_interpret(self, binary32_descriptor) -> None:
        binary32_descriptor["interpret"] = "posit"
        with pytest.raises(ValidationError):
            validate_float_format(binary32_descriptor)

    def test_extra_field(self, binary32_descriptor) -> None:
        binary32_descriptor["rounding"] = "nearest"
        errors = list(FLOAT_FORMAT_VALIDATOR.iter_errors(binary32_descriptor))
        assert len(errors) == 1


class TestValueContract:
    """Тесты float_value контракта"""

    def test_valid(self, binary32_descriptor) -> None:
        validate_float_value({"format": binary32_descriptor, "bits": "0x4640_e666"})

    def test_bits_require_prefix(self, binary32_descriptor) -> None:
        data = {"format": binary32_descriptor, "bits": "4640e666"}
        assert not FLOAT_VALUE_VALIDATOR.is_valid(data)

    def test_nested_format_checked(self, binary32_descriptor) -> None:
        """Вложенный формат проверяется контрактом float_format"""
        binary32_descriptor["exp_width"] = 0
        with pytest.raises(ValidationError):
            validate_float_value({"format": binary32_descriptor, "bits": "0x0"})

        del binary32_descriptor["exp_width"]
        with pytest.raises(ValidationError, match="'exp_width' is a required property"):
            validate_float_value({"format": binary32_descriptor, "bits": "0x0"})


# =============================================================================
# DESCRIPTORS
# =============================================================================


class TestDescriptors:
    """Тесты сборки доменных моделей из дескрипторов"""

    def test_load_format(self, binary32_descriptor) -> None:
        fmt = load_format(binary32_descriptor)

        assert fmt == Format.ieee_binary32()
        assert fmt.interpret is IEEE_INTERPRETER

    def test_dump_format(self, binary32_descriptor) -> None:
        assert dump_format(Format.ieee_binary32()) == binary32_descriptor

    def test_format_round_trip_without_interpret(self) -> None:
        fmt = Format.new_ieee_excess(5, 10)
        data = dump_format(fmt)

        assert data["interpret"] is None
        assert load_format(data) == fmt
        assert load_format(data).interpret is None

    def test_dump_unregistered_interpret(self) -> None:
        fmt = Format.new(2, 1, 1).with_interpret(lambda comps: None)
        with pytest.raises(ValueError, match="not registered"):
            dump_format(fmt)

    def test_load_invalid_format(self, binary32_descriptor) -> None:
        binary32_descriptor["mant_width"] = -1
        with pytest.raises(ValidationError):
            load_format(binary32_descriptor)

    def test_load_format_file(self, tmp_path, binary32_descriptor) -> None:
        path = tmp_path / "binary32.json"
        path.write_text(json.dumps(binary32_descriptor), encoding="utf-8")

        assert load_format_file(path) == Format.ieee_binary32()

    def test_float_round_trip(self) -> None:
        value = Float.from_f32(12345.6)
        data = dump_float(value)

        assert data["bits"] == "0x4640e666"
        assert load_float(data) == value
        assert str(load_float(data)) == str(value)

    def test_dump_odd_width_uses_binary(self) -> None:
        value = Float.from_str(Format.new(2, 2, 1), "1.5")
        assert dump_float(value)["bits"] == "0b00110"

    def test_load_float_too_wide(self, binary32_descriptor) -> None:
        with pytest.raises(InsufficientBitsForBitPattern):
            load_float({"format": binary32_descriptor, "bits": "0x1_0000_0000"})

    def test_presets(self) -> None:
        assert get_preset("ieee_binary32") == Format.ieee_binary32()
        assert get_preset("ieee_binary64").interpret is IEEE_INTERPRETER
        with pytest.raises(ValueError, match="Unknown format preset"):
            get_preset("bfloat16")
