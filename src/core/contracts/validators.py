"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (src/core/contracts/schema/):
- evaluation_request.json — запрос на вычисление функции
- evaluation_result.json — результат вычисления
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'evaluation_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Нарушение логируется с JSON-путём поля (например, $.arguments[0])
        и пробрасывается без изменений.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        try:
            self.validator.validate(data)
        except jsonschema.ValidationError as e:
            logger.debug("%s violated at %s: %s", self.schema_name, e.json_path, e.message)
            raise


class EvaluationRequestValidator(ContractValidator):
    """Валидатор для evaluation_request контракта."""

    def __init__(self):
        super().__init__("evaluation_request")


class EvaluationResultValidator(ContractValidator):
    """Валидатор для evaluation_result контракта."""

    def __init__(self):
        super().__init__("evaluation_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


# Валидаторы создаются один раз: batch проверяет каждый элемент тем же экземпляром
_VALIDATORS: Dict[str, ContractValidator] = {}


def get_validator(schema_name: str) -> ContractValidator:
    """
    Общий экземпляр валидатора контракта.

    Args:
        schema_name: evaluation_request или evaluation_result

    Raises:
        KeyError: Неизвестный контракт
    """
    if schema_name not in _VALIDATORS:
        factory = {
            "evaluation_request": EvaluationRequestValidator,
            "evaluation_result": EvaluationResultValidator,
        }[schema_name]
        _VALIDATORS[schema_name] = factory()
    return _VALIDATORS[schema_name]


def validate_evaluation_request(data: Dict[str, Any]) -> None:
    """
    Валидация evaluation_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    get_validator("evaluation_request").validate(data)


def validate_evaluation_result(data: Dict[str, Any]) -> None:
    """
    Валидация evaluation_result данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    get_validator("evaluation_result").validate(data)
