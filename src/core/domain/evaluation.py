"""
Evaluation — Модели запроса и результата вычисления функции

Контракт между внешним слоем (CLI, batch) и библиотекой функций.
Соответствует схемам evaluation_request.json / evaluation_result.json.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.core.domain.precision import (
    DECIMAL_BASE,
    DEFAULT_SCALE,
    IBASE_MAX,
    IBASE_MIN,
    SCALE_MAX,
    RoundingMode,
)


# =============================================================================
# ENUMS
# =============================================================================


class FunctionName(str, Enum):
    """Публичные функции библиотеки"""

    SINE = "sine"
    COSINE = "cosine"
    ARCTANGENT = "arctangent"
    NATURAL_LOG = "natural_log"
    EXPONENTIAL = "exponential"
    BESSEL_J = "bessel_j"

    @property
    def arity(self) -> int:
        """Число аргументов функции (bessel_j принимает порядок и x)."""
        return 2 if self is FunctionName.BESSEL_J else 1


# =============================================================================
# REQUEST / RESULT MODELS
# =============================================================================


class EvaluationRequest(BaseModel):
    """
    Запрос на вычисление одной функции.

    Аргументы передаются текстом и интерпретируются в основании ibase,
    как литералы исходного текста калькулятора.
    """

    function: FunctionName = Field(..., description="Имя функции")
    arguments: list[str] = Field(..., min_length=1, max_length=2, description="Аргументы")
    scale: int = Field(DEFAULT_SCALE, ge=0, le=SCALE_MAX, description="scale вычисления")
    ibase: int = Field(DECIMAL_BASE, ge=IBASE_MIN, le=IBASE_MAX, description="ibase аргументов")
    rounding: RoundingMode = Field(RoundingMode.TRUNCATE, description="Режим приведения")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_arity(self) -> "EvaluationRequest":
        """Количество аргументов должно совпадать с арностью функции."""
        expected = self.function.arity
        if len(self.arguments) != expected:
            raise ValueError(
                f"{self.function.value} expects {expected} argument(s), "
                f"got {len(self.arguments)}"
            )
        return self


class EvaluationResult(BaseModel):
    """Результат вычисления (значение в виде десятичного текста)."""

    function: FunctionName
    arguments: list[str]
    scale: int = Field(..., ge=0)
    ibase: int = Field(..., ge=IBASE_MIN, le=IBASE_MAX)
    value: str = Field(..., min_length=1, description="Значение в десятичной записи")

    model_config = {"frozen": True}
