"""
Contract Validation Module

Модуль для валидации JSON контрактов запросов и результатов вычисления.
"""

from .validators import (
    ContractValidator,
    EvaluationRequestValidator,
    EvaluationResultValidator,
    SchemaLoader,
    get_validator,
    validate_evaluation_request,
    validate_evaluation_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EvaluationRequestValidator",
    "EvaluationResultValidator",
    # Functions
    "get_validator",
    "validate_evaluation_request",
    "validate_evaluation_result",
]
