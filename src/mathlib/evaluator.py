"""
Evaluator — Диспетчер вычисления функций по имени

Связывает контракты (EvaluationRequest/EvaluationResult, JSON Schema)
с функциями src.core.math. Каждый запрос вычисляется на собственном
CalculatorCore, созданном из scale/ibase/rounding запроса.

Имена функций: длинные (sine, natural_log, ...) и библиотечные имена bc
(s, c, a, l, e, j).
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Final, List

from src.core.contracts import validate_evaluation_request, validate_evaluation_result
from src.core.domain import (
    EvaluationRequest,
    EvaluationResult,
    FunctionName,
    PrecisionSettings,
)
from src.core.engine import CalculatorCore
from src.core.math import arctangent, bessel_j, cosine, exponential, natural_log, sine

logger = logging.getLogger(__name__)

# Имена библиотеки bc -l
BC_ALIASES: Final[Dict[str, FunctionName]] = {
    "s": FunctionName.SINE,
    "c": FunctionName.COSINE,
    "a": FunctionName.ARCTANGENT,
    "l": FunctionName.NATURAL_LOG,
    "e": FunctionName.EXPONENTIAL,
    "j": FunctionName.BESSEL_J,
}

# Dispatch map: функции принимают (*arguments, core)
FUNCTION_DISPATCH: Final[Dict[FunctionName, Callable[..., Decimal]]] = {
    FunctionName.SINE: sine,
    FunctionName.COSINE: cosine,
    FunctionName.ARCTANGENT: arctangent,
    FunctionName.NATURAL_LOG: natural_log,
    FunctionName.EXPONENTIAL: exponential,
    FunctionName.BESSEL_J: bessel_j,
}


def resolve_function(name: str) -> FunctionName:
    """
    Имя функции (длинное или bc) → FunctionName.

    Raises:
        ValueError: Неизвестное имя
    """
    if name in BC_ALIASES:
        return BC_ALIASES[name]
    return FunctionName(name)


def evaluate(request: EvaluationRequest) -> EvaluationResult:
    """
    Вычисление одной функции.

    Args:
        request: Запрос (аргументы — литералы в request.ibase)

    Returns:
        EvaluationResult со значением в десятичной записи

    Raises:
        CalculatorCoreError: Ошибка движка (деление на ноль и т.п.)
        SeriesDivergenceError: Ряд не сошёлся за страховочный лимит
    """
    settings = PrecisionSettings().with_overrides(
        ibase=request.ibase, scale=request.scale, rounding=request.rounding
    )
    core = CalculatorCore(settings)
    function = FUNCTION_DISPATCH[request.function]

    # Аргументы разбираются функцией в ibase ядра
    value = function(*request.arguments, core=core)
    logger.debug(
        "evaluated %s(%s) at scale=%d ibase=%d",
        request.function.value,
        ", ".join(request.arguments),
        request.scale,
        request.ibase,
    )

    return EvaluationResult(
        function=request.function,
        arguments=list(request.arguments),
        scale=request.scale,
        ibase=request.ibase,
        value=core.to_text(value),
    )


def request_from_dict(data: Dict[str, Any]) -> EvaluationRequest:
    """
    JSON-запрос → EvaluationRequest (с проверкой схемы и bc-имён).

    Raises:
        ValidationError (jsonschema): Нарушение контракта
        ValidationError (pydantic): Неверная арность и т.п.
    """
    validate_evaluation_request(data)
    payload = dict(data)
    payload["function"] = resolve_function(data["function"])
    return EvaluationRequest(**payload)


def evaluate_batch(payload: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Вычисление списка JSON-запросов.

    Args:
        payload: Список запросов по контракту evaluation_request

    Returns:
        Список результатов по контракту evaluation_result
    """
    results = []
    for item in payload:
        result = evaluate(request_from_dict(item)).model_dump(mode="json")
        validate_evaluation_result(result)
        results.append(result)
    return results
