"""
bc-mathlib — внешний слой: диспетчер функций по имени и CLI.
"""

from src.mathlib.evaluator import (
    BC_ALIASES,
    FUNCTION_DISPATCH,
    evaluate,
    evaluate_batch,
    request_from_dict,
    resolve_function,
)

__all__ = [
    "BC_ALIASES",
    "FUNCTION_DISPATCH",
    "evaluate",
    "evaluate_batch",
    "request_from_dict",
    "resolve_function",
]
