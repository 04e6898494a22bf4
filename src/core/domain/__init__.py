"""
Domain models and value objects.

Contains configuration of the precision context and evaluation contracts.
"""

from src.core.domain.evaluation import EvaluationRequest, EvaluationResult, FunctionName
from src.core.domain.precision import (
    DECIMAL_BASE,
    DEFAULT_MAX_SERIES_TERMS,
    DEFAULT_SCALE,
    IBASE_MAX,
    IBASE_MIN,
    SCALE_MAX,
    PrecisionSettings,
    RoundingMode,
)

__all__ = [
    # Precision constants
    "DECIMAL_BASE",
    "DEFAULT_MAX_SERIES_TERMS",
    "DEFAULT_SCALE",
    "IBASE_MAX",
    "IBASE_MIN",
    "SCALE_MAX",
    # Precision model
    "PrecisionSettings",
    "RoundingMode",
    # Evaluation models
    "EvaluationRequest",
    "EvaluationResult",
    "FunctionName",
]
