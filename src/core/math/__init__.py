"""
Core math modules для bc-mathlib

Трансцендентные функции произвольной точности поверх CalculatorCore:
сведение аргумента, ряды Тейлора с остановкой по точности,
дисциплина сохранения/восстановления ibase и scale.
"""

# Series Summation
from src.core.math.series import (
    SeriesDivergenceError,
    bessel_denominators,
    factorials,
    odd_factorials,
    odd_indices,
    power_terms,
    sum_until_underflow,
)

# Range Reduction
from src.core.math.reduction import (
    ATAN_SERIES_LIMIT,
    LOG_LOWER_BOUND,
    LOG_UPPER_BOUND,
    Reduction,
    reduce_arctangent,
    reduce_exponential,
    reduce_logarithm,
    reduce_periodic,
)

# Constants
from src.core.math.constants import clear_pi_cache, pi_constant

# Transcendental Functions
from src.core.math.trig import arctangent, cosine, sine
from src.core.math.logexp import exponential, log_domain_sentinel, natural_log
from src.core.math.bessel import bessel_j

__all__ = [
    # Series — Exceptions
    "SeriesDivergenceError",
    # Series — Denominators
    "bessel_denominators",
    "factorials",
    "odd_factorials",
    "odd_indices",
    # Series — Summation
    "power_terms",
    "sum_until_underflow",
    # Reduction — Constants
    "ATAN_SERIES_LIMIT",
    "LOG_LOWER_BOUND",
    "LOG_UPPER_BOUND",
    # Reduction — Types
    "Reduction",
    # Reduction — Functions
    "reduce_arctangent",
    "reduce_exponential",
    "reduce_logarithm",
    "reduce_periodic",
    # Constants
    "clear_pi_cache",
    "pi_constant",
    # Functions
    "arctangent",
    "bessel_j",
    "cosine",
    "exponential",
    "log_domain_sentinel",
    "natural_log",
    "sine",
]
