"""
Pi — π = 4 · arctan(1) с мемоизацией по точности

sine и cosine получают π через pi_constant() вместо скрытого повторного
вычисления arctan(1) при каждом вызове. Значение зависит только от scale
и режима приведения, поэтому кэшируется по этой паре.
"""

import logging
from decimal import Decimal

from src.core.engine import CalculatorCore

logger = logging.getLogger(__name__)

# (scale, rounding) → π
_PI_CACHE: dict[tuple[int, str], Decimal] = {}


def pi_constant(core: CalculatorCore) -> Decimal:
    """
    π при текущем scale ядра.

    Args:
        core: Арифметическое ядро

    Returns:
        4 · arctangent(1), приведённое к scale
    """
    key = (core.scale, core.rounding)
    cached = _PI_CACHE.get(key)
    if cached is not None:
        return cached

    # Импорт здесь: trig зависит от этого модуля
    from src.core.math.trig import arctangent

    logger.debug("pi cache miss: scale=%d rounding=%s", *key)
    with core.decimal_literals():
        value = core.mul(core.number("4"), arctangent(core.number("1"), core))
    _PI_CACHE[key] = value
    return value


def clear_pi_cache() -> None:
    """Очистка кэша π."""
    _PI_CACHE.clear()
