"""
Logarithm & Exponential — natural_log и exponential произвольной точности

    ln(x)  = 2 · d · artanh(y),  y = (x - 1)/(x + 1),  x сведён в [0.9, 1.2]
    e^x    = (1 + x + x²/2! + ...)^d,  x сведён делением пополам до x <= 1

ОБЛАСТЬ ОПРЕДЕЛЕНИЯ ln:
    Для x <= 0 исключение НЕ выбрасывается: возвращается sentinel
    (1 - 10^scale) / 1 — большое по модулю отрицательное число,
    заменяющее минус бесконечность (соглашение калькулятора).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. exponential — единственная функция, временно меняющая scale
   (повышение на время деления пополам, восстановление до суммирования)
2. ibase восстанавливается на любом выходе; исключение — sentinel-путь ln
   при settings.leak_ibase_on_log_domain_error=True (как в bc -l)
"""

import logging
from decimal import Decimal
from typing import Optional

from src.core.domain.precision import DECIMAL_BASE
from src.core.engine import CalculatorCore, Operand, default_core
from src.core.math.reduction import reduce_exponential, reduce_logarithm
from src.core.math.series import (
    factorials,
    odd_indices,
    power_terms,
    sum_until_underflow,
)

logger = logging.getLogger(__name__)


# =============================================================================
# NATURAL LOGARITHM
# =============================================================================


def log_domain_sentinel(core: CalculatorCore) -> Decimal:
    """
    Sentinel для ln(x <= 0): (1 - 10^scale) / 1.

    Args:
        core: Арифметическое ядро

    Returns:
        Отрицательное целое 1 - 10^scale, приведённое к scale
        (при scale = 3: -999.000)
    """
    with core.decimal_literals():
        one = core.number("1")
        ten = core.number("10")
        return core.div(core.sub(one, core.power(ten, core.scale)), one)


def natural_log(x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    ln(x) при текущем scale.

    Args:
        x: Аргумент; текст разбирается в текущем ibase
        core: Арифметическое ядро (default: default_core())

    Returns:
        ln(x) для x > 0; log_domain_sentinel() для x <= 0
    """
    core = core or default_core()
    x = core.number(x)

    if x <= 0:
        logger.warning(
            "natural_log domain violation: x=%s, returning sentinel at scale=%d",
            core.to_text(x),
            core.scale,
        )
        sentinel = log_domain_sentinel(core)
        if core.settings.leak_ibase_on_log_domain_error:
            # Как в bc -l: ibase остаётся десятичным после возврата
            logger.warning("ibase %d left at %d after log domain violation", core.ibase, DECIMAL_BASE)
            core.ibase = DECIMAL_BASE
        return sentinel

    with core.decimal_literals():
        one = core.number("1")
        reduction = reduce_logarithm(core, x)
        x = reduction.argument

        y = core.div(core.sub(x, one), core.add(x, one))
        multiplier = core.mul(y, y)
        result = sum_until_underflow(
            core, y, power_terms(core, y, multiplier, odd_indices()), "natural_log"
        )
        weight = core.mul(core.number("2"), reduction.factor)
        return core.mul(weight, result)


# =============================================================================
# EXPONENTIAL
# =============================================================================


def exponential(x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    e^x при текущем scale.

    Результат ряда возводится в степень d (обратное к делениям пополам),
    поэтому ошибка округления растёт мультипликативно вместе с d.

    Args:
        x: Аргумент; текст разбирается в текущем ibase
        core: Арифметическое ядро (default: default_core())

    Returns:
        e^x > 0

    Examples:
        >>> exponential(0)
        Decimal('1.00000000000000000000')
    """
    core = core or default_core()
    x = core.number(x)

    with core.decimal_literals():
        one = core.number("1")
        negative = x < 0
        reduction = reduce_exponential(core, core.absolute(x))
        x = reduction.argument

        result = sum_until_underflow(
            core, core.add(one, x), power_terms(core, x, x, factorials(2)), "exponential"
        )
        result = core.power(result, reduction.factor)

        if negative:
            return core.div(one, result)
        return core.div(result, one)
