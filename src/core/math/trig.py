"""
Trigonometry — sine, cosine, arctangent произвольной точности

    sin(x)    = x - x³/3! + x⁵/5! - ...     после сведения x mod 2π
    cos(x)    = sin(x + π/2)
    arctan(x) = x - x³/3 + x⁵/5 - ...       после половинного угла для |x| > 0.5

π = 4 · arctan(1) берётся из pi_constant() (мемоизация по scale).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Аргументы разбираются в ibase вызывающего кода, тело работает при ibase = 10
2. ibase восстанавливается на любом выходе, включая ошибки движка
3. scale вызывающего кода не изменяется
"""

from decimal import Decimal
from typing import Optional

from src.core.engine import CalculatorCore, Operand, default_core
from src.core.math.constants import pi_constant
from src.core.math.reduction import reduce_arctangent, reduce_periodic
from src.core.math.series import (
    odd_factorials,
    odd_indices,
    power_terms,
    sum_until_underflow,
)


def sine(x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    sin(x) при текущем scale.

    Args:
        x: Аргумент (радианы); текст разбирается в текущем ibase
        core: Арифметическое ядро (default: default_core())

    Returns:
        Значение в [-1, 1]

    Examples:
        >>> sine(0)
        Decimal('0E-20')
    """
    core = core or default_core()
    x = core.number(x)

    with core.decimal_literals():
        pi = pi_constant(core)
        reduction = reduce_periodic(core, x, pi)
        x = reduction.argument

        multiplier = core.negate(core.mul(x, x))
        result = sum_until_underflow(
            core, x, power_terms(core, x, multiplier, odd_factorials()), "sine"
        )
        return core.negate(result) if reduction.negate else result


def cosine(x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    cos(x) = sin(x + π/2).

    Собственного ряда нет: вычисление полностью делегируется sine().
    """
    core = core or default_core()
    x = core.number(x)

    with core.decimal_literals():
        half_pi = core.div(pi_constant(core), core.number("2"))
        return sine(core.add(x, half_pi), core)


def arctangent(x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    arctan(x) при текущем scale.

    Для |x| > 0.5 применяется arctan(x) = 2·arctan(x / (1 + sqrt(1 + x²))),
    после чего ряд сходится со скоростью, не зависящей от величины x.

    Args:
        x: Аргумент; текст разбирается в текущем ibase
        core: Арифметическое ядро (default: default_core())

    Returns:
        Значение в (-π/2, π/2)
    """
    core = core or default_core()
    x = core.number(x)

    with core.decimal_literals():
        negative = x < 0
        reduction = reduce_arctangent(core, core.absolute(x))
        x = reduction.argument

        multiplier = core.negate(core.mul(x, x))
        result = sum_until_underflow(
            core, x, power_terms(core, x, multiplier, odd_indices()), "arctangent"
        )
        result = core.mul(result, reduction.factor)
        return core.negate(result) if negative else result
