"""
Bessel J — функция Бесселя первого рода целого порядка

    J_n(x) = g · Σ_k (-x²)^k / d_k,   d_k = Π_{i=1..k} 4·i·(n+i)
    g      = x^n / (2^n · n!)

Для отрицательного порядка: J_{-n}(x) = (-1)^n · J_n(x).
"""

from decimal import Decimal
from typing import Optional

from src.core.engine import CalculatorCore, Operand, default_core
from src.core.math.series import bessel_denominators, power_terms, sum_until_underflow


def bessel_j(n: Operand, x: Operand, core: Optional[CalculatorCore] = None) -> Decimal:
    """
    J_n(x) при текущем scale.

    Args:
        n: Порядок; дробная часть отбрасывается (усечение к нулю)
        x: Аргумент; текст разбирается в текущем ibase
        core: Арифметическое ядро (default: default_core())

    Returns:
        Приближение J_n(x)
    """
    core = core or default_core()
    n = core.number(n)
    x = core.number(x)

    with core.decimal_literals():
        order = int(core.truncate(n))
        negate = False
        if order < 0:
            order = -order
            negate = order % 2 == 1

        one = core.number("1")
        multiplier = core.negate(core.mul(x, x))
        series = sum_until_underflow(
            core,
            one,
            power_terms(core, one, multiplier, bessel_denominators(order)),
            "bessel_j",
        )

        result = core.mul(_leading_coefficient(core, order, x), series)
        return core.negate(result) if negate else result


def _leading_coefficient(core: CalculatorCore, order: int, x: Decimal) -> Decimal:
    """g = x^n / (2^n · n!), n! накапливается явным циклом."""
    factorial = 1
    for k in range(1, order + 1):
        factorial *= k
    denominator = core.mul(core.power(core.number("2"), order), factorial)
    return core.div(core.power(x, order), denominator)
