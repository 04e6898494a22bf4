"""
Range Reduction — Сведение аргумента в область быстрой сходимости ряда

Каждый редуктор возвращает Reduction(argument, factor, negate):
- argument: приведённый аргумент для ряда
- factor: множитель (или показатель степени) для обратного преобразования
- negate: нужно ли сменить знак результата

ФОРМУЛЫ:
    sin:    sin(x) = sin(x mod 2π);  sin(x) = -sin(x - π)
    arctan: arctan(x) = 2 · arctan(x / (1 + sqrt(1 + x²)))
    ln:     ln(x) = 2 · ln(sqrt(x))
    exp:    e^x = (e^(x/2))^2
"""

import logging
from decimal import Decimal
from typing import Final, NamedTuple

from src.core.engine import CalculatorCore

logger = logging.getLogger(__name__)

# Граница ряда arctan: половинный угол применяется, пока аргумент выше неё.
# Вблизи 1 знакопеременный ряд сходится как 1/(1 - x), поэтому сведение
# нужно и для аргументов ниже 1.
ATAN_SERIES_LIMIT: Final[str] = "0.5"

# Интервал, в который логарифм сводится извлечением корня
LOG_LOWER_BOUND: Final[str] = "0.9"
LOG_UPPER_BOUND: Final[str] = "1.2"


class Reduction(NamedTuple):
    """Результат сведения аргумента."""

    argument: Decimal
    factor: int  # множитель (arctan, ln) или показатель степени (exp)
    negate: bool


# =============================================================================
# РЕДУКТОРЫ
# =============================================================================
#
# Все редукторы вызываются внутри core.decimal_literals().


def reduce_periodic(core: CalculatorCore, x: Decimal, pi: Decimal) -> Reduction:
    """
    Сведение аргумента синуса: x mod 2π, затем сдвиг на π.

    Остаток берётся при scale = 0: частное целое, и вычитается точное
    целое число периодов.

    Args:
        core: Арифметическое ядро
        x: Аргумент
        pi: π при текущем scale

    Returns:
        Reduction с |argument| < π, negate — если был сдвиг на π
    """
    with core.override(scale=0):
        x = core.mod(x, core.mul(core.number("2"), pi))

    negate = False
    if x >= pi:
        x = core.sub(x, pi)
        negate = True
    elif x <= core.negate(pi):
        x = core.add(x, pi)
        negate = True

    return Reduction(x, 1, negate)


def reduce_arctangent(core: CalculatorCore, x: Decimal) -> Reduction:
    """
    Половинный угол для arctan неотрицательного x.

    Args:
        core: Арифметическое ядро
        x: |аргумент|

    Returns:
        Reduction с argument <= ATAN_SERIES_LIMIT и factor = 2^шагов
    """
    one = core.number("1")
    limit = core.number(ATAN_SERIES_LIMIT)
    factor = 1

    while x > limit:
        x = core.div(x, core.add(one, core.sqrt(core.add(one, core.mul(x, x)))))
        factor *= 2

    return Reduction(x, factor, False)


def reduce_logarithm(core: CalculatorCore, x: Decimal) -> Reduction:
    """
    Извлечение корня до попадания x в [0.9, 1.2].

    Args:
        core: Арифметическое ядро
        x: Аргумент (x > 0)

    Returns:
        Reduction с factor — весом: ln(x) = factor · ln(argument)
    """
    upper = core.number(LOG_UPPER_BOUND)
    lower = core.number(LOG_LOWER_BOUND)
    factor = 1

    while x > upper:
        x = core.sqrt(x)
        factor *= 2
    while x < lower:
        x = core.sqrt(x)
        factor *= 2

    if factor > 1:
        logger.debug("log argument reduced by %d square roots", factor.bit_length() - 1)
    return Reduction(x, factor, False)


def reduce_exponential(core: CalculatorCore, x: Decimal) -> Reduction:
    """
    Деление пополам до x <= 1 при повышенном scale.

    scale временно поднимается на scale_of(x) + 1 и ещё на единицу на каждое
    деление пополам (каждое деление добавляет дробную цифру), после чего
    восстанавливается.

    Args:
        core: Арифметическое ядро
        x: |аргумент|

    Returns:
        Reduction с factor — показателем: e^x = (e^argument)^factor
    """
    one = core.number("1")
    two = core.number("2")
    factor = 1

    with core.working_scale(core.scale + core.scale_of(x) + 1):
        while x > one:
            core.widen()
            x = core.div(x, two)
            factor *= 2

    if factor > 1:
        logger.debug("exp argument halved %d times", factor.bit_length() - 1)
    return Reduction(x, factor, False)
