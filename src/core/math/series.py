"""
Series Summation — Суммирование рядов Тейлора до исчезновения члена

Общий примитив всех трансцендентных функций:
- член ряда получается из предыдущего умножением на фиксированный множитель
- каждый член делится на растущий знаменатель (i, i!, 4·i·(n+i)...)
- суммирование останавливается, когда член после деления равен нулю

Остановка определяется точностью: деление приводит результат к scale,
поэтому член меньше последнего сохраняемого разряда становится ровно нулём.
Число итераций не фиксировано и растёт вместе со scale.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Первый нулевой член завершает суммирование и в сумму не входит
2. Страховочный лимит settings.max_series_terms → SeriesDivergenceError
3. Все операции выполняются через CalculatorCore (правила scale движка)
"""

import logging
from decimal import Decimal
from itertools import count
from typing import Iterable, Iterator

from src.core.engine import CalculatorCore

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SeriesDivergenceError(ArithmeticError):
    """
    Ряд не исчез за max_series_terms членов.

    Возникает на входах, для которых ряд практически не сходится
    при текущем scale (например, огромные аргументы Bessel J).
    """

    pass


# =============================================================================
# ЗНАМЕНАТЕЛИ
# =============================================================================


def odd_indices() -> Iterator[int]:
    """3, 5, 7, ... (ряды arctan и artanh)."""
    return count(3, 2)


def odd_factorials() -> Iterator[int]:
    """
    3!, 5!, 7!, ... (ряд синуса).

    Examples:
        >>> from itertools import islice
        >>> list(islice(odd_factorials(), 3))
        [6, 120, 5040]
    """
    factorial = 1
    for i in count(3, 2):
        factorial *= i * (i - 1)
        yield factorial


def factorials(start: int = 2) -> Iterator[int]:
    """
    start!, (start+1)!, ... (ряд экспоненты).

    Examples:
        >>> from itertools import islice
        >>> list(islice(factorials(), 4))
        [2, 6, 24, 120]
    """
    factorial = 1
    for i in range(2, start):
        factorial *= i
    for i in count(start):
        factorial *= i
        yield factorial


def bessel_denominators(order: int) -> Iterator[int]:
    """
    d_i = d_{i-1} · 4 · i · (order + i), d_0 = 1 (ряд Bessel J).

    d_k = 4^k · k! · (order + k)! / order!

    Examples:
        >>> from itertools import islice
        >>> list(islice(bessel_denominators(0), 3))
        [4, 64, 2304]
    """
    denominator = 1
    for i in count(1):
        denominator *= 4 * i * (order + i)
        yield denominator


# =============================================================================
# ЧЛЕНЫ РЯДА И СУММИРОВАНИЕ
# =============================================================================


def power_terms(
    core: CalculatorCore,
    seed: Decimal,
    multiplier: Decimal,
    denominators: Iterable[int],
) -> Iterator[Decimal]:
    """
    Члены ряда v_k = y_k / d_k, где y_k = y_{k-1} · multiplier, y_0 = seed.

    Степени не пересчитываются заново: каждый y получается из предыдущего.

    Args:
        core: Арифметическое ядро
        seed: y_0
        multiplier: Множитель (x, -x², y² ...)
        denominators: Знаменатели d_1, d_2, ...

    Yields:
        Члены ряда, приведённые к текущему scale
    """
    y = seed
    for denominator in denominators:
        y = core.mul(y, multiplier)
        yield core.div(y, denominator)


def sum_until_underflow(
    core: CalculatorCore,
    seed: Decimal,
    terms: Iterable[Decimal],
    label: str,
) -> Decimal:
    """
    Сумма seed + v_1 + v_2 + ... до первого нулевого члена.

    Args:
        core: Арифметическое ядро
        seed: Начальное значение суммы
        terms: Члены ряда (обычно power_terms)
        label: Имя ряда для логов и ошибок

    Returns:
        Сумма ряда при текущем scale

    Raises:
        SeriesDivergenceError: Если добавлено max_series_terms членов без исчезновения
    """
    limit = core.settings.max_series_terms
    total = seed
    added = 0

    for term in terms:
        if term.is_zero():
            logger.debug(
                "series %s converged: terms=%d scale=%d", label, added, core.scale
            )
            return total
        if added >= limit:
            raise SeriesDivergenceError(
                f"Series {label} did not underflow after {limit} terms "
                f"at scale={core.scale}"
            )
        total = core.add(total, term)
        added += 1

    return total
