"""
CalculatorCore — Десятичное ядро арифметики с фиксированным scale

Эталонная реализация арифметического движка, на котором работают
трансцендентные функции src.core.math. Повторяет правила bc:
- значение хранит собственный scale (число дробных цифр, exponent = -scale)
- результат каждой операции приводится к scale по правилам bc
- две ячейки конфигурации: ibase (основание литералов) и scale

ПРАВИЛА SCALE (sa, sb — scale операндов, scale — текущая ячейка):
    add/sub:  max(sa, sb)                          (точно)
    mul:      min(sa + sb, max(scale, sa, sb))
    div:      scale
    mod:      a - div(a, b) * b, scale max(scale + sb, sa)
    power:    min(sa * n, max(scale, sa)); n < 0 → 1 / a^-n
    sqrt:     max(scale, sa)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. override() восстанавливает перекрытые ячейки на любом выходе (включая exception)
2. Вложенные override() восстанавливаются в стековом порядке
3. Деление и корень вычисляются точной целочисленной арифметикой с guard-цифрами,
   поэтому финальное приведение корректно для любого RoundingMode
4. Ошибки движка (деление на ноль, корень из отрицательного) не маскируются
"""

import logging
import math
import threading
from contextlib import contextmanager
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_DOWN, Context, Decimal
from typing import Final, Iterator, Optional, Union

from src.core.domain.precision import (
    DECIMAL_BASE,
    IBASE_MAX,
    IBASE_MIN,
    SCALE_MAX,
    PrecisionSettings,
)
from src.core.engine.literals import parse_literal

logger = logging.getLogger(__name__)

Operand = Union[Decimal, int, float, str]

# Дополнительные цифры при делении, корне и промежуточных степенях
GUARD_DIGITS: Final[int] = 10

# Контекст точных операций: сложение, умножение, квантование.
# Неточные операции (деление, корень) в этом контексте не выполняются.
_EXACT_CONTEXT: Final[Context] = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CalculatorCoreError(ArithmeticError):
    """Базовая ошибка арифметического ядра."""

    pass


class EngineDivisionByZero(CalculatorCoreError, ZeroDivisionError):
    """Деление (или остаток) на ноль."""

    pass


class EngineDomainError(CalculatorCoreError, ValueError):
    """Операция вне области определения (корень из отрицательного, дробная степень)."""

    pass


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def scale_of(value: Decimal) -> int:
    """
    Количество дробных цифр значения (сервис bc scale()).

    Examples:
        >>> scale_of(Decimal("1.50"))
        2
        >>> scale_of(Decimal("12"))
        0
    """
    return max(0, -value.as_tuple().exponent)


def _split(value: Decimal) -> tuple[int, int]:
    """Разложение value = coefficient * 10^exponent (coefficient со знаком)."""
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0
    return (-coefficient if sign else coefficient), exponent


def _from_scaled(coefficient: int, scale: int) -> Decimal:
    """Точное построение coefficient * 10^-scale."""
    return Decimal(f"{coefficient}E{-scale}")


def _round_05up(quotient: int, remainder: int) -> int:
    """
    Промежуточное округление ROUND_05UP для неотрицательного частного.

    После него любое финальное округление до меньшего числа цифр совпадает
    с округлением точного значения.
    """
    if remainder and quotient % 5 == 0:
        return quotient + 1
    return quotient


# =============================================================================
# CALCULATOR CORE
# =============================================================================


class CalculatorCore:
    """
    Арифметическое ядро с ячейками ibase/scale.

    Однопоточный объект: ячейки изменяются вызывающим кодом и функциями
    библиотеки. Для потоков используйте default_core() (thread-local).
    """

    def __init__(self, settings: Optional[PrecisionSettings] = None):
        """
        Инициализация ядра.

        Args:
            settings: Стартовая конфигурация (default: PrecisionSettings())
        """
        self._settings = settings or PrecisionSettings()
        self._ibase = self._settings.ibase
        self._scale = self._settings.scale

    # -------------------------------------------------------------------------
    # Ячейки конфигурации
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> PrecisionSettings:
        return self._settings

    @property
    def rounding(self) -> str:
        return self._settings.rounding.value

    @property
    def ibase(self) -> int:
        return self._ibase

    @ibase.setter
    def ibase(self, value: int) -> None:
        if not IBASE_MIN <= value <= IBASE_MAX:
            raise ValueError(f"ibase must be in [{IBASE_MIN}, {IBASE_MAX}], got {value}")
        self._ibase = value

    @property
    def scale(self) -> int:
        return self._scale

    @scale.setter
    def scale(self, value: int) -> None:
        if not 0 <= value <= SCALE_MAX:
            raise ValueError(f"scale must be in [0, {SCALE_MAX}], got {value}")
        self._scale = value

    @contextmanager
    def override(
        self, *, ibase: Optional[int] = None, scale: Optional[int] = None
    ) -> Iterator["CalculatorCore"]:
        """
        Временное изменение ячеек с гарантированным восстановлением.

        Восстанавливаются только перекрытые ячейки, ровно к значениям на входе,
        поэтому вложенные override() образуют стек.

        Args:
            ibase: Новое значение ibase (None — не менять)
            scale: Новое значение scale (None — не менять)

        Yields:
            Это же ядро
        """
        saved: dict[str, int] = {}
        try:
            if ibase is not None:
                saved["_ibase"] = self._ibase
                self.ibase = ibase
            if scale is not None:
                saved["_scale"] = self._scale
                self.scale = scale
            yield self
        finally:
            for attr, value in saved.items():
                setattr(self, attr, value)

    def decimal_literals(self):
        """Guard для тела функции: литералы интерпретируются в основании 10."""
        return self.override(ibase=DECIMAL_BASE)

    @contextmanager
    def working_scale(self, scale: int) -> Iterator["CalculatorCore"]:
        """
        Внутреннее повышение scale сверх SCALE_MAX.

        SCALE_MAX ограничивает только значения, задаваемые вызывающим кодом;
        рабочая точность алгоритмов может его превышать. Внутри guard'а scale
        можно дополнительно повышать через widen().

        Args:
            scale: Рабочий scale (>= 0)

        Yields:
            Это же ядро
        """
        if scale < 0:
            raise ValueError(f"working scale must be >= 0, got {scale}")
        saved = self._scale
        self._scale = scale
        try:
            yield self
        finally:
            self._scale = saved

    def widen(self, digits: int = 1) -> None:
        """Повышение scale на digits цифр; вызывается только внутри working_scale()."""
        self._scale += digits

    # -------------------------------------------------------------------------
    # Значения
    # -------------------------------------------------------------------------

    def number(self, value: Operand) -> Decimal:
        """
        Приведение операнда к значению ядра.

        Текст разбирается как литерал в ТЕКУЩЕМ ibase.

        Args:
            value: Decimal, int, float или текст литерала

        Returns:
            Decimal с exponent <= 0

        Raises:
            ValueError: NaN/Inf или неверный литерал
            TypeError: Неподдерживаемый тип
        """
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise ValueError(f"value must be finite, got {value}")
            if value.as_tuple().exponent > 0:
                return value.quantize(_ONE, context=_EXACT_CONTEXT)
            return value
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")
            return self.number(Decimal(repr(value)))
        if isinstance(value, str):
            return parse_literal(value, self._ibase)
        raise TypeError(f"Unsupported operand type: {type(value).__name__}")

    def _fit(self, value: Decimal, scale: int) -> Decimal:
        """Приведение значения к scale с режимом settings.rounding."""
        result = value.quantize(_from_scaled(1, scale), rounding=self.rounding, context=_EXACT_CONTEXT)
        if result.is_zero():
            # -0 не должен появляться в результатах
            return result.copy_abs()
        return result

    @staticmethod
    def to_text(value: Decimal) -> str:
        """Десятичная запись с фиксированной точкой."""
        return format(value, "f")

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, a: Operand, b: Operand) -> Decimal:
        a, b = self.number(a), self.number(b)
        return self._fit(_EXACT_CONTEXT.add(a, b), max(scale_of(a), scale_of(b)))

    def sub(self, a: Operand, b: Operand) -> Decimal:
        a, b = self.number(a), self.number(b)
        return self._fit(_EXACT_CONTEXT.subtract(a, b), max(scale_of(a), scale_of(b)))

    def mul(self, a: Operand, b: Operand) -> Decimal:
        a, b = self.number(a), self.number(b)
        sa, sb = scale_of(a), scale_of(b)
        result_scale = min(sa + sb, max(self._scale, sa, sb))
        return self._fit(_EXACT_CONTEXT.multiply(a, b), result_scale)

    def div(self, a: Operand, b: Operand) -> Decimal:
        """
        Деление с результатом в scale.

        Raises:
            EngineDivisionByZero: Если b == 0
        """
        a, b = self.number(a), self.number(b)
        return self._divide(a, b, self._scale)

    def _divide(self, a: Decimal, b: Decimal, scale: int) -> Decimal:
        if b.is_zero():
            raise EngineDivisionByZero(f"Division by zero: {a} / {b}")

        num, num_exp = _split(a)
        den, den_exp = _split(b)
        work_scale = scale + GUARD_DIGITS

        shift = num_exp - den_exp + work_scale
        if shift >= 0:
            num *= 10**shift
        else:
            den *= 10**-shift

        quotient, remainder = divmod(abs(num), abs(den))
        quotient = _round_05up(quotient, remainder)
        if (num < 0) != (den < 0):
            quotient = -quotient
        return self._fit(_from_scaled(quotient, work_scale), scale)

    def mod(self, a: Operand, b: Operand) -> Decimal:
        """
        Остаток bc: a - div(a, b) * b.

        При scale = 0 частное целое, и остаток — точное вычитание
        целого числа периодов.
        """
        a, b = self.number(a), self.number(b)
        quotient = self._divide(a, b, self._scale)
        remainder = _EXACT_CONTEXT.subtract(a, _EXACT_CONTEXT.multiply(quotient, b))
        return self._fit(remainder, max(self._scale + scale_of(b), scale_of(a)))

    def power(self, a: Operand, n: Operand) -> Decimal:
        """
        Целая степень a^n.

        Raises:
            EngineDomainError: Если показатель не целый
            EngineDivisionByZero: Если a == 0 и n < 0
        """
        a, exponent = self.number(a), self.number(n)
        if exponent != exponent.to_integral_value(rounding=ROUND_DOWN):
            raise EngineDomainError(f"Non-integer exponent: {exponent}")
        exponent = int(exponent)

        if exponent == 0:
            return _ONE

        sa = scale_of(a)
        magnitude = abs(exponent)
        result_scale = min(sa * magnitude, max(self._scale, sa))
        work_scale = result_scale + GUARD_DIGITS

        # square-and-multiply с промежуточным приведением к work_scale
        result: Optional[Decimal] = None
        base = a
        while magnitude:
            if magnitude & 1:
                if result is None:
                    result = base
                else:
                    result = self._fit(_EXACT_CONTEXT.multiply(result, base), work_scale)
            magnitude >>= 1
            if magnitude:
                base = self._fit(_EXACT_CONTEXT.multiply(base, base), work_scale)

        result = self._fit(result, result_scale)
        if exponent < 0:
            return self._divide(_ONE, result, self._scale)
        return result

    def sqrt(self, a: Operand) -> Decimal:
        """
        Квадратный корень со scale max(scale, sa).

        Raises:
            EngineDomainError: Если a < 0
        """
        a = self.number(a)
        if a < 0:
            raise EngineDomainError(f"Square root of negative number: {a}")

        result_scale = max(self._scale, scale_of(a))
        work_scale = result_scale + GUARD_DIGITS
        coefficient, exponent = _split(a)

        # sqrt(C * 10^e) * 10^w = sqrt(C * 10^(e + 2w)); e + 2w >= 0, т.к. w >= sa
        radicand = coefficient * 10 ** (exponent + 2 * work_scale)
        root = math.isqrt(radicand)
        root = _round_05up(root, radicand - root * root)
        return self._fit(_from_scaled(root, work_scale), result_scale)

    def truncate(self, a: Operand) -> Decimal:
        """Целая часть с усечением к нулю (x / 1 при scale = 0)."""
        result = self.number(a).quantize(_ONE, rounding=ROUND_DOWN, context=_EXACT_CONTEXT)
        return result.copy_abs() if result.is_zero() else result

    def negate(self, a: Operand) -> Decimal:
        a = self.number(a)
        return a if a.is_zero() else a.copy_negate()

    def absolute(self, a: Operand) -> Decimal:
        return self.number(a).copy_abs()

    def scale_of(self, a: Operand) -> int:
        return scale_of(self.number(a))


# =============================================================================
# DEFAULT CORE (thread-local)
# =============================================================================

_LOCAL = threading.local()


def default_core() -> CalculatorCore:
    """
    Ядро по умолчанию для текущего потока.

    Returns:
        CalculatorCore, создаваемый лениво с PrecisionSettings()
    """
    core = getattr(_LOCAL, "core", None)
    if core is None:
        core = CalculatorCore()
        _LOCAL.core = core
    return core


def reset_default_core(settings: Optional[PrecisionSettings] = None) -> CalculatorCore:
    """
    Замена ядра по умолчанию текущего потока.

    Args:
        settings: Конфигурация нового ядра

    Returns:
        Новое ядро по умолчанию
    """
    core = CalculatorCore(settings)
    _LOCAL.core = core
    logger.debug(
        "default core reset: ibase=%d scale=%d rounding=%s",
        core.ibase,
        core.scale,
        core.rounding,
    )
    return core
