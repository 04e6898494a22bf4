"""
PrecisionSettings — Конфигурация контекста точности

Описывает начальное состояние двух ячеек калькулятора:
- ibase: основание, в котором интерпретируются цифры литералов
- scale: количество дробных цифр, сохраняемых результатом арифметики

Immutable Pydantic модель. Текущие (изменяемые) значения ячеек хранит
CalculatorCore; модель задаёт только стартовые значения и политику.
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Основание, в котором записаны все внутренние литералы библиотеки
DECIMAL_BASE: Final[int] = 10

# Допустимый диапазон ibase (как в bc: цифры 0-9A-F)
IBASE_MIN: Final[int] = 2
IBASE_MAX: Final[int] = 16

# Верхняя граница scale
SCALE_MAX: Final[int] = 100_000

# scale по умолчанию (как у bc -l)
DEFAULT_SCALE: Final[int] = 20

# Страховочный лимит членов ряда
# Суммирование останавливается по исчезновению члена; лимит срабатывает
# только на входах, для которых ряд практически не сходится
DEFAULT_MAX_SERIES_TERMS: Final[int] = 100_000


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """Режим приведения результата к scale (значения совпадают с decimal.ROUND_*)"""

    TRUNCATE = "ROUND_DOWN"
    HALF_EVEN = "ROUND_HALF_EVEN"
    HALF_UP = "ROUND_HALF_UP"


# =============================================================================
# PRECISION SETTINGS MODEL
# =============================================================================


class PrecisionSettings(BaseModel):
    """
    Стартовая конфигурация контекста точности.

    Immutable модель (frozen=True): изменение ibase/scale во время вычислений
    выполняется через CalculatorCore, а не через эту модель.
    """

    ibase: int = Field(
        DECIMAL_BASE, ge=IBASE_MIN, le=IBASE_MAX, description="Основание литералов"
    )
    scale: int = Field(
        DEFAULT_SCALE, ge=0, le=SCALE_MAX, description="Число дробных цифр результата"
    )
    rounding: RoundingMode = Field(
        RoundingMode.TRUNCATE, description="Приведение к scale (bc усекает)"
    )
    max_series_terms: int = Field(
        DEFAULT_MAX_SERIES_TERMS, gt=0, description="Страховочный лимит членов ряда"
    )
    leak_ibase_on_log_domain_error: bool = Field(
        False,
        description=(
            "Как в bc -l: natural_log(x <= 0) "
            "не восстанавливает ibase"
        ),
    )

    model_config = {"frozen": True}  # Immutable

    def with_overrides(self, **changes) -> "PrecisionSettings":
        """
        Копия настроек с изменёнными полями (с повторной валидацией).

        Args:
            **changes: Новые значения полей

        Returns:
            Новый экземпляр PrecisionSettings
        """
        return PrecisionSettings(**{**self.model_dump(), **changes})
