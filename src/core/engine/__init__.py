"""
Engine — арифметическое ядро калькулятора

Десятичная арифметика с фиксированным scale, ячейки ibase/scale
и guard для их временного изменения.
"""

from src.core.engine.calculator import (
    GUARD_DIGITS,
    CalculatorCore,
    CalculatorCoreError,
    EngineDivisionByZero,
    EngineDomainError,
    Operand,
    default_core,
    reset_default_core,
    scale_of,
)
from src.core.engine.literals import LiteralSyntaxError, parse_literal

__all__ = [
    # Constants
    "GUARD_DIGITS",
    # Core
    "CalculatorCore",
    "Operand",
    "default_core",
    "reset_default_core",
    "scale_of",
    # Literals
    "parse_literal",
    # Exceptions
    "CalculatorCoreError",
    "EngineDivisionByZero",
    "EngineDomainError",
    "LiteralSyntaxError",
]
