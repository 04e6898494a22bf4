"""
Общие fixtures для тестов bc-mathlib.
"""

import pytest

from src.core.domain import PrecisionSettings
from src.core.engine import CalculatorCore
from src.core.math import clear_pi_cache


@pytest.fixture
def core() -> CalculatorCore:
    """Свежее ядро с настройками по умолчанию (scale=20, ibase=10)."""
    return CalculatorCore(PrecisionSettings())


@pytest.fixture
def make_core():
    """Фабрика ядер с изменёнными настройками."""

    def _make(**changes) -> CalculatorCore:
        return CalculatorCore(PrecisionSettings(**changes))

    return _make


@pytest.fixture(autouse=True)
def _fresh_pi_cache():
    """Каждый тест начинает с пустым кэшем π."""
    clear_pi_cache()
    yield
    clear_pi_cache()
