"""
Тесты для дисциплины ячеек ibase/scale вокруг функций библиотеки

Проверяемые инварианты:
1. ibase вызывающего кода восстанавливается после каждой функции
2. Аргумент разбирается в ibase вызывающего кода, тело работает в base 10
3. Восстановление происходит и при ошибке (SeriesDivergenceError)
4. ln(x <= 0): ibase восстанавливается по умолчанию; утечка как в bc -l
   воспроизводится настройкой leak_ibase_on_log_domain_error
5. Точность растёт вместе со scale для каждой функции
6. Базовый сценарий при scale = 20
"""

from decimal import Decimal

import pytest

from src.core.math import (
    SeriesDivergenceError,
    arctangent,
    bessel_j,
    cosine,
    exponential,
    natural_log,
    sine,
)

PI = Decimal("3.14159265358979323846264338327950288419716939937510")
E = Decimal("2.71828182845904523536028747135266249775724709369995")
LN2 = Decimal("0.69314718055994530941723212145817656807550013436025")
SIN1 = Decimal("0.84147098480789650665250232163029899962256306079837")
COS1 = Decimal("0.54030230586813971740093660744297660373231042061792")
J0_1 = Decimal("0.76519768655796655144971752610266322090927428975532")

SINGLE_ARGUMENT_CALLS = [
    pytest.param(sine, id="sine"),
    pytest.param(cosine, id="cosine"),
    pytest.param(arctangent, id="arctangent"),
    pytest.param(natural_log, id="natural_log"),
    pytest.param(exponential, id="exponential"),
]


# =============================================================================
# ТЕСТЫ: ibase
# =============================================================================


class TestIbaseRestored:
    """ibase вызывающего кода не меняется."""

    @pytest.mark.parametrize("function", SINGLE_ARGUMENT_CALLS)
    def test_restored_after_call(self, make_core, function):
        core = make_core(ibase=16)
        function("2", core)
        assert core.ibase == 16
        assert core.scale == 20

    def test_restored_after_bessel(self, make_core):
        core = make_core(ibase=16)
        bessel_j("1", "2", core)
        assert core.ibase == 16

    @pytest.mark.parametrize("function", SINGLE_ARGUMENT_CALLS)
    def test_same_value_in_any_ibase(self, make_core, function):
        """Одноцифровой литерал одинаков во всех основаниях."""
        assert function("3", make_core(ibase=16)) == function("3", make_core(ibase=10))

    def test_argument_parsed_in_caller_base(self, make_core):
        """'10' при ibase = 16 означает шестнадцать."""
        assert arctangent("10", make_core(ibase=16)) == arctangent(16, make_core())
        assert sine("A", make_core(ibase=16)) == sine(10, make_core())

    def test_fraction_parsed_in_caller_base(self, make_core):
        """0.8 (hex) = 0.5."""
        assert exponential("0.8", make_core(ibase=16)) == exponential("0.5", make_core())

    def test_nested_calls(self, make_core):
        core = make_core(ibase=16)
        value = cosine(cosine("1", core), core)
        assert core.ibase == 16
        assert abs(value - Decimal("0.8575532158")) < Decimal("1e-9")

    def test_restored_on_series_divergence(self, make_core):
        core = make_core(ibase=16, max_series_terms=1)
        with pytest.raises(SeriesDivergenceError):
            sine("1", core)
        assert core.ibase == 16
        assert core.scale == 20

    def test_exponential_restores_scale_on_divergence(self, make_core):
        core = make_core(ibase=8, max_series_terms=1)
        with pytest.raises(SeriesDivergenceError):
            exponential("7", core)
        assert core.ibase == 8
        assert core.scale == 20


class TestLogDomainIbase:
    """Обе трактовки ln(x <= 0): восстановление и утечка ibase."""

    def test_restored_by_default(self, make_core):
        core = make_core(ibase=16)
        result = natural_log("0", core)
        assert result == 1 - Decimal(10) ** 20
        assert core.ibase == 16

    def test_leak_when_enabled(self, make_core):
        core = make_core(ibase=16, leak_ibase_on_log_domain_error=True)
        result = natural_log("-1", core)
        assert result == 1 - Decimal(10) ** 20
        assert core.ibase == 10

    def test_leak_only_on_domain_violation(self, make_core):
        core = make_core(ibase=16, leak_ibase_on_log_domain_error=True)
        natural_log("2", core)
        assert core.ibase == 16

    def test_leak_changes_later_parsing(self, make_core):
        """После утечки '10' снова читается как десять."""
        core = make_core(ibase=16, leak_ibase_on_log_domain_error=True)
        natural_log("0", core)
        assert core.number("10") == 10


# =============================================================================
# ТЕСТЫ: Рост точности
# =============================================================================


def _error(function, arguments, reference, scale, make_core):
    return abs(function(*arguments, core=make_core(scale=scale)) - reference)


class TestPrecisionGrows:
    """Больший scale даёт больше верных цифр для каждой функции."""

    @pytest.mark.parametrize(
        "function, arguments, reference",
        [
            pytest.param(sine, ("1",), SIN1, id="sine"),
            pytest.param(cosine, ("1",), COS1, id="cosine"),
            pytest.param(arctangent, ("1",), PI / 4, id="arctangent"),
            pytest.param(natural_log, ("2",), LN2, id="natural_log"),
            pytest.param(exponential, ("1",), E, id="exponential"),
            pytest.param(bessel_j, ("0", "1"), J0_1, id="bessel_j"),
        ],
    )
    def test_error_shrinks(self, make_core, function, arguments, reference):
        coarse = _error(function, arguments, reference, 10, make_core)
        fine = _error(function, arguments, reference, 30, make_core)
        assert fine < coarse
        assert fine < Decimal("1e-26")


# =============================================================================
# ТЕСТЫ: Базовый сценарий
# =============================================================================


class TestScaleTwentyScenario:
    """Значения в опорных точках при scale = 20."""

    def test_exact_values(self, core):
        assert sine("0", core) == 0
        assert arctangent("0", core) == 0
        assert exponential("0", core) == 1
        assert natural_log("1", core) == 0
        assert bessel_j("0", "0", core) == 1

    def test_cosine_of_zero(self, core):
        """cos(0) = sin(π/2) с π, усечённым до scale: отличие лишь в последних разрядах."""
        assert abs(cosine("0", core) - 1) < Decimal("1e-18")
