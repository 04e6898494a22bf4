"""
Тесты для natural_log и exponential

Проверяемые инварианты:
1. Эталонные значения до текущего scale
2. ln(e^x) ≈ x и e^(ln x) ≈ x
3. ln(x <= 0) → sentinel (1 - 10^scale)/1, без exception
4. exponential возвращает scale вызывающего кода
5. Точность растёт вместе со scale
"""

from decimal import Decimal

import pytest

from src.core.domain import SCALE_MAX
from src.core.math import exponential, log_domain_sentinel, natural_log, reduce_exponential

E = Decimal("2.71828182845904523536028747135266249775724709369995")
LN2 = Decimal("0.69314718055994530941723212145817656807550013436025")

TOL = Decimal("1e-15")


def assert_close(actual: Decimal, expected: str | Decimal, tol: Decimal = TOL) -> None:
    """|actual - expected| <= tol."""
    diff = abs(actual - Decimal(expected))
    assert diff <= tol, f"{actual} differs from {expected} by {diff}"


# =============================================================================
# ТЕСТЫ: natural_log
# =============================================================================


class TestNaturalLog:
    """Тесты natural_log."""

    def test_one_exact(self, core):
        assert natural_log(1, core) == 0

    @pytest.mark.parametrize(
        "x, expected",
        [
            ("2", LN2),
            ("10", "2.30258509299404568401"),
            ("0.5", -LN2),
            ("1.1", "0.09531017980432486004"),
            ("0.001", "-6.90775527898213705205"),
        ],
    )
    def test_reference_values(self, core, x, expected):
        assert_close(natural_log(x, core), expected)

    def test_e(self, core):
        assert_close(natural_log(E, core), "1")

    def test_product_rule(self, core):
        """ln(6) ≈ ln(2) + ln(3)."""
        assert_close(natural_log(6, core), natural_log(2, core) + natural_log(3, core))


class TestLogDomainSentinel:
    """ln(x <= 0) возвращает sentinel, а не ошибку."""

    @pytest.mark.parametrize("x", ["0", "-1", "-0.5", "-1000"])
    def test_sentinel_exact(self, core, x):
        assert natural_log(x, core) == 1 - Decimal(10) ** 20

    def test_sentinel_follows_scale(self, make_core):
        core = make_core(scale=3)
        result = natural_log(0, core)
        assert result == -999
        assert core.to_text(result) == "-999.000"

    def test_sentinel_at_zero_scale(self, make_core):
        core = make_core(scale=0)
        assert natural_log(-2, core) == 0

    def test_sentinel_helper(self, make_core):
        assert log_domain_sentinel(make_core(scale=5)) == -99999


# =============================================================================
# ТЕСТЫ: exponential
# =============================================================================


class TestExponential:
    """Тесты exponential."""

    def test_zero_exact(self, core):
        assert exponential(0, core) == 1

    @pytest.mark.parametrize(
        "x, expected",
        [
            ("1", E),
            ("2", "7.38905609893065022723"),
            ("-1", "0.36787944117144232159"),
            ("0.5", "1.64872127070012814684"),
            ("-2.5", "0.08208499862389879516"),
        ],
    )
    def test_reference_values(self, core, x, expected):
        assert_close(exponential(x, core), expected)

    def test_large_argument_relative_error(self, core):
        """e^10: ошибка растёт со степенью, но относительная остаётся малой."""
        expected = Decimal("22026.46579480671651695790")
        assert abs(exponential(10, core) - expected) / expected < Decimal("1e-15")

    def test_scale_restored(self, core):
        exponential(50, core)
        assert core.scale == 20

    def test_maximum_scale(self, make_core):
        """Рабочий scale сведения превышает SCALE_MAX без ошибки."""
        core = make_core(scale=SCALE_MAX)
        result = exponential("0", core)
        assert result == 1
        assert result.as_tuple().exponent == -SCALE_MAX
        assert core.scale == SCALE_MAX

    def test_halving_at_maximum_scale(self, make_core):
        """Деление пополам при scale = SCALE_MAX (сведение без суммирования ряда)."""
        core = make_core(scale=SCALE_MAX)
        reduction = reduce_exponential(core, Decimal(3))
        assert reduction.factor == 4
        assert reduction.argument == Decimal("0.75")
        assert core.scale == SCALE_MAX

    def test_result_scale_follows_core(self, make_core):
        core = make_core(scale=6)
        result = exponential(1, core)
        assert result.as_tuple().exponent == -6
        assert_close(result, "2.718281", Decimal("1e-5"))

    def test_positive(self, core):
        assert exponential(-30, core) > 0


# =============================================================================
# ТЕСТЫ: взаимная обратимость
# =============================================================================


class TestRoundTrip:
    """ln(e^x) ≈ x и e^(ln x) ≈ x."""

    @pytest.mark.parametrize("x", ["0.5", "1", "2", "-1.5", "3.25"])
    def test_log_of_exp(self, core, x):
        assert_close(natural_log(exponential(x, core), core), x, Decimal("1e-14"))

    @pytest.mark.parametrize("x", ["0.3", "2", "10", "0.05"])
    def test_exp_of_log(self, core, x):
        assert_close(exponential(natural_log(x, core), core), x, Decimal("1e-14"))


class TestPrecisionGrowth:
    """Больший scale даёт больше верных цифр."""

    @pytest.mark.parametrize(
        "function, argument, reference",
        [(natural_log, 2, LN2), (exponential, 1, E)],
    )
    def test_error_decreases(self, make_core, function, argument, reference):
        errors = [
            abs(function(argument, make_core(scale=scale)) - reference)
            for scale in (10, 20, 35)
        ]
        assert errors[0] > errors[1] > errors[2]
        assert errors[2] < Decimal("1e-32")
