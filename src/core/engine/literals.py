"""
Literals — Разбор числовых литералов в основании ibase

Литерал: необязательный '-', цифры 0-9A-F, необязательная дробная часть.
Как в bc, цифры A-F принимаются при любом основании (значения 10..15).

Целая часть переводится точно. Дробная часть из k цифр в основании,
отличном от 10, переводится с усечением до k десятичных знаков.
"""

import re
from decimal import Decimal
from typing import Final

_LITERAL_RE: Final = re.compile(r"^(-?)([0-9A-F]*)(?:\.([0-9A-F]*))?$")

_DIGIT_VALUES: Final[dict[str, int]] = {ch: i for i, ch in enumerate("0123456789ABCDEF")}


class LiteralSyntaxError(ValueError):
    """Текст не является числовым литералом."""

    pass


def parse_literal(text: str, base: int) -> Decimal:
    """
    Перевод литерала в Decimal со scale = числу дробных цифр.

    Args:
        text: Литерал (например, '1.2', '-FF', '.5')
        base: Основание (ibase)

    Returns:
        Decimal с exponent = -(число дробных цифр)

    Raises:
        LiteralSyntaxError: Если текст не является литералом

    Examples:
        >>> parse_literal("1.2", 10)
        Decimal('1.2')
        >>> parse_literal("FF", 16)
        Decimal('255')
        >>> parse_literal("1.8", 16)
        Decimal('1.5')
    """
    match = _LITERAL_RE.match(text.strip())
    if match is None:
        raise LiteralSyntaxError(f"Invalid numeric literal: {text!r}")

    sign, int_digits, frac_digits = match.groups()
    frac_digits = frac_digits or ""
    if not int_digits and not frac_digits:
        raise LiteralSyntaxError(f"Invalid numeric literal: {text!r}")

    integer = 0
    for ch in int_digits:
        integer = integer * base + _DIGIT_VALUES[ch]

    scale = len(frac_digits)
    numerator = 0
    for ch in frac_digits:
        numerator = numerator * base + _DIGIT_VALUES[ch]
    # numerator / base^scale, усечённое до scale десятичных знаков
    fraction = numerator * 10**scale // base**scale

    coefficient = integer * 10**scale + fraction
    if sign and coefficient:
        coefficient = -coefficient
    # Конструктор из строки точен и не зависит от контекста decimal
    return Decimal(f"{coefficient}E{-scale}")
