# app/shared/money.py
"""
Aritmética monetaria en Decimal.

Los montos se redondean a centavos (ROUND_HALF_UP), la misma precisión de las
columnas Numeric(12, 2), para que lo calculado sea igual a lo persistido.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convertir a Decimal sin pasar por float"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Number, percentage: Number) -> Decimal:
    """amount × percentage / 100, redondeado a centavos"""
    return quantize_money(to_decimal(amount) * to_decimal(percentage) / Decimal(100))
