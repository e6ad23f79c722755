# app/modules/sales/pricing.py
"""
Calculadora de precios de una venta.

Determinística y sin I/O: recibe los precios unitarios capturados al validar
la venta (nunca los relee del catálogo).
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Mapping

from app.shared.money import ZERO, quantize_money


@dataclass(frozen=True)
class PricedLine:
    """Línea de la venta con su precio unitario congelado"""
    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return quantize_money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    discount_amount: Decimal
    promotion_amount: Decimal
    total: Decimal


def price_lines(items: Iterable, unit_prices: Mapping[int, Decimal]) -> List[PricedLine]:
    """Asociar a cada línea (product_id, quantity) su precio unitario resuelto"""
    return [
        PricedLine(
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=quantize_money(unit_prices[item.product_id])
        )
        for item in items
    ]


def calculate_subtotal(lines: Iterable[PricedLine]) -> Decimal:
    """Σ precio unitario × cantidad"""
    subtotal = ZERO
    for line in lines:
        subtotal += line.line_total
    return quantize_money(subtotal)


def calculate_price(
    lines: Iterable[PricedLine],
    discount_amount: Decimal = ZERO,
    promotion_amount: Decimal = ZERO
) -> PriceBreakdown:
    """
    total = subtotal − descuento − promoción

    No se recorta a cero: un descuento mayor al subtotal deja el total
    negativo.
    """
    subtotal = calculate_subtotal(lines)
    discount_amount = quantize_money(discount_amount)
    promotion_amount = quantize_money(promotion_amount)

    return PriceBreakdown(
        subtotal=subtotal,
        discount_amount=discount_amount,
        promotion_amount=promotion_amount,
        total=quantize_money(subtotal - discount_amount - promotion_amount)
    )
