# app/modules/promotions/conditions.py
"""
Condiciones de promoción como unión etiquetada por tipo.

Cada variante lleva solo sus campos y se valida al construirse; la columna
JSON de la BD guarda el `model_dump(mode="json")` de la variante.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from app.shared.enums import PromotionType
from app.shared.money import percentage_of, quantize_money


class _Conditions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def discount_for(self, lines: Sequence) -> Optional[Decimal]:
        """Monto de la promoción para las líneas, o None si no aplica"""
        raise NotImplementedError


class BuyXGetYConditions(_Conditions):
    product_id: int
    required_quantity: int = Field(..., gt=0)
    free_quantity: int = Field(..., gt=0)

    def discount_for(self, lines: Sequence) -> Optional[Decimal]:
        match = next((line for line in lines if line.product_id == self.product_id), None)
        if match is None or match.quantity < self.required_quantity:
            return None
        return quantize_money(match.unit_price * self.free_quantity)


class BundleConditions(_Conditions):
    products: List[int] = Field(..., min_length=2)
    discount_percentage: Optional[Decimal] = Field(None, gt=0, le=100)
    fixed_price: Optional[Decimal] = Field(None, ge=0)

    @field_validator('products')
    @classmethod
    def distinct_products(cls, v: List[int]):
        if len(set(v)) != len(v):
            raise ValueError("Los productos del combo no pueden repetirse")
        return v

    @model_validator(mode='after')
    def percentage_xor_fixed_price(self):
        if (self.discount_percentage is None) == (self.fixed_price is None):
            raise ValueError("El combo requiere discount_percentage o fixed_price (solo uno)")
        return self

    def discount_for(self, lines: Sequence) -> Optional[Decimal]:
        bundle_ids = set(self.products)
        bundle_lines = [line for line in lines if line.product_id in bundle_ids]

        # Todo o nada: deben estar todos los productos del combo
        if {line.product_id for line in bundle_lines} != bundle_ids:
            return None

        original_price = sum((line.unit_price * line.quantity for line in bundle_lines), Decimal(0))
        if self.discount_percentage is not None:
            return percentage_of(original_price, self.discount_percentage)
        # Puede quedar negativo si fixed_price supera el precio original
        return quantize_money(original_price - self.fixed_price)


class FlatRateConditions(_Conditions):
    minimum_amount: Decimal = Field(..., ge=0)
    discount_amount: Decimal = Field(..., gt=0)

    def discount_for(self, lines: Sequence) -> Optional[Decimal]:
        order_amount = sum((line.unit_price * line.quantity for line in lines), Decimal(0))
        if order_amount < self.minimum_amount:
            return None
        return quantize_money(self.discount_amount)


PromotionConditions = Union[BuyXGetYConditions, BundleConditions, FlatRateConditions]

CONDITIONS_BY_TYPE = {
    PromotionType.BUY_X_GET_Y: BuyXGetYConditions,
    PromotionType.BUNDLE: BundleConditions,
    PromotionType.FLAT_RATE: FlatRateConditions,
}


def parse_conditions(promotion_type: PromotionType, raw: Dict[str, Any]) -> PromotionConditions:
    """Construir la variante que corresponde al tipo; ValueError si no es válida"""
    conditions_class = CONDITIONS_BY_TYPE[PromotionType(promotion_type)]
    try:
        return conditions_class.model_validate(raw or {})
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'conditions'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValueError(f"Condiciones inválidas para {PromotionType(promotion_type).value}: {problems}")
