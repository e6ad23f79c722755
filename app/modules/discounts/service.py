# app/modules/discounts/service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import (
    BackOfficeError, BusinessRuleError, ConflictError, NotFoundError, ValidationError
)
from app.shared.database.models import Discount
from app.shared.enums import DiscountType
from app.shared.money import ZERO, percentage_of, quantize_money, to_decimal
from app.shared.time import utc_now
from .repository import DiscountRepository
from .schemas import (
    DiscountCreate, DiscountUpdate, check_discount_value, check_validity_window
)

logger = logging.getLogger(__name__)

# Razones de rechazo de un descuento
NOT_FOUND = "not_found"
INACTIVE = "inactive"
OUT_OF_WINDOW = "out_of_window"
BELOW_MINIMUM = "below_minimum"
EXHAUSTED_USES = "exhausted_uses"


@dataclass(frozen=True)
class DiscountEvaluation:
    """
    Resultado de evaluar un código contra un subtotal.

    valid=True trae el descuento y el monto; valid=False trae la razón y un
    mensaje para el usuario.
    """
    valid: bool
    discount: Optional[Discount] = None
    amount: Decimal = ZERO
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str, message: str, discount: Optional[Discount] = None):
        return cls(valid=False, discount=discount, reason=reason, message=message)

    def to_error(self) -> BackOfficeError:
        """Error 400 equivalente para el flujo de venta"""
        error_reason = f"discount_{self.reason}"
        if self.reason == EXHAUSTED_USES:
            return ConflictError(self.message, reason=error_reason)
        return BusinessRuleError(self.message, reason=error_reason)


def calculate_discount_amount(discount: Discount, subtotal: Decimal) -> Decimal:
    """
    PERCENTAGE: subtotal × valor / 100. FIXED_AMOUNT: el valor.
    Sin recorte al subtotal.
    """
    if discount.type == DiscountType.PERCENTAGE:
        return percentage_of(subtotal, discount.value)
    return quantize_money(discount.value)


class DiscountService:
    """
    Evaluador y administración de códigos de descuento
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = DiscountRepository(db)

    # ==================== EVALUACIÓN ====================

    def evaluate(
        self,
        code: str,
        subtotal: Decimal,
        now: Optional[datetime] = None
    ) -> DiscountEvaluation:
        """
        Validar un código contra el subtotal de la orden.

        Solo lectura: el contador de usos no se toca aquí, lo incrementa la
        transacción de la venta.
        """
        now = now or utc_now()
        subtotal = to_decimal(subtotal)
        code = code.strip()

        discount = self.repository.get_discount_by_code(code)
        if not discount:
            return DiscountEvaluation.rejected(NOT_FOUND, "Código de descuento inválido")

        if not discount.is_active:
            return DiscountEvaluation.rejected(INACTIVE, "El descuento no está activo", discount)

        if now < discount.start_date or now > discount.end_date:
            return DiscountEvaluation.rejected(
                OUT_OF_WINDOW, "El descuento no es válido para la fecha actual", discount
            )

        if discount.min_purchase is not None and subtotal < discount.min_purchase:
            return DiscountEvaluation.rejected(
                BELOW_MINIMUM,
                f"Se requiere una compra mínima de ${quantize_money(discount.min_purchase)}",
                discount
            )

        if discount.max_uses is not None and discount.used_count >= discount.max_uses:
            return DiscountEvaluation.rejected(
                EXHAUSTED_USES, "El descuento alcanzó el máximo de usos", discount
            )

        return DiscountEvaluation(
            valid=True,
            discount=discount,
            amount=calculate_discount_amount(discount, subtotal)
        )

    # ==================== ADMINISTRACIÓN ====================

    def get_all_discounts(self) -> List[Discount]:
        return self.repository.get_all_discounts()

    def get_discount(self, discount_id: int) -> Discount:
        discount = self.repository.get_discount_by_id(discount_id)
        if not discount:
            raise NotFoundError("Descuento no encontrado")
        return discount

    def create_discount(self, discount_data: DiscountCreate) -> Discount:
        if self.repository.code_exists(discount_data.code):
            raise ValidationError("El código de descuento ya existe", reason="duplicate_code")

        discount = self.repository.create_discount(discount_data.model_dump())
        logger.info(f"✅ Descuento {discount.code} creado")
        return discount

    def update_discount(self, discount_id: int, discount_data: DiscountUpdate) -> Discount:
        discount = self.get_discount(discount_id)
        changes = discount_data.model_dump(exclude_unset=True)

        if "code" in changes and changes["code"] != discount.code:
            if self.repository.code_exists(changes["code"], exclude_id=discount.id):
                raise ValidationError("El código de descuento ya existe", reason="duplicate_code")

        # Validar el registro tal como quedaría
        new_type = changes.get("type", discount.type)
        new_value = changes.get("value", discount.value)
        try:
            check_discount_value(new_type, to_decimal(new_value))
            check_validity_window(
                changes.get("start_date", discount.start_date),
                changes.get("end_date", discount.end_date)
            )
        except ValueError as e:
            raise ValidationError(str(e))

        return self.repository.update_discount(discount, changes)

    def delete_discount(self, discount_id: int):
        discount = self.get_discount(discount_id)

        if self.repository.count_sales(discount.id) > 0:
            raise BusinessRuleError(
                "No se puede eliminar un descuento con ventas asociadas",
                reason="discount_in_use"
            )

        self.repository.delete_discount(discount)
