# app/modules/promotions/service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from app.core.exceptions import BackOfficeError, BusinessRuleError, NotFoundError, ValidationError
from app.shared.database.models import Promotion
from app.shared.money import ZERO
from app.shared.time import utc_now
from .conditions import parse_conditions
from .repository import PromotionRepository
from .schemas import PromotionCreate, PromotionUpdate

logger = logging.getLogger(__name__)

# Razones de rechazo de una promoción
NOT_FOUND = "not_found"
INACTIVE = "inactive"
OUT_OF_WINDOW = "out_of_window"
INVALID_CONDITIONS = "invalid_conditions"
CONDITIONS_NOT_MET = "conditions_not_met"


@dataclass(frozen=True)
class PromotionEvaluation:
    valid: bool
    promotion: Optional[Promotion] = None
    amount: Decimal = ZERO
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str, message: str, promotion: Optional[Promotion] = None):
        return cls(valid=False, promotion=promotion, reason=reason, message=message)

    def to_error(self) -> BackOfficeError:
        return BusinessRuleError(self.message, reason=f"promotion_{self.reason}")


class PromotionService:
    """
    Evaluador y administración de promociones
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = PromotionRepository(db)

    # ==================== EVALUACIÓN ====================

    def evaluate(
        self,
        promotion_id: int,
        lines: Sequence,
        now: Optional[datetime] = None
    ) -> PromotionEvaluation:
        """
        Validar una promoción contra las líneas concretas de la orden.

        `lines` son líneas con precio (product_id, quantity, unit_price).
        No persiste nada.
        """
        now = now or utc_now()

        promotion = self.repository.get_promotion_by_id(promotion_id)
        if not promotion:
            return PromotionEvaluation.rejected(NOT_FOUND, "Promoción inválida")

        if not promotion.is_active:
            return PromotionEvaluation.rejected(INACTIVE, "La promoción no está activa", promotion)

        if now < promotion.start_date or now > promotion.end_date:
            return PromotionEvaluation.rejected(
                OUT_OF_WINDOW, "La promoción no es válida para la fecha actual", promotion
            )

        try:
            conditions = parse_conditions(promotion.type, promotion.conditions)
        except ValueError as e:
            logger.error(f"❌ Promoción {promotion.id} con condiciones inválidas: {e}")
            return PromotionEvaluation.rejected(
                INVALID_CONDITIONS, "La promoción está mal configurada", promotion
            )

        amount = conditions.discount_for(lines)
        if amount is None:
            return PromotionEvaluation.rejected(
                CONDITIONS_NOT_MET,
                "La orden no cumple las condiciones de la promoción",
                promotion
            )

        return PromotionEvaluation(valid=True, promotion=promotion, amount=amount)

    # ==================== ADMINISTRACIÓN ====================

    def get_all_promotions(self) -> List[Promotion]:
        return self.repository.get_all_promotions()

    def get_promotion(self, promotion_id: int) -> Promotion:
        promotion = self.repository.get_promotion_by_id(promotion_id)
        if not promotion:
            raise NotFoundError("Promoción no encontrada")
        return promotion

    def create_promotion(self, promotion_data: PromotionCreate) -> Promotion:
        promotion = self.repository.create_promotion(promotion_data.model_dump())
        logger.info(f"✅ Promoción {promotion.id} ({promotion.type.value}) creada")
        return promotion

    def update_promotion(self, promotion_id: int, promotion_data: PromotionUpdate) -> Promotion:
        promotion = self.get_promotion(promotion_id)
        changes = promotion_data.model_dump(exclude_unset=True)

        # Tipo y condiciones se validan juntos, aunque solo cambie uno
        if "type" in changes or "conditions" in changes:
            new_type = changes.get("type", promotion.type)
            new_conditions = changes.get("conditions", promotion.conditions)
            try:
                changes["conditions"] = parse_conditions(new_type, new_conditions).model_dump(mode="json")
            except ValueError as e:
                raise ValidationError(str(e))

        if changes.get("start_date", promotion.start_date) > changes.get("end_date", promotion.end_date):
            raise ValidationError("La fecha de inicio debe ser anterior a la fecha de fin")

        return self.repository.update_promotion(promotion, changes)

    def delete_promotion(self, promotion_id: int):
        promotion = self.get_promotion(promotion_id)

        if self.repository.count_sales(promotion.id) > 0:
            raise BusinessRuleError(
                "No se puede eliminar una promoción con ventas asociadas",
                reason="promotion_in_use"
            )

        self.repository.delete_promotion(promotion)
