# app/modules/promotions/repository.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.shared.database.models import Promotion, Sale

class PromotionRepository:
    """
    Repositorio de promociones
    """

    def __init__(self, db: Session):
        self.db = db

    def get_promotion_by_id(self, promotion_id: int) -> Optional[Promotion]:
        return self.db.query(Promotion).filter(Promotion.id == promotion_id).first()

    def get_all_promotions(self) -> List[Promotion]:
        return self.db.query(Promotion).order_by(Promotion.id).all()

    def count_sales(self, promotion_id: int) -> int:
        return self.db.query(func.count(Sale.id)).filter(
            Sale.promotion_id == promotion_id
        ).scalar() or 0

    def create_promotion(self, promotion_data: Dict[str, Any]) -> Promotion:
        promotion = Promotion(**promotion_data, is_active=True)

        self.db.add(promotion)
        self.db.commit()
        self.db.refresh(promotion)

        return promotion

    def update_promotion(self, promotion: Promotion, changes: Dict[str, Any]) -> Promotion:
        for key, value in changes.items():
            setattr(promotion, key, value)

        self.db.commit()
        self.db.refresh(promotion)

        return promotion

    def delete_promotion(self, promotion: Promotion):
        self.db.delete(promotion)
        self.db.commit()
