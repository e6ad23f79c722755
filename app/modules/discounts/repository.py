# app/modules/discounts/repository.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.shared.database.models import Discount, Sale

class DiscountRepository:
    """
    Repositorio de códigos de descuento
    """

    def __init__(self, db: Session):
        self.db = db

    def get_discount_by_id(self, discount_id: int) -> Optional[Discount]:
        return self.db.query(Discount).filter(Discount.id == discount_id).first()

    def get_discount_by_code(self, code: str) -> Optional[Discount]:
        return self.db.query(Discount).filter(Discount.code == code).first()

    def code_exists(self, code: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Discount.id).filter(Discount.code == code)
        if exclude_id is not None:
            query = query.filter(Discount.id != exclude_id)
        return query.first() is not None

    def get_all_discounts(self) -> List[Discount]:
        return self.db.query(Discount).order_by(Discount.id).all()

    def count_sales(self, discount_id: int) -> int:
        return self.db.query(func.count(Sale.id)).filter(
            Sale.discount_id == discount_id
        ).scalar() or 0

    def create_discount(self, discount_data: Dict[str, Any]) -> Discount:
        discount = Discount(**discount_data, used_count=0, is_active=True)

        self.db.add(discount)
        self.db.commit()
        self.db.refresh(discount)

        return discount

    def update_discount(self, discount: Discount, changes: Dict[str, Any]) -> Discount:
        for key, value in changes.items():
            setattr(discount, key, value)

        self.db.commit()
        self.db.refresh(discount)

        return discount

    def delete_discount(self, discount: Discount):
        self.db.delete(discount)
        self.db.commit()

    def register_use(self, discount_id: int) -> bool:
        """
        Incrementar used_count de forma condicional, sin commit (forma parte
        de la transacción de la venta). Retorna False si ya no quedan usos.
        """
        rows_updated = self.db.query(Discount).filter(
            Discount.id == discount_id,
            (Discount.max_uses.is_(None)) | (Discount.used_count < Discount.max_uses)
        ).update(
            {Discount.used_count: Discount.used_count + 1},
            synchronize_session=False
        )
        return rows_updated == 1

    def release_use(self, discount_id: int):
        """
        Devolver un uso al eliminar una venta, sin bajar de 0 y sin commit
        """
        self.db.query(Discount).filter(
            Discount.id == discount_id,
            Discount.used_count > 0
        ).update(
            {Discount.used_count: Discount.used_count - 1},
            synchronize_session=False
        )
