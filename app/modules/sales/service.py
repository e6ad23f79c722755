# app/modules/sales/service.py
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.config.settings import Settings, settings
from app.core.exceptions import (
    BackOfficeError, ConflictError, InsufficientStockError, NotFoundError,
    StockConflictError, TransactionTimeoutError, UnexpectedError, ValidationError
)
from app.modules.discounts.repository import DiscountRepository
from app.modules.discounts.service import DiscountService
from app.modules.notifications.service import NotificationService
from app.modules.promotions.service import PromotionService
from app.shared.database.models import Sale, SaleItem
from app.shared.enums import NotificationType
from app.shared.money import ZERO
from .pricing import PriceBreakdown, PricedLine, calculate_price, calculate_subtotal, price_lines
from .repository import SalesRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestedItem:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class SaleDraft:
    """
    Venta validada y con precio, lista para persistirse.

    Nada de esto se ha escrito todavía en la BD.
    """
    user_id: int
    customer_id: Optional[int]
    lines: List[PricedLine]
    pricing: PriceBreakdown
    discount_id: Optional[int]
    promotion_id: Optional[int]
    started_at: float


class SalesService:
    """
    Coordinador de la transacción de venta
    """

    def __init__(
        self,
        db: Session,
        config: Settings = settings,
        notifier: Optional[NotificationService] = None
    ):
        self.db = db
        self.config = config
        self.repository = SalesRepository(db)
        self.discount_service = DiscountService(db)
        self.discount_repository = DiscountRepository(db)
        self.promotion_service = PromotionService(db)
        self.notifier = notifier or NotificationService(db)

    # ==================== REGISTRO DE VENTAS ====================

    def create_sale(
        self,
        user_id: int,
        items: Sequence,
        customer_id: Optional[int] = None,
        discount_code: Optional[str] = None,
        promotion_id: Optional[int] = None
    ) -> Sale:
        """
        Registrar una venta completa.

        1. Validar cliente, productos, cantidades y stock
        2. Calcular subtotal con los precios actuales (quedan congelados)
        3. Aplicar descuento y promoción si vienen
        4. Persistir venta + items y descontar stock en una sola transacción
        5. Notificar stock bajo y venta grande (sin afectar la venta)
        """
        draft = self.build_sale_draft(
            user_id=user_id,
            items=items,
            customer_id=customer_id,
            discount_code=discount_code,
            promotion_id=promotion_id
        )
        sale = self.commit_sale_draft(draft)

        self._emit_sale_notifications(sale)

        return sale

    def build_sale_draft(
        self,
        user_id: int,
        items: Sequence,
        customer_id: Optional[int] = None,
        discount_code: Optional[str] = None,
        promotion_id: Optional[int] = None
    ) -> SaleDraft:
        """
        Validar y calcular precios sin modificar nada en la BD
        """
        started_at = time.monotonic()

        # 1. Cliente (opcional)
        if customer_id is not None and not self.repository.get_customer(customer_id):
            raise NotFoundError(f"Cliente no encontrado: {customer_id}", reason="customer_not_found")

        # 2. Productos, cantidades y stock
        requested = self._merge_items(items)
        products = self.repository.get_products_by_ids(item.product_id for item in requested)

        for item in requested:
            product = products.get(item.product_id)
            if not product:
                raise NotFoundError(
                    f"Producto no encontrado: {item.product_id}",
                    reason="product_not_found"
                )
            if item.quantity > product.stock:
                raise InsufficientStockError(
                    f"Stock insuficiente para el producto {product.name}. "
                    f"Disponible: {product.stock}, Solicitado: {item.quantity}"
                )

        # 3. Subtotal con el precio vigente al momento de la venta
        lines = price_lines(requested, {pid: p.price for pid, p in products.items()})
        subtotal = calculate_subtotal(lines)

        # 4. Descuento
        discount_amount = ZERO
        discount_id = None
        if discount_code:
            evaluation = self.discount_service.evaluate(discount_code, subtotal)
            if not evaluation.valid:
                raise evaluation.to_error()
            discount_amount = evaluation.amount
            discount_id = evaluation.discount.id

        # 5. Promoción
        promotion_amount = ZERO
        if promotion_id is not None:
            evaluation = self.promotion_service.evaluate(promotion_id, lines)
            if not evaluation.valid:
                raise evaluation.to_error()
            promotion_amount = evaluation.amount

        # 6. Total
        pricing = calculate_price(lines, discount_amount, promotion_amount)

        return SaleDraft(
            user_id=user_id,
            customer_id=customer_id,
            lines=lines,
            pricing=pricing,
            discount_id=discount_id,
            promotion_id=promotion_id,
            started_at=started_at
        )

    def commit_sale_draft(self, draft: SaleDraft) -> Sale:
        """
        Persistir venta + items, descontar stock y registrar el uso del
        descuento. Todo o nada.
        """
        try:
            sale = Sale(
                user_id=draft.user_id,
                customer_id=draft.customer_id,
                subtotal=draft.pricing.subtotal,
                discount_amount=draft.pricing.discount_amount,
                promotion_amount=draft.pricing.promotion_amount,
                total=draft.pricing.total,
                discount_id=draft.discount_id,
                promotion_id=draft.promotion_id,
                items=[
                    SaleItem(
                        product_id=line.product_id,
                        position=position,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        subtotal=line.line_total
                    )
                    for position, line in enumerate(draft.lines)
                ]
            )
            self.repository.add_sale(sale)

            for line in draft.lines:
                if not self.repository.decrement_stock(line.product_id, line.quantity):
                    raise StockConflictError(
                        f"El stock del producto {line.product_id} cambió durante la venta. "
                        f"Intente nuevamente."
                    )

            if draft.discount_id is not None and not self.discount_repository.register_use(draft.discount_id):
                raise ConflictError(
                    "El descuento alcanzó el máximo de usos",
                    reason="discount_exhausted_uses"
                )

            elapsed = time.monotonic() - draft.started_at
            if elapsed > self.config.sale_transaction_timeout_seconds:
                raise TransactionTimeoutError(
                    "La venta tardó demasiado en procesarse. Intente nuevamente."
                )

            self.db.commit()

        except BackOfficeError:
            self.db.rollback()
            raise
        except OperationalError as e:
            # Espera por bloqueo agotada (timeout del engine)
            self.db.rollback()
            logger.error(f"❌ Venta del usuario {draft.user_id} sin completar a tiempo: {e}")
            raise TransactionTimeoutError(
                "La venta no pudo completarse a tiempo. Intente nuevamente."
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error registrando venta del usuario {draft.user_id}: {e}")
            raise UnexpectedError("Error registrando venta")

        logger.info(
            f"✅ Venta {sale.id} registrada - {len(draft.lines)} items - Total: {draft.pricing.total}"
        )
        return self.repository.get_sale_by_id(sale.id)

    # ==================== CONSULTAS ====================

    def list_sales(self) -> List[Sale]:
        return self.repository.get_all_sales()

    def get_sale(self, sale_id: int) -> Sale:
        sale = self.repository.get_sale_by_id(sale_id)
        if not sale:
            raise NotFoundError("Venta no encontrada", reason="sale_not_found")
        return sale

    # ==================== ELIMINACIÓN ====================

    def delete_sale(self, sale_id: int):
        """
        Eliminar venta devolviendo al stock las cantidades vendidas y el uso
        del descuento aplicado
        """
        sale = self.get_sale(sale_id)

        try:
            for item in sale.items:
                self.repository.increment_stock(item.product_id, item.quantity)

            if sale.discount_id is not None:
                self.discount_repository.release_use(sale.discount_id)

            self.repository.delete_sale(sale)
            self.db.commit()

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error eliminando venta {sale_id}: {e}")
            raise UnexpectedError("Error eliminando venta")

        logger.info(f"🗑️ Venta {sale_id} eliminada y stock restaurado")

    # ==================== HELPERS ====================

    def _merge_items(self, items: Sequence) -> List[RequestedItem]:
        """
        Validar cantidades y unir líneas repetidas del mismo producto,
        conservando el orden de aparición
        """
        if not items:
            raise ValidationError("Se requiere al menos un item", reason="empty_sale")

        merged = OrderedDict()
        for item in items:
            if item.quantity is None or item.quantity <= 0:
                raise ValidationError(
                    f"La cantidad debe ser mayor a 0 para el producto {item.product_id}",
                    reason="invalid_quantity"
                )
            merged[item.product_id] = merged.get(item.product_id, 0) + item.quantity

        return [RequestedItem(product_id=pid, quantity=qty) for pid, qty in merged.items()]

    def _emit_sale_notifications(self, sale: Sale):
        """
        Notificaciones posteriores al commit. Si fallan, la venta sigue en pie.
        """
        try:
            stocks = self.repository.get_product_stocks(item.product_id for item in sale.items)

            for item in sale.items:
                stock = stocks.get(item.product_id)
                if stock is not None and stock < self.config.low_stock_threshold:
                    self.notifier.create(
                        sale.user_id,
                        NotificationType.STOCK_LOW,
                        f"Stock bajo para {item.product.name} (SKU {item.product.sku}): "
                        f"quedan {stock} unidades"
                    )

            if sale.total > Decimal(self.config.large_sale_threshold):
                self.notifier.create(
                    sale.user_id,
                    NotificationType.SALE,
                    f"Venta grande registrada: #{sale.id} por ${sale.total}"
                )
        except Exception as e:
            logger.error(f"❌ Error emitiendo notificaciones de la venta {sale.id}: {e}")
