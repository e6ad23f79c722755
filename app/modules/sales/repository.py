# app/modules/sales/repository.py
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc

from app.shared.database.models import Sale, SaleItem, Product, Customer

class SalesRepository:
    """
    Repositorio de ventas y operaciones de stock del catálogo.

    Los métodos que participan en la transacción de la venta no hacen commit;
    el servicio decide cuándo confirmar o revertir.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== CATÁLOGO ====================

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_products_by_ids(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        """
        Obtener productos indexados por ID (los inexistentes no aparecen)
        """
        product_ids = list(product_ids)
        if not product_ids:
            return {}

        products = self.db.query(Product).filter(Product.id.in_(product_ids)).all()
        return {product.id: product for product in products}

    def get_product_stocks(self, product_ids: Iterable[int]) -> Dict[int, int]:
        """
        Leer el stock actual directamente de la BD (sin el identity map)
        """
        product_ids = list(product_ids)
        if not product_ids:
            return {}

        rows = self.db.query(Product.id, Product.stock).filter(Product.id.in_(product_ids)).all()
        return {row.id: row.stock for row in rows}

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Decremento condicional y atómico: solo descuenta si alcanza el stock.
        Retorna False si otra venta ya consumió las unidades.
        """
        rows_updated = self.db.query(Product).filter(
            Product.id == product_id,
            Product.stock >= quantity
        ).update(
            {Product.stock: Product.stock - quantity},
            synchronize_session=False
        )
        return rows_updated == 1

    def increment_stock(self, product_id: int, quantity: int):
        self.db.query(Product).filter(Product.id == product_id).update(
            {Product.stock: Product.stock + quantity},
            synchronize_session=False
        )

    # ==================== CLIENTES ====================

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    # ==================== VENTAS ====================

    def add_sale(self, sale: Sale) -> Sale:
        """
        Agregar venta con sus items y obtener IDs sin hacer commit
        """
        self.db.add(sale)
        self.db.flush()
        return sale

    def get_sale_by_id(self, sale_id: int) -> Optional[Sale]:
        """
        Obtener venta con items, productos, usuario y cliente
        """
        return self.db.query(Sale).options(
            joinedload(Sale.items).joinedload(SaleItem.product),
            joinedload(Sale.user),
            joinedload(Sale.customer)
        ).filter(Sale.id == sale_id).first()

    def get_all_sales(self) -> List[Sale]:
        """
        Ventas más recientes primero
        """
        return self.db.query(Sale).options(
            joinedload(Sale.items).joinedload(SaleItem.product),
            joinedload(Sale.user),
            joinedload(Sale.customer)
        ).order_by(desc(Sale.created_at), desc(Sale.id)).all()

    def delete_sale(self, sale: Sale):
        """
        Eliminar venta e items (cascade), sin commit
        """
        self.db.delete(sale)
        self.db.flush()
