# app/modules/sales/__init__.py
"""
Módulo de Ventas - Transacción de venta

- Validación de cliente, productos, cantidades y stock
- Precio congelado por item, descuento y promoción
- Persistencia atómica de venta, items y stock
- Notificaciones de stock bajo y ventas grandes

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Coordinador de la transacción
- pricing.py: Cálculo de subtotal y total
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as sales_router
from .service import SalesService, SaleDraft
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SaleDraft",
    "SalesRepository"
]
