# app/modules/discounts/__init__.py
"""
Módulo de Descuentos

- Evaluación de códigos (PERCENTAGE / FIXED_AMOUNT) contra un subtotal
- Administración de códigos: listar, crear, actualizar, eliminar
"""

from .router import router as discounts_router
from .service import DiscountService, DiscountEvaluation

__all__ = [
    "discounts_router",
    "DiscountService",
    "DiscountEvaluation"
]
