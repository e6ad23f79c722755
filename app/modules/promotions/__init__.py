# app/modules/promotions/__init__.py
"""
Módulo de Promociones

- BUY_X_GET_Y, BUNDLE y FLAT_RATE evaluadas contra las líneas de la orden
- Administración de promociones con condiciones validadas por tipo
"""

from .router import router as promotions_router
from .service import PromotionService, PromotionEvaluation

__all__ = [
    "promotions_router",
    "PromotionService",
    "PromotionEvaluation"
]
