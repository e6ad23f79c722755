# app/modules/notifications/__init__.py
"""
Módulo de Notificaciones

- Emisor usado por ventas (STOCK_LOW, SALE); nunca propaga errores
- Bandeja del usuario: listar, no leídas, marcar leídas, eliminar
"""

from .router import router as notifications_router
from .service import NotificationService

__all__ = [
    "notifications_router",
    "NotificationService"
]
