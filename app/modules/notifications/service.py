# app/modules/notifications/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.shared.database.models import Notification
from app.shared.enums import NotificationType
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

class NotificationService:
    """
    Emisor de notificaciones y bandeja del usuario
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = NotificationRepository(db)

    # ==================== EMISIÓN ====================

    def create(
        self,
        user_id: int,
        notification_type: NotificationType,
        message: str
    ) -> Optional[Notification]:
        """
        Crear notificación. Nunca lanza: si falla se registra y retorna None,
        la operación que la originó no se ve afectada.
        """
        try:
            return self.repository.create_notification(user_id, notification_type, message)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error creando notificación {notification_type.value} para usuario {user_id}: {e}")
            return None

    # ==================== BANDEJA ====================

    def get_user_notifications(self, user_id: int) -> List[Notification]:
        return self.repository.get_user_notifications(user_id)

    def get_unread_notifications(self, user_id: int) -> List[Notification]:
        return self.repository.get_user_notifications(user_id, unread_only=True)

    def mark_as_read(self, notification_id: int, user_id: int) -> Notification:
        notification = self._get_owned(notification_id, user_id)
        return self.repository.mark_as_read(notification)

    def mark_all_as_read(self, user_id: int) -> int:
        return self.repository.mark_all_as_read(user_id)

    def delete_notification(self, notification_id: int, user_id: int):
        notification = self._get_owned(notification_id, user_id)
        self.repository.delete_notification(notification)

    def _get_owned(self, notification_id: int, user_id: int) -> Notification:
        notification = self.repository.get_user_notification(notification_id, user_id)
        if not notification:
            raise NotFoundError("Notificación no encontrada")
        return notification
