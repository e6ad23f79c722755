# app/modules/notifications/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.shared.database.models import Notification
from app.shared.enums import NotificationType

class NotificationRepository:
    """
    Repositorio de notificaciones por usuario
    """

    def __init__(self, db: Session):
        self.db = db

    def create_notification(
        self,
        user_id: int,
        notification_type: NotificationType,
        message: str
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            message=message,
            is_read=False
        )

        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)

        return notification

    def get_user_notifications(self, user_id: int, unread_only: bool = False) -> List[Notification]:
        """
        Notificaciones del usuario, más recientes primero
        """
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))

        return query.order_by(desc(Notification.created_at), desc(Notification.id)).all()

    def get_user_notification(self, notification_id: int, user_id: int) -> Optional[Notification]:
        return self.db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).first()

    def mark_as_read(self, notification: Notification) -> Notification:
        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_as_read(self, user_id: int) -> int:
        rows_updated = self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        ).update({"is_read": True}, synchronize_session=False)

        self.db.commit()
        return rows_updated

    def delete_notification(self, notification: Notification):
        self.db.delete(notification)
        self.db.commit()
