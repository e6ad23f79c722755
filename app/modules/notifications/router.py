# app/modules/notifications/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from app.shared.database.models import User
from .service import NotificationService
from .schemas import NotificationResponse, MessageResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])

@router.get("", response_model=List[NotificationResponse])
async def get_my_notifications(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Todas las notificaciones del usuario, más recientes primero
    """
    service = NotificationService(db)
    return service.get_user_notifications(current_user.id)

@router.get("/unread", response_model=List[NotificationResponse])
async def get_my_unread_notifications(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = NotificationService(db)
    return service.get_unread_notifications(current_user.id)

@router.put("/read-all", response_model=MessageResponse)
async def mark_all_notifications_as_read(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = NotificationService(db)
    updated = service.mark_all_as_read(current_user.id)
    return {"message": f"{updated} notificaciones marcadas como leídas"}

@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_as_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = NotificationService(db)
    return service.mark_as_read(notification_id, current_user.id)

@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = NotificationService(db)
    service.delete_notification(notification_id, current_user.id)
    return {"message": "Notificación eliminada exitosamente"}
