# app/core/auth/dependencies.py
"""
Identidad del usuario que actúa.

La autenticación vive fuera de este servicio (gateway); aquí solo se resuelve
el usuario ya autenticado a partir del encabezado `X-User-Id`.
"""
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.exceptions import UnauthorizedError
from app.shared.database.models import User


def get_current_user(
    x_user_id: int = Header(..., alias="X-User-Id", description="ID del usuario autenticado"),
    db: Session = Depends(get_db)
) -> User:
    """Obtener el usuario activo que realiza la petición"""
    user = db.query(User).filter(User.id == x_user_id).first()
    if not user or not user.is_active:
        raise UnauthorizedError("Usuario no autenticado o inactivo")
    return user
