# app/shared/time.py
"""
Utilidades de tiempo.

Las columnas DateTime de la BD guardan UTC sin zona horaria; todo valor que
entra o se compara con ellas pasa por aquí.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Momento actual en UTC, sin tzinfo (mismo formato que la BD)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalizar un datetime a UTC sin tzinfo; los naive se asumen UTC"""
    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
