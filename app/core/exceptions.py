# app/core/exceptions.py
"""
Errores de negocio del back office.

Todos heredan de HTTPException para que FastAPI los traduzca directamente a
una respuesta; `reason` es un código estable que identifica la causa.
"""
from typing import Optional
from fastapi import HTTPException, status


class BackOfficeError(HTTPException):
    """Error base con código de razón"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_reason: str = "error"

    def __init__(self, detail: str, reason: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail)
        self.reason = reason or self.default_reason


class ValidationError(BackOfficeError):
    """Campos inválidos o faltantes, cantidades no positivas"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_reason = "validation_error"


class NotFoundError(BackOfficeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_reason = "not_found"


class UnauthorizedError(BackOfficeError):
    """Usuario inexistente o inactivo"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_reason = "unauthorized"


class BusinessRuleError(BackOfficeError):
    """Descuento/promoción inactivo, fuera de vigencia, compra mínima, etc."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_reason = "business_rule"


class ConflictError(BackOfficeError):
    """Conflicto de recursos detectado antes de mutar (stock, usos)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_reason = "conflict"


class InsufficientStockError(ConflictError):
    default_reason = "insufficient_stock"


class StockConflictError(ConflictError):
    """Otra venta consumió el stock durante la transacción"""
    status_code = status.HTTP_409_CONFLICT
    default_reason = "stock_conflict"


class TransactionTimeoutError(BackOfficeError):
    """La transacción superó el tiempo máximo; se puede reintentar"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_reason = "transaction_timeout"


class UnexpectedError(BackOfficeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_reason = "unexpected_error"


__all__ = [
    "BackOfficeError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "BusinessRuleError",
    "ConflictError",
    "InsufficientStockError",
    "StockConflictError",
    "TransactionTimeoutError",
    "UnexpectedError",
]
