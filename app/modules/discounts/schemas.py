from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.shared.enums import DiscountType
from app.shared.time import to_naive_utc

# ==================== VALIDACIONES COMPARTIDAS ====================

def check_discount_value(discount_type: DiscountType, value: Decimal):
    """PERCENTAGE en [0, 100]; FIXED_AMOUNT mayor a 0"""
    if discount_type == DiscountType.PERCENTAGE and (value < 0 or value > 100):
        raise ValueError("El porcentaje debe estar entre 0 y 100")
    if discount_type == DiscountType.FIXED_AMOUNT and value <= 0:
        raise ValueError("El monto fijo debe ser mayor a 0")

def check_validity_window(start_date: datetime, end_date: datetime):
    if start_date > end_date:
        raise ValueError("La fecha de inicio debe ser anterior a la fecha de fin")

# ==================== REQUEST SCHEMAS ====================

class DiscountCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=100, description="Código único del descuento")
    type: DiscountType
    value: Decimal = Field(..., description="Porcentaje (0-100) o monto fijo")
    min_purchase: Optional[Decimal] = Field(None, ge=0, description="Compra mínima requerida")
    start_date: datetime
    end_date: datetime
    max_uses: Optional[int] = Field(None, ge=1, description="Máximo de usos permitidos")

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str):
        return v.strip()

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: datetime):
        return to_naive_utc(v)

    @model_validator(mode='after')
    def validate_discount(self):
        check_discount_value(self.type, self.value)
        check_validity_window(self.start_date, self.end_date)
        return self

class DiscountUpdate(BaseModel):
    """Actualización parcial; el registro resultante se valida en el servicio"""
    code: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[DiscountType] = None
    value: Optional[Decimal] = None
    min_purchase: Optional[Decimal] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    max_uses: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None

    @field_validator('code', 'type', 'value', 'start_date', 'end_date', 'is_active')
    @classmethod
    def reject_null(cls, v):
        # Solo min_purchase y max_uses admiten null (sin límite)
        if v is None:
            raise ValueError("El campo no puede ser nulo")
        return v

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("El código no puede estar vacío")
        return v

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]):
        return to_naive_utc(v) if v is not None else v

class DiscountValidateRequest(BaseModel):
    code: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, description="Subtotal contra el que se evalúa")

# ==================== RESPONSE SCHEMAS ====================

class DiscountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    type: DiscountType
    value: Decimal
    min_purchase: Optional[Decimal]
    start_date: datetime
    end_date: datetime
    max_uses: Optional[int]
    used_count: int
    is_active: bool
    created_at: Optional[datetime]

class DiscountValidationResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    discount_id: Optional[int] = None
    amount: Decimal = Decimal("0.00")
