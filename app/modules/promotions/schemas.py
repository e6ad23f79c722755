from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Any, Dict, Optional
from datetime import datetime

from app.shared.enums import PromotionType
from app.shared.time import to_naive_utc
from .conditions import parse_conditions

# ==================== REQUEST SCHEMAS ====================

class PromotionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: PromotionType
    conditions: Dict[str, Any] = Field(..., description="Condiciones según el tipo de promoción")
    start_date: datetime
    end_date: datetime

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: datetime):
        return to_naive_utc(v)

    @model_validator(mode='after')
    def validate_promotion(self):
        # Normaliza las condiciones a la forma canónica de su variante
        self.conditions = parse_conditions(self.type, self.conditions).model_dump(mode="json")
        if self.start_date > self.end_date:
            raise ValueError("La fecha de inicio debe ser anterior a la fecha de fin")
        return self

class PromotionUpdate(BaseModel):
    """Actualización parcial; tipo y condiciones se validan juntos en el servicio"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[PromotionType] = None
    conditions: Optional[Dict[str, Any]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator('name', 'type', 'conditions', 'start_date', 'end_date', 'is_active')
    @classmethod
    def reject_null(cls, v):
        # Solo description admite null
        if v is None:
            raise ValueError("El campo no puede ser nulo")
        return v

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]):
        return to_naive_utc(v) if v is not None else v

# ==================== RESPONSE SCHEMAS ====================

class PromotionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str]
    type: PromotionType
    conditions: Dict[str, Any]
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_at: Optional[datetime]
