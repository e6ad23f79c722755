from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

# ==================== CLASE BASE PARA RESPUESTAS (Pydantic v2) ====================

class SalesBaseModel(BaseModel):
    """
    Clase base para todos los esquemas de respuesta,
    con configuración de Pydantic v2.
    """
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class SaleItemRequest(BaseModel):
    product_id: int = Field(..., description="ID del producto")
    quantity: int = Field(..., description="Cantidad")

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v: int):
        if v <= 0:
            raise ValueError('La cantidad debe ser mayor a 0')
        return v

class SaleCreateRequest(BaseModel):
    customer_id: Optional[int] = Field(None, description="Cliente de la venta (opcional)")
    items: List[SaleItemRequest] = Field(..., min_length=1, description="Items de la venta")
    discount_code: Optional[str] = Field(None, min_length=1, description="Código de descuento")
    promotion_id: Optional[int] = Field(None, description="Promoción a aplicar")

# ==================== RESPONSE SCHEMAS ====================

class ProductSummary(SalesBaseModel):
    id: int
    name: str
    sku: str

class UserSummary(SalesBaseModel):
    id: int
    email: str
    first_name: str
    last_name: str

class CustomerSummary(SalesBaseModel):
    id: int
    name: str
    email: Optional[str]

class SaleItemResponse(SalesBaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    product: ProductSummary

class SaleResponse(SalesBaseModel):
    id: int
    user_id: int
    customer_id: Optional[int]
    subtotal: Decimal
    discount_amount: Decimal
    promotion_amount: Decimal
    total: Decimal
    discount_id: Optional[int]
    promotion_id: Optional[int]
    created_at: datetime

    # Relacionados
    items: List[SaleItemResponse]
    user: UserSummary
    customer: Optional[CustomerSummary]

class MessageResponse(BaseModel):
    message: str
