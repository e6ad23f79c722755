# app/modules/discounts/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from app.shared.database.models import User
from .service import DiscountService
from .schemas import (
    DiscountCreate, DiscountUpdate, DiscountResponse,
    DiscountValidateRequest, DiscountValidationResponse
)

router = APIRouter(prefix="/discounts", tags=["Discounts"])

@router.get("", response_model=List[DiscountResponse])
async def get_all_discounts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = DiscountService(db)
    return service.get_all_discounts()

@router.post("", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED)
async def create_discount(
    discount_data: DiscountCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Crear código de descuento

    - PERCENTAGE: valor entre 0 y 100
    - FIXED_AMOUNT: valor mayor a 0
    - El código debe ser único
    """
    service = DiscountService(db)
    return service.create_discount(discount_data)

@router.post("/validate", response_model=DiscountValidationResponse)
async def validate_discount(
    request: DiscountValidateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Evaluar un código contra un monto sin aplicarlo
    """
    service = DiscountService(db)
    evaluation = service.evaluate(request.code, request.amount)

    return DiscountValidationResponse(
        valid=evaluation.valid,
        reason=evaluation.reason,
        message=evaluation.message,
        discount_id=evaluation.discount.id if evaluation.discount else None,
        amount=evaluation.amount
    )

@router.get("/{discount_id}", response_model=DiscountResponse)
async def get_discount(
    discount_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = DiscountService(db)
    return service.get_discount(discount_id)

@router.put("/{discount_id}", response_model=DiscountResponse)
async def update_discount(
    discount_id: int,
    discount_data: DiscountUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = DiscountService(db)
    return service.update_discount(discount_id, discount_data)

@router.delete("/{discount_id}")
async def delete_discount(
    discount_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = DiscountService(db)
    service.delete_discount(discount_id)
    return {"message": "Descuento eliminado exitosamente"}
