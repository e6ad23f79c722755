# app/modules/promotions/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from app.shared.database.models import User
from .service import PromotionService
from .schemas import PromotionCreate, PromotionUpdate, PromotionResponse

router = APIRouter(prefix="/promotions", tags=["Promotions"])

@router.get("", response_model=List[PromotionResponse])
async def get_all_promotions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PromotionService(db)
    return service.get_all_promotions()

@router.post("", response_model=PromotionResponse, status_code=status.HTTP_201_CREATED)
async def create_promotion(
    promotion_data: PromotionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Crear promoción

    **Condiciones por tipo:**
    - BUY_X_GET_Y: `{product_id, required_quantity, free_quantity}`
    - BUNDLE: `{products: [id, id, ...], discount_percentage | fixed_price}`
    - FLAT_RATE: `{minimum_amount, discount_amount}`
    """
    service = PromotionService(db)
    return service.create_promotion(promotion_data)

@router.get("/{promotion_id}", response_model=PromotionResponse)
async def get_promotion(
    promotion_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PromotionService(db)
    return service.get_promotion(promotion_id)

@router.put("/{promotion_id}", response_model=PromotionResponse)
async def update_promotion(
    promotion_id: int,
    promotion_data: PromotionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PromotionService(db)
    return service.update_promotion(promotion_id, promotion_data)

@router.delete("/{promotion_id}")
async def delete_promotion(
    promotion_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = PromotionService(db)
    service.delete_promotion(promotion_id)
    return {"message": "Promoción eliminada exitosamente"}
