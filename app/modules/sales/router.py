# app/modules/sales/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from app.shared.database.models import User
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse, MessageResponse

router = APIRouter(prefix="/sales", tags=["Sales"])

# ==================== REGISTRO DE VENTAS ====================

@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    sale_data: SaleCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Registrar venta completa

    **Proceso:**
    - Valida cliente, productos y stock disponible
    - Congela el precio unitario vigente en cada item
    - Aplica código de descuento y/o promoción
    - Descuenta el stock en la misma transacción que crea la venta
    - Notifica stock bajo y ventas grandes

    **Errores:**
    - 400: cantidad inválida, stock insuficiente, descuento o promoción no aplicable
    - 404: cliente o producto inexistente
    - 409: el stock cambió durante la venta
    - 503: la transacción excedió el tiempo máximo
    """
    service = SalesService(db)
    return service.create_sale(
        user_id=current_user.id,
        items=sale_data.items,
        customer_id=sale_data.customer_id,
        discount_code=sale_data.discount_code,
        promotion_id=sale_data.promotion_id
    )

# ==================== CONSULTAS ====================

@router.get("", response_model=List[SaleResponse])
async def get_all_sales(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return service.list_sales()

@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return service.get_sale(sale_id)

# ==================== ELIMINACIÓN ====================

@router.delete("/{sale_id}", response_model=MessageResponse)
async def delete_sale(
    sale_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Eliminar venta y restaurar el stock de sus items
    """
    service = SalesService(db)
    service.delete_sale(sale_id)
    return {"message": "Venta eliminada exitosamente"}
