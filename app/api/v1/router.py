# app/api/v1/router.py
from fastapi import APIRouter

from app.config.settings import settings

# ✅ IMPORTAR MÓDULOS
from app.modules.sales import sales_router
from app.modules.discounts import discounts_router
from app.modules.promotions import promotions_router
from app.modules.notifications import notifications_router


# Crear router principal de la API v1
api_router = APIRouter()

# ==================== MÓDULOS ====================

api_router.include_router(sales_router)
api_router.include_router(discounts_router)
api_router.include_router(promotions_router)
api_router.include_router(notifications_router)

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "sales": "/api/v1/sales",
            "discounts": "/api/v1/discounts",
            "promotions": "/api/v1/promotions",
            "notifications": "/api/v1/notifications"
        }
    }

@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version
    }
