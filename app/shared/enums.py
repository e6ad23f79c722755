from enum import Enum

# Enums compartidos entre modelos de BD y esquemas Pydantic

class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"

class PromotionType(str, Enum):
    BUY_X_GET_Y = "BUY_X_GET_Y"
    BUNDLE = "BUNDLE"
    FLAT_RATE = "FLAT_RATE"

class NotificationType(str, Enum):
    STOCK_LOW = "STOCK_LOW"
    SALE = "SALE"
