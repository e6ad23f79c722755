from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "Operantis Back Office API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./backoffice.db"

    # CORS
    allowed_origins: List[str] = ["http://localhost:3000"]

    # ✅ Reglas de negocio de ventas
    low_stock_threshold: int = Field(
        default=10,
        description="Stock por debajo del cual se notifica STOCK_LOW"
    )
    large_sale_threshold: int = Field(
        default=1000,
        description="Total a partir del cual se notifica una venta grande"
    )
    sale_transaction_timeout_seconds: float = Field(
        default=10.0,
        description="Tiempo máximo de la transacción de venta"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
