from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
import logging

from app.core.exceptions import BackOfficeError

logger = logging.getLogger(__name__)

def setup_exception_handlers(app: FastAPI):
    """Registrar el formato estructurado de errores {detail, reason}"""

    @app.exception_handler(BackOfficeError)
    async def back_office_error_handler(request: Request, exc: BackOfficeError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} - {exc.reason}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "reason": exc.reason}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Datos de entrada inválidos",
                "reason": "validation_error",
                "errors": jsonable_encoder(exc.errors())
            }
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"❌ {request.method} {request.url.path} - Error no controlado: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Error interno del servidor", "reason": "unexpected_error"}
        )
