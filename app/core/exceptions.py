import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PaymentAppError(Exception):
    """Base error translated into an HTTP status and ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_content(self) -> dict:
        return {"error": self.message}


class ValidationError(PaymentAppError):
    status_code = status.HTTP_400_BAD_REQUEST


class SignatureMismatch(PaymentAppError):
    """A legitimate negative verification outcome, not a server fault."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, include_success: bool = False):
        super().__init__(message)
        self.include_success = include_success

    def to_content(self) -> dict:
        if self.include_success:
            return {"success": False, "error": self.message}
        return super().to_content()


class ProcessorError(PaymentAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ParseError(PaymentAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def payment_app_exception_handler(request: Request, exc: PaymentAppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Global exception on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )
