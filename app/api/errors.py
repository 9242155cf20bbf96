# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.errors import CartError, CartErrorKind
from app.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_MESSAGES = {
    "CART_NOT_FOUND": "Cart not found or expired",
    "INVALID_QUANTITY": "Invalid quantity. It must be greater than zero",
    "ITEM_NOT_FOUND": "Item does not exist in the cart",
    "SKU_UNPRICEABLE": "Product cannot be priced",
    "INVALID_REQUEST": "Invalid request payload",
    "UNAUTHORIZED": "Invalid API key",
    "RATE_LIMIT_EXCEEDED": "Too many requests",
    "INTERNAL_SERVER_ERROR": "Unexpected error",
}

#kind -> (status, kod bledu w odpowiedzi)
CART_ERROR_RESPONSES = {
    CartErrorKind.BASKET_NOT_FOUND: (404, "CART_NOT_FOUND"),
    CartErrorKind.BASKET_EXPIRED: (404, "CART_NOT_FOUND"),
    CartErrorKind.INVALID_ITEM_QUANTITY: (400, "INVALID_QUANTITY"),
    CartErrorKind.ITEM_NOT_FOUND: (404, "ITEM_NOT_FOUND"),
    CartErrorKind.SKU_UNPRICEABLE: (422, "SKU_UNPRICEABLE"),
}


class ApiError(Exception):
    """Bledy samego gateway (auth, rate limit), poza domena koszyka."""

    def __init__(self, status_code: int, code: str):
        self.status_code = status_code
        self.code = code
        super().__init__(code)


def error_response(status_code: int, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "message": ERROR_MESSAGES[code]},
    )


async def cart_error_handler(request: Request, exc: CartError) -> JSONResponse:
    status_code, code = CART_ERROR_RESPONSES[exc.kind]
    logger.error(
        f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}"
    )
    return error_response(status_code, code)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.error(f"{exc.code} on {request.method} {request.url.path}")
    return error_response(exc.status_code, exc.code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    #obejmuje tez niepoprawny JSON
    logger.error(
        f"Validation failed on {request.method} {request.url.path}: {exc.errors()}"
    )
    return error_response(400, "INVALID_REQUEST")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return error_response(500, "INTERNAL_SERVER_ERROR")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartError, cart_error_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
