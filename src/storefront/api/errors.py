"""Translate domain failures into JSON responses.

Nothing raised by the cart or checkout should take the process down: each
error becomes ``{"error": ...}`` with a status code the client can act on.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.errors import EmptyCartError, OrderRecordingFailed, ProductNotFound, StorefrontError

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    ProductNotFound: 404,
    EmptyCartError: 409,
    OrderRecordingFailed: 502,
}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = _STATUS_CODES.get(type(exc), 400)
    logger.warning(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Validation failed", path=request.url.path, error=exc.messages)
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.warning("Object not found", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=404, content={"error": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
