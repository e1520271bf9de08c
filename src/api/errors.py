"""Translate product service errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.services.exceptions import (
    GatewayError,
    InvalidFilter,
    InvalidIdentifier,
    MalformedPayload,
    NotFound,
    ProductServiceError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

# Malformed identifiers map to 500, not 400.
STATUS_BY_ERROR: dict[type[ProductServiceError], int] = {
    InvalidIdentifier: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidFilter: status.HTTP_400_BAD_REQUEST,
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    MalformedPayload: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    GatewayError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ProductServiceError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def product_error_handler(
    request: Request, exc: ProductServiceError
) -> JSONResponse:
    status_code = status_for(exc)
    body: dict = {"detail": exc.message}
    if isinstance(exc, ValidationFailed):
        body["violations"] = [v.to_dict() for v in exc.violations]

    logger.info(
        "%s %s failed with %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse(status_code=status_code, content=body)


async def request_validation_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Body parse failures are reported as malformed payloads."""

    return await product_error_handler(request, MalformedPayload())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductServiceError, product_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
