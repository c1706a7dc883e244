from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from uos.api.middleware.request_id import get_request_id
from uos.application.ports.repositories import OrderStorageError
from uos.application.ports.restaurants import RestaurantLookupError
from uos.application.services.order_service import RestaurantNotFoundError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _server_error_handler(code: str):
    # internal detail goes to the log only, never into the response body
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request_failed",
            exc_info=exc,
            extra={"path": request.url.path, "error_code": code},
        )
        return _error_response(
            status_code=500,
            code=code,
            message=INTERNAL_ERROR_MESSAGE,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], str]] = [
        (OrderStorageError, "STORAGE_ERROR"),
        (RestaurantLookupError, "RESTAURANT_LOOKUP_FAILED"),
        (RestaurantNotFoundError, "RESTAURANT_NOT_FOUND"),
    ]

    for exc_cls, code in mappings:
        app.add_exception_handler(exc_cls, _server_error_handler(code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
