from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, cast

from fastapi import FastAPI, Request
from fastapi import HTTPException as FastAPIHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ...engine.board import FenError, IllegalMoveError
from ...engine.move import MoveParseError


logger = logging.getLogger(__name__)

_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
    422: "unprocessable_entity",
}

# Domain errors raised by the engine core, rendered as client errors
_DOMAIN_CODES = {
    IllegalMoveError: "illegal_move",
    MoveParseError: "invalid_move",
    FenError: "invalid_position",
}


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    err: Dict[str, Any] = {
        "code": code,
        "message": message,
        "type": err_type,
        "request_id": request_id,
    }
    if field_errors:
        err["field_errors"] = field_errors
    return {"error": err}


def _respond(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    payload = error_envelope(
        code=code,
        message=message,
        err_type="client_error" if status_code < 500 else "server_error",
        request_id=getattr(request.state, "request_id", ""),
        field_errors=field_errors,
    )
    return JSONResponse(status_code=status_code, content=payload)


def status_to_code(status_code: int) -> str:
    if status_code >= 500:
        return "internal_error"
    return _STATUS_CODES.get(status_code, "error")


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(FastAPIHTTPException, exc)
    detail = http_exc.detail if isinstance(http_exc.detail, str) else str(http_exc.detail)
    return _respond(request, http_exc.status_code, status_to_code(http_exc.status_code), detail)


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    code = next(
        (c for cls, c in _DOMAIN_CODES.items() if isinstance(exc, cls)),
        "bad_request",
    )
    return _respond(request, status.HTTP_400_BAD_REQUEST, code, str(exc))


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    field_errors = []
    for e in cast(RequestValidationError, exc).errors():
        field_errors.append(
            {
                "field": ".".join(str(p) for p in e.get("loc", []) if p is not None),
                "code": e.get("type", "value_error"),
                "message": e.get("msg", "invalid value"),
            }
        )
    return _respond(
        request,
        422,
        "unprocessable_entity",
        "Validation error",
        field_errors or None,
    )


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, FastAPIHTTPException):
        return await http_exception_handler(request, exc)
    logger.exception(
        "Unhandled exception", extra={"request_id": getattr(request.state, "request_id", "")}
    )
    return _respond(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "Internal Server Error",
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FastAPIHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    for exc_cls in _DOMAIN_CODES:
        app.add_exception_handler(exc_cls, domain_exception_handler)
    app.add_exception_handler(Exception, exception_handler)
