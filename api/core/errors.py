"""
Error translation to problem documents (RFC 7807).

Every error leaving the API is rendered as `application/problem+json`
with a machine-readable `message` key a client can translate:

- AlertError subclasses -> `error.{error_key}` plus alert headers
- validation failures   -> 400 `error.validation` with `fieldErrors`
- other HTTP errors     -> `error.http.{status}`
- anything unhandled    -> 500 `error.http.500`, logged with its traceback
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import headers as alert_headers

PROBLEM_JSON = "application/problem+json"

PROBLEM_BASE_URL = "/problem"
DEFAULT_TYPE = "about:blank"
PROBLEM_WITH_MESSAGE_TYPE = f"{PROBLEM_BASE_URL}/problem-with-message"
CONSTRAINT_VIOLATION_TYPE = f"{PROBLEM_BASE_URL}/constraint-violation"

logger = logging.getLogger(__name__)


class AlertError(Exception):
    """
    Client-facing error tied to an entity, carrying an error key.
    """

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, title: str, *, entity_name: str, error_key: str) -> None:
        super().__init__(title)
        self.title = title
        self.entity_name = entity_name
        self.error_key = error_key


class BadRequestAlertError(AlertError):
    status_code = HTTPStatus.BAD_REQUEST


class NotFoundAlertError(AlertError):
    status_code = HTTPStatus.NOT_FOUND


def problem_response(
    request: Request,
    *,
    status_code: int,
    title: str,
    message: str,
    type_: str = DEFAULT_TYPE,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": type_,
        "title": title,
        "status": int(status_code),
        "instance": request.url.path,
        "message": message,
    }
    if detail:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(
        status_code=int(status_code),
        content=body,
        headers=headers,
        media_type=PROBLEM_JSON,
    )


async def _alert_error_handler(request: Request, exc: AlertError) -> JSONResponse:
    logger.debug("alert_error path=%s key=%s", request.url.path, exc.error_key)
    return problem_response(
        request,
        status_code=exc.status_code,
        title=exc.title,
        message=f"error.{exc.error_key}",
        type_=PROBLEM_WITH_MESSAGE_TYPE,
        headers=alert_headers.failure_alert(exc.entity_name, exc.error_key),
        entityName=exc.entity_name,
        errorKey=exc.error_key,
        params=exc.entity_name,
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"

    detail = exc.detail if isinstance(exc.detail, str) and exc.detail != title else None
    return problem_response(
        request,
        status_code=exc.status_code,
        title=title,
        message=f"error.http.{exc.status_code}",
        detail=detail,
        headers=getattr(exc, "headers", None),
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        # First element is the source: body / path / query / header.
        object_name = loc[0] if loc else "request"
        field = ".".join(loc[1:]) if len(loc) > 1 else object_name
        field_errors.append(
            {
                "objectName": object_name,
                "field": field,
                "message": str(error.get("msg") or "invalid"),
            }
        )
    return field_errors


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return problem_response(
        request,
        status_code=HTTPStatus.BAD_REQUEST,
        title="Method argument not valid",
        message="error.validation",
        type_=CONSTRAINT_VIOLATION_TYPE,
        fieldErrors=_field_errors(exc),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path, exc_info=exc)
    return problem_response(
        request,
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        title=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
        message=f"error.http.{int(HTTPStatus.INTERNAL_SERVER_ERROR)}",
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AlertError, _alert_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
