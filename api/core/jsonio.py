"""
JSON in and out without losing decimal digits.

Starlette parses JSON numbers into floats and the stdlib encoder has no way
to write a Decimal as a bare number, so both directions are handled here:

- `json_body(Model)`: FastAPI dependency parsing the request body with
  `parse_float=Decimal` before pydantic validation
- `ExactJSONResponse`: writes Decimal values with their own digits
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def loads(raw: bytes | str) -> Any:
    return json.loads(raw, parse_float=Decimal)


def _encode(value: Any) -> str:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Out of range decimal value: {value}")
        return format(value, "f")
    if isinstance(value, dict):
        items = (f"{json.dumps(str(key), ensure_ascii=False)}:{_encode(item)}" for key, item in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def dumps(value: Any) -> str:
    return _encode(value)


class ExactJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return dumps(content).encode("utf-8")


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Build a FastAPI dependency that validates the raw request body as `model`.

    Errors are raised as RequestValidationError located under `body`, like
    FastAPI's own body parsing.
    """

    async def dependency(request: Request) -> ModelT:
        raw = await request.body()
        try:
            data = loads(raw)
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
            ) from exc

        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()],
                body=data,
            ) from exc

    return dependency
