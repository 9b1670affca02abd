# storerating/core/errors.py
"""
Error envelope for the HTTP API.

Every failure leaves the service as JSON shaped like
    {"message": str, "errors": [{"path": [...], "message": str, "code": str}]}
where "errors" is only present for validation failures.
"""
import json
import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("uvicorn.error")

# Location prefixes FastAPI adds in front of the field path
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Convert pydantic error dicts into the public {path, message, code} shape.
    """
    items = []
    for err in errors:
        loc = list(err.get("loc") or ())
        if loc and loc[0] in _LOC_SOURCES:
            loc = loc[1:]
        items.append({"path": loc, "message": err.get("msg", ""), "code": err.get("type", "")})
    return items


def validate_payload(schema: type[BaseModel], payload: Any) -> BaseModel:
    """
    Validate a raw request body inside a handler.

    Used where a handler must run other checks (path parsing, existence)
    before the body is looked at. Failures surface through the same 400
    envelope as FastAPI's own body validation.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def read_payload(request: Request, schema: type[BaseModel]) -> BaseModel:
    """
    Decode the JSON body and validate it against `schema`.

    FastAPI parses declared bodies before any dependency runs, so a guarded
    route that declared its body would answer a malformed request with 400
    before the auth guard could answer 401/403. Guarded routes call this
    from the handler instead, after their guard has passed.
    """
    raw = await request.body()
    if not raw:
        return validate_payload(schema, None)
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}, "ctx": {"error": str(exc)}}]
        ) from exc
    return validate_payload(schema, payload)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    content = detail if isinstance(detail, dict) else {"message": str(detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            {"message": "Validation error", "errors": format_validation_errors(exc.errors())}
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the envelope handlers and a last-resort guard for unexpected errors.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.middleware("http")
    async def unexpected_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            # Log the real cause server-side; the caller only sees a generic message
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": "Internal server error"},
            )
