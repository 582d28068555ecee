"""
Error → JSON translation for the API layer.

Every error body has the shape ``{"error": <message>, "details"?: ...}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gardenchat.core.exceptions import GardenChatError
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.api.errors")

CHAT_FAILURE_MESSAGE = "We couldn't process your question. Please try again."


def error_response(exc: GardenChatError, message: str | None = None) -> JSONResponse:
    body: dict = {"error": message or exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


async def _handle_gardenchat_error(request: Request, exc: GardenChatError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log("[API] %s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
    logger.info("[API] %s %s -> 400 invalid body", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GardenChatError, _handle_gardenchat_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
