"""Centralized exception handlers for the FastAPI app.

Every error body has the shape `{"error": <message>}`. User input errors keep
their message; anything unexpected is logged and answered with a generic one.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.domain.errors import FollowTargetError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "QR code generation failed."


def _follow_target_error_handler(request: Request, exc: FollowTargetError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Invalid query parameters"
    if fields:
        message = f"{message}: {', '.join(fields)}."
    return JSONResponse(status_code=400, content={"error": message})


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("QR API error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    app.add_exception_handler(FollowTargetError, _follow_target_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
