from __future__ import annotations

import json

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotspot_gate.api.cors import portal_cors_headers
from hotspot_gate.container import settings
from hotspot_gate.core.errors import AccessGateError, TokenExpiredError
from hotspot_gate.infrastructure.logging import get_logger

logger = get_logger(__name__)


def error_envelope(code: str, message: str) -> dict[str, object]:
    return {"error": {"code": code, "message": message, "details": []}}


def token_expired_page() -> str:
    # json.dumps yields a safely quoted JS string literal
    target = json.dumps(settings.default_dst).replace("</", "<\\/")
    return (
        "\n<script>\n"
        '  console.warn("Token expired");\n'
        f"  location.href = {target};\n"
        "</script>\n"
    )


async def handle_token_expired(_: Request, exc: TokenExpiredError) -> HTMLResponse:
    return HTMLResponse(content=token_expired_page(), status_code=200, headers=portal_cors_headers())


async def handle_access_gate_error(request: Request, exc: AccessGateError) -> Response:
    if isinstance(exc, TokenExpiredError):
        return await handle_token_expired(request, exc)
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.code, exc.message))


async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_envelope(code, message))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content=error_envelope("INTERNAL_ERROR", "An unexpected error occurred."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccessGateError, handle_access_gate_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
