from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotspot_gate.api.errors import register_exception_handlers
from hotspot_gate.api.routes.payment_routes import router as payment_router
from hotspot_gate.api.routes.preauth_routes import router as preauth_router
from hotspot_gate.api.routes.session_routes import router as session_router
from hotspot_gate.container import settings
from hotspot_gate.infrastructure.logging import setup_logging
from hotspot_gate.middleware import apply_response_security_headers
from hotspot_gate.models.schemas import HealthResponse

setup_logging(settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.middleware("http")(apply_response_security_headers)

register_exception_handlers(app)

# Registration order is match precedence for the prefix routes.
app.include_router(payment_router)
app.include_router(session_router)
app.include_router(preauth_router)


@app.get("/health")
def health() -> HealthResponse:
    return HealthResponse(status="ok", mode=settings.mode)
