from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, RedirectResponse

from hotspot_gate.api.cors import portal_cors_headers
from hotspot_gate.container import access_service
from hotspot_gate.core.utils import parse_timestamp
from hotspot_gate.models.schemas import TokenResponse

router = APIRouter(tags=["payments"])


@router.api_route("/pay{suffix:path}", methods=["GET", "HEAD", "POST"])
def initiate_payment(
    mac: str | None = Query(default=None),
    dst: str | None = Query(default=None),
    method: str | None = Query(default=None),
    timestamp: str | None = Query(default=None),
    token: str | None = Query(default=None),
) -> JSONResponse:
    initiation = access_service.initiate_payment(
        mac=mac,
        dst=dst,
        method=method,
        timestamp=parse_timestamp(timestamp),
        token=token,
    )
    return JSONResponse(
        content=TokenResponse(token=initiation.gateway_token).model_dump(),
        headers=portal_cors_headers(),
    )


@router.api_route("/verify{suffix:path}", methods=["GET", "HEAD", "POST"])
def verify_payment(
    order_id: str | None = Query(default=None),
    mac: str | None = Query(default=None),
    dst: str | None = Query(default=None),
    transaction_status: str | None = Query(default=None),
) -> RedirectResponse:
    redirect_url = access_service.verify_payment(
        order_id=order_id,
        mac=mac,
        dst=dst,
        transaction_status=transaction_status,
    )
    return RedirectResponse(url=redirect_url, status_code=302)
