from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from hotspot_gate.api.cors import portal_cors_headers
from hotspot_gate.container import access_service
from hotspot_gate.core.utils import parse_timestamp
from hotspot_gate.models.schemas import TokenResponse

router = APIRouter(tags=["preauth"])


@router.api_route("/preauth{suffix:path}", methods=["GET", "HEAD", "POST"])
def preauth(
    mac: str | None = Query(default=None),
    timestamp: str | None = Query(default=None),
) -> JSONResponse:
    token = access_service.pre_auth(mac=mac, timestamp=parse_timestamp(timestamp))
    return JSONResponse(
        content=TokenResponse(token=token).model_dump(),
        headers=portal_cors_headers(),
    )
