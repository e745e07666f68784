from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from hotspot_gate.container import access_service
from hotspot_gate.core.utils import parse_timestamp

router = APIRouter(tags=["sessions"])


@router.api_route("/auth{suffix:path}", methods=["GET", "HEAD", "POST"])
def check_session(
    mac: str | None = Query(default=None),
    timestamp: str | None = Query(default=None),
    token: str | None = Query(default=None),
) -> PlainTextResponse:
    access_service.check_session(mac=mac, timestamp=parse_timestamp(timestamp), token=token)
    return PlainTextResponse("OK", status_code=200)
