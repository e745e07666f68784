from __future__ import annotations

from hotspot_gate.container import settings


def portal_cors_headers() -> dict[str, str]:
    # The captive-portal page is served from the default destination host.
    return {"Access-Control-Allow-Origin": settings.default_dst}
