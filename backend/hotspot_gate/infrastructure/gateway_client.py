from __future__ import annotations

import base64
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from hotspot_gate.core.config import Settings
from hotspot_gate.core.errors import GatewayError
from hotspot_gate.infrastructure.logging import get_logger

logger = get_logger(__name__)


class PaymentGateway(Protocol):
    def create_transaction(self, payload: dict[str, Any]) -> str: ...

    def query_status(self, order_id: str) -> str | None: ...


class MidtransGatewayClient:
    """Snap transaction creation and core-API status lookups, one attempt each."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return bool(self.settings.server_key.strip())

    def create_transaction(self, payload: dict[str, Any]) -> str:
        body = self._request("POST", self.settings.snap_url, json=payload)
        token = str(body.get("token") or "").strip()
        if not token:
            raise GatewayError("Gateway response did not include a transaction token")
        return token

    def query_status(self, order_id: str) -> str | None:
        # The order id arrives from the callback query, so it must stay a single path segment.
        url = f"{self.settings.status_url.rstrip('/')}/{quote(order_id, safe='')}/status"
        body = self._request("GET", url)
        status = body.get("transaction_status")
        return str(status) if status is not None else None

    def _headers(self) -> dict[str, str]:
        credentials = base64.b64encode(f"{self.settings.server_key}:".encode("utf-8")).decode("ascii")
        return {
            "Authorization": f"Basic {credentials}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        if not self.enabled:
            raise GatewayError("Gateway server key is not configured")
        try:
            response = httpx.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.settings.gateway_timeout_seconds,
                **kwargs,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("gateway_request_failed", method=method, url=url, error=str(exc))
            raise GatewayError(f"Gateway request failed: {exc}") from exc
        except ValueError as exc:
            logger.warning("gateway_response_unparseable", method=method, url=url)
            raise GatewayError("Gateway response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise GatewayError("Gateway response must be a JSON object")
        return payload
