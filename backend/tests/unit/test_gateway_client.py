from __future__ import annotations

import base64
from typing import Any

import httpx
import pytest

from hotspot_gate.core.config import Settings
from hotspot_gate.core.errors import GatewayError
from hotspot_gate.infrastructure.gateway_client import MidtransGatewayClient


class _DummyResponse:
    def __init__(self, payload: Any, *, error: Exception | None = None) -> None:
        self._payload = payload
        self._error = error

    def raise_for_status(self) -> None:
        if self._error is not None:
            raise self._error

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _settings(**overrides: Any) -> Settings:
    base = {
        "use_sandbox": True,
        "server_key_sandbox": "SB-Mid-server-test",
        "server_key_production": "Mid-server-live",
        "gateway_timeout_seconds": 4.0,
    }
    base.update(overrides)
    return Settings(**base)


def _basic(key: str) -> str:
    return "Basic " + base64.b64encode(f"{key}:".encode("utf-8")).decode("ascii")


def test_create_transaction_posts_payload_with_basic_auth(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_request(method: str, url: str, **kwargs: Any) -> _DummyResponse:
        captured["method"] = method
        captured["url"] = url
        captured["kwargs"] = kwargs
        return _DummyResponse({"token": "snap-token-1", "redirect_url": "https://app.sandbox.midtrans.com/x"})

    monkeypatch.setattr(httpx, "request", fake_request)
    client = MidtransGatewayClient(settings=_settings())
    token = client.create_transaction({"transaction_details": {"order_id": "o-1", "gross_amount": 3021}})

    assert token == "snap-token-1"
    assert captured["method"] == "POST"
    assert captured["url"] == "https://app.sandbox.midtrans.com/snap/v1/transactions"
    assert captured["kwargs"]["headers"]["Authorization"] == _basic("SB-Mid-server-test")
    assert captured["kwargs"]["json"]["transaction_details"]["order_id"] == "o-1"
    assert captured["kwargs"]["timeout"] == 4.0


def test_production_mode_uses_production_key_and_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_request(method: str, url: str, **kwargs: Any) -> _DummyResponse:
        captured["url"] = url
        captured["headers"] = kwargs["headers"]
        return _DummyResponse({"transaction_status": "settlement"})

    monkeypatch.setattr(httpx, "request", fake_request)
    client = MidtransGatewayClient(settings=_settings(use_sandbox=False))

    assert client.query_status("hotspot-o-2") == "settlement"
    assert captured["url"] == "https://api.midtrans.com/v2/hotspot-o-2/status"
    assert captured["headers"]["Authorization"] == _basic("Mid-server-live")


def test_create_transaction_without_token_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        httpx,
        "request",
        lambda *_args, **_kwargs: _DummyResponse({"error_messages": ["transaction_details.gross_amount is not equal"]}),
    )
    client = MidtransGatewayClient(settings=_settings())
    with pytest.raises(GatewayError):
        client.create_transaction({})


def test_http_error_status_raises_gateway_error(monkeypatch: pytest.MonkeyPatch) -> None:
    request = httpx.Request("GET", "https://api.sandbox.midtrans.com/v2/o-3/status")
    response = httpx.Response(401, request=request)
    error = httpx.HTTPStatusError("unauthorized", request=request, response=response)
    monkeypatch.setattr(httpx, "request", lambda *_args, **_kwargs: _DummyResponse({}, error=error))

    client = MidtransGatewayClient(settings=_settings())
    with pytest.raises(GatewayError):
        client.query_status("o-3")


def test_transport_failure_raises_gateway_error() -> None:
    # The autouse fixture refuses every outbound request.
    client = MidtransGatewayClient(settings=_settings())
    with pytest.raises(GatewayError):
        client.query_status("o-4")


def test_unparseable_body_raises_gateway_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        httpx,
        "request",
        lambda *_args, **_kwargs: _DummyResponse(ValueError("Expecting value")),
    )
    client = MidtransGatewayClient(settings=_settings())
    with pytest.raises(GatewayError):
        client.query_status("o-5")


def test_missing_status_field_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(httpx, "request", lambda *_args, **_kwargs: _DummyResponse({"status_code": "404"}))
    client = MidtransGatewayClient(settings=_settings())
    assert client.query_status("o-6") is None


def test_blank_server_key_disables_client() -> None:
    client = MidtransGatewayClient(settings=_settings(server_key_sandbox=""))
    assert client.enabled is False
    with pytest.raises(GatewayError):
        client.query_status("o-7")


def test_status_lookup_keeps_order_id_in_one_path_segment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def fake_request(method: str, url: str, **_kwargs: Any) -> _DummyResponse:
        captured["url"] = url
        return _DummyResponse({"transaction_status": "pending"})

    monkeypatch.setattr(httpx, "request", fake_request)
    client = MidtransGatewayClient(settings=_settings())
    client.query_status("../../v1/x?y=1#z")

    assert captured["url"] == "https://api.sandbox.midtrans.com/v2/..%2F..%2Fv1%2Fx%3Fy%3D1%23z/status"


def test_invalid_url_raises_gateway_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_request(method: str, url: str, **_kwargs: Any) -> _DummyResponse:
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    monkeypatch.setattr(httpx, "request", fake_request)
    client = MidtransGatewayClient(settings=_settings())
    with pytest.raises(GatewayError):
        client.query_status("hotspot-a")
