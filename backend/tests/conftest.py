from __future__ import annotations

from typing import Any

import httpx
import pytest


@pytest.fixture(autouse=True)
def block_outbound_http(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests that talk to the gateway install their own fake; everything else fails fast offline.
    def refuse(method: str, url: str, **_kwargs: Any) -> Any:
        raise httpx.ConnectError(f"outbound {method} {url} blocked in tests")

    monkeypatch.setattr(httpx, "request", refuse)
