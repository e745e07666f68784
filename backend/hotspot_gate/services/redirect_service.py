from __future__ import annotations

from hotspot_gate.core.config import Settings
from hotspot_gate.core.security import TokenService
from hotspot_gate.core.utils import encode_uri_component, epoch_now


class SessionRedirectIssuer:
    def __init__(self, settings: Settings, token_service: TokenService) -> None:
        self.settings = settings
        self.token_service = token_service

    def username_for(self, device_id: str) -> str:
        return f"{self.settings.username_prefix}{device_id}"

    def issue(self, device_id: str, destination: str, now_epoch: int | None = None) -> str:
        timestamp = epoch_now() if now_epoch is None else int(now_epoch)
        token = self.token_service.generate(device_id, timestamp)
        # The username goes through verbatim; the login page matches it against its user table.
        return (
            f"{self.settings.login_redirect_base}"
            f"?username={self.username_for(device_id)}"
            f"&dst={encode_uri_component(destination)}"
            f"&timestamp={timestamp}"
            f"&token={encode_uri_component(token)}"
        )
