from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

DEFAULT_ALLOWED_METHODS = (
    "gopay,shopeepay,other_qris,"
    "echannel,bri_va,cimb_va,"
    "bni_va,permata_va,other_va"
)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    app_name: str = "Hotspot Payment Gate"
    use_sandbox: bool = True

    server_key_sandbox: str = "YOUR_SANDBOX_SERVER_KEY"
    server_key_production: str = "YOUR_PRODUCTION_SERVER_KEY"
    snap_url_sandbox: str = "https://app.sandbox.midtrans.com/snap/v1/transactions"
    snap_url_production: str = "https://app.midtrans.com/snap/v1/transactions"
    status_url_sandbox: str = "https://api.sandbox.midtrans.com/v2"
    status_url_production: str = "https://api.midtrans.com/v2"
    gateway_timeout_seconds: float = 5.0

    payment_callback_url: str = "http://localhost:8000/verify"
    login_redirect_base: str = "http://hotspot.local/login"
    default_dst: str = "http://hotspot.local"
    default_amount: int = 3000
    default_payment_method: str = "other_qris"
    country_vat: float = 11.0
    allowed_methods_csv: str = DEFAULT_ALLOWED_METHODS
    order_id_prefix: str = "hotspot"
    username_prefix: str = "T-"

    token_secret: str = "replace-with-strong-secret"
    token_validity_seconds: int = 60
    preauth_window_seconds: int = 10

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        env_names = {
            "app_name": "APP_NAME",
            "use_sandbox": "USE_SANDBOX",
            "server_key_sandbox": "SERVER_KEY_SANDBOX",
            "server_key_production": "SERVER_KEY_PRODUCTION",
            "snap_url_sandbox": "SNAP_URL_SANDBOX",
            "snap_url_production": "SNAP_URL_PRODUCTION",
            "status_url_sandbox": "STATUS_URL_SANDBOX",
            "status_url_production": "STATUS_URL_PRODUCTION",
            "gateway_timeout_seconds": "GATEWAY_TIMEOUT_SECONDS",
            "payment_callback_url": "PAYMENT_CALLBACK_URL",
            "login_redirect_base": "LOGIN_REDIRECT_BASE",
            "default_dst": "DEFAULT_DST",
            "default_amount": "DEFAULT_AMOUNT",
            "default_payment_method": "DEFAULT_PAYMENT_METHOD",
            "country_vat": "COUNTRY_VAT",
            "allowed_methods_csv": "ALLOWED_METHODS",
            "order_id_prefix": "ORDER_ID_PREFIX",
            "username_prefix": "USERNAME_PREFIX",
            "token_secret": "SECRET_TOKEN_KEY",
            "token_validity_seconds": "TOKEN_VALIDITY_SECONDS",
            "preauth_window_seconds": "PREAUTH_WINDOW_SECONDS",
            "log_level": "LOG_LEVEL",
        }
        types = {field.name: field.type for field in fields(cls)}
        values: dict[str, Any] = {}
        for name, env_name in env_names.items():
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            kind = types[name]
            if kind == "bool":
                values[name] = _parse_bool(raw)
            elif kind == "int":
                values[name] = int(raw)
            elif kind == "float":
                values[name] = float(raw)
            else:
                values[name] = raw.strip()
        return cls(**values)

    @property
    def mode(self) -> str:
        return "sandbox" if self.use_sandbox else "production"

    @property
    def server_key(self) -> str:
        return self.server_key_sandbox if self.use_sandbox else self.server_key_production

    @property
    def snap_url(self) -> str:
        return self.snap_url_sandbox if self.use_sandbox else self.snap_url_production

    @property
    def status_url(self) -> str:
        return self.status_url_sandbox if self.use_sandbox else self.status_url_production

    @property
    def allowed_method_list(self) -> list[str]:
        return _parse_csv(self.allowed_methods_csv)

    @property
    def cors_origin_list(self) -> list[str]:
        return [self.default_dst]

    @property
    def vat_label(self) -> str:
        return f"VAT {self.country_vat:g}%"
