from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from enum import Enum

from hotspot_gate.core.utils import epoch_now


class WindowPolicy(str, Enum):
    """How the distance between a token's timestamp and now is measured."""

    SYMMETRIC = "symmetric"
    AGE_ONLY = "age_only"


class TokenCheck(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


def token_message(device_id: str, timestamp: int) -> bytes:
    """Canonical signing input: decimal timestamp immediately followed by the device id."""
    return f"{int(timestamp)}{device_id}".encode("utf-8")


def _sign(message: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def outside_window(timestamp: int, now_epoch: int, window_seconds: int, policy: WindowPolicy) -> bool:
    delta = now_epoch - int(timestamp)
    if policy is WindowPolicy.AGE_ONLY:
        return delta > window_seconds
    return abs(delta) > window_seconds


@dataclass(frozen=True)
class TokenService:
    """Stateless HMAC-SHA256 tokens bound to a device identifier and a unix timestamp.

    Nothing is stored: a token is valid exactly when recomputing it from
    ``(device_id, timestamp)`` under the shared secret reproduces it and the
    timestamp falls inside the caller's window.
    """

    secret: str

    def generate(self, device_id: str, timestamp: int) -> str:
        return _sign(token_message(device_id, timestamp), self.secret)

    def matches(self, device_id: str, timestamp: int, candidate: str) -> bool:
        expected = self.generate(device_id, timestamp)
        return hmac.compare_digest(expected.encode("ascii"), str(candidate).encode("utf-8"))

    def check(
        self,
        *,
        device_id: str,
        timestamp: int,
        candidate: str,
        window_seconds: int,
        now_epoch: int | None = None,
        policy: WindowPolicy = WindowPolicy.SYMMETRIC,
    ) -> TokenCheck:
        now = epoch_now() if now_epoch is None else now_epoch
        if outside_window(timestamp, now, window_seconds, policy):
            return TokenCheck.EXPIRED
        if not self.matches(device_id, timestamp, candidate):
            return TokenCheck.MISMATCH
        return TokenCheck.VALID

    def verify(
        self,
        device_id: str,
        timestamp: int,
        candidate: str,
        window_seconds: int,
        now_epoch: int | None = None,
        policy: WindowPolicy = WindowPolicy.SYMMETRIC,
    ) -> bool:
        result = self.check(
            device_id=device_id,
            timestamp=timestamp,
            candidate=candidate,
            window_seconds=window_seconds,
            now_epoch=now_epoch,
            policy=policy,
        )
        return result is TokenCheck.VALID
