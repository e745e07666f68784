from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransactionOutcome(str, Enum):
    SETTLED = "settlement"
    CAPTURED = "capture"
    PENDING = "pending"
    OTHER = "other"

    @classmethod
    def classify(cls, status: str | None) -> "TransactionOutcome":
        normalized = str(status or "")
        for outcome in (cls.SETTLED, cls.CAPTURED, cls.PENDING):
            if normalized == outcome.value:
                return outcome
        return cls.OTHER

    @property
    def authorizing(self) -> bool:
        return self in {TransactionOutcome.SETTLED, TransactionOutcome.CAPTURED}


class ResolutionState(str, Enum):
    AUTHORIZED = "authorized"
    NOT_AUTHORIZED = "not_authorized"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class LineItem:
    id: str
    name: str
    price: int
    quantity: int = 1

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "price": self.price, "quantity": self.quantity, "name": self.name}


@dataclass(frozen=True)
class PaymentOrder:
    order_id: str
    device_id: str
    destination: str
    payment_method: str
    base_amount: int
    fee: int
    vat: int
    callback_url: str
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def gross_amount(self) -> int:
        return self.base_amount + self.fee + self.vat


@dataclass(frozen=True)
class PaymentResolution:
    order_id: str
    state: ResolutionState
    status: str | None = None
    queried_gateway: bool = False
    error: str | None = None

    @property
    def authorized(self) -> bool:
        return self.state is ResolutionState.AUTHORIZED

    @property
    def outcome(self) -> TransactionOutcome:
        return TransactionOutcome.classify(self.status)
