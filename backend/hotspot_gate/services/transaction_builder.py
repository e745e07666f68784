from __future__ import annotations

import uuid
from typing import Any, Callable
from urllib.parse import urlencode

from hotspot_gate.core.config import Settings
from hotspot_gate.core.utils import encode_uri_component, epoch_millis
from hotspot_gate.models.types import LineItem, PaymentOrder


class TransactionBuilder:
    def __init__(self, settings: Settings, clock_millis: Callable[[], int] = epoch_millis) -> None:
        self.settings = settings
        self._clock_millis = clock_millis

    def new_order_id(self, device_id: str) -> str:
        # Millisecond clock plus a random suffix keeps retries from the same device distinct.
        return f"{self.settings.order_id_prefix}-{device_id}-{self._clock_millis()}-{uuid.uuid4().hex[:6]}"

    def callback_url(self, *, order_id: str, device_id: str, destination: str, base_url: str | None = None) -> str:
        base = base_url or self.settings.payment_callback_url
        query = urlencode(
            {"order_id": order_id, "mac": device_id, "dst": destination},
            quote_via=lambda value, *_: encode_uri_component(value),
        )
        separator = "&" if "?" in base else "?"
        return f"{base}{separator}{query}"

    def build(
        self,
        *,
        device_id: str,
        destination: str,
        method: str,
        base_amount: int,
        fee: int,
        vat: int,
        callback_base_url: str | None = None,
    ) -> PaymentOrder:
        order_id = self.new_order_id(device_id)
        line_items = (
            LineItem(id=order_id, name="Internet Hotspot", price=base_amount),
            LineItem(id="fee", name="Settlement Fee", price=fee),
            LineItem(id="vat", name=self.settings.vat_label, price=vat),
        )
        return PaymentOrder(
            order_id=order_id,
            device_id=device_id,
            destination=destination,
            payment_method=method,
            base_amount=base_amount,
            fee=fee,
            vat=vat,
            callback_url=self.callback_url(
                order_id=order_id,
                device_id=device_id,
                destination=destination,
                base_url=callback_base_url,
            ),
            line_items=line_items,
        )

    @staticmethod
    def to_gateway_payload(order: PaymentOrder) -> dict[str, Any]:
        return {
            "transaction_details": {
                "order_id": order.order_id,
                "gross_amount": order.gross_amount,
            },
            "item_details": [item.to_payload() for item in order.line_items],
            "customer_details": {
                "first_name": order.device_id,
                "email": f"{order.device_id}@mail.com",
            },
            "callbacks": {"finish": order.callback_url},
            "enabled_payments": [order.payment_method],
        }
