from __future__ import annotations

from typing import Any

from hotspot_gate.core.errors import GatewayError
from hotspot_gate.infrastructure.gateway_client import PaymentGateway
from hotspot_gate.infrastructure.logging import get_logger
from hotspot_gate.models.types import PaymentResolution, ResolutionState, TransactionOutcome

logger = get_logger(__name__)


class PaymentStatusResolver:
    """Decides whether a transaction authorizes access.

    An in-band ``transaction_status`` (as appended by the gateway to its finish
    redirect) is classified directly. Without one, the gateway is asked once;
    a failed lookup leaves the transaction unresolved, which never authorizes.
    Only settlement and capture authorize; pending, deny, expire, cancel and
    anything unrecognised are treated alike.
    """

    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    def resolve(
        self,
        *,
        order_id: str,
        device_id: str,
        destination: str,
        inline_status: str | None = None,
    ) -> PaymentResolution:
        log = logger.bind(order_id=order_id, mac=device_id)
        if inline_status:
            return self._classify(order_id=order_id, status=inline_status, queried=False, log=log)

        try:
            status = self.gateway.query_status(order_id)
        except GatewayError as exc:
            log.warning("payment_status_unresolved", error=str(exc))
            return PaymentResolution(
                order_id=order_id,
                state=ResolutionState.UNRESOLVED,
                queried_gateway=True,
                error=str(exc),
            )
        return self._classify(order_id=order_id, status=status, queried=True, log=log)

    @staticmethod
    def _classify(*, order_id: str, status: str | None, queried: bool, log: Any) -> PaymentResolution:
        outcome = TransactionOutcome.classify(status)
        state = ResolutionState.AUTHORIZED if outcome.authorizing else ResolutionState.NOT_AUTHORIZED
        log.info(
            "payment_status_classified",
            status=status,
            outcome=outcome.value,
            state=state.value,
            queried_gateway=queried,
        )
        return PaymentResolution(order_id=order_id, state=state, status=status, queried_gateway=queried)
