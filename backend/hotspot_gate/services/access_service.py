from __future__ import annotations

from dataclasses import dataclass

from hotspot_gate.core.config import Settings
from hotspot_gate.core.errors import (
    BadRequestError,
    ClockSkewError,
    GatewayError,
    PaymentNotAuthorizedError,
    TokenExpiredError,
    TokenInvalidError,
    UpstreamFailureError,
)
from hotspot_gate.core.security import TokenCheck, TokenService, WindowPolicy, outside_window
from hotspot_gate.core.utils import epoch_now
from hotspot_gate.infrastructure.gateway_client import PaymentGateway
from hotspot_gate.infrastructure.logging import get_logger
from hotspot_gate.models.types import PaymentOrder
from hotspot_gate.services.fee_service import FeeVatCalculator
from hotspot_gate.services.payment_status_service import PaymentStatusResolver
from hotspot_gate.services.redirect_service import SessionRedirectIssuer
from hotspot_gate.services.transaction_builder import TransactionBuilder

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaymentInitiation:
    order: PaymentOrder
    gateway_token: str


class AccessGateService:
    """Request-level flows: pre-auth, payment initiation, verification and session checks."""

    def __init__(
        self,
        *,
        settings: Settings,
        token_service: TokenService,
        fee_calculator: FeeVatCalculator,
        transaction_builder: TransactionBuilder,
        gateway: PaymentGateway,
        status_resolver: PaymentStatusResolver,
        redirect_issuer: SessionRedirectIssuer,
    ) -> None:
        self.settings = settings
        self.token_service = token_service
        self.fee_calculator = fee_calculator
        self.transaction_builder = transaction_builder
        self.gateway = gateway
        self.status_resolver = status_resolver
        self.redirect_issuer = redirect_issuer

    def pre_auth(self, *, mac: str | None, timestamp: int | None, now_epoch: int | None = None) -> str:
        if not mac or not timestamp:
            raise BadRequestError("Missing parameters")
        now = epoch_now() if now_epoch is None else now_epoch
        if outside_window(timestamp, now, self.settings.preauth_window_seconds, WindowPolicy.SYMMETRIC):
            logger.info("preauth_rejected", mac=mac, skew_seconds=now - timestamp)
            raise ClockSkewError("Timestamp too far from current time")
        return self.token_service.generate(mac, timestamp)

    def initiate_payment(
        self,
        *,
        mac: str | None,
        dst: str | None,
        method: str | None,
        timestamp: int | None,
        token: str | None,
        now_epoch: int | None = None,
    ) -> PaymentInitiation:
        dst = dst or self.settings.default_dst
        method = method or self.settings.default_payment_method
        if not mac or not dst or not timestamp or not token:
            raise BadRequestError("Missing required parameters.")
        if method not in self.settings.allowed_method_list:
            raise BadRequestError("Invalid payment method")

        self._require_token(
            mac=mac,
            timestamp=timestamp,
            token=token,
            policy=WindowPolicy.AGE_ONLY,
            now_epoch=now_epoch,
        )

        amount = int(self.settings.default_amount)
        order = self.transaction_builder.build(
            device_id=mac,
            destination=dst,
            method=method,
            base_amount=amount,
            fee=self.fee_calculator.compute_fee(amount, method),
            vat=self.fee_calculator.compute_vat(amount, method),
        )
        log = logger.bind(order_id=order.order_id, mac=mac, method=method)
        try:
            gateway_token = self.gateway.create_transaction(self.transaction_builder.to_gateway_payload(order))
        except GatewayError as exc:
            log.error("transaction_create_failed", error=str(exc))
            raise UpstreamFailureError("Unable to create payment transaction") from exc

        log.info(
            "transaction_created",
            base_amount=order.base_amount,
            fee=order.fee,
            vat=order.vat,
            gross_amount=order.gross_amount,
        )
        return PaymentInitiation(order=order, gateway_token=gateway_token)

    def verify_payment(
        self,
        *,
        order_id: str | None,
        mac: str | None,
        dst: str | None,
        transaction_status: str | None,
        now_epoch: int | None = None,
    ) -> str:
        dst = dst or self.settings.default_dst
        if not order_id or not mac or not dst:
            raise BadRequestError("Missing callback parameters")

        resolution = self.status_resolver.resolve(
            order_id=order_id,
            device_id=mac,
            destination=dst,
            inline_status=transaction_status,
        )
        if not resolution.authorized:
            raise PaymentNotAuthorizedError()

        redirect_url = self.redirect_issuer.issue(mac, dst, now_epoch=now_epoch)
        logger.info("login_redirect_issued", order_id=order_id, mac=mac)
        return redirect_url

    def check_session(
        self,
        *,
        mac: str | None,
        timestamp: int | None,
        token: str | None,
        now_epoch: int | None = None,
    ) -> None:
        if not mac or not timestamp or not token:
            raise BadRequestError("Missing auth parameters")
        self._require_token(
            mac=mac,
            timestamp=timestamp,
            token=token,
            policy=WindowPolicy.SYMMETRIC,
            now_epoch=now_epoch,
        )

    def _require_token(
        self,
        *,
        mac: str,
        timestamp: int,
        token: str,
        policy: WindowPolicy,
        now_epoch: int | None,
    ) -> None:
        result = self.token_service.check(
            device_id=mac,
            timestamp=timestamp,
            candidate=token,
            window_seconds=self.settings.token_validity_seconds,
            now_epoch=now_epoch,
            policy=policy,
        )
        if result is TokenCheck.EXPIRED:
            logger.info("token_expired", mac=mac, policy=policy.value)
            raise TokenExpiredError("Token expired")
        if result is TokenCheck.MISMATCH:
            logger.warning("token_mismatch", mac=mac)
            raise TokenInvalidError("Invalid token")
