from __future__ import annotations

from hotspot_gate.core.config import Settings
from hotspot_gate.core.security import TokenService
from hotspot_gate.infrastructure.gateway_client import MidtransGatewayClient
from hotspot_gate.services.access_service import AccessGateService
from hotspot_gate.services.fee_service import FeeVatCalculator
from hotspot_gate.services.payment_status_service import PaymentStatusResolver
from hotspot_gate.services.redirect_service import SessionRedirectIssuer
from hotspot_gate.services.transaction_builder import TransactionBuilder


class Container:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self.token_service = TokenService(secret=self.settings.token_secret)
        self.fee_calculator = FeeVatCalculator(vat_percent=self.settings.country_vat)
        self.transaction_builder = TransactionBuilder(settings=self.settings)
        self.gateway_client = MidtransGatewayClient(settings=self.settings)
        self.payment_status_resolver = PaymentStatusResolver(gateway=self.gateway_client)
        self.redirect_issuer = SessionRedirectIssuer(
            settings=self.settings,
            token_service=self.token_service,
        )
        self.access_service = AccessGateService(
            settings=self.settings,
            token_service=self.token_service,
            fee_calculator=self.fee_calculator,
            transaction_builder=self.transaction_builder,
            gateway=self.gateway_client,
            status_resolver=self.payment_status_resolver,
            redirect_issuer=self.redirect_issuer,
        )


container = Container()

# Re-exported for routes and tests
settings = container.settings
token_service = container.token_service
fee_calculator = container.fee_calculator
transaction_builder = container.transaction_builder
gateway_client = container.gateway_client
payment_status_resolver = container.payment_status_resolver
redirect_issuer = container.redirect_issuer
access_service = container.access_service
