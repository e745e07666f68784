from __future__ import annotations


class AccessGateError(Exception):
    """Base for failures scoped to a single request."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AccessGateError):
    status_code = 400
    code = "BAD_REQUEST"


class ClockSkewError(AccessGateError):
    status_code = 403
    code = "TIMESTAMP_OUT_OF_WINDOW"


class TokenInvalidError(AccessGateError):
    status_code = 403
    code = "INVALID_TOKEN"


class TokenExpiredError(AccessGateError):
    """Rendered as a soft client-side redirect rather than an error status."""

    status_code = 200
    code = "TOKEN_EXPIRED"


class UpstreamFailureError(AccessGateError):
    status_code = 502
    code = "UPSTREAM_FAILURE"


class PaymentNotAuthorizedError(AccessGateError):
    status_code = 403
    code = "PAYMENT_NOT_COMPLETED"

    def __init__(self, message: str = "Payment not yet completed") -> None:
        super().__init__(message)


class GatewayError(RuntimeError):
    """Raised by gateway adapters for transport, status or payload failures."""
