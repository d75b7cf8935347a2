"""Payment domain specific exceptions."""


class PaymentError(Exception):
    """Base class for payment intake and reconciliation errors."""


class ValidationError(PaymentError):
    """Raised when a purchase request carries an unusable amount."""


class RateUnavailable(PaymentError):
    """Raised when the exchange rate source is unreachable or returns malformed data."""


class ProcessorRejected(PaymentError):
    """Raised when the payment processor refuses to create a checkout session."""


class MalformedPayload(PaymentError):
    """Raised when a webhook body cannot be parsed into an event envelope."""


class SignatureInvalid(PaymentError):
    """Raised when a webhook signature does not match the shared secret."""


class TokenCollisionError(PaymentError):
    """Raised when a freshly generated trade number already exists."""


class TradeNotFoundError(PaymentError):
    """Raised when no trade carries the requested trade number."""


class GatewayNotFoundError(PaymentError):
    """Raised when a gateway name is not registered."""
