"""
Domain exceptions for the POS core.

Every error the hold, settlement and wallet services can return is one of
the classes below. Each carries an HTTP status, a human readable default
message and a stable ``default_code`` that clients match on.

Exception Hierarchy:
    PosError (base)
    ├── InvalidRequestError
    ├── AccountInactiveError
    ├── ProviderInactiveError
    ├── TenantMismatchError
    ├── PriceNotFoundError
    ├── OutOfStockError
    ├── InsufficientBalanceError
    ├── HoldNotFoundError
    ├── HoldExpiredError
    ├── ArchiveUnavailableError
    ├── QuantityLimitExceededError
    ├── UnsupportedQuantityError
    ├── TransactionInProgressError
    ├── NoActiveHoldError
    ├── TransactionFailedError
    └── NotFoundError

Usage:
    from apps.core.exceptions import InsufficientBalanceError

    if seller.wallet_amount < total:
        raise InsufficientBalanceError(wallet_amount=seller.wallet_amount)
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class PosError(APIException):
    """
    Base exception for all POS service errors.

    Raised by services and rendered by
    ``apps.core.handlers.pos_exception_handler``. Balance related errors
    pass ``wallet_amount`` so the client can show the current balance
    without another round trip.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed.'
    default_code = 'pos_error'

    def __init__(self, detail=None, code=None, wallet_amount=None):
        super().__init__(detail=detail, code=code)
        self.wallet_amount = wallet_amount

    @property
    def kind(self):
        return self.default_code


class InvalidRequestError(PosError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'invalid_request'


class AccountInactiveError(PosError):
    """Buyer account is missing or deactivated."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This account is not active.'
    default_code = 'account_inactive'


class ProviderInactiveError(PosError):
    """The buyer's owning provider is missing or deactivated."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Provider is not active.'
    default_code = 'provider_inactive'


class TenantMismatchError(PosError):
    """Cross-provider access attempt."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This resource belongs to another provider.'
    default_code = 'tenant_mismatch'


class PriceNotFoundError(PosError):
    """No usable custom price for the plan and provider."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'No card price found.'
    default_code = 'price_not_found'


class OutOfStockError(PosError):
    """Fewer Ready units than requested, or the claim lost a race."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Not enough stock available.'
    default_code = 'out_of_stock'


class InsufficientBalanceError(PosError):
    """Wallet balance does not cover the cost."""
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = 'Your wallet is not enough.'
    default_code = 'insufficient_balance'


class HoldNotFoundError(PosError):
    """No held units carry this token for the caller."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'No stock found for this hold.'
    default_code = 'hold_not_found'


class HoldExpiredError(PosError):
    """Hold outlived its TTL; units were returned to Ready."""
    status_code = status.HTTP_410_GONE
    default_detail = 'Hold expired. The card is available again.'
    default_code = 'hold_expired'


class ArchiveUnavailableError(PosError):
    """A held unit belongs to a deactivated archive batch."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This archive is not available anymore.'
    default_code = 'archive_unavailable'


class QuantityLimitExceededError(PosError):
    """Staff hold quantity above the allowed maximum."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Requested quantity exceeds the allowed maximum.'
    default_code = 'quantity_limit_exceeded'


class UnsupportedQuantityError(PosError):
    """Bulk purchase is disabled on the seller path."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'You cannot buy more than one card at the moment.'
    default_code = 'unsupported_quantity'


class TransactionInProgressError(PosError):
    """Another funding operation holds the seller's lock."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Transaction in progress.'
    default_code = 'transaction_in_progress'


class NoActiveHoldError(PosError):
    """Lock reset requested but the seller holds no funding lock."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'No active hold to reset.'
    default_code = 'no_active_hold'


class TransactionFailedError(PosError):
    """The atomic unit of work was rolled back. Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Transaction failed, please try again.'
    default_code = 'transaction_failed'


class NotFoundError(PosError):
    """Generic entity lookup miss."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'
