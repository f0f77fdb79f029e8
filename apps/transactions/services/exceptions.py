"""Domain-specific exceptions for transactions services."""
from rest_framework import status

from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InvalidStateError,
    ConflictError,
    GatewayFailureError,
)


class TransactionsServiceError(RoomyServiceError):
    """Base exception for transactions service errors that have no shared kind."""
    pass


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction does not exist."""
    default_detail = 'Transaction not found.'


class InvalidTransactionError(TransactionsServiceError):
    """Raised when the request cannot describe a valid transfer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid transaction.'
    default_code = 'invalid_transaction'


class BillNotPayableError(InvalidStateError):
    """Raised when paying a bill whose proposal has not been executed."""
    default_detail = 'Only approved bills with an executed proposal can be paid.'
    default_code = 'bill_not_payable'


class MissingSmartAccountError(InvalidStateError):
    """Raised when a deposit targets a group without a smart account."""
    default_detail = 'The group has no smart account address; cannot deposit.'
    default_code = 'missing_smart_account'


class PaymentInProgressError(ConflictError):
    """Raised when the bill already has an open or completed payment."""
    default_detail = 'This bill already has a payment in progress or completed.'
    default_code = 'payment_in_progress'


class TransferGatewayError(GatewayFailureError):
    """Raised when the transfer gateway rejects or fails a request."""
    pass


__all__ = [
    'TransactionsServiceError',
    'TransactionNotFoundError',
    'InvalidTransactionError',
    'BillNotPayableError',
    'MissingSmartAccountError',
    'PaymentInProgressError',
    'TransferGatewayError',
    'NotMemberError',
]
