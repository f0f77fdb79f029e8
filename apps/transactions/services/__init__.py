"""
Transactions app services layer.

Recording transfers and reconciling them with the transfer gateway.
"""

from .exceptions import (
    TransactionsServiceError,
    TransactionNotFoundError,
    InvalidTransactionError,
    BillNotPayableError,
    MissingSmartAccountError,
    PaymentInProgressError,
    TransferGatewayError,
)

from .gateway import (
    IntentStatus,
    TransferGateway,
    OpenfortGateway,
    MockTransferGateway,
    get_transfer_gateway,
    to_minor_units,
    encode_erc20_transfer,
)

from .transaction_management import (
    create_transaction,
    refresh_transaction_status,
)

from .transaction_queries import (
    get_transaction_by_id,
    get_group_transactions,
    get_user_transactions,
)


__all__ = [
    # Exceptions
    'TransactionsServiceError',
    'TransactionNotFoundError',
    'InvalidTransactionError',
    'BillNotPayableError',
    'MissingSmartAccountError',
    'PaymentInProgressError',
    'TransferGatewayError',

    # Gateway
    'IntentStatus',
    'TransferGateway',
    'OpenfortGateway',
    'MockTransferGateway',
    'get_transfer_gateway',
    'to_minor_units',
    'encode_erc20_transfer',

    # Transactions
    'create_transaction',
    'refresh_transaction_status',

    # Queries
    'get_transaction_by_id',
    'get_group_transactions',
    'get_user_transactions',
]
