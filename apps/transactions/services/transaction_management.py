"""
Transaction service.

A transaction row is committed as PENDING before the gateway is called,
and the gateway is never called while a database transaction is open. A
gateway failure therefore leaves a PENDING row behind for reconciliation
instead of a FAILED one: the provider may have accepted the intent even
though we did not hear back.
"""

import logging
import re
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.common.exceptions import ConflictError
from apps.bills.models import Bill, BillStatus, Currency
from apps.bills.services import BillNotFoundError
from apps.groups.models import Group
from apps.groups.services import GroupNotFoundError, require_membership
from apps.proposals.models import ProposalStatus
from apps.transactions.models import Transaction, TransactionStatus, TransactionType

from .exceptions import (
    TransactionNotFoundError,
    InvalidTransactionError,
    BillNotPayableError,
    MissingSmartAccountError,
    PaymentInProgressError,
    TransferGatewayError,
)
from .gateway import (
    INTENT_COMPLETED,
    INTENT_FAILED,
    chain_params_for,
    get_transfer_gateway,
    to_minor_units,
)


logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r'^0x[0-9a-fA-F]{40}$')

OPEN_PAYMENT_STATUSES = (
    TransactionStatus.PENDING,
    TransactionStatus.PROCESSING,
    TransactionStatus.COMPLETED,
)


def _check_bill_payable(bill: Bill) -> None:
    proposal = getattr(bill, 'proposal', None)
    if (
        bill.status != BillStatus.APPROVED
        or proposal is None
        or proposal.status != ProposalStatus.EXECUTED
    ):
        raise BillNotPayableError()


def create_transaction(
    *,
    user: User,
    type: str,
    amount: Optional[Decimal] = None,
    currency: Optional[str] = None,
    bill_id: Optional[UUID] = None,
    group_id: Optional[UUID] = None,
    receiver_id: Optional[UUID] = None,
    to_address: Optional[str] = None,
    description: str = '',
    metadata: Optional[dict] = None,
) -> Transaction:
    """
    Record a transaction and request the transfer from the gateway.

    The group comes from the bill when a bill is given. A BILL_PAYMENT
    defaults its amount, currency and destination to the bill's; a DEPOSIT
    defaults its destination to the group's smart account.

    Args:
        user: Sender (must be an active member)
        type: One of TransactionType values
        amount: Positive amount (required unless paying a bill)
        currency: One of Currency values
        bill_id: Bill being paid or referenced
        group_id: Group, when no bill is given
        receiver_id: Optional receiving user
        to_address: Destination address (defaulted per type)
        description: Optional description
        metadata: Extra data stored with the transaction

    Returns:
        Transaction; metadata carries the gateway intent id once requested

    Raises:
        InvalidTransactionError: If amount, group or address are invalid
        BillNotFoundError / GroupNotFoundError: If references don't resolve
        NotMemberError: If user is not an active member
        BillNotPayableError: If a paid bill isn't APPROVED with an EXECUTED proposal
        PaymentInProgressError: If the bill already has an open or completed payment
        MissingSmartAccountError: If a deposit has no destination
        TransferGatewayError: If the gateway call fails (row stays PENDING)
    """
    bill = None
    if bill_id:
        try:
            bill = Bill.objects.select_related('proposal').get(id=bill_id)
        except Bill.DoesNotExist:
            raise BillNotFoundError()
        group_id = bill.group_id
    elif type == TransactionType.BILL_PAYMENT:
        raise InvalidTransactionError("A bill payment requires a bill")

    if not group_id:
        raise InvalidTransactionError("A group or a bill is required")

    try:
        group = Group.objects.get(id=group_id, is_active=True)
    except Group.DoesNotExist:
        raise GroupNotFoundError()

    require_membership(user=user, group_id=group.id)

    if type == TransactionType.BILL_PAYMENT:
        _check_bill_payable(bill)
        amount = amount if amount is not None else bill.total_amount
        currency = currency or bill.currency
        to_address = to_address or bill.payee_address
    elif type == TransactionType.DEPOSIT and not to_address:
        if not group.smart_account_address:
            raise MissingSmartAccountError()
        to_address = group.smart_account_address

    if amount is None or Decimal(amount) <= 0:
        raise InvalidTransactionError("Amount must be a positive number")
    currency = currency or Currency.USDC
    if to_address and not ADDRESS_RE.match(to_address):
        raise InvalidTransactionError("Invalid destination address")

    with transaction.atomic():
        if bill is not None and type == TransactionType.BILL_PAYMENT:
            # Serialize concurrent payments of the same bill
            Bill.objects.select_for_update().get(id=bill.id)
            if Transaction.objects.filter(
                bill=bill,
                type=TransactionType.BILL_PAYMENT,
                status__in=OPEN_PAYMENT_STATUSES,
            ).exists():
                raise PaymentInProgressError()

        tx = Transaction.objects.create(
            bill=bill,
            group=group,
            sender=user,
            receiver_id=receiver_id,
            amount=amount,
            currency=currency,
            status=TransactionStatus.PENDING,
            type=type,
            description=description,
            metadata={**(metadata or {}), 'destination': to_address},
        )

    if not to_address:
        return tx

    gateway = get_transfer_gateway()
    try:
        intent_id = gateway.create_intent(
            to_address,
            to_minor_units(tx.amount, currency),
            chain_params_for(currency, {
                'transactionId': str(tx.id),
                'transactionType': type,
                'groupId': str(group.id),
            }),
        )
    except TransferGatewayError:
        logger.warning("Transfer intent for transaction %s failed; left PENDING", tx.id)
        raise

    tx.metadata = {**tx.metadata, 'intent_id': intent_id}
    tx.save(update_fields=['metadata', 'updated_at'])

    logger.info("Transaction %s (%s) submitted as intent %s", tx.id, type, intent_id)
    return tx


def refresh_transaction_status(*, user: User, transaction_id: UUID) -> Transaction:
    """
    Pull the intent status from the gateway and apply it.

    completed -> COMPLETED with tx hash (a bill payment marks its bill PAID),
    failed -> FAILED, pending -> PROCESSING. Terminal transactions are
    returned unchanged.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        NotMemberError: If user is not an active member
        InvalidTransactionError: If no intent was ever created
        TransferGatewayError: If the gateway call fails (row unchanged)
    """
    try:
        tx = Transaction.objects.get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError()

    require_membership(user=user, group_id=tx.group_id)

    if tx.status in Transaction.TERMINAL_STATUSES:
        return tx
    if not tx.intent_id:
        raise InvalidTransactionError("This transaction has no transfer intent to check")

    intent = get_transfer_gateway().get_intent_status(tx.intent_id)

    with transaction.atomic():
        tx = Transaction.objects.select_for_update().get(id=transaction_id)
        if tx.status in Transaction.TERMINAL_STATUSES:
            return tx

        update_fields = ['status', 'updated_at']
        if intent.status == INTENT_COMPLETED:
            tx.status = TransactionStatus.COMPLETED
            if intent.tx_hash:
                tx.tx_hash = intent.tx_hash
                update_fields.append('tx_hash')
            if tx.type == TransactionType.BILL_PAYMENT and tx.bill_id:
                Bill.objects.filter(id=tx.bill_id).update(status=BillStatus.PAID, updated_at=timezone.now())
        elif intent.status == INTENT_FAILED:
            tx.status = TransactionStatus.FAILED
        else:
            tx.status = TransactionStatus.PROCESSING

        try:
            with transaction.atomic():
                tx.save(update_fields=update_fields)
        except IntegrityError:
            raise ConflictError("Another transaction already records this hash")

    logger.info("Transaction %s is now %s", tx.id, tx.status)
    return tx
