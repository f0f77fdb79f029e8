"""
Service layer unit tests for transactions app.

The gateway fixture replaces the transfer gateway with an in-memory fake.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.bills.models import Bill, BillStatus
from apps.bills.services import BillNotFoundError
from apps.proposals.models import ProposalStatus
from apps.transactions.models import Transaction, TransactionStatus, TransactionType
from apps.transactions.services import (
    create_transaction,
    refresh_transaction_status,
    get_transaction_by_id,
    get_group_transactions,
    get_user_transactions,
)
from apps.transactions.services.exceptions import (
    TransactionNotFoundError,
    InvalidTransactionError,
    BillNotPayableError,
    MissingSmartAccountError,
    PaymentInProgressError,
    TransferGatewayError,
)
from apps.transactions.services.gateway import (
    INTENT_COMPLETED,
    INTENT_FAILED,
    IntentStatus,
)
from apps.common.exceptions import NotMemberError


DESTINATION = '0x' + 'ef' * 20


# =============================================================================
# Bill Payment Tests
# =============================================================================

@pytest.mark.django_db
class TestBillPayment:

    def test_pay_executed_bill(self, gateway, payable_bill, group_member):
        tx = create_transaction(
            user=group_member,
            type=TransactionType.BILL_PAYMENT,
            bill_id=payable_bill.id,
        )

        assert tx.status == TransactionStatus.PENDING
        assert tx.amount == Decimal('900.00')
        assert tx.currency == 'USDC'
        assert tx.group_id == payable_bill.group_id
        assert tx.destination == payable_bill.payee_address
        assert tx.intent_id == 'intent_1'

        destination, minor_units, params = gateway.created[0]
        assert destination == payable_bill.payee_address
        assert minor_units == 900_000_000
        assert params['metadata']['transactionId'] == str(tx.id)

    def test_unexecuted_bill_not_payable(self, gateway, payable_bill, group_member):
        payable_bill.proposal.status = ProposalStatus.APPROVED
        payable_bill.proposal.save()

        with pytest.raises(BillNotPayableError):
            create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

        assert gateway.created == []
        assert not Transaction.objects.exists()

    def test_draft_bill_not_payable(self, gateway, draft_bill, group_member):
        with pytest.raises(BillNotPayableError):
            create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=draft_bill.id)

    def test_bill_payment_requires_bill(self, gateway, group, group_member):
        with pytest.raises(InvalidTransactionError):
            create_transaction(
                user=group_member,
                type=TransactionType.BILL_PAYMENT,
                group_id=group.id,
                amount=Decimal('10'),
            )

    def test_second_payment_rejected(self, gateway, payable_bill, group_member, another_member):
        create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

        with pytest.raises(PaymentInProgressError):
            create_transaction(user=another_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

        assert Transaction.objects.count() == 1
        assert len(gateway.created) == 1

    def test_retry_after_failed_payment(self, gateway, payable_bill, group_member):
        first = create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)
        Transaction.objects.filter(id=first.id).update(status=TransactionStatus.FAILED)

        second = create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

        assert second.id != first.id

    def test_outsider_cannot_pay(self, gateway, payable_bill, outsider):
        with pytest.raises(NotMemberError):
            create_transaction(user=outsider, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

    def test_unknown_bill(self, gateway, group_member):
        with pytest.raises(BillNotFoundError):
            create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=uuid4())


# =============================================================================
# Deposit And Transfer Tests
# =============================================================================

@pytest.mark.django_db
class TestOtherTransactions:

    def test_deposit_defaults_to_smart_account(self, gateway, group, group_member):
        tx = create_transaction(
            user=group_member,
            type=TransactionType.DEPOSIT,
            group_id=group.id,
            amount=Decimal('0.5'),
            currency='ETH',
        )

        assert tx.destination == group.smart_account_address
        assert gateway.created[0][:2] == (group.smart_account_address, 5 * 10 ** 17)

    def test_deposit_without_smart_account(self, gateway, group, group_member):
        group.smart_account_address = None
        group.save()

        with pytest.raises(MissingSmartAccountError):
            create_transaction(
                user=group_member,
                type=TransactionType.DEPOSIT,
                group_id=group.id,
                amount=Decimal('1'),
            )

    def test_transfer_to_address(self, gateway, group, group_member, another_member):
        tx = create_transaction(
            user=group_member,
            type=TransactionType.TRANSFER,
            group_id=group.id,
            receiver_id=another_member.id,
            amount=Decimal('12.5'),
            to_address=DESTINATION,
            metadata={'note': 'pizza'},
        )

        assert tx.receiver == another_member
        assert tx.metadata['note'] == 'pizza'
        assert tx.metadata['destination'] == DESTINATION

    def test_record_without_destination(self, gateway, group, group_member):
        tx = create_transaction(
            user=group_member,
            type=TransactionType.REFUND,
            group_id=group.id,
            amount=Decimal('3'),
        )

        assert tx.intent_id is None
        assert gateway.created == []

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-1'), None])
    def test_amount_must_be_positive(self, gateway, group, group_member, amount):
        with pytest.raises(InvalidTransactionError):
            create_transaction(
                user=group_member,
                type=TransactionType.TRANSFER,
                group_id=group.id,
                amount=amount,
                to_address=DESTINATION,
            )

    def test_invalid_address(self, gateway, group, group_member):
        with pytest.raises(InvalidTransactionError):
            create_transaction(
                user=group_member,
                type=TransactionType.TRANSFER,
                group_id=group.id,
                amount=Decimal('1'),
                to_address='0xnope',
            )

    def test_group_or_bill_required(self, gateway, group_member):
        with pytest.raises(InvalidTransactionError):
            create_transaction(user=group_member, type=TransactionType.DEPOSIT, amount=Decimal('1'))


# =============================================================================
# Gateway Failure Tests
# =============================================================================

@pytest.mark.django_db
class TestGatewayFailure:

    def test_failure_leaves_pending_row(self, gateway, payable_bill, group_member):
        gateway.fail = True

        with pytest.raises(TransferGatewayError):
            create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

        tx = Transaction.objects.get()
        assert tx.status == TransactionStatus.PENDING
        assert tx.intent_id is None
        payable_bill.refresh_from_db()
        assert payable_bill.status == BillStatus.APPROVED


# =============================================================================
# Status Refresh Tests
# =============================================================================

@pytest.mark.django_db
class TestRefreshStatus:

    @pytest.fixture
    def submitted(self, gateway, payable_bill, group_member):
        return create_transaction(user=group_member, type=TransactionType.BILL_PAYMENT, bill_id=payable_bill.id)

    def test_completed_marks_bill_paid(self, gateway, submitted, another_member):
        gateway.status = IntentStatus(status=INTENT_COMPLETED, tx_hash='0x' + '12' * 32)
        approved_at = Bill.objects.get(id=submitted.bill_id).updated_at

        tx = refresh_transaction_status(user=another_member, transaction_id=submitted.id)

        assert tx.status == TransactionStatus.COMPLETED
        assert tx.tx_hash == '0x' + '12' * 32
        submitted.bill.refresh_from_db()
        assert submitted.bill.status == BillStatus.PAID
        assert submitted.bill.updated_at > approved_at

    def test_pending_becomes_processing(self, gateway, submitted, group_member):
        tx = refresh_transaction_status(user=group_member, transaction_id=submitted.id)

        assert tx.status == TransactionStatus.PROCESSING
        submitted.bill.refresh_from_db()
        assert submitted.bill.status == BillStatus.APPROVED

    def test_failed_intent(self, gateway, submitted, group_member):
        gateway.status = IntentStatus(status=INTENT_FAILED)

        tx = refresh_transaction_status(user=group_member, transaction_id=submitted.id)

        assert tx.status == TransactionStatus.FAILED

    def test_terminal_transaction_unchanged(self, gateway, submitted, group_member):
        Transaction.objects.filter(id=submitted.id).update(status=TransactionStatus.FAILED)
        gateway.status = IntentStatus(status=INTENT_COMPLETED, tx_hash='0xabc')

        tx = refresh_transaction_status(user=group_member, transaction_id=submitted.id)

        assert tx.status == TransactionStatus.FAILED
        assert tx.tx_hash is None

    def test_gateway_error_keeps_status(self, gateway, submitted, group_member):
        gateway.fail = True

        with pytest.raises(TransferGatewayError):
            refresh_transaction_status(user=group_member, transaction_id=submitted.id)

        submitted.refresh_from_db()
        assert submitted.status == TransactionStatus.PENDING

    def test_no_intent(self, gateway, group, group_member):
        tx = create_transaction(user=group_member, type=TransactionType.REFUND, group_id=group.id, amount=Decimal('1'))

        with pytest.raises(InvalidTransactionError):
            refresh_transaction_status(user=group_member, transaction_id=tx.id)

    def test_unknown_transaction(self, gateway, group_member):
        with pytest.raises(TransactionNotFoundError):
            refresh_transaction_status(user=group_member, transaction_id=uuid4())


# =============================================================================
# Query Tests
# =============================================================================

@pytest.mark.django_db
class TestTransactionQueries:

    def test_get_transaction(self, gateway, group, group_member, another_member, outsider):
        tx = create_transaction(user=group_member, type=TransactionType.REFUND, group_id=group.id, amount=Decimal('1'))

        assert get_transaction_by_id(transaction_id=tx.id, user=another_member) == tx
        with pytest.raises(NotMemberError):
            get_transaction_by_id(transaction_id=tx.id, user=outsider)

    def test_group_and_user_listing(self, gateway, group, group_member, another_member):
        deposit = create_transaction(
            user=group_member, type=TransactionType.DEPOSIT, group_id=group.id, amount=Decimal('1')
        )
        refund = create_transaction(
            user=another_member, type=TransactionType.REFUND, group_id=group.id, amount=Decimal('2')
        )

        assert set(get_group_transactions(group_id=group.id, user=group_member)) == {deposit, refund}
        assert list(get_group_transactions(
            group_id=group.id, user=group_member, type=TransactionType.DEPOSIT
        )) == [deposit]
        assert list(get_user_transactions(user=another_member)) == [refund]
