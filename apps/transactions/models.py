# ==========================================
# apps/transactions/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
import uuid

from apps.bills.models import Currency


class TransactionStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PROCESSING = 'PROCESSING', 'Processing'
    COMPLETED = 'COMPLETED', 'Completed'
    FAILED = 'FAILED', 'Failed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TransactionType(models.TextChoices):
    BILL_PAYMENT = 'BILL_PAYMENT', 'Bill payment'
    DEPOSIT = 'DEPOSIT', 'Deposit'
    WITHDRAWAL = 'WITHDRAWAL', 'Withdrawal'
    REFUND = 'REFUND', 'Refund'
    TRANSFER = 'TRANSFER', 'Transfer'


class Transaction(models.Model):
    """
    A movement of funds requested through the transfer gateway.

    metadata holds the destination address and the gateway intent id.
    """

    TERMINAL_STATUSES = (
        TransactionStatus.COMPLETED,
        TransactionStatus.FAILED,
        TransactionStatus.CANCELLED,
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey(
        'bills.Bill',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='transactions')
    sender = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='sent_transactions'
    )
    receiver = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='received_transactions'
    )
    amount = models.DecimalField(
        max_digits=20,
        decimal_places=8,
        validators=[MinValueValidator(Decimal('0.00000001'))]
    )
    currency = models.CharField(max_length=10, choices=Currency.choices, default=Currency.USDC)
    tx_hash = models.CharField(max_length=66, unique=True, null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING
    )
    type = models.CharField(max_length=20, choices=TransactionType.choices)
    description = models.TextField(blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['group', 'created_at'], name='transaction_group_i_4f2a90_idx'),
            models.Index(fields=['status'], name='transaction_status_8d61c2_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} {self.amount} {self.currency} ({self.status})"

    @property
    def intent_id(self):
        return (self.metadata or {}).get('intent_id')

    @property
    def destination(self):
        return (self.metadata or {}).get('destination')
