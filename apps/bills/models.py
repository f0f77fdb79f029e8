# ==========================================
# apps/bills/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
import uuid


address_validator = RegexValidator(
    regex=r'^0x[0-9a-fA-F]{40}$',
    message='Must be a 0x-prefixed 40 hex character address.',
)


class Currency(models.TextChoices):
    USDC = 'USDC', 'USDC'
    ETH = 'ETH', 'Ether'
    MATIC = 'MATIC', 'Matic'


class BillStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    PROPOSED = 'PROPOSED', 'Proposed'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    PAID = 'PAID', 'Paid'
    CANCELLED = 'CANCELLED', 'Cancelled'


class Bill(models.Model):
    """A shared expense owed by a group to a payee."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='bills')
    created_by = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='created_bills')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    total_amount = models.DecimalField(
        max_digits=20,
        decimal_places=8,
        validators=[MinValueValidator(Decimal('0.00000001'))]
    )
    currency = models.CharField(max_length=10, choices=Currency.choices, default=Currency.USDC)
    due_date = models.DateTimeField(null=True, blank=True)
    payee_address = models.CharField(max_length=42, validators=[address_validator])
    category = models.ForeignKey(
        'budgets.BudgetCategory',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bills'
    )
    attachment_url = models.URLField(max_length=500, blank=True)
    status = models.CharField(max_length=20, choices=BillStatus.choices, default=BillStatus.DRAFT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bills'
        indexes = [
            models.Index(fields=['group', 'status'], name='bills_group_i_7a3e21_idx'),
            models.Index(fields=['created_by', 'created_at'], name='bills_created_9f1b44_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.total_amount} {self.currency})"


class BillItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='items')
    description = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=20,
        decimal_places=8,
        validators=[MinValueValidator(Decimal('0'))]
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'bill_items'
        ordering = ['position']

    def __str__(self):
        return f"{self.description} x{self.quantity}"
