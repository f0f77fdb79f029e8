# ==========================================
# apps/recurring/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
import uuid

from apps.bills.models import Currency, address_validator


class Frequency(models.TextChoices):
    DAILY = 'DAILY', 'Daily'
    WEEKLY = 'WEEKLY', 'Weekly'
    BIWEEKLY = 'BIWEEKLY', 'Every two weeks'
    MONTHLY = 'MONTHLY', 'Monthly'
    QUARTERLY = 'QUARTERLY', 'Quarterly'
    YEARLY = 'YEARLY', 'Yearly'


class RecurringBill(models.Model):
    """Schedule that turns into a new bill every period."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='recurring_bills')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    amount = models.DecimalField(
        max_digits=20,
        decimal_places=8,
        validators=[MinValueValidator(Decimal('0.00000001'))]
    )
    currency = models.CharField(max_length=10, choices=Currency.choices, default=Currency.USDC)
    payee_address = models.CharField(max_length=42, validators=[address_validator])
    frequency = models.CharField(max_length=20, choices=Frequency.choices)
    start_date = models.DateTimeField()
    next_due_date = models.DateTimeField()
    end_date = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    auto_propose = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'recurring_bills'
        indexes = [
            models.Index(fields=['is_active', 'next_due_date'], name='recurring_b_is_acti_5e7c12_idx'),
        ]
        ordering = ['next_due_date']

    def __str__(self):
        return f"{self.title} ({self.frequency})"
