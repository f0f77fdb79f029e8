# ==========================================
# apps/budgets/models.py
# ==========================================

from decimal import Decimal

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
import uuid


color_validator = RegexValidator(
    regex=r'^#[0-9a-fA-F]{6}$',
    message='Must be a hex color such as #1A2B3C.',
)


class BudgetCategory(models.Model):
    """Spending category a group files its bills under, with an optional monthly limit."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='budget_categories')
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, blank=True, validators=[color_validator])
    icon = models.CharField(max_length=50, blank=True)
    monthly_limit = models.DecimalField(
        max_digits=20,
        decimal_places=8,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))]
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'budget_categories'
        indexes = [
            models.Index(fields=['group', 'is_active'], name='budget_cate_group_i_2c8d4f_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'budget categories'

    def __str__(self):
        return f"{self.name} ({self.group_id})"
