# ==========================================
# apps/recurring/admin.py
# ==========================================

from django.contrib import admin
from apps.recurring.models import RecurringBill


@admin.register(RecurringBill)
class RecurringBillAdmin(admin.ModelAdmin):
    """Admin interface for recurring bill schedules."""

    list_display = ['title', 'group', 'amount', 'currency', 'frequency', 'next_due_date', 'is_active']
    list_filter = ['frequency', 'is_active', 'auto_propose']
    search_fields = ['title', 'group__name', 'payee_address']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['next_due_date']
