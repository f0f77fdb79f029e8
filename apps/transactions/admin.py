# ==========================================
# apps/transactions/admin.py
# ==========================================

from django.contrib import admin
from apps.transactions.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transactions."""

    list_display = ['id', 'type', 'amount', 'currency', 'status', 'group', 'sender', 'created_at']
    list_filter = ['type', 'status', 'currency', 'created_at']
    search_fields = ['tx_hash', 'group__name', 'sender__email', 'description']
    readonly_fields = ['tx_hash', 'metadata', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('group', 'sender', 'bill')
