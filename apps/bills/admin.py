# ==========================================
# apps/bills/admin.py
# ==========================================

from django.contrib import admin
from apps.bills.models import Bill, BillItem


class BillItemInline(admin.TabularInline):
    model = BillItem
    extra = 0
    fields = ['description', 'amount', 'quantity', 'position']


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    """Admin interface for Bills."""

    list_display = ['title', 'group', 'total_amount', 'currency', 'status', 'created_by', 'created_at']
    list_filter = ['status', 'currency', 'created_at']
    search_fields = ['title', 'description', 'group__name', 'created_by__email', 'payee_address']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BillItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('group', 'created_by')
