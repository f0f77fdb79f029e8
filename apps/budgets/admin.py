# ==========================================
# apps/budgets/admin.py
# ==========================================

from django.contrib import admin
from apps.budgets.models import BudgetCategory


@admin.register(BudgetCategory)
class BudgetCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'group', 'monthly_limit', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['group', 'name']
