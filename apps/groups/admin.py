# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    """Inline admin for group memberships."""
    model = GroupMembership
    extra = 0
    fields = ['user', 'role', 'is_active', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = [
        'name',
        'member_count',
        'voting_threshold',
        'is_active',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'description', 'smart_account_address']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [GroupMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'is_active')
        }),
        ('Voting & Payments', {
            'fields': ('voting_threshold', 'smart_account_address')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        """Show number of active members."""
        return obj.active_memberships().count()
    member_count.short_description = 'Members'


@admin.register(GroupMembership)
class GroupMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Group Memberships."""

    list_display = ['user', 'group', 'role', 'is_active', 'joined_at']
    list_filter = ['role', 'is_active', 'joined_at']
    search_fields = ['user__email', 'group__name']
    readonly_fields = ['joined_at']
    date_hierarchy = 'joined_at'
    ordering = ['-joined_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')
