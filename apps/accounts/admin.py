from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils import timezone

from .models import User


class LockedFilter(admin.SimpleListFilter):
    title = 'login lock'
    parameter_name = 'locked'

    def lookups(self, request, model_admin):
        return [('yes', 'Locked'), ('no', 'Not locked')]

    def queryset(self, request, queryset):
        now = timezone.now()
        if self.value() == 'yes':
            return queryset.filter(locked_until__gt=now)
        if self.value() == 'no':
            return queryset.exclude(locked_until__gt=now)
        return queryset


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'username', 'display_name', 'is_active', 'failed_login_attempts', 'locked_until', 'last_login']
    list_filter = ['is_active', 'is_staff', LockedFilter]
    search_fields = ['email', 'username', 'display_name']
    ordering = ['-created_at']

    fieldsets = (
        (None, {'fields': ('email', 'username', 'display_name', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Login lockout', {'fields': ('failed_login_attempts', 'locked_until')}),
        ('Activity', {'fields': ('created_at', 'last_login'), 'classes': ('collapse',)}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'display_name', 'password1', 'password2'),
        }),
    )
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']
    actions = ['unlock_users']

    @admin.action(description='Clear login lockout')
    def unlock_users(self, request, queryset):
        count = queryset.update(failed_login_attempts=0, locked_until=None)
        self.message_user(request, f'Unlocked {count} user(s).')
