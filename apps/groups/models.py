# ==========================================
# apps/groups/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


def default_voting_threshold():
    return settings.DEFAULT_VOTING_THRESHOLD


class GroupRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    MEMBER = 'MEMBER', 'Member'
    VIEWER = 'VIEWER', 'Viewer'


class Group(models.Model):
    """Household or team that shares bills."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    voting_threshold = models.PositiveSmallIntegerField(
        default=default_voting_threshold,
        validators=[MinValueValidator(1), MaxValueValidator(100)],
        help_text='Percentage of FOR votes (among votes cast) needed to approve a bill.'
    )
    smart_account_address = models.CharField(max_length=42, unique=True, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='groups_is_acti_3c1f0e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def active_memberships(self):
        return self.memberships.filter(is_active=True)

    def get_user_role(self, user):
        try:
            return self.active_memberships().get(user=user).role
        except GroupMembership.DoesNotExist:
            return None


class GroupMembership(models.Model):
    """User membership in a group with role. Removal is soft (is_active)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=10, choices=GroupRole.choices, default=GroupRole.MEMBER)
    is_active = models.BooleanField(default=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_memberships'
        unique_together = [['group', 'user']]
        indexes = [
            models.Index(fields=['group', 'role'], name='group_membe_group_i_5d2a1b_idx'),
            models.Index(fields=['user', 'is_active'], name='group_membe_user_id_8e4c7a_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.group.name} ({self.role})"
